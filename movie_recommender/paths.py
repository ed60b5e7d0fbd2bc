from __future__ import annotations

from pathlib import Path


def get_repo_root() -> Path:
    """Return repo root by searching upwards for `config.yaml` or `.git`."""
    start = Path.cwd().resolve()
    if start.is_file():
        start = start.parent

    for candidate in (start, *start.parents):
        if (candidate / "config.yaml").is_file() or (candidate / ".git").exists():
            return candidate

    # Fallback: search upwards from this file (useful if called from elsewhere).
    start = Path(__file__).resolve().parent
    for candidate in (start, *start.parents):
        if (candidate / "config.yaml").is_file() or (candidate / ".git").exists():
            return candidate

    raise FileNotFoundError("Could not locate repo root (expected `config.yaml` or `.git`).")


def resolve_path(base: Path, path: Path | str) -> Path:
    """Resolve `path` against `base` unless it is already absolute."""
    p = Path(path)
    if p.is_absolute():
        return p
    return (base / p).resolve()
