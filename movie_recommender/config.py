"""YAML-backed runtime configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .data import MISSING_MARKER
from .paths import get_repo_root, resolve_path


DEFAULT_ATTRIBUTES_PATH = "data/raw/movies_features.txt"
DEFAULT_RATINGS_PATH = "data/raw/ranks_matrix.txt"


@dataclass(frozen=True)
class RecommenderConfig:
    attributes_path: Path
    ratings_path: Path
    default_k: int = 2
    log_level: str = "INFO"
    missing_marker: str = MISSING_MARKER

    @classmethod
    def from_mapping(cls, raw: dict[str, Any], *, base_dir: Path) -> "RecommenderConfig":
        data_cfg = raw.get("data", {}) if isinstance(raw.get("data"), dict) else {}
        rec_cfg = raw.get("recommender", {}) if isinstance(raw.get("recommender"), dict) else {}
        log_cfg = raw.get("logging", {}) if isinstance(raw.get("logging"), dict) else {}

        default_k = int(rec_cfg.get("default_k", 2))
        if default_k < 1:
            raise ValueError(f"recommender.default_k must be >= 1, got {default_k}")

        return cls(
            attributes_path=resolve_path(base_dir, str(data_cfg.get("attributes_path", DEFAULT_ATTRIBUTES_PATH))),
            ratings_path=resolve_path(base_dir, str(data_cfg.get("ratings_path", DEFAULT_RATINGS_PATH))),
            default_k=default_k,
            log_level=str(log_cfg.get("level", "INFO")).upper(),
            missing_marker=str(data_cfg.get("missing_marker", MISSING_MARKER)),
        )

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> "RecommenderConfig":
        """Load `config.yaml`; relative data paths resolve against the repo root."""
        if path is None:
            repo_root = get_repo_root()
            path = repo_root / "config.yaml"
        else:
            path = Path(path).resolve()
            repo_root = path.parent

        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
        obj = yaml.safe_load(path.read_text())
        if obj is None:
            obj = {}
        if not isinstance(obj, dict):
            raise ValueError(f"Expected YAML mapping at {path}, got {type(obj)}")
        return cls.from_mapping(obj, base_dir=repo_root)
