from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import movie_recommender` works without an editable install.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from movie_recommender.store.catalog import MovieCatalog  # noqa: E402
from movie_recommender.store.ratings import RatingMatrix  # noqa: E402


ABC_VECTORS = {"A": [1.0, 0.0], "B": [0.0, 1.0], "C": [1.0, 1.0]}


@pytest.fixture()
def abc_catalog() -> MovieCatalog:
    return MovieCatalog.from_vectors(ABC_VECTORS, movie_order=["A", "B", "C"])


@pytest.fixture()
def abc_ratings() -> RatingMatrix:
    return RatingMatrix.from_rows(
        ["A", "B", "C"],
        {
            "u1": [5.0, None, None],
            "u2": [4.0, 2.0, None],
            "full": [1.0, 2.0, 3.0],
            "empty": [None, None, None],
        },
    )


@pytest.fixture()
def data_files(tmp_path: Path) -> tuple[Path, Path]:
    """Write a small attributes/ratings pair and return their paths."""
    attributes = tmp_path / "movies_features.txt"
    attributes.write_text(
        "\n".join(
            [
                "Titanic 7 2 9 1",
                "Twilight 3 1 8 2",
                "Grease 5 3 7 2",
                "Batman 2 9 3 8",
                "Inception 6 8 2 9",
                "Avatar 8 7 4 6",
            ]
        )
        + "\n"
    )
    ratings = tmp_path / "ranks_matrix.txt"
    ratings.write_text(
        "\n".join(
            [
                "Titanic Twilight Grease Batman Inception Avatar",
                "Sofia 5 4 NA 1 NA 2",
                "Yosef NA 2 4 5 4 NA",
                "Shira 3 NA NA 4 5 NA",
                "Lior 4.5 NA 3 NA 2 1",
                "Critic 3 3 3 3 3 3",
            ]
        )
        + "\n"
    )
    return attributes, ratings


@pytest.fixture()
def config_file(tmp_path: Path, data_files: tuple[Path, Path]) -> Path:
    attributes, ratings = data_files
    path = tmp_path / "config.yaml"
    path.write_text(
        "data:\n"
        f"  attributes_path: {attributes.name}\n"
        f"  ratings_path: {ratings.name}\n"
        "recommender:\n"
        "  default_k: 2\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    return path
