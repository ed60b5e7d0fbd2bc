"""Facade over both recommenders, built once from the two input files."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import RecommenderConfig
from .content.recommender import ContentRecommender
from .data import MISSING_MARKER, load_data, validate_tables
from .item_cf.recommender import ItemCFRecommender
from .ranking import ScoredMovie, rank_descending
from .store.catalog import MovieCatalog
from .store.ratings import RatingMatrix


logger = logging.getLogger(__name__)


class MovieRecommender:
    """Read-only query surface over a loaded catalog and rating matrix.

    Construct it once (load is the only step that touches the filesystem); all
    query methods are pure reads and may be shared across threads.
    """

    def __init__(self, catalog: MovieCatalog, ratings: RatingMatrix) -> None:
        validate_tables(catalog, ratings)
        self.catalog = catalog
        self.ratings = ratings
        self._content = ContentRecommender(catalog, ratings)
        self._item_cf = ItemCFRecommender(catalog, ratings)

    @classmethod
    def from_files(
        cls,
        attributes_path: Path,
        ratings_path: Path,
        *,
        missing_marker: str = MISSING_MARKER,
    ) -> "MovieRecommender":
        tables = load_data(Path(attributes_path), Path(ratings_path), missing_marker=missing_marker)
        return cls(tables.catalog, tables.ratings)

    @classmethod
    def from_config(cls, config: RecommenderConfig) -> "MovieRecommender":
        logger.info("Loading attributes=%s ratings=%s", config.attributes_path, config.ratings_path)
        return cls.from_files(
            config.attributes_path,
            config.ratings_path,
            missing_marker=config.missing_marker,
        )

    def has_user(self, user: str) -> bool:
        return self.ratings.has_user(user)

    def has_movie(self, movie: str) -> bool:
        return self.catalog.has_movie(movie)

    def recommend_by_content(self, user: str) -> str:
        return self._content.recommend(user)

    def rank_by_content(self, user: str, *, top_n: int | None = None) -> list[ScoredMovie]:
        return rank_descending(self._content.rank(user), top_n)

    def predict_rating(self, movie: str, user: str, k: int) -> float:
        return self._item_cf.predict_rating(movie, user, k)

    def recommend_by_cf(self, user: str, k: int) -> str:
        return self._item_cf.recommend(user, k)

    def rank_by_cf(self, user: str, k: int, *, top_n: int | None = None) -> list[ScoredMovie]:
        return rank_descending(self._item_cf.rank(user, k), top_n)
