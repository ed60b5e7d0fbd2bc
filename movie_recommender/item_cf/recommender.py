from __future__ import annotations

import logging
import math

import numpy as np

from ..errors import MovieNotFound, NoCandidateMovies, UndefinedPrediction, UserNotFound
from ..ranking import ScoredMovie, rank_descending
from ..similarity import is_zero_vector
from ..store.catalog import MovieCatalog
from ..store.ratings import RatingMatrix
from .topk import Neighbor, top_k_similar


logger = logging.getLogger(__name__)

_ZERO_WEIGHT_TOL = 1e-12


def weighted_average(neighbors: list[Neighbor]) -> float:
    """Similarity-weighted mean of neighbor ratings."""
    if not neighbors:
        raise UndefinedPrediction("No rated neighbors to predict from")
    num = sum(n.similarity * n.rating for n in neighbors)
    den = sum(n.similarity for n in neighbors)
    if math.isclose(den, 0.0, abs_tol=_ZERO_WEIGHT_TOL):
        raise UndefinedPrediction("Neighbor similarities sum to zero")
    return num / den


class ItemCFRecommender:
    """Item-based collaborative filtering with attribute-space cosine similarity."""

    def __init__(self, catalog: MovieCatalog, ratings: RatingMatrix) -> None:
        self.catalog = catalog
        self.ratings = ratings

    def _require_user(self, user: str) -> np.ndarray:
        if not self.ratings.has_user(user):
            raise UserNotFound(user)
        return self.ratings.row(user)

    def neighbors(self, movie: str, user: str, k: int) -> list[Neighbor]:
        """The user's `k` rated movies most similar to `movie`, best first."""
        row = self._require_user(user)
        if not self.catalog.has_movie(movie):
            raise MovieNotFound(movie)

        target = self.catalog.vector(movie)
        if is_zero_vector(target):
            raise UndefinedPrediction(f"Movie {movie!r} has a zero attribute vector")

        candidates = (
            (name, self.catalog.attributes[j], row[j])
            for j, name in enumerate(self.catalog.movie_order)
            if not np.isnan(row[j])
        )
        return top_k_similar(target, candidates, k)

    def predict_rating(self, movie: str, user: str, k: int) -> float:
        """Predict `user`'s rating of `movie` from their `k` most similar rated movies.

        If the user rated fewer than `k` movies, all of them are used.
        """
        neighbors = self.neighbors(movie, user, k)
        try:
            return weighted_average(neighbors)
        except UndefinedPrediction as exc:
            raise UndefinedPrediction(f"Cannot predict {movie!r} for user {user!r}: {exc}") from exc

    def rank(self, user: str, k: int) -> list[ScoredMovie]:
        """Predicted ratings for every unrated movie, best first; ties keep movie order."""
        row = self._require_user(user)
        scored: list[ScoredMovie] = []
        for j, movie in enumerate(self.catalog.movie_order):
            if not np.isnan(row[j]):
                continue
            try:
                score = self.predict_rating(movie, user, k)
            except UndefinedPrediction as exc:
                logger.debug("Skipping %r: %s", movie, exc)
                continue
            scored.append(ScoredMovie(movie=movie, score=score))
        return rank_descending(scored)

    def recommend(self, user: str, k: int) -> str:
        row = self._require_user(user)
        if not np.isnan(row).any():
            raise NoCandidateMovies(f"User {user!r} has rated every movie")
        ranked = self.rank(user, k)
        if not ranked:
            raise UndefinedPrediction(f"No unrated movie has a defined prediction for user {user!r}")
        return ranked[0].movie
