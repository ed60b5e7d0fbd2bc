from __future__ import annotations

import logging

import numpy as np

from ..errors import NoCandidateMovies, UndefinedPrediction, UndefinedSimilarity, UserNotFound
from ..ranking import ScoredMovie, rank_descending
from ..similarity import cosine_similarity, is_zero_vector
from ..store.catalog import MovieCatalog
from ..store.ratings import RatingMatrix
from .preference import build_preference_vector, center_ratings


logger = logging.getLogger(__name__)


class ContentRecommender:
    """Ranks a user's unrated movies by cosine similarity to their preference vector."""

    def __init__(self, catalog: MovieCatalog, ratings: RatingMatrix) -> None:
        self.catalog = catalog
        self.ratings = ratings

    def preference_vector(self, user: str) -> np.ndarray:
        if not self.ratings.has_user(user):
            raise UserNotFound(user)
        centered = center_ratings(self.ratings.row(user))
        return build_preference_vector(centered, self.catalog.attributes)

    def rank(self, user: str) -> list[ScoredMovie]:
        """Score every unrated movie, best first; ties keep movie order."""
        pref = self.preference_vector(user)
        rated = self.ratings.rated_mask(user)
        if rated.all():
            return []
        if is_zero_vector(pref):
            # e.g. a single rating, or every rating equal to the mean
            raise UndefinedPrediction(
                f"Preference vector of user {user!r} is zero; no content signal to rank by"
            )

        scored: list[ScoredMovie] = []
        for j, movie in enumerate(self.catalog.movie_order):
            if rated[j]:
                continue
            try:
                score = cosine_similarity(pref, self.catalog.attributes[j])
            except UndefinedSimilarity:
                logger.debug("Skipping %r for user %r: zero attribute vector", movie, user)
                continue
            scored.append(ScoredMovie(movie=movie, score=score))

        return rank_descending(scored)

    def recommend(self, user: str) -> str:
        ranked = self.rank(user)
        if not ranked:
            raise NoCandidateMovies(f"No unrated movie to recommend to user {user!r}")
        return ranked[0].movie
