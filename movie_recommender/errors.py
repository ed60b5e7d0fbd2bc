"""Exception hierarchy for the recommender engine."""

from __future__ import annotations


class RecommenderError(Exception):
    """Base class for every error raised by the engine."""


class UserNotFound(RecommenderError, KeyError):
    def __init__(self, user: str) -> None:
        super().__init__(f"Unknown user: {user!r}")
        self.user = user

    def __str__(self) -> str:
        return str(self.args[0])


class MovieNotFound(RecommenderError, KeyError):
    def __init__(self, movie: str) -> None:
        super().__init__(f"Unknown movie: {movie!r}")
        self.movie = movie

    def __str__(self) -> str:
        return str(self.args[0])


class UndefinedPrediction(RecommenderError, ValueError):
    """A score has no similarity signal behind it (zero denominator or zero vector)."""


class UndefinedSimilarity(UndefinedPrediction):
    """Cosine similarity requested for a zero-norm vector."""


class NoCandidateMovies(RecommenderError, LookupError):
    """The user has already rated every movie, so there is nothing to recommend."""


class LoadFailure(RecommenderError):
    """An ingestion source could not be read or is malformed."""


class InvalidAttributeDimension(LoadFailure, ValueError):
    """A movie's attribute vector length differs from the established dimension."""
