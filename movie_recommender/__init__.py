"""Movie recommendations from per-movie attribute vectors and a user rating matrix.

Two strategies are provided:
- content-based: rank unrated movies by cosine similarity to a user's preference vector
- item-based collaborative filtering: predict a rating from the k most similar rated movies
"""
from __future__ import annotations

from .engine import MovieRecommender
from .errors import (
    InvalidAttributeDimension,
    LoadFailure,
    MovieNotFound,
    NoCandidateMovies,
    RecommenderError,
    UndefinedPrediction,
    UndefinedSimilarity,
    UserNotFound,
)

__all__ = [
    "InvalidAttributeDimension",
    "LoadFailure",
    "MovieNotFound",
    "MovieRecommender",
    "NoCandidateMovies",
    "RecommenderError",
    "UndefinedPrediction",
    "UndefinedSimilarity",
    "UserNotFound",
]
