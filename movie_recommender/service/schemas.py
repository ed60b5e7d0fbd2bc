"""Pydantic schemas for the recommendation API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ContentRecommendRequest(BaseModel):
    """Request for a content-based recommendation."""

    user: str = Field(..., min_length=1, description="User name from the ratings file")
    top_n: int = Field(1, ge=1, le=100, description="Number of ranked movies to return")


class PredictRequest(BaseModel):
    """Request for an item-CF rating prediction."""

    movie: str = Field(..., min_length=1, description="Movie name from the catalog")
    user: str = Field(..., min_length=1, description="User name from the ratings file")
    k: Optional[int] = Field(None, ge=1, description="Number of similar rated movies; server default if omitted")


class CFRecommendRequest(BaseModel):
    """Request for an item-CF recommendation."""

    user: str = Field(..., min_length=1, description="User name from the ratings file")
    k: Optional[int] = Field(None, ge=1, description="Number of similar rated movies; server default if omitted")
    top_n: int = Field(1, ge=1, le=100, description="Number of ranked movies to return")


class ScoredMovieItem(BaseModel):
    movie: str
    score: float


class RecommendResponse(BaseModel):
    user: str
    method: str
    k: Optional[int] = None
    recommended: str
    results: list[ScoredMovieItem]


class PredictResponse(BaseModel):
    movie: str
    user: str
    k: int
    predicted_rating: float


class HealthResponse(BaseModel):
    status: str
    movies: int
    users: int
    attributes: int
