"""FastAPI service entrypoint for the movie recommender."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException

from ..config import RecommenderConfig
from ..engine import MovieRecommender
from ..errors import MovieNotFound, NoCandidateMovies, UndefinedPrediction, UserNotFound
from ..paths import get_repo_root
from ..utils import setup_logging
from .schemas import (
    CFRecommendRequest,
    ContentRecommendRequest,
    HealthResponse,
    PredictRequest,
    PredictResponse,
    RecommendResponse,
)

logger = logging.getLogger(__name__)


def _get_env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or str(raw).strip() == "":
        return default
    p = Path(str(raw))
    return p if p.is_absolute() else (get_repo_root() / p).resolve()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    config_path = _get_env_path("CONFIG_PATH", get_repo_root() / "config.yaml")
    config = RecommenderConfig.from_yaml(config_path)

    # Tables must be fully loaded before the first request is served.
    logger.info("Starting service with config=%s", config_path)
    app.state.config = config
    app.state.recommender = MovieRecommender.from_config(config)
    yield


app = FastAPI(title="Movie Recommender Service", lifespan=lifespan)


def _recommender(app_: FastAPI) -> MovieRecommender:
    rec = getattr(app_.state, "recommender", None)
    if rec is None:
        raise HTTPException(status_code=503, detail="Recommender not initialized")
    return rec


def _default_k(app_: FastAPI, k: int | None) -> int:
    if k is not None:
        return int(k)
    config = getattr(app_.state, "config", None)
    return int(config.default_k) if config is not None else 1


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, (UserNotFound, MovieNotFound)):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, NoCandidateMovies):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, UndefinedPrediction):
        return HTTPException(status_code=422, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


@app.get("/health", response_model=HealthResponse)
def health() -> dict:
    rec = _recommender(app)
    return {
        "status": "ok",
        "movies": rec.catalog.n_movies,
        "users": rec.ratings.n_users,
        "attributes": rec.catalog.n_attributes,
    }


@app.post("/recommend/content", response_model=RecommendResponse)
def recommend_content(req: ContentRecommendRequest) -> dict:
    """Recommend the unrated movie closest to the user's preference vector."""
    rec = _recommender(app)
    try:
        ranked = rec.rank_by_content(req.user, top_n=int(req.top_n))
        if not ranked:
            raise NoCandidateMovies(f"No unrated movie to recommend to user {req.user!r}")
    except (UserNotFound, NoCandidateMovies, UndefinedPrediction) as exc:
        raise _to_http(exc) from exc

    return {
        "user": req.user,
        "method": "content",
        "recommended": ranked[0].movie,
        "results": [r.__dict__ for r in ranked],
    }


@app.post("/predict", response_model=PredictResponse)
def predict(req: PredictRequest) -> dict:
    """Predict a user's rating for a movie from their k most similar rated movies."""
    rec = _recommender(app)
    k = _default_k(app, req.k)
    try:
        score = rec.predict_rating(req.movie, req.user, k)
    except (UserNotFound, MovieNotFound, UndefinedPrediction) as exc:
        raise _to_http(exc) from exc

    return {"movie": req.movie, "user": req.user, "k": k, "predicted_rating": float(score)}


@app.post("/recommend/cf", response_model=RecommendResponse)
def recommend_cf(req: CFRecommendRequest) -> dict:
    """Recommend the unrated movie with the highest item-CF predicted rating."""
    rec = _recommender(app)
    k = _default_k(app, req.k)
    try:
        ranked = rec.rank_by_cf(req.user, k, top_n=int(req.top_n))
        if not ranked:
            # raises NoCandidateMovies or UndefinedPrediction, whichever applies
            rec.recommend_by_cf(req.user, k)
    except (UserNotFound, NoCandidateMovies, UndefinedPrediction) as exc:
        raise _to_http(exc) from exc

    return {
        "user": req.user,
        "method": "item_cf",
        "k": k,
        "recommended": ranked[0].movie,
        "results": [r.__dict__ for r in ranked],
    }
