from __future__ import annotations

import math

import numpy as np
import pytest

from movie_recommender.errors import MovieNotFound, NoCandidateMovies, UndefinedPrediction, UserNotFound
from movie_recommender.item_cf.recommender import ItemCFRecommender, weighted_average
from movie_recommender.item_cf.topk import Neighbor, top_k_similar


def test_predict_rating_weighted_average(abc_catalog, abc_ratings) -> None:
    rec = ItemCFRecommender(abc_catalog, abc_ratings)
    # both neighbors have similarity 1/sqrt(2): (4 + 2) / 2
    assert rec.predict_rating("C", "u2", 2) == pytest.approx(3.0)


def test_k_larger_than_rated_uses_all_available(abc_catalog, abc_ratings) -> None:
    rec = ItemCFRecommender(abc_catalog, abc_ratings)
    assert rec.predict_rating("C", "u2", 10) == rec.predict_rating("C", "u2", 2)


def test_boundary_tie_keeps_first_movie(abc_catalog, abc_ratings) -> None:
    rec = ItemCFRecommender(abc_catalog, abc_ratings)
    # A and B are equally similar to C; with k=1 the earlier movie (A, rated 4) stays
    assert rec.predict_rating("C", "u2", 1) == pytest.approx(4.0)
    assert [n.movie for n in rec.neighbors("C", "u2", 1)] == ["A"]


def test_zero_similarity_sum_is_undefined(abc_catalog, abc_ratings) -> None:
    rec = ItemCFRecommender(abc_catalog, abc_ratings)
    # u1 only rated A, which is orthogonal to B
    with pytest.raises(UndefinedPrediction):
        rec.predict_rating("B", "u1", 3)


def test_no_rated_movies_is_undefined(abc_catalog, abc_ratings) -> None:
    rec = ItemCFRecommender(abc_catalog, abc_ratings)
    with pytest.raises(UndefinedPrediction):
        rec.predict_rating("A", "empty", 3)
    with pytest.raises(UndefinedPrediction):
        rec.recommend("empty", 3)


def test_unknown_user_and_movie(abc_catalog, abc_ratings) -> None:
    rec = ItemCFRecommender(abc_catalog, abc_ratings)
    with pytest.raises(UserNotFound):
        rec.predict_rating("A", "nonexistent", 3)
    with pytest.raises(MovieNotFound):
        rec.predict_rating("nonexistent-movie", "u2", 3)
    with pytest.raises(UserNotFound):
        rec.recommend("nonexistent", 3)


def test_invalid_k(abc_catalog, abc_ratings) -> None:
    with pytest.raises(ValueError):
        ItemCFRecommender(abc_catalog, abc_ratings).predict_rating("C", "u2", 0)


def test_recommend_skips_undefined_predictions(abc_catalog, abc_ratings) -> None:
    rec = ItemCFRecommender(abc_catalog, abc_ratings)
    # B cannot be predicted for u1, C can (from A)
    ranked = rec.rank("u1", 2)
    assert [s.movie for s in ranked] == ["C"]
    assert ranked[0].score == pytest.approx(5.0)
    assert rec.recommend("u1", 2) == "C"


def test_fully_rated_user_has_no_candidates(abc_catalog, abc_ratings) -> None:
    with pytest.raises(NoCandidateMovies):
        ItemCFRecommender(abc_catalog, abc_ratings).recommend("full", 2)


def test_top_k_similar_keeps_most_similar_best_first() -> None:
    target = np.array([1.0, 0.0])
    candidates = [
        ("far", np.array([0.0, 1.0]), 1.0),
        ("near", np.array([1.0, 0.1]), 5.0),
        ("mid", np.array([1.0, 1.0]), 3.0),
        ("zero", np.array([0.0, 0.0]), 2.0),
    ]
    out = top_k_similar(target, candidates, 2)
    assert [n.movie for n in out] == ["near", "mid"]
    assert out[1].similarity == pytest.approx(1 / math.sqrt(2))


def test_top_k_similar_rejects_non_positive_k() -> None:
    with pytest.raises(ValueError):
        top_k_similar(np.array([1.0]), [], 0)


def test_weighted_average_errors() -> None:
    with pytest.raises(UndefinedPrediction):
        weighted_average([])
    with pytest.raises(UndefinedPrediction):
        weighted_average([Neighbor("a", 0.5, 4.0), Neighbor("b", -0.5, 2.0)])
