"""Vector primitives shared by both recommenders."""

from __future__ import annotations

import numpy as np

from .errors import UndefinedSimilarity


def _as_vector(a: np.ndarray) -> np.ndarray:
    return np.asarray(a, dtype=np.float64).reshape(-1)


def dot(a: np.ndarray, b: np.ndarray) -> float:
    a = _as_vector(a)
    b = _as_vector(b)
    if a.shape != b.shape:
        raise ValueError(f"Vector length mismatch: {a.shape[0]} != {b.shape[0]}")
    return float(np.dot(a, b))


def norm(a: np.ndarray) -> float:
    return float(np.sqrt(dot(a, a)))


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity between two 1-D vectors.

    Raises `UndefinedSimilarity` if either vector has zero norm instead of returning NaN.
    """
    denom = norm(a) * norm(b)
    if denom == 0.0:
        raise UndefinedSimilarity("Cosine similarity is undefined for a zero vector")
    return dot(a, b) / denom


def is_zero_vector(a: np.ndarray) -> bool:
    return not np.any(_as_vector(a))
