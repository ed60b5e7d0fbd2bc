from __future__ import annotations

import numpy as np

from ..errors import UndefinedPrediction


_CENTERED_ZERO_TOL = 1e-12


def center_ratings(ratings: np.ndarray) -> np.ndarray:
    """Subtract the user's mean rating from every rated cell.

    `ratings` is one user's row in movie order with NaN for unrated movies. Unrated
    cells come back as 0.0, the same value as a rating that sits exactly on the
    mean; both are left out of the preference vector.
    """
    ratings = np.asarray(ratings, dtype=np.float64)
    rated = ~np.isnan(ratings)
    if not rated.any():
        raise UndefinedPrediction("User has no ratings, mean rating is undefined")

    mean = float(ratings[rated].mean())
    centered = np.zeros_like(ratings)
    centered[rated] = ratings[rated] - mean
    # rounding in the mean leaves ~1e-16 residue when all ratings are equal
    centered[np.isclose(centered, 0.0, atol=_CENTERED_ZERO_TOL)] = 0.0
    return centered


def build_preference_vector(centered: np.ndarray, attributes: np.ndarray) -> np.ndarray:
    """Weighted sum of movie attribute vectors, weights = centered ratings.

    `attributes` is the catalog matrix with rows aligned to `centered`.
    """
    centered = np.asarray(centered, dtype=np.float64)
    attributes = np.asarray(attributes, dtype=np.float64)
    if attributes.shape[0] != centered.shape[0]:
        raise ValueError(
            f"Got {centered.shape[0]} centered ratings for {attributes.shape[0]} attribute rows"
        )

    pref = np.zeros(attributes.shape[1], dtype=np.float64)
    for weight, vec in zip(centered, attributes):
        if weight != 0.0:
            pref += weight * vec
    return pref
