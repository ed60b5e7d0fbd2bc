"""Dense user x movie rating matrix with NaN marking unrated cells."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from ..errors import LoadFailure, MovieNotFound, UserNotFound


@dataclass(frozen=True)
class RatingMatrix:
    """Read-only rating table.

    Every user has a cell for every movie in `movie_order`; unrated cells hold NaN,
    so an unrated movie can never be confused with a numeric rating.
    """

    user_order: tuple[str, ...]
    user_to_row: dict[str, int]
    movie_order: tuple[str, ...]
    movie_to_col: dict[str, int]
    values: np.ndarray

    @classmethod
    def from_rows(
        cls,
        movie_order: Sequence[str],
        rows: Mapping[str, Sequence[Optional[float]]],
    ) -> "RatingMatrix":
        """Build from `user -> ratings` where each ratings row is positional in `movie_order`.

        `None` (or NaN) entries mean "unrated".
        """
        order = tuple(movie_order)
        if len(set(order)) != len(order):
            raise LoadFailure("Ratings header contains duplicate movie names")

        users = tuple(rows.keys())
        values = np.full((len(users), len(order)), np.nan, dtype=np.float64)
        for i, user in enumerate(users):
            row = rows[user]
            if len(row) != len(order):
                raise LoadFailure(f"User {user!r} has {len(row)} ratings, expected {len(order)}")
            for j, rating in enumerate(row):
                if rating is None or (isinstance(rating, float) and math.isnan(rating)):
                    continue
                value = float(rating)
                if math.isinf(value):
                    raise LoadFailure(f"User {user!r} has a non-finite rating for {order[j]!r}")
                values[i, j] = value

        values.flags.writeable = False
        return cls(
            user_order=users,
            user_to_row={u: i for i, u in enumerate(users)},
            movie_order=order,
            movie_to_col={m: j for j, m in enumerate(order)},
            values=values,
        )

    @property
    def n_users(self) -> int:
        return len(self.user_order)

    @property
    def n_rated(self) -> int:
        return int((~np.isnan(self.values)).sum())

    def has_user(self, user: str) -> bool:
        return user in self.user_to_row

    def row(self, user: str) -> np.ndarray:
        """Ratings of `user` in movie order, NaN where unrated."""
        if user not in self.user_to_row:
            raise UserNotFound(user)
        return self.values[self.user_to_row[user]]

    def rated_mask(self, user: str) -> np.ndarray:
        return ~np.isnan(self.row(user))

    def rating(self, user: str, movie: str) -> float | None:
        row = self.row(user)
        if movie not in self.movie_to_col:
            raise MovieNotFound(movie)
        value = row[self.movie_to_col[movie]]
        return None if np.isnan(value) else float(value)

    def ratings_of(self, user: str) -> dict[str, float | None]:
        """Ratings of `user` as an ordered `movie -> rating | None` mapping."""
        row = self.row(user)
        return {m: (None if np.isnan(v) else float(v)) for m, v in zip(self.movie_order, row.tolist())}

    def rated_movies(self, user: str) -> list[str]:
        mask = self.rated_mask(user)
        return [m for m, rated in zip(self.movie_order, mask.tolist()) if rated]

    def unrated_movies(self, user: str) -> list[str]:
        mask = self.rated_mask(user)
        return [m for m, rated in zip(self.movie_order, mask.tolist()) if not rated]

    def to_frame(self) -> pd.DataFrame:
        """Ratings as a users x movies DataFrame (NaN where unrated)."""
        return pd.DataFrame(
            self.values,
            index=pd.Index(self.user_order, name="user"),
            columns=list(self.movie_order),
        )
