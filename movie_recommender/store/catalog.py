"""Movie catalog: attribute vectors indexed by the authoritative movie order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np
import pandas as pd

from ..errors import InvalidAttributeDimension, LoadFailure, MovieNotFound


@dataclass(frozen=True)
class MovieCatalog:
    """Read-only view of per-movie attribute vectors.

    Rows of `attributes` follow `movie_order`, which comes from the ratings header,
    not from the order of the attribute file.
    """

    movie_order: tuple[str, ...]
    movie_to_row: dict[str, int]
    attributes: np.ndarray

    @classmethod
    def from_vectors(
        cls,
        vectors: Mapping[str, Sequence[float]],
        movie_order: Sequence[str] | None = None,
    ) -> "MovieCatalog":
        """Build a catalog from `name -> vector`, laid out in `movie_order`.

        `movie_order` defaults to the mapping's own order. Its key set must match
        the mapping's exactly.
        """
        order = tuple(movie_order) if movie_order is not None else tuple(vectors.keys())

        if len(set(order)) != len(order):
            dupes = sorted({m for m in order if order.count(m) > 1})
            raise LoadFailure(f"Movie order contains duplicate names: {dupes}")

        missing = [m for m in order if m not in vectors]
        extra = sorted(set(vectors) - set(order))
        if missing:
            raise LoadFailure(f"Movies without attribute vectors: {missing}")
        if extra:
            raise LoadFailure(f"Attribute vectors for movies absent from the ratings header: {extra}")

        if not order:
            return cls(movie_order=(), movie_to_row={}, attributes=_freeze(np.zeros((0, 0))))

        n_attributes = len(vectors[order[0]])
        for name in order:
            if len(vectors[name]) != n_attributes:
                raise InvalidAttributeDimension(
                    f"Movie {name!r} has {len(vectors[name])} attributes, expected {n_attributes}"
                )

        attributes = np.asarray([list(vectors[name]) for name in order], dtype=np.float64)
        if not np.isfinite(attributes).all():
            bad = [name for name, row in zip(order, attributes) if not np.isfinite(row).all()]
            raise LoadFailure(f"Non-finite attribute values for movies: {bad}")
        movie_to_row = {name: i for i, name in enumerate(order)}
        return cls(movie_order=order, movie_to_row=movie_to_row, attributes=_freeze(attributes))

    @property
    def n_movies(self) -> int:
        return len(self.movie_order)

    @property
    def n_attributes(self) -> int:
        return int(self.attributes.shape[1]) if self.attributes.ndim == 2 else 0

    def __len__(self) -> int:
        return self.n_movies

    def __contains__(self, movie: object) -> bool:
        return movie in self.movie_to_row

    def has_movie(self, movie: str) -> bool:
        return movie in self.movie_to_row

    def row_of(self, movie: str) -> int:
        if movie not in self.movie_to_row:
            raise MovieNotFound(movie)
        return self.movie_to_row[movie]

    def vector(self, movie: str) -> np.ndarray:
        """Return the attribute vector for `movie` (read-only view)."""
        return self.attributes[self.row_of(movie)]

    def to_frame(self) -> pd.DataFrame:
        """Attributes as a DataFrame indexed by movie name, in movie order."""
        columns = [f"attr_{i}" for i in range(self.n_attributes)]
        return pd.DataFrame(self.attributes, index=pd.Index(self.movie_order, name="movie"), columns=columns)


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr
