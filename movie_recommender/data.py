from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import InvalidAttributeDimension, LoadFailure
from .store.catalog import MovieCatalog
from .store.ratings import RatingMatrix


logger = logging.getLogger(__name__)

MISSING_MARKER = "NA"


@dataclass(frozen=True)
class LoadedTables:
    catalog: MovieCatalog
    ratings: RatingMatrix


def _read_lines(path: Path) -> List[str]:
    path = Path(path)
    try:
        text = path.read_text()
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Unable to open file %s", path)
        raise LoadFailure(f"Unable to open file {path}") from exc
    return text.splitlines()


def _parse_float(token: str, *, where: str) -> float:
    try:
        value = float(token)
    except ValueError as exc:
        raise LoadFailure(f"{where}: not a number: {token!r}") from exc
    if not math.isfinite(value):
        raise LoadFailure(f"{where}: not a finite number: {token!r}")
    return value


def load_movie_attributes(path: Path) -> Dict[str, List[float]]:
    """Parse the attribute file: one `name v1 v2 ...` line per movie.

    The attribute count is fixed by the first movie line; any later line with a
    different count raises `InvalidAttributeDimension`.
    """
    vectors: Dict[str, List[float]] = {}
    n_attributes: Optional[int] = None

    for lineno, line in enumerate(_read_lines(path), start=1):
        tokens = line.split()
        if not tokens:
            continue
        name, raw_values = tokens[0], tokens[1:]
        where = f"{path}:{lineno}"
        if name in vectors:
            raise LoadFailure(f"{where}: duplicate movie {name!r}")

        values = [_parse_float(tok, where=where) for tok in raw_values]
        if n_attributes is None:
            if not values:
                raise InvalidAttributeDimension(f"{where}: movie {name!r} has no attributes")
            n_attributes = len(values)
        elif len(values) != n_attributes:
            raise InvalidAttributeDimension(
                f"{where}: movie {name!r} has {len(values)} attributes, expected {n_attributes}"
            )
        vectors[name] = values

    return vectors


def load_user_ratings(
    path: Path,
    *,
    missing_marker: str = MISSING_MARKER,
) -> Tuple[List[str], Dict[str, List[Optional[float]]]]:
    """Parse the ratings file into (movie_order, user -> positional ratings).

    The header line lists movie names and is the authoritative movie order. Each
    row is `user r1 ... rN`; `missing_marker` becomes `None`. A literal rating of
    0 is rejected since the source format reserves it for "unrated".
    """
    lines = [(i, ln) for i, ln in enumerate(_read_lines(path), start=1) if ln.strip()]
    if not lines:
        raise LoadFailure(f"{path}: ratings file is empty (expected a header line)")

    _, header = lines[0]
    movie_order = header.split()

    rows: Dict[str, List[Optional[float]]] = {}
    for lineno, line in lines[1:]:
        tokens = line.split()
        user, raw = tokens[0], tokens[1:]
        where = f"{path}:{lineno}"
        if user in rows:
            raise LoadFailure(f"{where}: duplicate user {user!r}")
        if len(raw) != len(movie_order):
            raise LoadFailure(f"{where}: user {user!r} has {len(raw)} ratings, expected {len(movie_order)}")

        ratings: List[Optional[float]] = []
        for tok in raw:
            if tok == missing_marker:
                ratings.append(None)
                continue
            value = _parse_float(tok, where=where)
            if value == 0.0:
                raise LoadFailure(f"{where}: rating 0 is reserved for unrated movies (use {missing_marker!r})")
            ratings.append(value)
        rows[user] = ratings

    return movie_order, rows


def validate_tables(catalog: MovieCatalog, ratings: RatingMatrix) -> None:
    """Check the cross-table invariants both recommenders rely on."""
    if catalog.movie_order != ratings.movie_order:
        raise LoadFailure("Catalog and rating matrix disagree on the movie order")
    if catalog.n_movies and catalog.attributes.shape != (catalog.n_movies, catalog.n_attributes):
        raise InvalidAttributeDimension("Catalog attribute matrix is not rectangular")


def load_data(
    attributes_path: Path,
    ratings_path: Path,
    *,
    missing_marker: str = MISSING_MARKER,
) -> LoadedTables:
    """Load both sources and build the catalog and rating matrix.

    Both files are read before anything is built, so a `LoadFailure` leaves no
    partially populated tables behind.
    """
    vectors = load_movie_attributes(attributes_path)
    movie_order, rows = load_user_ratings(ratings_path, missing_marker=missing_marker)

    catalog = MovieCatalog.from_vectors(vectors, movie_order=movie_order)
    ratings = RatingMatrix.from_rows(movie_order, rows)
    validate_tables(catalog, ratings)

    logger.info(
        "Loaded data: movies=%d attributes=%d users=%d rated_cells=%d",
        catalog.n_movies,
        catalog.n_attributes,
        ratings.n_users,
        ratings.n_rated,
    )
    return LoadedTables(catalog=catalog, ratings=ratings)

