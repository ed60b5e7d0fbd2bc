"""Shared result type and ordering for ranked recommendations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class ScoredMovie:
    movie: str
    score: float


def rank_descending(scored: Iterable[ScoredMovie], top_n: int | None = None) -> List[ScoredMovie]:
    """Sort by score, best first.

    The sort is stable, so movies with equal scores keep their input (movie) order
    and the first one encountered wins.
    """
    ranked = sorted(scored, key=lambda s: -s.score)
    if top_n is not None:
        ranked = ranked[: max(0, int(top_n))]
    return ranked
