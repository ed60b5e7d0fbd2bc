from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np

from ..errors import UndefinedSimilarity
from ..similarity import cosine_similarity


@dataclass(frozen=True)
class Neighbor:
    movie: str
    similarity: float
    rating: float


def top_k_similar(
    target: np.ndarray,
    candidates: Iterable[Tuple[str, np.ndarray, float]],
    k: int,
) -> List[Neighbor]:
    """Keep the `k` candidates most similar to `target`, best first.

    `candidates` yields `(movie, attribute_vector, rating)` in movie order. A
    bounded min-heap holds the current top k; a newcomer evicts the minimum only
    when strictly more similar. Among equal similarities the later movie is
    evicted first, so earlier movies win ties. Candidates with a zero attribute
    vector are skipped.
    """
    if int(k) < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    k = int(k)

    # (similarity, -position) orders equal similarities so the latest is the heap minimum
    heap: list[tuple[float, int, Neighbor]] = []
    for pos, (movie, vector, rating) in enumerate(candidates):
        try:
            sim = cosine_similarity(vector, target)
        except UndefinedSimilarity:
            continue
        entry = (sim, -pos, Neighbor(movie=movie, similarity=sim, rating=float(rating)))
        if len(heap) < k:
            heapq.heappush(heap, entry)
        elif sim > heap[0][0]:
            heapq.heapreplace(heap, entry)

    return [n for _, _, n in sorted(heap, key=lambda e: (-e[0], -e[1]))]
