#!/usr/bin/env python3
"""
Similarity Calculator - Cosine similarity and top-K retrieval over vectors.
"""
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from core.exceptions import MalformedInputError
from core.matcher.models import EmbeddingRecord


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """
    Calculate raw cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Cosine similarity in range [-1.0, 1.0], or 0.0 if either vector is zero

    Raises:
        MalformedInputError: if the vectors differ in length
    """
    if len(vec1) != len(vec2):
        raise MalformedInputError(
            f"Vector length mismatch: {len(vec1)} != {len(vec2)}"
        )

    a = np.asarray(vec1, dtype=float)
    b = np.asarray(vec2, dtype=float)

    magnitude = float(np.linalg.norm(a) * np.linalg.norm(b))
    if magnitude == 0.0:
        return 0.0

    similarity = float(np.dot(a, b)) / magnitude
    # Guard against float drift just outside the valid range
    return max(-1.0, min(1.0, similarity))


def top_k(
    query: Sequence[float],
    records: Iterable[EmbeddingRecord],
    k: int = 5
) -> List[Tuple[str, float]]:
    """
    Rank records by cosine similarity to the query.

    Ties keep the original record order (the sort is stable).

    Returns:
        At most ``k`` (record id, score) pairs, highest score first
    """
    if k <= 0:
        return []

    scored = [
        (record.id, cosine_similarity(query, record.embedding))
        for record in records
    ]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored[:k]


class SimilarityCalculator:
    """Calculate cosine similarity between vectors."""

    @staticmethod
    def calculate(vec1: Sequence[float], vec2: Sequence[float]) -> float:
        return cosine_similarity(vec1, vec2)

    @staticmethod
    def top_k(
        query: Sequence[float],
        records: Iterable[EmbeddingRecord],
        k: int = 5
    ) -> List[Tuple[str, float]]:
        return top_k(query, records, k)
