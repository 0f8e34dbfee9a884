"""In-memory vector store backend using NumPy.

A simple backend suitable for tests and small datasets (<10k points).
Supports multiple similarity metrics: cosine, euclidean, dot product, manhattan.
Filters are simple dicts (see embedstore.vectorstore.filters).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from embedstore.vectorstore.filters import DictFilterBuilder, matches_filter


class SimilarityMetric(Enum):
    """Similarity metrics for vector search.

    COSINE: Cosine similarity (default) - measures angle between vectors.
            Range: -1 to 1.

    EUCLIDEAN: Euclidean distance converted to similarity, 1 / (1 + d).
               Range: 0 to 1 (closer = higher score).

    DOT_PRODUCT: Raw dot product (inner product).
                 Range: unbounded (higher = more similar).

    MANHATTAN: Manhattan (L1) distance converted to similarity, 1 / (1 + d).
               Range: 0 to 1 (closer = higher score).
    """

    COSINE = "cosine"
    EUCLIDEAN = "euclidean"
    DOT_PRODUCT = "dot_product"
    MANHATTAN = "manhattan"


@dataclass
class StoredPoint:
    """A point held by the in-memory backend.

    Attributes:
        id: Point identifier.
        vector: Stored vector (normalized for cosine).
        payload: Stored payload.
        score: Score of the last search that returned this copy.
    """

    id: str
    vector: list[float]
    payload: dict[str, Any]
    score: float = 0.0


@dataclass
class InMemoryBackend:
    """In-memory backend implementing the BackendClient protocol.

    Attributes:
        metric: Similarity metric to use (default: COSINE).

    Example:
        >>> backend = InMemoryBackend()
        >>> ids = await backend.upsert_points([[0.1, 0.2]], [{"content": "hi"}])
        >>> hits = await backend.search_points([0.1, 0.2], 5, 0.0, None)
    """

    metric: SimilarityMetric | str = SimilarityMetric.COSINE
    filter_builder: DictFilterBuilder = field(default_factory=DictFilterBuilder, init=False)
    _points: dict[str, StoredPoint] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.metric, str):
            self.metric = SimilarityMetric(self.metric)

    async def upsert_points(
        self,
        vectors: list[list[float]],
        payloads: list[dict[str, Any]],
    ) -> list[str]:
        """Store points and return generated ids.

        Raises:
            ValueError: If lengths don't match.
        """
        if len(vectors) != len(payloads):
            msg = f"Lengths must match: vectors={len(vectors)}, payloads={len(payloads)}"
            raise ValueError(msg)

        ids: list[str] = []
        for vector, payload in zip(vectors, payloads):
            point_id = str(uuid.uuid4())
            if self.metric == SimilarityMetric.COSINE:
                vector = self._normalize_vector(vector)
            self._points[point_id] = StoredPoint(id=point_id, vector=list(vector), payload=dict(payload))
            ids.append(point_id)
        return ids

    async def search_points(
        self,
        vector: list[float],
        num_results: int,
        score_threshold: float,
        filter: Any,
    ) -> list[StoredPoint]:
        """Search for similar points, highest score first.

        A score_threshold of 0 disables the threshold.
        """
        candidates = [p for p in self._points.values() if matches_filter(p.payload, filter)]
        if not candidates:
            return []

        query = np.asarray(vector, dtype=float)
        if self.metric == SimilarityMetric.COSINE:
            query = np.asarray(self._normalize_vector(list(vector)), dtype=float)
        matrix = np.asarray([p.vector for p in candidates], dtype=float)

        if self.metric in (SimilarityMetric.COSINE, SimilarityMetric.DOT_PRODUCT):
            scores = matrix @ query
        elif self.metric == SimilarityMetric.EUCLIDEAN:
            scores = 1.0 / (1.0 + np.linalg.norm(matrix - query, axis=1))
        else:
            scores = 1.0 / (1.0 + np.sum(np.abs(matrix - query), axis=1))

        # Stable sort keeps insertion order among equal scores.
        order = np.argsort(-scores, kind="stable")
        hits: list[StoredPoint] = []
        for idx in order:
            score = float(scores[idx])
            if score_threshold and score < score_threshold:
                continue
            point = candidates[idx]
            hits.append(StoredPoint(id=point.id, vector=point.vector, payload=dict(point.payload), score=score))
            if len(hits) == num_results:
                break
        return hits

    async def scroll(self, num_results: int, filter: Any) -> list[StoredPoint]:
        """Return up to num_results points matching filter, in insertion order."""
        hits: list[StoredPoint] = []
        for point in self._points.values():
            if matches_filter(point.payload, filter):
                hits.append(StoredPoint(id=point.id, vector=point.vector, payload=dict(point.payload)))
                if len(hits) == num_results:
                    break
        return hits

    def count(self) -> int:
        """Return the number of stored points."""
        return len(self._points)

    @staticmethod
    def _normalize_vector(vec: list[float]) -> list[float]:
        """Normalize vector to unit length."""
        norm = float(np.linalg.norm(vec))
        if norm == 0:
            return list(vec)
        return [float(x) / norm for x in vec]
