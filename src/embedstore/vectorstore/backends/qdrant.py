"""Qdrant vector store backend.

Production-grade vector database with payload filtering.
Uses qdrant-client's AsyncQdrantClient as the RPC layer.

Supports:
- Remote servers and Qdrant Cloud (url + api_key)
- Local in-process mode (":memory:" or a path), for tests
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from qdrant_client import AsyncQdrantClient, models

from embedstore.errors import ConfigurationError
from embedstore.vectorstore.backends.inmemory import SimilarityMetric
from embedstore.vectorstore.filters import QdrantFilterBuilder

logger = logging.getLogger(__name__)

MEMORY_LOCATION = ":memory:"

DISTANCES = {
    SimilarityMetric.COSINE: models.Distance.COSINE,
    SimilarityMetric.EUCLIDEAN: models.Distance.EUCLID,
    SimilarityMetric.DOT_PRODUCT: models.Distance.DOT,
    SimilarityMetric.MANHATTAN: models.Distance.MANHATTAN,
}


def validate_url(url: str) -> str:
    """Return url if it is an absolute http(s) URL, raise otherwise."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        msg = f"invalid Qdrant URL {url!r}: expected an absolute http(s) URL"
        raise ConfigurationError(msg)
    return url


@dataclass
class QdrantBackend:
    """Qdrant backend for one collection.

    Attributes:
        collection_name: Name of the collection. Required.
        url: Qdrant server URL, or ":memory:" for an in-process instance.
        api_key: API key for Qdrant Cloud. Optional.
        path: Path for local on-disk mode, used when url is not set.
        client: Pre-built AsyncQdrantClient, overrides url/api_key/path.

    Example:
        # Remote (Qdrant Cloud)
        backend = QdrantBackend(
            collection_name="docs",
            url="https://xxx.qdrant.io",
            api_key="your-api-key",
        )

        # In-process (for testing)
        backend = QdrantBackend(collection_name="docs", url=":memory:")
        await backend.ensure_collection(dimension=384)
    """

    collection_name: str
    url: str | None = None
    api_key: str | None = field(default=None, repr=False)
    path: str | None = None
    client: AsyncQdrantClient | None = field(default=None, repr=False)

    filter_builder: QdrantFilterBuilder = field(default_factory=QdrantFilterBuilder, init=False)

    def __post_init__(self) -> None:
        if not self.collection_name:
            raise ConfigurationError("missing collection name")

        if self.client is not None:
            return

        if self.url == MEMORY_LOCATION:
            self.client = AsyncQdrantClient(location=MEMORY_LOCATION)
        elif self.url:
            self.client = AsyncQdrantClient(url=validate_url(self.url), api_key=self.api_key)
        elif self.path:
            self.client = AsyncQdrantClient(path=self.path)
        else:
            raise ConfigurationError("missing Qdrant URL")

    async def __aenter__(self) -> QdrantBackend:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the underlying client."""
        await self.client.close()

    async def ensure_collection(
        self,
        dimension: int,
        distance: SimilarityMetric | str = SimilarityMetric.COSINE,
    ) -> bool:
        """Create the collection if it does not exist.

        Args:
            dimension: Vector size.
            distance: A SimilarityMetric or its value ("cosine", "euclidean",
                "dot_product", "manhattan"), the same names InMemoryBackend
                takes.

        Returns:
            True if the collection was created.
        """
        try:
            metric = SimilarityMetric(distance)
        except ValueError:
            expected = sorted(m.value for m in SimilarityMetric)
            msg = f"unknown distance {distance!r}, expected one of {expected}"
            raise ConfigurationError(msg) from None

        if await self.client.collection_exists(self.collection_name):
            return False

        await self.client.create_collection(
            collection_name=self.collection_name,
            vectors_config=models.VectorParams(size=dimension, distance=DISTANCES[metric]),
        )
        logger.info("Created Qdrant collection %s (dimension=%d, distance=%s)", self.collection_name, dimension, metric.value)
        return True

    async def upsert_points(
        self,
        vectors: list[list[float]],
        payloads: list[dict[str, Any]],
    ) -> list[str]:
        """Upsert one point per vector and return the generated ids.

        Raises:
            ValueError: If vectors and payloads differ in length.
        """
        if len(vectors) != len(payloads):
            msg = f"Lengths must match: vectors={len(vectors)}, payloads={len(payloads)}"
            raise ValueError(msg)
        if not vectors:
            return []

        ids = [str(uuid.uuid4()) for _ in vectors]
        points = [
            models.PointStruct(id=point_id, vector=vector, payload=payload)
            for point_id, vector, payload in zip(ids, vectors, payloads)
        ]

        await self.client.upsert(
            collection_name=self.collection_name,
            points=points,
            wait=True,
        )
        logger.debug("Upserted %d point(s) into %s", len(points), self.collection_name)
        return ids

    async def search_points(
        self,
        vector: list[float],
        num_results: int,
        score_threshold: float,
        filter: Any,
    ) -> list[models.ScoredPoint]:
        """Similarity search ordered by descending score.

        A score_threshold of 0 is sent as no threshold.
        """
        response = await self.client.query_points(
            collection_name=self.collection_name,
            query=vector,
            limit=num_results,
            score_threshold=score_threshold or None,
            query_filter=filter,
            with_payload=True,
        )
        return list(response.points)

    async def scroll(self, num_results: int, filter: Any) -> list[models.Record]:
        """Enumerate records matching filter, without a query vector."""
        records, _next_offset = await self.client.scroll(
            collection_name=self.collection_name,
            scroll_filter=filter,
            limit=num_results,
            with_payload=True,
            with_vectors=False,
        )
        return list(records)
