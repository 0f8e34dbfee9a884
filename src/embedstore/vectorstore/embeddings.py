"""Embedding providers for vector store.

- OpenAIEmbeddings: OpenAI embeddings API via the official SDK
- MockEmbeddings: Deterministic hash-based vectors for tests

Example:
    >>> embedder = OpenAIEmbeddings(model="text-embedding-3-small")
    >>> vectors = await embedder.embed_documents(["Hello", "World"])
    >>> query = await embedder.embed_query("greeting")
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import math
from dataclasses import dataclass, field
from typing import Any

from openai import AsyncOpenAI

from embedstore.config import get_api_key, get_model_override
from embedstore.errors import EmptyResponseError, LengthMismatchError

logger = logging.getLogger(__name__)


# ============================================================
# Embedding Dimensions for Common Models (utility)
# ============================================================

EMBEDDING_DIMENSIONS: dict[str, int] = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


def get_embedding_dimension(model: str) -> int:
    """Get the embedding dimension for a model.

    Args:
        model: Model name.

    Returns:
        Embedding dimension, or 1536 as default.
    """
    return EMBEDDING_DIMENSIONS.get(model, 1536)


# ============================================================
# OpenAI Embeddings
# ============================================================

@dataclass
class OpenAIEmbeddings:
    """OpenAI embedding model.

    The client is created lazily on first use. Requests are split into
    batches of batch_size texts and sent concurrently; results are
    reassembled in input order.

    Attributes:
        model: Embedding model name. Falls back to OPENAI_EMBEDDING_MODEL
            or the config file, then text-embedding-3-small.
        dimensions: Optional reduced output dimension.
        api_key: API key. Falls back to OPENAI_API_KEY or the config file.
        base_url: Optional API base URL for compatible servers.
        timeout: Request timeout in seconds.
        max_retries: Retries performed by the SDK. 0 keeps failures terminal.
        batch_size: Maximum texts per request.

    Example:
        >>> embedder = OpenAIEmbeddings(dimensions=256)
        >>> vector = await embedder.embed_query("Hello world")
    """

    model: str = ""
    dimensions: int | None = None
    api_key: str | None = field(default=None, repr=False)
    base_url: str | None = None
    timeout: float = 60.0
    max_retries: int = 0
    batch_size: int = 100

    _client: Any = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.model:
            self.model = get_model_override("openai", "embedding") or "text-embedding-3-small"
        if self.batch_size <= 0:
            msg = f"batch_size must be positive, got {self.batch_size}"
            raise ValueError(msg)

    @property
    def dimension(self) -> int:
        """Return the dimension of embeddings."""
        return self.dimensions or get_embedding_dimension(self.model)

    def _ensure_client(self) -> Any:
        if self._client is None:
            kwargs: dict[str, Any] = {
                "timeout": self.timeout,
                "max_retries": self.max_retries,
            }
            api_key = get_api_key("openai", self.api_key)
            if api_key:
                kwargs["api_key"] = api_key
            if self.base_url:
                kwargs["base_url"] = self.base_url
            self._client = AsyncOpenAI(**kwargs)
        return self._client

    def _build_request(self, texts: list[str]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "input": texts,
        }
        if self.dimensions:
            kwargs["dimensions"] = self.dimensions
        return kwargs

    async def _embed_batch(self, batch: list[str]) -> list[list[float]]:
        client = self._ensure_client()
        response = await client.embeddings.create(**self._build_request(batch))
        if not response.data:
            raise EmptyResponseError(f"no embeddings returned for {len(batch)} input(s)")
        if len(response.data) != len(batch):
            raise LengthMismatchError(expected=len(batch), actual=len(response.data))
        sorted_data = sorted(response.data, key=lambda x: x.index)
        return [list(d.embedding) for d in sorted_data]

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed texts, preserving order."""
        if not texts:
            return []

        batches = [texts[i:i + self.batch_size] for i in range(0, len(texts), self.batch_size)]
        logger.debug("Embedding %d text(s) in %d batch(es) with %s", len(texts), len(batches), self.model)
        results = await asyncio.gather(*[self._embed_batch(b) for b in batches])

        all_embeddings: list[list[float]] = []
        for batch_result in results:
            all_embeddings.extend(batch_result)
        return all_embeddings

    async def embed_query(self, text: str) -> list[float]:
        """Embed a single query text."""
        vectors = await self._embed_batch([text])
        return vectors[0]


# ============================================================
# Mock Embeddings (for testing)
# ============================================================

@dataclass
class MockEmbeddings:
    """Mock embedding provider for testing.

    Generates deterministic, unit-length embeddings from a text hash.
    Identical texts get identical vectors, so a query equal to a stored
    document scores 1.0 under cosine similarity.

    Attributes:
        dimensions: Dimension of generated embeddings (default: 384).
    """

    dimensions: int = 384

    @property
    def dimension(self) -> int:
        """Return the dimension of embeddings."""
        return self.dimensions

    def _generate_embedding(self, text: str) -> list[float]:
        text_hash = hashlib.sha256(text.encode()).hexdigest()

        embedding = []
        for i in range(self.dimensions):
            byte_idx = i % 32
            byte_val = int(text_hash[byte_idx * 2:(byte_idx + 1) * 2], 16)
            val = (byte_val / 127.5 - 1) * math.cos(i * 0.1)
            embedding.append(val)

        magnitude = math.sqrt(sum(x * x for x in embedding))
        if magnitude > 0:
            embedding = [x / magnitude for x in embedding]

        return embedding

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate mock embeddings synchronously."""
        return [self._generate_embedding(text) for text in texts]

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return self.embed(texts)

    async def embed_query(self, text: str) -> list[float]:
        return self._generate_embedding(text)


__all__ = [
    "OpenAIEmbeddings",
    "MockEmbeddings",
    "EMBEDDING_DIMENSIONS",
    "get_embedding_dimension",
]
