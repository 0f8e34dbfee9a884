"""Tests for embedding providers.

Tests:
- MockEmbeddings determinism and shape
- OpenAIEmbeddings batching, ordering and response checks (fake client)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any

import pytest

from embedstore.errors import EmptyResponseError, LengthMismatchError
from embedstore.vectorstore import EmbeddingProvider, MockEmbeddings, OpenAIEmbeddings
from embedstore.vectorstore.embeddings import get_embedding_dimension


# ============================================================
# Mock Embeddings Tests
# ============================================================


class TestMockEmbeddings:
    """Tests for MockEmbeddings."""

    @pytest.fixture
    def embeddings(self) -> MockEmbeddings:
        return MockEmbeddings(dimensions=128)

    def test_satisfies_protocol(self, embeddings: MockEmbeddings) -> None:
        assert isinstance(embeddings, EmbeddingProvider)

    @pytest.mark.asyncio
    async def test_embed_documents(self, embeddings: MockEmbeddings) -> None:
        vectors = await embeddings.embed_documents(["Hello", "World"])
        assert len(vectors) == 2
        assert all(len(v) == 128 for v in vectors)

    @pytest.mark.asyncio
    async def test_deterministic(self, embeddings: MockEmbeddings) -> None:
        """Test that same text produces same embedding."""
        assert await embeddings.embed_query("Test") == await embeddings.embed_query("Test")
        assert await embeddings.embed_query("Test") == (await embeddings.embed_documents(["Test"]))[0]

    @pytest.mark.asyncio
    async def test_different_texts(self, embeddings: MockEmbeddings) -> None:
        assert await embeddings.embed_query("Hello") != await embeddings.embed_query("World")

    @pytest.mark.asyncio
    async def test_normalized(self, embeddings: MockEmbeddings) -> None:
        vector = await embeddings.embed_query("Test")
        magnitude = math.sqrt(sum(x * x for x in vector))
        assert abs(magnitude - 1.0) < 0.01

    def test_dimension_property(self, embeddings: MockEmbeddings) -> None:
        assert embeddings.dimension == 128


# ============================================================
# OpenAI Embeddings Tests
# ============================================================


@dataclass
class FakeEmbeddingsAPI:
    """Stand-in for AsyncOpenAI().embeddings."""

    dimension: int = 3
    reverse: bool = False
    shortfall: int = 0
    requests: list[dict[str, Any]] = field(default_factory=list)

    async def create(self, **kwargs: Any) -> SimpleNamespace:
        self.requests.append(kwargs)
        texts = kwargs["input"]
        data = [
            SimpleNamespace(index=i, embedding=[float(len(t)), float(i), 0.0][: self.dimension])
            for i, t in enumerate(texts)
        ]
        if self.reverse:
            data.reverse()
        if self.shortfall:
            data = data[: len(data) - self.shortfall]
        return SimpleNamespace(data=data)


def make_openai(api: FakeEmbeddingsAPI, **kwargs: Any) -> OpenAIEmbeddings:
    embedder = OpenAIEmbeddings(model="text-embedding-3-small", api_key="test", **kwargs)
    embedder._client = SimpleNamespace(embeddings=api)
    return embedder


class TestOpenAIEmbeddings:
    """Tests for OpenAIEmbeddings with a fake client."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(make_openai(FakeEmbeddingsAPI()), EmbeddingProvider)

    @pytest.mark.asyncio
    async def test_batches_preserve_order(self) -> None:
        """Test texts are split into batches and reassembled in order."""
        api = FakeEmbeddingsAPI()
        embedder = make_openai(api, batch_size=2)

        vectors = await embedder.embed_documents(["a", "bb", "ccc", "dddd", "eeeee"])

        assert [len(r["input"]) for r in api.requests] == [2, 2, 1]
        assert [v[0] for v in vectors] == [1.0, 2.0, 3.0, 4.0, 5.0]

    @pytest.mark.asyncio
    async def test_sorted_by_index(self) -> None:
        """Test response items are ordered by their index."""
        embedder = make_openai(FakeEmbeddingsAPI(reverse=True))
        vectors = await embedder.embed_documents(["a", "bb", "ccc"])
        assert [v[0] for v in vectors] == [1.0, 2.0, 3.0]

    @pytest.mark.asyncio
    async def test_empty_input(self) -> None:
        api = FakeEmbeddingsAPI()
        embedder = make_openai(api)
        assert await embedder.embed_documents([]) == []
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_embed_query(self) -> None:
        api = FakeEmbeddingsAPI()
        embedder = make_openai(api)
        assert await embedder.embed_query("hello") == [5.0, 0.0, 0.0]
        assert api.requests[0]["input"] == ["hello"]

    @pytest.mark.asyncio
    async def test_dimensions_sent(self) -> None:
        api = FakeEmbeddingsAPI()
        embedder = make_openai(api, dimensions=256)
        await embedder.embed_query("x")
        assert api.requests[0]["dimensions"] == 256
        assert embedder.dimension == 256

    @pytest.mark.asyncio
    async def test_length_mismatch(self) -> None:
        embedder = make_openai(FakeEmbeddingsAPI(shortfall=1))
        with pytest.raises(LengthMismatchError):
            await embedder.embed_documents(["a", "b"])

    @pytest.mark.asyncio
    async def test_empty_response(self) -> None:
        embedder = make_openai(FakeEmbeddingsAPI(shortfall=1))
        with pytest.raises(EmptyResponseError):
            await embedder.embed_query("a")

    def test_model_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAI_EMBEDDING_MODEL", "text-embedding-3-large")
        embedder = OpenAIEmbeddings()
        assert embedder.model == "text-embedding-3-large"
        assert embedder.dimension == 3072

    def test_invalid_batch_size(self) -> None:
        with pytest.raises(ValueError, match="batch_size"):
            OpenAIEmbeddings(model="m", batch_size=0)

    def test_repr_hides_api_key(self) -> None:
        assert "sk-secret" not in repr(OpenAIEmbeddings(model="m", api_key="sk-secret"))

    def test_known_dimensions(self) -> None:
        assert get_embedding_dimension("text-embedding-3-large") == 3072
        assert get_embedding_dimension("unknown") == 1536
