"""High-level VectorStore class.

Orchestrates deduplication, embedding, payload assembly and filter
translation over a backend client.

Example:
    >>> from embedstore.vectorstore import OpenAIEmbeddings, create_qdrant_store
    >>> store = create_qdrant_store(
    ...     OpenAIEmbeddings(),
    ...     collection_name="users",
    ...     url="http://localhost:6333",
    ... )
    >>> await store.add_documents([Document("Tokyo", {"country": "Japan"})])
    >>> docs = await store.similarity_search("capital of Japan", 3, score_threshold=0.7)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from embedstore.config import get_qdrant_settings
from embedstore.errors import ConfigurationError, LengthMismatchError
from embedstore.vectorstore.backends.qdrant import MEMORY_LOCATION, QdrantBackend, validate_url
from embedstore.vectorstore.base import BackendClient, EmbeddingProvider
from embedstore.vectorstore.dedup import deduplicate, release
from embedstore.vectorstore.document import Document, create_documents
from embedstore.vectorstore.filters import build_filter
from embedstore.vectorstore.options import (
    SearchOptions,
    resolve_options,
    validate_num_results,
    validate_score_threshold,
)
from embedstore.vectorstore.payload import DEFAULT_CONTENT_KEY, build_payload, hit_to_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreConfig:
    """Construction-time configuration of a VectorStore.

    Attributes:
        embedder: Embedding provider.
        collection_name: Collection (index) name.
        url: Backend endpoint URL, or ":memory:" for in-process Qdrant.
        api_key: Backend API key. Never included in repr.
        content_key: Payload field holding document text. Empty means
            the default "content".

    Raises:
        ConfigurationError: If embedder, collection_name or url is missing,
            or url is not an absolute http(s) URL.
    """

    embedder: EmbeddingProvider
    collection_name: str
    url: str
    api_key: str | None = field(default=None, repr=False)
    content_key: str = DEFAULT_CONTENT_KEY

    def __post_init__(self) -> None:
        if self.embedder is None:
            raise ConfigurationError("missing embedder")
        if not self.collection_name:
            raise ConfigurationError("missing collection name")
        if not self.url:
            raise ConfigurationError("missing Qdrant URL")
        if self.url != MEMORY_LOCATION:
            validate_url(self.url)
        if not self.content_key:
            object.__setattr__(self, "content_key", DEFAULT_CONTENT_KEY)

    @classmethod
    def from_settings(cls, embedder: EmbeddingProvider, **explicit: Any) -> StoreConfig:
        """Build a config from explicit values, environment and config file.

        Args:
            embedder: Embedding provider.
            **explicit: collection_name, url, api_key, content_key overrides.
        """
        settings = get_qdrant_settings(**explicit)
        return cls(
            embedder=embedder,
            collection_name=settings.get("collection_name", ""),
            url=settings.get("url", ""),
            api_key=settings.get("api_key"),
            content_key=settings.get("content_key", DEFAULT_CONTENT_KEY),
        )


@dataclass
class VectorStore:
    """Vector store over an embedding provider and a backend client.

    The configuration is immutable and no other state is kept, so one
    instance can serve concurrent callers.

    Attributes:
        config: Store configuration.
        backend: Backend client. Defaults to a QdrantBackend built from config.
    """

    config: StoreConfig
    backend: BackendClient | None = None

    def __post_init__(self) -> None:
        if self.backend is None:
            self.backend = QdrantBackend(
                collection_name=self.config.collection_name,
                url=self.config.url,
                api_key=self.config.api_key,
            )
        logger.debug(
            "VectorStore ready (collection=%s, backend=%s)",
            self.config.collection_name,
            type(self.backend).__name__,
        )

    @property
    def embedder(self) -> EmbeddingProvider:
        return self.config.embedder

    @property
    def content_key(self) -> str:
        return self.config.content_key

    async def add_documents(
        self,
        documents: list[Document],
        options: SearchOptions | None = None,
        **overrides: Any,
    ) -> list[str]:
        """Embed and store documents.

        When embedding or the upsert fails, or the call is cancelled, the
        kept documents are released back to the deduplicater so a retry
        stores them.

        Args:
            documents: Documents to add.
            options: Call options; only deduplicater is used here.
            **overrides: Option fields overriding options.

        Returns:
            Backend ids, one per stored document. Empty when every document
            was dropped as a duplicate.

        Raises:
            LengthMismatchError: If the embedder returns a different number
                of vectors than documents. Nothing is written.
        """
        opts = resolve_options(options, **overrides)

        docs = await deduplicate(documents, opts)
        if not docs:
            # Nothing to add, perhaps all documents were duplicates.
            logger.debug("No documents to add after deduplication")
            return []

        try:
            ids = await self._embed_and_upsert(docs)
        except BaseException:
            release(docs, opts)
            raise
        logger.debug("Added %d document(s) to %s", len(ids), self.config.collection_name)
        return ids

    async def _embed_and_upsert(self, docs: list[Document]) -> list[str]:
        texts = [doc.page_content for doc in docs]

        vectors = await self.embedder.embed_documents(texts)
        if len(vectors) != len(docs):
            raise LengthMismatchError(expected=len(docs), actual=len(vectors))

        payloads = [build_payload(doc, text, self.content_key) for doc, text in zip(docs, texts)]

        return await self.backend.upsert_points(vectors, payloads)

    async def add_texts(
        self,
        texts: list[str],
        metadatas: list[dict[str, Any]] | None = None,
        options: SearchOptions | None = None,
        **overrides: Any,
    ) -> list[str]:
        """Add raw texts, optionally with one metadata dict per text.

        Raises:
            ValueError: If metadatas length doesn't match texts.
        """
        return await self.add_documents(create_documents(texts, metadatas), options, **overrides)

    async def similarity_search(
        self,
        query: str,
        num_results: int,
        options: SearchOptions | None = None,
        **overrides: Any,
    ) -> list[Document]:
        """Return the documents most similar to query.

        Args:
            query: Query text.
            num_results: Maximum number of documents, must be positive.
            options: Call options (score_threshold, filters).
            **overrides: Option fields overriding options.

        Returns:
            Documents in the backend's relevance order, each with its score.

        Raises:
            ScoreThresholdError: If score_threshold is outside [0, 1].
            ValidationError: If num_results is not positive.
        """
        opts = resolve_options(options, **overrides)

        filters = build_filter(opts, self.backend.filter_builder)
        score_threshold = validate_score_threshold(opts)
        validate_num_results(num_results)

        vector = await self.embedder.embed_query(query)

        hits = await self.backend.search_points(vector, num_results, score_threshold, filters)
        logger.debug("Similarity search returned %d hit(s) from %s", len(hits), self.config.collection_name)
        return [hit_to_document(hit, self.content_key) for hit in hits]

    async def payload_search(
        self,
        num_results: int,
        options: SearchOptions | None = None,
        **overrides: Any,
    ) -> list[Document]:
        """Return stored documents matching the filter, without a query.

        Args:
            num_results: Maximum number of documents, must be positive.
            options: Call options; only filters is used here.
            **overrides: Option fields overriding options.

        Raises:
            ValidationError: If num_results is not positive.
        """
        opts = resolve_options(options, **overrides)

        filters = build_filter(opts, self.backend.filter_builder)
        validate_num_results(num_results)

        records = await self.backend.scroll(num_results, filters)
        return [hit_to_document(record, self.content_key) for record in records]


def create_qdrant_store(embedder: EmbeddingProvider, **explicit: Any) -> VectorStore:
    """Create a VectorStore backed by Qdrant.

    Settings not passed explicitly are read from the environment
    (QDRANT_URL, QDRANT_COLLECTION, QDRANT_API_KEY, QDRANT_CONTENT_KEY)
    or the embedstore config file.

    Args:
        embedder: Embedding provider.
        **explicit: collection_name, url, api_key, content_key.

    Returns:
        VectorStore with a QdrantBackend.

    Raises:
        ConfigurationError: If a required setting is missing.
    """
    config = StoreConfig.from_settings(embedder, **explicit)
    logger.info("Creating Qdrant store for collection %s", config.collection_name)
    return VectorStore(config=config)
