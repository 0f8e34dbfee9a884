"""Vector store module for semantic search and RAG.

Provides:
- Document storage with embeddings
- Deduplication before embedding
- Similarity search with score threshold and metadata filters
- Payload-only (scroll) retrieval
- Backends: Qdrant, InMemory
- Embedding providers: OpenAI, Mock

Example:
    >>> from embedstore.vectorstore import Document, MockEmbeddings, StoreConfig, VectorStore
    >>> config = StoreConfig(MockEmbeddings(), collection_name="docs", url=":memory:")
    >>> store = VectorStore(config)
    >>> await store.backend.ensure_collection(dimension=384)
    >>> await store.add_documents([Document("Python is great", {"lang": "py"})])
    >>> docs = await store.similarity_search("Python", 3)
"""

from embedstore.vectorstore import backends
from embedstore.vectorstore.backends import InMemoryBackend, QdrantBackend, SimilarityMetric
from embedstore.vectorstore.base import (
    BackendClient,
    Deduplicater,
    EmbeddingProvider,
    FilterBuilder,
    Hit,
)
from embedstore.vectorstore.dedup import ContentHashDeduplicater, deduplicate
from embedstore.vectorstore.document import Document, create_documents
from embedstore.vectorstore.embeddings import MockEmbeddings, OpenAIEmbeddings
from embedstore.vectorstore.filters import (
    DictFilterBuilder,
    QdrantFilterBuilder,
    RedisFilterBuilder,
    build_filter,
)
from embedstore.vectorstore.options import SearchOptions, resolve_options
from embedstore.vectorstore.payload import DEFAULT_CONTENT_KEY, build_payload, payload_to_document
from embedstore.vectorstore.redis_search import IndexMetadataSearch, metadata_search
from embedstore.vectorstore.store import StoreConfig, VectorStore, create_qdrant_store

__all__ = [
    # Core
    "VectorStore",
    "StoreConfig",
    "Document",
    "SearchOptions",
    # Factory
    "create_qdrant_store",
    # Protocols
    "BackendClient",
    "EmbeddingProvider",
    "FilterBuilder",
    "Hit",
    "Deduplicater",
    # Pipeline steps
    "deduplicate",
    "ContentHashDeduplicater",
    "build_payload",
    "payload_to_document",
    "build_filter",
    "resolve_options",
    "DEFAULT_CONTENT_KEY",
    # Filters
    "QdrantFilterBuilder",
    "DictFilterBuilder",
    "RedisFilterBuilder",
    "IndexMetadataSearch",
    "metadata_search",
    # Backends
    "InMemoryBackend",
    "QdrantBackend",
    "SimilarityMetric",
    "backends",
    # Embeddings
    "OpenAIEmbeddings",
    "MockEmbeddings",
    # Document utilities
    "create_documents",
]
