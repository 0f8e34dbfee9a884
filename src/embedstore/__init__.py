"""
embedstore - Store, deduplicate, embed and search text documents
================================================================

A thin layer between an application, an embedding provider and a vector
database:

    ```python
    from embedstore import Document, OpenAIEmbeddings, create_qdrant_store

    store = create_qdrant_store(
        OpenAIEmbeddings(),
        collection_name="users",
        url="http://localhost:6333",
    )
    await store.add_documents([Document("Tokyo", {"country": "Japan"})])
    docs = await store.similarity_search("capital of Japan", 3, score_threshold=0.7)
    ```
"""

from embedstore.errors import (
    ConfigurationError,
    EmptyResponseError,
    FilterError,
    LengthMismatchError,
    ScoreThresholdError,
    ValidationError,
    VectorStoreError,
)
from embedstore.vectorstore import (
    ContentHashDeduplicater,
    Document,
    InMemoryBackend,
    MockEmbeddings,
    OpenAIEmbeddings,
    QdrantBackend,
    SearchOptions,
    StoreConfig,
    VectorStore,
    create_qdrant_store,
)

__version__ = "0.1.0"

__all__ = [
    "VectorStore",
    "StoreConfig",
    "Document",
    "SearchOptions",
    "create_qdrant_store",
    "ContentHashDeduplicater",
    "InMemoryBackend",
    "QdrantBackend",
    "OpenAIEmbeddings",
    "MockEmbeddings",
    "VectorStoreError",
    "ConfigurationError",
    "ValidationError",
    "ScoreThresholdError",
    "FilterError",
    "LengthMismatchError",
    "EmptyResponseError",
]
