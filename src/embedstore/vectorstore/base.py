"""Base protocols and types for vector store module.

Defines the core abstractions:
- EmbeddingProvider: Protocol for embedding generation
- BackendClient: Protocol for the vector database RPC layer
- FilterBuilder: Protocol for translating caller filters to backend syntax
- Hit: Protocol for records returned by a backend
- Deduplicater: Predicate deciding whether a document is dropped
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from embedstore.vectorstore.document import Document


Deduplicater = Callable[["Document"], Union[bool, Awaitable[bool]]]
"""Returns True when a document should be dropped before embedding.

An optional forget(documents) method is called with the documents that
were kept but not stored because the add failed."""


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Protocol for embedding providers.

    Implementations must provide:
    - embed_documents: Generate embeddings for multiple texts, in order
    - embed_query: Generate embedding for a single query
    """

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for multiple texts.

        Args:
            texts: List of texts to embed.

        Returns:
            One embedding vector per text, in input order.
        """
        ...

    async def embed_query(self, text: str) -> list[float]:
        """Generate embedding for a query.

        Args:
            text: Query text to embed.

        Returns:
            Embedding vector.
        """
        ...


@runtime_checkable
class Hit(Protocol):
    """A record returned by a backend search or scroll.

    qdrant-client's ScoredPoint and Record both satisfy this protocol.
    score is not declared: ScoredPoint has it, scroll Records do not.
    Converters read it with a 0.0 default.
    """

    id: Any
    payload: dict[str, Any] | None


@runtime_checkable
class FilterBuilder(Protocol):
    """Translates a caller-provided filter into the backend's native syntax.

    Attributes:
        wildcard: The backend's "match everything" filter, used when the
            caller sets no filter.
    """

    wildcard: Any

    def build(self, filters: Any) -> Any:
        """Translate a non-None filter value."""
        ...


@runtime_checkable
class BackendClient(Protocol):
    """Protocol for vector database backends.

    Implementations must provide:
    - upsert_points: Store vectors with their payloads
    - search_points: Similarity search with threshold and filter
    - scroll: Filtered enumeration without a query vector
    - filter_builder: The FilterBuilder for the backend's filter syntax
    """

    filter_builder: FilterBuilder

    async def upsert_points(
        self,
        vectors: list[list[float]],
        payloads: list[dict[str, Any]],
    ) -> list[str]:
        """Insert points and return the backend-assigned ids, in order."""
        ...

    async def search_points(
        self,
        vector: list[float],
        num_results: int,
        score_threshold: float,
        filter: Any,
    ) -> list[Hit]:
        """Return up to num_results hits ordered by relevance."""
        ...

    async def scroll(self, num_results: int, filter: Any) -> list[Hit]:
        """Return up to num_results records matching filter."""
        ...
