"""Document class for vector store.

Provides the Document dataclass stored in and returned by a VectorStore.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Document:
    """A text document with metadata.

    Documents are immutable and owned by the caller; the store only reads
    them.

    Attributes:
        page_content: The text content of the document.
        metadata: Arbitrary metadata stored alongside the text.
        score: Relevance score set on documents returned by a similarity
            search. 0.0 for documents that did not come from a search.

    Example:
        >>> doc = Document(page_content="Hello", metadata={"job": "engineer"})
        >>> doc.metadata["job"]
        'engineer'
    """

    page_content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation.

        Returns:
            Dictionary with page_content, metadata, and score.
        """
        return {
            "page_content": self.page_content,
            "metadata": dict(self.metadata),
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Document:
        """Create Document from dictionary.

        Args:
            data: Dictionary with page_content, metadata, score.

        Returns:
            Document instance.
        """
        return cls(
            page_content=data.get("page_content", ""),
            metadata=dict(data.get("metadata") or {}),
            score=float(data.get("score", 0.0)),
        )

    def __len__(self) -> int:
        """Return length of text content."""
        return len(self.page_content)

    def __repr__(self) -> str:
        """Return string representation."""
        preview = self.page_content[:50] + "..." if len(self.page_content) > 50 else self.page_content
        return f"Document(page_content={preview!r}, metadata={self.metadata!r}, score={self.score})"


def create_documents(
    texts: list[str],
    metadatas: list[dict[str, Any]] | None = None,
) -> list[Document]:
    """Create multiple documents from texts.

    Args:
        texts: List of text contents.
        metadatas: Optional list of metadata dicts (one per text).

    Returns:
        List of Document objects.

    Raises:
        ValueError: If metadatas length doesn't match texts.
    """
    if metadatas is not None and len(metadatas) != len(texts):
        msg = f"metadatas length ({len(metadatas)}) must match texts length ({len(texts)})"
        raise ValueError(msg)

    return [
        Document(
            page_content=text,
            metadata=dict(metadatas[i]) if metadatas is not None else {},
        )
        for i, text in enumerate(texts)
    ]
