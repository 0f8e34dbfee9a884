"""Conversion between documents and backend payloads.

A payload is the non-vector part of a stored point: the document's
metadata plus its text under the configured content key.
"""

from __future__ import annotations

from typing import Any

from embedstore.vectorstore.document import Document

DEFAULT_CONTENT_KEY = "content"


def build_payload(document: Document, text: str, content_key: str = DEFAULT_CONTENT_KEY) -> dict[str, Any]:
    """Build the payload stored alongside a document's vector.

    The document's metadata is copied, never mutated. An existing metadata
    entry named content_key is overwritten by text.

    Args:
        document: Source document.
        text: Raw text to store.
        content_key: Payload field holding the text.

    Returns:
        New payload dictionary.

    Example:
        >>> build_payload(Document("hello", {"job": "engineer"}), "hello")
        {'job': 'engineer', 'content': 'hello'}
    """
    payload = dict(document.metadata)
    payload[content_key] = text
    return payload


def payload_to_document(
    payload: dict[str, Any] | None,
    content_key: str = DEFAULT_CONTENT_KEY,
    score: float = 0.0,
) -> Document:
    """Rebuild a document from a stored payload.

    Args:
        payload: Payload returned by the backend.
        content_key: Payload field holding the text.
        score: Relevance score of the hit.

    Returns:
        Document with the text under content_key as page_content and the
        remaining fields as metadata.
    """
    metadata = dict(payload or {})
    text = metadata.pop(content_key, "")
    return Document(
        page_content=text if isinstance(text, str) else str(text),
        metadata=metadata,
        score=float(score),
    )


def hit_to_document(hit: Any, content_key: str = DEFAULT_CONTENT_KEY) -> Document:
    """Rebuild a document from a backend hit (scored point or scroll record)."""
    score = getattr(hit, "score", None)
    return payload_to_document(hit.payload, content_key, 0.0 if score is None else score)
