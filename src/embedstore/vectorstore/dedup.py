"""Document deduplication before embedding.

A deduplicater is any callable taking a Document and returning True when
the document should be dropped. It may be a coroutine function.

Example:
    >>> dedup = ContentHashDeduplicater()
    >>> await store.add_documents(docs, deduplicater=dedup)
    >>> await store.add_documents(docs, deduplicater=dedup)  # no-op
"""

from __future__ import annotations

import hashlib
import inspect
import logging
from dataclasses import dataclass, field

from embedstore.vectorstore.document import Document
from embedstore.vectorstore.options import SearchOptions

logger = logging.getLogger(__name__)


async def deduplicate(documents: list[Document], options: SearchOptions) -> list[Document]:
    """Drop documents the configured deduplicater marks as duplicates.

    The predicate is called once per document, in input order. Order of the
    surviving documents is preserved.

    Args:
        documents: Candidate documents.
        options: Resolved call options.

    Returns:
        The documents for which the predicate returned False. A copy of the
        input when no predicate is configured.
    """
    if options.deduplicater is None:
        return list(documents)

    kept: list[Document] = []
    for doc in documents:
        result = options.deduplicater(doc)
        if inspect.isawaitable(result):
            result = await result
        if not result:
            kept.append(doc)

    if len(kept) != len(documents):
        logger.debug("Deduplication dropped %d of %d documents", len(documents) - len(kept), len(documents))
    return kept


def release(documents: list[Document], options: SearchOptions) -> None:
    """Hand documents that were not stored back to the deduplicater.

    Deduplicaters with a forget(documents) method are told to unmark them,
    so a retry of the same batch is not reported as all duplicates. Plain
    predicates are left alone.
    """
    forget = getattr(options.deduplicater, "forget", None)
    if forget is None or not documents:
        return
    forget(documents)
    logger.debug("Released %d document(s) after a failed add", len(documents))


def content_hash(text: str) -> str:
    """Return the SHA-256 hex digest of text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


@dataclass
class ContentHashDeduplicater:
    """Deduplicater keyed on a hash of page_content.

    Reports a document as duplicate when a document with the same content
    was already accepted by this instance. Accepted hashes are remembered,
    so repeats inside one batch are dropped too. VectorStore.add_documents
    calls forget() with the accepted documents when the add fails, so
    only stored content stays marked.

    Attributes:
        seen: Hashes accepted so far. Pre-populate it with the hashes of
            content already in the store.
    """

    seen: set[str] = field(default_factory=set)

    def __call__(self, document: Document) -> bool:
        digest = content_hash(document.page_content)
        if digest in self.seen:
            return True
        self.seen.add(digest)
        return False

    def forget(self, documents: list[Document]) -> None:
        """Unmark documents accepted by this instance but never stored."""
        for doc in documents:
            self.seen.discard(content_hash(doc.page_content))
