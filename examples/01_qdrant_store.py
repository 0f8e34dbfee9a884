#!/usr/bin/env python3
"""
Example 01: Qdrant Vector Store
===============================

Stores a few documents in Qdrant and retrieves them three ways:
1. Similarity search with a score threshold
2. Similarity search restricted by a metadata filter
3. Payload-only search (no query vector)

Documents are deduplicated on content, so adding the same batch twice
stores each document once.

Usage:
    # In-process Qdrant with mock embeddings (no services needed)
    python examples/01_qdrant_store.py

    # Real Qdrant + OpenAI
    export QDRANT_URL="http://localhost:6333"
    export OPENAI_API_KEY="your-key"
    python examples/01_qdrant_store.py --openai
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from embedstore import (
    ContentHashDeduplicater,
    Document,
    MockEmbeddings,
    OpenAIEmbeddings,
    create_qdrant_store,
)
from embedstore.config import load_env

DOCUMENTS = [
    Document("Tokyo is the capital of Japan", {"country": "Japan", "population": 14}),
    Document("Paris is the capital of France", {"country": "France", "population": 2}),
    Document("Lima is the capital of Peru", {"country": "Peru", "population": 10}),
    Document("Kyoto was the capital of Japan for a millennium", {"country": "Japan", "population": 1}),
]


async def main(use_openai: bool) -> None:
    load_env()
    embedder = OpenAIEmbeddings() if use_openai else MockEmbeddings(dimensions=64)
    url = os.environ.get("QDRANT_URL", ":memory:") if use_openai else ":memory:"

    store = create_qdrant_store(embedder, collection_name="capitals", url=url)
    async with store.backend:
        await store.backend.ensure_collection(dimension=embedder.dimension)

        dedup = ContentHashDeduplicater()
        ids = await store.add_documents(DOCUMENTS, deduplicater=dedup)
        print(f"Added {len(ids)} documents")
        ids = await store.add_documents(DOCUMENTS, deduplicater=dedup)
        print(f"Second add stored {len(ids)} documents")

        print("\n--- Similarity search ---")
        for doc in await store.similarity_search("Tokyo is the capital of Japan", 2, score_threshold=0.5):
            print(f"{doc.score:.2f}  {doc.page_content}  {doc.metadata}")

        print("\n--- Filtered search ---")
        for doc in await store.similarity_search("capital city", 3, filters={"country": "Japan"}):
            print(f"{doc.score:.2f}  {doc.page_content}")

        print("\n--- Payload search ---")
        for doc in await store.payload_search(10, filters={"population": {"$gte": 10}}):
            print(f"{doc.page_content}  {doc.metadata}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(main(use_openai="--openai" in sys.argv))
