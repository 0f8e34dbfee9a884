"""Vector store backends package.

Provides different storage backends:
- InMemoryBackend: NumPy-based, for tests and small datasets
- QdrantBackend: Qdrant server, Qdrant Cloud or in-process Qdrant
"""

from embedstore.vectorstore.backends.inmemory import InMemoryBackend, SimilarityMetric
from embedstore.vectorstore.backends.qdrant import QdrantBackend

__all__ = [
    "InMemoryBackend",
    "SimilarityMetric",
    "QdrantBackend",
]
