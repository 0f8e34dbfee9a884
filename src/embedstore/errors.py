"""Exceptions raised by embedstore.

Hierarchy:
- VectorStoreError: base for everything raised by this package
- ConfigurationError: invalid construction parameters
- ValidationError: invalid per-call arguments
- ScoreThresholdError: score threshold outside [0, 1]
- FilterError: filter that cannot be translated to the backend syntax
- LengthMismatchError: embedder output does not line up with its input
- EmptyResponseError: embedder returned nothing for a non-empty input

Errors from the embedding provider or the vector database client are not
wrapped; they reach the caller unchanged.
"""

from __future__ import annotations


class VectorStoreError(Exception):
    """Base class for embedstore errors."""


class ConfigurationError(VectorStoreError, ValueError):
    """Raised when a store or backend is constructed with invalid options."""


class ValidationError(VectorStoreError, ValueError):
    """Raised when a call receives invalid arguments."""


class ScoreThresholdError(ValidationError):
    """Raised when a score threshold is outside [0, 1]."""

    def __init__(self, threshold: float) -> None:
        self.threshold = threshold
        super().__init__(f"score threshold must be between 0 and 1, got {threshold}")


class FilterError(ValidationError):
    """Raised when a filter cannot be translated for the backend."""


class LengthMismatchError(VectorStoreError):
    """Raised when the number of vectors does not match the number of inputs."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"number of vectors from embedder ({actual}) does not match "
            f"number of documents ({expected})"
        )


class EmptyResponseError(VectorStoreError):
    """Raised when an embedding provider returns no vectors."""


__all__ = [
    "VectorStoreError",
    "ConfigurationError",
    "ValidationError",
    "ScoreThresholdError",
    "FilterError",
    "LengthMismatchError",
    "EmptyResponseError",
]
