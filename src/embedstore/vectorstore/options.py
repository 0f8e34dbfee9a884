"""Per-call options for vector store operations."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from embedstore.errors import ScoreThresholdError, ValidationError
from embedstore.vectorstore.base import Deduplicater


@dataclass(frozen=True)
class SearchOptions:
    """Options for a single add or search call.

    Attributes:
        score_threshold: Minimum relevance score in [0, 1]. 0.0 disables
            the threshold.
        filters: Backend-specific filter value. None matches everything.
        deduplicater: Predicate returning True for documents to drop
            before embedding.
    """

    score_threshold: float = 0.0
    filters: Any = None
    deduplicater: Deduplicater | None = None


def resolve_options(options: SearchOptions | None = None, **overrides: Any) -> SearchOptions:
    """Build the options for one call.

    Args:
        options: Base options, defaults if None.
        **overrides: Field values replacing those of the base options.

    Returns:
        A fresh SearchOptions.

    Raises:
        TypeError: If an override names an unknown option.
    """
    base = options if options is not None else SearchOptions()
    if not overrides:
        return base
    return replace(base, **overrides)


def validate_score_threshold(options: SearchOptions) -> float:
    """Return the score threshold, raising if it is outside [0, 1]."""
    threshold = options.score_threshold
    # Also rejects NaN.
    if not 0 <= threshold <= 1:
        raise ScoreThresholdError(threshold)
    return threshold


def validate_num_results(num_results: int) -> int:
    if num_results <= 0:
        msg = f"num_results must be positive, got {num_results}"
        raise ValidationError(msg)
    return num_results
