"""Filter translation for vector store backends.

Each backend exposes a FilterBuilder. The store only dispatches on
presence: no filter means the backend's wildcard, anything else is handed
to the builder.

Simple dict filters understood by the Qdrant and in-memory builders:
- Equality: {"job": "engineer"}
- Comparisons: {"age": {"$gte": 18, "$lt": 65}}
- Membership: {"tag": {"$in": ["a", "b"]}}
"""

from __future__ import annotations

import operator
import re
from dataclasses import dataclass
from typing import Any

from qdrant_client import models

from embedstore.errors import FilterError
from embedstore.vectorstore.base import FilterBuilder
from embedstore.vectorstore.options import SearchOptions

RANGE_OPERATORS = {"$gt": "gt", "$gte": "gte", "$lt": "lt", "$lte": "lte"}
COMPARISONS = {"$gt": operator.gt, "$gte": operator.ge, "$lt": operator.lt, "$lte": operator.le}
SUPPORTED_OPERATORS = frozenset(RANGE_OPERATORS) | {"$in"}
QDRANT_CLAUSES = frozenset({"must", "should", "must_not", "min_should"})
REDIS_SPECIAL_CHARACTERS = frozenset(",.<>{}[]\"':;!@#$%^&*()-+=~|/\\")
REDIS_FIELD = re.compile(r"\w+")


def build_filter(options: SearchOptions, builder: FilterBuilder) -> Any:
    """Return the native filter for a call.

    Args:
        options: Resolved call options.
        builder: The backend's filter builder.

    Returns:
        builder.wildcard when no filter is set, otherwise the translated
        filter.
    """
    if options.filters is None:
        return builder.wildcard
    return builder.build(options.filters)


def _check_operators(key: str, conditions: dict[str, Any]) -> None:
    if not conditions:
        msg = f"Empty operator dict for {key!r}: expected at least one of {sorted(SUPPORTED_OPERATORS)}"
        raise FilterError(msg)
    unknown = set(conditions) - SUPPORTED_OPERATORS
    if unknown:
        msg = f"Unsupported filter operator(s) for {key!r}: {sorted(unknown)}"
        raise FilterError(msg)


@dataclass(frozen=True)
class QdrantFilterBuilder:
    """Builds qdrant_client Filter objects.

    Accepts a models.Filter (passed through), a dict in Qdrant's own
    filter layout (keys must/should/must_not), or a simple dict filter.
    """

    wildcard: Any = None

    def build(self, filters: Any) -> Any:
        if isinstance(filters, models.Filter):
            return filters
        if not isinstance(filters, dict):
            msg = f"Qdrant filters must be a dict or models.Filter, got {type(filters).__name__}"
            raise FilterError(msg)
        if not filters:
            return self.wildcard
        if set(filters) <= QDRANT_CLAUSES:
            return models.Filter(**filters)

        conditions: list[models.Condition] = []
        for key, value in filters.items():
            if isinstance(value, dict):
                _check_operators(key, value)
                bounds = {RANGE_OPERATORS[op]: val for op, val in value.items() if op in RANGE_OPERATORS}
                if bounds:
                    conditions.append(models.FieldCondition(key=key, range=models.Range(**bounds)))
                if "$in" in value:
                    conditions.append(models.FieldCondition(
                        key=key,
                        match=models.MatchAny(any=list(value["$in"])),
                    ))
            else:
                conditions.append(models.FieldCondition(
                    key=key,
                    match=models.MatchValue(value=value),
                ))

        return models.Filter(must=conditions)


@dataclass(frozen=True)
class DictFilterBuilder:
    """Pass-through builder for backends evaluating simple dict filters."""

    wildcard: Any = None

    def build(self, filters: Any) -> Any:
        if not isinstance(filters, dict):
            msg = f"Filters must be a dict, got {type(filters).__name__}"
            raise FilterError(msg)
        for key, value in filters.items():
            if isinstance(value, dict):
                _check_operators(key, value)
        return filters


def matches_filter(metadata: dict[str, Any], filters: dict[str, Any] | None) -> bool:
    """Evaluate a simple dict filter against a metadata mapping."""
    if not filters:
        return True
    for key, expected in filters.items():
        if key not in metadata:
            return False
        actual = metadata[key]
        if not isinstance(expected, dict):
            if actual != expected:
                return False
            continue
        _check_operators(key, expected)
        for op, val in expected.items():
            if op == "$in":
                if actual not in val:
                    return False
                continue
            try:
                if not COMPARISONS[op](actual, val):
                    return False
            except TypeError:
                return False
    return True


@dataclass(frozen=True)
class RedisFilterBuilder:
    """Builds RediSearch query strings.

    Strings pass through unchanged. A dict {"job": "engineer"} becomes
    '@job:("engineer")'; several keys are intersected. Values are escaped
    and field names must be plain identifiers.
    """

    wildcard: Any = "*"

    def build(self, filters: Any) -> Any:
        if isinstance(filters, str):
            return filters or self.wildcard
        if not isinstance(filters, dict):
            msg = f"Redis filters must be a str or dict, got {type(filters).__name__}"
            raise FilterError(msg)
        if not filters:
            return self.wildcard
        return " ".join(f'@{_redis_field(key)}:("{escape_redis(value)}")' for key, value in filters.items())


def escape_redis(value: Any) -> str:
    """Backslash-escape RediSearch query syntax characters in value."""
    return "".join(f"\\{ch}" if ch in REDIS_SPECIAL_CHARACTERS else ch for ch in str(value))


def _redis_field(key: Any) -> str:
    if not isinstance(key, str) or not REDIS_FIELD.fullmatch(key):
        msg = f"Invalid Redis filter field {key!r}: expected letters, digits or underscores"
        raise FilterError(msg)
    return key
