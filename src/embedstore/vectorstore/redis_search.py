"""RediSearch metadata-only search commands.

Builds FT.SEARCH command argument lists for filtered retrieval without a
query vector, the RediSearch counterpart of a Qdrant scroll:

    FT.SEARCH users @job:("engineer") RETURN 2 content age DIALECT 2 LIMIT 0 3

The command list can be sent with any Redis client, e.g.
``await redis.execute_command(*search.as_metadata_search_command())``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from embedstore.errors import ConfigurationError, ValidationError
from embedstore.vectorstore.filters import RedisFilterBuilder, build_filter
from embedstore.vectorstore.options import SearchOptions, validate_num_results

SEARCH_DIALECT = "2"


@dataclass
class IndexMetadataSearch:
    """A metadata search against one RediSearch index.

    Attributes:
        index: Index name. Required.
        pre_filters: RediSearch query string. Empty matches everything.
        returns: Fields to return. Empty returns all fields.
        offset: Number of results to skip.
        limit: Maximum number of results. 0 is treated as 1.
    """

    index: str
    pre_filters: str = ""
    returns: list[str] = field(default_factory=list)
    offset: int = 0
    limit: int = 0

    def __post_init__(self) -> None:
        if not self.index:
            raise ConfigurationError("invalid index: index name is required")
        if self.offset < 0 or self.limit < 0:
            msg = f"offset and limit must not be negative, got offset={self.offset} limit={self.limit}"
            raise ValidationError(msg)

    def as_metadata_search_command(self) -> list[str]:
        """Return the FT.SEARCH command as a list of arguments."""
        cmd = ["FT.SEARCH", self.index, self.pre_filters or RedisFilterBuilder.wildcard]

        if self.returns:
            cmd += ["RETURN", str(len(self.returns)), *self.returns]

        cmd += ["DIALECT", SEARCH_DIALECT]
        cmd += ["LIMIT", str(self.offset), str(self.limit or 1)]
        return cmd


def metadata_search(
    index: str,
    num_results: int,
    options: SearchOptions,
    returns: list[str] | None = None,
) -> IndexMetadataSearch:
    """Build a metadata search from per-call options.

    Args:
        index: Index name.
        num_results: Maximum number of results, must be positive.
        options: Resolved call options; options.filters is a RediSearch
            query string or a simple equality dict.
        returns: Fields to return.
    """
    validate_num_results(num_results)
    return IndexMetadataSearch(
        index=index,
        pre_filters=build_filter(options, RedisFilterBuilder()),
        returns=list(returns or []),
        limit=num_results,
    )
