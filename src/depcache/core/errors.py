"""Error types raised by the dependency cache engine."""

from __future__ import annotations

from typing import Hashable, Iterable


class DepCacheError(RuntimeError):
    """Base class for dependency cache errors."""


class SchemaEnumerationError(DepCacheError):
    """Raised when the resource names of a schema owner cannot be listed.

    This is a setup defect (wrong connection, missing permissions), not a
    data condition, and is never swallowed by the engine.
    """

    def __init__(self, owner: Hashable, message: str):
        super().__init__(f"Could not enumerate resources of {owner!r}: {message}")
        self.owner = owner


class CacheInvalidationError(DepCacheError):
    """Raised when the cache store fails to purge a set of dependency tags."""

    def __init__(self, tags: Iterable[str], message: str):
        self.tags = frozenset(tags)
        super().__init__(
            f"Invalidating [{', '.join(sorted(self.tags))}] failed: {message}"
        )
