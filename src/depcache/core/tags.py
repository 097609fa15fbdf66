"""Core dependency-tag models.

Dependency tags are plain strings: either a normalized resource (table) name
or the reserved sentinel tag used when no resource could be determined.
These models are intentionally free of any database driver or store types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Iterable

UNKNOWN_DEPENDENCY = "UnknownDependency"


class CacheExpirationMode(str, Enum):
    """
    How the external store should expire an entry.

    Values:
        ABSOLUTE: The entry expires a fixed time after it was stored.
        SLIDING: The expiration window restarts on every hit.
    """

    ABSOLUTE = "ABSOLUTE"
    SLIDING = "SLIDING"


@dataclass(frozen=True)
class CachePolicy:
    """
    Per-query caching configuration, owned by the caller.

    Attributes:
        cache_dependencies: Explicit dependency tags used as a fallback when
            no known resource can be found in the command text.
        expiration_mode: Expiration strategy for the caller's store; the engine
            never interprets it (`depcache resolve` reports it).
        timeout: Expiration window for the caller's store, like `expiration_mode`.
        log_dependencies: Emit the dependency resolution diagnostics for
            this query.
    """

    cache_dependencies: frozenset[str] = field(default_factory=frozenset)
    expiration_mode: CacheExpirationMode = CacheExpirationMode.ABSOLUTE
    timeout: timedelta = timedelta(minutes=30)
    log_dependencies: bool = True

    @classmethod
    def with_dependencies(cls, *names: str, **kwargs) -> CachePolicy:
        """Build a policy with explicit dependencies; blank names are ignored."""
        deps = frozenset(n.strip() for n in names if n and n.strip())
        return cls(cache_dependencies=deps, **kwargs)


def sorted_tags(tags: Iterable[str]) -> str:
    """Render a tag collection as a stable, comma separated string."""
    return ", ".join(sorted(tags))
