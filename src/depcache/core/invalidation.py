"""Invalidation coordinator and the public entry points of the engine.

The command-interception layer calls exactly two operations:

  - `resolve_read_dependencies` for a read, to tag the cached result
  - `invalidate_if_mutating` after any command has been executed

A mutating command always purges the `UnknownDependency` sentinel on top of
its resolved tables, so results that could not be attributed to a table at
read time never outlive a write.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import AbstractSet, Hashable, Protocol

from depcache.core.catalog import ResourceCatalog
from depcache.core.classifier import is_mutating_command
from depcache.core.errors import CacheInvalidationError, DepCacheError
from depcache.core.resolver import resolve_dependencies
from depcache.core.settings import CacheSettings
from depcache.core.tags import UNKNOWN_DEPENDENCY, CachePolicy, sorted_tags

logger = logging.getLogger(__name__)


class CacheEvent(str, Enum):
    """Event identifiers attached to engine log records (`extra["event"]`)."""

    QUERY_RESULT_INVALIDATED = "QUERY_RESULT_INVALIDATED"


class DependencyCacheStore(Protocol):
    """Interface of the external cache store used by the coordinator."""

    def invalidate_by_dependency_tags(self, tags: AbstractSet[str]) -> None:
        """Drop every entry tagged with any of the given dependency tags."""
        ...


class CacheDependenciesProcessor:
    """Computes dependency tags for reads and purges them for writes."""

    def __init__(
        self,
        catalog: ResourceCatalog,
        store: DependencyCacheStore | None = None,
        settings: CacheSettings | None = None,
    ):
        """
        Create a processor.

        Args:
            catalog: Resource catalog used to look up known resource names.
            store: Default cache store for invalidation.
            settings: Engine settings (defaults to `CacheSettings()`).
        """
        self.catalog = catalog
        self.store = store
        self.settings = settings or CacheSettings()

    def resolve_read_dependencies(
        self,
        policy: CachePolicy,
        owner: Hashable,
        command_text: str | None,
    ) -> set[str]:
        """Return the dependency tags to attach to the cached result of a read."""
        known = self.catalog.resolve_resource_names(owner)
        return resolve_dependencies(policy, known, command_text, settings=self.settings)

    def plan_invalidation(
        self,
        command_text: str | None,
        owner: Hashable,
        policy: CachePolicy,
    ) -> set[str] | None:
        """
        Compute the tags a command would purge, without touching any store.

        Returns:
            The purge set (always containing the sentinel) for a mutating
            command, or None for a read.
        """
        if not is_mutating_command(command_text):
            return None

        dependencies = self.resolve_read_dependencies(policy, owner, command_text)
        dependencies.add(UNKNOWN_DEPENDENCY)
        return dependencies

    def invalidate_if_mutating(
        self,
        command_text: str | None,
        owner: Hashable,
        policy: CachePolicy,
        store: DependencyCacheStore | None = None,
    ) -> bool:
        """
        Purge the cache entries affected by a mutating command.

        Must be called after the command took effect.

        Args:
            command_text: Raw text of the executed command.
            owner: Schema owner the command was issued against.
            policy: Cache policy of the command.
            store: Store to purge; defaults to the processor's store.

        Returns:
            True if the command was mutating and the store was purged,
            False for reads.

        Raises:
            ValueError: If no store is available.
            SchemaEnumerationError: If the owner's resources cannot be listed.
            CacheInvalidationError: If the store fails to purge.
        """
        dependencies = self.plan_invalidation(command_text, owner, policy)
        if dependencies is None:
            return False

        target = store if store is not None else self.store
        if target is None:
            raise ValueError("No cache store configured for invalidation.")

        try:
            target.invalidate_by_dependency_tags(dependencies)
        except DepCacheError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise CacheInvalidationError(dependencies, str(exc)) from exc

        if not self.settings.disable_logging:
            logger.debug(
                "Invalidated [%s] dependencies.",
                sorted_tags(dependencies),
                extra={"event": CacheEvent.QUERY_RESULT_INVALIDATED},
            )
        return True
