"""Dependency resolution for cached query results.

Resolution cascades from the most precise answer to the safest one:

  1) known resource names found in the command text
  2) the explicit dependencies declared on the cache policy
  3) the `UnknownDependency` sentinel

so the result is never empty.
"""

from __future__ import annotations

import logging
from typing import AbstractSet

from depcache.core.extractor import extract_candidate_identifiers
from depcache.core.settings import CacheSettings
from depcache.core.tags import UNKNOWN_DEPENDENCY, CachePolicy, sorted_tags

logger = logging.getLogger(__name__)


def _should_log(policy: CachePolicy, settings: CacheSettings | None) -> bool:
    if settings is not None and settings.disable_logging:
        return False
    return policy.log_dependencies


def _log_resolution(
    known: AbstractSet[str],
    candidates: AbstractSet[str],
    dependencies: AbstractSet[str],
) -> None:
    logger.debug(
        "ContextTableNames: %s, PossibleQueryTableNames: %s -> CacheDependencies: %s.",
        sorted_tags(known),
        sorted_tags(candidates),
        sorted_tags(dependencies),
    )


def resolve_dependencies(
    policy: CachePolicy,
    known_resource_names: AbstractSet[str],
    command_text: str | None,
    *,
    settings: CacheSettings | None = None,
) -> set[str]:
    """
    Find the dependency tags of a command.

    Args:
        policy: Cache policy of the query; its explicit dependencies are the
            fallback when no known resource appears in the text.
        known_resource_names: Resource names of the schema owner.
        command_text: Raw command text.
        settings: Engine settings; only used to gate diagnostics.

    Returns:
        A non-empty set of dependency tags.
    """
    log_enabled = _should_log(policy, settings)
    candidates = extract_candidate_identifiers(command_text)

    matched = set(known_resource_names) & candidates
    if matched:
        if log_enabled:
            _log_resolution(known_resource_names, candidates, matched)
        return matched

    dependencies = set(policy.cache_dependencies)
    if not dependencies:
        if log_enabled:
            logger.debug(
                "It's not possible to calculate the related table names of the "
                "current query [%s]. Declare them explicitly with "
                "CachePolicy.with_dependencies('real_table_name_1', ...).",
                command_text,
            )
        dependencies = {UNKNOWN_DEPENDENCY}

    if log_enabled:
        _log_resolution(known_resource_names, candidates, dependencies)
    return dependencies
