"""Resolution context for the CLI: where known tables come from."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Hashable

from depcache.cli.common.exits import die
from depcache.core.adapters.sqlite import SqliteSchemaEnumerator
from depcache.core.adapters.unitycatalog import (
    DatabricksAuthError,
    UnityCatalogSchemaEnumerator,
    parse_schema_owner,
    workspace_client,
)
from depcache.core.catalog import ResourceCatalog, StaticSchemaEnumerator
from depcache.core.invalidation import CacheDependenciesProcessor
from depcache.core.settings import CacheSettings

_CLI_OWNER = "cli"


@dataclass
class ResolveContext:
    """Schema owner plus the processor bound to its resource catalog."""

    owner: Hashable
    processor: CacheDependenciesProcessor


def build_resolve_context(
    *,
    tables: list[str],
    sqlite: Path | None,
    uc: str | None,
    profile: str | None,
    settings: CacheSettings,
) -> ResolveContext:
    """Build the catalog from exactly one source of known tables.

    `--table` values are used when neither `--sqlite` nor `--uc` is given.
    """
    if sqlite and uc:
        die("Use either --sqlite or --uc, not both.", code=2)

    if sqlite:
        if tables:
            die("--table cannot be combined with --sqlite.", code=2)
        owner: Hashable = str(sqlite)
        catalog = ResourceCatalog(SqliteSchemaEnumerator())
    elif uc:
        if tables:
            die("--table cannot be combined with --uc.", code=2)
        try:
            catalog_name, schema_name = parse_schema_owner(uc)
        except ValueError as exc:
            die(str(exc), code=2)
        try:
            client = workspace_client(profile)
        except DatabricksAuthError as exc:
            die(str(exc), code=1)
        owner = f"{catalog_name}.{schema_name}"
        catalog = ResourceCatalog(UnityCatalogSchemaEnumerator(client))
    else:
        owner = _CLI_OWNER
        catalog = ResourceCatalog(StaticSchemaEnumerator({_CLI_OWNER: tables}))

    processor = CacheDependenciesProcessor(catalog, settings=settings)
    return ResolveContext(owner=owner, processor=processor)
