"""Commands for inspecting how commands are classified and tagged."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import typer

from depcache.cli.common.context import ResolveContext, build_resolve_context
from depcache.cli.common.exits import exit_from_exc, warn_exit
from depcache.cli.common.options import (
    DepOpt,
    ExpirationOpt,
    ProfileOpt,
    SqliteOpt,
    TableOpt,
    TimeoutOpt,
    UcOpt,
)
from depcache.cli.common.output import out
from depcache.core.classifier import is_mutating_command
from depcache.core.errors import SchemaEnumerationError
from depcache.core.extractor import extract_candidate_identifiers
from depcache.core.settings import CacheSettings
from depcache.core.tags import UNKNOWN_DEPENDENCY, CacheExpirationMode, CachePolicy

TextArg = typer.Argument(..., help="Command text, e.g. \"SELECT * FROM Products\"")


def _context(
    ctx: typer.Context,
    *,
    table: list[str],
    sqlite: Path | None,
    uc: str | None,
    profile: str | None,
) -> ResolveContext:
    settings: CacheSettings = ctx.obj or CacheSettings()
    return build_resolve_context(
        tables=table, sqlite=sqlite, uc=uc, profile=profile, settings=settings
    )


def _load_known(rctx: ResolveContext) -> frozenset[str]:
    try:
        with out.status("Loading known tables..."):
            return rctx.processor.catalog.resolve_resource_names(rctx.owner)
    except SchemaEnumerationError as exc:
        exit_from_exc(exc, message=str(exc), code=1)


def classify(text: str = TextArg):
    """
    Tell whether a command is mutating (insert/update/delete/create).
    """
    if is_mutating_command(text):
        out.success("Mutating command: dependent cache entries are invalidated.")
    else:
        out.info("Read command: nothing is invalidated.")


def resolve(
    ctx: typer.Context,
    text: str = TextArg,
    table: list[str] = TableOpt,
    dep: list[str] = DepOpt,
    sqlite: Path | None = SqliteOpt,
    uc: str | None = UcOpt,
    profile: str | None = ProfileOpt,
    expiration: CacheExpirationMode = ExpirationOpt,
    timeout: int = TimeoutOpt,
):
    """
    Show the dependency tags a cached read would be tagged with.
    """
    rctx = _context(ctx, table=table, sqlite=sqlite, uc=uc, profile=profile)
    known = _load_known(rctx)
    policy = CachePolicy.with_dependencies(
        *dep, expiration_mode=expiration, timeout=timedelta(minutes=timeout)
    )

    dependencies = rctx.processor.resolve_read_dependencies(policy, rctx.owner, text)

    out.resolution_table(known, extract_candidate_identifiers(text), dependencies)
    out.kv({"Expiration": policy.expiration_mode.value, "Timeout": policy.timeout})
    if UNKNOWN_DEPENDENCY in dependencies:
        out.warn(
            "No known table found: this entry is purged by every write. "
            "Use --dep to declare its dependencies."
        )


def plan(
    ctx: typer.Context,
    text: str = TextArg,
    table: list[str] = TableOpt,
    dep: list[str] = DepOpt,
    sqlite: Path | None = SqliteOpt,
    uc: str | None = UcOpt,
    profile: str | None = ProfileOpt,
):
    """
    Show which dependency tags a write would invalidate.
    """
    rctx = _context(ctx, table=table, sqlite=sqlite, uc=uc, profile=profile)
    policy = CachePolicy.with_dependencies(*dep)

    try:
        purged = rctx.processor.plan_invalidation(text, rctx.owner, policy)
    except SchemaEnumerationError as exc:
        exit_from_exc(exc, message=str(exc), code=1)

    if purged is None:
        warn_exit("Read command: nothing would be invalidated.", code=0)

    out.header("Invalidation plan")
    out.tags_table(purged, title="Invalidated tags")
