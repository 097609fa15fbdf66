"""Common CLI options for the CLI."""

import typer

from depcache.core.tags import CacheExpirationMode

TableOpt = typer.Option(
    [],
    "--table",
    "-t",
    help="Known resource (table) name. This is reusable.",
    show_default=False,
)

DepOpt = typer.Option(
    [],
    "--dep",
    "-d",
    help="Explicit cache dependency used as fallback. This is reusable.",
    show_default=False,
)

SqliteOpt = typer.Option(
    None,
    "--sqlite",
    help="Read known tables from a SQLite database file",
)

UcOpt = typer.Option(
    None,
    "--uc",
    help="Read known tables from a Unity Catalog schema (catalog.schema)",
)

ProfileOpt = typer.Option(
    None,
    "--profile",
    "-p",
    help="Databricks CLI profile (from ~/.databrickscfg), used with --uc",
)

LogLevelOpt = typer.Option(
    None,
    "--log-level",
    help="Logging level (DEBUG shows every resolution). Defaults to DEPCACHE_LOG_LEVEL.",
)

ExpirationOpt = typer.Option(
    CacheExpirationMode.ABSOLUTE,
    "--expiration",
    case_sensitive=False,
    help="Expiration mode the cached entry would be stored with",
)

TimeoutOpt = typer.Option(
    30,
    "--timeout",
    min=1,
    help="Expiration window in minutes",
)
