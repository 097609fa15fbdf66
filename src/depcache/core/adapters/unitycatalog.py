"""Unity Catalog schema enumeration and client setup.

Unity Catalog schemas are addressed as `catalog.schema`; their tables are
listed through the Databricks SDK and reduced to their short names, which is
what appears after FROM/JOIN/INTO/UPDATE once qualifiers are stripped.
"""

from __future__ import annotations

from typing import Hashable

from databricks.sdk import WorkspaceClient
from databricks.sdk.core import Config

from depcache.core.errors import DepCacheError


class DatabricksAuthError(DepCacheError):
    """Raised when a Databricks workspace client cannot be configured."""


def _sanitize_host(host: str | None) -> str | None:
    """Drop query strings (e.g. '?o=123') and trailing slashes from a host URL."""
    if not host:
        return host
    return host.split("?", 1)[0].rstrip("/")


def workspace_client(profile: str | None = None) -> WorkspaceClient:
    """
    Create a WorkspaceClient from the Databricks unified configuration.

    The profile is resolved from ~/.databrickscfg or environment variables.
    """
    try:
        cfg = Config(profile=profile) if profile else Config()
    except ValueError as exc:
        message = f"Databricks authentication failed: {exc}"
        if "databricks auth login" in str(exc):
            cmd = "databricks auth login"
            if profile:
                cmd = f"{cmd} --profile {profile}"
            message = (
                "Databricks authentication failed. Your refresh token is invalid.\n"
                f"Re-authenticate with:\n  $ {cmd}"
            )
        raise DatabricksAuthError(message) from exc
    cfg.host = _sanitize_host(cfg.host)
    return WorkspaceClient(config=cfg)


def parse_schema_owner(owner: Hashable) -> tuple[str, str]:
    """Split a `catalog.schema` owner into (catalog, schema)."""
    parts = str(owner).strip().split(".")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Unity Catalog owner must be in the form `catalog.schema`.")
    return parts[0], parts[1]


class UnityCatalogSchemaEnumerator:
    """Enumerator around the Databricks SDK Unity Catalog tables API."""

    def __init__(self, client: WorkspaceClient) -> None:
        self.client = client

    def list_resource_names(self, owner: Hashable) -> list[str]:
        """List the short table names of a `catalog.schema` owner."""
        catalog, schema = parse_schema_owner(owner)
        out: list[str] = []
        for t in self.client.tables.list(catalog_name=catalog, schema_name=schema):
            name = getattr(t, "name", None)
            full_name = getattr(t, "full_name", None)
            if not name and full_name:
                name = full_name.split(".")[-1]
            if not name:
                continue
            out.append(name)
        return out
