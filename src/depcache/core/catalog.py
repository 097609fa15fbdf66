"""Resource catalog: the known resource names of each schema owner.

A schema owner is any hashable handle for "this data model" (a model class,
a database path, a `catalog.schema` name). Its resource names are listed once
through a schema enumerator and then shared read-only for the lifetime of the
catalog, since the schema is assumed static while the process runs.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Hashable, Iterable, Mapping, Protocol, Union

from depcache.core.errors import SchemaEnumerationError

logger = logging.getLogger(__name__)


class SchemaEnumerator(Protocol):
    """Interface for listing the resource names of a schema owner."""

    def list_resource_names(self, owner: Hashable) -> Iterable[str]:
        """Return the resource (table) names declared by the owner."""
        ...


EnumeratorLike = Union[SchemaEnumerator, Callable[[Hashable], Iterable[str]]]


class StaticSchemaEnumerator:
    """Enumerator backed by a fixed mapping of owner -> resource names."""

    def __init__(self, resources: Mapping[Hashable, Iterable[str]]):
        self._resources = {owner: tuple(names) for owner, names in resources.items()}

    def list_resource_names(self, owner: Hashable) -> Iterable[str]:
        """Return the configured names; unknown owners are a setup error."""
        try:
            return self._resources[owner]
        except KeyError:
            raise LookupError(f"No resources registered for {owner!r}") from None


@dataclass
class _CatalogCell:
    """Compute-once slot for one schema owner."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    names: frozenset[str] | None = None


class ResourceCatalog:
    """
    Memoized resource names per schema owner.

    Concurrent first callers for the same owner wait on a per-owner lock, so
    the enumerator runs once and every caller observes the same set. A failed
    enumeration is not memoized.
    """

    def __init__(self, enumerator: EnumeratorLike):
        """
        Create a catalog.

        Args:
            enumerator: Object exposing `list_resource_names(owner)`, or a
                plain callable taking the owner.
        """
        if hasattr(enumerator, "list_resource_names"):
            self._enumerate = enumerator.list_resource_names
        elif callable(enumerator):
            self._enumerate = enumerator
        else:
            raise TypeError("enumerator must be callable or expose list_resource_names()")
        self._lock = threading.Lock()
        self._cells: dict[Hashable, _CatalogCell] = {}

    def _cell_for(self, owner: Hashable) -> _CatalogCell:
        cell = self._cells.get(owner)
        if cell is None:
            with self._lock:
                cell = self._cells.setdefault(owner, _CatalogCell())
        return cell

    def _compute(self, owner: Hashable) -> frozenset[str]:
        try:
            raw = list(self._enumerate(owner))
            names = frozenset(n.strip() for n in raw if n and n.strip())
        except SchemaEnumerationError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise SchemaEnumerationError(owner, str(exc)) from exc

        logger.debug("Resolved %d resource name(s) for %r.", len(names), owner)
        return names

    def resolve_resource_names(self, owner: Hashable) -> frozenset[str]:
        """
        Return the resource names of a schema owner, listing them on first use.

        Raises:
            SchemaEnumerationError: If the enumerator fails.
        """
        cell = self._cell_for(owner)
        names = cell.names
        if names is not None:
            return names

        with cell.lock:
            if cell.names is None:
                cell.names = self._compute(owner)
            return cell.names

    def clear(self) -> None:
        """Forget every memoized owner."""
        with self._lock:
            self._cells.clear()

    def __contains__(self, owner: Hashable) -> bool:
        cell = self._cells.get(owner)
        return cell is not None and cell.names is not None

    def __len__(self) -> int:
        return sum(1 for cell in list(self._cells.values()) if cell.names is not None)
