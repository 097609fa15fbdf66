import logging

import pytest

from depcache.core.catalog import ResourceCatalog, StaticSchemaEnumerator
from depcache.core.errors import CacheInvalidationError, SchemaEnumerationError
from depcache.core.invalidation import CacheDependenciesProcessor, CacheEvent
from depcache.core.settings import CacheSettings
from depcache.core.tags import UNKNOWN_DEPENDENCY, CachePolicy

OWNER = "BlogDb"


class _TaggedStore:
    """Minimal tag-indexed store, standing in for the external cache."""

    def __init__(self):
        self.entries: dict[str, tuple[object, set[str]]] = {}
        self.invalidations: list[set[str]] = []

    def set(self, key: str, value: object, tags: set[str]) -> None:
        self.entries[key] = (value, set(tags))

    def get(self, key: str):
        entry = self.entries.get(key)
        return None if entry is None else entry[0]

    def invalidate_by_dependency_tags(self, tags) -> None:
        self.invalidations.append(set(tags))
        self.entries = {
            k: (v, entry_tags)
            for k, (v, entry_tags) in self.entries.items()
            if not entry_tags & set(tags)
        }


def _processor(store=None, settings=None, names=("Products", "Users")):
    catalog = ResourceCatalog(StaticSchemaEnumerator({OWNER: names}))
    return CacheDependenciesProcessor(catalog, store=store, settings=settings)


def test_read_command_is_not_invalidated():
    store = _TaggedStore()

    assert _processor(store).invalidate_if_mutating("SELECT * FROM Products", OWNER, CachePolicy()) is False
    assert store.invalidations == []


def test_read_command_does_not_touch_catalog():
    def _boom(owner):
        raise AssertionError("catalog must not be consulted for reads")

    processor = CacheDependenciesProcessor(ResourceCatalog(_boom), store=_TaggedStore())

    assert processor.invalidate_if_mutating("SELECT 1", OWNER, CachePolicy()) is False


def test_invalidation_always_includes_sentinel():
    store = _TaggedStore()

    done = _processor(store).invalidate_if_mutating(
        "UPDATE [dbo].[Products] SET Name = 'x' WHERE Id = 1", OWNER, CachePolicy()
    )

    assert done is True
    assert store.invalidations == [{"Products", UNKNOWN_DEPENDENCY}]


def test_unresolvable_write_purges_sentinel_only():
    store = _TaggedStore()

    _processor(store).invalidate_if_mutating("DELETE FROM Audit", OWNER, CachePolicy())

    assert store.invalidations == [{UNKNOWN_DEPENDENCY}]


def test_write_uses_explicit_dependencies_when_no_table_matches():
    store = _TaggedStore()
    policy = CachePolicy.with_dependencies("Orders")

    _processor(store).invalidate_if_mutating("DELETE FROM Audit", OWNER, policy)

    assert store.invalidations == [{"Orders", UNKNOWN_DEPENDENCY}]


def test_store_argument_overrides_default_store():
    default, override = _TaggedStore(), _TaggedStore()

    _processor(default).invalidate_if_mutating(
        "INSERT INTO Users (Id) VALUES (1)", OWNER, CachePolicy(), store=override
    )

    assert default.invalidations == []
    assert override.invalidations == [{"Users", UNKNOWN_DEPENDENCY}]


def test_missing_store_is_an_error_for_writes():
    with pytest.raises(ValueError, match="No cache store"):
        _processor().invalidate_if_mutating("DELETE FROM Users", OWNER, CachePolicy())


def test_store_failure_is_surfaced():
    class _DownStore:
        def invalidate_by_dependency_tags(self, tags):
            raise ConnectionError("store unavailable")

    with pytest.raises(CacheInvalidationError, match="store unavailable") as exc_info:
        _processor(_DownStore()).invalidate_if_mutating(
            "DELETE FROM Users", OWNER, CachePolicy()
        )

    assert exc_info.value.tags == frozenset({"Users", UNKNOWN_DEPENDENCY})
    assert isinstance(exc_info.value.__cause__, ConnectionError)


def test_schema_enumeration_failure_propagates():
    def _broken(owner):
        raise RuntimeError("no such database")

    processor = CacheDependenciesProcessor(ResourceCatalog(_broken), store=_TaggedStore())

    with pytest.raises(SchemaEnumerationError):
        processor.invalidate_if_mutating("DELETE FROM Users", OWNER, CachePolicy())


def test_plan_invalidation_leaves_store_untouched():
    store = _TaggedStore()
    processor = _processor(store)

    assert processor.plan_invalidation("SELECT * FROM Users", OWNER, CachePolicy()) is None
    assert processor.plan_invalidation("DELETE FROM Users", OWNER, CachePolicy()) == {
        "Users",
        UNKNOWN_DEPENDENCY,
    }
    assert store.invalidations == []


def test_invalidation_is_logged_with_event(caplog):
    caplog.set_level(logging.DEBUG, logger="depcache.core.invalidation")

    _processor(_TaggedStore()).invalidate_if_mutating("DELETE FROM Users", OWNER, CachePolicy())

    records = [r for r in caplog.records if r.name == "depcache.core.invalidation"]
    assert [r.getMessage() for r in records] == [
        f"Invalidated [{UNKNOWN_DEPENDENCY}, Users] dependencies."
    ]
    assert records[0].event == CacheEvent.QUERY_RESULT_INVALIDATED


def test_disabled_logging_still_invalidates(caplog):
    caplog.set_level(logging.DEBUG, logger="depcache")
    store = _TaggedStore()

    _processor(store, settings=CacheSettings(disable_logging=True)).invalidate_if_mutating(
        "DELETE FROM Users", OWNER, CachePolicy()
    )

    assert store.invalidations == [{"Users", UNKNOWN_DEPENDENCY}]
    assert [r for r in caplog.records if r.name.startswith("depcache.core.invalidation")] == []


def test_end_to_end_write_turns_cached_read_into_miss():
    store = _TaggedStore()
    processor = _processor(store)
    policy = CachePolicy()
    read = "SELECT * FROM Products"

    tags = processor.resolve_read_dependencies(policy, OWNER, read)
    assert tags == {"Products"}
    store.set(read, ["Product1"], tags)
    assert store.get(read) == ["Product1"]

    processor.invalidate_if_mutating(
        "INSERT INTO Products (Name, IsActive)\nVALUES ('Product2', 1)", OWNER, policy
    )

    assert store.invalidations == [{"Products", UNKNOWN_DEPENDENCY}]
    assert store.get(read) is None


def test_unrelated_write_keeps_resolved_entries_but_purges_unknown_ones():
    store = _TaggedStore()
    processor = _processor(store)
    policy = CachePolicy()
    users_read = "SELECT * FROM Users"
    proc_read = "usp_GetBlogData 1"

    store.set(users_read, ["u1"], processor.resolve_read_dependencies(policy, OWNER, users_read))
    store.set(proc_read, ["b1"], processor.resolve_read_dependencies(policy, OWNER, proc_read))

    processor.invalidate_if_mutating("INSERT INTO Products (Name) VALUES ('p')", OWNER, policy)

    assert store.get(users_read) == ["u1"]
    assert store.get(proc_read) is None
