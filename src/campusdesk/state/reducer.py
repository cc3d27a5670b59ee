"""Snapshot type and the pure state transition function."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from campusdesk.models._base import Aggregate, Record
from campusdesk.state.actions import (
    AppendRecord,
    RemoveRecord,
    ReplaceRecord,
    SetAggregate,
    SetCollection,
    SetError,
    SetLoading,
    StoreAction,
)


@dataclasses.dataclass(frozen=True, slots=True)
class StoreSnapshot:
    """Immutable state of one store at one instant.

    ``collections`` maps a collection name to its records in server order.
    Records that an action did not touch keep their identity across
    snapshots, so views can compare with ``is``.
    """

    collections: Mapping[str, tuple[Record, ...]] = dataclasses.field(
        default_factory=lambda: MappingProxyType({})
    )
    aggregate: Aggregate | None = None
    loading: bool = False
    error: str | None = None

    @classmethod
    def empty(cls, names: Iterable[str]) -> StoreSnapshot:
        return cls(collections=MappingProxyType({name: () for name in names}))

    def records(self, name: str) -> tuple[Record, ...]:
        return self.collections.get(name, ())

    def get(self, name: str, record_id: int) -> Record | None:
        for record in self.records(name):
            if record.id == record_id:
                return record
        return None

    def contains(self, name: str, record_id: int) -> bool:
        return self.get(name, record_id) is not None


def _with_collection(state: StoreSnapshot, name: str, records: tuple[Record, ...]) -> StoreSnapshot:
    collections = dict(state.collections)
    collections[name] = records
    return dataclasses.replace(state, collections=MappingProxyType(collections))


def _dedupe(records: Iterable[Record]) -> tuple[Record, ...]:
    """Keep the last record per id, at the position of its first occurrence."""
    latest: dict[int, Record] = {}
    for record in records:
        latest[record.id] = record
    return tuple(latest.values())


def _replace_or_append(records: tuple[Record, ...], record: Record) -> tuple[Record, ...]:
    replaced = False
    result: list[Record] = []
    for existing in records:
        if existing.id == record.id:
            result.append(record)
            replaced = True
        else:
            result.append(existing)
    if not replaced:
        result.append(record)
    return tuple(result)


def reduce(state: StoreSnapshot, action: StoreAction) -> StoreSnapshot:
    """Return the snapshot that results from applying *action* to *state*.

    Pure: *state* is never modified.  Every collection keeps at most one
    record per id.
    """
    match action:
        case SetLoading(loading=loading):
            if loading == state.loading:
                return state
            return dataclasses.replace(state, loading=loading)
        case SetError(error=error):
            if error == state.error:
                return state
            return dataclasses.replace(state, error=error)
        case SetCollection(collection=name, records=records):
            return _with_collection(state, name, _dedupe(records))
        case AppendRecord(collection=name, record=record) | ReplaceRecord(collection=name, record=record):
            # A create answered with an existing id replaces instead of duplicating.
            return _with_collection(state, name, _replace_or_append(state.records(name), record))
        case RemoveRecord(collection=name, record_id=record_id):
            current = state.records(name)
            remaining = tuple(record for record in current if record.id != record_id)
            if len(remaining) == len(current):
                return state
            return _with_collection(state, name, remaining)
        case SetAggregate(aggregate=aggregate):
            return dataclasses.replace(state, aggregate=aggregate)
    raise TypeError(f"Unknown store action: {action!r}")


def reduce_all(state: StoreSnapshot, actions: Iterable[StoreAction]) -> StoreSnapshot:
    for action in actions:
        state = reduce(state, action)
    return state
