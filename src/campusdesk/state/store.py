"""In-memory domain store for one functional area.

A :class:`DomainStore` is the single source of truth for the entities of
one area (transportation, hostel, ...).  It mediates every list, create,
update and delete against an API collaborator and folds the server's
answer into an immutable :class:`StoreSnapshot` through
:func:`~campusdesk.state.reducer.reduce`.

Concurrent calls are not serialized.  When two writes to the same record
overlap, whichever response is processed last wins.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

from campusdesk.exceptions import CampusError, OperationFailed, RecordNotFoundError, StoreClosedError
from campusdesk.models._base import Aggregate, Draft, Record
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
from campusdesk.state.reducer import StoreSnapshot, reduce_all

_logger = logging.getLogger(__name__)

T = TypeVar("T")
RecordT = TypeVar("RecordT", bound=Record)
RecordT_co = TypeVar("RecordT_co", bound=Record, covariant=True)
AggregateT_co = TypeVar("AggregateT_co", bound=Aggregate, covariant=True)

Listener = Callable[[StoreSnapshot], None]
Patch = Mapping[str, Any] | BaseModel


class CollectionSource(Protocol[RecordT_co]):
    """Remote operations for one entity collection."""

    async def list(self, params: Mapping[str, Any] | None = None) -> Sequence[RecordT_co]: ...

    async def get(self, record_id: int) -> RecordT_co: ...

    async def create(self, draft: Draft) -> RecordT_co: ...

    async def update(self, record_id: int, patch: Patch) -> RecordT_co: ...

    async def delete(self, record_id: int) -> None: ...


class AggregateSource(Protocol[AggregateT_co]):
    """Remote fetch of the area's dashboard aggregate."""

    async def fetch(self) -> AggregateT_co: ...


@dataclass(frozen=True, slots=True)
class Collection:
    """A named entity collection bound to its remote source.

    ``label`` is the singular display name used in fallback error messages
    (``"Failed to create vehicle"``); ``plural`` defaults to ``name`` with
    dashes and underscores turned into spaces.
    """

    name: str
    source: CollectionSource[Record]
    label: str
    plural: str = ""

    @property
    def plural_label(self) -> str:
        return self.plural or self.name.replace("_", " ").replace("-", " ")


class DomainStore:
    """Normalized cache of one area's server-owned entities.

    Reads (:meth:`list`, :meth:`refresh_aggregate`) record failures in
    ``error`` and never raise.  Writes (:meth:`create`, :meth:`update`,
    :meth:`remove`) record failures in ``error`` *and* raise
    :class:`~campusdesk.exceptions.OperationFailed`, so a form can stay open
    and show the message.

    Usage::

        store = client.transportation()
        unsubscribe = store.subscribe(render)
        await store.list("vehicles")
        ...
        store.close()
    """

    def __init__(
        self,
        area: str,
        collections: Sequence[Collection],
        *,
        aggregate: AggregateSource[Aggregate] | None = None,
        aggregate_label: str = "dashboard stats",
    ) -> None:
        self._area = area
        self._collections: dict[str, Collection] = {}
        for collection in collections:
            if collection.name in self._collections:
                raise ValueError(f"duplicate collection {collection.name!r} in {area} store")
            self._collections[collection.name] = collection
        self._aggregate_source = aggregate
        self._aggregate_label = aggregate_label
        self._snapshot = StoreSnapshot.empty(self._collections)
        self._listeners: list[Listener] = []
        self._pending = 0
        self._closed = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def area(self) -> str:
        return self._area

    @property
    def snapshot(self) -> StoreSnapshot:
        """The current immutable snapshot."""
        return self._snapshot

    @property
    def loading(self) -> bool:
        return self._snapshot.loading

    @property
    def error(self) -> str | None:
        return self._snapshot.error

    @property
    def aggregate(self) -> Aggregate | None:
        return self._snapshot.aggregate

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def collection_names(self) -> tuple[str, ...]:
        return tuple(self._collections)

    def records(self, name: str) -> tuple[Record, ...]:
        self._collection(name)
        return self._snapshot.records(name)

    def get(self, name: str, record_id: int) -> Record | None:
        self._collection(name)
        return self._snapshot.get(name, record_id)

    # ------------------------------------------------------------------
    # Subscriptions and lifecycle
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new snapshot; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def close(self) -> None:
        """Tear the store down.

        Results of calls still in flight are dropped when they resolve; the
        calls themselves still return or raise to their callers.
        """
        if self._closed:
            return
        # Late results are dropped, so loading is settled here.
        self._commit(SetLoading(loading=False))
        self._closed = True
        self._listeners.clear()
        _logger.debug("%s store closed with %d call(s) in flight", self._area, self._pending)

    async def __aenter__(self) -> DomainStore:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def list(self, name: str, params: Mapping[str, Any] | None = None) -> None:
        """Replace collection *name* wholesale with the server's list.

        *params* are passed through as query filters.
        """
        collection = self._collection(name)

        def _reconcile(records: Sequence[Record]) -> Sequence[StoreAction]:
            return [SetCollection(collection=name, records=tuple(records))]

        try:
            await self._execute(
                f"list {name}",
                lambda: collection.source.list(params),
                _reconcile,
                fallback=f"Failed to fetch {collection.plural_label}",
            )
        except OperationFailed:
            # Recorded in ``error``; reads never raise.
            return

    async def create(self, name: str, draft: Draft) -> Record:
        """Create a record and append the server's copy to collection *name*."""
        collection = self._collection(name)
        return await self._execute(
            f"create {name}",
            lambda: collection.source.create(draft),
            lambda record: [AppendRecord(collection=name, record=record)],
            fallback=f"Failed to create {collection.label}",
        )

    async def update(self, name: str, record_id: int, patch: Patch) -> Record:
        """Send *patch* and replace the local record with the server's result.

        Raises
        ------
        RecordNotFoundError
            Before any remote call, if *record_id* is not in the collection.
        OperationFailed
            If the remote call fails.
        """
        collection = self._collection(name)
        return await self.replace_from(
            name,
            record_id,
            lambda: collection.source.update(record_id, patch),
            operation=f"update {name}",
            fallback=f"Failed to update {collection.label}",
        )

    async def remove(self, name: str, record_id: int) -> None:
        """Delete a record; removing an id that is already gone is a no-op."""
        collection = self._collection(name)
        await self._execute(
            f"remove {name}",
            lambda: collection.source.delete(record_id),
            lambda _result: [RemoveRecord(collection=name, record_id=record_id)],
            fallback=f"Failed to delete {collection.label}",
        )

    async def refresh_aggregate(self) -> None:
        """Replace the aggregate wholesale with a fresh server computation."""
        source = self._aggregate_source
        if source is None:
            raise TypeError(f"{self._area} store has no aggregate source")
        try:
            await self._execute(
                "refresh aggregate",
                source.fetch,
                lambda aggregate: [SetAggregate(aggregate=aggregate)],
                fallback=f"Failed to fetch {self._aggregate_label}",
            )
        except OperationFailed:
            return

    # ------------------------------------------------------------------
    # Building blocks for area stores
    # ------------------------------------------------------------------

    async def replace_from(
        self,
        name: str,
        record_id: int,
        call: Callable[[], Awaitable[RecordT]],
        *,
        operation: str,
        fallback: str,
    ) -> RecordT:
        """Run a remote call that returns the full, updated record *record_id*.

        Used by :meth:`update` and by endpoints such as status changes that
        answer with the updated record.
        """
        self._collection(name)
        self._ensure_open(operation)
        if not self._snapshot.contains(name, record_id):
            not_found = RecordNotFoundError(name, record_id)
            _logger.warning("%s: %s", self._area, not_found.message)
            self._commit(SetError(error=not_found.message))
            raise not_found
        return await self._execute(
            operation,
            call,
            lambda record: [ReplaceRecord(collection=name, record=record)],
            fallback=fallback,
        )

    async def fetch_one(
        self,
        name: str,
        call: Callable[[], Awaitable[RecordT]],
        *,
        operation: str,
        fallback: str,
    ) -> RecordT | None:
        """Read a single record and fold it into collection *name*.

        Like :meth:`list`, failures only land in ``error``; ``None`` is
        returned instead.
        """
        self._collection(name)
        return await self.read(
            call,
            operation=operation,
            fallback=fallback,
            reconcile=lambda record: [ReplaceRecord(collection=name, record=record)],
        )

    async def refresh_record(self, name: str, record_id: int) -> Record | None:
        """Re-read one record by id and replace (or append) the local copy."""
        collection = self._collection(name)
        return await self.fetch_one(
            name,
            lambda: collection.source.get(record_id),
            operation=f"get {name}",
            fallback=f"Failed to fetch {collection.label}",
        )

    async def read(
        self,
        call: Callable[[], Awaitable[T]],
        *,
        operation: str,
        fallback: str,
        reconcile: Callable[[T], Sequence[StoreAction]] | None = None,
    ) -> T | None:
        """Run a read-only remote call with the store's loading/error bookkeeping.

        Returns ``None`` when the call fails; the message is kept in ``error``.
        """
        try:
            return await self._execute(
                operation,
                call,
                reconcile or (lambda _result: []),
                fallback=fallback,
            )
        except OperationFailed:
            return None

    async def create_then_refresh(
        self,
        refresh: str,
        call: Callable[[], Awaitable[T]],
        *,
        operation: str,
        fallback: str,
    ) -> T:
        """Run a create whose result lives inside another collection, then re-list it.

        A failed create raises; a failed refresh is only recorded in ``error``.
        """
        self._collection(refresh)
        result = await self._execute(operation, call, lambda _result: [], fallback=fallback)
        await self.list(refresh)
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _collection(self, name: str) -> Collection:
        try:
            return self._collections[name]
        except KeyError:
            raise KeyError(f"{self._area} store has no collection {name!r}") from None

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise StoreClosedError(f"{self._area} store is closed", operation=operation)

    async def _execute(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        reconcile: Callable[[T], Sequence[StoreAction]],
        *,
        fallback: str,
    ) -> T:
        self._ensure_open(operation)
        _logger.debug("%s: %s", self._area, operation)
        self._pending += 1
        self._commit(SetLoading(loading=True), SetError(error=None))
        try:
            result = await call()
        except CampusError as exc:
            message = str(exc).strip() or fallback
            _logger.warning("%s: %s failed: %s", self._area, operation, message)
            self._settle(SetError(error=message))
            raise OperationFailed(message, operation=operation) from exc
        except Exception as exc:
            _logger.exception("%s: %s failed unexpectedly", self._area, operation)
            self._settle(SetError(error=fallback))
            raise OperationFailed(fallback, operation=operation) from exc
        except BaseException:
            self._settle()
            raise
        self._settle(*reconcile(result), SetError(error=None))
        return result

    def _settle(self, *actions: StoreAction) -> None:
        self._pending -= 1
        self._commit(*actions, SetLoading(loading=self._pending > 0))

    def _commit(self, *actions: StoreAction) -> None:
        if self._closed:
            return
        previous = self._snapshot
        self._snapshot = reduce_all(previous, actions)
        if self._snapshot is previous:
            return
        for listener in list(self._listeners):
            try:
                listener(self._snapshot)
            except Exception:
                _logger.exception("%s store listener failed", self._area)
