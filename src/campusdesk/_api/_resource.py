"""Generic REST collaborators.

A :class:`RestResource` maps the store's collection contract onto the
conventional endpoints of one resource path::

    GET    /hostel/rooms        -> list
    GET    /hostel/rooms/{id}   -> get
    POST   /hostel/rooms        -> create
    PUT    /hostel/rooms/{id}   -> update
    DELETE /hostel/rooms/{id}   -> delete
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from campusdesk._api._common import parse_list, parse_model
from campusdesk._transport import Transport
from campusdesk.models._base import Aggregate, Draft, Record, to_payload

RecordT = TypeVar("RecordT", bound=Record)
AggregateT = TypeVar("AggregateT", bound=Aggregate)


class RestResource(Generic[RecordT]):
    """CRUD collaborator for records of type *model* under *path*."""

    def __init__(self, transport: Transport, path: str, model: type[RecordT]) -> None:
        self._transport = transport
        self._path = path
        self._model = model

    @property
    def path(self) -> str:
        return self._path

    def _item(self, record_id: int, suffix: str = "") -> str:
        return f"{self._path}/{record_id}{suffix}"

    async def list(self, params: Mapping[str, Any] | None = None) -> Sequence[RecordT]:
        payload = await self._transport.request("GET", self._path, params=params)
        return parse_list(self._model, payload, endpoint=self._path)

    async def get(self, record_id: int) -> RecordT:
        endpoint = self._item(record_id)
        payload = await self._transport.request("GET", endpoint)
        return parse_model(self._model, payload, endpoint=endpoint)

    async def create(self, draft: Draft | Mapping[str, Any]) -> RecordT:
        payload = await self._transport.request("POST", self._path, json_body=to_payload(draft))
        return parse_model(self._model, payload, endpoint=self._path)

    async def update(self, record_id: int, patch: BaseModel | Mapping[str, Any]) -> RecordT:
        endpoint = self._item(record_id)
        payload = await self._transport.request("PUT", endpoint, json_body=to_payload(patch))
        return parse_model(self._model, payload, endpoint=endpoint)

    async def delete(self, record_id: int) -> None:
        await self._transport.request("DELETE", self._item(record_id))

    async def patch_action(
        self,
        record_id: int,
        action: str,
        body: Mapping[str, Any] | None = None,
    ) -> RecordT:
        """``PATCH {path}/{id}/{action}`` for endpoints that return the updated record."""
        endpoint = self._item(record_id, f"/{action}")
        payload = await self._transport.request(
            "PATCH",
            endpoint,
            json_body=dict(body) if body is not None else None,
        )
        return parse_model(self._model, payload, endpoint=endpoint)


class RestAggregate(Generic[AggregateT]):
    """Fetches a dashboard aggregate from *path*."""

    def __init__(self, transport: Transport, path: str, model: type[AggregateT]) -> None:
        self._transport = transport
        self._path = path
        self._model = model

    async def fetch(self) -> AggregateT:
        payload = await self._transport.request("GET", self._path)
        return parse_model(self._model, payload, endpoint=self._path)
