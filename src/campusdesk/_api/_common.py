"""Shared helpers for API collaborator modules.

This module centralizes payload validation so every collaborator raises
the same error family:
- validating a single record or aggregate
- validating a list of records

It is internal to campusdesk and may change at any time.
"""

from __future__ import annotations

from functools import cache
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from campusdesk.exceptions import CampusApiError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Keys some list endpoints use to wrap their rows.
_LIST_KEYS: tuple[str, ...] = ("items", "results", "rows")


@cache
def _list_adapter(model: type[BaseModel]) -> TypeAdapter[list[Any]]:
    return TypeAdapter(list[model])  # type: ignore[valid-type]


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    detail = first.get("msg", "invalid value")
    return f"{location}: {detail}" if location else detail


def parse_model(model: type[ModelT], payload: Any, *, endpoint: str) -> ModelT:
    """Validate one object payload into *model*."""
    if not isinstance(payload, dict):
        raise CampusApiError(
            f"{endpoint} returned {type(payload).__name__}, expected an object",
            endpoint=endpoint,
        )
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise CampusApiError(
            f"{endpoint} returned an invalid {model.__name__} ({_describe(exc)})",
            endpoint=endpoint,
        ) from exc


def parse_list(model: type[ModelT], payload: Any, *, endpoint: str) -> list[ModelT]:
    """Validate a list payload into a list of *model*, keeping server order."""
    if isinstance(payload, dict):
        for key in _LIST_KEYS:
            if isinstance(payload.get(key), list):
                payload = payload[key]
                break
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise CampusApiError(
            f"{endpoint} returned {type(payload).__name__}, expected a list",
            endpoint=endpoint,
        )
    try:
        records: list[ModelT] = _list_adapter(model).validate_python(payload)
    except ValidationError as exc:
        raise CampusApiError(
            f"{endpoint} returned an invalid {model.__name__} list ({_describe(exc)})",
            endpoint=endpoint,
        ) from exc
    return records
