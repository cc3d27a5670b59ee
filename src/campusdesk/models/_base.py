"""Base models and enum for campus API records.

Every server-owned entity inherits from :class:`Record`, which adds the
server-assigned integer ``id``.  Create payloads inherit from
:class:`Draft`, whose subclasses declare explicit defaults for optional
fields so forms never need runtime fallbacks.

Status-like enums inherit from :class:`CampusEnum`, which adds an
``UNKNOWN`` member and a ``_missing_`` hook so values the server sends
without a mapped member resolve to ``UNKNOWN`` instead of failing
validation of the whole record.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter

JsonBlob = dict[str, Any]
"""Free-form JSON object the store carries without interpreting it."""

_JSON_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


class CampusEnum(enum.StrEnum):
    """Base for string-valued API enums.

    Every subclass **must** define ``UNKNOWN = "unknown"``.
    Lookup is case-insensitive.
    """

    @classmethod
    def _missing_(cls, value: object) -> CampusEnum:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        unknown: CampusEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown

    @property
    def label(self) -> str:
        """Display label, e.g. ``"In Progress"`` for ``in_progress``."""
        return self.value.replace("_", " ").title()


class CampusBaseModel(BaseModel):
    """Base for every model that crosses the API boundary."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )


class Record(CampusBaseModel):
    """A server-owned entity keyed by its server-assigned id."""

    id: int


class Draft(CampusBaseModel):
    """Create payload for a :class:`Record` (everything but ``id``)."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )


class Aggregate(CampusBaseModel):
    """A derived summary (dashboard statistics), replaced wholesale."""


def to_payload(value: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    """Serialize a draft or patch into a JSON-ready dict.

    Drafts are dumped in full, defaults included.  Other models only dump
    the fields that were explicitly set.  Mappings are converted as-is.
    """
    if isinstance(value, Draft):
        return value.model_dump(mode="json")
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_unset=True)
    payload: dict[str, Any] = _JSON_ADAPTER.dump_python(dict(value), mode="json")
    return payload
