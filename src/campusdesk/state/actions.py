"""Store actions.

Every change to a :class:`~campusdesk.state.reducer.StoreSnapshot` is
expressed as one of these tagged actions and folded by
:func:`~campusdesk.state.reducer.reduce`.  Only the store dispatches them.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from campusdesk.models._base import Aggregate, Record


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SetLoading(_Action):
    kind: Literal["set_loading"] = "set_loading"
    loading: bool


class SetError(_Action):
    kind: Literal["set_error"] = "set_error"
    error: str | None = None


class SetCollection(_Action):
    """Wholesale replace of one collection, in server order."""

    kind: Literal["set_collection"] = "set_collection"
    collection: str
    records: tuple[Record, ...]


class AppendRecord(_Action):
    kind: Literal["append_record"] = "append_record"
    collection: str
    record: Record


class ReplaceRecord(_Action):
    kind: Literal["replace_record"] = "replace_record"
    collection: str
    record: Record


class RemoveRecord(_Action):
    kind: Literal["remove_record"] = "remove_record"
    collection: str
    record_id: int


class SetAggregate(_Action):
    kind: Literal["set_aggregate"] = "set_aggregate"
    aggregate: Aggregate | None


StoreAction = Annotated[
    SetLoading | SetError | SetCollection | AppendRecord | ReplaceRecord | RemoveRecord | SetAggregate,
    Field(discriminator="kind"),
]
