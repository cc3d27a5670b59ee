from __future__ import annotations

import pytest
from pydantic import TypeAdapter

from campusdesk.models.transportation import TransportDashboardStats, Vehicle
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
from campusdesk.state.reducer import StoreSnapshot, reduce, reduce_all


def _vehicle(vehicle_id: int, name: str = "Bus") -> Vehicle:
    return Vehicle(id=vehicle_id, name=f"{name} {vehicle_id}", vehicle_no=f"KA01AB{vehicle_id:04d}")


def _state(*vehicles: Vehicle) -> StoreSnapshot:
    state = StoreSnapshot.empty(["vehicles", "drivers"])
    return reduce(state, SetCollection(collection="vehicles", records=vehicles))


def _ids(state: StoreSnapshot) -> list[int]:
    return [record.id for record in state.records("vehicles")]


def test_empty_snapshot_has_every_collection() -> None:
    state = StoreSnapshot.empty(["vehicles", "drivers"])
    assert state.records("vehicles") == ()
    assert state.records("drivers") == ()
    assert state.aggregate is None
    assert state.loading is False
    assert state.error is None


def test_set_collection_keeps_server_order() -> None:
    state = _state(_vehicle(3), _vehicle(1), _vehicle(2))
    assert _ids(state) == [3, 1, 2]


def test_set_collection_collapses_duplicate_ids_to_last() -> None:
    first = _vehicle(1, "Old")
    last = _vehicle(1, "New")
    state = _state(first, _vehicle(2), last)
    assert _ids(state) == [1, 2]
    assert state.get("vehicles", 1) is last


def test_append_adds_at_end() -> None:
    state = _state(_vehicle(1))
    state = reduce(state, AppendRecord(collection="vehicles", record=_vehicle(9)))
    assert _ids(state) == [1, 9]


def test_append_with_existing_id_replaces() -> None:
    state = _state(_vehicle(1), _vehicle(2))
    replacement = _vehicle(1, "Van")
    state = reduce(state, AppendRecord(collection="vehicles", record=replacement))
    assert _ids(state) == [1, 2]
    assert state.get("vehicles", 1) is replacement


def test_replace_keeps_position_and_other_identities() -> None:
    a, b, c = _vehicle(1), _vehicle(2), _vehicle(3)
    state = _state(a, b, c)
    updated = _vehicle(2, "Van")

    after = reduce(state, ReplaceRecord(collection="vehicles", record=updated))

    records = after.records("vehicles")
    assert [r.id for r in records] == [1, 2, 3]
    assert records[0] is a
    assert records[1] is updated
    assert records[2] is c
    # The previous snapshot is untouched.
    assert state.records("vehicles")[1] is b


def test_replace_of_missing_id_appends() -> None:
    state = _state(_vehicle(1))
    state = reduce(state, ReplaceRecord(collection="vehicles", record=_vehicle(5)))
    assert _ids(state) == [1, 5]


def test_remove_drops_record() -> None:
    state = _state(_vehicle(1), _vehicle(2))
    state = reduce(state, RemoveRecord(collection="vehicles", record_id=1))
    assert _ids(state) == [2]


def test_remove_of_absent_id_returns_same_state() -> None:
    state = _state(_vehicle(1))
    assert reduce(state, RemoveRecord(collection="vehicles", record_id=42)) is state


def test_unchanged_flags_return_same_state() -> None:
    state = _state(_vehicle(1))
    assert reduce(state, SetLoading(loading=False)) is state
    assert reduce(state, SetError(error=None)) is state


def test_loading_and_error_transitions() -> None:
    state = StoreSnapshot.empty(["vehicles"])
    state = reduce(state, SetLoading(loading=True))
    assert state.loading is True
    state = reduce(state, SetError(error="Failed to fetch vehicles"))
    assert state.error == "Failed to fetch vehicles"
    state = reduce(state, SetError())
    assert state.error is None


def test_set_aggregate_replaces_wholesale() -> None:
    state = StoreSnapshot.empty(["vehicles"])
    stats = TransportDashboardStats(total_vehicles=4, active_vehicles=3)
    state = reduce(state, SetAggregate(aggregate=stats))
    assert state.aggregate is stats

    state = reduce(state, SetAggregate(aggregate=TransportDashboardStats()))
    assert state.aggregate is not None
    assert state.aggregate.model_dump()["total_vehicles"] == 0


def test_actions_do_not_touch_other_collections() -> None:
    state = _state(_vehicle(1))
    drivers_before = state.records("drivers")
    state = reduce(state, AppendRecord(collection="vehicles", record=_vehicle(2)))
    assert state.records("drivers") is drivers_before


def test_snapshot_collections_are_read_only() -> None:
    state = _state(_vehicle(1))
    with pytest.raises(TypeError):
        state.collections["vehicles"] = ()  # type: ignore[index]


def test_reduce_all_folds_in_order() -> None:
    state = reduce_all(
        StoreSnapshot.empty(["vehicles"]),
        [
            SetLoading(loading=True),
            AppendRecord(collection="vehicles", record=_vehicle(1)),
            AppendRecord(collection="vehicles", record=_vehicle(2)),
            RemoveRecord(collection="vehicles", record_id=1),
            SetLoading(loading=False),
        ],
    )
    assert _ids(state) == [2]
    assert state.loading is False


def test_actions_are_tagged_by_kind() -> None:
    adapter: TypeAdapter[StoreAction] = TypeAdapter(StoreAction)
    action = adapter.validate_python({"kind": "remove_record", "collection": "vehicles", "record_id": 7})
    assert isinstance(action, RemoveRecord)
    assert action.record_id == 7


def test_unknown_action_raises() -> None:
    with pytest.raises(TypeError):
        reduce(StoreSnapshot.empty([]), object())  # type: ignore[arg-type]
