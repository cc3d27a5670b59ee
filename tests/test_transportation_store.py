from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from campusdesk._api.transportation import TransportationApi
from campusdesk.exceptions import CampusTransportError, OperationFailed, RecordNotFoundError
from campusdesk.models.transportation import (
    MaintenanceStatus,
    RouteStopDraft,
    VehicleDraft,
    VehicleType,
)
from campusdesk.stores.transportation import TransportationStore


class _FakeTransport:
    """Answers from a ``(method, endpoint) -> payload`` table.

    A payload that is an exception is raised instead.
    """

    def __init__(self, routes: Mapping[tuple[str, str], Any] | None = None) -> None:
        self.routes: dict[tuple[str, str], Any] = dict(routes or {})
        self.sent: list[tuple[str, str, Any]] = []

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        self.sent.append((method, endpoint, json_body))
        try:
            answer = self.routes[(method, endpoint)]
        except KeyError:
            raise CampusTransportError(f"HTTP 404 from {endpoint}", status_code=404, endpoint=endpoint) from None
        if isinstance(answer, Exception):
            raise answer
        return answer


VEHICLES = [
    {"id": 1, "name": "Bus 1", "vehicle_no": "KA01AB0001", "type": "bus", "capacity": 40, "status": "active"},
    {"id": 2, "name": "Van 2", "vehicle_no": "KA01AB0002", "type": "van", "capacity": 12, "status": "maintenance"},
]


def _store(transport: _FakeTransport) -> TransportationStore:
    return TransportationStore(TransportationApi.over(transport))


@pytest.mark.asyncio
async def test_fetch_vehicles_parses_records_in_order() -> None:
    transport = _FakeTransport({("GET", "/transportation/vehicles"): VEHICLES})
    store = _store(transport)

    await store.fetch_vehicles()

    assert [v.id for v in store.vehicles] == [1, 2]
    assert store.vehicles[1].type is VehicleType.VAN
    assert store.error is None


@pytest.mark.asyncio
async def test_create_vehicle_posts_full_draft_with_defaults() -> None:
    created = {"id": 3, "name": "Bus1", "vehicle_no": "KA01", "type": "bus", "capacity": 0, "status": "active"}
    transport = _FakeTransport({("POST", "/transportation/vehicles"): created})
    store = _store(transport)

    vehicle = await store.create_vehicle(VehicleDraft(name="Bus1", vehicle_no="KA01"))

    assert vehicle.id == 3
    assert store.vehicles == (vehicle,)
    method, endpoint, body = transport.sent[-1]
    assert (method, endpoint) == ("POST", "/transportation/vehicles")
    assert body["type"] == "bus"
    assert body["status"] == "active"
    assert body["capacity"] == 0


@pytest.mark.asyncio
async def test_update_vehicle_puts_patch_and_uses_server_record() -> None:
    transport = _FakeTransport(
        {
            ("GET", "/transportation/vehicles"): VEHICLES,
            ("PUT", "/transportation/vehicles/2"): {**VEHICLES[1], "status": "active", "capacity": 14},
        }
    )
    store = _store(transport)
    await store.fetch_vehicles()
    untouched = store.vehicles[0]

    updated = await store.update_vehicle(2, {"status": "active"})

    assert transport.sent[-1] == ("PUT", "/transportation/vehicles/2", {"status": "active"})
    assert updated.capacity == 14
    assert store.vehicles[0] is untouched
    assert store.vehicles[1] is updated


@pytest.mark.asyncio
async def test_update_missing_vehicle_sends_nothing() -> None:
    transport = _FakeTransport({("GET", "/transportation/vehicles"): VEHICLES})
    store = _store(transport)
    await store.fetch_vehicles()
    sent = len(transport.sent)

    with pytest.raises(RecordNotFoundError):
        await store.update_vehicle(7, {"status": "retired"})

    assert len(transport.sent) == sent


@pytest.mark.asyncio
async def test_delete_vehicle_calls_server_even_when_absent() -> None:
    transport = _FakeTransport(
        {
            ("GET", "/transportation/vehicles"): VEHICLES,
            ("DELETE", "/transportation/vehicles/1"): None,
            ("DELETE", "/transportation/vehicles/9"): None,
        }
    )
    store = _store(transport)
    await store.fetch_vehicles()

    await store.delete_vehicle(1)
    await store.delete_vehicle(9)

    assert [v.id for v in store.vehicles] == [2]
    assert ("DELETE", "/transportation/vehicles/9", None) in transport.sent


@pytest.mark.asyncio
async def test_fetch_vehicle_appends_when_not_listed_yet() -> None:
    transport = _FakeTransport({("GET", "/transportation/vehicles/2"): VEHICLES[1]})
    store = _store(transport)

    vehicle = await store.fetch_vehicle(2)

    assert vehicle is not None
    assert store.vehicles == (vehicle,)
    assert store.error is None


@pytest.mark.asyncio
async def test_fetch_vehicle_miss_is_recorded() -> None:
    store = _store(_FakeTransport({("GET", "/transportation/vehicles"): VEHICLES}))
    await store.fetch_vehicles()

    assert await store.fetch_vehicle(9) is None
    assert store.error == "HTTP 404 from /transportation/vehicles/9"
    assert len(store.vehicles) == 2


@pytest.mark.asyncio
async def test_server_message_becomes_store_error() -> None:
    transport = _FakeTransport(
        {("POST", "/transportation/vehicles"): CampusTransportError("duplicate code", status_code=409)}
    )
    store = _store(transport)

    with pytest.raises(OperationFailed, match="duplicate code"):
        await store.create_vehicle(VehicleDraft(name="Bus1", vehicle_no="KA01"))

    assert store.vehicles == ()
    assert store.error == "duplicate code"


@pytest.mark.asyncio
async def test_create_route_stop_refreshes_routes() -> None:
    route = {"id": 4, "name": "North", "code": "N1", "start_point": "Depot", "end_point": "Campus", "stops": []}
    stop = {"id": 11, "route_id": 4, "name": "Gate", "sequence": 1, "morning_time": "07:30"}
    transport = _FakeTransport(
        {
            ("GET", "/transportation/routes"): [route],
            ("POST", "/transportation/routes/stops"): stop,
        }
    )
    store = _store(transport)
    await store.fetch_routes()
    transport.routes[("GET", "/transportation/routes")] = [{**route, "stops": [stop]}]

    created = await store.create_route_stop(RouteStopDraft(route_id=4, name="Gate"))

    assert created.id == 11
    assert [s.name for s in store.routes[0].ordered_stops] == ["Gate"]
    assert transport.sent[-1][:2] == ("GET", "/transportation/routes")
    assert transport.sent[-2][2]["sequence"] == 1


@pytest.mark.asyncio
async def test_failed_route_refresh_after_stop_create_is_not_raised() -> None:
    stop = {"id": 11, "route_id": 4, "name": "Gate", "sequence": 1}
    transport = _FakeTransport(
        {
            ("POST", "/transportation/routes/stops"): stop,
            ("GET", "/transportation/routes"): CampusTransportError("timeout"),
        }
    )
    store = _store(transport)

    created = await store.create_route_stop(RouteStopDraft(route_id=4, name="Gate"))

    assert created.id == 11
    assert store.error == "timeout"
    assert store.loading is False


@pytest.mark.asyncio
async def test_update_maintenance_status_patches_status_endpoint() -> None:
    record = {"id": 5, "vehicle_id": 1, "maintenance_type": "Oil", "status": "scheduled"}
    transport = _FakeTransport(
        {
            ("GET", "/transportation/maintenance"): [record],
            ("PATCH", "/transportation/maintenance/5/status"): {**record, "status": "in_progress"},
        }
    )
    store = _store(transport)
    await store.fetch_maintenance_records()

    updated = await store.update_maintenance_status(5, "IN_PROGRESS")

    assert transport.sent[-1] == ("PATCH", "/transportation/maintenance/5/status", {"status": "in_progress"})
    assert updated.status is MaintenanceStatus.IN_PROGRESS
    assert store.maintenance_records == (updated,)


@pytest.mark.asyncio
async def test_update_maintenance_status_rejects_unknown_status() -> None:
    store = _store(_FakeTransport())
    with pytest.raises(ValueError):
        await store.update_maintenance_status(5, "exploded")


@pytest.mark.asyncio
async def test_refresh_all_populates_everything() -> None:
    transport = _FakeTransport(
        {
            ("GET", "/transportation/vehicles"): VEHICLES,
            ("GET", "/transportation/drivers"): [
                {"id": 1, "partner_id": 20, "license_no": "DL1", "license_type": "heavy_motor_vehicle"}
            ],
            ("GET", "/transportation/routes"): {"items": []},
            ("GET", "/transportation/student-transport"): [],
            ("GET", "/transportation/maintenance"): [],
            ("GET", "/transportation/vehicle-routes"): [{"id": 1, "vehicle_id": 1, "route_id": 4}],
            ("GET", "/transportation/dashboard/stats"): {"total_vehicles": 2, "active_vehicles": 1},
        }
    )
    store = _store(transport)

    await store.refresh_all()

    assert len(store.vehicles) == 2
    assert store.drivers[0].partner_id == 20
    assert store.routes == ()
    assert store.vehicle_routes[0].route_id == 4
    assert store.dashboard_stats is not None
    assert store.dashboard_stats.total_vehicles == 2
    assert store.loading is False
    assert store.error is None
