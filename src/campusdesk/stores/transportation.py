"""Transportation store: fleet, drivers, routes, assignments, maintenance."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, cast

from campusdesk._api.transportation import TransportationApi
from campusdesk.models.transportation import (
    Driver,
    DriverDraft,
    MaintenanceRecord,
    MaintenanceRecordDraft,
    MaintenanceStatus,
    Route,
    RouteDraft,
    RouteStop,
    RouteStopDraft,
    StudentTransport,
    StudentTransportDraft,
    TransportDashboardStats,
    Vehicle,
    VehicleDraft,
    VehicleRouteAssignment,
    VehicleRouteAssignmentDraft,
)
from campusdesk.state.store import Collection, DomainStore, Patch

VEHICLES = "vehicles"
DRIVERS = "drivers"
ROUTES = "routes"
STUDENT_TRANSPORTS = "student_transports"
MAINTENANCE_RECORDS = "maintenance_records"
VEHICLE_ROUTES = "vehicle_routes"


class TransportationStore(DomainStore):
    """Store for the transportation area.

    Route stops have no collection of their own: they are embedded in
    :class:`~campusdesk.models.transportation.Route`, so creating a stop
    re-lists the routes.
    """

    def __init__(self, api: TransportationApi) -> None:
        super().__init__(
            "transportation",
            [
                Collection(VEHICLES, api.vehicles, label="vehicle"),
                Collection(DRIVERS, api.drivers, label="driver"),
                Collection(ROUTES, api.routes, label="route"),
                Collection(STUDENT_TRANSPORTS, api.student_transports, label="student transport"),
                Collection(MAINTENANCE_RECORDS, api.maintenance_records, label="maintenance record"),
                Collection(VEHICLE_ROUTES, api.vehicle_routes, label="vehicle route assignment"),
            ],
            aggregate=api.dashboard,
        )
        self._api = api

    # -- typed read access ---------------------------------------------

    @property
    def vehicles(self) -> tuple[Vehicle, ...]:
        return cast(tuple[Vehicle, ...], self.records(VEHICLES))

    @property
    def drivers(self) -> tuple[Driver, ...]:
        return cast(tuple[Driver, ...], self.records(DRIVERS))

    @property
    def routes(self) -> tuple[Route, ...]:
        return cast(tuple[Route, ...], self.records(ROUTES))

    @property
    def student_transports(self) -> tuple[StudentTransport, ...]:
        return cast(tuple[StudentTransport, ...], self.records(STUDENT_TRANSPORTS))

    @property
    def maintenance_records(self) -> tuple[MaintenanceRecord, ...]:
        return cast(tuple[MaintenanceRecord, ...], self.records(MAINTENANCE_RECORDS))

    @property
    def vehicle_routes(self) -> tuple[VehicleRouteAssignment, ...]:
        return cast(tuple[VehicleRouteAssignment, ...], self.records(VEHICLE_ROUTES))

    @property
    def dashboard_stats(self) -> TransportDashboardStats | None:
        return cast(TransportDashboardStats | None, self.aggregate)

    async def refresh_all(self) -> None:
        """Initial fetch: every collection plus the dashboard, concurrently."""
        await asyncio.gather(
            *(self.list(name) for name in self.collection_names),
            self.refresh_aggregate(),
        )

    # -- vehicles --------------------------------------------------------

    async def fetch_vehicles(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(VEHICLES, params)

    async def fetch_vehicle(self, vehicle_id: int) -> Vehicle | None:
        return cast(Vehicle | None, await self.refresh_record(VEHICLES, vehicle_id))

    async def create_vehicle(self, draft: VehicleDraft) -> Vehicle:
        return cast(Vehicle, await self.create(VEHICLES, draft))

    async def update_vehicle(self, vehicle_id: int, patch: Patch) -> Vehicle:
        return cast(Vehicle, await self.update(VEHICLES, vehicle_id, patch))

    async def delete_vehicle(self, vehicle_id: int) -> None:
        await self.remove(VEHICLES, vehicle_id)

    # -- drivers ---------------------------------------------------------

    async def fetch_drivers(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(DRIVERS, params)

    async def create_driver(self, draft: DriverDraft) -> Driver:
        return cast(Driver, await self.create(DRIVERS, draft))

    # -- routes ----------------------------------------------------------

    async def fetch_routes(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(ROUTES, params)

    async def create_route(self, draft: RouteDraft) -> Route:
        return cast(Route, await self.create(ROUTES, draft))

    async def create_route_stop(self, draft: RouteStopDraft) -> RouteStop:
        return await self.create_then_refresh(
            ROUTES,
            lambda: self._api.route_stops.create(draft),
            operation="create route stop",
            fallback="Failed to create route stop",
        )

    # -- student transport -----------------------------------------------

    async def fetch_student_transports(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(STUDENT_TRANSPORTS, params)

    async def create_student_transport(self, draft: StudentTransportDraft) -> StudentTransport:
        return cast(StudentTransport, await self.create(STUDENT_TRANSPORTS, draft))

    # -- vehicle/route assignments ---------------------------------------

    async def fetch_vehicle_routes(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(VEHICLE_ROUTES, params)

    async def create_vehicle_route(self, draft: VehicleRouteAssignmentDraft) -> VehicleRouteAssignment:
        return cast(VehicleRouteAssignment, await self.create(VEHICLE_ROUTES, draft))

    # -- maintenance -----------------------------------------------------

    async def fetch_maintenance_records(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(MAINTENANCE_RECORDS, params)

    async def create_maintenance_record(self, draft: MaintenanceRecordDraft) -> MaintenanceRecord:
        return cast(MaintenanceRecord, await self.create(MAINTENANCE_RECORDS, draft))

    async def update_maintenance_status(self, record_id: int, status: MaintenanceStatus | str) -> MaintenanceRecord:
        """Move a maintenance record to *status* via the dedicated status endpoint."""
        target = MaintenanceStatus(status)
        if target is MaintenanceStatus.UNKNOWN:
            raise ValueError(f"unknown maintenance status: {status!r}")
        return await self.replace_from(
            MAINTENANCE_RECORDS,
            record_id,
            lambda: self._api.update_maintenance_status(record_id, target),
            operation="update maintenance status",
            fallback="Failed to update maintenance status",
        )

    # -- dashboard -------------------------------------------------------

    async def fetch_dashboard_stats(self) -> None:
        await self.refresh_aggregate()
