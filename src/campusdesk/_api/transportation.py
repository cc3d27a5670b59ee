"""Transportation endpoints under ``/transportation``."""

from __future__ import annotations

from dataclasses import dataclass

from campusdesk._api._resource import RestAggregate, RestResource
from campusdesk._transport import Transport
from campusdesk.models.transportation import (
    Driver,
    MaintenanceRecord,
    MaintenanceStatus,
    Route,
    RouteStop,
    StudentTransport,
    TransportDashboardStats,
    Vehicle,
    VehicleRouteAssignment,
)

PREFIX = "/transportation"


@dataclass(frozen=True, slots=True)
class TransportationApi:
    """Remote collaborators for the transportation area."""

    vehicles: RestResource[Vehicle]
    drivers: RestResource[Driver]
    routes: RestResource[Route]
    route_stops: RestResource[RouteStop]
    student_transports: RestResource[StudentTransport]
    maintenance_records: RestResource[MaintenanceRecord]
    vehicle_routes: RestResource[VehicleRouteAssignment]
    dashboard: RestAggregate[TransportDashboardStats]

    @classmethod
    def over(cls, transport: Transport) -> TransportationApi:
        return cls(
            vehicles=RestResource(transport, f"{PREFIX}/vehicles", Vehicle),
            drivers=RestResource(transport, f"{PREFIX}/drivers", Driver),
            routes=RestResource(transport, f"{PREFIX}/routes", Route),
            route_stops=RestResource(transport, f"{PREFIX}/routes/stops", RouteStop),
            student_transports=RestResource(transport, f"{PREFIX}/student-transport", StudentTransport),
            maintenance_records=RestResource(transport, f"{PREFIX}/maintenance", MaintenanceRecord),
            vehicle_routes=RestResource(transport, f"{PREFIX}/vehicle-routes", VehicleRouteAssignment),
            dashboard=RestAggregate(transport, f"{PREFIX}/dashboard/stats", TransportDashboardStats),
        )

    async def update_maintenance_status(self, record_id: int, status: MaintenanceStatus) -> MaintenanceRecord:
        """``PATCH /transportation/maintenance/{id}/status``."""
        return await self.maintenance_records.patch_action(record_id, "status", {"status": status.value})
