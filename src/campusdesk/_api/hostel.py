"""Hostel endpoints under ``/hostel``."""

from __future__ import annotations

from dataclasses import dataclass

from campusdesk._api._resource import RestAggregate, RestResource
from campusdesk._transport import Transport
from campusdesk.models.hostel import (
    Hostel,
    HostelDashboardStats,
    MaintenanceRequest,
    MessMenuItem,
    RequestStatus,
    Room,
    RoomAllocation,
    RoomCategory,
    VisitorLog,
)

PREFIX = "/hostel"


@dataclass(frozen=True, slots=True)
class HostelApi:
    """Remote collaborators for the hostel area."""

    hostels: RestResource[Hostel]
    room_categories: RestResource[RoomCategory]
    rooms: RestResource[Room]
    room_allocations: RestResource[RoomAllocation]
    mess_menu: RestResource[MessMenuItem]
    visitor_logs: RestResource[VisitorLog]
    maintenance_requests: RestResource[MaintenanceRequest]
    dashboard: RestAggregate[HostelDashboardStats]

    @classmethod
    def over(cls, transport: Transport) -> HostelApi:
        return cls(
            hostels=RestResource(transport, f"{PREFIX}/hostels", Hostel),
            room_categories=RestResource(transport, f"{PREFIX}/room-categories", RoomCategory),
            rooms=RestResource(transport, f"{PREFIX}/rooms", Room),
            room_allocations=RestResource(transport, f"{PREFIX}/room-allocations", RoomAllocation),
            mess_menu=RestResource(transport, f"{PREFIX}/mess-menu", MessMenuItem),
            visitor_logs=RestResource(transport, f"{PREFIX}/visitor-logs", VisitorLog),
            maintenance_requests=RestResource(transport, f"{PREFIX}/maintenance-requests", MaintenanceRequest),
            dashboard=RestAggregate(transport, f"{PREFIX}/dashboard/stats", HostelDashboardStats),
        )

    async def check_out_visitor(self, record_id: int) -> VisitorLog:
        """``PATCH /hostel/visitor-logs/{id}/checkout``."""
        return await self.visitor_logs.patch_action(record_id, "checkout")

    async def update_maintenance_request_status(self, record_id: int, status: RequestStatus) -> MaintenanceRequest:
        """``PATCH /hostel/maintenance-requests/{id}/status``."""
        return await self.maintenance_requests.patch_action(record_id, "status", {"status": status.value})
