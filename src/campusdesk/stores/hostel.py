"""Hostel store."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, cast

from campusdesk._api.hostel import HostelApi
from campusdesk.models.hostel import (
    Hostel,
    HostelDashboardStats,
    HostelDraft,
    MaintenanceRequest,
    MaintenanceRequestDraft,
    MessMenuItem,
    MessMenuItemDraft,
    RequestStatus,
    Room,
    RoomAllocation,
    RoomAllocationDraft,
    RoomCategory,
    RoomCategoryDraft,
    RoomDraft,
    VisitorLog,
    VisitorLogDraft,
)
from campusdesk.state.store import Collection, DomainStore, Patch

HOSTELS = "hostels"
ROOM_CATEGORIES = "room_categories"
ROOMS = "rooms"
ROOM_ALLOCATIONS = "room_allocations"
MESS_MENU = "mess_menu"
VISITOR_LOGS = "visitor_logs"
MAINTENANCE_REQUESTS = "maintenance_requests"


class HostelStore(DomainStore):
    """Store for the hostel area."""

    def __init__(self, api: HostelApi) -> None:
        super().__init__(
            "hostel",
            [
                Collection(HOSTELS, api.hostels, label="hostel"),
                Collection(ROOM_CATEGORIES, api.room_categories, label="room category", plural="room categories"),
                Collection(ROOMS, api.rooms, label="room"),
                Collection(ROOM_ALLOCATIONS, api.room_allocations, label="room allocation"),
                Collection(MESS_MENU, api.mess_menu, label="mess menu item", plural="mess menu"),
                Collection(VISITOR_LOGS, api.visitor_logs, label="visitor log"),
                Collection(MAINTENANCE_REQUESTS, api.maintenance_requests, label="maintenance request"),
            ],
            aggregate=api.dashboard,
        )
        self._api = api

    @property
    def hostels(self) -> tuple[Hostel, ...]:
        return cast(tuple[Hostel, ...], self.records(HOSTELS))

    @property
    def room_categories(self) -> tuple[RoomCategory, ...]:
        return cast(tuple[RoomCategory, ...], self.records(ROOM_CATEGORIES))

    @property
    def rooms(self) -> tuple[Room, ...]:
        return cast(tuple[Room, ...], self.records(ROOMS))

    @property
    def room_allocations(self) -> tuple[RoomAllocation, ...]:
        return cast(tuple[RoomAllocation, ...], self.records(ROOM_ALLOCATIONS))

    @property
    def mess_menu(self) -> tuple[MessMenuItem, ...]:
        return cast(tuple[MessMenuItem, ...], self.records(MESS_MENU))

    @property
    def visitor_logs(self) -> tuple[VisitorLog, ...]:
        return cast(tuple[VisitorLog, ...], self.records(VISITOR_LOGS))

    @property
    def maintenance_requests(self) -> tuple[MaintenanceRequest, ...]:
        return cast(tuple[MaintenanceRequest, ...], self.records(MAINTENANCE_REQUESTS))

    @property
    def dashboard_stats(self) -> HostelDashboardStats | None:
        return cast(HostelDashboardStats | None, self.aggregate)

    def rooms_in(self, hostel_id: int) -> tuple[Room, ...]:
        return tuple(room for room in self.rooms if room.hostel_id == hostel_id)

    async def refresh_all(self) -> None:
        await asyncio.gather(
            *(self.list(name) for name in self.collection_names),
            self.refresh_aggregate(),
        )

    # -- hostels ---------------------------------------------------------

    async def fetch_hostels(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(HOSTELS, params)

    async def create_hostel(self, draft: HostelDraft) -> Hostel:
        return cast(Hostel, await self.create(HOSTELS, draft))

    async def update_hostel(self, hostel_id: int, patch: Patch) -> Hostel:
        return cast(Hostel, await self.update(HOSTELS, hostel_id, patch))

    async def delete_hostel(self, hostel_id: int) -> None:
        await self.remove(HOSTELS, hostel_id)

    # -- room categories -------------------------------------------------

    async def fetch_room_categories(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(ROOM_CATEGORIES, params)

    async def create_room_category(self, draft: RoomCategoryDraft) -> RoomCategory:
        return cast(RoomCategory, await self.create(ROOM_CATEGORIES, draft))

    # -- rooms -----------------------------------------------------------

    async def fetch_rooms(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(ROOMS, params)

    async def fetch_room(self, room_id: int) -> Room | None:
        return cast(Room | None, await self.refresh_record(ROOMS, room_id))

    async def create_room(self, draft: RoomDraft) -> Room:
        return cast(Room, await self.create(ROOMS, draft))

    async def update_room(self, room_id: int, patch: Patch) -> Room:
        return cast(Room, await self.update(ROOMS, room_id, patch))

    async def delete_room(self, room_id: int) -> None:
        await self.remove(ROOMS, room_id)

    # -- allocations -----------------------------------------------------

    async def fetch_room_allocations(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(ROOM_ALLOCATIONS, params)

    async def create_room_allocation(self, draft: RoomAllocationDraft) -> RoomAllocation:
        return cast(RoomAllocation, await self.create(ROOM_ALLOCATIONS, draft))

    async def update_room_allocation(self, allocation_id: int, patch: Patch) -> RoomAllocation:
        return cast(RoomAllocation, await self.update(ROOM_ALLOCATIONS, allocation_id, patch))

    async def delete_room_allocation(self, allocation_id: int) -> None:
        await self.remove(ROOM_ALLOCATIONS, allocation_id)

    # -- mess menu -------------------------------------------------------

    async def fetch_mess_menu(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(MESS_MENU, params)

    async def create_mess_menu_item(self, draft: MessMenuItemDraft) -> MessMenuItem:
        return cast(MessMenuItem, await self.create(MESS_MENU, draft))

    # -- visitors --------------------------------------------------------

    async def fetch_visitor_logs(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(VISITOR_LOGS, params)

    async def create_visitor_log(self, draft: VisitorLogDraft) -> VisitorLog:
        return cast(VisitorLog, await self.create(VISITOR_LOGS, draft))

    async def update_visitor_log(self, log_id: int, patch: Patch) -> VisitorLog:
        return cast(VisitorLog, await self.update(VISITOR_LOGS, log_id, patch))

    async def delete_visitor_log(self, log_id: int) -> None:
        await self.remove(VISITOR_LOGS, log_id)

    async def check_out_visitor(self, log_id: int) -> VisitorLog:
        """Stamp the visitor's check-out time; the server returns the updated log."""
        return await self.replace_from(
            VISITOR_LOGS,
            log_id,
            lambda: self._api.check_out_visitor(log_id),
            operation="check out visitor",
            fallback="Failed to check out visitor",
        )

    # -- maintenance requests --------------------------------------------

    async def fetch_maintenance_requests(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(MAINTENANCE_REQUESTS, params)

    async def create_maintenance_request(self, draft: MaintenanceRequestDraft) -> MaintenanceRequest:
        return cast(MaintenanceRequest, await self.create(MAINTENANCE_REQUESTS, draft))

    async def update_maintenance_request(self, request_id: int, patch: Patch) -> MaintenanceRequest:
        return cast(MaintenanceRequest, await self.update(MAINTENANCE_REQUESTS, request_id, patch))

    async def delete_maintenance_request(self, request_id: int) -> None:
        await self.remove(MAINTENANCE_REQUESTS, request_id)

    async def update_maintenance_request_status(
        self,
        request_id: int,
        status: RequestStatus | str,
    ) -> MaintenanceRequest:
        target = RequestStatus(status)
        if target is RequestStatus.UNKNOWN:
            raise ValueError(f"unknown maintenance request status: {status!r}")
        return await self.replace_from(
            MAINTENANCE_REQUESTS,
            request_id,
            lambda: self._api.update_maintenance_request_status(request_id, target),
            operation="update maintenance request status",
            fallback="Failed to update maintenance request status",
        )

    # -- dashboard -------------------------------------------------------

    async def fetch_dashboard_stats(self) -> None:
        await self.refresh_aggregate()
