"""Hostel models."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import Field

from campusdesk.models._base import Aggregate, CampusEnum, Draft, Record


class HostelType(CampusEnum):
    BOYS = "boys"
    GIRLS = "girls"
    MIXED = "mixed"
    UNKNOWN = "unknown"


class RoomStatus(CampusEnum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"
    UNKNOWN = "unknown"


class VisitorStatus(CampusEnum):
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    UNKNOWN = "unknown"


class RequestPriority(CampusEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"
    UNKNOWN = "unknown"


class RequestStatus(CampusEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


class Hostel(Record):
    name: str = ""
    code: str = ""
    type: HostelType = HostelType.MIXED
    capacity: int = 0
    address: str = ""
    description: str | None = None
    status: str = "active"
    contact_person: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None


class HostelDraft(Draft):
    name: str
    code: str
    type: HostelType = HostelType.MIXED
    capacity: int = Field(default=0, ge=0)
    address: str = ""
    description: str | None = None
    status: str = "active"
    contact_person: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None


class RoomCategory(Record):
    name: str = ""
    description: str | None = None
    monthly_fee: float | None = None


class RoomCategoryDraft(Draft):
    name: str
    description: str | None = None
    monthly_fee: float = Field(default=0.0, ge=0)


class Room(Record):
    hostel_id: int
    room_number: str = ""
    category_id: int | None = None
    capacity: int = 0
    current_occupancy: int = 0
    status: RoomStatus = RoomStatus.AVAILABLE
    description: str | None = None
    floor: int | None = None
    block: str | None = None
    hostel_name: str | None = None
    category_name: str | None = None

    @property
    def vacancies(self) -> int:
        return max(self.capacity - self.current_occupancy, 0)


class RoomDraft(Draft):
    hostel_id: int
    room_number: str
    category_id: int | None = None
    capacity: int = Field(default=1, ge=1)
    status: RoomStatus = RoomStatus.AVAILABLE
    description: str | None = None
    floor: int | None = None
    block: str | None = None


class RoomAllocation(Record):
    room_id: int
    student_id: int
    allocation_date: date | None = None
    deallocation_date: date | None = None
    status: str = "active"


class RoomAllocationDraft(Draft):
    room_id: int
    student_id: int
    allocation_date: date
    deallocation_date: date | None = None
    status: str = "active"


class MessMenuItem(Record):
    day_of_week: str = ""
    meal_type: str = ""
    items: str = ""
    hostel_id: int | None = None


class MessMenuItemDraft(Draft):
    day_of_week: str
    meal_type: str
    items: str
    hostel_id: int | None = None


class VisitorLog(Record):
    visitor_name: str = ""
    visitor_phone: str | None = None
    hostel_id: int | None = None
    student_id: int | None = None
    purpose: str = ""
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None
    status: VisitorStatus = VisitorStatus.CHECKED_IN


class VisitorLogDraft(Draft):
    visitor_name: str
    visitor_phone: str | None = None
    hostel_id: int
    student_id: int | None = None
    purpose: str = ""
    check_in_time: datetime | None = None
    status: VisitorStatus = VisitorStatus.CHECKED_IN


class MaintenanceRequest(Record):
    hostel_id: int | None = None
    room_id: int | None = None
    title: str = ""
    description: str | None = None
    priority: RequestPriority = RequestPriority.MEDIUM
    status: RequestStatus = RequestStatus.PENDING
    reported_by: int | None = None
    reported_date: date | None = None
    resolved_date: date | None = None


class MaintenanceRequestDraft(Draft):
    hostel_id: int
    room_id: int | None = None
    title: str
    description: str | None = None
    priority: RequestPriority = RequestPriority.MEDIUM
    status: RequestStatus = RequestStatus.PENDING
    reported_by: int | None = None
    reported_date: date | None = None


class HostelDashboardStats(Aggregate):
    total_hostels: int = 0
    total_rooms: int = 0
    occupied_rooms: int = 0
    available_rooms: int = 0
    total_capacity: int = 0
    current_occupancy: int = 0
    active_allocations: int = 0
    pending_maintenance_requests: int = 0
    visitors_checked_in: int = 0
