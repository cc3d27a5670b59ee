"""Transportation models: vehicles, drivers, routes, assignments, maintenance."""

from __future__ import annotations

from datetime import date

from pydantic import Field, field_validator

from campusdesk.models._base import Aggregate, CampusEnum, Draft, Record


class VehicleType(CampusEnum):
    BUS = "bus"
    VAN = "van"
    CAR = "car"
    OTHER = "other"
    UNKNOWN = "unknown"


class FuelType(CampusEnum):
    PETROL = "petrol"
    DIESEL = "diesel"
    CNG = "cng"
    ELECTRIC = "electric"
    HYBRID = "hybrid"
    UNKNOWN = "unknown"


class VehicleStatus(CampusEnum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"
    UNKNOWN = "unknown"


class DriverStatus(CampusEnum):
    ACTIVE = "active"
    ON_LEAVE = "on_leave"
    INACTIVE = "inactive"
    UNKNOWN = "unknown"


class LicenseType(CampusEnum):
    LIGHT_MOTOR_VEHICLE = "light_motor_vehicle"
    HEAVY_MOTOR_VEHICLE = "heavy_motor_vehicle"
    TRANSPORT_VEHICLE = "transport_vehicle"
    MOTORCYCLE = "motorcycle"
    COMMERCIAL = "commercial"
    UNKNOWN = "unknown"


class RouteType(CampusEnum):
    PICKUP = "pickup"
    DROP = "drop"
    BOTH = "both"
    UNKNOWN = "unknown"


class PickupType(CampusEnum):
    MORNING = "morning"
    EVENING = "evening"
    BOTH = "both"
    UNKNOWN = "unknown"


class MaintenanceStatus(CampusEnum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Vehicles
# ---------------------------------------------------------------------------


class Vehicle(Record):
    """A vehicle in the institution's fleet."""

    name: str = ""
    vehicle_no: str = ""
    type: VehicleType = VehicleType.BUS
    capacity: int = 0
    make: str | None = None
    model: str | None = None
    year: int | None = None
    fuel_type: FuelType | None = None
    status: VehicleStatus = VehicleStatus.ACTIVE
    driver_name: str | None = None
    """Display field joined in by the server."""
    route_name: str | None = None
    """Display field joined in by the server."""
    next_maintenance_date: date | None = None


class VehicleDraft(Draft):
    name: str
    vehicle_no: str
    type: VehicleType = VehicleType.BUS
    capacity: int = Field(default=0, ge=0)
    make: str | None = None
    model: str | None = None
    year: int | None = None
    fuel_type: FuelType | None = None
    status: VehicleStatus = VehicleStatus.ACTIVE
    next_maintenance_date: date | None = None

    @field_validator("name", "vehicle_no")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must be non-empty")
        return text


# ---------------------------------------------------------------------------
# Drivers
# ---------------------------------------------------------------------------


class Driver(Record):
    partner_id: int
    license_no: str = ""
    license_type: LicenseType | None = None
    license_expiry: date | None = None
    experience_years: int | None = None
    status: DriverStatus = DriverStatus.ACTIVE
    driver_name: str | None = None


class DriverDraft(Draft):
    partner_id: int
    license_no: str
    license_type: LicenseType = LicenseType.LIGHT_MOTOR_VEHICLE
    license_expiry: date | None = None
    experience_years: int = Field(default=0, ge=0)
    status: DriverStatus = DriverStatus.ACTIVE


# ---------------------------------------------------------------------------
# Routes and stops
# ---------------------------------------------------------------------------


class RouteStop(Record):
    route_id: int
    name: str = ""
    sequence: int = 0
    latitude: float | None = None
    longitude: float | None = None
    morning_time: str | None = None
    """Pickup time as ``HH:MM``."""
    evening_time: str | None = None
    """Drop time as ``HH:MM``."""


class RouteStopDraft(Draft):
    route_id: int
    name: str
    sequence: int = Field(default=1, ge=1)
    latitude: float | None = None
    longitude: float | None = None
    morning_time: str | None = None
    evening_time: str | None = None


class Route(Record):
    name: str = ""
    code: str = ""
    start_point: str = ""
    end_point: str = ""
    distance: float | None = None
    """Length in km."""
    estimated_time: int | None = None
    """Duration in minutes."""
    type: RouteType | None = None
    stops: tuple[RouteStop, ...] = ()
    total_students: int | None = None

    @property
    def ordered_stops(self) -> tuple[RouteStop, ...]:
        """Stops sorted by their sequence number."""
        return tuple(sorted(self.stops, key=lambda stop: stop.sequence))


class RouteDraft(Draft):
    name: str
    code: str
    start_point: str
    end_point: str
    distance: float | None = None
    estimated_time: int | None = None
    type: RouteType = RouteType.BOTH


# ---------------------------------------------------------------------------
# Student transport assignments
# ---------------------------------------------------------------------------


class StudentTransport(Record):
    student_id: int
    route_id: int
    route_stop_id: int
    pickup_type: PickupType = PickupType.BOTH
    start_date: date | None = None
    end_date: date | None = None
    fee_amount: float | None = None
    status: str = "active"
    student_name: str = ""
    route_name: str = ""
    stop_name: str = ""


class StudentTransportDraft(Draft):
    student_id: int
    route_id: int
    route_stop_id: int
    pickup_type: PickupType = PickupType.BOTH
    start_date: date
    end_date: date | None = None
    fee_amount: float = Field(default=0.0, ge=0)
    status: str = "active"


class VehicleRouteAssignment(Record):
    vehicle_id: int
    route_id: int
    driver_id: int | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str = "active"


class VehicleRouteAssignmentDraft(Draft):
    vehicle_id: int
    route_id: int
    driver_id: int | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str = "active"


# ---------------------------------------------------------------------------
# Maintenance
# ---------------------------------------------------------------------------


class MaintenanceRecord(Record):
    vehicle_id: int
    maintenance_type: str = ""
    description: str | None = None
    scheduled_date: date | None = None
    completion_date: date | None = None
    cost: float | None = None
    status: MaintenanceStatus = MaintenanceStatus.SCHEDULED
    vehicle_name: str | None = None
    vehicle_no: str | None = None


class MaintenanceRecordDraft(Draft):
    vehicle_id: int
    maintenance_type: str
    description: str | None = None
    scheduled_date: date | None = None
    completion_date: date | None = None
    cost: float = Field(default=0.0, ge=0)
    status: MaintenanceStatus = MaintenanceStatus.SCHEDULED


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


class TransportDashboardStats(Aggregate):
    total_vehicles: int = 0
    active_vehicles: int = 0
    vehicles_in_maintenance: int = 0
    total_drivers: int = 0
    active_drivers: int = 0
    total_routes: int = 0
    total_students_using_transport: int = 0
    pending_maintenance: int = 0
