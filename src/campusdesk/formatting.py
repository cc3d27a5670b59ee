"""Display helpers for transportation views."""

from __future__ import annotations

import datetime as dt

from campusdesk._constants import NOT_AVAILABLE
from campusdesk.models.transportation import DriverStatus, MaintenanceStatus, VehicleStatus

_STATUS_COLORS: dict[str, str] = {
    VehicleStatus.ACTIVE: "success",
    VehicleStatus.MAINTENANCE: "warning",
    VehicleStatus.RETIRED: "error",
    DriverStatus.ON_LEAVE: "warning",
    DriverStatus.INACTIVE: "error",
    MaintenanceStatus.SCHEDULED: "info",
    MaintenanceStatus.IN_PROGRESS: "warning",
    MaintenanceStatus.COMPLETED: "success",
}


def status_color(status: str | None) -> str:
    """Map a vehicle, driver or maintenance status to a badge colour.

    Unknown statuses fall back to ``"info"``.
    """
    if not status:
        return "info"
    return _STATUS_COLORS.get(str(status).lower(), "info")


def format_time(value: str | dt.time | None) -> str:
    """Render ``"HH:MM[:SS]"`` as ``"08:30 AM"``.

    Strings that do not parse as a time are returned unchanged.
    """
    if not value:
        return NOT_AVAILABLE
    if isinstance(value, str):
        try:
            value = dt.time.fromisoformat(value)
        except ValueError:
            return value
    return value.strftime("%I:%M %p")


def format_distance(km: float | None) -> str:
    if not km:
        return NOT_AVAILABLE
    return f"{km:g} km"


def format_duration(minutes: int | None) -> str:
    if not minutes:
        return NOT_AVAILABLE
    hours, mins = divmod(int(minutes), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def is_expired(value: dt.date | None, *, today: dt.date | None = None) -> bool:
    if value is None:
        return False
    return value < (today or dt.date.today())


def is_expiring_soon(value: dt.date | None, *, days: int = 30, today: dt.date | None = None) -> bool:
    """True when *value* falls within the next *days* days (inclusive)."""
    if value is None:
        return False
    remaining = (value - (today or dt.date.today())).days
    return 0 <= remaining <= days
