from __future__ import annotations

from datetime import date, time

import pytest

from campusdesk.formatting import (
    format_distance,
    format_duration,
    format_time,
    is_expired,
    is_expiring_soon,
    status_color,
)
from campusdesk.models.transportation import MaintenanceStatus


@pytest.mark.parametrize(
    ("status", "color"),
    [
        ("active", "success"),
        ("Maintenance", "warning"),
        ("retired", "error"),
        ("on_leave", "warning"),
        ("inactive", "error"),
        (MaintenanceStatus.SCHEDULED, "info"),
        ("in_progress", "warning"),
        ("completed", "success"),
        ("whatever", "info"),
        (None, "info"),
    ],
)
def test_status_color(status: str | None, color: str) -> None:
    assert status_color(status) == color


def test_format_time() -> None:
    assert format_time("07:30") == "07:30 AM"
    assert format_time("17:05:00") == "05:05 PM"
    assert format_time(time(12, 0)) == "12:00 PM"
    assert format_time("") == "N/A"
    assert format_time(None) == "N/A"
    assert format_time("late") == "late"


def test_format_distance() -> None:
    assert format_distance(12.5) == "12.5 km"
    assert format_distance(8) == "8 km"
    assert format_distance(0) == "N/A"
    assert format_distance(None) == "N/A"


def test_format_duration() -> None:
    assert format_duration(45) == "45m"
    assert format_duration(60) == "1h 0m"
    assert format_duration(135) == "2h 15m"
    assert format_duration(0) == "N/A"
    assert format_duration(None) == "N/A"


def test_expiry_helpers() -> None:
    today = date(2026, 3, 1)
    assert is_expired(date(2026, 2, 28), today=today) is True
    assert is_expired(today, today=today) is False
    assert is_expired(None) is False
    assert is_expiring_soon(date(2026, 3, 31), today=today) is True
    assert is_expiring_soon(date(2026, 4, 1), today=today) is False
    assert is_expiring_soon(date(2026, 2, 1), today=today) is False
    assert is_expiring_soon(date(2026, 3, 10), days=7, today=today) is False
