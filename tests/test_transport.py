from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp
import pytest

from campusdesk._transport import HttpTransport, unwrap_envelope
from campusdesk.config import CampusConfig
from campusdesk.exceptions import CampusTransportError


class _FakeResponse:
    def __init__(self, status: int, payload: bytes) -> None:
        self.status = status
        self._payload = payload

    async def read(self) -> bytes:
        return self._payload

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


class _FakeSession:
    """Stands in for ``aiohttp.ClientSession`` and records every request."""

    def __init__(self, status: int = 200, body: Any = None, *, raw: bytes | str | None = None) -> None:
        self.status = status
        if isinstance(raw, str):
            raw = raw.encode()
        self.payload = raw if raw is not None else (b"" if body is None else json.dumps(body).encode())
        self.raise_exc: BaseException | None = None
        self.requests: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> _FakeResponse:
        self.requests.append({"method": method, "url": url, **kwargs})
        if self.raise_exc is not None:
            raise self.raise_exc
        return _FakeResponse(self.status, self.payload)


def _transport(session: _FakeSession, **config: Any) -> HttpTransport:
    return HttpTransport(CampusConfig(base_url="https://erp.example.edu/api/", **config), session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_success_envelope_is_unwrapped() -> None:
    session = _FakeSession(body={"success": True, "data": [{"id": 1}], "message": "ok"})
    result = await _transport(session).request("GET", "/transportation/vehicles")

    assert result == [{"id": 1}]
    assert session.requests[0]["url"] == "https://erp.example.edu/api/transportation/vehicles"


@pytest.mark.asyncio
async def test_bare_body_is_returned_unchanged() -> None:
    session = _FakeSession(body={"id": 3, "name": "Bus"})
    assert await _transport(session).request("GET", "/transportation/vehicles/3") == {"id": 3, "name": "Bus"}


@pytest.mark.asyncio
async def test_empty_body_returns_none() -> None:
    session = _FakeSession(status=204)
    assert await _transport(session).request("DELETE", "/transportation/vehicles/3") is None


@pytest.mark.asyncio
async def test_json_body_and_bearer_token_are_sent() -> None:
    session = _FakeSession(body={"data": {"id": 1}, "success": True})
    await _transport(session, api_token="tkn").request(
        "POST", "/hostel/hostels", json_body={"name": "North"}, params={"page": 1}
    )

    sent = session.requests[0]
    assert json.loads(sent["data"]) == {"name": "North"}
    assert sent["headers"]["authorization"] == "Bearer tkn"
    assert sent["params"] == {"page": 1}
    assert isinstance(sent["timeout"], aiohttp.ClientTimeout)


@pytest.mark.asyncio
async def test_no_authorization_header_without_token() -> None:
    session = _FakeSession(body=[])
    await _transport(session).request("GET", "/hostel/rooms")
    assert "authorization" not in session.requests[0]["headers"]


@pytest.mark.asyncio
async def test_error_status_uses_server_message() -> None:
    session = _FakeSession(status=409, body={"success": False, "message": "duplicate code"})

    with pytest.raises(CampusTransportError) as excinfo:
        await _transport(session).request("POST", "/transportation/vehicles", json_body={})

    assert str(excinfo.value) == "duplicate code"
    assert excinfo.value.status_code == 409
    assert excinfo.value.endpoint == "/transportation/vehicles"


@pytest.mark.asyncio
async def test_validation_errors_are_flattened() -> None:
    session = _FakeSession(status=422, body={"errors": {"name": ["name is required"], "code": ["code taken"]}})

    with pytest.raises(CampusTransportError, match="name is required; code taken"):
        await _transport(session).request("POST", "/hostel/hostels", json_body={})


@pytest.mark.asyncio
async def test_error_without_message_falls_back_to_status() -> None:
    session = _FakeSession(status=500, raw="<html>oops</html>")

    with pytest.raises(CampusTransportError, match="HTTP 500 from /hostel/rooms"):
        await _transport(session).request("GET", "/hostel/rooms")


@pytest.mark.asyncio
async def test_success_false_on_2xx_is_an_error() -> None:
    session = _FakeSession(body={"success": False, "message": "Room is full", "data": None})

    with pytest.raises(CampusTransportError, match="Room is full"):
        await _transport(session).request("POST", "/hostel/room-allocations", json_body={})


@pytest.mark.asyncio
async def test_invalid_json_on_success_is_an_error() -> None:
    session = _FakeSession(raw="not json")

    with pytest.raises(CampusTransportError, match="Invalid JSON"):
        await _transport(session).request("GET", "/hostel/rooms")


@pytest.mark.asyncio
async def test_undecodable_body_on_success_is_an_error() -> None:
    session = _FakeSession(raw=b'{"data": [\xff\xfe]}')

    with pytest.raises(CampusTransportError, match="Invalid JSON") as excinfo:
        await _transport(session).request("GET", "/transportation/vehicles")

    assert excinfo.value.status_code == 200
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


@pytest.mark.asyncio
async def test_undecodable_error_body_falls_back_to_status() -> None:
    session = _FakeSession(status=502, raw=b"\xff\xfe gateway")

    with pytest.raises(CampusTransportError, match="HTTP 502 from /hostel/rooms"):
        await _transport(session).request("GET", "/hostel/rooms")


@pytest.mark.asyncio
async def test_network_errors_are_wrapped() -> None:
    session = _FakeSession()
    session.raise_exc = aiohttp.ClientConnectionError("connection refused")

    with pytest.raises(CampusTransportError, match="Request to /hostel/rooms failed"):
        await _transport(session).request("GET", "/hostel/rooms")


@pytest.mark.asyncio
async def test_timeouts_are_wrapped() -> None:
    session = _FakeSession()
    session.raise_exc = TimeoutError()

    with pytest.raises(CampusTransportError, match="timed out"):
        await _transport(session, request_timeout=2.5).request("GET", "/hostel/rooms")


@pytest.mark.asyncio
async def test_trace_logging_redacts_bodies(caplog: pytest.LogCaptureFixture) -> None:
    session = _FakeSession(body={"data": {"id": 1, "contact_phone": "+91 98450 00000"}, "success": True})
    caplog.set_level(logging.DEBUG, logger="campusdesk._transport")

    await _transport(session, api_trace_enabled=True).request(
        "POST", "/hostel/hostels", json_body={"name": "North", "contact_phone": "+91 98450 00000"}
    )

    assert "+91 98450 00000" not in caplog.text
    assert "<redacted>" in caplog.text


def test_unwrap_envelope_only_touches_envelopes() -> None:
    assert unwrap_envelope({"data": [1, 2], "success": True}) == [1, 2]
    assert unwrap_envelope({"data": {"id": 1}}) == {"id": 1}
    assert unwrap_envelope({"data": "x", "id": 4}) == {"data": "x", "id": 4}
    assert unwrap_envelope([1, 2]) == [1, 2]
