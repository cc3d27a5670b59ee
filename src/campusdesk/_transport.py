"""JSON-over-HTTP transport for the campus administration API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from campusdesk._constants import (
    ENVELOPE_DATA_KEY,
    ENVELOPE_MESSAGE_KEY,
    ENVELOPE_SUCCESS_KEY,
    USER_AGENT,
)
from campusdesk._redact import redact_for_log
from campusdesk.config import CampusConfig
from campusdesk.exceptions import CampusTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the API collaborators.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


def _server_message(body: Any) -> str:
    """Pick the human-readable error message out of an error body, if any."""
    if not isinstance(body, dict):
        return ""
    message = body.get(ENVELOPE_MESSAGE_KEY) or body.get("error")
    if isinstance(message, str) and message.strip():
        return message.strip()
    errors = body.get("errors")
    if isinstance(errors, dict):
        # Validation errors: {"field": ["msg", ...], ...}
        flat = [str(msg) for msgs in errors.values() if isinstance(msgs, list) for msg in msgs]
        if flat:
            return "; ".join(flat)
    return ""


def unwrap_envelope(body: Any) -> Any:
    """Return the payload of a ``{"data": ..., "success": ...}`` envelope.

    Bodies that are not enveloped are returned unchanged.
    """
    if isinstance(body, dict) and ENVELOPE_DATA_KEY in body and (
        ENVELOPE_SUCCESS_KEY in body or ENVELOPE_MESSAGE_KEY in body or len(body) == 1
    ):
        return body[ENVELOPE_DATA_KEY]
    return body


class HttpTransport:
    """HTTP transport bound to one `aiohttp.ClientSession`."""

    def __init__(self, config: CampusConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "content-type": "application/json",
            "user-agent": USER_AGENT,
        }
        if self._config.api_token:
            headers["authorization"] = f"Bearer {self._config.api_token}"
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded, unwrapped payload.

        Returns ``None`` for empty bodies (e.g. ``204`` on delete).

        Raises
        ------
        CampusTransportError
            On network failure, non-2xx status or a body that is not JSON.
        """
        url = f"{self._config.base_url}{endpoint}"
        data = json.dumps(json_body) if json_body is not None else None

        _logger.debug("%s %s", method, url)
        if self._config.api_trace_enabled and json_body is not None:
            _logger.debug("%s %s body=%s", method, endpoint, redact_for_log(json_body))

        try:
            async with self._http.request(
                method,
                url,
                data=data,
                params=dict(params) if params else None,
                headers=self._headers(),
                timeout=self._timeout,
            ) as resp:
                status = resp.status
                raw = await resp.read()
        except aiohttp.ClientError as exc:
            raise CampusTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise CampusTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc

        body: Any = None
        if raw.strip():
            try:
                body = json.loads(raw.decode("utf-8"))
            except ValueError as exc:
                # Covers both UnicodeDecodeError and JSONDecodeError.
                if 200 <= status < 300:
                    raise CampusTransportError(
                        f"Invalid JSON from {endpoint}: {raw[:200].decode('utf-8', 'replace')}",
                        status_code=status,
                        endpoint=endpoint,
                    ) from exc

        if not 200 <= status < 300:
            message = _server_message(body) or f"HTTP {status} from {endpoint}"
            _logger.debug("%s %s failed with HTTP %s: %s", method, endpoint, status, message)
            raise CampusTransportError(message, status_code=status, endpoint=endpoint)

        if self._config.api_trace_enabled:
            _logger.debug("%s %s -> %s", method, endpoint, redact_for_log(body))

        if isinstance(body, dict) and body.get(ENVELOPE_SUCCESS_KEY) is False:
            raise CampusTransportError(
                _server_message(body) or f"{endpoint} reported failure",
                status_code=status,
                endpoint=endpoint,
            )

        return unwrap_envelope(body)
