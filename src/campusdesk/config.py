"""Client configuration for campusdesk."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from campusdesk._constants import BASE_URL, DEFAULT_REQUEST_TIMEOUT
from campusdesk.exceptions import CampusConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class CampusConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        API base URL, without trailing slash (e.g. ``"https://erp.example.edu/api"``).
    api_token : str or None
        Bearer token sent as ``Authorization`` header.  Obtaining it is the
        job of the login flow, which is outside this library.
    request_timeout : float
        Total timeout in seconds for one HTTP request.
    api_trace_enabled : bool
        Log (redacted) request and response bodies at DEBUG level.
    """

    base_url: str = BASE_URL
    api_token: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.base_url.strip():
            raise CampusConfigError("base_url must be non-empty")
        if self.request_timeout <= 0:
            raise CampusConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        # Normalize so endpoint paths can always start with "/".
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> CampusConfig:
        """Create configuration from environment variables.

        Reads ``CAMPUS_API_URL``, ``CAMPUS_API_TOKEN``,
        ``CAMPUS_REQUEST_TIMEOUT`` and ``CAMPUS_API_TRACE_ENABLED``.
        Explicit keyword arguments override environment values.

        Raises
        ------
        CampusConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        url = env.get("CAMPUS_API_URL")
        if url is not None:
            config_kwargs["base_url"] = url

        token = env.get("CAMPUS_API_TOKEN")
        if token:
            config_kwargs["api_token"] = token

        timeout_env = env.get("CAMPUS_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise CampusConfigError(f"CAMPUS_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(env.get("CAMPUS_API_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
