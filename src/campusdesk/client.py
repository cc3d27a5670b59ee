"""High-level async client for the campus administration API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from campusdesk._api.certificate import CertificateApi
from campusdesk._api.hostel import HostelApi
from campusdesk._api.transportation import TransportationApi
from campusdesk._transport import HttpTransport, Transport
from campusdesk.config import CampusConfig
from campusdesk.exceptions import CampusError
from campusdesk.stores.certificate import CertificateStore
from campusdesk.stores.hostel import HostelStore
from campusdesk.stores.transportation import TransportationStore

_logger = logging.getLogger(__name__)


class CampusClient:
    """Async client that owns the HTTP session and hands out area stores.

    Each call to :meth:`transportation`, :meth:`hostel` or
    :meth:`certificates` returns a fresh store; the caller owns it and
    closes it when the screen using it goes away.

    Usage::

        async with CampusClient(CampusConfig.from_env()) as client:
            store = client.transportation()
            await store.refresh_all()
            print(store.vehicles)
            store.close()
    """

    def __init__(
        self,
        config: CampusConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or CampusConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None

    @property
    def config(self) -> CampusConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CampusClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        _logger.debug("Campus client opened against %s", self._config.base_url)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._external_transport:
            return
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise CampusError("Client not initialized. Use 'async with CampusClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Stores
    # ------------------------------------------------------------------

    def transportation(self) -> TransportationStore:
        return TransportationStore(TransportationApi.over(self._require_transport()))

    def hostel(self) -> HostelStore:
        return HostelStore(HostelApi.over(self._require_transport()))

    def certificates(self) -> CertificateStore:
        return CertificateStore(CertificateApi.over(self._require_transport()))
