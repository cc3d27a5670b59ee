"""Certificate endpoints under ``/certificate``."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from campusdesk._api._common import parse_model
from campusdesk._api._resource import RestAggregate, RestResource
from campusdesk._transport import Transport
from campusdesk.models.certificate import (
    Certificate,
    CertificateDashboardStats,
    CertificateTemplate,
    CertificateType,
    CertificateVerification,
)

PREFIX = "/certificate"


@dataclass(frozen=True, slots=True)
class CertificateApi:
    """Remote collaborators for the certificate area."""

    transport: Transport
    types: RestResource[CertificateType]
    templates: RestResource[CertificateTemplate]
    certificates: RestResource[Certificate]
    dashboard: RestAggregate[CertificateDashboardStats]

    @classmethod
    def over(cls, transport: Transport) -> CertificateApi:
        return cls(
            transport=transport,
            types=RestResource(transport, f"{PREFIX}/types", CertificateType),
            templates=RestResource(transport, f"{PREFIX}/templates", CertificateTemplate),
            certificates=RestResource(transport, f"{PREFIX}/certificates", Certificate),
            dashboard=RestAggregate(transport, f"{PREFIX}/dashboard/stats", CertificateDashboardStats),
        )

    async def find_by_number(self, number: str) -> Certificate:
        """``GET /certificate/certificates/number/{number}``."""
        endpoint = f"{PREFIX}/certificates/number/{quote(number.strip(), safe='')}"
        payload = await self.transport.request("GET", endpoint)
        return parse_model(Certificate, payload, endpoint=endpoint)

    async def verify_by_code(self, code: str) -> CertificateVerification:
        """``GET /certificate/verify/{code}``."""
        endpoint = f"{PREFIX}/verify/{quote(code.strip(), safe='')}"
        payload = await self.transport.request("GET", endpoint)
        return parse_model(CertificateVerification, payload, endpoint=endpoint)
