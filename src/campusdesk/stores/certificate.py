"""Certificate store: types, templates and issued certificates."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, cast

from campusdesk._api.certificate import CertificateApi
from campusdesk.models.certificate import (
    Certificate,
    CertificateDashboardStats,
    CertificateDraft,
    CertificateTemplate,
    CertificateTemplateDraft,
    CertificateType,
    CertificateTypeDraft,
    CertificateVerification,
)
from campusdesk.state.store import Collection, DomainStore, Patch

TYPES = "types"
TEMPLATES = "templates"
CERTIFICATES = "certificates"


class CertificateStore(DomainStore):
    """Store for the certificate area.

    ``template_data`` and ``data`` blobs are kept exactly as the server
    returned them.
    """

    def __init__(self, api: CertificateApi) -> None:
        super().__init__(
            "certificate",
            [
                Collection(TYPES, api.types, label="certificate type", plural="certificate types"),
                Collection(TEMPLATES, api.templates, label="certificate template", plural="certificate templates"),
                Collection(CERTIFICATES, api.certificates, label="certificate"),
            ],
            aggregate=api.dashboard,
        )
        self._api = api

    @property
    def types(self) -> tuple[CertificateType, ...]:
        return cast(tuple[CertificateType, ...], self.records(TYPES))

    @property
    def templates(self) -> tuple[CertificateTemplate, ...]:
        return cast(tuple[CertificateTemplate, ...], self.records(TEMPLATES))

    @property
    def certificates(self) -> tuple[Certificate, ...]:
        return cast(tuple[Certificate, ...], self.records(CERTIFICATES))

    @property
    def dashboard_stats(self) -> CertificateDashboardStats | None:
        return cast(CertificateDashboardStats | None, self.aggregate)

    async def refresh_all(self) -> None:
        await asyncio.gather(
            *(self.list(name) for name in self.collection_names),
            self.refresh_aggregate(),
        )

    async def fetch_types(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(TYPES, params)

    async def create_type(self, draft: CertificateTypeDraft) -> CertificateType:
        return cast(CertificateType, await self.create(TYPES, draft))

    async def update_type(self, type_id: int, patch: Patch) -> CertificateType:
        return cast(CertificateType, await self.update(TYPES, type_id, patch))

    async def delete_type(self, type_id: int) -> None:
        await self.remove(TYPES, type_id)

    async def fetch_templates(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(TEMPLATES, params)

    async def create_template(self, draft: CertificateTemplateDraft) -> CertificateTemplate:
        return cast(CertificateTemplate, await self.create(TEMPLATES, draft))

    async def update_template(self, template_id: int, patch: Patch) -> CertificateTemplate:
        return cast(CertificateTemplate, await self.update(TEMPLATES, template_id, patch))

    async def delete_template(self, template_id: int) -> None:
        await self.remove(TEMPLATES, template_id)

    async def fetch_certificates(self, params: Mapping[str, Any] | None = None) -> None:
        await self.list(CERTIFICATES, params)

    async def fetch_certificate(self, certificate_id: int) -> Certificate | None:
        return cast(Certificate | None, await self.refresh_record(CERTIFICATES, certificate_id))

    async def create_certificate(self, draft: CertificateDraft) -> Certificate:
        return cast(Certificate, await self.create(CERTIFICATES, draft))

    async def update_certificate(self, certificate_id: int, patch: Patch) -> Certificate:
        return cast(Certificate, await self.update(CERTIFICATES, certificate_id, patch))

    async def delete_certificate(self, certificate_id: int) -> None:
        await self.remove(CERTIFICATES, certificate_id)

    async def fetch_dashboard_stats(self) -> None:
        await self.refresh_aggregate()

    async def find_by_number(self, number: str) -> Certificate | None:
        """Look a certificate up by its printed number.

        This is a read: a miss or failure is recorded in ``error`` and
        ``None`` is returned.  A hit is folded into the certificates
        collection.
        """
        return await self.fetch_one(
            CERTIFICATES,
            lambda: self._api.find_by_number(number),
            operation="find certificate by number",
            fallback=f"Failed to find certificate {number}",
        )

    async def verify(self, code: str) -> CertificateVerification | None:
        """Check a verification code against the server.

        The answer is returned as-is and does not touch any collection.
        A failed call is recorded in ``error`` and gives ``None``.
        """
        return await self.read(
            lambda: self._api.verify_by_code(code),
            operation="verify certificate",
            fallback=f"Failed to verify certificate code {code}",
        )
