"""Certificate models.

Template layout lives in ``template_data``, a free-form JSON object that
the server and the rendering views agree on.  It is carried verbatim.
"""

from __future__ import annotations

from datetime import date

from pydantic import Field

from campusdesk.models._base import Aggregate, CampusBaseModel, CampusEnum, Draft, JsonBlob, Record


class CertificateStatus(CampusEnum):
    DRAFT = "draft"
    ISSUED = "issued"
    REVOKED = "revoked"
    UNKNOWN = "unknown"


def _default_template_data() -> JsonBlob:
    return {
        "layout": "portrait",
        "title": "CERTIFICATE",
        "subtitle": "This is to certify that",
        "signature_line": "Principal",
        "seal_position": "bottom_right",
    }


class CertificateType(Record):
    name: str = ""
    code: str = ""
    description: str | None = None
    active: bool = True


class CertificateTypeDraft(Draft):
    name: str
    code: str
    description: str | None = None
    active: bool = True


class CertificateTemplate(Record):
    name: str = ""
    certificate_type_id: int | None = None
    template_data: JsonBlob = Field(default_factory=dict)
    background_image: str | None = None
    signature_image: str | None = None
    seal_image: str | None = None
    font_family: str = "Arial"
    font_size: int = 12
    active: bool = True


class CertificateTemplateDraft(Draft):
    name: str
    certificate_type_id: int
    template_data: JsonBlob = Field(default_factory=_default_template_data)
    background_image: str | None = None
    signature_image: str | None = None
    seal_image: str | None = None
    font_family: str = "Arial"
    font_size: int = Field(default=12, gt=0)
    active: bool = True


class Certificate(Record):
    certificate_number: str = ""
    student_id: int | None = None
    certificate_type_id: int | None = None
    template_id: int | None = None
    issue_date: date | None = None
    verification_code: str | None = None
    status: CertificateStatus = CertificateStatus.DRAFT
    data: JsonBlob = Field(default_factory=dict)
    student_name: str | None = None
    certificate_type_name: str | None = None


class CertificateDraft(Draft):
    student_id: int
    certificate_type_id: int
    template_id: int
    issue_date: date | None = None
    status: CertificateStatus = CertificateStatus.DRAFT
    data: JsonBlob = Field(default_factory=dict)


class CertificateDashboardStats(Aggregate):
    total_certificates: int = 0
    issued_certificates: int = 0
    draft_certificates: int = 0
    revoked_certificates: int = 0
    total_types: int = 0
    total_templates: int = 0


class VerificationStatus(CampusEnum):
    VALID = "valid"
    INVALID = "invalid"
    EXPIRED = "expired"
    REVOKED = "revoked"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class CertificateVerification(CampusBaseModel):
    """Answer of the public verification endpoint.

    ``certificate`` is the server's printable summary of the certificate,
    not a :class:`Certificate` record, so it is carried as a blob.
    """

    is_valid: bool = False
    status: VerificationStatus = VerificationStatus.UNKNOWN
    message: str = ""
    certificate: JsonBlob | None = None

    @property
    def certificate_number(self) -> str | None:
        if self.certificate is None:
            return None
        number = self.certificate.get("certificate_number")
        return str(number) if number is not None else None
