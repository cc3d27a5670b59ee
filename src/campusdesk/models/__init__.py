"""Data models for campus API records, drafts and dashboard aggregates."""

from campusdesk.models._base import Aggregate, CampusBaseModel, CampusEnum, Draft, JsonBlob, Record, to_payload
from campusdesk.models.certificate import (
    Certificate,
    CertificateDashboardStats,
    CertificateDraft,
    CertificateStatus,
    CertificateTemplate,
    CertificateTemplateDraft,
    CertificateType,
    CertificateTypeDraft,
    CertificateVerification,
    VerificationStatus,
)
from campusdesk.models.hostel import (
    Hostel,
    HostelDashboardStats,
    HostelDraft,
    HostelType,
    MaintenanceRequest,
    MaintenanceRequestDraft,
    MessMenuItem,
    MessMenuItemDraft,
    RequestPriority,
    RequestStatus,
    Room,
    RoomAllocation,
    RoomAllocationDraft,
    RoomCategory,
    RoomCategoryDraft,
    RoomDraft,
    RoomStatus,
    VisitorLog,
    VisitorLogDraft,
    VisitorStatus,
)
from campusdesk.models.transportation import (
    Driver,
    DriverDraft,
    DriverStatus,
    FuelType,
    LicenseType,
    MaintenanceRecord,
    MaintenanceRecordDraft,
    MaintenanceStatus,
    PickupType,
    Route,
    RouteDraft,
    RouteStop,
    RouteStopDraft,
    RouteType,
    StudentTransport,
    StudentTransportDraft,
    TransportDashboardStats,
    Vehicle,
    VehicleDraft,
    VehicleRouteAssignment,
    VehicleRouteAssignmentDraft,
    VehicleStatus,
    VehicleType,
)

__all__ = [
    "Aggregate",
    "CampusBaseModel",
    "CampusEnum",
    "Certificate",
    "CertificateDashboardStats",
    "CertificateDraft",
    "CertificateStatus",
    "CertificateTemplate",
    "CertificateTemplateDraft",
    "CertificateType",
    "CertificateTypeDraft",
    "CertificateVerification",
    "Draft",
    "Driver",
    "DriverDraft",
    "DriverStatus",
    "FuelType",
    "Hostel",
    "HostelDashboardStats",
    "HostelDraft",
    "HostelType",
    "JsonBlob",
    "LicenseType",
    "MaintenanceRecord",
    "MaintenanceRecordDraft",
    "MaintenanceRequest",
    "MaintenanceRequestDraft",
    "MaintenanceStatus",
    "MessMenuItem",
    "MessMenuItemDraft",
    "PickupType",
    "Record",
    "RequestPriority",
    "RequestStatus",
    "Room",
    "RoomAllocation",
    "RoomAllocationDraft",
    "RoomCategory",
    "RoomCategoryDraft",
    "RoomDraft",
    "RoomStatus",
    "Route",
    "RouteDraft",
    "RouteStop",
    "RouteStopDraft",
    "RouteType",
    "StudentTransport",
    "StudentTransportDraft",
    "TransportDashboardStats",
    "Vehicle",
    "VehicleDraft",
    "VehicleRouteAssignment",
    "VehicleRouteAssignmentDraft",
    "VehicleStatus",
    "VehicleType",
    "VerificationStatus",
    "VisitorLog",
    "VisitorLogDraft",
    "VisitorStatus",
    "to_payload",
]
