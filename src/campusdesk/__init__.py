"""campusdesk - Async client-side stores for a campus administration API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("campusdesk")
except PackageNotFoundError:
    __version__ = "0+local"
from campusdesk.client import CampusClient
from campusdesk.config import CampusConfig
from campusdesk.exceptions import (
    CampusApiError,
    CampusConfigError,
    CampusError,
    CampusTransportError,
    OperationFailed,
    RecordNotFoundError,
    StoreClosedError,
)
from campusdesk.state.reducer import StoreSnapshot
from campusdesk.state.store import Collection, DomainStore
from campusdesk.stores import CertificateStore, HostelStore, TransportationStore

__all__ = [
    "__version__",
    "CampusApiError",
    "CampusClient",
    "CampusConfig",
    "CampusConfigError",
    "CampusError",
    "CampusTransportError",
    "CertificateStore",
    "Collection",
    "DomainStore",
    "HostelStore",
    "OperationFailed",
    "RecordNotFoundError",
    "StoreClosedError",
    "StoreSnapshot",
    "TransportationStore",
]
