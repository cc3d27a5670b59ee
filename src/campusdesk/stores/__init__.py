"""Per-area stores built on :class:`~campusdesk.state.store.DomainStore`."""

from campusdesk.stores.certificate import CertificateStore
from campusdesk.stores.hostel import HostelStore
from campusdesk.stores.transportation import TransportationStore

__all__ = ["CertificateStore", "HostelStore", "TransportationStore"]
