"""Custom exception hierarchy for campusdesk."""

from __future__ import annotations


class CampusError(Exception):
    """Base exception for all campusdesk errors."""


class CampusConfigError(CampusError):
    """Invalid or missing configuration."""


class CampusTransportError(CampusError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class CampusApiError(CampusError):
    """The API answered, but the payload could not be parsed into a model."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class OperationFailed(CampusError):
    """A store operation failed.

    This is the only failure kind a :class:`~campusdesk.state.store.DomainStore`
    re-raises to its callers.  ``message`` is the human-readable text that
    was also recorded in the store's ``error`` field.
    """

    def __init__(self, message: str, *, operation: str = "") -> None:
        self.message = message
        self.operation = operation
        super().__init__(message)


class RecordNotFoundError(OperationFailed, LookupError):
    """``update()`` was called for an id that is not in the local collection."""

    def __init__(self, collection: str, record_id: int) -> None:
        self.collection = collection
        self.record_id = record_id
        super().__init__(
            f"{collection} record {record_id} not found",
            operation=f"update {collection}",
        )


class StoreClosedError(OperationFailed):
    """The store was torn down; no further operations are accepted."""
