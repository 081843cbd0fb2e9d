"""Exceptions raised by the backing-store client."""


class InventoryClientError(Exception):
    """Base class for failures talking to the backing store."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class DataLoadError(InventoryClientError):
    """A tower, block, floor, unit or design list could not be fetched."""


class AssignmentError(InventoryClientError):
    """The assign-design operation was rejected or failed."""
