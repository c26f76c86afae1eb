# vehicle_data/errors.py
from typing import Optional


class VehicleDataError(Exception):
    """Base for everything raised by the resolution engine."""


class InvalidInput(VehicleDataError, ValueError):
    """Caller precondition violated; nothing was sent upstream."""

    def __init__(self, message: str, *, field: str = "", reason: str = ""):
        super().__init__(message)
        self.field = field
        self.reason = reason


class PreconditionFailed(InvalidInput):
    """Cascade step attempted before its ancestors were chosen."""

    def __init__(self, message: str, *, field: str = ""):
        super().__init__(message, field=field, reason="order")


class NotFound(VehicleDataError):
    """Upstream answered but the vehicle could not be identified."""


class UpstreamError(VehicleDataError):
    def __init__(self, message: str, *, status: Optional[int] = None, url: str = ""):
        super().__init__(message)
        self.status = status
        self.url = url


class DecodeFailed(UpstreamError):
    """VIN registry unreachable or answered with a non-success status."""


class CatalogUnavailable(UpstreamError):
    """Catalog or year source unreachable; adapters degrade this to []."""
