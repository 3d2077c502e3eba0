"""Error taxonomy for the stats dashboard."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for failures surfaced to the user."""


class RequestFailed(DashboardError):
    """The API answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(DashboardError):
    """The request never produced a response (connection, DNS, timeout)."""


class MalformedResponse(DashboardError):
    """The response body is not JSON or does not match the snapshot shape."""
