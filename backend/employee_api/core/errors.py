"""Error taxonomy shared by the client, service and HTTP layers.

``EmployeeApiError`` subclasses are the domain errors the HTTP layer maps to
status codes. ``UpstreamError`` is transport-level and only ever leaves the
service wrapped in an ``EmployeeServiceError``.
"""

from __future__ import annotations


class EmployeeApiError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmployeeNotFoundError(EmployeeApiError):
    """No employee matched the query."""


class EmployeeServiceError(EmployeeApiError):
    """Upstream failure, retry exhaustion or an unusable upstream response."""


class UpstreamError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(UpstreamError):
    def __init__(self, message: str = "Upstream rate limit exceeded") -> None:
        super().__init__(message, status_code=429)
