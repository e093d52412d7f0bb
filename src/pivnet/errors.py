"""Exception hierarchy for API and lookup failures."""

from __future__ import annotations

from typing import Optional


SERVICE_NAME = "Pivnet"


class PivnetError(Exception):
    """Base class for errors raised by the client library."""


class StatusCodeError(PivnetError):
    """The server answered with a status code other than the expected one."""

    def __init__(
        self,
        status_code: int,
        expected_status: int,
        method: str = "",
        path: str = "",
        service: str = SERVICE_NAME,
    ) -> None:
        self.status_code = status_code
        self.expected_status = expected_status
        self.method = method
        self.path = path
        self.service = service
        super().__init__(
            f"{service} returned status code: {status_code} "
            f"for the request - expected {expected_status}"
        )


class DecodeError(PivnetError):
    """The response body could not be decoded into the expected shape."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(f"{message} (path: {path})" if path else message)


class NotFoundError(PivnetError):
    """A human-readable identifier matched nothing in a list response."""

    def __init__(self, kind: str, identifier: object, scope: Optional[str] = None) -> None:
        self.kind = kind
        self.identifier = identifier
        self.scope = scope
        message = f"{kind} not found: {identifier!r}"
        if scope:
            message = f"{message} (product: {scope})"
        super().__init__(message)
