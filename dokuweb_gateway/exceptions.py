"""
Doku@WEB client errors

Every failure is terminal for the call that raised it; nothing is retried.
"""
from typing import Optional


class DokuwebError(Exception):
    """Base class for all Doku@WEB client failures"""


class AuthenticationError(DokuwebError):
    """Token request rejected or not answered"""

    def __init__(
        self,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        message: Optional[str] = None
    ) -> None:
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(message or f"Authentication failed: {status_code} {self.reason}".rstrip())


class PreconditionError(DokuwebError):
    """Operation invoked before authenticate() produced a token"""


class RemoteOperationError(DokuwebError):
    """SOAP call reported failure or returned an unusable payload"""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(message)


class TransportError(DokuwebError):
    """Non-2xx HTTP status or network failure on a REST call"""

    def __init__(
        self,
        operation: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        message: Optional[str] = None
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(
            message or f"{operation} REST error: {status_code} {self.reason}".rstrip()
        )


class ParseError(DokuwebError):
    """Expected element or JSON structure absent from a response"""


class ElementNotFoundError(ParseError):
    """No matching element in an XML response body"""
