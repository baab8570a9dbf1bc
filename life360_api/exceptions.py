"""Exception classes for the life360_api package.

This module defines custom exceptions used throughout the life360_api package
so callers can tell transport failures, HTTP status failures and parse
failures apart and branch on them.
"""


class Life360ApiException(Exception):
    """Base exception for all Life360 API errors.

    Catching this exception will catch all life360_api-specific errors.
    """
    pass


class TransportError(Life360ApiException):
    """Raised when the request never produced an HTTP response.

    This can occur due to:
    - Connection refused or reset
    - Timeouts
    - TLS handshake failures
    """
    pass


class HttpStatusError(Life360ApiException):
    """Raised when the Life360 server answers with a non-2xx status.

    Attributes:
        resource: Human readable name of the resource that was requested
        status: Numeric HTTP status code
    """

    def __init__(self, resource: str, status: int):
        self.resource = resource
        self.status = status
        super().__init__(f"Failed to fetch {resource}: {status}")


class ParseError(Life360ApiException):
    """Raised when a response body is not valid JSON or lacks a required field."""
    pass


class SessionNotInitializedError(Life360ApiException):
    """Raised when a request is issued before the session transport exists."""
    pass
