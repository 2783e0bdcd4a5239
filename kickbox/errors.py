"""Exceptions raised (or returned) by the Kickbox client."""

UNKNOWN_VERIFICATION_ERROR = "Unknown error verifying email"


class KickboxError(Exception):
    """Base exception for all Kickbox client errors."""


class BuildError(KickboxError):
    """The request could not be built, usually because of a malformed base URL."""


class TransportError(KickboxError):
    """The HTTP round trip failed (connection, timeout, DNS or read failure)."""


class EmptyResponseError(KickboxError):
    """The service answered with a zero-length body."""

    def __init__(self, message: str = "Empty body response received from service"):
        super().__init__(message)


class DecodeError(KickboxError):
    """The response body is not valid JSON or does not fit the result type."""


class ServiceError(KickboxError):
    """Logical failure reported by the service inside a decoded response.

    Never raised by the client itself; returned by ``error()`` on results.
    """

    def __init__(self, message: str = UNKNOWN_VERIFICATION_ERROR):
        self.message = message
        super().__init__(message)
