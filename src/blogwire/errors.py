"""Error taxonomy shared by all adapters."""

from enum import Enum


class ErrorKind(str, Enum):
    """Kind carried by every error event."""

    TRANSPORT = "transport"
    PARSING = "parsing"
    AUTHENTICATION = "authentication"
    NOT_SUPPORTED = "not_supported"
    OTHER = "other"


class BlogError(RuntimeError):
    """Raised inside the core when a call cannot complete.

    Adapters catch it at the completion boundary and turn it into an error event.
    """

    kind = ErrorKind.OTHER

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation


class ParsingError(BlogError):
    """Raised when a response is present but structurally unexpected."""

    kind = ErrorKind.PARSING


class AuthenticationError(BlogError):
    """Raised when the credential exchange fails or is rejected."""

    kind = ErrorKind.AUTHENTICATION


class TransportError(BlogError):
    """Raised for faults reported by the server through an otherwise valid reply."""

    kind = ErrorKind.TRANSPORT

