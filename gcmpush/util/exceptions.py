from typing import Optional


class GcmError(Exception):
    """Base class of every error raised by gcmpush."""


class InvalidArgumentError(GcmError, ValueError):
    """A caller supplied a structurally invalid value."""


class KeyConflictError(GcmError, ValueError):
    """A data or notification key was added twice."""


class TransportError(GcmError):
    """The HTTP request could not be completed."""


class GatewayError(GcmError):
    """
    The gateway rejected the request with a well known status code.

    Attributes:
        status_code (int): The HTTP status returned by the gateway.
    """

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code: int = status_code


class AuthenticationError(GatewayError):
    def __init__(self) -> None:
        super().__init__('401 Forbidden; Authentication Error', 401)


class InvalidMessageError(GatewayError):
    def __init__(self) -> None:
        super().__init__('400 Bad Request; invalid message', 400)


class ServerError(GatewayError):
    def __init__(self) -> None:
        super().__init__('500 Internal Server Error', 500)


class ServiceUnavailableError(GatewayError):
    """
    The gateway is temporarily unavailable.

    Attributes:
        retry_after (Optional[str]): Raw value of the Retry-After header, if the gateway sent one.
    """

    def __init__(self, retry_after: Optional[str] = None) -> None:
        message = '503 Server Unavailable'
        if retry_after:
            message += f'; Retry After: {retry_after}'
        super().__init__(message, 503)
        self.retry_after: Optional[str] = retry_after


class MalformedResponseError(GcmError):
    """The gateway reply was missing, not a JSON object or lacked required fields."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code: Optional[int] = status_code
