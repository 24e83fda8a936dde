class MobileTokenError(Exception):
    """Base error for the mobile token SDK."""


class ValidationError(MobileTokenError):
    """Raised when client-side validation fails."""


class TransportError(MobileTokenError):
    """Wraps transport-level failures when calling the mobile token backend."""

    def __init__(self, message: str, *, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class ResponseDecodeError(TransportError):
    """Raised when the response body cannot be decoded as JSON."""

    def __init__(
        self,
        message: str,
        *,
        original: Exception | None = None,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message, original=original)
        self.status_code = status_code
        self.body = body


class ProtocolError(MobileTokenError):
    """The server response violates the status/payload contract."""

    def __init__(
        self,
        description: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(description)
        self.description = description
        self.status_code = status_code
        self.body = body
