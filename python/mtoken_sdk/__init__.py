"""Public exports for the mobile token Python SDK."""

from .auth import AccessToken, Authentication, AuthHeader, TokenProvider
from .client import MobileTokenClient
from .config import MobileTokenConfig
from .errors import (
    MobileTokenError,
    ProtocolError,
    ResponseDecodeError,
    TransportError,
    ValidationError,
)
from .models import (
    KnownRestApiError,
    OperationEnvelope,
    RejectionReason,
    ResponseError,
    UserOperation,
)
from .request import build_signed_request
from .response import classify

__all__ = [
    "AccessToken",
    "AuthHeader",
    "Authentication",
    "KnownRestApiError",
    "MobileTokenClient",
    "MobileTokenConfig",
    "MobileTokenError",
    "OperationEnvelope",
    "ProtocolError",
    "RejectionReason",
    "ResponseDecodeError",
    "ResponseError",
    "TokenProvider",
    "TransportError",
    "UserOperation",
    "ValidationError",
    "build_signed_request",
    "classify",
]
