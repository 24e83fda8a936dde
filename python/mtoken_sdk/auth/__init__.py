"""Authentication utilities for mtoken_sdk."""

from .token_provider import (
    FACTOR_POSSESSION,
    FACTOR_POSSESSION_BIOMETRY,
    FACTOR_POSSESSION_KNOWLEDGE,
    AccessToken,
    Authentication,
    AuthHeader,
    TokenProvider,
)

__all__ = [
    "FACTOR_POSSESSION",
    "FACTOR_POSSESSION_BIOMETRY",
    "FACTOR_POSSESSION_KNOWLEDGE",
    "AccessToken",
    "AuthHeader",
    "Authentication",
    "TokenProvider",
]
