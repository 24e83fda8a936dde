from __future__ import annotations

"""Token provider interface consumed by the mobile token client."""

from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

FACTOR_POSSESSION = "possession"
FACTOR_POSSESSION_KNOWLEDGE = "possession_knowledge"
FACTOR_POSSESSION_BIOMETRY = "possession_biometry"


@dataclass(frozen=True, slots=True)
class AccessToken:
    """Opaque handle to a reusable token issued by the authentication SDK."""

    token_name: str
    value: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True, slots=True)
class AuthHeader:
    """Single-use authentication header generated for an access token."""

    key: str
    value: str = field(repr=False)

    def as_dict(self) -> dict[str, str]:
        return {self.key: self.value}


@dataclass(frozen=True, slots=True)
class Authentication:
    """Authentication policy describing which factors a token must be bound to.

    Instances are passed verbatim to the token provider. Use the factory
    constructors rather than building one directly.
    """

    signature_factor: str = FACTOR_POSSESSION
    password: Optional[str] = field(default=None, repr=False)
    biometry_prompt: Optional[str] = None

    @classmethod
    def possession(cls) -> "Authentication":
        return cls(signature_factor=FACTOR_POSSESSION)

    @classmethod
    def possession_with_password(cls, password: str) -> "Authentication":
        if not password:
            raise ValueError("password is required")
        return cls(signature_factor=FACTOR_POSSESSION_KNOWLEDGE, password=password)

    @classmethod
    def possession_with_biometry(cls, prompt: Optional[str] = None) -> "Authentication":
        return cls(signature_factor=FACTOR_POSSESSION_BIOMETRY, biometry_prompt=prompt)

    @property
    def is_two_factor(self) -> bool:
        return self.signature_factor != FACTOR_POSSESSION


@runtime_checkable
class TokenProvider(Protocol):
    """Capabilities the client needs from the external authentication SDK.

    Implementations own token storage, caching and retry policy. Concurrent
    requests for the same ``token_name`` may reach the provider; it is
    responsible for serializing or deduplicating them.

    A provider may also expose a ``base_endpoint_url`` attribute which the
    client uses when no explicit base URL is configured.
    """

    async def request_access_token(
        self, token_name: str, authentication: Authentication
    ) -> AccessToken:
        """Get or create the named token under the given authentication policy."""
        ...

    async def generate_header_for_token(self, token_name: str) -> AuthHeader:
        """Generate a one-time transport header for the named token."""
        ...
