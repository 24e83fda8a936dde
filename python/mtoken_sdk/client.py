from __future__ import annotations

"""High-level asynchronous client for fetching, authorizing and rejecting operations."""

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from .auth.token_provider import Authentication, TokenProvider
from .config import MobileTokenConfig, normalise_base
from .errors import TransportError, ValidationError
from .models import OperationEnvelope, RejectionReason, UserOperation
from .request import RequestProcessor, build_signed_request
from .response import classify

OPERATION_LIST_ENDPOINT = "api/auth/token/app/operation/list"
OPERATION_DETAIL_ENDPOINT = "api/auth/token/app/operation/detail"
OPERATION_AUTHORIZE_ENDPOINT = "api/auth/token/app/operation/authorize"
OPERATION_REJECT_ENDPOINT = "api/auth/token/app/operation/cancel"

POSSESSION_TOKEN_NAME = "possession_universal"

logger = logging.getLogger(__name__)


class MobileTokenClient:
    """Fetches, authorizes and rejects operations on the mobile token backend.

    Every call obtains a token from ``token_provider``, signs one POST request
    with a freshly generated header and classifies the JSON response. Domain
    errors are returned as ``OperationEnvelope`` instances with ``status ==
    "ERROR"``; transport and protocol failures raise.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        config: Optional[MobileTokenConfig] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialise the client.

        The base URL comes from ``config.base_url`` or, when unset, from the
        provider's ``base_endpoint_url`` attribute.
        """
        self._config = config or MobileTokenConfig()
        self._token_provider = token_provider
        base_url = self._config.base_url or getattr(token_provider, "base_endpoint_url", None)
        if not base_url:
            raise ValueError("base URL is required when the token provider has no endpoint")
        self._base_url = normalise_base(base_url)
        self._client = client or httpx.AsyncClient(timeout=self._config.http_timeout)
        self._accept_language = self._config.accept_language

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def accept_language(self) -> str:
        """Language sent as ``Accept-Language``; server texts are localized by it.

        The value is read once at the start of each call. Changing it while calls
        are in flight is not synchronized, so a concurrent call may go out with
        either value. Pass ``accept_language`` to an individual call to avoid
        sharing this setting.
        """
        return self._accept_language

    @accept_language.setter
    def accept_language(self, value: str) -> None:
        if not value or not value.strip():
            raise ValueError("accept_language is required")
        self._accept_language = value.strip()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "MobileTokenClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def operation_list(
        self,
        *,
        request_processor: Optional[RequestProcessor] = None,
        accept_language: Optional[str] = None,
    ) -> OperationEnvelope[List[UserOperation]]:
        """Retrieve pending operations for the activated user."""
        return await self._post_signed_with_token(
            OPERATION_LIST_ENDPOINT,
            {},
            Authentication.possession(),
            POSSESSION_TOKEN_NAME,
            expect_payload=True,
            payload_type=List[UserOperation],
            request_processor=request_processor,
            accept_language=accept_language,
        )

    async def operation_detail(
        self,
        operation_id: str,
        *,
        request_processor: Optional[RequestProcessor] = None,
        accept_language: Optional[str] = None,
    ) -> OperationEnvelope[UserOperation]:
        """Retrieve a single operation by its ID."""
        operation_id = _require("operation_id", operation_id)
        return await self._post_signed_with_token(
            OPERATION_DETAIL_ENDPOINT,
            {"requestObject": {"id": operation_id}},
            Authentication.possession(),
            POSSESSION_TOKEN_NAME,
            expect_payload=True,
            payload_type=UserOperation,
            request_processor=request_processor,
            accept_language=accept_language,
        )

    async def authorize(
        self,
        operation: UserOperation,
        authentication: Authentication,
        *,
        request_processor: Optional[RequestProcessor] = None,
        accept_language: Optional[str] = None,
    ) -> OperationEnvelope[Any]:
        """Approve an operation.

        ``authentication`` must use one of the factors listed in the operation's
        ``allowed_signature_type``. The factors are bound to the token header,
        the body only identifies the operation.
        """
        if not isinstance(operation, UserOperation):
            raise ValidationError("operation must be UserOperation")
        if not operation.allowed_signature_type.allows(authentication):
            raise ValidationError(
                f"{authentication.signature_factor} authentication is not allowed for operation "
                f"{operation.id}; allowed: {', '.join(operation.allowed_signature_type.variants)}"
            )
        return await self._post_signed_with_token(
            OPERATION_AUTHORIZE_ENDPOINT,
            {"requestObject": {"id": operation.id, "data": operation.data}},
            authentication,
            POSSESSION_TOKEN_NAME,
            expect_payload=False,
            request_processor=request_processor,
            accept_language=accept_language,
        )

    async def reject(
        self,
        operation_id: str,
        reason: Union[RejectionReason, str] = RejectionReason.UNKNOWN,
        *,
        request_processor: Optional[RequestProcessor] = None,
        accept_language: Optional[str] = None,
    ) -> OperationEnvelope[Any]:
        """Reject an operation with an enum-like reason (max 32 characters)."""
        operation_id = _require("operation_id", operation_id)
        reason = _require("reason", str(reason))
        if len(reason) > 32:
            raise ValidationError("reason must be at most 32 characters")
        return await self._post_signed_with_token(
            OPERATION_REJECT_ENDPOINT,
            {"requestObject": {"id": operation_id, "reason": reason}},
            Authentication.possession(),
            POSSESSION_TOKEN_NAME,
            expect_payload=False,
            request_processor=request_processor,
            accept_language=accept_language,
        )

    async def _post_signed_with_token(
        self,
        endpoint_path: str,
        body: Dict[str, Any],
        authentication: Authentication,
        token_name: str,
        *,
        expect_payload: bool,
        payload_type: Any = None,
        request_processor: Optional[RequestProcessor] = None,
        accept_language: Optional[str] = None,
    ) -> OperationEnvelope:
        url = self._config.api_url(endpoint_path, self._base_url)
        request = await build_signed_request(
            self._token_provider,
            url,
            body,
            token_name,
            authentication,
            accept_language=accept_language or self._accept_language,
            user_agent=self._config.user_agent,
            request_processor=request_processor,
        )

        try:
            response = await self._client.send(request)
        except httpx.HTTPError as exc:
            raise TransportError(f"failed to call {endpoint_path}", original=exc) from exc

        logger.debug("%s responded with http status %s", endpoint_path, response.status_code)
        return classify(
            response.text,
            expect_payload,
            payload_type,
            status_code=response.status_code,
        )


def _require(name: str, value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{name} is required")
    return value.strip()


__all__ = [
    "MobileTokenClient",
    "OPERATION_AUTHORIZE_ENDPOINT",
    "OPERATION_DETAIL_ENDPOINT",
    "OPERATION_LIST_ENDPOINT",
    "OPERATION_REJECT_ENDPOINT",
    "POSSESSION_TOKEN_NAME",
]
