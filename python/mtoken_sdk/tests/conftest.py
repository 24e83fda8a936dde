from __future__ import annotations

import copy

import pytest

from mtoken_sdk.auth import AccessToken, Authentication, AuthHeader

BASE_ENDPOINT_URL = "https://example.com/enrollment-server"
TOKEN_HEADER = "X-PowerAuth-Token"

OPERATION = {
    "id": "op-1",
    "name": "payment",
    "data": "A1*A100CZK*Q238400856/0300**D20190629*NUtility Bill Payment - 05/2019",
    "status": "PENDING",
    "operationCreated": "2024-01-01T00:00:00Z",
    "operationExpires": "2024-01-01T00:05:00Z",
    "allowedSignatureType": {
        "type": "2FA",
        "variants": ["possession_knowledge", "possession_biometry"],
    },
    "formData": {
        "title": "Confirm payment",
        "message": "Hello, please confirm the following payment.",
        "resultTexts": {"success": "Payment was confirmed"},
        "attributes": [
            {
                "type": "AMOUNT",
                "id": "operation.amount",
                "label": {"id": "operation.amount", "value": "Amount"},
                "amount": 100.0,
                "currency": "CZK",
                "amountFormatted": "100,00",
                "currencyFormatted": "Kč",
            },
            {
                "type": "KEY_VALUE",
                "id": "operation.account",
                "label": {"id": "operation.account", "value": "To Account"},
                "value": "238400856/0300",
            },
            {
                "type": "HEADING",
                "id": "operation.heading",
                "label": {"id": "operation.heading", "value": "Details"},
            },
            {
                "type": "PARTY_INFO",
                "id": "operation.partyInfo",
                "label": {"id": "operation.partyInfo", "value": "Merchant"},
                "partyInfo": {"name": "Utility Co.", "websiteUrl": "https://utility.example"},
            },
        ],
    },
}


class StubTokenProvider:
    """Returns deterministic tokens and headers and records every call."""

    base_endpoint_url = BASE_ENDPOINT_URL

    def __init__(self, *, error: Exception | None = None) -> None:
        self.error = error
        self.token_requests: list[tuple[str, Authentication]] = []
        self.header_requests: list[str] = []

    async def request_access_token(
        self, token_name: str, authentication: Authentication
    ) -> AccessToken:
        self.token_requests.append((token_name, authentication))
        if self.error is not None:
            raise self.error
        return AccessToken(token_name=token_name, value=f"{token_name}-secret")

    async def generate_header_for_token(self, token_name: str) -> AuthHeader:
        self.header_requests.append(token_name)
        nonce = len(self.header_requests)
        return AuthHeader(
            key=TOKEN_HEADER,
            value=f'PowerAuth version="3.1", token_id="{token_name}", nonce="{nonce}"',
        )


@pytest.fixture
def token_provider() -> StubTokenProvider:
    return StubTokenProvider()


@pytest.fixture
def failing_token_provider() -> StubTokenProvider:
    return StubTokenProvider(error=RuntimeError("activation missing"))


@pytest.fixture
def operation_payload() -> dict:
    return copy.deepcopy(OPERATION)
