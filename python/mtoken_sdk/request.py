from __future__ import annotations

"""Builds HTTP requests signed with a token from the authentication SDK."""

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from .auth.token_provider import Authentication, TokenProvider

JSON_CONTENT_TYPE = "application/json"

RequestProcessor = Callable[[httpx.Request], httpx.Request]

logger = logging.getLogger(__name__)


async def build_signed_request(
    token_provider: TokenProvider,
    url: str,
    body: Optional[Dict[str, Any]],
    token_name: str,
    authentication: Authentication,
    *,
    accept_language: str,
    user_agent: str,
    request_processor: Optional[RequestProcessor] = None,
) -> httpx.Request:
    """Assemble a POST request carrying a freshly generated token header.

    The provider is asked for the named token exactly once and for one header.
    Provider failures propagate unchanged. ``request_processor`` runs last and
    should only touch headers; the body is not guaranteed to survive other edits.
    """
    logger.debug("requesting token %s for %s", token_name, url)
    token = await token_provider.request_access_token(token_name, authentication)
    auth_header = await token_provider.generate_header_for_token(token.token_name)

    headers = {
        "Accept": JSON_CONTENT_TYPE,
        "Content-Type": JSON_CONTENT_TYPE,
        "Accept-Language": accept_language,
        "User-Agent": user_agent,
    }
    headers.update(auth_header.as_dict())

    request = httpx.Request("POST", url, json=body or {}, headers=headers)
    if request_processor is not None:
        request = request_processor(request)
    return request


__all__ = ["JSON_CONTENT_TYPE", "RequestProcessor", "build_signed_request"]
