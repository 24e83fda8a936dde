from __future__ import annotations

"""Configuration helpers for the mobile token Python SDK."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin, urlparse

DEFAULT_ACCEPT_LANGUAGE = "en"
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "mtoken-sdk-python"


def normalise_base(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"invalid base URL: {url}")
    if not url.endswith("/"):
        return url + "/"
    return url


def _trim(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(slots=True)
class MobileTokenConfig:
    """Holds configuration required to talk to the mobile token backend.

    ``base_url`` may be left unset, in which case the client falls back to the
    endpoint configured on the token provider.
    """

    base_url: Optional[str] = None
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        self.base_url = _trim(self.base_url)
        if self.base_url is not None:
            self.base_url = normalise_base(self.base_url)

        if not self.accept_language.strip():
            raise ValueError("accept_language is required")
        self.accept_language = self.accept_language.strip()

        if not self.user_agent.strip():
            raise ValueError("user_agent is required")

        if self.http_timeout <= 0:
            raise ValueError("http_timeout must be > 0")

    def api_url(self, path: str, base_url: Optional[str] = None) -> str:
        """Resolve an absolute API URL for the provided endpoint path."""
        if path.startswith("http://") or path.startswith("https://"):
            return path
        base = base_url or self.base_url
        if not base:
            raise ValueError("base URL is not configured")
        return urljoin(base, path.lstrip("/"))

    @classmethod
    def from_env(
        cls,
        *,
        base_url_env: str = "MTOKEN_BASE_URL",
        accept_language_env: str = "MTOKEN_ACCEPT_LANGUAGE",
        http_timeout_env: str = "MTOKEN_HTTP_TIMEOUT",
    ) -> "MobileTokenConfig":
        """Build a configuration from environment variables."""
        import os

        kwargs = {}
        base_url = os.environ.get(base_url_env)
        if base_url:
            kwargs["base_url"] = base_url
        accept_language = os.environ.get(accept_language_env)
        if accept_language:
            kwargs["accept_language"] = accept_language
        http_timeout = os.environ.get(http_timeout_env)
        if http_timeout:
            try:
                kwargs["http_timeout"] = float(http_timeout)
            except ValueError as exc:
                raise ValueError(f"invalid {http_timeout_env}: {http_timeout}") from exc
        return cls(**kwargs)
