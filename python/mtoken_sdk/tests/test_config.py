import pytest

from mtoken_sdk import MobileTokenConfig


def test_defaults():
    config = MobileTokenConfig()
    assert config.base_url is None
    assert config.accept_language == "en"
    assert config.http_timeout == 30.0
    assert config.user_agent == "mtoken-sdk-python"


def test_base_url_gets_trailing_slash():
    config = MobileTokenConfig(base_url="https://example.com/enrollment-server")
    assert config.base_url == "https://example.com/enrollment-server/"


def test_blank_base_url_is_unset():
    assert MobileTokenConfig(base_url="  ").base_url is None


def test_rejects_invalid_values():
    with pytest.raises(ValueError):
        MobileTokenConfig(base_url="ftp://example.com")
    with pytest.raises(ValueError):
        MobileTokenConfig(base_url="not a url")
    with pytest.raises(ValueError):
        MobileTokenConfig(accept_language=" ")
    with pytest.raises(ValueError):
        MobileTokenConfig(http_timeout=0)
    with pytest.raises(ValueError):
        MobileTokenConfig(user_agent="")


def test_api_url():
    config = MobileTokenConfig(base_url="https://example.com/api")
    assert config.api_url("v1/list") == "https://example.com/api/v1/list"
    assert config.api_url("/v1/list") == "https://example.com/api/v1/list"
    assert config.api_url("https://other.example/x") == "https://other.example/x"
    assert (
        config.api_url("v1/list", "https://override.example/root/")
        == "https://override.example/root/v1/list"
    )


def test_api_url_without_base():
    with pytest.raises(ValueError):
        MobileTokenConfig().api_url("v1/list")


def test_from_env(monkeypatch):
    monkeypatch.setenv("MTOKEN_BASE_URL", "https://example.com/server")
    monkeypatch.setenv("MTOKEN_ACCEPT_LANGUAGE", "cs")
    monkeypatch.setenv("MTOKEN_HTTP_TIMEOUT", "5")
    config = MobileTokenConfig.from_env()
    assert config.base_url == "https://example.com/server/"
    assert config.accept_language == "cs"
    assert config.http_timeout == 5.0


def test_from_env_invalid_timeout(monkeypatch):
    monkeypatch.delenv("MTOKEN_BASE_URL", raising=False)
    monkeypatch.setenv("MTOKEN_HTTP_TIMEOUT", "soon")
    with pytest.raises(ValueError):
        MobileTokenConfig.from_env()
