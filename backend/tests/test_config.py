"""Tests for webhook configuration."""

import pytest

from cloudhooks import ConfigurationError, WebhookConfig, WebhookRouter
from cloudhooks.config import DEFAULT_HEADER


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "PARSE_WEBHOOK_KEY",
        "CLOUDHOOKS_HEADER",
        "CLOUDHOOKS_HOST",
        "CLOUDHOOKS_PORT",
        "CLOUDHOOKS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestWebhookConfig:
    def test_defaults(self, clean_env):
        config = WebhookConfig.from_env()
        assert config.webhook_key is None
        assert config.header_name == DEFAULT_HEADER == "X-Parse-Webhook-Key"
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.log_level == "info"

    def test_from_env(self, clean_env):
        clean_env.setenv("PARSE_WEBHOOK_KEY", "secret")
        clean_env.setenv("CLOUDHOOKS_HEADER", "X-Key")
        clean_env.setenv("CLOUDHOOKS_HOST", "0.0.0.0")
        clean_env.setenv("CLOUDHOOKS_PORT", "9000")
        clean_env.setenv("CLOUDHOOKS_LOG_LEVEL", "debug")

        config = WebhookConfig.from_env()
        assert config == WebhookConfig(
            webhook_key="secret",
            header_name="X-Key",
            host="0.0.0.0",
            port=9000,
            log_level="debug",
        )

    def test_invalid_port(self, clean_env):
        clean_env.setenv("CLOUDHOOKS_PORT", "eighty")
        with pytest.raises(ConfigurationError, match="CLOUDHOOKS_PORT"):
            WebhookConfig.from_env()

    @pytest.mark.parametrize("key", [None, ""])
    def test_validate_requires_key(self, key):
        with pytest.raises(ConfigurationError, match="PARSE_WEBHOOK_KEY"):
            WebhookConfig(webhook_key=key).validate()

    def test_validate_requires_header(self):
        with pytest.raises(ConfigurationError):
            WebhookConfig(webhook_key="k", header_name="").validate()


class TestRouterConfig:
    def test_router_refuses_missing_key(self, clean_env):
        with pytest.raises(ConfigurationError):
            WebhookRouter()

    def test_router_reads_env(self, clean_env):
        clean_env.setenv("PARSE_WEBHOOK_KEY", "from-env")
        router = WebhookRouter()
        assert router.config.webhook_key == "from-env"
