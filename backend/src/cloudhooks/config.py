"""Webhook configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_HEADER = "X-Parse-Webhook-Key"


class ConfigurationError(Exception):
    """Raised when the webhook configuration is unusable."""

    pass


@dataclass
class WebhookConfig:
    """Settings for a webhook router and its server.

    The webhook key is the shared secret every request must present in
    the ``header_name`` header.
    """

    webhook_key: str | None
    header_name: str = DEFAULT_HEADER
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> WebhookConfig:
        """Create config from environment variables.

        Variables:
        - PARSE_WEBHOOK_KEY: shared secret (required)
        - CLOUDHOOKS_HEADER: header carrying the key
        - CLOUDHOOKS_HOST / CLOUDHOOKS_PORT: server bind address
        - CLOUDHOOKS_LOG_LEVEL: server log level
        """
        port = os.environ.get("CLOUDHOOKS_PORT", "8000")
        try:
            port_number = int(port)
        except ValueError:
            raise ConfigurationError(f"CLOUDHOOKS_PORT must be an integer, got {port!r}")

        return cls(
            webhook_key=os.environ.get("PARSE_WEBHOOK_KEY"),
            header_name=os.environ.get("CLOUDHOOKS_HEADER", DEFAULT_HEADER),
            host=os.environ.get("CLOUDHOOKS_HOST", "127.0.0.1"),
            port=port_number,
            log_level=os.environ.get("CLOUDHOOKS_LOG_LEVEL", "info"),
        )

    def validate(self) -> None:
        """Refuse to run without a webhook key.

        Without this check an unset key would only match requests that
        omit the header entirely.
        """
        if not self.webhook_key:
            raise ConfigurationError(
                "Webhook key is not configured. Set PARSE_WEBHOOK_KEY to the "
                "key shown in your app's webhook settings."
            )
        if not self.header_name:
            raise ConfigurationError("Webhook key header name must not be empty")
