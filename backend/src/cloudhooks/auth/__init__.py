"""Webhook key authentication for cloudhooks."""

from cloudhooks.auth.middleware import UNAUTHORIZED_MESSAGE, WebhookKeyMiddleware

__all__ = [
    "UNAUTHORIZED_MESSAGE",
    "WebhookKeyMiddleware",
]
