"""cloudhooks: run Cloud Code triggers and functions as webhook routes.

Triggers (beforeSave, afterSave, beforeDelete, afterDelete) and cloud
functions registered on a WebhookRouter are served as POST endpoints that
the server calls through its Webhooks API.
"""

from cloudhooks.api.responses import error_response, success_response
from cloudhooks.api.router import WebhookRouter
from cloudhooks.config import ConfigurationError, WebhookConfig
from cloudhooks.hooks import (
    DuplicateRegistrationError,
    HookError,
    HookKind,
    HookRegistry,
    HookRequest,
)
from cloudhooks.http import HttpRequestError, HttpResponse, http_request
from cloudhooks.objects import ParseObject, decode, encode

__all__ = [
    "ConfigurationError",
    "DuplicateRegistrationError",
    "HookError",
    "HookKind",
    "HookRegistry",
    "HookRequest",
    "HttpRequestError",
    "HttpResponse",
    "ParseObject",
    "WebhookConfig",
    "WebhookRouter",
    "decode",
    "encode",
    "error_response",
    "http_request",
    "success_response",
]
