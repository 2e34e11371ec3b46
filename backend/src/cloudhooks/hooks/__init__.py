"""cloudhooks lifecycle hook system.

Handlers are registered per kind and exposed as webhook routes:
- beforeSave: may modify the object (echoed back) or reject the save
- afterSave: notification, answered immediately
- beforeDelete: may reject the delete
- afterDelete: notification, answered immediately
- function: invokable cloud function returning a result

Usage:
    from cloudhooks import WebhookRouter, HookRequest

    router = WebhookRouter()

    @router.before_save("Post")
    def check_title(request: HookRequest) -> None:
        if not request.object.get("title"):
            request.error("A post needs a title")
        else:
            request.success()
"""

from cloudhooks.hooks.registry import (
    DuplicateRegistrationError,
    HookRegistry,
    derive_identifier,
)
from cloudhooks.hooks.types import (
    FunctionFn,
    HookError,
    HookKind,
    HookRequest,
    Outcome,
    TriggerFn,
    WebhookBody,
    route_path,
)

__all__ = [
    "DuplicateRegistrationError",
    "FunctionFn",
    "HookError",
    "HookKind",
    "HookRegistry",
    "HookRequest",
    "Outcome",
    "TriggerFn",
    "WebhookBody",
    "derive_identifier",
    "route_path",
]
