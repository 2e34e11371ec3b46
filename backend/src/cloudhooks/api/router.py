"""Webhook router: binds registered handlers to FastAPI routes."""

import json
import logging
from collections.abc import Callable
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response
from pydantic import ValidationError

from cloudhooks.auth import WebhookKeyMiddleware
from cloudhooks.config import WebhookConfig
from cloudhooks.hooks.pipeline import dispatch
from cloudhooks.hooks.registry import HookRegistry, derive_identifier
from cloudhooks.hooks.types import (
    FunctionFn,
    HookKind,
    HookRequest,
    TriggerFn,
    WebhookBody,
    route_path,
)
from cloudhooks.http import http_request

logger = logging.getLogger(__name__)


async def parse_body(request: Request) -> WebhookBody:
    """Parse the JSON body into a WebhookBody.

    An empty body is treated as ``{}``. Bodies that are not a JSON object
    are rejected with 400; they never reach the envelope layer.
    """
    raw = await request.body()
    if not raw.strip():
        return WebhookBody()

    try:
        data = json.loads(raw)
    except ValueError:
        raise HTTPException(400, "Request body is not valid JSON")
    if not isinstance(data, dict):
        raise HTTPException(400, "Request body must be a JSON object")

    try:
        return WebhookBody.model_validate(data)
    except ValidationError as e:
        raise HTTPException(400, f"Invalid webhook body: {e.errors()[0]['msg']}")


class WebhookRouter:
    """Owns the webhook FastAPI app and its registration table.

    Construct one per process at startup, register handlers, then serve
    ``router.app`` (or mount it into another app).

    Example:
        router = WebhookRouter(WebhookConfig(webhook_key="secret"))

        @router.define("hello")
        async def hello(request):
            return {"greeting": f"Hello {request.params['name']}"}
    """

    def __init__(self, config: WebhookConfig | None = None, title: str = "cloudhooks"):
        """Initialize the router.

        Args:
            config: Webhook configuration; read from the environment if None
            title: Title of the FastAPI app

        Raises:
            ConfigurationError: If no webhook key is configured
        """
        self.config = config if config is not None else WebhookConfig.from_env()
        self.config.validate()

        self.registry = HookRegistry()
        self.app = FastAPI(title=title)
        self.app.add_middleware(
            WebhookKeyMiddleware,
            webhook_key=self.config.webhook_key,
            header_name=self.config.header_name,
        )
        self.app.state.webhook_router = self

    @property
    def routes(self) -> dict[str, list[str]]:
        """Registered identifiers keyed by kind (``beforeSave``, ..., ``function``)."""
        return self.registry.as_dict()

    def paths(self) -> list[str]:
        """All bound webhook paths, grouped by kind in registration order."""
        return [
            route_path(kind, identifier)
            for kind in HookKind
            for identifier in self.registry.list_registered(kind)
        ]

    # --- Registration ---

    def register(
        self, kind: HookKind, identifier: Any, handler: TriggerFn | FunctionFn
    ) -> str:
        """Bind a handler to ``POST /<kind>_<identifier>``.

        Args:
            kind: Hook kind
            identifier: Class/function name, or an object exposing a class name
            handler: Trigger or cloud function

        Returns:
            The bound path

        Raises:
            DuplicateRegistrationError: If the kind/identifier pair is taken
            ValueError: If no identifier can be derived
        """
        name = derive_identifier(identifier)
        self.registry.add(kind, name)

        path = route_path(kind, name)
        self.app.add_api_route(
            path,
            self._endpoint(kind, name, handler),
            methods=["POST"],
            name=f"{kind.value}_{name}",
            response_model=None,
        )
        logger.debug("Registered %s", path)
        return path

    def register_before_save(self, identifier: Any, handler: TriggerFn) -> str:
        return self.register(HookKind.BEFORE_SAVE, identifier, handler)

    def register_after_save(self, identifier: Any, handler: TriggerFn) -> str:
        return self.register(HookKind.AFTER_SAVE, identifier, handler)

    def register_before_delete(self, identifier: Any, handler: TriggerFn) -> str:
        return self.register(HookKind.BEFORE_DELETE, identifier, handler)

    def register_after_delete(self, identifier: Any, handler: TriggerFn) -> str:
        return self.register(HookKind.AFTER_DELETE, identifier, handler)

    def register_function(self, name: Any, handler: FunctionFn) -> str:
        return self.register(HookKind.FUNCTION, name, handler)

    def register_job(self, name: str, handler: Callable[..., Any]) -> None:
        """Accept a background job registration without binding anything."""
        logger.warning("Background jobs are not supported; ignoring job '%s'", name)

    # --- Decorators ---

    def _decorator(self, kind: HookKind, identifier: Any) -> Callable:
        def decorator(fn):
            self.register(kind, identifier, fn)
            return fn

        return decorator

    def before_save(self, identifier: Any) -> Callable[[TriggerFn], TriggerFn]:
        return self._decorator(HookKind.BEFORE_SAVE, identifier)

    def after_save(self, identifier: Any) -> Callable[[TriggerFn], TriggerFn]:
        return self._decorator(HookKind.AFTER_SAVE, identifier)

    def before_delete(self, identifier: Any) -> Callable[[TriggerFn], TriggerFn]:
        return self._decorator(HookKind.BEFORE_DELETE, identifier)

    def after_delete(self, identifier: Any) -> Callable[[TriggerFn], TriggerFn]:
        return self._decorator(HookKind.AFTER_DELETE, identifier)

    def define(self, name: Any) -> Callable[[FunctionFn], FunctionFn]:
        return self._decorator(HookKind.FUNCTION, name)

    def job(self, name: str) -> Callable:
        def decorator(fn):
            self.register_job(name, fn)
            return fn

        return decorator

    # --- Egress ---

    http_request = staticmethod(http_request)

    # --- Internals ---

    def _endpoint(
        self, kind: HookKind, identifier: str, handler: TriggerFn | FunctionFn
    ) -> Callable:
        async def endpoint(request: Request) -> Response:
            body = await parse_body(request)
            hook_request = HookRequest(kind=kind, identifier=identifier, body=body)
            return await dispatch(handler, hook_request)

        endpoint.__name__ = f"{kind.value}_{identifier}"
        return endpoint
