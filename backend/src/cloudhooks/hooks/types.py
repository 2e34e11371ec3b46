"""Hook system types for cloudhooks.

Defines the core data structures shared by the registry and the pipeline:
- HookKind: the five trigger kinds, whose values are the route prefixes
- WebhookBody: the inbound JSON envelope
- HookRequest: per-request context handed to handlers
- HookError / Outcome: rejection payloads and settled function results
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from starlette.responses import Response

from cloudhooks.objects import ParseObject


class HookKind(Enum):
    """The trigger kind of a registered handler."""

    BEFORE_SAVE = "beforeSave"
    AFTER_SAVE = "afterSave"
    BEFORE_DELETE = "beforeDelete"
    AFTER_DELETE = "afterDelete"
    FUNCTION = "function"


def route_path(kind: HookKind, identifier: str) -> str:
    """Path a handler is bound to, e.g. ``/beforeSave_Post``."""
    return f"/{kind.value}_{identifier}"


class WebhookBody(BaseModel):
    """Inbound webhook envelope.

    Unknown fields (e.g. ``triggerName``) are kept but not interpreted.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    object_: dict[str, Any] | None = Field(default=None, alias="object")
    original: dict[str, Any] | None = None
    update: dict[str, Any] | None = None
    user: dict[str, Any] | None = None
    master: bool | None = None
    params: dict[str, Any] | None = None
    installation_id: str | None = Field(default=None, alias="installationId")


class HookError(Exception):
    """Raised by a cloud function to reject with an error payload.

    The payload is sent verbatim as ``{"error": payload}``.
    """

    def __init__(self, payload: Any = None):
        super().__init__(payload)
        self.payload = payload


class ResponseSlot:
    """Holds the single response of a request.

    The first response sent wins; later sends are dropped.
    """

    def __init__(self) -> None:
        self._response: Response | None = None
        self._event = asyncio.Event()

    @property
    def sent(self) -> bool:
        return self._response is not None

    def send(self, response: Response) -> bool:
        if self._response is not None:
            return False
        self._response = response
        self._event.set()
        return True

    async def wait(self) -> Response:
        await self._event.wait()
        return self._response


Responder = Callable[..., None]


def _not_installed(data: Any = None) -> None:
    raise RuntimeError("Response methods are not installed for this request")


@dataclass
class HookRequest:
    """Runtime context passed to every handler.

    Attributes:
        kind: Trigger kind of the route
        identifier: Class or function name the route was registered for
        body: Raw inbound envelope (never modified)
        object: Inflated object (save/delete kinds)
        user: Inflated acting user, if the request carried one
        master: Whether the caller used the master key
        params: Function arguments (function kind)
        installation_id: Installation that originated the request
        success: Sends ``{"success": data}``
        error: Sends ``{"error": data}``
    """

    kind: HookKind
    identifier: str
    body: WebhookBody = field(default_factory=WebhookBody)
    object: ParseObject | None = None
    user: ParseObject | None = None
    master: bool | None = None
    params: dict[str, Any] | None = None
    installation_id: str | None = None
    success: Responder = field(default=_not_installed, repr=False)
    error: Responder = field(default=_not_installed, repr=False)
    response: ResponseSlot = field(default_factory=ResponseSlot, repr=False)

    @property
    def path(self) -> str:
        return route_path(self.kind, self.identifier)


# Trigger signature: (HookRequest) -> None, may be a coroutine function
TriggerFn = Callable[[HookRequest], Awaitable[None] | None]
# Function signature: async (HookRequest) -> result, raising HookError to reject
FunctionFn = Callable[[HookRequest], Awaitable[Any] | Any]


@dataclass(frozen=True)
class Outcome:
    """Settled result of a cloud function."""

    value: Any = None
    error: Any = None
    ok: bool = True

    @classmethod
    def fulfilled(cls, value: Any) -> "Outcome":
        return cls(value=value)

    @classmethod
    def rejected(cls, error: Any) -> "Outcome":
        return cls(error=error, ok=False)
