"""Request pipeline for webhook routes.

Each route runs a fixed chain of steps over its HookRequest before the
handler is invoked. A step mutates the request (propagating body fields,
inflating objects, wrapping the success/error callbacks) or sends a
response. Wrapping a callback reassigns the field to a closure over the
previous one, so the last wrap runs first.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from starlette.background import BackgroundTask
from starlette.responses import Response

from cloudhooks.api.responses import error_response, success_response
from cloudhooks.hooks.types import (
    FunctionFn,
    HookError,
    HookKind,
    HookRequest,
    Outcome,
    TriggerFn,
)
from cloudhooks.objects import DecodeError, ParseObject, decode, encode

logger = logging.getLogger(__name__)

Step = Callable[[HookRequest], None]

USER_CLASS_NAME = "_User"


class InflationError(ValueError):
    """Raised when the body cannot be turned into objects."""

    pass


# =============================================================================
# Steps
# =============================================================================


def log_entry(request: HookRequest) -> None:
    logger.info("Entering %s for %s", request.kind.value, request.identifier)


def propagate_installation_id(request: HookRequest) -> None:
    request.installation_id = request.body.installation_id


def propagate_function_params(request: HookRequest) -> None:
    request.params = request.body.params


def _send(request: HookRequest, response: Response) -> None:
    if not request.response.send(response):
        # afterSave/afterDelete handlers land here when they respond
        logger.debug("Response for %s already sent, dropping", request.path)


def install_response_methods(request: HookRequest) -> None:
    """Attach success/error callbacks that log and send the envelope."""
    path = request.path

    def success(data: Any = None) -> None:
        logger.info("Success response: %s %r", path, data)
        _send(request, success_response(data))

    def error(data: Any = None) -> None:
        logger.info("Error response: %s %r", path, data)
        _send(request, error_response(data))

    request.success = success
    request.error = error


def wrap_function_result_encoding(request: HookRequest) -> None:
    """Encode function results to the wire form before they are sent."""
    send_success = request.success

    def success(data: Any = None) -> None:
        send_success(encode(data))

    request.success = success


def inflate_object(request: HookRequest) -> None:
    """Build request.object from ``object``, or from ``original`` + ``update``.

    The body is left untouched; the update patch is decoded into a new
    value and applied to the freshly built object.
    """
    body = request.body
    if body.original is not None and body.update is not None:
        source, update = body.original, body.update
    elif body.object_ is not None:
        source, update = body.object_, None
    else:
        raise InflationError("Missing object in request body.")

    try:
        obj = ParseObject.from_json(source)
        if update is not None:
            patch = decode(update)
            if not isinstance(patch, dict):
                raise DecodeError("update must map field names to values")
            obj.set(patch)
    except (DecodeError, TypeError) as e:
        raise InflationError(str(e)) from e
    request.object = obj


def inflate_user(request: HookRequest) -> None:
    """Build request.user when the body carries one; always copy ``master``."""
    user = request.body.user
    if user is not None:
        user = dict(user)
        if user.get("className") is None:
            user["className"] = USER_CLASS_NAME
        try:
            request.user = ParseObject.from_json(user)
        except (DecodeError, TypeError) as e:
            raise InflationError(f"Invalid user: {e}") from e
    request.master = request.body.master


def wrap_before_save_result(request: HookRequest) -> None:
    """Make success() echo the (possibly modified) object; its argument is ignored."""
    send_success = request.success

    def success(data: Any = None) -> None:
        send_success(request.object.to_json())

    request.success = success


def send_empty_response(request: HookRequest) -> None:
    """Answer immediately; the handler then runs after the response."""
    request.success({})


_OBJECT_STEPS: tuple[Step, ...] = (
    log_entry,
    propagate_installation_id,
    install_response_methods,
    inflate_object,
    inflate_user,
)

CHAINS: dict[HookKind, tuple[Step, ...]] = {
    HookKind.BEFORE_SAVE: (*_OBJECT_STEPS, wrap_before_save_result),
    HookKind.AFTER_SAVE: (*_OBJECT_STEPS, send_empty_response),
    HookKind.BEFORE_DELETE: _OBJECT_STEPS,
    HookKind.AFTER_DELETE: (*_OBJECT_STEPS, send_empty_response),
    HookKind.FUNCTION: (
        log_entry,
        propagate_installation_id,
        propagate_function_params,
        install_response_methods,
        wrap_function_result_encoding,
        inflate_user,
    ),
}


def run_steps(steps: tuple[Step, ...], request: HookRequest) -> bool:
    """Run steps in order.

    Returns:
        False if a step failed to inflate the body (an error envelope has
        been sent), True otherwise.
    """
    for step in steps:
        try:
            step(request)
        except InflationError as e:
            logger.warning("Rejecting %s: %s", request.path, e)
            request.error(str(e))
            return False
    return True


# =============================================================================
# Handler invocation
# =============================================================================


async def settle(handler: FunctionFn, request: HookRequest) -> Outcome:
    """Run a cloud function and capture its result or rejection."""
    try:
        result = handler(request)
        if inspect.isawaitable(result):
            result = await result
    except HookError as e:
        return Outcome.rejected(e.payload)
    except Exception as e:
        logger.exception("Function '%s' failed", request.identifier)
        return Outcome.rejected(str(e))
    return Outcome.fulfilled(result)


async def invoke_function(handler: FunctionFn, request: HookRequest) -> None:
    outcome = await settle(handler, request)
    if outcome.ok:
        request.success(outcome.value)
    else:
        request.error(outcome.error)


async def invoke_trigger(handler: TriggerFn, request: HookRequest) -> None:
    """Call a trigger; it responds through request.success/error itself."""
    try:
        result = handler(request)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        logger.exception(
            "%s trigger for '%s' failed", request.kind.value, request.identifier
        )
        request.error(str(e))


async def dispatch(handler: TriggerFn | FunctionFn, request: HookRequest) -> Response:
    """Run the request's chain and handler, and return the response to send.

    There is no timeout: a trigger that never responds leaves the request
    pending.
    """
    if not run_steps(CHAINS[request.kind], request):
        return await request.response.wait()

    if request.kind is HookKind.FUNCTION:
        await invoke_function(handler, request)
    elif request.response.sent:
        response = await request.response.wait()
        response.background = BackgroundTask(invoke_trigger, handler, request)
        return response
    else:
        await invoke_trigger(handler, request)

    return await request.response.wait()
