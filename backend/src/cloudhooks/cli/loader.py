"""Resolve a ``module:attribute`` reference to a WebhookRouter."""

import importlib

import click

from cloudhooks.api.router import WebhookRouter


def load_router(target: str) -> WebhookRouter:
    """Import ``module:attribute`` and return the router it names.

    The attribute may be a WebhookRouter or a zero-argument factory
    returning one.
    """
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter(
            f"Expected 'module:attribute', got '{target}'", param_hint="--app"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(
            f"Could not import module '{module_name}': {e}", param_hint="--app"
        )

    try:
        obj = getattr(module, attribute)
    except AttributeError:
        raise click.BadParameter(
            f"Module '{module_name}' has no attribute '{attribute}'", param_hint="--app"
        )

    if not isinstance(obj, WebhookRouter) and callable(obj):
        obj = obj()
    if not isinstance(obj, WebhookRouter):
        raise click.BadParameter(
            f"'{target}' is not a WebhookRouter", param_hint="--app"
        )
    return obj
