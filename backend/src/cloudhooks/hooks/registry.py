"""Registration table for webhook routes.

Records, per hook kind, the identifiers that have a route bound.
Entries are appended during startup and only read afterwards.
"""

from collections.abc import Mapping
from typing import Any

from cloudhooks.hooks.types import HookKind


class DuplicateRegistrationError(ValueError):
    """Raised when a (kind, identifier) pair is registered twice."""

    pass


def derive_identifier(value: Any) -> str:
    """Derive the route identifier from a name or an object-like value.

    Values exposing a class name (a ``class_name`` attribute, or a mapping
    with a ``className`` key) use it; anything else is taken as the name.

    Raises:
        ValueError: If no non-empty identifier can be derived
    """
    class_name = getattr(value, "class_name", None)
    if class_name is None and isinstance(value, Mapping):
        class_name = value.get("className")
    if class_name:
        return str(class_name)

    if not isinstance(value, str) or not value:
        raise ValueError(f"Cannot derive a hook identifier from {value!r}")
    return value


class HookRegistry:
    """Per-kind list of registered identifiers, in registration order.

    One instance is owned by each WebhookRouter; there is no process-wide
    table.

    Example:
        registry = HookRegistry()
        registry.add(HookKind.BEFORE_SAVE, "Post")
        registry.as_dict()["beforeSave"]  # ["Post"]
    """

    def __init__(self) -> None:
        self._routes: dict[HookKind, list[str]] = {kind: [] for kind in HookKind}

    def add(self, kind: HookKind, identifier: str) -> None:
        """Record an identifier for a kind.

        Args:
            kind: The hook kind
            identifier: Class or function name

        Raises:
            DuplicateRegistrationError: If the pair is already registered
        """
        if identifier in self._routes[kind]:
            raise DuplicateRegistrationError(
                f"{kind.value} handler for '{identifier}' is already registered"
            )
        self._routes[kind].append(identifier)

    def is_registered(self, kind: HookKind, identifier: str) -> bool:
        return identifier in self._routes[kind]

    def list_registered(self, kind: HookKind) -> list[str]:
        """List identifiers registered for a kind, in registration order."""
        return list(self._routes[kind])

    def as_dict(self) -> dict[str, list[str]]:
        """Snapshot keyed by kind value (``beforeSave``, ..., ``function``)."""
        return {kind.value: list(names) for kind, names in self._routes.items()}

    def __len__(self) -> int:
        return sum(len(names) for names in self._routes.values())
