"""Field operations carried in ``update`` patches.

A patch value of the form ``{"__op": "Increment", "amount": 1}`` is not a new
field value but an instruction applied against the current one. Each
operation implements ``apply(current)`` returning the new value, or ``UNSET``
when the field should be removed.
"""

from dataclasses import dataclass, field
from typing import Any


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


def _same_value(a: Any, b: Any) -> bool:
    """Objects compare by identity on the server (class + objectId)."""
    from cloudhooks.objects.model import ParseObject

    if isinstance(a, ParseObject) and isinstance(b, ParseObject):
        if a.object_id is None or b.object_id is None:
            return a is b
        return a.class_name == b.class_name and a.object_id == b.object_id
    return a == b


def _as_list(current: Any) -> list[Any]:
    if current is None or current is UNSET:
        return []
    if isinstance(current, (list, tuple)):
        return list(current)
    raise TypeError(f"Cannot apply an array operation to {type(current).__name__}")


class FieldOperation:
    """Base class for all field operations."""

    op: str = ""

    def apply(self, current: Any) -> Any:
        raise NotImplementedError

    def to_json(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass
class Increment(FieldOperation):
    amount: int | float = 1
    op = "Increment"

    def apply(self, current: Any) -> Any:
        if current is None or current is UNSET:
            return self.amount
        if isinstance(current, bool) or not isinstance(current, (int, float)):
            raise TypeError(f"Cannot increment a non-numeric value: {current!r}")
        return current + self.amount

    def to_json(self) -> dict[str, Any]:
        return {"__op": self.op, "amount": self.amount}


@dataclass
class Delete(FieldOperation):
    op = "Delete"

    def apply(self, current: Any) -> Any:
        return UNSET

    def to_json(self) -> dict[str, Any]:
        return {"__op": self.op}


@dataclass
class Add(FieldOperation):
    objects: list[Any] = field(default_factory=list)
    op = "Add"

    def apply(self, current: Any) -> Any:
        return _as_list(current) + list(self.objects)

    def to_json(self) -> dict[str, Any]:
        from cloudhooks.objects.codec import encode

        return {"__op": self.op, "objects": encode(self.objects)}


@dataclass
class AddUnique(FieldOperation):
    objects: list[Any] = field(default_factory=list)
    op = "AddUnique"

    def apply(self, current: Any) -> Any:
        result = _as_list(current)
        for obj in self.objects:
            if not any(_same_value(obj, existing) for existing in result):
                result.append(obj)
        return result

    def to_json(self) -> dict[str, Any]:
        from cloudhooks.objects.codec import encode

        return {"__op": self.op, "objects": encode(self.objects)}


@dataclass
class Remove(FieldOperation):
    objects: list[Any] = field(default_factory=list)
    op = "Remove"

    def apply(self, current: Any) -> Any:
        return [
            existing
            for existing in _as_list(current)
            if not any(_same_value(obj, existing) for obj in self.objects)
        ]

    def to_json(self) -> dict[str, Any]:
        from cloudhooks.objects.codec import encode

        return {"__op": self.op, "objects": encode(self.objects)}


@dataclass
class Batch(FieldOperation):
    ops: list[FieldOperation] = field(default_factory=list)
    op = "Batch"

    def apply(self, current: Any) -> Any:
        for operation in self.ops:
            current = operation.apply(current)
        return current

    def to_json(self) -> dict[str, Any]:
        return {"__op": self.op, "ops": [operation.to_json() for operation in self.ops]}


OPERATIONS: dict[str, type[FieldOperation]] = {
    "Increment": Increment,
    "Delete": Delete,
    "Add": Add,
    "AddUnique": AddUnique,
    "Remove": Remove,
    "Batch": Batch,
}
