"""Encoding between Python values and the Parse REST JSON wire format."""

import base64
import binascii
from datetime import datetime, timezone
from typing import Any

from cloudhooks.objects.model import ParseObject
from cloudhooks.objects.operations import OPERATIONS, Batch, FieldOperation
from cloudhooks.objects.types import GeoPoint, ParseFile, Relation


class DecodeError(ValueError):
    """Raised when a typed wire value is malformed."""

    pass


def format_date(value: datetime) -> str:
    """Format a datetime as the millisecond-precision UTC ISO string the server uses."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_date(iso: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except (AttributeError, ValueError) as e:
        raise DecodeError(f"Invalid date: {iso!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def encode(value: Any, seen: set[int] | None = None) -> Any:
    """Encode a value for the wire.

    Objects are encoded in full (``__type: Object``); an object that is
    already being encoded higher up in the same tree is emitted as a
    pointer instead, so cyclic graphs terminate.
    """
    if seen is None:
        seen = set()

    if isinstance(value, ParseObject):
        if id(value) in seen:
            return value.to_pointer()
        return value.to_full_json(seen)
    if isinstance(value, datetime):
        return {"__type": "Date", "iso": format_date(value)}
    if isinstance(value, (bytes, bytearray)):
        return {"__type": "Bytes", "base64": base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, (GeoPoint, ParseFile, Relation, FieldOperation)):
        return value.to_json()
    if isinstance(value, (list, tuple)):
        return [encode(item, seen) for item in value]
    if isinstance(value, dict):
        return {key: encode(item, seen) for key, item in value.items()}
    return value


def decode(value: Any) -> Any:
    """Decode a wire value into Python values, objects and field operations."""
    if isinstance(value, list):
        return [decode(item) for item in value]
    if not isinstance(value, dict):
        return value

    if "__op" in value:
        return _decode_operation(value)

    wire_type = value.get("__type")
    if wire_type is None:
        return {key: decode(item) for key, item in value.items()}

    try:
        if wire_type == "Pointer":
            return ParseObject(value["className"], object_id=value["objectId"])
        if wire_type == "Object":
            return ParseObject.from_json(value)
        if wire_type == "Date":
            return parse_date(value["iso"])
        if wire_type == "Bytes":
            return base64.b64decode(value["base64"], validate=True)
        if wire_type == "GeoPoint":
            return GeoPoint(float(value["latitude"]), float(value["longitude"]))
        if wire_type == "File":
            return ParseFile(value["name"], value.get("url"))
        if wire_type == "Relation":
            return Relation(value["className"])
    except KeyError as e:
        raise DecodeError(f"{wire_type} value is missing field {e.args[0]!r}") from e
    except (TypeError, ValueError, binascii.Error) as e:
        raise DecodeError(f"Invalid {wire_type} value: {e}") from e

    raise DecodeError(f"Unknown __type: {wire_type!r}")


def _decode_operation(value: dict[str, Any]) -> FieldOperation:
    name = value["__op"]
    if not isinstance(name, str):
        raise DecodeError(f"Unsupported field operation: {name!r}")
    op_cls = OPERATIONS.get(name)
    if op_cls is None:
        raise DecodeError(f"Unsupported field operation: {name!r}")

    if op_cls is Batch:
        ops = value.get("ops", [])
        if not isinstance(ops, list) or not all(isinstance(op, dict) and "__op" in op for op in ops):
            raise DecodeError("Batch requires an 'ops' array of field operations")
        return Batch(ops=[_decode_operation(op) for op in ops])
    if name == "Increment":
        amount = value.get("amount", 1)
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise DecodeError(f"Increment amount must be a number, got {amount!r}")
        return op_cls(amount=amount)
    if name == "Delete":
        return op_cls()

    objects = value.get("objects")
    if not isinstance(objects, list):
        raise DecodeError(f"{name} requires an 'objects' array")
    return op_cls(objects=decode(objects))
