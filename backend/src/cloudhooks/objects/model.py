"""The ParseObject domain model.

A ParseObject is the in-process form of a serialized object received in a
webhook body. It keeps the system fields (className, objectId, createdAt,
updatedAt) apart from user attributes, which are stored decoded.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from cloudhooks.objects.operations import UNSET, FieldOperation

# Keys that are never stored as attributes
SYSTEM_KEYS = ("className", "objectId", "createdAt", "updatedAt", "__type")


@dataclass
class ParseObject:
    """A class-tagged object with decoded attributes.

    Attributes:
        class_name: Server-side class (e.g., "Post", "_User")
        object_id: Server-assigned id, None for unsaved objects
        attributes: Decoded field values
        created_at: Creation timestamp, when known
        updated_at: Last update timestamp, when known
    """

    class_name: str
    object_id: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "ParseObject":
        """Reconstruct an object from its wire form.

        The input mapping is not modified.

        Raises:
            DecodeError: If className is missing or a typed value is malformed
        """
        from cloudhooks.objects.codec import DecodeError, decode

        if not isinstance(data, Mapping):
            raise DecodeError(f"Expected an object, got {type(data).__name__}")

        class_name = data.get("className")
        if not class_name:
            raise DecodeError("Object is missing className")

        obj = cls(class_name=class_name, object_id=data.get("objectId"))
        obj.created_at = _coerce_date(data.get("createdAt"))
        obj.updated_at = _coerce_date(data.get("updatedAt"))
        for key, value in data.items():
            if key in SYSTEM_KEYS:
                continue
            obj.attributes[key] = decode(value)
        return obj

    def to_json(self, seen: set[int] | None = None) -> dict[str, Any]:
        """Serialize to the wire form sent back to the server."""
        from cloudhooks.objects.codec import encode, format_date

        seen = set() if seen is None else seen
        seen.add(id(self))
        try:
            data: dict[str, Any] = {"className": self.class_name}
            if self.object_id is not None:
                data["objectId"] = self.object_id
            for key, value in self.attributes.items():
                data[key] = encode(value, seen)
            if self.created_at is not None:
                data["createdAt"] = format_date(self.created_at)
            if self.updated_at is not None:
                data["updatedAt"] = format_date(self.updated_at)
        finally:
            seen.discard(id(self))
        return data

    def to_full_json(self, seen: set[int] | None = None) -> dict[str, Any]:
        data = self.to_json(seen)
        data["__type"] = "Object"
        return data

    def to_pointer(self) -> dict[str, Any]:
        if self.object_id is None:
            raise ValueError(f"Cannot create a pointer to an unsaved {self.class_name}")
        return {
            "__type": "Pointer",
            "className": self.class_name,
            "objectId": self.object_id,
        }

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def has(self, key: str) -> bool:
        return key in self.attributes

    def unset(self, key: str) -> None:
        self.attributes.pop(key, None)

    def set(self, key: str | Mapping[str, Any], value: Any = None) -> "ParseObject":
        """Set one field, or every field of a mapping.

        Field operations are applied against the current value; plain
        values replace it. Values must already be decoded.
        """
        if isinstance(key, Mapping):
            for name, item in key.items():
                self._set_one(name, item)
        else:
            self._set_one(key, value)
        return self

    def _set_one(self, key: str, value: Any) -> None:
        if key == "objectId":
            self.object_id = value
            return
        if key == "createdAt":
            self.created_at = _coerce_date(value)
            return
        if key == "updatedAt":
            self.updated_at = _coerce_date(value)
            return
        if key in SYSTEM_KEYS:
            return

        if isinstance(value, FieldOperation):
            value = value.apply(self.attributes.get(key, UNSET))
            if value is UNSET:
                self.attributes.pop(key, None)
                return
        self.attributes[key] = value


def _coerce_date(value: Any) -> datetime | None:
    from cloudhooks.objects.codec import DecodeError, decode, parse_date

    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return parse_date(value)
    decoded = decode(value)
    if not isinstance(decoded, datetime):
        raise DecodeError(f"Expected a date, got {value!r}")
    return decoded
