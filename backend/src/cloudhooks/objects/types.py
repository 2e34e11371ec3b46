"""Typed wire values that are not full objects.

These mirror the ``__type`` tagged JSON values of the Parse REST format:
- GeoPoint: latitude/longitude pair
- ParseFile: a named file reference with an optional URL
- Relation: a handle to a one-to-many relation of a target class
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def to_json(self) -> dict[str, Any]:
        return {
            "__type": "GeoPoint",
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass(frozen=True)
class ParseFile:
    name: str
    url: str | None = None

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"__type": "File", "name": self.name}
        if self.url is not None:
            data["url"] = self.url
        return data


@dataclass(frozen=True)
class Relation:
    """Relation handle; the members themselves are never sent inline."""

    class_name: str

    def to_json(self) -> dict[str, Any]:
        return {"__type": "Relation", "className": self.class_name}
