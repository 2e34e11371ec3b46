"""Domain model for webhook payloads.

Reconstructs the objects carried in webhook bodies from the Parse REST wire
format and encodes results back into it:
- ParseObject: class-tagged object with decoded attributes
- encode/decode: typed value codec (Date, Pointer, Object, Bytes, ...)
- Field operations: Increment, Delete, Add, AddUnique, Remove, Batch
"""

from cloudhooks.objects.model import ParseObject
from cloudhooks.objects.codec import DecodeError, decode, encode, format_date, parse_date
from cloudhooks.objects.operations import (
    UNSET,
    Add,
    AddUnique,
    Batch,
    Delete,
    FieldOperation,
    Increment,
    Remove,
)
from cloudhooks.objects.types import GeoPoint, ParseFile, Relation

__all__ = [
    "Add",
    "AddUnique",
    "Batch",
    "DecodeError",
    "Delete",
    "FieldOperation",
    "GeoPoint",
    "Increment",
    "ParseFile",
    "ParseObject",
    "Relation",
    "Remove",
    "UNSET",
    "decode",
    "encode",
    "format_date",
    "parse_date",
]
