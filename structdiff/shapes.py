"""
structdiff.shapes — Runtime shape introspection.

Every value is classified into one of four shapes:

    RECORD    dataclass instances, named tuples, SimpleNamespace and
              instances of ordinary classes carrying a __dict__ or
              __slots__
    MAPPING   any collections.abc.Mapping
    SEQUENCE  any collections.abc.Sequence except str/bytes/bytearray
    ATOM      everything else (numbers, strings, bools, None, enums,
              sets, dates, ...)

Shape is decided per value, never declared by the caller.

Value types from the standard library (paths, IP addresses,
UUIDs, dates, decimals) stay atoms.

Record fields are read in declaration order.  Underscore-prefixed
fields are module-private by convention; reading them is an opt-in
capability controlled by `include_private`, enabled by default so a
record is always diffed in full.
"""

import dataclasses
import datetime
import decimal
import ipaddress
import numbers
import pathlib
import types
import uuid
from collections.abc import Mapping, Sequence
from enum import Enum, auto
from typing import Any, Iterator, Optional

from .model import MISSING


class Shape(Enum):
    """Structural category of a value."""
    RECORD = auto()
    MAPPING = auto()
    SEQUENCE = auto()
    ATOM = auto()


CONTAINER_SHAPES = frozenset({Shape.RECORD, Shape.MAPPING, Shape.SEQUENCE})

# Sequences that are compared as a whole rather than element by element.
_ATOMIC_SEQUENCES = (str, bytes, bytearray, memoryview)

# Objects that carry a __dict__ but are not records.
_NOT_RECORDS = (
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    Enum,
    numbers.Number,
    BaseException,
)

# Standard-library value types; some carry __slots__ or a __dict__.
_VALUE_TYPES = (
    pathlib.PurePath,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    uuid.UUID,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    decimal.Decimal,
)


def _is_namedtuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def _is_slotted_record(value: Any) -> bool:
    cls = type(value)
    if cls.__module__ == "builtins":
        return False
    return any(True for _ in _slot_names(cls))


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def shape_of(value: Any) -> Shape:
    """Classify a value into its structural shape."""
    if _is_dataclass_instance(value) or _is_namedtuple(value):
        return Shape.RECORD
    if isinstance(value, Mapping):
        return Shape.MAPPING
    if isinstance(value, _ATOMIC_SEQUENCES):
        return Shape.ATOM
    if isinstance(value, Sequence):
        return Shape.SEQUENCE
    if isinstance(value, _NOT_RECORDS) or isinstance(value, _VALUE_TYPES):
        return Shape.ATOM
    if hasattr(value, "__dict__") or _is_slotted_record(value):
        return Shape.RECORD
    return Shape.ATOM


def type_name(value: Any) -> Optional[str]:
    """
    The declared name of a record's type, or None for anonymous records.

    SimpleNamespace is the anonymous record: two namespaces always
    compare as the same type.
    """
    if isinstance(value, types.SimpleNamespace):
        return None
    return type(value).__qualname__


def _slot_names(cls: type) -> Iterator[str]:
    """Slot names across the MRO, base classes first."""
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            if slot.startswith("__") and not slot.endswith("__"):
                slot = f"_{klass.__name__.lstrip('_')}{slot}"
            yield slot


def _raw_fields(value: Any) -> Iterator[tuple[str, Any]]:
    if _is_dataclass_instance(value):
        for f in dataclasses.fields(value):
            yield f.name, getattr(value, f.name, MISSING)
        return

    if _is_namedtuple(value):
        yield from zip(type(value)._fields, value)
        return

    seen = set()
    for name in _slot_names(type(value)):
        if name not in seen:
            seen.add(name)
            # An unset slot does not exist on this side.
            yield name, getattr(value, name, MISSING)
    for name, field_value in getattr(value, "__dict__", {}).items():
        if name not in seen:
            seen.add(name)
            yield name, field_value


def record_fields(value: Any, include_private: bool = True) -> list[tuple[str, Any]]:
    """
    Ordered (name, value) pairs for a record.

    With include_private=False, underscore-prefixed fields are skipped.
    """
    return [
        (name, field_value)
        for name, field_value in _raw_fields(value)
        if include_private or not name.startswith("_")
    ]


def mapping_items(value: Mapping) -> dict:
    """Key → value view of a mapping, preserving its iteration order."""
    return {key: value[key] for key in value.keys()}


def sequence_items(value: Sequence) -> list:
    """Positional elements of a sequence."""
    return list(value)
