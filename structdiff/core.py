"""
structdiff.core — Structural diff of nested values
===================================================

OVERVIEW
════════

Two snapshots of the same structure — typically a configuration object
before and after a reload — are walked in lock-step.  Every leaf that
differs produces one Change; the Changes are then rendered as text:

    @dataclass
    class Config:
        Debug: bool
        Version: str
        Timeout: int

    diff_all(Config(True, "x", 1), Config(False, "y", 2))
    → ['.Debug changed from True to False',
       '.Version changed from "x" to "y"',
       '.Timeout changed from 1 to 2']


§1  VALIDATION
──────────────

Both top-level values must be records, mappings or sequences, and of
the same shape.  Two records must be of the same named type; only a
pair of anonymous records (SimpleNamespace) skips the name check.
Atoms at the top level are rejected: a diff is only meaningful below a
container boundary.

§2  TRAVERSAL
─────────────

The shape of the current node decides how its children are enumerated:

    RECORD    fields in declaration order            path segment .name
    MAPPING   union of keys from both sides          path segment [key]
    SEQUENCE  indices 0 .. max(len) - 1              path segment [i]
    ATOM      leaf comparison (§3)

A node present on one side only is enumerated with that side's shape;
the other side contributes MISSING for every child.  So removing a
nested record produces one deletion per leaf, never one deletion for
the whole subtree.

Below the root, a None facing a container stands for an absent
container, and two present nodes of different shapes are compared as
atoms.

Sequences are compared purely by position.  Removing an element from
the middle shows up as changes at the shifted indices plus a deletion
at the tail.  There is no alignment step.

§3  LEAVES
──────────

    before MISSING            → ADDED
    after MISSING             → DELETED
    both present, unequal     → CHANGED
    both present, equal       → nothing

Equality is ==, except that a bool never equals a non-bool
(True == 1 in Python, but a flag flipping to an int is a change).

Mapping keys, unlike leaves, are matched the way the mapping itself
matches them: 1, 1.0 and True are one key.  A key that changes only
between 1 and True is therefore not reported, and the path uses the
key as it appears in `before`.

§4  PATHS
─────────

The path is a stack owned by a single traversal: a segment is pushed
before descending and popped on return.  A Change copies the stack at
the moment it is emitted.  Mapping keys render with str(); string keys
are quoted: .Mapping["yo"][0].

Inputs must be acyclic.  Recursion depth equals nesting depth.
"""

from collections.abc import Mapping
from typing import Any, Union

from .errors import ShapeError
from .model import MISSING, Change
from .render import Format, Renderer, quote
from .shapes import (
    CONTAINER_SHAPES,
    Shape,
    mapping_items,
    record_fields,
    sequence_items,
    shape_of,
    type_name,
)


# ═══════════════════════════════════════════════════════════════════
#  VALIDATION
# ═══════════════════════════════════════════════════════════════════

def _describe(value: Any) -> str:
    return f"{shape_of(value).name.lower()} {type(value).__name__}"


def validate(before: Any, after: Any) -> None:
    """
    Check that two top-level values can be diffed.

    Raises ShapeError if either is not a record, mapping or sequence,
    if their shapes differ, or if they are records of different types.
    """
    before_shape = shape_of(before)
    after_shape = shape_of(after)

    if before_shape not in CONTAINER_SHAPES:
        raise ShapeError(
            f'argument "before" must be a record, mapping or sequence, '
            f"got {_describe(before)}",
            argument="before",
        )
    if after_shape not in CONTAINER_SHAPES:
        raise ShapeError(
            f'argument "after" must be a record, mapping or sequence, '
            f"got {_describe(after)}",
            argument="after",
        )

    if before_shape != after_shape:
        raise ShapeError(
            f"arguments have different shapes: "
            f"{_describe(before)} vs {_describe(after)}"
        )

    if before_shape == Shape.RECORD:
        before_name = type_name(before)
        after_name = type_name(after)
        if before_name != after_name:
            raise ShapeError(
                f"records are of different types: "
                f"{before_name or '<anonymous>'} vs {after_name or '<anonymous>'}"
            )


# ═══════════════════════════════════════════════════════════════════
#  KEY ALIGNMENT
# ═══════════════════════════════════════════════════════════════════

def align_keys(before: Mapping, after: Mapping) -> dict[Any, tuple[bool, bool]]:
    """
    Map every key of either mapping to (present_before, present_after).

    Keys of `before` come first in its iteration order, followed by the
    keys found only in `after`.  The order is not part of the contract.

    Keys are matched by hash equality, as the mappings match them, so
    1 and True align as the same key.
    """
    aligned: dict[Any, tuple[bool, bool]] = {}
    for key in before:
        aligned[key] = (True, key in after)
    for key in after:
        if key not in aligned:
            aligned[key] = (False, True)
    return aligned


# ═══════════════════════════════════════════════════════════════════
#  TRAVERSAL
# ═══════════════════════════════════════════════════════════════════

def atoms_equal(a: Any, b: Any) -> bool:
    """Leaf equality.  A bool never equals a non-bool."""
    if a is b:
        return True
    if (type(a) is bool) != (type(b) is bool):
        return False
    return bool(a == b)


def _key_segment(key: Any) -> str:
    if isinstance(key, str):
        return f"[{quote(key)}]"
    return f"[{key}]"


class _Walker:
    """Depth-first lock-step walk over two values.  One per diff call."""

    def __init__(self, include_private: bool):
        self.include_private = include_private
        self.path: list[str] = []
        self.changes: list[Change] = []

    def _descend(self, segment: str, before: Any, after: Any) -> None:
        self.path.append(segment)
        self.walk(before, after)
        self.path.pop()

    def _resolve(self, before: Any, after: Any) -> tuple[Shape, Any, Any]:
        """Pick the shape that drives enumeration of this node."""
        before_shape = shape_of(before) if before is not MISSING else None
        after_shape = shape_of(after) if after is not MISSING else None

        # None facing a container is an absent container.
        if before is None and after_shape in CONTAINER_SHAPES:
            before, before_shape = MISSING, None
        elif after is None and before_shape in CONTAINER_SHAPES:
            after, after_shape = MISSING, None

        if before_shape is None:
            return after_shape, before, after
        if after_shape is None or before_shape == after_shape:
            return before_shape, before, after
        return Shape.ATOM, before, after

    def walk(self, before: Any, after: Any) -> None:
        shape, before, after = self._resolve(before, after)

        if shape == Shape.RECORD:
            self._walk_record(before, after)
        elif shape == Shape.MAPPING:
            self._walk_mapping(before, after)
        elif shape == Shape.SEQUENCE:
            self._walk_sequence(before, after)
        else:
            self._compare(before, after)

    def _walk_record(self, before: Any, after: Any) -> None:
        before_fields = (
            dict(record_fields(before, self.include_private))
            if before is not MISSING else {}
        )
        after_fields = (
            dict(record_fields(after, self.include_private))
            if after is not MISSING else {}
        )

        # Declaration order of whichever side is present; fields only the
        # after side has (dynamic attributes) follow.
        names = list(before_fields) + [n for n in after_fields if n not in before_fields]
        for name in names:
            self._descend(
                f".{name}",
                before_fields.get(name, MISSING),
                after_fields.get(name, MISSING),
            )

    def _walk_mapping(self, before: Any, after: Any) -> None:
        before_items = mapping_items(before) if before is not MISSING else {}
        after_items = mapping_items(after) if after is not MISSING else {}

        for key in align_keys(before_items, after_items):
            self._descend(
                _key_segment(key),
                before_items.get(key, MISSING),
                after_items.get(key, MISSING),
            )

    def _walk_sequence(self, before: Any, after: Any) -> None:
        before_items = sequence_items(before) if before is not MISSING else []
        after_items = sequence_items(after) if after is not MISSING else []

        longest = max(len(before_items), len(after_items))
        for i in range(longest):
            self._descend(
                f"[{i}]",
                before_items[i] if i < len(before_items) else MISSING,
                after_items[i] if i < len(after_items) else MISSING,
            )

    def _compare(self, before: Any, after: Any) -> None:
        if before is MISSING and after is MISSING:
            return
        if before is not MISSING and after is not MISSING and atoms_equal(before, after):
            return
        self.changes.append(Change(tuple(self.path), before, after))


# ═══════════════════════════════════════════════════════════════════
#  PUBLIC OPERATIONS
# ═══════════════════════════════════════════════════════════════════

def changes(before: Any, after: Any, include_private: bool = True) -> list[Change]:
    """
    Compute the leaf changes between two values of the same shape.

    Returns Change records in traversal order (records by field order,
    sequences by index; mapping key order is unspecified).

    Raises ShapeError if the values cannot be diffed (see validate).
    """
    validate(before, after)
    walker = _Walker(include_private)
    walker.walk(before, after)
    return walker.changes


def diff_all_formatted(
    fmt: Union[Format, Mapping, None], before: Any, after: Any,
    include_private: bool = True,
) -> list[str]:
    """
    Diff two values and render each change through `fmt`.

    `fmt` is a Format, a mapping with any of the keys "changed",
    "added" and "deleted", or None.  Omitted templates use the defaults.

    Templates are compiled before the values are inspected, so a bad
    template raises TemplateError even when nothing changed.
    """
    renderer = Renderer(fmt)
    return renderer.render_all(changes(before, after, include_private))


def diff_all(before: Any, after: Any, include_private: bool = True) -> list[str]:
    """
    Diff two values and render each change with the default templates:

        .Debug changed from False to True
        .Hosts[2] added "db3"
        .Limits["cpu"] deleted 4
    """
    return diff_all_formatted(None, before, after, include_private)
