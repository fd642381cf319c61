"""
structdiff.model — Change records produced by the differ.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class _Missing(Enum):
    """Marker for a node that does not exist on one side of a diff."""
    MISSING = auto()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


# Distinct from None: None is an ordinary atomic value.
MISSING = _Missing.MISSING


class ChangeKind(Enum):
    """The three kinds of leaf change."""
    CHANGED = auto()    # Present on both sides, unequal
    ADDED = auto()      # Absent before, present after
    DELETED = auto()    # Present before, absent after


@dataclass(frozen=True, slots=True)
class Change:
    """
    One divergence at a leaf of the compared structures.

    `path` holds the rendered path segments from the root, e.g.
    ('.Mapping', '["yo"]', '[0]').  An absent side is MISSING.
    """
    path: tuple[str, ...]
    before: Any = MISSING
    after: Any = MISSING

    @property
    def name(self) -> str:
        """The full path string, e.g. '.Mapping["yo"][0]'."""
        return "".join(self.path)

    @property
    def kind(self) -> ChangeKind:
        if self.before is MISSING:
            return ChangeKind.ADDED
        if self.after is MISSING:
            return ChangeKind.DELETED
        return ChangeKind.CHANGED

    def __repr__(self) -> str:
        name = self.name or "(root)"
        kind = self.kind
        if kind == ChangeKind.ADDED:
            return f"ADDED at {name}: {self.after!r}"
        if kind == ChangeKind.DELETED:
            return f"DELETED at {name}: {self.before!r}"
        return f"CHANGED at {name}: {self.before!r} → {self.after!r}"
