"""structdiff error types."""

from typing import Optional


class DiffError(Exception):
    """Base error for structdiff operations."""

    pass


class ShapeError(DiffError):
    """
    The two top-level values cannot be diffed against each other.

    Raised when either value is not a record, mapping or sequence, when
    their shapes differ, or when two named records are of different types.
    `argument` names the offending argument ("before" or "after") when the
    problem belongs to one side only.
    """

    def __init__(self, message: str, argument: Optional[str] = None) -> None:
        super().__init__(message)
        self.argument = argument


class TemplateError(DiffError):
    """A change template failed to parse or uses an unsupported placeholder."""

    def __init__(self, template: object, reason: str) -> None:
        super().__init__(f"Invalid template {template!r}: {reason}")
        self.template = template
        self.reason = reason
