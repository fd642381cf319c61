"""
structdiff.render — Turn change records into text.

Each change kind is rendered through its own template.  Templates are
ordinary str.format strings with three named placeholders:

    {Name}     the path of the change, e.g. .Server.Ports[0]
    {Before}   the previous value   (empty for additions)
    {After}    the new value        (empty for deletions)

Any subset may be used.  String values are quoted; every other value
uses its str() form.

    Format(changed="{Name}: {Before} --> {After}")

Templates are compiled once, before any traversal, and a compiled
template is trial-rendered so that every error a template can raise
surfaces as a TemplateError up front.
"""

import json
import string
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Optional, Union

from .errors import TemplateError
from .model import MISSING, Change, ChangeKind


DEFAULT_CHANGED = "{Name} changed from {Before} to {After}"
DEFAULT_ADDED = "{Name} added {After}"
DEFAULT_DELETED = "{Name} deleted {Before}"

PLACEHOLDERS = ("Name", "Before", "After")

_formatter = string.Formatter()


def quote(text: str) -> str:
    """Double-quote a string, escaping quotes and control characters."""
    return json.dumps(text, ensure_ascii=False)


def format_value(value: Any) -> str:
    """Render an atomic value for output.  Strings are quoted."""
    if value is MISSING:
        return ""
    if isinstance(value, str):
        return quote(value)
    return str(value)


# ═══════════════════════════════════════════════════════════════════
#  TEMPLATES
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Template:
    """A validated change template."""
    text: str
    placeholders: frozenset[str]

    @classmethod
    def compile(cls, text: Any) -> "Template":
        """
        Parse and validate a template string.

        Raises TemplateError if the text does not parse, uses a
        positional or unknown placeholder, or fails to render.
        """
        if not isinstance(text, str):
            raise TemplateError(text, f"expected str, got {type(text).__name__}")

        try:
            parsed = list(_formatter.parse(text))
        except ValueError as exc:
            raise TemplateError(text, str(exc)) from exc

        used = set()
        for _literal, field_name, _spec, _conversion in parsed:
            if field_name is None:
                continue
            if field_name == "" or field_name.isdigit():
                raise TemplateError(text, "positional placeholders are not supported")
            if field_name not in PLACEHOLDERS:
                raise TemplateError(
                    text,
                    f"unsupported placeholder {{{field_name}}}; "
                    f"expected one of {', '.join(PLACEHOLDERS)}",
                )
            used.add(field_name)

        template = cls(text, frozenset(used))

        # Values are always strings by the time they reach a template, so a
        # trial render exercises format specs and conversions exactly.
        try:
            template.render("Name", "Before", "After")
        except (ValueError, KeyError, IndexError, AttributeError, TypeError) as exc:
            raise TemplateError(text, f"render failed: {exc}") from exc

        return template

    def render(self, name: str, before: str, after: str) -> str:
        return self.text.format(Name=name, Before=before, After=after)


# ═══════════════════════════════════════════════════════════════════
#  FORMAT (per-kind template selection)
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Format:
    """
    Templates for the three change kinds.

    A field left as None (or "") falls back to its default.
    """
    changed: Optional[str] = None
    added: Optional[str] = None
    deleted: Optional[str] = None

    @classmethod
    def coerce(cls, fmt: Union["Format", Mapping, None]) -> "Format":
        """Accept a Format, a mapping of kind name → template, or None."""
        if fmt is None:
            return cls()
        if isinstance(fmt, cls):
            return fmt
        if isinstance(fmt, Mapping):
            known = {f.name for f in fields(cls)}
            unknown = sorted(str(k) for k in fmt if k not in known)
            if unknown:
                raise TemplateError(
                    dict(fmt), f"unknown template kind(s): {', '.join(unknown)}"
                )
            return cls(**fmt)
        raise TemplateError(fmt, f"expected Format or mapping, got {type(fmt).__name__}")


def _or_default(text: Any, default: str) -> Any:
    if text is None or text == "":
        return default
    return text


class Renderer:
    """Renders Change records through compiled templates."""

    def __init__(self, fmt: Union[Format, Mapping, None] = None):
        fmt = Format.coerce(fmt)
        self.templates: dict[ChangeKind, Template] = {
            ChangeKind.CHANGED: Template.compile(_or_default(fmt.changed, DEFAULT_CHANGED)),
            ChangeKind.ADDED: Template.compile(_or_default(fmt.added, DEFAULT_ADDED)),
            ChangeKind.DELETED: Template.compile(_or_default(fmt.deleted, DEFAULT_DELETED)),
        }

    def render(self, change: Change) -> str:
        template = self.templates[change.kind]
        return template.render(
            change.name,
            format_value(change.before),
            format_value(change.after),
        )

    def render_all(self, changes: list[Change]) -> list[str]:
        return [self.render(change) for change in changes]
