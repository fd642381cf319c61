"""Emit structural changes as structured log events."""

from collections.abc import Mapping
from typing import Any, Optional, Union

import structlog

from .core import diff_all_formatted
from .render import Format

log = structlog.get_logger()


def log_changes(
    before: Any,
    after: Any,
    fmt: Optional[Union[Format, Mapping]] = None,
    logger: Any = None,
    event: str = "config.changed",
    **context: Any,
) -> list[str]:
    """
    Diff `before` against `after` and log one info event per change.

    Each event carries the rendered text as `change`, plus any extra
    keyword context.  The rendered lines are returned.  Nothing is
    logged when the values are equal; errors propagate unlogged.
    """
    lines = diff_all_formatted(fmt, before, after)
    target = logger if logger is not None else log
    for line in lines:
        target.info(event, change=line, **context)
    return lines
