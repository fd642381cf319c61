"""
structdiff.formats — Diffing serialized and live snapshots.

    • JSON documents → diff_json
    • Mutable objects → snapshot() now, diff_all(old, obj) later
"""

import copy
import json
from collections.abc import Mapping
from typing import Any, Optional, Union

from .core import diff_all_formatted
from .render import Format


def snapshot(value: Any) -> Any:
    """
    Take an independent copy of a value to diff against later.

    The copy shares nothing with the original, so mutating the live
    object afterwards does not change the snapshot.
    """
    return copy.deepcopy(value)


def diff_json(
    before: str, after: str,
    fmt: Optional[Union[Format, Mapping]] = None,
) -> list[str]:
    """
    Parse two JSON documents and diff them.

    Both documents must have an object or array at the top level.
    Raises json.JSONDecodeError for malformed input.
    """
    return diff_all_formatted(fmt, json.loads(before), json.loads(after))
