"""
structdiff
==========

Readable structural diffs of nested values, for logging what changed
in a running program's configuration or state.

    diff_all({"port": 80, "hosts": ["a"]}, {"port": 443, "hosts": []})
    → ['["port"] changed from 80 to 443',
       '["hosts"][0] deleted "a"']

Values are records (dataclasses, named tuples, plain objects),
mappings, sequences, or atoms, nested in any combination.  Each leaf
that differs is rendered through one of three templates:

    changed   "{Name} changed from {Before} to {After}"
    added     "{Name} added {After}"
    deleted   "{Name} deleted {Before}"

Custom templates go through diff_all_formatted:

    diff_all_formatted(Format(changed="{Name}: {Before} -> {After}"), a, b)
"""

from structdiff.core import (
    # Validation / alignment
    validate,
    align_keys,
    atoms_equal,
    # Diff
    changes,
    diff_all,
    diff_all_formatted,
)
from structdiff.errors import DiffError, ShapeError, TemplateError
from structdiff.formats import diff_json, snapshot
from structdiff.logs import log_changes
from structdiff.model import MISSING, Change, ChangeKind
from structdiff.render import (
    DEFAULT_ADDED, DEFAULT_CHANGED, DEFAULT_DELETED,
    Format, Renderer, Template, format_value,
)
from structdiff.shapes import Shape, record_fields, shape_of, type_name

__version__ = "0.1.0"
__all__ = [
    "validate", "align_keys", "atoms_equal",
    "changes", "diff_all", "diff_all_formatted",
    "DiffError", "ShapeError", "TemplateError",
    "diff_json", "snapshot", "log_changes",
    "MISSING", "Change", "ChangeKind",
    "DEFAULT_ADDED", "DEFAULT_CHANGED", "DEFAULT_DELETED",
    "Format", "Renderer", "Template", "format_value",
    "Shape", "record_fields", "shape_of", "type_name",
]
