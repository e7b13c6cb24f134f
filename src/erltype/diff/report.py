"""
Diff report rendering.

Turns mismatch records into the lines shown to a user, e.g.::

    Mismatched fields:
    [:first]: expected "binary()", got "nil"
    [:second, :a]: not found
"""

from typing import Iterable, List, Optional

from ..shared.nodes import Map, TypeNode
from ..shared.nodes import Tuple as TupleNode
from ..printer.names import inspect_atom, inspect_string
from ..utils.config import MISMATCH_HEADER
from .engine import (
    Mismatch, TypeMismatch, Missing, Unexpected, StructMismatch, ArityMismatch,
    Path, find_mismatches,
)


def render_path(path: Path) -> str:
    """``("first", 0, "a")`` → ``[:first, 0, :a]``"""
    parts = [str(key) if isinstance(key, int) else inspect_atom(key) for key in path]
    return "[" + ", ".join(parts) + "]"


def _quoted(name: Optional[str]) -> str:
    return "nil" if name is None else inspect_string(name)


def describe(mismatch: Mismatch) -> str:
    if isinstance(mismatch, TypeMismatch):
        return f"expected {_quoted(mismatch.expected)}, got {_quoted(mismatch.actual)}"
    if isinstance(mismatch, StructMismatch):
        return f"expected {_quoted(mismatch.expected_name)}, got {_quoted(mismatch.actual_name)}"
    if isinstance(mismatch, Missing):
        return "not found"
    if isinstance(mismatch, Unexpected):
        return "unexpected key"
    if isinstance(mismatch, ArityMismatch):
        return f"expected tuple size is {mismatch.expected_size}, got one of size {mismatch.actual_size}"
    raise TypeError(f"unknown mismatch record {mismatch!r}")


def format_mismatches(mismatches: Iterable[Mismatch]) -> List[str]:
    return [f"{render_path(mismatch.path)}: {describe(mismatch)}" for mismatch in mismatches]


def diff_report(expected: TypeNode, actual: TypeNode) -> str:
    """
    Human-readable diff of two ASTs.

    Returns "" when the top-level shapes are not comparable (not both maps or
    both tuples, or maps with different struct tags) or when nothing differs.
    """
    if isinstance(expected, Map) and isinstance(actual, Map):
        if expected.struct_tag != actual.struct_tag:
            return ""
    elif isinstance(expected, TupleNode) and isinstance(actual, TupleNode):
        if expected.arity != actual.arity:
            return f"Expected tuple size is {expected.arity}, got one of size {actual.arity}."
    else:
        return ""

    lines = format_mismatches(find_mismatches(expected, actual))
    if not lines:
        return ""
    return "\n".join([MISMATCH_HEADER] + lines)
