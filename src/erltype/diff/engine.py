"""
Structural Diff Engine

Aligns an "expected" AST with an "actual" one and returns path-qualified
mismatch records. Maps are aligned by key, tuples by position; leaves go
through a deliberately lenient compatibility check so that a generic
expected type (``binary()``, ``atom()``) accepts a concrete actual value.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple, Union

from ..shared.nodes import TypeNode, Atom, TypeRef, Map, Binary, Int, Wildcard
from ..shared.nodes import Tuple as TupleNode
from ..printer.pretty import _BINARY, pretty_print, shallow_print

logger = logging.getLogger(__name__)

PathKey = Union[str, int]
Path = Tuple[PathKey, ...]


# ============================================================================
# Mismatch records
# ============================================================================

@dataclass(frozen=True)
class Mismatch:
    """Base record; ``path`` leads from the root to the disagreeing node."""
    path: Path

    def prepend(self, key: PathKey) -> "Mismatch":
        return replace(self, path=(key,) + self.path)


@dataclass(frozen=True)
class TypeMismatch(Mismatch):
    expected: str
    actual: str


@dataclass(frozen=True)
class Missing(Mismatch):
    """Key present in expected, absent from actual."""


@dataclass(frozen=True)
class Unexpected(Mismatch):
    """Key present in actual, absent from expected."""


@dataclass(frozen=True)
class StructMismatch(Mismatch):
    expected_name: Optional[str]
    actual_name: Optional[str]


@dataclass(frozen=True)
class ArityMismatch(Mismatch):
    expected_size: int
    actual_size: int


# ============================================================================
# Compatibility
# ============================================================================

def _is_sized_bitstring(node: TypeNode) -> bool:
    if not isinstance(node, Binary) or len(node.parts) != 1:
        return False
    part = node.parts[0]
    return isinstance(part.value, Wildcard) and part.qualifier is None and isinstance(part.size, Int)


def types_compatible(expected: TypeNode, actual: TypeNode) -> bool:
    """
    Leaf compatibility. Not symmetric: only the expected side may be generic.

    - structurally equal nodes (atoms compare by unquoted name)
    - ``binary()`` accepts ``binary()``, ``<<_:_*8>>`` and a fixed-size
      bitstring ``<<_:N>>``
    - ``float()`` accepts only ``float()``
    - ``atom()`` accepts any atom literal
    - tuples of equal arity whose items are pairwise compatible
    """
    if expected == actual:
        return True
    if isinstance(expected, TypeRef):
        if expected.name == "binary":
            return actual == _BINARY or _is_sized_bitstring(actual)
        if expected.name == "atom":
            return isinstance(actual, Atom)
        return False
    if isinstance(expected, TupleNode) and isinstance(actual, TupleNode):
        return expected.arity == actual.arity and all(
            types_compatible(e, a) for e, a in zip(expected.items, actual.items)
        )
    return False


# ============================================================================
# Alignment
# ============================================================================

def path_key(key: TypeNode) -> PathKey:
    """Map keys appear in paths by atom name, anything else by its rendering."""
    if isinstance(key, Atom):
        return key.name
    return pretty_print(key)


def find_mismatches(expected: TypeNode, actual: TypeNode) -> List[Mismatch]:
    """
    Compare ``expected`` against ``actual``.

    Maps with different struct tags and tuples with different arities are
    reported as a single record at the current path without recursing.
    """
    if isinstance(expected, Map) and isinstance(actual, Map):
        return _diff_maps(expected, actual)
    if isinstance(expected, TupleNode) and isinstance(actual, TupleNode):
        return _diff_tuples(expected, actual)
    if types_compatible(expected, actual):
        return []
    return [TypeMismatch((), shallow_print(expected), shallow_print(actual))]


def _diff_maps(expected: Map, actual: Map) -> List[Mismatch]:
    if expected.struct_tag != actual.struct_tag:
        logger.debug(f"struct tags differ: {expected.struct_tag!r} vs {actual.struct_tag!r}")
        return [StructMismatch((), expected.struct_tag, actual.struct_tag)]

    actual_values: Dict[TypeNode, TypeNode] = {}
    for entry in actual.entries:
        actual_values.setdefault(entry.key, entry.value)
    expected_keys = {entry.key for entry in expected.entries}

    mismatches: List[Mismatch] = []
    for entry in expected.entries:
        if entry.is_struct_tag:
            continue
        key = path_key(entry.key)
        if entry.key not in actual_values:
            mismatches.append(Missing((key,)))
            continue
        nested = find_mismatches(entry.value, actual_values[entry.key])
        mismatches.extend(mismatch.prepend(key) for mismatch in nested)

    for entry in actual.entries:
        if entry.key not in expected_keys:
            mismatches.append(Unexpected((path_key(entry.key),)))
    return mismatches


def _diff_tuples(expected: TupleNode, actual: TupleNode) -> List[Mismatch]:
    if expected.arity != actual.arity:
        return [ArityMismatch((), expected.arity, actual.arity)]
    mismatches: List[Mismatch] = []
    for index, (e, a) in enumerate(zip(expected.items, actual.items)):
        mismatches.extend(mismatch.prepend(index) for mismatch in find_mismatches(e, a))
    return mismatches
