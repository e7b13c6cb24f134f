"""
Erltype AST (Abstract Syntax Tree) Definitions

Immutable nodes for parsed Dialyzer type and contract notation.

Every node is a frozen dataclass tagged with a NodeType so that the printer
and the diff engine can dispatch on the tag instead of on class hierarchy.
Child sequences are tuples; nothing is mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import typing
from typing import ClassVar, Optional, Union

from ..utils.config import ATOM_QUOTE_CHAR, STRUCT_KEY


class NodeType(Enum):
    """AST node types"""
    WILDCARD = "wildcard"
    ANY_FUNCTION = "any_function"
    INNER_ANY_FUNCTION = "inner_any_function"
    REST = "rest"
    ATOM = "atom"
    TYPE_REF = "type_ref"
    MODULE_TYPE_REF = "module_type_ref"
    PARAM_TYPE_REF = "param_type_ref"
    TYPE_LIST = "type_list"
    TUPLE = "tuple"
    SQUARE_LIST = "square_list"
    PAREN_LIST = "paren_list"
    MAP = "map"
    MAP_ENTRY = "map_entry"
    BINARY = "binary"
    BINARY_PART = "binary_part"
    BYTE_LIST = "byte_list"
    PIPE_LIST = "pipe_list"
    RANGE = "range"
    NAMED_TYPE = "named_type"
    NAMED_TYPE_COLON = "named_type_colon"
    CONTRACT = "contract"
    FUNCTION = "function"
    ASSIGNMENT = "assignment"
    INT = "int"
    SIZE = "size"
    PATTERN = "pattern"


class TypeNode:
    """
    Base class for all AST nodes.

    Subclasses set ``node_type``; consumers dispatch on it.
    """
    __slots__ = ()
    node_type: ClassVar[NodeType]


# ============================================================================
# Leaves
# ============================================================================

@dataclass(frozen=True)
class Wildcard(TypeNode):
    """Matches any value (``_``)"""
    node_type: ClassVar[NodeType] = NodeType.WILDCARD


@dataclass(frozen=True)
class AnyFunction(TypeNode):
    """The unconstrained function type, ``fun()``"""
    node_type: ClassVar[NodeType] = NodeType.ANY_FUNCTION


@dataclass(frozen=True)
class InnerAnyFunction(TypeNode):
    """Argument list of any arity, ``(...)``"""
    node_type: ClassVar[NodeType] = NodeType.INNER_ANY_FUNCTION


@dataclass(frozen=True)
class Rest(TypeNode):
    """Trailing ``...`` of a non-empty list type"""
    node_type: ClassVar[NodeType] = NodeType.REST


@dataclass(frozen=True)
class Atom(TypeNode):
    """
    Literal atom.

    ``raw`` is the token text exactly as lexed (``'ok'``, ``ok``, ``Var@1``).
    Equality and hashing use ``name``, the text with surrounding quotes
    removed, so ``'ok'`` and ``ok`` denote the same atom.
    """
    raw: str = field(compare=False)
    name: str = field(init=False)
    node_type: ClassVar[NodeType] = NodeType.ATOM

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", unquote(self.raw))


@dataclass(frozen=True)
class Int(TypeNode):
    """Integer literal"""
    value: int
    node_type: ClassVar[NodeType] = NodeType.INT


# ============================================================================
# Type references
# ============================================================================

@dataclass(frozen=True)
class TypeRef(TypeNode):
    """Built-in type without arguments, rendered ``name()``"""
    name: str
    node_type: ClassVar[NodeType] = NodeType.TYPE_REF


@dataclass(frozen=True)
class ModuleTypeRef(TypeNode):
    """
    Type qualified by a module.

    ``type`` is either a raw type name (``t`` → ``Module.t()``) or a node that
    is printed as-is after the dot (usually a TypeList).
    """
    module: TypeNode
    type: Union[TypeNode, str]
    node_type: ClassVar[NodeType] = NodeType.MODULE_TYPE_REF


@dataclass(frozen=True)
class ParamTypeRef(TypeNode):
    """Module-qualified type with a single type parameter"""
    module: str
    name: str
    inner: TypeNode
    node_type: ClassVar[NodeType] = NodeType.PARAM_TYPE_REF


@dataclass(frozen=True)
class TypeList(TypeNode):
    """Named type applied to an explicit argument list"""
    name: str
    args: "ParenList"
    node_type: ClassVar[NodeType] = NodeType.TYPE_LIST


# ============================================================================
# Containers
# ============================================================================

@dataclass(frozen=True)
class Tuple(TypeNode):
    """Fixed-arity product type"""
    items: typing.Tuple[TypeNode, ...] = ()
    node_type: ClassVar[NodeType] = NodeType.TUPLE

    @property
    def arity(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class SquareList(TypeNode):
    """List type, ``[a, b]``"""
    items: typing.Tuple[TypeNode, ...] = ()
    node_type: ClassVar[NodeType] = NodeType.SQUARE_LIST


@dataclass(frozen=True)
class ParenList(TypeNode):
    """Argument list, ``(a, b)``"""
    items: typing.Tuple[TypeNode, ...] = ()
    node_type: ClassVar[NodeType] = NodeType.PAREN_LIST


@dataclass(frozen=True)
class MapEntry(TypeNode):
    """One key → type binding inside a Map"""
    key: TypeNode
    value: TypeNode
    node_type: ClassVar[NodeType] = NodeType.MAP_ENTRY

    @property
    def is_struct_tag(self) -> bool:
        """True if this entry binds ``'__struct__'`` to an atom."""
        return (isinstance(self.key, Atom) and self.key.name == STRUCT_KEY
                and isinstance(self.value, Atom))


@dataclass(frozen=True)
class Map(TypeNode):
    """
    Keyed record.

    ``struct_tag`` is materialized at construction: the name bound to
    ``'__struct__'`` when exactly one entry is a struct tag, otherwise None.
    """
    entries: typing.Tuple[MapEntry, ...] = ()
    struct_tag: Optional[str] = field(init=False, compare=False)
    node_type: ClassVar[NodeType] = NodeType.MAP

    def __post_init__(self) -> None:
        tags = [entry.value.name for entry in self.entries if entry.is_struct_tag]
        object.__setattr__(self, "struct_tag", tags[0] if len(tags) == 1 else None)

    @property
    def is_struct(self) -> bool:
        return self.struct_tag is not None

    @property
    def fields(self) -> typing.Tuple[MapEntry, ...]:
        """Entries without the struct tag (all entries for a plain map)."""
        if not self.is_struct:
            return self.entries
        return tuple(entry for entry in self.entries if not entry.is_struct_tag)


@dataclass(frozen=True)
class Pattern(TypeNode):
    """Top-level argument pattern, ``<a, b>``"""
    items: typing.Tuple[TypeNode, ...] = ()
    node_type: ClassVar[NodeType] = NodeType.PATTERN


# ============================================================================
# Bitstrings
# ============================================================================

@dataclass(frozen=True)
class Size(TypeNode):
    """Size annotation of a bitstring unit, ``size(8)``"""
    value: TypeNode
    node_type: ClassVar[NodeType] = NodeType.SIZE


@dataclass(frozen=True)
class BinaryPart(TypeNode):
    """
    One bitstring segment.

    ``<<_:48>>`` has no qualifier; ``<<_:_*8>>`` has a Wildcard qualifier
    and a Size for the unit.
    """
    value: TypeNode
    size: TypeNode
    qualifier: Optional[TypeNode] = None
    node_type: ClassVar[NodeType] = NodeType.BINARY_PART


@dataclass(frozen=True)
class Binary(TypeNode):
    """Bitstring spec: a list of parts, or a single (value, size) pair"""
    parts: typing.Tuple[BinaryPart, ...] = ()
    value: Optional[TypeNode] = None
    size: Optional[TypeNode] = None
    node_type: ClassVar[NodeType] = NodeType.BINARY

    @property
    def is_pair(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class ByteList(TypeNode):
    """Literal binary spelled out byte by byte"""
    values: typing.Tuple[int, ...] = ()
    node_type: ClassVar[NodeType] = NodeType.BYTE_LIST


# ============================================================================
# Compound types
# ============================================================================

@dataclass(frozen=True)
class PipeList(TypeNode):
    """Binary union; unions of more than two arms nest to the right"""
    left: TypeNode
    right: TypeNode
    node_type: ClassVar[NodeType] = NodeType.PIPE_LIST


@dataclass(frozen=True)
class Range(TypeNode):
    """Integer range, ``1..10``"""
    start: TypeNode
    end: TypeNode
    node_type: ClassVar[NodeType] = NodeType.RANGE


@dataclass(frozen=True)
class NamedType(TypeNode):
    """
    Labelled type, ``name :: type``.

    ``type`` is a node when parsed. A bare type name (``"t"``, printed
    ``t()``) is accepted for nodes built directly.
    """
    name: TypeNode
    type: Union[TypeNode, str]
    node_type: ClassVar[NodeType] = NodeType.NAMED_TYPE


@dataclass(frozen=True)
class NamedTypeColon(TypeNode):
    """Labelled type in keyword position, ``name: type``"""
    name: TypeNode
    type: Union[TypeNode, str]
    node_type: ClassVar[NodeType] = NodeType.NAMED_TYPE_COLON


@dataclass(frozen=True)
class Assignment(TypeNode):
    """Bound pattern variable, ``Name = value``"""
    name: TypeNode
    value: TypeNode
    node_type: ClassVar[NodeType] = NodeType.ASSIGNMENT


@dataclass(frozen=True)
class Contract(TypeNode):
    """
    Function signature.

    ``whens`` holds the constrained type variables of a ``when`` clause as
    NamedType nodes; None when the clause is absent.
    """
    args: TypeNode
    ret: TypeNode
    whens: Optional[typing.Tuple[NamedType, ...]] = None
    node_type: ClassVar[NodeType] = NodeType.CONTRACT


@dataclass(frozen=True)
class Function(TypeNode):
    """Type of a function value, ``fun((a) -> b)``"""
    contract: Contract
    node_type: ClassVar[NodeType] = NodeType.FUNCTION


def unquote(raw: str) -> str:
    """Strip a single pair of surrounding atom quotes."""
    if len(raw) >= 2 and raw.startswith(ATOM_QUOTE_CHAR) and raw.endswith(ATOM_QUOTE_CHAR):
        return raw[1:-1]
    return raw
