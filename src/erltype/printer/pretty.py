"""
Pretty-Printer

Renders an erltype AST as Elixir type syntax. Known literal shapes are
collapsed into Elixir shorthands first (``binary()``, ``boolean()``,
``Keyword.t()``, ``struct()`` ...); every other node falls through to the
per-NodeType handler.
"""

import logging
from typing import Callable, Dict, FrozenSet, Optional

from ..shared.nodes import (
    NodeType, TypeNode, Wildcard, Atom, Int, TypeRef, Tuple, SquareList,
    Map, MapEntry, Binary, BinaryPart, Size, PipeList, NamedTypeColon,
    Contract, InnerAnyFunction, ParenList,
)
from ..shared.errors import PrettyPrintingError
from ..utils.config import EXCEPTION_KEY, STRUCT_KEY
from .names import atomize, downcase_first, inspect_string, normalize_name, struct_name

logger = logging.getLogger(__name__)


# ============================================================================
# Known shapes
# ============================================================================

_ANY = Wildcard()
_ATOM_TYPE = TypeRef("atom")
_STRUCT_KEY = Atom(STRUCT_KEY)

_BINARY = Binary(parts=(BinaryPart(_ANY, Size(Int(8)), qualifier=_ANY),))
_BITSTRING = Binary(parts=(BinaryPart(_ANY, Size(Int(1)), qualifier=_ANY),))
_BOOLEAN = PipeList(Atom("false"), Atom("true"))
_TIMEOUT = PipeList(Atom("infinity"), TypeRef("non_neg_integer"))
_KEYWORD = SquareList((Tuple((_ATOM_TYPE, _ANY)),))

_STRUCT_ENTRIES = (
    (MapEntry(_STRUCT_KEY, _ANY), MapEntry(_ANY, _ANY)),
    (MapEntry(_STRUCT_KEY, _ATOM_TYPE), MapEntry(_ATOM_TYPE, _ANY)),
    (MapEntry(_STRUCT_KEY, _ATOM_TYPE), MapEntry(_ANY, _ANY)),
)
_EXCEPTION_ENTRIES = (
    MapEntry(Atom(EXCEPTION_KEY), Atom("true")),
    MapEntry(_STRUCT_KEY, _ANY),
    MapEntry(_ANY, _ANY),
)

# Struct with every field elided
_OPEN_FIELDS = (MapEntry(_ANY, _ANY),)

_PRINTABLE_CONTROL = frozenset("\n\t\r\f\v\b\a\x1b")


class PrettyPrinter:
    """
    Node → display string.

    ``when_names`` are the constrained type variables of the enclosing
    contract; atoms spelling one of them print lowercase-initial, bare.
    """

    def __init__(self, when_names: FrozenSet[str] = frozenset()):
        self.when_names = when_names
        self._handlers: Dict[NodeType, Callable[[TypeNode], str]] = {
            NodeType.WILDCARD: lambda node: "_",
            NodeType.INNER_ANY_FUNCTION: lambda node: "(...)",
            NodeType.ANY_FUNCTION: lambda node: "(... -> any)",
            NodeType.REST: lambda node: "...",
            NodeType.INT: lambda node: str(node.value),
            NodeType.ATOM: self.visit_atom,
            NodeType.TYPE_REF: lambda node: f"{node.name}()",
            NodeType.MODULE_TYPE_REF: self.visit_module_type_ref,
            NodeType.PARAM_TYPE_REF: self.visit_param_type_ref,
            NodeType.TYPE_LIST: lambda node: f"{node.name}{self.render(node.args)}",
            NodeType.TUPLE: lambda node: "{" + self._join(node.items) + "}",
            NodeType.SQUARE_LIST: lambda node: "[" + self._join(node.items) + "]",
            NodeType.PAREN_LIST: lambda node: "(" + self._join(node.items) + ")",
            NodeType.PATTERN: lambda node: self._join(node.items),
            NodeType.MAP: self.visit_map,
            NodeType.MAP_ENTRY: lambda node: f"{self.render(node.key)} => {self.render(node.value)}",
            NodeType.BINARY: self.visit_binary,
            NodeType.BINARY_PART: lambda node: f"{self.render(node.value)} :: {self.render(node.size)}",
            NodeType.SIZE: lambda node: f"size({self.render(node.value)})",
            NodeType.BYTE_LIST: self.visit_byte_list,
            NodeType.PIPE_LIST: self.visit_pipe_list,
            NodeType.RANGE: lambda node: f"{self.render(node.start)}..{self.render(node.end)}",
            NodeType.NAMED_TYPE: lambda node: self.visit_named_type(node, " :: "),
            NodeType.NAMED_TYPE_COLON: lambda node: self.visit_named_type(node, ": "),
            NodeType.ASSIGNMENT: self.visit_assignment,
            NodeType.CONTRACT: self.visit_contract,
            NodeType.FUNCTION: self.visit_function,
        }

    def render(self, node: TypeNode) -> str:
        collapsed = self._collapse(node)
        if collapsed is not None:
            return collapsed
        handler = self._handlers.get(getattr(node, "node_type", None))
        if handler is None:
            raise PrettyPrintingError(f"no printing rule for {type(node).__name__}", node=node)
        return handler(node)

    def _join(self, items) -> str:
        return ", ".join(self.render(item) for item in items)

    # ------------------------------------------------------------------
    # Shorthands
    # ------------------------------------------------------------------

    def _collapse(self, node: TypeNode) -> Optional[str]:
        """Elixir shorthand for a known literal shape, or None."""
        if node == _BINARY:
            return "binary()"
        if node == _BITSTRING:
            return "bitstring()"
        if node == _BOOLEAN:
            return "boolean()"
        if node == _TIMEOUT:
            return "timeout()"
        if node == _KEYWORD:
            return "Keyword.t()"
        if isinstance(node, SquareList) and len(node.items) == 1:
            only = node.items[0]
            if isinstance(only, Tuple) and only.arity == 2 and only.items[0] == _ATOM_TYPE:
                return f"Keyword.t({self.render(only.items[1])})"
        if isinstance(node, Map):
            if node.entries in _STRUCT_ENTRIES:
                return "struct()"
            if node.entries == _EXCEPTION_ENTRIES:
                return "Exception.t()"
        return None

    # ------------------------------------------------------------------
    # Node handlers
    # ------------------------------------------------------------------

    def visit_atom(self, node: Atom) -> str:
        if node.name == "_":
            return "_"
        text = atomize(node.raw)
        if self.when_names:
            bare = text.lstrip(":")
            if bare in self.when_names:
                return downcase_first(bare)
        return text

    def visit_module_type_ref(self, node) -> str:
        if isinstance(node.type, str):
            return f"{self.render(node.module)}.{node.type}()"
        return f"{self.render(node.module)}.{self.render(node.type)}"

    def visit_param_type_ref(self, node) -> str:
        return f"{atomize(node.module)}.{node.name}({self.render(node.inner)})"

    def visit_map(self, node: Map) -> str:
        """``%Name{k => v}`` for structs, ``%{k => v}`` otherwise."""
        name = struct_name(node.struct_tag) if node.is_struct else ""
        fields = node.fields
        if fields == _OPEN_FIELDS:
            return f"%{name}{{}}"
        return f"%{name}{{{self._join(fields)}}}"

    def visit_binary(self, node: Binary) -> str:
        if node.is_pair:
            return f"<<{self.render(node.value)} :: {self.render(node.size)}>>"
        return "<<" + self._join(node.parts) + ">>"

    def visit_byte_list(self, node) -> str:
        data = bytes(value & 0xFF for value in node.values)
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            text = None
        if text is not None and all(ch.isprintable() or ch in _PRINTABLE_CONTROL for ch in text):
            return inspect_string(text)
        return "<<" + ", ".join(str(byte) for byte in data) + ">>"

    def visit_named_type(self, node, separator: str) -> str:
        if isinstance(node.type, str):
            # Bare type name; only hand-built nodes carry one
            if isinstance(node.name, Atom) and node.name.raw.startswith("'Elixir"):
                return f"{atomize(node.name.raw)}.{node.type}()"
            return f"{self._label(node.name)}{separator}{node.type}()"
        return f"{self._label(node.name)}{separator}{self.render(node.type)}"

    def visit_pipe_list(self, node: PipeList) -> str:
        # Walk the right spine in a loop; long unions nest deeply
        arms = []
        while isinstance(node, PipeList) and self._collapse(node) is None:
            arms.append(self.render(node.left))
            node = node.right
        arms.append(self.render(node))
        return " | ".join(arms)

    def visit_assignment(self, node) -> str:
        return f"{self._label(node.name)} = {self.render(node.value)}"

    def _label(self, name: TypeNode) -> str:
        if isinstance(name, Atom):
            return normalize_name(name.raw)
        return self.render(name)

    def visit_contract(self, node: Contract) -> str:
        if node.whens:
            return self._render_constrained(node)
        if isinstance(node.args, InnerAnyFunction):
            return f"((...) -> {self.render(node.ret)})"
        return f"{self.render(node.args)} :: {self.render(node.ret)}"

    def _render_constrained(self, node: Contract) -> str:
        """``(args) :: ret when v: t, ...`` with the variables lowercased."""
        when_names = frozenset(atomize(when.name.raw).lstrip(":")
                               for when in node.whens if isinstance(when.name, Atom))
        printer = PrettyPrinter(self.when_names | when_names)
        logger.debug(f"Substituting when-variables {sorted(when_names)}")
        whens = ", ".join(
            downcase_first(printer.render(NamedTypeColon(name=when.name, type=when.type)))
            for when in node.whens
        )
        if isinstance(node.args, ParenList):
            args = printer._join(node.args.items)
        else:
            args = printer.render(node.args)
        return f"({args}) :: {printer.render(node.ret)} when {whens}"

    def visit_function(self, node) -> str:
        contract = node.contract
        return f"({self.render(contract.args)} -> {self.render(contract.ret)})"


_DEFAULT_PRINTER = PrettyPrinter()


def pretty_print(node: TypeNode) -> str:
    """Render ``node`` as Elixir type syntax."""
    return _DEFAULT_PRINTER.render(node)


def shallow_print(node: TypeNode) -> str:
    """
    Render ``node`` without descending into records.

    Maps print as ``%Name{}`` (``%{}`` when not a struct) and tuples as
    ``tuple()``; everything else prints in full.
    """
    if isinstance(node, Map):
        name = struct_name(node.struct_tag) if node.is_struct else ""
        return f"%{name}{{}}"
    if isinstance(node, Tuple):
        return "tuple()"
    return pretty_print(node)
