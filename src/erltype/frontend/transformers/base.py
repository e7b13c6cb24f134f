"""
Erltype AST Transformer
Converts the lark parse tree of Dialyzer notation into erltype AST nodes
"""

from lark import Transformer, v_args
from lark.lexer import Token
from typing import Optional, Tuple, Union
from typing_extensions import TypeAlias
import logging

from ...shared.nodes import (
    TypeNode, Wildcard, AnyFunction, InnerAnyFunction, Rest, Atom, Int,
    TypeRef, ModuleTypeRef, ParamTypeRef, TypeList,
    Tuple as TupleNode, SquareList, ParenList, Map, MapEntry, Pattern,
    PipeList, Range, NamedType, Assignment, Contract, Function,
)
from .binaries import BinaryParser

ParseChild: TypeAlias = Union[TypeNode, Token]

logger: logging.Logger = logging.getLogger(__name__)


@v_args(inline=True)
class TypeTransformer(Transformer):
    """
    Builds immutable AST nodes bottom-up.

    Holds no per-parse state, so one instance serves every parse.
    Bitstring and byte-list rules are delegated to BinaryParser.
    """

    def __init__(self) -> None:
        super().__init__()
        self.binary_parser: BinaryParser = BinaryParser()

    def start(self, value: TypeNode) -> TypeNode:
        return value

    # ------------------------------------------------------------------
    # Contracts and functions
    # ------------------------------------------------------------------

    def contract(self, args: TypeNode, ret: TypeNode,
                 whens: Optional[Tuple[NamedType, ...]] = None) -> Contract:
        return Contract(args=args, ret=ret, whens=whens)

    def inner_any_function(self) -> InnerAnyFunction:
        return InnerAnyFunction()

    def when_clause(self, *constraints: NamedType) -> Tuple[NamedType, ...]:
        return tuple(constraints)

    def constraint(self, name: Atom, type_: TypeNode) -> NamedType:
        return NamedType(name=name, type=type_)

    def any_function(self) -> AnyFunction:
        return AnyFunction()

    def function(self, contract: Contract) -> Function:
        return Function(contract=contract)

    # ------------------------------------------------------------------
    # Named constructs and unions
    # ------------------------------------------------------------------

    def named_type(self, name: Atom, type_: TypeNode) -> NamedType:
        return NamedType(name=name, type=type_)

    def assignment(self, name: Atom, value: TypeNode) -> Assignment:
        return Assignment(name=name, value=value)

    def pipe_list(self, *arms: TypeNode) -> PipeList:
        """``a | b | c`` arrives flat and nests to the right"""
        union = arms[-1]
        for arm in reversed(arms[:-1]):
            union = PipeList(left=arm, right=union)
        return union

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def atom(self, token: Token) -> Atom:
        return Atom(str(token))

    def wildcard(self, _token: Token) -> Wildcard:
        return Wildcard()

    def integer(self, token: Token) -> Int:
        return Int(int(token))

    def range(self, start: Token, end: Token) -> Range:
        return Range(start=Int(int(start)), end=Int(int(end)))

    def rest(self) -> Rest:
        return Rest()

    # ------------------------------------------------------------------
    # Type references
    # ------------------------------------------------------------------

    def type_call(self, name: Token, *args: TypeNode) -> TypeNode:
        """``name()`` is a TypeRef; ``name(a, ...)`` a TypeList."""
        if not args:
            return TypeRef(str(name))
        return TypeList(name=str(name), args=ParenList(tuple(args)))

    def module_type(self, module: Atom, name: Token, *args: TypeNode) -> TypeNode:
        """
        ``mod:t()`` → ModuleTypeRef with a raw name,
        ``mod:t(a)`` → ParamTypeRef,
        ``mod:t(a, b)`` → ModuleTypeRef wrapping a TypeList.
        """
        if not args:
            return ModuleTypeRef(module=module, type=str(name))
        if len(args) == 1:
            return ParamTypeRef(module=module.raw, name=str(name), inner=args[0])
        return ModuleTypeRef(module=module, type=TypeList(name=str(name), args=ParenList(tuple(args))))

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def tuple(self, *items: TypeNode) -> TupleNode:
        return TupleNode(tuple(items))

    def square_list(self, *items: TypeNode) -> SquareList:
        return SquareList(tuple(items))

    def paren_list(self, *items: TypeNode) -> ParenList:
        return ParenList(tuple(items))

    def pattern(self, *items: TypeNode) -> Pattern:
        return Pattern(tuple(items))

    def map(self, *entries: MapEntry) -> Map:
        return Map(tuple(entries))

    def map_entry(self, key: TypeNode, value: TypeNode) -> MapEntry:
        return MapEntry(key=key, value=value)

    # ------------------------------------------------------------------
    # Bitstrings (delegated)
    # ------------------------------------------------------------------

    def binary(self, *parts):
        return self.binary_parser.binary(parts)

    def binary_part(self, value: TypeNode, size: TypeNode):
        return self.binary_parser.part(value, size)

    def binary_unit_part(self, value: TypeNode, unit: Token, size: TypeNode):
        return self.binary_parser.unit_part(value, size)

    def byte_list(self, *values: int):
        return self.binary_parser.byte_list(values)

    def byte(self, value: Token, *_encoding: ParseChild) -> int:
        return int(value)
