"""
Shared components: AST nodes, errors and source locations.
"""

from .source_location import SourceLocation
from .errors import (
    Error, ErltypeError, ErltypeSourceError,
    LexingError, ParsingError, FormattingError, PrettyPrintingError,
)
from .nodes import (
    NodeType, TypeNode,
    Wildcard, AnyFunction, InnerAnyFunction, Rest, Atom, Int,
    TypeRef, ModuleTypeRef, ParamTypeRef, TypeList,
    Tuple, SquareList, ParenList, Map, MapEntry, Pattern,
    Size, BinaryPart, Binary, ByteList,
    PipeList, Range, NamedType, NamedTypeColon, Assignment, Contract, Function,
)
