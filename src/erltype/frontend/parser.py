"""
Parser

Turns Dialyzer notation text into an erltype AST using the bundled lark
grammar. Lexing and parsing failures surface as LexingError / ParsingError
carrying the offending text.
"""

from pathlib import Path
from lark import Lark
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, VisitError
import logging

from ..shared.nodes import TypeNode
from ..shared.errors import LexingError, ParsingError
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_PARSER_CACHE_FILE, DEFAULT_SOURCE_NAME
from .transformers.base import TypeTransformer

logger = logging.getLogger("erltype.frontend.parser")


class Parser:
    """
    Dialyzer notation parser.

    - Takes notation text, returns an AST
    - Reports lexing and parsing failures with a location
    - Uses a cached LALR parser; safe to share between callers
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE):
        grammar_path = Path(__file__).parent / "grammar.lark"
        self.parser = Lark.open(
            str(grammar_path),
            start='start',
            parser='lalr',              # Required for caching
            lexer='contextual',
            cache=cache_file,
            maybe_placeholders=False,
        )
        self.transformer = TypeTransformer()
        logger.debug(f"Loaded grammar from {grammar_path}")

    def parse(self, text: str, source_name: str = DEFAULT_SOURCE_NAME) -> TypeNode:
        """
        Parse notation text to an AST.

        Raises LexingError when no terminal accepts the input and
        ParsingError when the grammar rejects the token stream.
        """
        try:
            tree = self.parser.parse(text)
        except UnexpectedCharacters as e:
            raise LexingError(
                f"unexpected character {text[e.pos_in_stream]!r}" if e.pos_in_stream < len(text) else "unexpected character",
                source=text,
                location=SourceLocation(source_name, e.line, e.column),
                label="not part of the type notation",
            ) from e
        except UnexpectedInput as e:
            raise ParsingError(
                _describe_unexpected(e),
                source=text,
                location=_location_of(e, source_name),
                label="unexpected here",
            ) from e

        try:
            ast = self.transformer.transform(tree)
        except VisitError as e:
            raise ParsingError(
                f"could not build AST for rule '{e.rule}': {e.orig_exc}",
                source=text,
            ) from e

        logger.debug(f"Parsed {text!r} into {type(ast).__name__}")
        return ast


def _describe_unexpected(e: UnexpectedInput) -> str:
    token = getattr(e, "token", None)
    if token is None or token.type == "$END":
        return "unexpected end of input"
    return f"unexpected token {str(token)!r}"


def _location_of(e: UnexpectedInput, source_name: str):
    line = getattr(e, "line", -1)
    column = getattr(e, "column", -1)
    if line is None or line < 1:
        return None
    return SourceLocation(source_name, line, column)
