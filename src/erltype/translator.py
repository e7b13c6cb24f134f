"""
Public operations.

``Translator`` ties the parser, the pretty-printer, the diff engine and the
formatting façade together. The module-level functions delegate to a
default translator built on first use.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from .frontend.parser import Parser
from .shared.nodes import TypeNode
from .shared.errors import ErltypeError, PrettyPrintingError
from .printer.pretty import pretty_print as render, shallow_print
from .diff.engine import Mismatch, find_mismatches as _find_mismatches
from .diff.report import diff_report
from .formatting import FormattingFacade, Formatter, trim_leading
from .utils.config import (
    PATTERN_PREFIX, CONTRACT_CLAUSE_SEPARATOR, CONTRACT_HEAD_LABEL, CONTRACT_HEAD_JOINER,
)

logger = logging.getLogger(__name__)

_INFIX_OPERATORS = {
    "=:=": "===",
    "=/=": "!==",
    "/=": "!=",
    "=<": "<=",
}


class Translator:
    """
    Dialyzer notation → Elixir syntax.

    Stateless apart from the parser tables; one instance can be shared.
    """

    def __init__(self, parser: Optional[Parser] = None, formatter: Optional[Formatter] = None):
        self.parser = parser if parser is not None else Parser()
        self.facade = FormattingFacade(formatter)

    def parse(self, text: str) -> TypeNode:
        return self.parser.parse(text)

    def _render(self, node: TypeNode, text: str, printer=render) -> str:
        try:
            return printer(node)
        except ErltypeError:
            raise
        except Exception as e:
            raise PrettyPrintingError(f"could not print {type(node).__name__}: {e}",
                                      node=node, source=text) from e

    def pretty_print(self, text: str) -> str:
        """Parse and print ``text`` on a single line, without formatting."""
        return self._render(self.parse(text), text)

    def print_type(self, text: str) -> str:
        return self.facade.format_type(self.pretty_print(text))

    def print_args(self, text: str) -> str:
        """Print an argument list such as ``('ok', binary())``."""
        return self.facade.format_args(self.pretty_print(text))

    def print_pattern(self, text: str) -> str:
        if text.startswith(PATTERN_PREFIX):
            text = text[len(PATTERN_PREFIX):]
        return self.print_type(text)

    def shallow_print_type(self, text: str) -> str:
        """Like ``print_type`` but records print as ``%Name{}`` / ``tuple()``."""
        return self.facade.format_type(self._render(self.parse(text), text, shallow_print))

    def print_contract(self, text: str, module: Optional[str] = None,
                       function: Optional[str] = None) -> str:
        """
        Print a contract, one ``Contract head:`` block per clause.

        With ``module`` and ``function`` the leading ``module:function`` text of
        the first clause is dropped.
        """
        head, *tail = text.split(CONTRACT_CLAUSE_SEPARATOR)
        if module is not None and function is not None:
            head = trim_leading(head, module)
            head = trim_leading(head, ":")
            head = trim_leading(head, function)
        clauses = [head] + tail
        if len(clauses) == 1:
            return self._print_clause(head)
        logger.debug(f"Printing contract with {len(clauses)} clauses")
        joiner = CONTRACT_HEAD_JOINER + CONTRACT_HEAD_LABEL
        return CONTRACT_HEAD_LABEL + joiner.join(self._print_clause(clause) for clause in clauses)

    def _print_clause(self, clause: str) -> str:
        return self.facade.format_contract(self.pretty_print(clause))

    def diff(self, expected: str, actual: str) -> str:
        """
        Report the fields on which ``actual`` disagrees with ``expected``.

        Empty when the two are not comparable or nothing differs.
        """
        report = diff_report(self.parse(expected), self.parse(actual))
        logger.debug(f"Diff produced {len(report.splitlines())} lines")
        return report

    def find_mismatches(self, expected: str, actual: str) -> List[Mismatch]:
        return _find_mismatches(self.parse(expected), self.parse(actual))

    @staticmethod
    def print_infix(operator: str) -> str:
        """Erlang comparison operator → Elixir (``=:=`` → ``===``)."""
        return _INFIX_OPERATORS.get(operator, operator)


# ============================================================================
# Module-level API
# ============================================================================

@lru_cache(maxsize=None)
def default_translator() -> Translator:
    return Translator()


def pretty_print(text: str) -> str:
    return default_translator().pretty_print(text)


def print_type(text: str) -> str:
    return default_translator().print_type(text)


def print_args(text: str) -> str:
    return default_translator().print_args(text)


def print_pattern(text: str) -> str:
    return default_translator().print_pattern(text)


def print_contract(text: str, module: Optional[str] = None, function: Optional[str] = None) -> str:
    return default_translator().print_contract(text, module, function)


def shallow_print_type(text: str) -> str:
    return default_translator().shallow_print_type(text)


def diff(expected: str, actual: str) -> str:
    return default_translator().diff(expected, actual)


def find_mismatches(expected: TypeNode, actual: TypeNode) -> List[Mismatch]:
    """Mismatch records for two already-parsed ASTs."""
    return _find_mismatches(expected, actual)


print_infix = Translator.print_infix
