"""
Formatting Façade

Printed types are one long line. To lay them out the way the Elixir
formatter would, the text is embedded in a throwaway ``@spec`` template,
handed to a width-aware formatter, and cut back out of the result.

The formatter is any callable ``str -> str``. ``SpecFormatter`` is the
bundled one; it breaks an over-long ``@spec`` argument list into one
argument per line.
"""

import logging
import re
from typing import Callable, List, Optional, Tuple

from .shared.errors import FormattingError
from .utils.config import (
    DEFAULT_LINE_WIDTH, SPEC_ARG_INDENT, SPEC_CLOSE_INDENT, TEMPLATE_REINDENT,
    TYPE_TEMPLATE, TYPE_PREFIX, TYPE_SUFFIX, TYPE_INDENTED_SUFFIX,
    ARGS_TEMPLATE, ARGS_PREFIX, ARGS_SUFFIX,
    CONTRACT_TEMPLATE, CONTRACT_PREFIX, CONTRACT_SUFFIX,
)

logger = logging.getLogger(__name__)

Formatter = Callable[[str], str]

_OPENERS = {"(": ")", "[": "]", "{": "}", "<<": ">>"}
_CLOSERS = {")", "]", "}", ">>"}
_SPEC_MARKER = "@spec "

# Operator atoms spelled with bracket characters, printed unquoted
_BRACKET_ATOM = re.compile(r":(?:<<>>|<<<|>>>|%\{\}|\{\}|\[\])")


class SpecFormatter:
    """
    Minimal Elixir-style layout for ``@spec`` lines.

    A ``@spec`` line longer than ``line_width`` whose first argument group
    holds more than one top-level element becomes::

        @spec a(
                first,
                second
              ) :: :ok
    """

    def __init__(self, line_width: int = DEFAULT_LINE_WIDTH):
        self.line_width = line_width

    def __call__(self, code: str) -> str:
        lines = code.split("\n")
        formatted = [self._format_line(line, code) if line.startswith(_SPEC_MARKER) else line
                     for line in lines]
        return "\n".join(formatted).rstrip("\n")

    def _format_line(self, line: str, code: str) -> str:
        tokens = _scan(line, code)
        if len(line) <= self.line_width:
            return line

        open_index = line.find("(")
        if open_index < 0:
            return line
        close_index = _matching_close(tokens, open_index)
        if close_index is None:
            return line

        elements = _split_top_level(line, tokens, open_index, close_index)
        if len(elements) < 2:
            return line

        logger.debug(f"Wrapping @spec line of {len(line)} chars into {len(elements)} arguments")
        body = ",\n".join(SPEC_ARG_INDENT + element for element in elements)
        return f"{line[:open_index + 1]}\n{body}\n{SPEC_CLOSE_INDENT}{line[close_index:]}"


# ============================================================================
# Bracket scanning
# ============================================================================

def _scan(line: str, code: str) -> List[Tuple[int, str, int]]:
    """
    Bracket tokens of ``line`` as (index, text, depth) outside string literals.

    Raises FormattingError if the brackets do not balance.
    """
    tokens: List[Tuple[int, str, int]] = []
    stack: List[str] = []
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == '"':
            i = _skip_string(line, i, code)
            continue
        atom = _BRACKET_ATOM.match(line, i) if ch == ":" else None
        if atom:
            i = atom.end()
            continue
        pair = line[i:i + 2]
        if pair == "<<":
            stack.append(pair)
            tokens.append((i, pair, len(stack)))
            i += 2
            continue
        if pair == ">>" and stack and stack[-1] == "<<":
            tokens.append((i, pair, len(stack)))
            stack.pop()
            i += 2
            continue
        if ch in _OPENERS:
            stack.append(ch)
            tokens.append((i, ch, len(stack)))
        elif ch in _CLOSERS:
            if not stack or _OPENERS[stack[-1]] != ch:
                raise FormattingError(f"unbalanced '{ch}' at column {i + 1}", source=code)
            tokens.append((i, ch, len(stack)))
            stack.pop()
        i += 1
    if stack:
        raise FormattingError(f"unclosed '{stack[-1]}'", source=code)
    return tokens


def _skip_string(line: str, start: int, code: str) -> int:
    i = start + 1
    while i < len(line):
        if line[i] == "\\":
            i += 2
            continue
        if line[i] == '"':
            return i + 1
        i += 1
    raise FormattingError("unterminated string literal", source=code)


def _matching_close(tokens: List[Tuple[int, str, int]], open_index: int) -> Optional[int]:
    depth = None
    for index, text, level in tokens:
        if index == open_index:
            depth = level
        elif depth is not None and level == depth and text in _CLOSERS:
            return index
    return None


def _split_top_level(line: str, tokens: List[Tuple[int, str, int]],
                     open_index: int, close_index: int) -> List[str]:
    """Elements of the group ``line[open_index:close_index + 1]`` split at its own commas."""
    bracket_at = {index for index, _text, _level in tokens}
    elements: List[str] = []
    start = open_index + 1
    i = open_index + 1
    level = 0
    while i < close_index:
        ch = line[i]
        if ch == '"':
            i = _skip_string(line, i, line)
            continue
        if i in bracket_at:
            text = line[i:i + 2] if line[i:i + 2] in ("<<", ">>") else ch
            level += 1 if text in _OPENERS else -1
            i += len(text)
            continue
        if ch == "," and level == 0:
            elements.append(line[start:i].strip())
            start = i + 1
        i += 1
    tail = line[start:close_index].strip()
    if tail:
        elements.append(tail)
    return elements


# ============================================================================
# Template handling
# ============================================================================

def trim_leading(text: str, prefix: str) -> str:
    while prefix and text.startswith(prefix):
        text = text[len(prefix):]
    return text


def trim_trailing(text: str, suffix: str) -> str:
    while suffix and text.endswith(suffix):
        text = text[:-len(suffix)]
    return text


class FormattingFacade:
    """Runs printed text through the formatter inside a ``@spec`` template."""

    def __init__(self, formatter: Optional[Formatter] = None):
        self.formatter: Formatter = formatter if formatter is not None else SpecFormatter()

    def _run(self, template: str, pretty: str) -> str:
        code = template.format(pretty=pretty)
        try:
            formatted = self.formatter(code)
        except FormattingError:
            raise
        except Exception as e:
            raise FormattingError(f"formatter failed: {e}", source=code) from e
        return formatted.rstrip("\n")

    def format_type(self, pretty: str) -> str:
        formatted = self._run(TYPE_TEMPLATE, pretty)
        formatted = trim_leading(formatted, TYPE_PREFIX)
        formatted = trim_trailing(formatted, TYPE_SUFFIX)
        formatted = trim_trailing(formatted, TYPE_INDENTED_SUFFIX)
        return formatted.replace(TEMPLATE_REINDENT, "\n")

    def format_args(self, pretty: str) -> str:
        formatted = self._run(ARGS_TEMPLATE, pretty)
        formatted = trim_leading(formatted, ARGS_PREFIX)
        formatted = trim_trailing(formatted, ARGS_SUFFIX)
        return formatted.replace(TEMPLATE_REINDENT, "\n")

    def format_contract(self, pretty: str) -> str:
        formatted = self._run(CONTRACT_TEMPLATE, pretty)
        formatted = trim_leading(formatted, CONTRACT_PREFIX)
        formatted = trim_trailing(formatted, CONTRACT_SUFFIX)
        return formatted.replace(TEMPLATE_REINDENT, "\n")
