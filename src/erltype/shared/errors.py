"""
Error Reporting

Every public call either returns a complete result or raises one of the
ErltypeSourceError subclasses below, carrying the input that triggered it.
"""

import os
from dataclasses import dataclass
from typing import Any, List, Optional

from .source_location import SourceLocation


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("ERLTYPE_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Error dataclass
# ---------------------------------------------------------------------------

@dataclass
class Error:
    """Diagnostic about one input string."""
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None
    help: Optional[str] = None
    label: Optional[str] = None


# ---------------------------------------------------------------------------
# Formatting engine
# ---------------------------------------------------------------------------

def format_diagnostic(error: Error, source: Optional[str], color: bool = False) -> str:
    """
    Render a single diagnostic in rustc style.

    Example output (plain, no color)::

        error[E0002]: unexpected token ')'
         --> <input>:1:9
          |
        1 | {atom(), )
          |          ^ expected a type
    """
    out: List[str] = []

    code_str = f"[{error.code}]" if error.code else ""
    out.append(
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
    )

    loc = error.location
    if loc is None or source is None:
        if loc is not None:
            out.append(_style(" --> ", _BOLD, _BLUE, color=color) + str(loc))
        _append_help(out, error, 1, color)
        return "\n".join(out)

    src_lines = source.split("\n")
    idx = loc.line - 1
    code_line = src_lines[idx] if 0 <= idx < len(src_lines) else ""
    gw = max(len(str(loc.line)), 1)

    out.append(_style(" " * gw + "--> ", _BOLD, _BLUE, color=color) + str(loc))
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))
    out.append(_style(str(loc.line).rjust(gw) + " | ", _BOLD, _BLUE, color=color) + code_line)

    col_start = max(loc.column, 1) - 1
    if loc.end_column > loc.column:
        span_len = loc.end_column - loc.column
    else:
        span_len = _guess_span(code_line, col_start)
    carets = " " * col_start + "^" * max(1, span_len)
    label_suffix = f" {error.label}" if error.label else ""
    out.append(
        _style(" " * (gw + 1) + "| ", _BOLD, _BLUE, color=color)
        + _style(carets + label_suffix, _BOLD, _RED, color=color)
    )

    _append_help(out, error, gw, color)
    return "\n".join(out)


def _guess_span(code_line: str, col_start: int) -> int:
    """Guess token length when end_column is unavailable."""
    if col_start >= len(code_line):
        return 1
    length = 0
    for ch in code_line[col_start:]:
        if ch in (" ", "\t", ",", ")", "]", "}", ">"):
            break
        length += 1
    return max(1, length)


def _append_help(out: List[str], error: Error, gw: int, color: bool) -> None:
    if not error.help:
        return
    pad = " " * (gw + 1)
    out.append(_style(pad + "|", _BOLD, _BLUE, color=color))
    out.append(
        _style(f"{pad}= ", _BOLD, _CYAN, color=color)
        + _style("help: ", _BOLD, color=color)
        + error.help
    )


# ============================================================================
# Exception Classes
# ============================================================================

class ErltypeError(Exception):
    """Base exception for all erltype errors"""
    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"{self.message}\n --> {self.location}"
        return self.message


class ErltypeSourceError(ErltypeError):
    """
    Error tied to one input string, with rich rustc-style formatting.

    ``source`` is the offending input (notation text, or the formatter
    template for formatting failures).
    """
    error_code = "E0000"
    category = "input"

    def __init__(self,
                 message: str,
                 source: Optional[str] = None,
                 location: Optional[SourceLocation] = None,
                 help: Optional[str] = None,
                 label: Optional[str] = None):
        super().__init__(message, location)
        self.source = source
        self.help_text = help
        self.label_text = label

    def to_error(self) -> Error:
        return Error(
            message=self.message,
            location=self.location,
            code=self.error_code,
            help=self.help_text,
            label=self.label_text,
        )

    def render(self, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return format_diagnostic(self.to_error(), self.source, color=use_color)

    def __str__(self):
        return self.render()


class LexingError(ErltypeSourceError):
    """The input contains characters no terminal of the grammar accepts."""
    error_code = "E0001"
    category = "lexing"


class ParsingError(ErltypeSourceError):
    """The token stream is rejected by the grammar."""
    error_code = "E0002"
    category = "parsing"


class FormattingError(ErltypeSourceError):
    """The formatter rejected the synthesized template."""
    error_code = "E0003"
    category = "formatting"


class PrettyPrintingError(ErltypeSourceError):
    """
    The printer met an AST shape with no rule.

    Never raised for output of the bundled parser; indicates a
    grammar/printer mismatch.
    """
    error_code = "E0004"
    category = "pretty_printing"

    def __init__(self, message: str, node: Any = None, source: Optional[str] = None):
        super().__init__(message, source=source)
        self.node = node
