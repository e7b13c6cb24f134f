"""
Source Location (Span)

Points into the single-line notation string handed to the parser.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location of a lexing or parsing failure.

    - Source name, line, column (1-based, as reported by lark)
    - Immutable (frozen) for hashability
    """
    file: str
    line: int
    column: int
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column"""
        return f"{self.file}:{self.line}:{self.column}"
