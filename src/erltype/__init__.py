"""
erltype: Dialyzer type notation in Elixir syntax.

    >>> import erltype
    >>> erltype.pretty_print("('Elixir.Plug.Conn':t(), binary() | atom()) -> 'Elixir.Plug.Conn':t()")
    '(Plug.Conn.t(), binary() | atom()) :: Plug.Conn.t()'
"""

from .translator import (
    Translator, default_translator,
    pretty_print, print_type, print_args, print_pattern, print_contract,
    shallow_print_type, print_infix, diff, find_mismatches,
)
from .shared.errors import (
    ErltypeError, ErltypeSourceError,
    LexingError, ParsingError, FormattingError, PrettyPrintingError,
)

__version__ = "0.1.0"

__all__ = [
    'Translator',
    'default_translator',
    'pretty_print',
    'print_type',
    'print_args',
    'print_pattern',
    'print_contract',
    'shallow_print_type',
    'print_infix',
    'diff',
    'find_mismatches',
    'ErltypeError',
    'ErltypeSourceError',
    'LexingError',
    'ParsingError',
    'FormattingError',
    'PrettyPrintingError',
]
