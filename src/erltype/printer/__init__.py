"""
Elixir rendering of erltype ASTs.
"""

from .pretty import PrettyPrinter, pretty_print, shallow_print
from .names import atomize, inspect_atom, normalize_name, strip_var_version

__all__ = [
    'PrettyPrinter',
    'pretty_print',
    'shallow_print',
    'atomize',
    'inspect_atom',
    'normalize_name',
    'strip_var_version',
]
