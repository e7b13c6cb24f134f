"""
Erltype AST Transformers
========================

Lark transformers that turn the parse tree into AST nodes.
"""

from .base import TypeTransformer
from .binaries import BinaryParser

__all__ = [
    'TypeTransformer',
    'BinaryParser'
]
