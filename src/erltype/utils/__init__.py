"""
erltype utilities package
"""

from .io_utils import read_input

__all__ = ["read_input"]
