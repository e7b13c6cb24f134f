"""
Structural diff of two parsed type notations.
"""

from .engine import (
    Mismatch, TypeMismatch, Missing, Unexpected, StructMismatch, ArityMismatch,
    find_mismatches, types_compatible,
)
from .report import diff_report, render_path, describe, format_mismatches

__all__ = [
    'Mismatch',
    'TypeMismatch',
    'Missing',
    'Unexpected',
    'StructMismatch',
    'ArityMismatch',
    'find_mismatches',
    'types_compatible',
    'diff_report',
    'render_path',
    'describe',
    'format_mismatches',
]
