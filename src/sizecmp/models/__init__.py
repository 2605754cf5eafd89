"""
Data models for sizecmp.

This module contains the core data structures used throughout the system.
"""

from .size_query import ComparisonOperator, SizeCmpArgs, SizeQuery
from .results import Diagnostic, DiagnosticKind, EntryKind, FileEntry, SizeCmpResult

__all__ = [
    'ComparisonOperator',
    'SizeCmpArgs',
    'SizeQuery',
    'Diagnostic',
    'DiagnosticKind',
    'EntryKind',
    'FileEntry',
    'SizeCmpResult'
]
