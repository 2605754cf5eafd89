"""
sizecmp - Core Package

Find the files under a directory whose size compares to a human-readable
size expression such as "10MB" or "2.5GiB".
"""

from .errors import SizeCmpError, InvalidOperator, InvalidRoot, InvalidSize, TraversalEntryError
from .function import FunctionInfo, SizeCmpFunction, create_size_cmp

__version__ = "0.1.0"

__all__ = [
    'SizeCmpError',
    'InvalidOperator',
    'InvalidRoot',
    'InvalidSize',
    'TraversalEntryError',
    'FunctionInfo',
    'SizeCmpFunction',
    'create_size_cmp'
]
