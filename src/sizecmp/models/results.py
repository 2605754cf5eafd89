"""
Result data models for sizecmp.

This module defines the entries seen during a walk, the diagnostics emitted
along the way, and the complete result of a size comparison query.
"""

import os
import stat
from typing import Dict, List, Optional, Any
from enum import Enum
from pydantic import BaseModel, Field

from .size_query import SizeQuery


class EntryKind(Enum):
    """Filesystem type classification of a visited entry."""
    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    CHAR_DEVICE = "char_device"
    BLOCK_DEVICE = "block_device"
    FIFO = "fifo"
    SOCKET = "socket"
    OTHER = "other"

    @classmethod
    def from_mode(cls, mode: int) -> 'EntryKind':
        """Classify an entry from its st_mode bits."""
        if stat.S_ISREG(mode):
            return cls.REGULAR
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISLNK(mode):
            return cls.SYMLINK
        if stat.S_ISCHR(mode):
            return cls.CHAR_DEVICE
        if stat.S_ISBLK(mode):
            return cls.BLOCK_DEVICE
        if stat.S_ISFIFO(mode):
            return cls.FIFO
        if stat.S_ISSOCK(mode):
            return cls.SOCKET
        return cls.OTHER

    def is_irregular(self) -> bool:
        """Neither a regular file nor a directory."""
        return self not in (EntryKind.REGULAR, EntryKind.DIRECTORY)


class FileEntry(BaseModel):
    """
    Read-only view of one entry visited during a walk.

    Attributes:
        name: Base name of the entry
        path: Full path of the entry
        size: Size in bytes as reported by lstat
        kind: Type classification of the entry
        mode: Permission and type bits rendered like `ls -l` (e.g. 'Lrwxrwxrwx')
    """

    name: str = Field(..., min_length=1, description="Base name of the entry")
    path: str = Field(..., min_length=1, description="Full path of the entry")
    size: int = Field(..., ge=0, description="Size in bytes")
    kind: EntryKind = Field(..., description="Type classification")
    mode: Optional[str] = Field(None, description="Mode string")

    @classmethod
    def from_stat(cls, path: str, stat_result: os.stat_result) -> 'FileEntry':
        """Create an entry from an lstat result."""
        return cls(
            name=os.path.basename(path) or path,
            path=path,
            size=max(stat_result.st_size, 0),
            kind=EntryKind.from_mode(stat_result.st_mode),
            mode=stat.filemode(stat_result.st_mode),
        )

    def is_irregular(self) -> bool:
        return self.kind.is_irregular()


class DiagnosticKind(Enum):
    """Kinds of diagnostic notes a query can produce."""
    INVALID_ARGUMENTS = "invalid_arguments"
    INVALID_OPERATOR = "invalid_operator"
    INVALID_ROOT = "invalid_root"
    INVALID_SIZE = "invalid_size"
    IRREGULAR_ENTRY = "irregular_entry"
    TRAVERSAL_ENTRY_ERROR = "traversal_entry_error"


class Diagnostic(BaseModel):
    """
    A soft failure or notable event reported during a query.

    Attributes:
        kind: What the diagnostic is about
        message: Full message, prefixed with the call label
        path: Filesystem path the diagnostic concerns, if any
    """

    kind: DiagnosticKind = Field(..., description="What the diagnostic is about")
    message: str = Field(..., description="Diagnostic message")
    path: Optional[str] = Field(None, description="Path the diagnostic concerns")

    def is_fatal(self) -> bool:
        """Check whether this diagnostic ended the query without a result."""
        return self.kind not in (DiagnosticKind.IRREGULAR_ENTRY, DiagnosticKind.TRAVERSAL_ENTRY_ERROR)

    def __str__(self) -> str:
        return self.message


class SizeCmpResult(BaseModel):
    """
    Complete outcome of a size comparison query.

    `matches` holds base names in traversal order; `entries` holds the
    matching FileEntry objects in the same order for callers that need
    full paths. Both are None when validation failed before the walk.

    Attributes:
        query: The validated query, None if validation failed
        matches: Base names of matching entries
        entries: Matching entries with full metadata
        diagnostics: Notes emitted while validating and walking
        stats: Walk statistics
    """

    query: Optional[SizeQuery] = Field(None, description="The validated query")
    matches: Optional[List[str]] = Field(None, description="Matching entry names in traversal order")
    entries: Optional[List[FileEntry]] = Field(None, description="Matching entries")
    diagnostics: List[Diagnostic] = Field(default_factory=list, description="Diagnostic notes")
    stats: Dict[str, int] = Field(default_factory=dict, description="Walk statistics")

    @property
    def succeeded(self) -> bool:
        return self.matches is not None

    def get_full_paths(self) -> List[str]:
        """Get the full paths of all matching entries."""
        return [entry.path for entry in self.entries or []]

    def get_diagnostics(self, kind: DiagnosticKind) -> List[Diagnostic]:
        """Get the diagnostics of one kind."""
        return [d for d in self.diagnostics if d.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary representation."""
        return {
            'query': self.query.to_dict() if self.query else None,
            'matches': self.matches,
            'entries': [
                {**entry.model_dump(), 'kind': entry.kind.value} for entry in self.entries
            ] if self.entries is not None else None,
            'diagnostics': [
                {'kind': d.kind.value, 'message': d.message, 'path': d.path} for d in self.diagnostics
            ],
            'stats': dict(self.stats),
        }
