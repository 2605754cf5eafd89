"""
Tree filter for sizecmp.

This module walks a directory tree depth-first and selects the entries whose
size satisfies a comparison against a byte threshold. Entries are examined
with lstat, so symbolic links are never followed. Irregular entries
(symlinks, devices, FIFOs, sockets) bypass the size comparison and are
always selected, with a diagnostic naming them. Errors confined to one
entry are reported and the walk carries on.
"""

import os
import logging
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Union

from ..errors import InvalidRoot, TraversalEntryError
from ..models.size_query import ComparisonOperator
from ..models.results import Diagnostic, DiagnosticKind, EntryKind, FileEntry


logger = logging.getLogger(__name__)

DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: send the diagnostic to the module logger."""
    logger.warning(diagnostic.message)


class TreeFilter:
    """
    Depth-first size filter over a directory tree.

    Entries within a directory are visited in name order and a subdirectory
    is walked completely before its next sibling. Only base names are
    returned by filter(); use filter_entries() for full paths.
    """

    def __init__(self, sink: Optional[DiagnosticSink] = None):
        """
        Initialize the tree filter.

        Args:
            sink: Callback receiving each diagnostic as it is emitted.
                Defaults to logging it as a warning.
        """
        self.sink = sink or log_diagnostic
        self.diagnostics: List[Diagnostic] = []
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'files_scanned': 0,
            'files_matched': 0,
            'directories_traversed': 0,
            'irregular_entries': 0,
            'errors': 0
        }

    @staticmethod
    def validate_root(root: Union[str, Path]) -> Path:
        """
        Check that a root path exists and is a directory.

        The root itself is resolved with stat, so a symlink pointing at a
        directory is an acceptable root.

        Raises:
            InvalidRoot: If the path does not exist or is not a directory
        """
        root_path = Path(root)
        try:
            root_stat = os.stat(root_path)
        except OSError as e:
            raise InvalidRoot(str(root), InvalidRoot.MISSING, detail=str(e)) from e

        if EntryKind.from_mode(root_stat.st_mode) != EntryKind.DIRECTORY:
            raise InvalidRoot(str(root), InvalidRoot.NOT_DIRECTORY)

        return root_path

    def filter(self, root: Union[str, Path], threshold: int,
               operator: Union[ComparisonOperator, str] = ComparisonOperator.EQ,
               label: Optional[str] = None) -> List[str]:
        """
        Get the names of entries under root that satisfy the comparison.

        Args:
            root: Directory to walk
            threshold: Size in bytes to compare against
            operator: Comparison operator or its name ('eq', 'lt', 'gt', 'le', 'ge')
            label: Prefix for diagnostic messages

        Returns:
            Base names of the selected entries, in traversal order

        Raises:
            InvalidOperator: If operator names no known comparison
            InvalidRoot: If root is missing or not a directory
        """
        return [entry.name for entry in self.filter_entries(root, threshold, operator, label)]

    def filter_entries(self, root: Union[str, Path], threshold: int,
                       operator: Union[ComparisonOperator, str] = ComparisonOperator.EQ,
                       label: Optional[str] = None) -> List[FileEntry]:
        """
        Like filter(), but returns the selected FileEntry objects.

        Raises:
            InvalidOperator: If operator names no known comparison
            InvalidRoot: If root is missing or not a directory
        """
        op = ComparisonOperator.from_value(operator)
        root_path = self.validate_root(root)
        label = label or f"size_cmp({root},{threshold},{op.value})"

        self.diagnostics = []
        self.reset_stats()

        logger.info(f"Walking directory tree: {root_path} (size {op.symbol} {threshold})")
        matched: List[FileEntry] = []

        for entry in self.walk(root_path, label):
            self._stats['files_scanned'] += 1

            if entry.is_irregular():
                self._stats['irregular_entries'] += 1
                self._emit(Diagnostic(
                    kind=DiagnosticKind.IRREGULAR_ENTRY,
                    message=f"{label}: {entry.name} is {entry.kind.value} ({entry.mode})",
                    path=entry.path
                ))
                matched.append(entry)
            elif op.compare(entry.size, threshold):
                logger.debug(f"Matched {entry.path} ({entry.size} {op.symbol} {threshold})")
                matched.append(entry)

        self._stats['files_matched'] = len(matched)
        logger.info(f"Walk of {root_path} finished: {len(matched)} of {self._stats['files_scanned']} entries matched")
        return matched

    def walk(self, root_path: Path, label: str = "size_cmp") -> Iterator[FileEntry]:
        """
        Yield every non-directory entry below root_path, depth-first.

        Directories are descended into but never yielded. Entries that
        cannot be listed or stat'ed are reported and skipped.

        Args:
            root_path: Directory to walk, assumed to be valid
            label: Prefix for diagnostic messages
        """
        root_children = self._list_directory(root_path, label)
        if root_children is None:
            return

        self._stats['directories_traversed'] += 1
        stack = [root_children]

        while stack:
            child_path = next(stack[-1], None)
            if child_path is None:
                stack.pop()
                continue

            try:
                stat_result = os.lstat(child_path)
            except OSError as e:
                self._entry_error(child_path, e, label)
                continue

            entry = FileEntry.from_stat(child_path, stat_result)
            if entry.kind == EntryKind.DIRECTORY:
                children = self._list_directory(Path(child_path), label)
                if children is not None:
                    self._stats['directories_traversed'] += 1
                    stack.append(children)
                continue

            yield entry

    def _list_directory(self, dir_path: Path, label: str) -> Optional[Iterator[str]]:
        """
        List a directory's children in name order.

        Returns:
            Iterator over child paths, or None if the directory cannot be read
        """
        try:
            with os.scandir(dir_path) as it:
                names = sorted(dir_entry.name for dir_entry in it)
        except OSError as e:
            self._entry_error(str(dir_path), e, label)
            return None

        return iter([os.path.join(dir_path, name) for name in names])

    def _entry_error(self, path: str, error: OSError, label: str) -> None:
        """Record a per-entry failure and let the walk continue."""
        self._stats['errors'] += 1
        failure = TraversalEntryError(path, error)
        self._emit(Diagnostic(
            kind=DiagnosticKind.TRAVERSAL_ENTRY_ERROR,
            message=f"{label}: {failure}",
            path=path
        ))

    def _emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        self.sink(diagnostic)

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last walk.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()
