"""
The size_cmp function: invocation boundary for sizecmp.

A host calls SizeCmpFunction with named arguments (path, size, operator).
Arguments are defaulted and validated, the size expression is parsed, the
tree is walked, and the matching names are returned. No failure escapes a
call: invalid arguments produce a diagnostic on the sink and a None result.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .errors import InvalidOperator, InvalidRoot, InvalidSize
from .models.size_query import ComparisonOperator, DEFAULT_PATH, SizeCmpArgs, SizeQuery
from .models.results import Diagnostic, DiagnosticKind, SizeCmpResult
from .tools.size_parser import parse_size, format_size
from .tools.tree_filter import DiagnosticSink, TreeFilter, log_diagnostic


logger = logging.getLogger(__name__)


@dataclass
class FunctionInfo:
    """
    Description of a function as exposed to a host.

    Attributes:
        name: Name the host registers the function under
        doc: One-line description
        args: JSON schema of the accepted named arguments
    """
    name: str
    doc: str
    args: Dict[str, Any]


class SizeCmpFunction:
    """
    Find files under a directory whose size compares to a given size.

    Each call owns its own result and diagnostics, so one instance can
    serve any number of sequential calls.
    """

    NAME = "size_cmp"
    DOC = "Queries for files under a directory whose size compares to a given size."

    def __init__(self, sink: Optional[DiagnosticSink] = None, default_path: Optional[str] = None):
        """
        Initialize the function.

        Args:
            sink: Callback receiving every diagnostic. Defaults to logging.
            default_path: Root used when a call does not name one.
                Defaults to /var/log.
        """
        self.sink = sink or log_diagnostic
        self.default_path = default_path or DEFAULT_PATH
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def info(self) -> FunctionInfo:
        """Describe this function and its arguments."""
        return FunctionInfo(name=self.NAME, doc=self.DOC, args=SizeCmpArgs.model_json_schema())

    def parse(self, text: str) -> int:
        """Convert a size expression to bytes. Raises InvalidSize."""
        return parse_size(text)

    def filter(self, root: str, threshold: int, operator: Any = ComparisonOperator.EQ) -> List[str]:
        """Walk root and return matching names. Raises InvalidRoot or InvalidOperator."""
        return TreeFilter(sink=self.sink).filter(root, threshold, operator)

    def query(self, **kwargs: Any) -> SizeCmpResult:
        """
        Run a size comparison and return the full result.

        Args:
            **kwargs: Named arguments path, size and operator

        Returns:
            SizeCmpResult; its matches are None if validation failed
        """
        result = SizeCmpResult()

        if not kwargs.get('path'):
            kwargs['path'] = self.default_path

        try:
            args = SizeCmpArgs(**kwargs)
        except ValidationError as e:
            label = f"size_cmp({kwargs.get('path', '')},{kwargs.get('size', '')},{kwargs.get('operator', '')})"
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'args'}: {error['msg']}"
                for error in e.errors()
            )
            return self._fail(result, DiagnosticKind.INVALID_ARGUMENTS, f"{label}: {problems}")

        label = args.describe()

        try:
            ComparisonOperator.from_value(args.operator)
            TreeFilter.validate_root(args.path)
            query = SizeQuery.from_args(args)
        except InvalidOperator as e:
            return self._fail(result, DiagnosticKind.INVALID_OPERATOR, f"{label}: {e}")
        except InvalidRoot as e:
            return self._fail(result, DiagnosticKind.INVALID_ROOT, f"{label}: {e}", args.path)
        except InvalidSize as e:
            return self._fail(result, DiagnosticKind.INVALID_SIZE, f"{label}: {e}")

        result.query = query
        self.logger.debug(f"{label}: threshold {query.threshold} bytes ({format_size(query.threshold)})")

        tree = TreeFilter(sink=self.sink)
        try:
            entries = tree.filter_entries(query.path, query.threshold, query.operator, label=label)
        except InvalidRoot as e:
            # Root vanished between validation and the walk
            return self._fail(result, DiagnosticKind.INVALID_ROOT, f"{label}: {e}", args.path)
        finally:
            result.diagnostics.extend(tree.diagnostics)
            result.stats = tree.get_stats()

        result.entries = entries
        result.matches = [entry.name for entry in entries]
        return result

    def call(self, **kwargs: Any) -> Optional[List[str]]:
        """
        Run a size comparison.

        Returns:
            Matching entry names in traversal order, or None if the
            arguments were rejected
        """
        return self.query(**kwargs).matches

    __call__ = call

    def _fail(self, result: SizeCmpResult, kind: DiagnosticKind, message: str,
              path: Optional[str] = None) -> SizeCmpResult:
        diagnostic = Diagnostic(kind=kind, message=message, path=path)
        result.diagnostics.append(diagnostic)
        self.sink(diagnostic)
        return result


def create_size_cmp(sink: Optional[DiagnosticSink] = None, config: Optional[Any] = None) -> SizeCmpFunction:
    """
    Create a size_cmp function.

    Args:
        sink: Callback receiving every diagnostic (optional)
        config: SizeCmpConfig supplying the default root (optional)

    Returns:
        A ready-to-call SizeCmpFunction
    """
    default_path = config.defaults.path if config is not None else None
    return SizeCmpFunction(sink=sink, default_path=default_path)
