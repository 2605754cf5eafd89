"""
Size query data models for sizecmp.

This module defines the comparison operators, the argument schema accepted
at the invocation boundary, and the validated query that drives a walk.
"""

import operator
from typing import Any, Callable, Dict, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import InvalidOperator
from ..tools.size_parser import parse_size


DEFAULT_PATH = "/var/log"
DEFAULT_SIZE = "0"
DEFAULT_OPERATOR = "eq"


class ComparisonOperator(Enum):
    """Relations a file size can be tested against a threshold with."""
    EQ = "eq"
    LT = "lt"
    GT = "gt"
    LE = "le"
    GE = "ge"

    @classmethod
    def from_value(cls, value: Any) -> 'ComparisonOperator':
        """
        Coerce a string or enum member to a ComparisonOperator.

        An empty or missing value means EQ.

        Raises:
            InvalidOperator: If the value names no known operator
        """
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.EQ
        try:
            return cls(value)
        except ValueError:
            raise InvalidOperator(str(value)) from None

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    def compare(self, size: int, threshold: int) -> bool:
        """Check whether `size <op> threshold` holds."""
        return _COMPARATORS[self](size, threshold)


_COMPARATORS: Dict[ComparisonOperator, Callable[[int, int], bool]] = {
    ComparisonOperator.EQ: operator.eq,
    ComparisonOperator.LT: operator.lt,
    ComparisonOperator.GT: operator.gt,
    ComparisonOperator.LE: operator.le,
    ComparisonOperator.GE: operator.ge,
}

_SYMBOLS: Dict[ComparisonOperator, str] = {
    ComparisonOperator.EQ: "==",
    ComparisonOperator.LT: "<",
    ComparisonOperator.GT: ">",
    ComparisonOperator.LE: "<=",
    ComparisonOperator.GE: ">=",
}


def get_operators() -> list[str]:
    """Get the operator names accepted at the invocation boundary."""
    return [op.value for op in ComparisonOperator]


class SizeCmpArgs(BaseModel):
    """
    Named arguments accepted by the size_cmp function.

    Field descriptions double as the argument documentation reported by
    SizeCmpFunction.info().
    """

    model_config = ConfigDict(extra='forbid')

    path: str = Field(..., min_length=1, description="The location to check recursively for files")
    size: Optional[str] = Field(DEFAULT_SIZE, description="The size files are compared against, e.g. 10MB or 2.5GiB")
    operator: Optional[str] = Field(DEFAULT_OPERATOR, description="Operator which should be used: eq, le, ge, gt or lt")

    @field_validator('size')
    @classmethod
    def default_size(cls, v: Optional[str]) -> str:
        """Treat an empty size as zero."""
        if v is None or not v.strip():
            return DEFAULT_SIZE
        return v

    @field_validator('operator')
    @classmethod
    def default_operator(cls, v: Optional[str]) -> str:
        """Treat an empty operator as equality."""
        if v is None or not v.strip():
            return DEFAULT_OPERATOR
        return v

    def describe(self) -> str:
        """Label used as the prefix of every diagnostic for this call."""
        return f"size_cmp({self.path},{self.size},{self.operator})"


class SizeQuery(BaseModel):
    """
    A validated size comparison query.

    Attributes:
        path: Root directory to walk
        size: The size expression as supplied by the caller
        operator: Comparison applied to every regular file
        threshold: The size expression reduced to bytes
    """

    path: str = Field(..., min_length=1, description="Root directory to walk")
    size: str = Field(DEFAULT_SIZE, description="Size expression as supplied")
    operator: ComparisonOperator = Field(ComparisonOperator.EQ, description="Comparison operator")
    threshold: int = Field(0, ge=0, description="Threshold in bytes")

    @field_validator('operator', mode='before')
    @classmethod
    def validate_operator(cls, v) -> ComparisonOperator:
        """Ensure operator is a ComparisonOperator enum."""
        if isinstance(v, str):
            try:
                return ComparisonOperator(v)
            except ValueError:
                raise ValueError(f"Invalid operator: {v}")
        return v

    @classmethod
    def from_args(cls, args: SizeCmpArgs) -> 'SizeQuery':
        """
        Build a query from boundary arguments.

        Raises:
            InvalidOperator: If the operator is not recognized
            InvalidSize: If the size expression cannot be parsed
        """
        op = ComparisonOperator.from_value(args.operator)
        threshold = parse_size(args.size)
        return cls(path=args.path, size=args.size, operator=op, threshold=threshold)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the query to a dictionary representation."""
        data = self.model_dump()
        data['operator'] = self.operator.value
        return data

    def __str__(self) -> str:
        return f"{self.path} | size {self.operator.symbol} {self.threshold} bytes ({self.size})"
