"""
Unit tests for the size query data models.
"""

import pytest
from pydantic import ValidationError

from sizecmp.errors import InvalidOperator, InvalidSize
from sizecmp.models.size_query import (
    ComparisonOperator,
    SizeCmpArgs,
    SizeQuery,
    get_operators
)


class TestComparisonOperator:
    """Test cases for ComparisonOperator."""

    @pytest.mark.parametrize("op,size,threshold,expected", [
        (ComparisonOperator.EQ, 1024, 1024, True),
        (ComparisonOperator.EQ, 1023, 1024, False),
        (ComparisonOperator.LT, 1023, 1024, True),
        (ComparisonOperator.LT, 1024, 1024, False),
        (ComparisonOperator.GT, 1025, 1024, True),
        (ComparisonOperator.GT, 1024, 1024, False),
        (ComparisonOperator.LE, 1024, 1024, True),
        (ComparisonOperator.LE, 1025, 1024, False),
        (ComparisonOperator.GE, 1024, 1024, True),
        (ComparisonOperator.GE, 1023, 1024, False),
    ])
    def test_compare(self, op, size, threshold, expected):
        """Test the comparison semantics of each operator."""
        assert op.compare(size, threshold) is expected

    def test_from_value(self):
        """Test coercion from strings and members."""
        assert ComparisonOperator.from_value("ge") == ComparisonOperator.GE
        assert ComparisonOperator.from_value(ComparisonOperator.LT) == ComparisonOperator.LT

    def test_from_value_defaults_to_eq(self):
        """Test that a missing operator means equality."""
        assert ComparisonOperator.from_value("") == ComparisonOperator.EQ
        assert ComparisonOperator.from_value(None) == ComparisonOperator.EQ

    def test_from_value_rejects_unknown(self):
        """Test that unknown operators raise InvalidOperator."""
        with pytest.raises(InvalidOperator, match="invalid operator bogus"):
            ComparisonOperator.from_value("bogus")
        with pytest.raises(InvalidOperator):
            ComparisonOperator.from_value("EQ")

    def test_symbols(self):
        """Test operator symbols used in log messages."""
        assert ComparisonOperator.GE.symbol == ">="
        assert ComparisonOperator.EQ.symbol == "=="

    def test_get_operators(self):
        """Test the list of accepted operator names."""
        assert sorted(get_operators()) == ["eq", "ge", "gt", "le", "lt"]


class TestSizeCmpArgs:
    """Test cases for SizeCmpArgs."""

    def test_defaults(self):
        """Test that size and operator have defaults."""
        args = SizeCmpArgs(path="/tmp")

        assert args.size == "0"
        assert args.operator == "eq"

    def test_empty_values_take_defaults(self):
        """Test that empty or None size and operator take defaults."""
        args = SizeCmpArgs(path="/tmp", size="", operator=None)

        assert args.size == "0"
        assert args.operator == "eq"

    def test_path_required(self):
        """Test that path is required and non-empty."""
        with pytest.raises(ValidationError):
            SizeCmpArgs()
        with pytest.raises(ValidationError):
            SizeCmpArgs(path="")

    def test_unknown_argument_rejected(self):
        """Test that unknown argument names are rejected."""
        with pytest.raises(ValidationError):
            SizeCmpArgs(path="/tmp", pattern="*.log")

    def test_operator_not_validated_here(self):
        """Test that operator values are checked later, not by the schema."""
        args = SizeCmpArgs(path="/tmp", operator="bogus")
        assert args.operator == "bogus"

    def test_operator_kept_verbatim(self):
        """Test that operators are not trimmed, so padded names stay invalid."""
        args = SizeCmpArgs(path="/tmp", operator=" eq ")

        assert args.operator == " eq "
        with pytest.raises(InvalidOperator):
            SizeQuery.from_args(args)
        assert SizeCmpArgs(path="/tmp", operator="  ").operator == "eq"

    def test_describe(self):
        """Test the diagnostic label."""
        args = SizeCmpArgs(path="/var/log", size="10MB", operator="ge")
        assert args.describe() == "size_cmp(/var/log,10MB,ge)"

    def test_schema_documents_arguments(self):
        """Test that the JSON schema carries argument descriptions."""
        schema = SizeCmpArgs.model_json_schema()

        assert schema['required'] == ['path']
        assert "recursively" in schema['properties']['path']['description']
        assert set(schema['properties']) == {'path', 'size', 'operator'}


class TestSizeQuery:
    """Test cases for SizeQuery."""

    def test_from_args(self):
        """Test building a query from arguments."""
        query = SizeQuery.from_args(SizeCmpArgs(path="/var/log", size="10MB", operator="gt"))

        assert query.path == "/var/log"
        assert query.size == "10MB"
        assert query.operator == ComparisonOperator.GT
        assert query.threshold == 10 * 1024 ** 2

    def test_from_args_invalid_operator(self):
        """Test that an invalid operator raises InvalidOperator."""
        with pytest.raises(InvalidOperator):
            SizeQuery.from_args(SizeCmpArgs(path="/tmp", operator="ne"))

    def test_from_args_invalid_size(self):
        """Test that an invalid size raises InvalidSize."""
        with pytest.raises(InvalidSize):
            SizeQuery.from_args(SizeCmpArgs(path="/tmp", size="-5MB"))

    def test_string_operator_conversion(self):
        """Test conversion of string operator to enum."""
        query = SizeQuery(path="/tmp", operator="le")
        assert query.operator == ComparisonOperator.LE

    def test_invalid_string_operator(self):
        """Test that direct construction rejects unknown operators."""
        with pytest.raises(ValidationError):
            SizeQuery(path="/tmp", operator="bogus")

    def test_negative_threshold_rejected(self):
        """Test that thresholds must be non-negative."""
        with pytest.raises(ValidationError):
            SizeQuery(path="/tmp", threshold=-1)

    def test_to_dict(self):
        """Test dictionary conversion."""
        query = SizeQuery(path="/tmp", size="1K", operator="ge", threshold=1024)

        assert query.to_dict() == {
            'path': "/tmp",
            'size': "1K",
            'operator': "ge",
            'threshold': 1024
        }

    def test_str(self):
        """Test string representation."""
        query = SizeQuery(path="/tmp", size="1K", operator="ge", threshold=1024)
        assert str(query) == "/tmp | size >= 1024 bytes (1K)"
