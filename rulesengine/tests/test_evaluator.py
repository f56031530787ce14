"""
Unit Tests for the Condition Evaluator

Tests cover:
1. Equality and case sensitivity
2. String prefix, suffix and containment operators
3. Lenient numeric comparison
4. Existence checks
5. Unknown operators and result shape
"""

import pytest

from rulesengine.evaluator import ConditionEvaluator, ConditionOperator, EvaluatorOption, parse_double
from rulesengine.result import FailureType, RulesResult


@pytest.fixture
def evaluator():
    return ConditionEvaluator()


@pytest.fixture
def insensitive():
    return ConditionEvaluator(EvaluatorOption.CASE_INSENSITIVE)


class TestEquality:
    """Tests for equals and notEquals."""

    def test_case_sensitive_by_default(self, evaluator):
        """Test that the default evaluator compares strings exactly."""
        assert not evaluator.evaluate("ABC", "equals", "abc").is_success
        assert evaluator.evaluate("abc", "equals", "abc").is_success

    def test_case_insensitive_option(self, insensitive):
        """Test that the case-insensitive evaluator ignores case."""
        assert insensitive.evaluate("ABC", "equals", "abc").is_success
        assert not insensitive.evaluate("ABC", "notEquals", "abc").is_success

    def test_native_equality(self, evaluator):
        """Test structural equality for non-string values."""
        assert evaluator.evaluate(3, "equals", 3).is_success
        assert evaluator.evaluate([1, 2], "equals", [1, 2]).is_success
        assert evaluator.evaluate(True, "equals", True).is_success
        assert not evaluator.evaluate("3", "equals", 3).is_success

    def test_boolean_never_equals_number(self, evaluator):
        """Test that booleans and numbers are different types for equality."""
        assert not evaluator.evaluate(True, "equals", 1).is_success
        assert not evaluator.evaluate(False, "equals", 0).is_success
        assert not evaluator.evaluate(1, "equals", True).is_success
        assert evaluator.evaluate(True, "notEquals", 1).is_success
        assert evaluator.evaluate(1, "equals", 1.0).is_success

    def test_not_equals(self, evaluator):
        """Test notEquals is the negation of equals."""
        assert evaluator.evaluate("a", "notEquals", "b").is_success
        assert not evaluator.evaluate("a", "notEquals", "a").is_success

    def test_operator_enum_accepted(self, evaluator):
        """Test that operator enum members work like their names."""
        assert evaluator.evaluate("a", ConditionOperator.EQUALS, "a").is_success


class TestStringOperators:
    """Tests for startsWith, endsWith, contains and notContains."""

    def test_starts_with(self, evaluator, insensitive):
        """Test prefix matching."""
        assert evaluator.evaluate("hello world", "startsWith", "hello").is_success
        assert not evaluator.evaluate("hello world", "startsWith", "HELLO").is_success
        assert insensitive.evaluate("hello world", "startsWith", "HELLO").is_success

    def test_ends_with(self, evaluator, insensitive):
        """Test suffix matching."""
        assert evaluator.evaluate("hello world", "endsWith", "world").is_success
        assert not evaluator.evaluate("hello world", "endsWith", "WORLD").is_success
        assert insensitive.evaluate("hello world", "endsWith", "WORLD").is_success

    def test_prefix_is_literal(self, evaluator):
        """Test that regex characters in the operand are matched literally."""
        assert evaluator.evaluate("a.b*c", "startsWith", "a.b*").is_success
        assert not evaluator.evaluate("axbc", "startsWith", "a.b").is_success

    def test_contains(self, evaluator, insensitive):
        """Test substring matching."""
        assert evaluator.evaluate("verizon wireless", "contains", "wire").is_success
        assert not evaluator.evaluate("verizon wireless", "contains", "WIRE").is_success
        assert insensitive.evaluate("Verizon Wireless", "contains", "WIRE").is_success

    def test_not_contains(self, evaluator):
        """Test notContains is the negation of contains."""
        assert evaluator.evaluate("abc", "notContains", "x").is_success
        assert not evaluator.evaluate("abc", "notContains", "b").is_success

    @pytest.mark.parametrize("operation", ["startsWith", "endsWith", "contains"])
    def test_non_strings_are_false(self, evaluator, operation):
        """Test that string operators are false for non-string operands."""
        result = evaluator.evaluate(123, operation, "1")

        assert not result.is_success
        assert result.failure_type == FailureType.CONDITION_FAILED

    def test_not_contains_non_string_is_true(self, evaluator):
        """Test that notContains negates the false result for non-strings."""
        assert evaluator.evaluate(123, "notContains", "1").is_success


class TestNumericComparison:
    """Tests for greater/less comparisons."""

    def test_greater_than(self, evaluator):
        """Test numeric strings compare as numbers."""
        assert evaluator.evaluate("5", "greaterThan", "3").is_success

        result = evaluator.evaluate("3", "greaterThan", "5")
        assert result.failure_type == FailureType.CONDITION_FAILED

    def test_string_numbers_compare_numerically(self, evaluator):
        """Test that "10" is greater than "9" numerically."""
        assert evaluator.evaluate("10", "greaterThan", "9").is_success

    @pytest.mark.parametrize("lhs,operation,rhs,expected", [
        (5, "greaterThanOrEquals", 5, True),
        (4.9, "greaterThanOrEquals", 5, False),
        (2, "lessThan", 2.5, True),
        ("2.5", "lessThan", 2, False),
        (3, "lessThanOrEquals", "3.0", True),
        (" 7 ", "lessThanOrEquals", 6, False),
    ])
    def test_comparisons(self, evaluator, lhs, operation, rhs, expected):
        """Test mixed numeric comparisons."""
        assert evaluator.evaluate(lhs, operation, rhs).is_success is expected

    @pytest.mark.parametrize("lhs,rhs", [("abc", 1), (1, "abc"), (None, 1), (True, 0), ([1], 0)])
    def test_unparseable_is_false_not_error(self, evaluator, lhs, rhs):
        """Test that an unparseable operand makes the comparison false."""
        result = evaluator.evaluate(lhs, "greaterThan", rhs)

        assert result.failure_type == FailureType.CONDITION_FAILED

    def test_parse_double(self):
        """Test number parsing rules."""
        assert parse_double("1.5") == 1.5
        assert parse_double(2) == 2.0
        assert parse_double(True) is None
        assert parse_double("x") is None
        assert parse_double(None) is None

    @pytest.mark.parametrize("text", ["1_000", "inf", "-inf", "nan", "infinity", "0x10", "1.5f", "\u0663"])
    def test_parse_double_rejects_non_decimal_strings(self, text):
        """Test that only decimal spellings of numbers parse."""
        assert parse_double(text) is None

    @pytest.mark.parametrize("text,expected", [("1e3", 1000.0), ("-.5", -0.5), ("+2.", 2.0), (" 4 ", 4.0), ("Infinity", float("inf"))])
    def test_parse_double_decimal_forms(self, text, expected):
        """Test exponent, signed and padded decimal strings."""
        assert parse_double(text) == expected

    def test_underscored_string_does_not_compare(self, evaluator):
        """Test that digit separators make a string non-numeric."""
        result = evaluator.evaluate("1_000", "greaterThan", 5)

        assert result.failure_type == FailureType.CONDITION_FAILED

    def test_huge_integer_does_not_compare(self, evaluator):
        """Test that an integer too large for a float is unparseable."""
        assert parse_double(10 ** 400) is None
        assert not evaluator.evaluate(10 ** 400, "greaterThan", 1).is_success


class TestExistence:
    """Tests for the unary exists and notExists operators."""

    def test_exists(self, evaluator):
        """Test exists is a null check."""
        assert not evaluator.evaluate_unary("exists", None).is_success
        assert evaluator.evaluate_unary("exists", 0).is_success
        assert evaluator.evaluate_unary("exists", "").is_success

    def test_not_exists(self, evaluator):
        """Test notExists is the inverse null check."""
        assert evaluator.evaluate_unary("notExists", None).is_success
        assert not evaluator.evaluate_unary("notExists", False).is_success


class TestResults:
    """Tests for result values and unknown operators."""

    def test_success_is_shared(self, evaluator):
        """Test that matches return the shared success instance."""
        result = evaluator.evaluate("a", "equals", "a")

        assert result is RulesResult.SUCCESS
        assert result.failure_type is None
        assert result.message is None

    def test_failure_message(self, evaluator):
        """Test the message of a failed condition."""
        result = evaluator.evaluate("a", "equals", "b")
        assert result.message == "Condition not matched for operation equals"

    def test_unknown_binary_operator(self, evaluator):
        """Test that an unknown operator is reported as missing."""
        result = evaluator.evaluate("x", "bogusOp", "y")

        assert not result.is_success
        assert result.failure_type == FailureType.MISSING_OPERATOR

    def test_unary_operator_in_binary_position(self, evaluator):
        """Test that unary operators are not accepted as binary ones."""
        assert evaluator.evaluate("x", "exists", "y").failure_type == FailureType.MISSING_OPERATOR
        assert evaluator.evaluate_unary("equals", "x").failure_type == FailureType.MISSING_OPERATOR

    def test_evaluator_never_reports_operand_errors(self, evaluator):
        """Test that mismatched types degrade to condition failures."""
        for operation in ["equals", "startsWith", "greaterThan", "contains"]:
            result = evaluator.evaluate({"a": 1}, operation, object())
            assert result.failure_type in (None, FailureType.CONDITION_FAILED)
