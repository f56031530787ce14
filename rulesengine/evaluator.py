from enum import Enum
from typing import Any, Optional

from . import log
from .operand import ValueKind, parse_decimal
from .result import FailureType, RulesResult

LOG_TAG = "ConditionEvaluator"


class ConditionOperator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    CONTAINS = "contains"
    NOT_CONTAINS = "notContains"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUALS = "greaterThanOrEquals"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUALS = "lessThanOrEquals"
    EXISTS = "exists"
    NOT_EXISTS = "notExists"


class EvaluatorOption(str, Enum):
    DEFAULT = "default"
    CASE_INSENSITIVE = "case_insensitive"


def parse_double(value: Any) -> Optional[float]:
    """Read ``value`` as a float the way a decimal string would be parsed.

    Booleans, containers and unparseable strings give ``None``.
    """
    kind = ValueKind.of(value)
    if kind is ValueKind.STRING:
        return parse_decimal(value)
    if kind is not ValueKind.NUMBER:
        return None
    try:
        return float(value)
    except OverflowError:
        return None


class ConditionEvaluator:
    """Typed comparison operators used at the leaves of condition trees.

    Mismatched operand types never raise; the comparison is simply false.
    """

    def __init__(self, option: EvaluatorOption = EvaluatorOption.DEFAULT):
        self.option = option
        self._binary = {
            ConditionOperator.EQUALS.value: self._equals,
            ConditionOperator.NOT_EQUALS.value: self._not_equals,
            ConditionOperator.STARTS_WITH.value: self._starts_with,
            ConditionOperator.ENDS_WITH.value: self._ends_with,
            ConditionOperator.CONTAINS.value: self._contains,
            ConditionOperator.NOT_CONTAINS.value: self._not_contains,
            ConditionOperator.GREATER_THAN.value: lambda lhs, rhs: self._compare(lhs, rhs, lambda a, b: a > b),
            ConditionOperator.GREATER_THAN_OR_EQUALS.value: lambda lhs, rhs: self._compare(lhs, rhs, lambda a, b: a >= b),
            ConditionOperator.LESS_THAN.value: lambda lhs, rhs: self._compare(lhs, rhs, lambda a, b: a < b),
            ConditionOperator.LESS_THAN_OR_EQUALS.value: lambda lhs, rhs: self._compare(lhs, rhs, lambda a, b: a <= b),
        }
        self._unary = {
            ConditionOperator.EXISTS.value: lambda value: value is not None,
            ConditionOperator.NOT_EXISTS.value: lambda value: value is None,
        }

    @property
    def case_insensitive(self) -> bool:
        return self.option == EvaluatorOption.CASE_INSENSITIVE

    def evaluate(self, lhs: Any, operation: str, rhs: Any) -> RulesResult:
        operator = self._binary.get(_operator_name(operation))
        if operator is None:
            return _missing_operator(operation)
        return _outcome(operator(lhs, rhs), operation)

    def evaluate_unary(self, operation: str, lhs: Any) -> RulesResult:
        operator = self._unary.get(_operator_name(operation))
        if operator is None:
            return _missing_operator(operation)
        return _outcome(operator(lhs), operation)

    def _strings(self, lhs: Any, rhs: Any) -> Optional[tuple[str, str]]:
        if not isinstance(lhs, str) or not isinstance(rhs, str):
            return None
        if self.case_insensitive:
            return lhs.lower(), rhs.lower()
        return lhs, rhs

    def _equals(self, lhs: Any, rhs: Any) -> bool:
        strings = self._strings(lhs, rhs)
        if strings is not None:
            return strings[0] == strings[1]
        # True == 1 in Python, but a boolean never equals a number
        if (ValueKind.of(lhs) is ValueKind.BOOLEAN) != (ValueKind.of(rhs) is ValueKind.BOOLEAN):
            return False
        return lhs == rhs

    def _not_equals(self, lhs: Any, rhs: Any) -> bool:
        return not self._equals(lhs, rhs)

    def _starts_with(self, lhs: Any, rhs: Any) -> bool:
        strings = self._strings(lhs, rhs)
        return strings is not None and strings[0].startswith(strings[1])

    def _ends_with(self, lhs: Any, rhs: Any) -> bool:
        strings = self._strings(lhs, rhs)
        return strings is not None and strings[0].endswith(strings[1])

    def _contains(self, lhs: Any, rhs: Any) -> bool:
        strings = self._strings(lhs, rhs)
        return strings is not None and strings[1] in strings[0]

    def _not_contains(self, lhs: Any, rhs: Any) -> bool:
        return not self._contains(lhs, rhs)

    @staticmethod
    def _compare(lhs: Any, rhs: Any, predicate) -> bool:
        left, right = parse_double(lhs), parse_double(rhs)
        if left is None or right is None:
            return False
        return predicate(left, right)


def _operator_name(operation: Any) -> Optional[str]:
    if isinstance(operation, ConditionOperator):
        return operation.value
    return operation if isinstance(operation, str) else None


def _missing_operator(operation: Any) -> RulesResult:
    log.verbose(LOG_TAG, f"Unknown operator {operation!r}")
    return RulesResult.failure(FailureType.MISSING_OPERATOR, f'Operator is invalid "{operation}"')


def _outcome(matched: bool, operation: Any) -> RulesResult:
    if matched:
        return RulesResult.SUCCESS
    return RulesResult.failure(
        FailureType.CONDITION_FAILED,
        f"Condition not matched for operation {_operator_name(operation)}",
    )
