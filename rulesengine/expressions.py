"""
Condition tree nodes.

Leaves compare resolved operands through the context's evaluator; logical
nodes combine child results with ``and``/``or``.
"""

from enum import Enum
from typing import Optional

from .context import Context, Evaluable
from .result import FailureType, RulesResult


class LogicalOperator(str, Enum):
    AND = "and"
    OR = "or"


class ComparisonExpression:
    def __init__(self, lhs, operation: Optional[str], rhs):
        self.lhs = lhs
        self.operation = operation
        self.rhs = rhs

    def evaluate(self, context: Context) -> RulesResult:
        if not self.operation:
            return RulesResult.failure(FailureType.MISSING_OPERATOR, "Operator is null, comparison returned false")
        if self.lhs is None or self.rhs is None:
            return RulesResult.failure(FailureType.INVALID_OPERAND, "Operand is null, comparison returned false")
        resolved_lhs = self.lhs.resolve(context)
        resolved_rhs = self.rhs.resolve(context)
        if resolved_lhs is None or resolved_rhs is None:
            return RulesResult.failure(
                FailureType.INVALID_OPERAND,
                f"Comparison {resolved_lhs!r} {self.operation} {resolved_rhs!r} returned false",
            )
        return context.evaluator.evaluate(resolved_lhs, self.operation, resolved_rhs)

    def __repr__(self) -> str:
        return f"ComparisonExpression({self.lhs!r}, {self.operation!r}, {self.rhs!r})"


class UnaryExpression:
    def __init__(self, lhs, operation: Optional[str]):
        self.lhs = lhs
        self.operation = operation

    def evaluate(self, context: Context) -> RulesResult:
        if not self.operation:
            return RulesResult.failure(FailureType.MISSING_OPERATOR, "Operator is null, unary expression returned false")
        resolved = self.lhs.resolve(context) if self.lhs is not None else None
        return context.evaluator.evaluate_unary(self.operation, resolved)

    def __repr__(self) -> str:
        return f"UnaryExpression({self.lhs!r}, {self.operation!r})"


class LogicalExpression:
    def __init__(self, operands: list[Evaluable], operation: str):
        self.operands = list(operands)
        self.operation = operation

    def evaluate(self, context: Context) -> RulesResult:
        operation = (self.operation or "").lower()
        if operation == LogicalOperator.AND.value:
            return self._and(context)
        if operation == LogicalOperator.OR.value:
            return self._or(context)
        return RulesResult.failure(FailureType.MISSING_OPERATOR, f'Unknown conjunction operator "{self.operation}"')

    def _and(self, context: Context) -> RulesResult:
        for operand in self.operands:
            result = operand.evaluate(context)
            if not result.is_success:
                return RulesResult.failure(
                    FailureType.CONDITION_FAILED, f"AND operation returned false: {result.message}"
                )
        return RulesResult.SUCCESS

    def _or(self, context: Context) -> RulesResult:
        for operand in self.operands:
            if operand.evaluate(context).is_success:
                return RulesResult.SUCCESS
        return RulesResult.failure(FailureType.CONDITION_FAILED, "OR operation returned false")

    def __repr__(self) -> str:
        return f"LogicalExpression({self.operands!r}, {self.operation!r})"
