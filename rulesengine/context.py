from dataclasses import dataclass
from typing import Any, Optional, Protocol

from .result import RulesResult


class TokenFinder(Protocol):
    def get(self, path: str) -> Optional[Any]: ...


class Transforming(Protocol):
    def transform(self, name: str, value: Any) -> Optional[Any]: ...


class Evaluating(Protocol):
    def evaluate(self, lhs: Any, operation: str, rhs: Any) -> RulesResult: ...
    def evaluate_unary(self, operation: str, lhs: Any) -> RulesResult: ...


class Evaluable(Protocol):
    def evaluate(self, context: "Context") -> RulesResult: ...


@dataclass(frozen=True)
class Context:
    token_finder: TokenFinder
    evaluator: Evaluating
    transformer: Transforming
