from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureType(str, Enum):
    UNKNOWN = "UNKNOWN"
    CONDITION_FAILED = "CONDITION_FAILED"
    TYPE_MISMATCHED = "TYPE_MISMATCHED"
    MISSING_OPERATOR = "MISSING_OPERATOR"
    INVALID_OPERAND = "INVALID_OPERAND"


@dataclass(frozen=True)
class RulesResult:
    """Outcome of evaluating a condition.

    Build failures with ``RulesResult.failure``; successful evaluations
    share the ``SUCCESS`` instance.
    """

    failure_type: Optional[FailureType] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.failure_type is None

    @classmethod
    def failure(cls, failure_type: FailureType, message: str) -> "RulesResult":
        return cls(failure_type=failure_type, message=message)


RulesResult.SUCCESS = RulesResult()
