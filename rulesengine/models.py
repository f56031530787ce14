from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import log
from .context import Evaluable
from .evaluator import ConditionOperator
from .expressions import ComparisonExpression, LogicalExpression, LogicalOperator, UnaryExpression
from .operand import Operand, OperandLiteral
from .template import DEFAULT_DELIMITER

LOG_TAG = "RuleDefinition"


class RulesDefinitionError(ValueError):
    pass


class ConditionType(str, Enum):
    MATCHER = "matcher"
    GROUP = "group"


MATCHER_OPERATORS = {
    "eq": ConditionOperator.EQUALS,
    "ne": ConditionOperator.NOT_EQUALS,
    "gt": ConditionOperator.GREATER_THAN,
    "ge": ConditionOperator.GREATER_THAN_OR_EQUALS,
    "lt": ConditionOperator.LESS_THAN,
    "le": ConditionOperator.LESS_THAN_OR_EQUALS,
    "co": ConditionOperator.CONTAINS,
    "nc": ConditionOperator.NOT_CONTAINS,
    "sw": ConditionOperator.STARTS_WITH,
    "ew": ConditionOperator.ENDS_WITH,
    "ex": ConditionOperator.EXISTS,
    "nx": ConditionOperator.NOT_EXISTS,
}

UNARY_OPERATORS = (ConditionOperator.EXISTS, ConditionOperator.NOT_EXISTS)


class Event(BaseModel):
    name: str = ""
    type: str
    source: str
    data: Optional[dict[str, Any]] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "name": "Track Action",
            "type": "com.example.eventType.generic.track",
            "source": "com.example.eventSource.requestContent",
            "data": {"action": "purchase", "contextdata": {"total": 42}}
        }
    })


class MatcherDefinition(BaseModel):
    key: Optional[str] = None
    matcher: Optional[str] = None
    values: list[Any] = Field(default_factory=list)

    def to_evaluable(self) -> Optional[Evaluable]:
        operator = MATCHER_OPERATORS.get(self.matcher or "")
        if operator is None or not self.key:
            log.warning(LOG_TAG, f"Unsupported matcher {self.matcher!r} for key {self.key!r}")
            return None
        lhs = Operand(DEFAULT_DELIMITER.wrap(self.key))
        if operator in UNARY_OPERATORS:
            return UnaryExpression(lhs, operator.value)
        if not self.values:
            log.warning(LOG_TAG, f"Matcher {self.matcher!r} for key {self.key!r} has no values")
            return None
        comparisons = [ComparisonExpression(lhs, operator.value, OperandLiteral(value)) for value in self.values]
        if len(comparisons) == 1:
            return comparisons[0]
        return LogicalExpression(comparisons, LogicalOperator.OR.value)


class GroupDefinition(BaseModel):
    logic: Optional[str] = None
    conditions: list["ConditionDefinition"] = Field(default_factory=list)

    def to_evaluable(self) -> Optional[Evaluable]:
        logic = (self.logic or "").lower()
        if logic not in (LogicalOperator.AND.value, LogicalOperator.OR.value):
            log.warning(LOG_TAG, f"Unsupported group logic {self.logic!r}")
            return None
        evaluables = [e for e in (c.to_evaluable() for c in self.conditions) if e is not None]
        if not evaluables:
            return None
        return LogicalExpression(evaluables, logic)


class ConditionDefinition(BaseModel):
    type: str
    definition: dict[str, Any] = Field(default_factory=dict)

    def to_evaluable(self) -> Optional[Evaluable]:
        try:
            if self.type == ConditionType.MATCHER.value:
                return MatcherDefinition.model_validate(self.definition).to_evaluable()
            if self.type == ConditionType.GROUP.value:
                return GroupDefinition.model_validate(self.definition).to_evaluable()
        except ValidationError as e:
            log.warning(LOG_TAG, f"Malformed {self.type} condition: {e.error_count()} error(s)")
            return None
        log.warning(LOG_TAG, f"Unsupported condition type {self.type!r}")
        return None


GroupDefinition.model_rebuild()


class RuleConsequence(BaseModel):
    id: str
    type: str
    detail: Optional[dict[str, Any]] = None


class RuleDefinition(BaseModel):
    condition: ConditionDefinition
    consequences: list[RuleConsequence] = Field(default_factory=list)

    def to_rule(self) -> Optional["LaunchRule"]:
        evaluable = self.condition.to_evaluable()
        if evaluable is None:
            return None
        return LaunchRule(evaluable=evaluable, consequences=list(self.consequences))


class RulesDocument(BaseModel):
    version: int = 1
    rules: list[RuleDefinition] = Field(default_factory=list)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "version": 1,
            "rules": [{
                "condition": {
                    "type": "matcher",
                    "definition": {"key": "action", "matcher": "eq", "values": ["purchase"]}
                },
                "consequences": [{
                    "id": "purchase-postback", "type": "url",
                    "detail": {"url": "https://example.com/hit?total={%contextdata.total%}"}
                }]
            }]
        }
    })


@dataclass
class LaunchRule:
    evaluable: Evaluable
    consequences: list[RuleConsequence] = field(default_factory=list)


def load_rules(document: Union[str, bytes, dict, RulesDocument]) -> list[LaunchRule]:
    """Build rules from a rules document, skipping rules whose condition is unusable.

    Raises ``RulesDefinitionError`` when the document itself is malformed.
    """
    try:
        if isinstance(document, RulesDocument):
            parsed = document
        elif isinstance(document, (str, bytes)):
            parsed = RulesDocument.model_validate_json(document)
        else:
            parsed = RulesDocument.model_validate(document)
    except ValidationError as e:
        raise RulesDefinitionError(f"Invalid rules document: {e}") from e

    rules = []
    for index, definition in enumerate(parsed.rules):
        rule = definition.to_rule()
        if rule is None:
            log.warning(LOG_TAG, f"Skipping rule {index}, its condition could not be built")
            continue
        rules.append(rule)
    return rules
