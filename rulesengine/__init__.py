"""
Rules Engine Package

Tokenizes ``{{token}}`` templates, evaluates typed comparison operators and
reports which rules of an ordered rule set match the current context.
"""

from .config import VERSION as __version__, Settings
from .context import Context, Evaluable, Evaluating, TokenFinder, Transforming
from .engine import RulesEngine
from .evaluator import ConditionEvaluator, ConditionOperator, EvaluatorOption
from .expressions import ComparisonExpression, LogicalExpression, UnaryExpression
from .launch import LaunchRulesEngine
from .models import Event, LaunchRule, RuleConsequence, RulesDefinitionError, RulesDocument, load_rules
from .operand import Operand, OperandLiteral, ValueKind
from .result import FailureType, RulesResult
from .template import DelimiterPair, TextSegment, TokenSegment, parse, render
from .token import Function, Variable, classify
from .token_finder import EventTokenFinder
from .transformer import Transformer, create_transformer

__all__ = [
    "__version__",
    "Settings",
    "Context",
    "Evaluable",
    "Evaluating",
    "TokenFinder",
    "Transforming",
    "RulesEngine",
    "ConditionEvaluator",
    "ConditionOperator",
    "EvaluatorOption",
    "ComparisonExpression",
    "LogicalExpression",
    "UnaryExpression",
    "LaunchRulesEngine",
    "Event",
    "LaunchRule",
    "RuleConsequence",
    "RulesDefinitionError",
    "RulesDocument",
    "load_rules",
    "Operand",
    "OperandLiteral",
    "ValueKind",
    "FailureType",
    "RulesResult",
    "DelimiterPair",
    "TextSegment",
    "TokenSegment",
    "parse",
    "render",
    "Function",
    "Variable",
    "classify",
    "EventTokenFinder",
    "Transformer",
    "create_transformer",
]
