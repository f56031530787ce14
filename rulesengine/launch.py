"""
Rules engine facade for event-driven rule sets.

Loads rule documents, evaluates events against them and returns the
matched consequences with their ``{%token%}`` placeholders replaced.
"""

from typing import Any, Optional, Union

from . import log
from .config import Settings
from .context import TokenFinder, Transforming
from .engine import RulesEngine
from .evaluator import ConditionEvaluator, EvaluatorOption
from .models import Event, LaunchRule, RuleConsequence, RulesDocument, load_rules
from .template import DelimiterPair, render
from .token_finder import EventTokenFinder
from .transformer import create_transformer

LOG_TAG = "LaunchRulesEngine"


def replace_tokens(value: Any, token_finder: TokenFinder, transformer: Transforming, delimiter: DelimiterPair) -> Any:
    if isinstance(value, str):
        return render(value, token_finder, transformer, delimiter)
    if isinstance(value, dict):
        return {key: replace_tokens(item, token_finder, transformer, delimiter) for key, item in value.items()}
    if isinstance(value, list):
        return [replace_tokens(item, token_finder, transformer, delimiter) for item in value]
    return value


def replace_consequence_tokens(
    consequence: RuleConsequence,
    token_finder: TokenFinder,
    transformer: Transforming,
    delimiter: DelimiterPair,
) -> RuleConsequence:
    if not consequence.detail:
        return consequence
    detail = replace_tokens(consequence.detail, token_finder, transformer, delimiter)
    return consequence.model_copy(update={"detail": detail})


class LaunchRulesEngine:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        option = EvaluatorOption.CASE_INSENSITIVE if self.settings.case_insensitive else EvaluatorOption.DEFAULT
        self.transformer = create_transformer()
        self.engine: RulesEngine[LaunchRule] = RulesEngine(ConditionEvaluator(option), self.transformer)

    @property
    def rules(self) -> list[LaunchRule]:
        return self.engine.rules

    def load_rules(self, document: Union[str, bytes, dict, RulesDocument]) -> list[LaunchRule]:
        rules = load_rules(document)
        self.engine.clear_rules()
        self.engine.add_rules(rules)
        log.debug(LOG_TAG, f"Replaced rule set, {len(rules)} rules loaded")
        return rules

    def add_rules(self, document: Union[str, bytes, dict, RulesDocument]) -> list[LaunchRule]:
        rules = load_rules(document)
        self.engine.add_rules(rules)
        log.debug(LOG_TAG, f"Added {len(rules)} rules, {len(self.engine.rules)} total")
        return rules

    def clear_rules(self) -> None:
        self.engine.clear_rules()

    def process(self, event: Event) -> list[LaunchRule]:
        return self.engine.evaluate(EventTokenFinder(event))

    def evaluate_consequences(self, event: Event) -> list[RuleConsequence]:
        return self.consequences_for(event, self.process(event))

    def consequences_for(self, event: Event, matched: list[LaunchRule]) -> list[RuleConsequence]:
        token_finder = EventTokenFinder(event)
        return [
            replace_consequence_tokens(consequence, token_finder, self.transformer, self.settings.delimiter)
            for rule in matched
            for consequence in rule.consequences
        ]
