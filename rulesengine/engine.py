from typing import Generic, Iterable, Protocol, TypeVar

from . import log
from .context import Context, Evaluable, Evaluating, TokenFinder, Transforming

LOG_TAG = "RulesEngine"


class Rule(Protocol):
    @property
    def evaluable(self) -> Evaluable: ...


R = TypeVar("R", bound=Rule)


class RulesEngine(Generic[R]):
    """Holds an ordered rule list and reports which rules currently match.

    ``add_rules``/``clear_rules`` are not synchronized; callers serialize
    mutation against ``evaluate``.
    """

    def __init__(self, evaluator: Evaluating, transformer: Transforming):
        self.evaluator = evaluator
        self.transformer = transformer
        self.rules: list[R] = []

    def add_rules(self, rules: Iterable[R]) -> None:
        self.rules.extend(rules)

    def clear_rules(self) -> None:
        self.rules.clear()

    def evaluate(self, token_finder: TokenFinder) -> list[R]:
        context = Context(token_finder, self.evaluator, self.transformer)
        matched = [rule for rule in self.rules if rule.evaluable.evaluate(context).is_success]
        log.verbose(LOG_TAG, f"{len(matched)} of {len(self.rules)} rules matched")
        return matched
