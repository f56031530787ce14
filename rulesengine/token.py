import re
from dataclasses import dataclass
from typing import Any, Union

_FUNCTION_PATTERN = re.compile(r"\((.+)\)", re.DOTALL)


@dataclass(frozen=True)
class Variable:
    path: str

    def resolve(self, token_finder, transformer) -> Any:
        return token_finder.get(self.path)


@dataclass(frozen=True)
class Function:
    name: str
    inner: "MustacheToken"

    def resolve(self, token_finder, transformer) -> Any:
        return transformer.transform(self.name, self.inner.resolve(token_finder, transformer))


MustacheToken = Union[Variable, Function]


def classify(token_string: str) -> MustacheToken:
    """Classify the text between delimiters as a variable or a function call.

    ``urlenc(lower(a.b))`` becomes ``Function("urlenc", Function("lower",
    Variable("a.b")))``; anything without a parenthesized part is a variable.
    """
    match = _FUNCTION_PATTERN.search(token_string)
    if match is None:
        return Variable(token_string)
    return Function(token_string[:match.start()], classify(match.group(1)))
