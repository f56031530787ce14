import re
from enum import Enum
from typing import Any, Optional

from .context import Context
from .template import TokenSegment, parse
from .token import MustacheToken, classify


class ValueKind(str, Enum):
    MISSING = "missing"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    COLLECTION = "collection"
    OTHER = "other"

    @classmethod
    def of(cls, value: Any) -> "ValueKind":
        if value is None:
            return cls.MISSING
        # bool before int, bool is an int subclass
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, (list, tuple, set, dict)):
            return cls.COLLECTION
        return cls.OTHER


_DECIMAL_PATTERN = re.compile(r"[+-]?(?:NaN|Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)


def parse_decimal(text: str) -> Optional[float]:
    """Parse a decimal string, or return ``None``.

    Only plain decimal and exponent forms plus ``NaN`` and ``Infinity`` are
    read. Underscores, ``inf`` and other spellings Python allows do not parse.
    """
    text = text.strip()
    if not _DECIMAL_PATTERN.fullmatch(text):
        return None
    return float(text)


class Operand:
    """Lazily resolves one token, e.g. ``{{event.name}}``, against a context."""

    def __init__(self, token_string: Optional[str] = None):
        self.token: Optional[MustacheToken] = None
        if not token_string:
            return
        segments = parse(token_string)
        if len(segments) == 1 and isinstance(segments[0], TokenSegment):
            self.token = segments[0].token
        else:
            self.token = classify(token_string)

    @classmethod
    def from_token(cls, token: MustacheToken) -> "Operand":
        operand = cls()
        operand.token = token
        return operand

    @property
    def is_empty(self) -> bool:
        return self.token is None

    def resolve(self, context: Context) -> Optional[Any]:
        if self.token is None:
            return None
        return self.token.resolve(context.token_finder, context.transformer)

    def __repr__(self) -> str:
        return f"Operand({self.token!r})"


class OperandLiteral:
    def __init__(self, value: Any):
        self.value = value

    def resolve(self, context: Context) -> Optional[Any]:
        return self.value

    def __repr__(self) -> str:
        return f"OperandLiteral({self.value!r})"
