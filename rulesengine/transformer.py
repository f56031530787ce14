from typing import Any, Callable, Optional
from urllib.parse import quote

from .operand import ValueKind, parse_decimal
from .template import stringify

TransformFunction = Callable[[Any], Any]


class Transformer:
    """Named functions applied during token resolution.

    Unknown function names return the value unchanged.
    """

    def __init__(self):
        self.functions: dict[str, TransformFunction] = {}

    def register(self, name: str, function: TransformFunction) -> None:
        self.functions[name] = function

    def transform(self, name: str, value: Any) -> Optional[Any]:
        function = self.functions.get(name)
        if function is None:
            return value
        return function(value)


def url_encode(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    return quote(value, safe="-_.~", errors="surrogatepass")


def to_int(value: Any) -> Any:
    kind = ValueKind.of(value)
    if kind is ValueKind.BOOLEAN:
        return 1 if value else 0
    if kind in (ValueKind.NUMBER, ValueKind.STRING):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return value
    return value


def to_double(value: Any) -> Any:
    kind = ValueKind.of(value)
    if kind in (ValueKind.BOOLEAN, ValueKind.NUMBER):
        try:
            return float(value)
        except OverflowError:
            return value
    if kind is ValueKind.STRING:
        parsed = parse_decimal(value)
        return value if parsed is None else parsed
    return value


def _collection_string(value: Any) -> str:
    if isinstance(value, dict):
        return "{" + ", ".join(f"{_collection_string(k)}={_collection_string(v)}" for k, v in value.items()) + "}"
    if isinstance(value, (list, tuple, set)):
        return "[" + ", ".join(_collection_string(item) for item in value) + "]"
    if value is None:
        return "null"
    return stringify(value)


def to_string(value: Any) -> Any:
    if value is None:
        return None
    if ValueKind.of(value) is ValueKind.COLLECTION:
        return _collection_string(value)
    return stringify(value)


def to_bool(value: Any) -> Any:
    kind = ValueKind.of(value)
    if kind is ValueKind.NUMBER:
        return value == 1
    if kind is ValueKind.STRING:
        return value.lower() == "true"
    return value


STANDARD_FUNCTIONS: dict[str, TransformFunction] = {
    "urlenc": url_encode,
    "int": to_int,
    "double": to_double,
    "string": to_string,
    "bool": to_bool,
}


def create_transformer() -> Transformer:
    transformer = Transformer()
    for name, function in STANDARD_FUNCTIONS.items():
        transformer.register(name, function)
    return transformer
