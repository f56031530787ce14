"""
Template tokenizer and renderer.

A template such as ``https://example.com?id={{urlenc(user.id)}}`` is split
into literal text and tokens. Rendering resolves every token against a
token finder and a transformer and joins the pieces back together.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from . import log
from .token import MustacheToken, classify

LOG_TAG = "TemplateParser"


@dataclass(frozen=True)
class DelimiterPair:
    start_tag: str = "{{"
    end_tag: str = "}}"

    def __post_init__(self):
        if not self.start_tag or not self.end_tag:
            raise ValueError("Delimiter tags must be non-empty")

    def wrap(self, content: str) -> str:
        return f"{self.start_tag}{content}{self.end_tag}"


DEFAULT_DELIMITER = DelimiterPair()


@dataclass(frozen=True)
class TextSegment:
    content: str

    def render(self, token_finder, transformer) -> str:
        return self.content

    def source(self, delimiter: DelimiterPair) -> str:
        return self.content


@dataclass(frozen=True)
class TokenSegment:
    content: str
    token: MustacheToken

    def render(self, token_finder, transformer) -> str:
        return stringify(self.token.resolve(token_finder, transformer))

    def source(self, delimiter: DelimiterPair) -> str:
        return delimiter.wrap(self.content)


Segment = Union[TextSegment, TokenSegment]


class _State(Enum):
    START = "start"
    TEXT = "text"
    TAG = "tag"


def parse(template: Optional[str], delimiter: Optional[DelimiterPair] = None) -> list[Segment]:
    """Split ``template`` into text and token segments.

    Returns an empty list for empty input and for a template that ends
    inside an unterminated tag; partial results are never returned.
    """
    if not template:
        return []
    delimiter = delimiter or DEFAULT_DELIMITER
    start_tag, end_tag = delimiter.start_tag, delimiter.end_tag

    segments: list[Segment] = []
    state = _State.START
    span_start = 0
    index = 0
    length = len(template)

    while index < length:
        if state is _State.TAG:
            if template.startswith(end_tag, index):
                content = template[span_start:index]
                segments.append(TokenSegment(content, classify(content)))
                index += len(end_tag)
                span_start = index
                state = _State.START
            else:
                index += 1
        elif template.startswith(start_tag, index):
            if index > span_start:
                segments.append(TextSegment(template[span_start:index]))
            index += len(start_tag)
            span_start = index
            state = _State.TAG
        else:
            if state is _State.START:
                span_start = index
                state = _State.TEXT
            index += 1

    if state is _State.TAG:
        log.debug(LOG_TAG, f"Unterminated token in template, missing '{end_tag}'")
        return []
    if span_start < length:
        segments.append(TextSegment(template[span_start:]))
    return segments


def reconstruct(segments: list[Segment], delimiter: Optional[DelimiterPair] = None) -> str:
    delimiter = delimiter or DEFAULT_DELIMITER
    return "".join(segment.source(delimiter) for segment in segments)


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render(
    template: Optional[str],
    token_finder,
    transformer,
    delimiter: Optional[DelimiterPair] = None,
) -> Optional[str]:
    """Replace every token in ``template`` with its resolved value.

    A template that does not parse is returned unchanged.
    """
    segments = parse(template, delimiter)
    if not segments:
        return template
    return "".join(segment.render(token_finder, transformer) for segment in segments)
