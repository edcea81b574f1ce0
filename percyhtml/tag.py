"""Splitting an ``html`` template into open tags, close tags, text and blocks.

Positions follow the usual source-location convention: lines start at 1,
columns start at 0, and the end of a span points just past its last
character.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

__all__ = [
    "TemplateSyntaxError",
    "Position",
    "Span",
    "TagKind",
    "Attr",
    "OpenTag",
    "CloseTag",
    "TextTag",
    "BracedTag",
    "Tag",
    "parse_tags",
]

_OPENERS = {"{": "}", "(": ")", "[": "]"}
_CLOSERS = frozenset(_OPENERS.values())
_QUOTES = "\"'"


@dataclass(frozen=True, order=True)
class Position:
    """A line (from 1) and column (from 0) within the template."""

    line: int
    column: int


@dataclass(frozen=True)
class Span:
    """The start and the exclusive end of a piece of the template."""

    start: Position
    end: Position


class TemplateSyntaxError(ValueError):
    """Raised when a template cannot be split into tags."""

    def __init__(self, message: str, position: Position | None = None) -> None:
        self.position = position
        if position is not None:
            message = f"{message} (line {position.line}, column {position.column})"
        super().__init__(message)


class TagKind(Enum):
    """The kinds of pieces a template is made of."""

    OPEN = "open"
    CLOSE = "close"
    TEXT = "text"
    BRACED = "braced"


@dataclass(frozen=True)
class Attr:
    """An attribute such as ``id="app"``; ``value`` is the raw value text."""

    key: str
    value: str
    key_span: Span


@dataclass(frozen=True)
class OpenTag:
    """``<div id="app">`` or ``<br />``."""

    kind: ClassVar[TagKind] = TagKind.OPEN

    name: str
    attrs: tuple[Attr, ...]
    open_bracket_span: Span
    closing_bracket_span: Span
    is_self_closing: bool
    name_span: Span


@dataclass(frozen=True)
class CloseTag:
    """``</div>``."""

    kind: ClassVar[TagKind] = TagKind.CLOSE

    name: str
    first_angle_bracket_span: Span
    name_span: Span


@dataclass(frozen=True)
class TextTag:
    """Bare text between tags, with whitespace runs collapsed to one space."""

    kind: ClassVar[TagKind] = TagKind.TEXT

    text: str
    start_span: Span
    end_span: Span


@dataclass(frozen=True)
class BracedTag:
    """``{ some_value }``; ``code`` is the trimmed text between the braces."""

    kind: ClassVar[TagKind] = TagKind.BRACED

    code: str
    brace_span: Span


Tag = OpenTag | CloseTag | TextTag | BracedTag


class _Scanner:
    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self._line_starts = [0] + [i + 1 for i, ch in enumerate(source) if ch == "\n"]

    def position(self, offset: int) -> Position:
        index = bisect_right(self._line_starts, offset) - 1
        return Position(index + 1, offset - self._line_starts[index])

    def span(self, start: int, end: int) -> Span:
        return Span(self.position(start), self.position(end))

    def error(self, message: str, offset: int | None = None) -> TemplateSyntaxError:
        return TemplateSyntaxError(message, self.position(self.pos if offset is None else offset))

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self) -> str:
        return self.source[self.pos : self.pos + 1]

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.source[self.pos].isspace():
            self.pos += 1

    def expect(self, char: str, what: str) -> int:
        self.skip_whitespace()
        if self.peek() != char:
            raise self.error(f"expected {char!r} {what}")
        start = self.pos
        self.pos += 1
        return start

    def string_end(self, start: int) -> int:
        source = self.source
        quote = source[start]
        i = start + 1
        while i < len(source):
            ch = source[i]
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                return i + 1
            i += 1
        raise self.error("unterminated string literal", start)

    def group_end(self, start: int) -> int:
        source = self.source
        stack = [_OPENERS[source[start]]]
        i = start + 1
        while i < len(source):
            ch = source[i]
            if ch in _QUOTES:
                i = self.string_end(i)
                continue
            if ch in _OPENERS:
                stack.append(_OPENERS[ch])
            elif ch in _CLOSERS:
                if ch != stack.pop():
                    raise self.error(f"mismatched {ch!r}", i)
                if not stack:
                    return i + 1
            i += 1
        raise self.error(f"unclosed {source[start]!r}", start)

    def ident_end(self, start: int) -> int:
        source = self.source
        i = start
        if i < len(source) and (source[i].isalpha() or source[i] == "_"):
            i += 1
            while i < len(source) and (source[i].isalnum() or source[i] == "_"):
                i += 1
        return i

    def token_end(self, start: int) -> int:
        source = self.source
        ch = source[start]
        if ch in _QUOTES:
            return self.string_end(start)
        if ch in _OPENERS:
            return self.group_end(start)
        if ch in _CLOSERS:
            raise self.error(f"unexpected {ch!r}", start)
        if ch.isalnum() or ch == "_":
            i = start + 1
            while i < len(source) and (source[i].isalnum() or source[i] == "_"):
                i += 1
            return i
        return start + 1

    def starts_next_attr(self, start: int) -> bool:
        end = self.ident_end(start)
        if end == start:
            return False
        source = self.source
        while end < len(source) and source[end].isspace():
            end += 1
        return source[end : end + 1] == "=" and source[end + 1 : end + 2] != "="


def _parse_name(scanner: _Scanner) -> tuple[str, Span]:
    scanner.skip_whitespace()
    start = scanner.pos
    end = scanner.ident_end(start)
    if end == start:
        raise scanner.error("expected a tag name")
    scanner.pos = end
    return scanner.source[start:end], scanner.span(start, end)


def _parse_attributes(scanner: _Scanner) -> tuple[Attr, ...]:
    source = scanner.source
    attrs: list[Attr] = []
    while True:
        scanner.skip_whitespace()
        key_start = scanner.pos
        key_end = scanner.ident_end(key_start)
        if key_end == key_start:
            return tuple(attrs)
        key = source[key_start:key_end]
        key_span = scanner.span(key_start, key_end)
        scanner.pos = key_end
        scanner.skip_whitespace()
        if scanner.peek() != "=" or source[scanner.pos + 1 : scanner.pos + 2] == "=":
            raise scanner.error(f"expected '=' after attribute {key!r}")
        scanner.pos += 1
        scanner.skip_whitespace()
        if scanner.at_end() or scanner.peek() in ">/":
            raise scanner.error(f"expected a value for attribute {key!r}")

        value_start = scanner.pos
        while True:
            scanner.pos = scanner.token_end(scanner.pos)
            value_end = scanner.pos
            scanner.skip_whitespace()
            if scanner.at_end():
                raise scanner.error("unterminated tag")
            if scanner.peek() in ">/" or scanner.starts_next_attr(scanner.pos):
                break
        attrs.append(Attr(key, source[value_start:value_end], key_span))


def _parse_angle(scanner: _Scanner) -> OpenTag | CloseTag:
    bracket = scanner.pos
    scanner.pos += 1
    bracket_span = scanner.span(bracket, bracket + 1)
    scanner.skip_whitespace()

    if scanner.peek() == "/":
        scanner.pos += 1
        name, name_span = _parse_name(scanner)
        scanner.expect(">", f"to end the closing tag {name!r}")
        return CloseTag(name, bracket_span, name_span)

    name, name_span = _parse_name(scanner)
    attrs = _parse_attributes(scanner)
    scanner.skip_whitespace()
    is_self_closing = scanner.peek() == "/"
    if is_self_closing:
        scanner.pos += 1
    closing = scanner.expect(">", f"to end the tag {name!r}")
    return OpenTag(
        name=name,
        attrs=attrs,
        open_bracket_span=bracket_span,
        closing_bracket_span=scanner.span(closing, closing + 1),
        is_self_closing=is_self_closing,
        name_span=name_span,
    )


def _parse_braced(scanner: _Scanner) -> BracedTag:
    start = scanner.pos
    end = scanner.group_end(start)
    scanner.pos = end
    code = scanner.source[start + 1 : end - 1].strip()
    return BracedTag(code, scanner.span(start, end))


def _parse_text(scanner: _Scanner) -> TextTag:
    source = scanner.source
    runs: list[tuple[int, int]] = []
    while not scanner.at_end():
        ch = scanner.peek()
        if ch in "<{":
            break
        if ch.isspace():
            scanner.skip_whitespace()
            continue
        start = scanner.pos
        while not scanner.at_end():
            ch = scanner.peek()
            if ch.isspace() or ch in "<{":
                break
            if ch == "}":
                raise scanner.error("unexpected '}'")
            if ch == '"':
                scanner.pos = scanner.string_end(scanner.pos)
            else:
                scanner.pos += 1
        runs.append((start, scanner.pos))

    text = " ".join(source[start:end] for start, end in runs)
    return TextTag(text, scanner.span(*runs[0]), scanner.span(*runs[-1]))


def parse_tags(source: str) -> list[Tag]:
    """Split ``source`` into the tags, text runs and braced blocks it holds."""
    scanner = _Scanner(source)
    tags: list[Tag] = []
    while True:
        scanner.skip_whitespace()
        if scanner.at_end():
            return tags
        ch = scanner.peek()
        if ch == "<":
            tags.append(_parse_angle(scanner))
        elif ch == "{":
            tags.append(_parse_braced(scanner))
        elif ch == "}":
            raise scanner.error("unexpected '}'")
        else:
            tags.append(_parse_text(scanner))