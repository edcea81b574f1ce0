import pytest

from percyhtml.spacing import (
    separated_by_whitespace,
    space_after_braced,
    space_after_text,
    space_before_braced,
    space_before_text,
)
from percyhtml.tag import Position, Span, TagKind, parse_tags


def test_adjacent_spans_not_separated():
    first = Span(Position(1, 0), Position(1, 5))
    second = Span(Position(1, 5), Position(1, 8))
    assert separated_by_whitespace(first, second) is False


def test_gap_on_same_line_is_separated():
    first = Span(Position(1, 0), Position(1, 5))
    second = Span(Position(1, 6), Position(1, 8))
    assert separated_by_whitespace(first, second) is True


def test_different_lines_are_separated():
    first = Span(Position(1, 0), Position(1, 5))
    second = Span(Position(2, 0), Position(2, 3))
    assert separated_by_whitespace(first, second) is True


def test_overlapping_spans_not_separated():
    first = Span(Position(1, 0), Position(1, 5))
    second = Span(Position(1, 4), Position(1, 6))
    assert separated_by_whitespace(first, second) is False


@pytest.mark.parametrize(
    "source, expected",
    [("<div> After Start Tag</div>", True), ("<div>After Start Tag</div>", False)],
)
def test_space_before_text_after_open_tag(source, expected):
    open_tag, text, _ = parse_tags(source)
    result = space_before_text(TagKind.OPEN, open_tag.closing_bracket_span, None, text.start_span)
    assert result is expected


def test_space_before_text_on_new_line():
    open_tag, text, _ = parse_tags("<div>\nHello</div>")
    assert space_before_text(TagKind.OPEN, open_tag.closing_bracket_span, None, text.start_span)


@pytest.mark.parametrize(
    "source, expected",
    [("<div>{ hello } Space</div>", True), ("<div>{ hello }NoSpace</div>", False)],
)
def test_space_before_text_after_block(source, expected):
    _, block, text, _ = parse_tags(source)
    result = space_before_text(TagKind.BRACED, None, block.brace_span, text.start_span)
    assert result is expected


def test_space_before_text_after_close_is_false():
    _, text = parse_tags("</b> x")
    assert space_before_text(TagKind.CLOSE, None, None, text.start_span) is False


def test_space_before_text_missing_span_raises():
    _, text = parse_tags("<div>x")
    with pytest.raises(ValueError):
        space_before_text(TagKind.OPEN, None, None, text.start_span)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("<div>Before End Tag </div>", True),
        ("<div>Before End Tag</div>", False),
        ("<div>Hello <img /> world</div>", True),
        ("<div>Hello<img /> world</div>", False),
        ("<div>Hello {x}</div>", True),
        ("<div>Hello{x}</div>", False),
    ],
)
def test_space_after_text(source, expected):
    _, text, next_tag, *_ = parse_tags(source)
    assert space_after_text(text.end_span, next_tag) is expected


def test_space_after_text_at_end():
    (text,) = parse_tags("some text")
    assert space_after_text(text.end_span, None) is False


@pytest.mark.parametrize(
    "source, expected",
    [("<div> {text}</div>", True), ("<div>{text}</div>", False)],
)
def test_space_before_braced(source, expected):
    open_tag, block, _ = parse_tags(source)
    result = space_before_braced(TagKind.OPEN, open_tag.closing_bracket_span, block.brace_span)
    assert result is expected


def test_space_before_braced_needs_open_tag_last():
    open_tag, block, _ = parse_tags("<div> {text}</div>")
    assert space_before_braced(TagKind.TEXT, open_tag.closing_bracket_span, block.brace_span) is False
    assert space_before_braced(TagKind.OPEN, None, block.brace_span) is False


@pytest.mark.parametrize(
    "source, expected",
    [
        ("<div>{text} </div>", True),
        ("<div>{text}</div>", False),
        ("<div>{ hello } { world }</div>", True),
        ("<div>{ hello }{ world }</div>", False),
    ],
)
def test_space_after_braced(source, expected):
    _, block, next_tag, *_ = parse_tags(source)
    assert space_after_braced(block.brace_span, next_tag) is expected


def test_space_after_braced_before_text_or_open_is_false():
    _, block, text, _ = parse_tags("<div>{a} word</div>")
    assert space_after_braced(block.brace_span, text) is False
    _, block, open_tag, *_ = parse_tags("<div>{a} <b></b></div>")
    assert space_after_braced(block.brace_span, open_tag) is False