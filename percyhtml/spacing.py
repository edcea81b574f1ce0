"""Deciding where spaces go around text and braced blocks in a template."""

from __future__ import annotations

from percyhtml.tag import BracedTag, CloseTag, OpenTag, Span, Tag, TagKind

__all__ = [
    "separated_by_whitespace",
    "space_before_text",
    "space_after_text",
    "space_before_braced",
    "space_after_braced",
]


def separated_by_whitespace(first: Span, second: Span) -> bool:
    """Return whether there is space between the end of ``first`` and the start of ``second``.

    There is space when the spans end on different lines or when ``second``
    starts at a later column than ``first`` ends.
    """
    if first.end.line != second.end.line:
        return True
    return second.start.column - first.end.column > 0


def space_before_text(
    last_kind: TagKind | None,
    open_tag_end: Span | None,
    block_start: Span | None,
    text_start: Span,
) -> bool:
    """Whether text following an open tag or a block needs a leading space."""
    if last_kind is TagKind.BRACED:
        if block_start is None:
            raise ValueError("text follows a block but no block start is known")
        return separated_by_whitespace(block_start, text_start)
    if last_kind is TagKind.OPEN:
        if open_tag_end is None:
            raise ValueError("text follows an open tag but no open tag end is known")
        return separated_by_whitespace(open_tag_end, text_start)
    return False


def space_after_text(text_end: Span, next_tag: Tag | None) -> bool:
    """Whether text needs a trailing space before the tag or block that follows it."""
    if isinstance(next_tag, CloseTag):
        return separated_by_whitespace(text_end, next_tag.first_angle_bracket_span)
    if isinstance(next_tag, BracedTag):
        return separated_by_whitespace(text_end, next_tag.brace_span)
    if isinstance(next_tag, OpenTag):
        return separated_by_whitespace(text_end, next_tag.open_bracket_span)
    return False


def space_before_braced(
    last_kind: TagKind | None,
    open_tag_end: Span | None,
    brace_span: Span,
) -> bool:
    """Whether the first node of a block right after an open tag needs a leading space."""
    return (
        open_tag_end is not None
        and last_kind is TagKind.OPEN
        and separated_by_whitespace(open_tag_end, brace_span)
    )


def space_after_braced(brace_span: Span, next_tag: Tag | None) -> bool:
    """Whether the last node of a block needs a trailing space before a close tag or block."""
    if isinstance(next_tag, CloseTag):
        return separated_by_whitespace(brace_span, next_tag.first_angle_bracket_span)
    if isinstance(next_tag, BracedTag):
        return separated_by_whitespace(brace_span, next_tag.brace_span)
    return False