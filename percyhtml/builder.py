"""Building virtual node trees from ``html`` templates.

A template is markup with ``{ ... }`` blocks. Blocks and attribute values
are small expressions looked up in a context mapping: names (with dotted
attribute access), string, raw-string and number literals, ``true`` and
``false``, and ``if cond { ... } else { ... }`` chains. Capitalised tag
names are components: they are looked up in the context, built from their
attributes and rendered.
"""

from __future__ import annotations

import ast
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from percyhtml.events import insert_closure
from percyhtml.spacing import (
    space_after_braced,
    space_after_text,
    space_before_braced,
    space_before_text,
)
from percyhtml.tag import BracedTag, CloseTag, OpenTag, Span, Tag, TagKind, TextTag, parse_tags
from percyhtml.validation import is_self_closing, is_valid_tag
from percyhtml.vnode import VElement, VirtualNode, VText, iterable_nodes

__all__ = ["HtmlError", "HtmlParser", "html"]

_RAW_STRING = re.compile(r'r(#*)"(.*)"\1', re.S)
_PATH = re.compile(r"[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*")
_NUMBER = re.compile(r"[+-]?\d+(?:\.\d+)?")
_LITERALS: dict[str, Any] = {
    "true": True,
    "false": False,
    "True": True,
    "False": False,
    "None": None,
}
_OPENERS = {"{": "}", "(": ")", "[": "]"}
_CLOSERS = frozenset(_OPENERS.values())


class HtmlError(ValueError):
    """Raised when a template is well formed but cannot be turned into nodes."""


def _string_end(code: str, start: int) -> int:
    quote = code[start]
    i = start + 1
    while i < len(code):
        if code[i] == "\\":
            i += 2
            continue
        if code[i] == quote:
            return i + 1
        i += 1
    raise HtmlError(f"unterminated string literal in {code!r}")


def _group_end(code: str, start: int) -> int:
    stack = [_OPENERS[code[start]]]
    i = start + 1
    while i < len(code):
        ch = code[i]
        if ch == '"':
            i = _string_end(code, i)
            continue
        if ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif ch in _CLOSERS:
            if ch != stack.pop():
                raise HtmlError(f"mismatched {ch!r} in {code!r}")
            if not stack:
                return i + 1
        i += 1
    raise HtmlError(f"unclosed {code[start]!r} in {code!r}")


def _top_level_brace(code: str) -> int | None:
    i = 0
    while i < len(code):
        ch = code[i]
        if ch == '"':
            i = _string_end(code, i)
            continue
        if ch == "{":
            return i
        if ch in "([":
            i = _group_end(code, i)
            continue
        i += 1
    return None


def _starts_with_keyword(code: str, keyword: str) -> bool:
    if not code.startswith(keyword):
        return False
    rest = code[len(keyword) : len(keyword) + 1]
    return not rest or not (rest.isalnum() or rest == "_")


def _invalid_tag_message(tag: str) -> str:
    return (
        f"{tag} is not a valid HTML tag.\n\n"
        "If you are trying to use a valid HTML tag, perhaps there's a typo?\n\n"
        "If you are trying to use a custom component, please capitalize the component name."
    )


class HtmlParser:
    """Turns a sequence of tags into a tree of virtual nodes."""

    def __init__(self, context: Mapping[str, Any] | None = None) -> None:
        self.context: dict[str, Any] = dict(context or {})
        self._nodes: dict[int, list[VirtualNode]] = {}
        self._current_node_idx = 0
        self._node_order: list[int] = []
        self._parent_stack: list[tuple[int, str]] = []
        self._parent_to_children: dict[int, list[int]] = {0: []}
        self._open_tag_end: Span | None = None
        self._block_start: Span | None = None
        self._last_tag_kind: TagKind | None = None

    def push_tag(self, tag: Tag, next_tag: Tag | None = None) -> None:
        """Add ``tag`` to the tree; ``next_tag`` decides the spacing after text."""
        if isinstance(tag, OpenTag):
            self._open_tag(tag)
        elif isinstance(tag, CloseTag):
            self._close_tag(tag)
        elif isinstance(tag, TextTag):
            self._text(tag, next_tag)
        elif isinstance(tag, BracedTag):
            self._braced(tag, next_tag)
        else:
            raise TypeError(f"not a tag: {tag!r}")
        self._last_tag_kind = tag.kind

    def finish(self) -> VirtualNode:
        """Attach every node to its parent and return the root node."""
        if len(self._node_order) > 1:
            for parent_idx in reversed(self._node_order):
                children = self._parent_to_children.get(parent_idx)
                if not children:
                    continue
                parent = self._nodes[parent_idx][0]
                if not isinstance(parent, VElement):
                    raise HtmlError("Non-elements cannot have children")
                for child_idx in children:
                    parent.children.extend(self._nodes[child_idx])
        root = self._nodes.get(0)
        if not root:
            raise HtmlError("the template holds no nodes")
        return root[0]

    # Tags

    def _open_tag(self, tag: OpenTag) -> None:
        self._open_tag_end = tag.closing_bracket_span
        idx = self._current_node_idx
        name = tag.name

        if is_valid_tag(name):
            node: VirtualNode = self._element(tag)
        elif not name[0].isupper():
            raise HtmlError(_invalid_tag_message(name))
        else:
            node = self._component(tag)
        self._nodes[idx] = [node]

        can_have_children = not is_self_closing(name) and not tag.is_self_closing
        if idx == 0:
            self._node_order.append(0)
            if can_have_children:
                self._parent_stack.append((0, name))
            self._current_node_idx += 1
            return

        parent_idx = self._parent_idx()
        if can_have_children:
            self._parent_stack.append((idx, name))
        self._node_order.append(idx)
        self._parent_to_children[parent_idx].append(idx)
        self._parent_to_children[idx] = []
        self._current_node_idx += 1

    def _close_tag(self, tag: CloseTag) -> None:
        name = tag.name
        if is_self_closing(name):
            raise HtmlError(f'{name} is a self closing tag. Try "<{name}>" or "<{name} />"')
        if not self._parent_stack:
            raise HtmlError(f"closing tag {name!r} has no open tag")
        _, last_open = self._parent_stack.pop()
        if last_open != name:
            raise HtmlError(f'Wrong closing tag. Try changing "{name}" into "{last_open}"')

    def _text(self, tag: TextTag, next_tag: Tag | None) -> None:
        content = tag.text
        if space_before_text(
            self._last_tag_kind, self._open_tag_end, self._block_start, tag.start_span
        ):
            content = " " + content
        if space_after_text(tag.end_span, next_tag):
            content += " "

        idx = self._current_node_idx
        if idx == 0:
            self._node_order.append(0)
            self._parent_stack.append((0, "unused"))
        self._nodes[idx] = [VText(content)]
        self._current_node_idx += 1
        if idx == 0:
            return

        parent_idx = self._parent_idx()
        self._node_order.append(idx)
        self._parent_to_children[parent_idx].append(idx)

    def _braced(self, tag: BracedTag, next_tag: Tag | None) -> None:
        before = space_before_braced(self._last_tag_kind, self._open_tag_end, tag.brace_span)
        after = space_after_braced(tag.brace_span, next_tag)

        if tag.code:
            value = self._evaluate(tag.code)
            if self._current_node_idx == 0:
                self._nodes[0] = [self._root_node(value)]
            else:
                nodes = self._iterable(value)
                if nodes and before and isinstance(nodes[0], VText):
                    nodes[0] = VText(nodes[0].text)
                    nodes[0].insert_space_before_text()
                if nodes and after and isinstance(nodes[-1], VText):
                    nodes[-1] = VText(nodes[-1].text)
                    nodes[-1].insert_space_after_text()
                self._push_iterable_nodes(nodes)

        self._block_start = tag.brace_span

    # Nodes

    def _parent_idx(self) -> int:
        if not self._parent_stack:
            raise HtmlError("a node follows the root node but has no parent element")
        return self._parent_stack[-1][0]

    def _push_iterable_nodes(self, nodes: list[VirtualNode]) -> None:
        idx = self._current_node_idx
        self._nodes[idx] = nodes
        self._current_node_idx += 1
        parent_idx = self._parent_idx()
        self._parent_to_children[parent_idx].append(idx)
        self._node_order.append(idx)

    def _element(self, tag: OpenTag) -> VElement:
        node = VElement(tag.name)
        values = [(attr.key, self._evaluate(attr.value)) for attr in tag.attrs]
        key = next((value for name, value in values if name == "key"), None)
        for name, value in values:
            if callable(value) and not isinstance(value, (VElement, VText)):
                insert_closure(node, name, value, key)
            else:
                node.attrs[name] = value
        return node

    def _component(self, tag: OpenTag) -> VirtualNode:
        factory = self.context.get(tag.name)
        if factory is None or not callable(factory):
            raise HtmlError(f"unknown component {tag.name!r}")
        props = {attr.key: self._evaluate(attr.value) for attr in tag.attrs}
        rendered = factory(**props).render()
        if not isinstance(rendered, (VElement, VText)):
            raise HtmlError(f"component {tag.name!r} did not render a virtual node")
        return rendered

    def _root_node(self, value: Any) -> VirtualNode:
        if isinstance(value, (VElement, VText)):
            return value
        nodes = self._iterable(value)
        if len(nodes) != 1:
            raise HtmlError("a block at the root must stand for exactly one node")
        return nodes[0]

    @staticmethod
    def _iterable(value: Any) -> list[VirtualNode]:
        try:
            return iterable_nodes(value)
        except TypeError as error:
            raise HtmlError(str(error)) from error

    # Expressions

    def _evaluate(self, code: str) -> Any:
        code = code.strip()
        if not code:
            raise HtmlError("empty expression")
        if code.startswith("&"):
            return self._evaluate(code[1:])
        if code.startswith("{") and _group_end(code, 0) == len(code):
            return self._evaluate(code[1:-1])
        if _starts_with_keyword(code, "if"):
            return self._evaluate_if(code[2:])
        if code in _LITERALS:
            return _LITERALS[code]
        raw = _RAW_STRING.fullmatch(code)
        if raw:
            return raw.group(2)
        if code[0] in "\"'":
            try:
                return ast.literal_eval(code)
            except (ValueError, SyntaxError) as error:
                raise HtmlError(f"invalid string literal {code!r}") from error
        if _NUMBER.fullmatch(code):
            return float(code) if "." in code else int(code)
        if _PATH.fullmatch(code):
            return self._lookup(code)
        raise HtmlError(f"unsupported expression {code!r}")

    def _lookup(self, path: str) -> Any:
        first, *rest = path.split(".")
        if first not in self.context:
            raise HtmlError(f"unknown name {first!r}")
        value = self.context[first]
        for attribute in rest:
            try:
                value = getattr(value, attribute)
            except AttributeError as error:
                raise HtmlError(f"{path!r} has no attribute {attribute!r}") from error
        return value

    def _evaluate_if(self, rest: str) -> Any:
        brace = _top_level_brace(rest)
        if brace is None or not rest[:brace].strip():
            raise HtmlError("expected a condition and a block after 'if'")
        condition = rest[:brace]
        end = _group_end(rest, brace)
        then_code = rest[brace + 1 : end - 1]
        otherwise = self._else_branch(rest[end:].strip())

        if self._evaluate(condition):
            return self._evaluate(then_code)
        return otherwise()

    def _else_branch(self, tail: str) -> Callable[[], Any]:
        if not tail:
            return lambda: VText("")
        if not _starts_with_keyword(tail, "else"):
            raise HtmlError(f"unexpected {tail!r} after an if block")
        tail = tail[4:].strip()
        if tail.startswith("{"):
            end = _group_end(tail, 0)
            if tail[end:].strip():
                raise HtmlError(f"unexpected {tail[end:].strip()!r} after an else block")
            body = tail[1 : end - 1]
            return lambda: self._evaluate(body)
        if _starts_with_keyword(tail, "if"):
            chained = tail[2:]
            return lambda: self._evaluate_if(chained)
        raise HtmlError("expected a block or 'if' after 'else'")


def _with_next(tags: list[Tag]) -> Iterable[tuple[Tag, Tag | None]]:
    return zip(tags, [*tags[1:], None])


def html(source: str, context: Mapping[str, Any] | None = None) -> VirtualNode:
    """Build the virtual node described by the template ``source``."""
    parser = HtmlParser(context)
    for tag, next_tag in _with_next(parse_tags(source)):
        parser.push_tag(tag, next_tag)
    return parser.finish()