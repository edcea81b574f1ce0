"""Virtual DOM nodes and the conversion of values into lists of nodes."""

from __future__ import annotations

import html as _html
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from percyhtml.validation import is_self_closing

__all__ = ["VText", "VElement", "VirtualNode", "text", "element", "iterable_nodes"]


@dataclass
class VText:
    """A text node."""

    text: str

    def insert_space_before_text(self) -> None:
        """Prefix the text with a single space."""
        self.text = " " + self.text

    def insert_space_after_text(self) -> None:
        """Suffix the text with a single space."""
        self.text += " "

    def __str__(self) -> str:
        return _html.escape(self.text, quote=False)


def _attribute_text(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class VElement:
    """An element node with attributes, children and event handlers."""

    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    children: list[VirtualNode] = field(default_factory=list)
    events: Any = field(default=None, compare=False, repr=False)
    special_attributes: Any = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        attrs = "".join(
            f' {key}="{_html.escape(_attribute_text(value))}"' for key, value in self.attrs.items()
        )
        children = "".join(str(child) for child in self.children)
        if is_self_closing(self.tag):
            return f"<{self.tag}{attrs}>{children}"
        return f"<{self.tag}{attrs}>{children}</{self.tag}>"


VirtualNode = VElement | VText


def text(value: object) -> VText:
    """Create a text node."""
    return VText(str(value))


def element(tag: str) -> VElement:
    """Create an element with no attributes or children."""
    return VElement(tag)


def iterable_nodes(value: object) -> list[VirtualNode]:
    """Turn a value placed in a template block into the nodes it stands for.

    Nodes stand for themselves, ``None`` for nothing, strings and numbers for
    a text node, objects with a ``render`` method for what it renders, and
    iterables for the nodes of each of their items.
    """
    if value is None:
        return []
    if isinstance(value, (VElement, VText)):
        return [value]
    if isinstance(value, str):
        return [VText(value)]
    if isinstance(value, bool):
        raise TypeError("a bool cannot be turned into virtual nodes")
    if isinstance(value, (int, float)):
        return [VText(str(value))]
    render = getattr(value, "render", None)
    if callable(render):
        return iterable_nodes(render())
    if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray, Mapping)):
        return [node for item in value for node in iterable_nodes(item)]
    raise TypeError(f"{type(value).__name__} cannot be turned into virtual nodes")