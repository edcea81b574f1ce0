"""Validation of HTML and SVG element names.

Validation is pessimistic: a name is only reported as invalid once it has
been encoded as such, so the tables here grow over time rather than shrink.
"""

from __future__ import annotations

__all__ = [
    "is_self_closing",
    "is_svg_namespace",
    "is_self_closing_svg_tag",
    "is_valid_tag",
]

_SELF_CLOSING_TAGS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "command",
        "keygen",
        "source",
    }
)

# SVG element name -> whether the element is self closing.
# "a", "script", "style" and "title" are left out because they clash with
# the HTML elements of the same name.
_SVG_NAMESPACED_TAGS: dict[str, bool] = {
    "animate": True,
    "animateMotion": False,
    "animateTransform": True,
    "circle": True,
    "clipPath": False,
    "defs": False,
    "desc": False,
    "discard": True,
    "ellipse": True,
    "feBlend": True,
    "feColorMatrix": True,
    "feComponentTransfer": False,
    "feComposite": True,
    "feConvolveMatrix": True,
    "feDiffuseLighting": False,
    "feDisplacementMap": True,
    "feDistantLight": True,
    "feDropShadow": True,
    "feFlood": True,
    "feFuncA": True,
    "feFuncB": True,
    "feFuncG": True,
    "feFuncR": True,
    "feGaussianBlur": True,
    "feImage": True,
    "feMerge": False,
    "feMergeNode": True,
    "feMorphology": True,
    "feOffset": True,
    "fePointLight": True,
    "feSpecularLighting": False,
    "feSpotLight": True,
    "feTile": True,
    "feTurbulence": True,
    "filter": False,
    "foreignObject": False,
    "g": False,
    "hatch": False,
    "hatchpath": True,
    "image": True,
    "line": True,
    "linearGradient": False,
    "marker": False,
    "mask": False,
    "metadata": False,
    "mpath": True,
    "path": True,
    "pattern": False,
    "polygon": True,
    "polyline": True,
    "radialGradient": False,
    "rect": True,
    "set": True,
    "solidcolor": True,
    "stop": True,
    "svg": False,
    "switch": False,
    "symbol": False,
    "text": False,
    "textPath": False,
    "tspan": False,
    "use": True,
    "view": True,
}

_VALID_TAGS: frozenset[str] = frozenset(
    {
        "a", "abbr", "address", "area", "article", "aside", "audio", "b",
        "base", "bdi", "bdo", "big", "blockquote", "body", "br", "button",
        "canvas", "caption", "cite", "code", "col", "colgroup", "command",
        "data", "datalist", "dd", "del", "details", "dfn", "dialog", "div",
        "dl", "dt", "em", "embed", "fieldset", "figcaption", "figure",
        "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "head",
        "header", "hr", "html", "i", "iframe", "img", "input", "ins", "kbd",
        "keygen", "label", "legend", "li", "link", "main", "map", "mark",
        "menu", "menuitem", "meta", "meter", "nav", "noscript", "object",
        "ol", "optgroup", "option", "output", "p", "param", "picture", "pre",
        "progress", "q", "rp", "rt", "ruby", "s", "samp", "script", "section",
        "select", "small", "source", "span", "strong", "style", "sub",
        "summary", "sup", "table", "tbody", "td", "textarea", "tfoot", "th",
        "thead", "time", "title", "tr", "track", "u", "ul", "var", "video",
        "wbr",
    }
)


def is_svg_namespace(tag: str) -> bool:
    """Return whether ``tag`` is an SVG element name."""
    return tag in _SVG_NAMESPACED_TAGS


def is_self_closing_svg_tag(tag: str) -> bool:
    """Return whether ``tag`` is a self closing SVG element."""
    return _SVG_NAMESPACED_TAGS.get(tag, False)


def is_self_closing(tag: str) -> bool:
    """Return whether ``tag`` is a self closing HTML or SVG element."""
    return tag in _SELF_CLOSING_TAGS or is_self_closing_svg_tag(tag)


def is_valid_tag(tag: str) -> bool:
    """Return whether ``tag`` is a known HTML or SVG element name."""
    return tag in _VALID_TAGS or is_svg_namespace(tag)