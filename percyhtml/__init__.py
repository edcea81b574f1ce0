"""Virtual DOM templates, HTML and SVG tag validation, and scoped CSS."""

__version__ = "0.1.0"

__all__ = ["builder", "css", "events", "spacing", "tag", "validation", "vnode"]