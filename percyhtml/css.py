"""Scoped CSS class generation.

Each call to :func:`css` hands out the next class name (``_css_rs_0``,
``_css_rs_1``, ...) and, when an output file is configured, appends the CSS
to it with every ``:host`` selector replaced by that class.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

__all__ = ["CssCollector", "css"]

OUTPUT_ENV_VAR = "OUTPUT_CSS"
_CLASS_PREFIX = "_css_rs_"


class CssCollector:
    """Hands out sequential class names and optionally writes the CSS to a file."""

    def __init__(self, output_path: str | os.PathLike[str] | None = None) -> None:
        self.output_path = Path(output_path) if output_path is not None else None
        self._counter = 0
        self._lock = threading.Lock()

    def css(self, source: str) -> str:
        """Register ``source`` and return the class name it was given."""
        with self._lock:
            class_name = f"{_CLASS_PREFIX}{self._counter}"
            if self.output_path is not None:
                self._write(class_name, source)
            self._counter += 1
            return class_name

    def reset(self) -> None:
        """Start numbering classes from zero again."""
        with self._lock:
            self._counter = 0

    def _write(self, class_name: str, source: str) -> None:
        path = self.output_path
        assert path is not None
        scoped = source.replace(":host", f".{class_name}")
        if self._counter == 0:
            path.unlink(missing_ok=True)
            mode = "x"
        else:
            if not path.exists():
                raise FileNotFoundError(f"CSS output file {path} does not exist")
            mode = "a"
        with path.open(mode, encoding="utf-8") as handle:
            handle.write(scoped)
            handle.write("\n")


_default = CssCollector()


def css(source: str) -> str:
    """Register ``source`` with the shared collector and return its class name.

    The CSS is written to the file named by the ``OUTPUT_CSS`` environment
    variable when it is set.
    """
    target = os.environ.get(OUTPUT_ENV_VAR)
    _default.output_path = Path(target) if target else None
    return _default.css(source)