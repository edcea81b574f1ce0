"""Event handlers and the special element-lifecycle callbacks of elements."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from percyhtml.vnode import VElement

__all__ = [
    "MissingKeyError",
    "HandlerKind",
    "EventHandler",
    "Events",
    "SpecialAttributes",
    "insert_closure",
]

ON_CREATE_ELEMENT = "on_create_element"
ON_REMOVE_ELEMENT = "on_remove_element"
ONCLICK = "onclick"

# Code-object flag set when a function accepts ``*args``.
_CO_VARARGS = 0x04


class MissingKeyError(ValueError):
    """Raised when a lifecycle callback is given to an element without a key."""

    def __init__(self, attribute: str) -> None:
        self.attribute = attribute
        super().__init__(
            f"Whenever you use the `{attribute}=...` attribute, "
            'you must also use the `key="..."` attribute.'
        )


class HandlerKind(Enum):
    """How an event handler is to be called."""

    NO_ARGS = "no_args"
    MOUSE_EVENT = "mouse_event"


@dataclass(frozen=True)
class EventHandler:
    """A callback together with the way it is called."""

    kind: HandlerKind
    callback: Callable[..., Any]

    def __call__(self, *args: Any) -> Any:
        if self.kind is HandlerKind.NO_ARGS:
            return self.callback()
        return self.callback(*args)


class Events:
    """The event handlers of an element, by event name."""

    def __init__(self) -> None:
        self._handlers: dict[str, EventHandler] = {}

    def insert(self, name: str, handler: EventHandler) -> None:
        """Store ``handler`` for the event ``name``, replacing any earlier one."""
        self._handlers[name] = handler

    def get(self, name: str) -> EventHandler | None:
        """Return the handler for ``name``, or ``None`` when there is none."""
        return self._handlers.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)


@dataclass
class SpecialAttributes:
    """Callbacks run when the real element is created or removed, with their keys."""

    create_element: tuple[str, Callable[[Any], Any]] | None = None
    remove_element: tuple[str, Callable[[Any], Any]] | None = None

    def set_on_create_element(self, key: object, callback: Callable[[Any], Any]) -> None:
        """Run ``callback`` with the element once it has been created."""
        self.create_element = (str(key), callback)

    def set_on_remove_element(self, key: object, callback: Callable[[Any], Any]) -> None:
        """Run ``callback`` with the element before it is removed."""
        self.remove_element = (str(key), callback)

    def on_create_element_key(self) -> str | None:
        """The key the on-create callback was set with, if any."""
        return self.create_element[0] if self.create_element else None

    def on_remove_element_key(self) -> str | None:
        """The key the on-remove callback was set with, if any."""
        return self.remove_element[0] if self.remove_element else None


def _arg_count(callback: Callable[..., Any]) -> int:
    """Count the positional parameters ``callback`` takes; 1 when unknown."""
    bound = 0
    func: Any = callback
    if hasattr(func, "__func__"):
        func = func.__func__
        bound = 1
    code = getattr(func, "__code__", None)
    if code is None:
        call = getattr(type(callback), "__call__", None)
        code = getattr(call, "__code__", None)
        bound = 1
    if code is None:
        return 1
    count = max(code.co_argcount - bound, 0)
    if code.co_flags & _CO_VARARGS:
        return max(count, 1)
    return count


def _ignoring_element(callback: Callable[[], Any]) -> Callable[[Any], Any]:
    def call(_element: Any) -> Any:
        return callback()

    return call


def insert_closure(
    node: VElement,
    name: str,
    callback: Callable[..., Any],
    key: object | None = None,
) -> None:
    """Attach ``callback`` to ``node`` as the handler of the attribute ``name``.

    ``on_create_element`` and ``on_remove_element`` need ``key`` and become
    special attributes. Otherwise a callback without arguments is stored as a
    no-argument handler, an ``onclick`` callback as a mouse-event handler, and
    other callbacks that take arguments are not stored.
    """
    if node.events is None:
        node.events = Events()
    if node.special_attributes is None:
        node.special_attributes = SpecialAttributes()

    arg_count = _arg_count(callback)

    if name in (ON_CREATE_ELEMENT, ON_REMOVE_ELEMENT):
        if key is None:
            raise MissingKeyError(name)
        element_callback = _ignoring_element(callback) if arg_count == 0 else callback
        if name == ON_CREATE_ELEMENT:
            node.special_attributes.set_on_create_element(key, element_callback)
        else:
            node.special_attributes.set_on_remove_element(key, element_callback)
    elif arg_count == 0:
        node.events.insert(name, EventHandler(HandlerKind.NO_ARGS, callback))
    elif name == ONCLICK:
        node.events.insert(name, EventHandler(HandlerKind.MOUSE_EVENT, callback))