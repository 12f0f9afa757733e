"""Capabilities the engine needs from the host: focus tracking, a scrollable surface and a trigger control.

The plain classes at the bottom implement them in memory, for headless use and tests.
"""

from __future__ import annotations

from typing import Any, Protocol

from popselect.models import Rect


class FocusHost(Protocol):
    @property
    def active_element(self) -> Any: ...

    def focus(self, element: Any) -> None: ...


class ScrollSurface(Protocol):
    """The element listing the items of a menu."""

    scroll_top: float
    active_descendant: str | None

    @property
    def rect(self) -> Rect | None: ...

    def contains(self, node: Any) -> bool: ...


class Control(Protocol):
    """The element that opens a menu, e.g. the field of a select."""

    expanded: bool
    active_descendant: str | None

    def contains(self, node: Any) -> bool: ...


class InMemoryFocusHost:
    def __init__(self, active_element: Any = None):
        self.active_element = active_element
        self.history: list[Any] = []

    def focus(self, element: Any) -> None:
        self.active_element = element
        self.history.append(element)


class Surface:
    def __init__(self, height: float = 0, children: list[Any] | None = None):
        self.height = height
        self._scroll_top = 0.0
        self.active_descendant: str | None = None
        self.children = children or []

    @property
    def scroll_top(self) -> float:
        return self._scroll_top

    @scroll_top.setter
    def scroll_top(self, value: float) -> None:
        self._scroll_top = max(0.0, value)

    @property
    def rect(self) -> Rect | None:
        return Rect(top=0, bottom=self.height)

    def contains(self, node: Any) -> bool:
        return node is self or node in self.children


class TriggerControl:
    def __init__(self, children: list[Any] | None = None):
        self.expanded = False
        self.active_descendant: str | None = None
        self.children = children or []

    def contains(self, node: Any) -> bool:
        return node is self or node in self.children
