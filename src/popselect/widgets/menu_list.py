from __future__ import annotations

import logging
from typing import Any

from rich.text import Text
from textual import events, on
from textual.containers import VerticalScroll
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static

from popselect import events as menu_events
from popselect.constants import LOGGER_NAME
from popselect.menu import Menu
from popselect.models import Item, Rect
from popselect.navigation.actions import NavAction, key_input_from_textual

logger = logging.getLogger(LOGGER_NAME)


class MenuOption(Static):
    """Renders one item of a menu."""

    DEFAULT_CSS = """
    MenuOption {
        height: 1;
        padding: 0 1;
        background: $surface;
        color: $foreground;
    }

    MenuOption.-selected {
        color: $text-accent;
        text-style: bold;
    }

    MenuOption.-focused {
        background: $accent-muted;
    }

    MenuOption.-disabled {
        color: $text-disabled;
    }
    """

    class Hovered(Message):
        def __init__(self, option: MenuOption) -> None:
            super().__init__()
            self.option = option

    class Clicked(Message):
        def __init__(self, option: MenuOption) -> None:
            super().__init__()
            self.option = option

    def __init__(self, item: Item):
        super().__init__(Text(item.label))
        self.item = item
        self.refresh_state()

    def refresh_state(self) -> None:
        self.set_class(self.item.focused, '-focused')
        self.set_class(self.item.selected, '-selected')
        self.set_class(self.item.disabled, '-disabled')

    def on_enter(self, event: events.Enter) -> None:
        self.post_message(self.Hovered(self))

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Clicked(self))


class MenuList(VerticalScroll):
    """
    The scroll surface of a menu.

    Keys, pointer hover and clicks are forwarded to the `Menu`; the classes of the options are refreshed after every
    call so that they mirror the `focused`, `selected` and `disabled` flags of the items.
    """

    DEFAULT_CSS = """
    MenuList {
        height: auto;
        max-height: 10;
        border: round $accent;
        background: $surface;
    }
    """

    def __init__(self, items: list[Item], menu: Menu | None = None, id: str | None = None):
        super().__init__(id=id)
        self._items = items
        self.active_descendant: str | None = None
        self.menu: Menu | None = None
        if menu is not None:
            self.attach_menu(menu)

    def attach_menu(self, menu: Menu) -> None:
        self.menu = menu
        for name in (
            menu_events.ITEM_FOCUS,
            menu_events.SELECT,
            menu_events.OPEN,
            menu_events.CLOSE,
        ):
            menu.events.on(name, self._refresh_from_menu)

    def compose(self):
        for item in self._items:
            yield MenuOption(item)

    @property
    def options(self) -> list[MenuOption]:
        return list(self.query(MenuOption))

    @property
    def scroll_top(self) -> float:
        return self.scroll_y

    @scroll_top.setter
    def scroll_top(self, value: float) -> None:
        self.scroll_to(y=max(0.0, value), animate=False)

    @property
    def rect(self) -> Rect | None:
        if not self.is_attached:
            return None
        return Rect(top=0, bottom=self.scrollable_content_region.height)

    def contains(self, node: Any) -> bool:
        return isinstance(node, Widget) and (node is self or self in node.ancestors)

    def update_item_rects(self) -> None:
        """Stores on each item its position relative to the visible part of the list."""

        for option in self.options:
            region = option.virtual_region
            option.item.rect = Rect(
                top=region.y - self.scroll_y,
                bottom=region.y + region.height - self.scroll_y,
            )

    def refresh_options(self) -> None:
        for option in self.options:
            option.refresh_state()

    def _refresh_from_menu(self, _detail: object) -> None:
        if self.is_attached:
            self.refresh_options()

    def on_key(self, event: events.Key) -> None:
        if self.menu is None:
            return
        self.update_item_rects()
        key_input = key_input_from_textual(event)
        action = self.menu.handle_key(key_input)
        if key_input.default_prevented or action is NavAction.TYPE:
            event.stop()
            event.prevent_default()
        self.refresh_options()

    def on_blur(self, event: events.Blur) -> None:
        if self.menu is not None:
            menu = self.menu
            self.call_after_refresh(lambda: menu.handle_focus_out(self.app.focused))

    @on(MenuOption.Hovered)
    def handle_option_hovered(self, event: MenuOption.Hovered) -> None:
        if self.menu is None or not self.menu.open:
            return
        self.update_item_rects()
        self.menu.handle_item_hover(event.option.item)
        self.refresh_options()

    @on(MenuOption.Clicked)
    def handle_option_clicked(self, event: MenuOption.Clicked) -> None:
        if self.menu is None:
            return
        self.menu.handle_item_click(event.option.item)
        self.refresh_options()
