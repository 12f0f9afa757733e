from __future__ import annotations

import logging
from typing import Any

from rich.text import Text
from textual import events, on
from textual.containers import Vertical
from textual.message import Message
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Static

from popselect import events as select_events
from popselect.config import MenuOptions
from popselect.constants import LOGGER_NAME
from popselect.models import Item
from popselect.navigation.actions import NavAction, key_input_from_textual
from popselect.popover import PopoverConfig
from popselect.select import Select
from popselect.widgets.menu_list import MenuList
from popselect.widgets.popover import TextualFocusHost, TextualPopover

logger = logging.getLogger(LOGGER_NAME)


class SelectTrigger(Static, can_focus=True):
    """The field of a select. It shows the display text and opens the menu when clicked."""

    DEFAULT_CSS = """
    SelectTrigger {
        height: 1;
        padding: 0 1;
        background: $boost;
        color: $foreground;
    }

    SelectTrigger:focus {
        background: $accent-muted;
    }

    SelectTrigger.-expanded {
        text-style: bold;
    }
    """

    class Pressed(Message):
        pass

    def __init__(self, id: str | None = None):
        super().__init__(id=id)
        self._expanded = False
        self.active_descendant: str | None = None

    @property
    def expanded(self) -> bool:
        return self._expanded

    @expanded.setter
    def expanded(self, value: bool) -> None:
        self._expanded = value
        self.set_class(value, '-expanded')

    def contains(self, node: Any) -> bool:
        return isinstance(node, Widget) and (node is self or self in node.ancestors)

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Pressed())


class SelectField(Vertical, can_focus=False):
    """A select built on the selection engine: a trigger showing the selected item and a popover menu."""

    DEFAULT_CSS = """
    SelectField {
        height: auto;
        width: 40;
    }

    SelectField > MenuList {
        display: none;
    }
    """

    class Changed(Message):
        """Posted when the user selects a different item."""

        def __init__(self, select_field: SelectField, value: str, selected_index: int) -> None:
            super().__init__()
            self.select_field = select_field
            self.value = value
            self.selected_index = selected_index

        @property
        def control(self) -> SelectField:
            return self.select_field

    def __init__(
        self,
        items: list[Item],
        options: MenuOptions | None = None,
        value: str | None = None,
        placeholder: str = '',
        disabled: bool = False,
        id: str | None = None,
    ):
        super().__init__(id=id)
        self.items = items
        self.placeholder = placeholder
        self.trigger = SelectTrigger(id='select-trigger')
        self.menu_list = MenuList(items, id='select-menu')

        self.engine = Select(
            items,
            options=options,
            field=self.trigger,
            surface=self.menu_list,
            focus_host=TextualFocusHost(self),
            disabled=disabled,
        )
        self.popover = TextualPopover(
            self.menu_list,
            get_config=lambda: PopoverConfig.from_options(self.engine.menu.options),
            on_click_away=self.engine.menu.handle_click_away,
        )
        self.engine.menu.popover = self.popover
        self.menu_list.attach_menu(self.engine.menu)
        self.engine.events.on(select_events.CHANGE, self._handle_change)
        self.engine.events.on(select_events.OPEN, self._refresh_from_select)
        self.engine.events.on(select_events.CLOSE, self._refresh_from_select)

        if value is not None:
            self.engine.value = value

    def compose(self):
        yield self.trigger
        yield self.menu_list

    def on_mount(self) -> None:
        self.engine.first_update()
        self.refresh_field()

    @property
    def value(self) -> str:
        return self.engine.value

    @value.setter
    def value(self, value: str) -> None:
        self.engine.value = value
        self.refresh_field()

    @property
    def selected_index(self) -> int:
        return self.engine.selected_index

    @property
    def expanded(self) -> bool:
        return self.engine.open

    def refresh_field(self) -> None:
        text = self.engine.display_text or self.placeholder
        self.trigger.update(Text(text or ' '))
        if self.menu_list.is_attached:
            self.menu_list.refresh_options()

    def _refresh_from_select(self, _detail: object) -> None:
        if self.is_attached:
            self.refresh_field()

    def _handle_change(self, _detail: object) -> None:
        logger.debug(f'Selection changed to {self.engine.value!r}')
        self.refresh_field()
        self.post_message(self.Changed(self, self.engine.value, self.engine.selected_index))

    def on_key(self, event: events.Key) -> None:
        if not self.trigger.has_focus:
            return
        self.menu_list.update_item_rects()
        key_input = key_input_from_textual(event)
        action = self.engine.handle_field_keydown(key_input)
        if key_input.default_prevented or action is NavAction.TYPE:
            event.stop()
            event.prevent_default()
        self.refresh_field()

    @on(SelectTrigger.Pressed)
    def handle_trigger_pressed(self) -> None:
        self.engine.toggle()
        self.refresh_field()

    def on_descendant_blur(self, event: events.DescendantBlur) -> None:
        self.call_after_refresh(self._check_focus_out)

    def _check_focus_out(self) -> None:
        self.engine.handle_focus_out(self.app.focused)
        self.refresh_field()

    def handle_click_away(self, target: Widget | None) -> None:
        """Closes the menu when the pointer went down on `target`, unless `target` is part of the select."""

        if target is not None and (target is self or self in target.ancestors):
            return
        self.popover.click_away()
        self.refresh_field()

    def items_changed(self, items: list[Item]) -> None:
        """Replaces the items of the select, keeping the `Item` objects shared with the engine."""

        self.items[:] = items
        self.menu_list._items = self.items
        self.menu_list.refresh(recompose=True)
        self.engine.items_changed()
        self.refresh_field()


class SelectScreen(Screen):
    """A screen that closes the menus of its selects when the pointer goes down outside of them."""

    def on_mouse_down(self, event: events.MouseDown) -> None:
        for select_field in self.query(SelectField):
            select_field.handle_click_away(event.widget)
