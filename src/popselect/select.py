from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

from popselect import events
from popselect.config import MenuOptions, resolve_menu_options
from popselect.constants import DEFAULT_ITEM_KINDS, LOGGER_NAME
from popselect.events import EventEmitter, ItemFocusDetail, MenuSelectDetail
from popselect.host import Control, FocusHost, ScrollSurface
from popselect.menu import ItemsSource, Menu
from popselect.models import Item, Projection
from popselect.navigation.actions import KeyInput, NavAction
from popselect.popover import PopoverLifecycle
from popselect.selection import SelectionReconciler

logger = logging.getLogger(LOGGER_NAME)


class Select:
    """
    A select-like control: a field showing the selected item and a menu listing the items.

    Notifications, see `popselect.events`:

    - `open` and `close` when the menu opens or closes.
    - `input` then `change` when the user selects a different item through the menu. Selections made through
      `value`, `selected_index`, `select`, `select_index` and `reset` do not notify.
    """

    def __init__(
        self,
        items: ItemsSource,
        options: MenuOptions | None = None,
        field: Control | None = None,
        surface: ScrollSurface | None = None,
        focus_host: FocusHost | None = None,
        popover: PopoverLifecycle | None = None,
        display_text: str = '',
        disabled: bool = False,
        item_kinds: Sequence[str] = DEFAULT_ITEM_KINDS,
    ):
        self.options = resolve_menu_options(options)
        self.field = field
        self.disabled = disabled
        self.events = EventEmitter()
        self._open = False
        self._has_updated = False

        self.menu = Menu(
            items,
            options=self.options.model_copy(
                update={'keep_open_on_blur': True, 'no_focus_control': True}
            ),
            surface=surface,
            control=field,
            focus_host=focus_host,
            popover=popover,
            item_kinds=item_kinds,
        )
        self.menu.events.on(events.OPEN, self._handle_menu_open)
        self.menu.events.on(events.CLOSE, self._handle_menu_close)
        self.menu.events.on(events.SELECT, self.handle_menu_select)
        self.menu.events.on(events.ITEM_FOCUS, self.handle_menu_item_focus)

        self.reconciler = SelectionReconciler(
            get_items=lambda: self.menu.all_items,
            get_navigable_items=lambda: self.menu.items,
        )
        self.reconciler.display_text = display_text

    @property
    def options_list(self) -> list[Item]:
        return self.menu.all_items

    @property
    def value(self) -> str:
        return self.reconciler.value

    @value.setter
    def value(self, value: str) -> None:
        self.reconciler.set_value(value)

    @property
    def selected_index(self) -> int:
        return self.reconciler.selected_index

    @selected_index.setter
    def selected_index(self, index: int) -> None:
        self.reconciler.set_selected_index(index)

    @property
    def selected_options(self) -> list[Item]:
        return self.reconciler.selected_items

    @property
    def display_text(self) -> str:
        return self.reconciler.display_text

    @display_text.setter
    def display_text(self, text: str) -> None:
        self.reconciler.display_text = text

    @property
    def projection(self) -> Projection:
        return self.reconciler.projection

    @property
    def open(self) -> bool:
        return self._open

    @open.setter
    def open(self, value: bool) -> None:
        if value == self._open:
            return
        self._open = value
        self.menu.open = value

        if value:
            self._focus_selected_item_or_first()
            self.events.emit(events.OPEN)
        else:
            if self.field is not None:
                self.field.active_descendant = ''
            self.events.emit(events.CLOSE)

    def show(self) -> None:
        self.open = True

    def close(self) -> None:
        self.open = False

    def toggle(self) -> None:
        if self.disabled:
            return
        self.open = not self.open

    def select(self, value: str) -> bool:
        return self.reconciler.select_by_value(value)

    def select_index(self, index: int) -> bool:
        return self.reconciler.select_by_index(index)

    def reset(self) -> bool:
        return self.reconciler.reset()

    def form_reset(self) -> None:
        self.reset()

    def restore_state(self, state: str) -> None:
        self.value = state

    def first_update(self) -> None:
        """
        Applies the value or index set before the items existed.

        When the items are still missing afterwards, one more recomputation is scheduled on the next loop
        iteration for hosts that add their items asynchronously.
        """

        if self._has_updated:
            return
        self._has_updated = True

        if not self.reconciler.last_selected_records:
            self.reconciler.apply_pending()

        if not self.reconciler.last_selected_records and not self.options_list:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug('No running event loop, skipping the deferred selection update')
                return
            loop.call_soon(self._deferred_update)

    def _deferred_update(self) -> None:
        if self.reconciler.recompute_from_items():
            logger.debug(f'Selection found after deferred update: {self.value!r}')

    def items_changed(self) -> None:
        """Recomputes the selection after items were added or removed, unless a value is already selected."""

        if self.value:
            return
        if self.reconciler.pending_value or self.reconciler.pending_index is not None:
            self.reconciler.apply_pending()
        else:
            self.reconciler.recompute_from_items()

    def handle_field_keydown(self, key_input: KeyInput) -> NavAction | None:
        if self.disabled:
            return None
        return self.menu.handle_key(key_input)

    def handle_focus_out(self, related_target: Any) -> None:
        if related_target is self or related_target is self.field:
            return
        if self.field is not None and self.field.contains(related_target):
            return
        if self.menu.contains(related_target):
            return
        self.open = False

    def handle_menu_select(self, detail: MenuSelectDetail) -> None:
        if self.reconciler.select_item(detail.item):
            self._dispatch_change()
        self.open = False

    def handle_menu_item_focus(self, detail: ItemFocusDetail) -> None:
        if self.field is not None:
            self.field.active_descendant = detail.item.id

    def _handle_menu_open(self, _detail: Any) -> None:
        self.open = True

    def _handle_menu_close(self, _detail: Any) -> None:
        self.open = False

    def _dispatch_change(self) -> None:
        self.events.emit(events.INPUT)
        self.events.emit(events.CHANGE)

    def _focus_selected_item_or_first(self) -> None:
        records = self.reconciler.get_selected_records()
        if records and records[0][0] in self.menu.items:
            self.menu.focus_item(records[0][0])
        else:
            self.menu.focus_first_item()
