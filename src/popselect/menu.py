from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence

from popselect import events
from popselect.config import MenuOptions, resolve_menu_options
from popselect.constants import DEFAULT_ITEM_KINDS, LOGGER_NAME
from popselect.events import EventEmitter, ItemFocusDetail, MenuSelectDetail
from popselect.host import Control, FocusHost, ScrollSurface
from popselect.models import Item
from popselect.navigation.actions import MOVE_ACTIONS, KeyInput, NavAction, get_action_from_key
from popselect.navigation.focus import FocusCoordinator, scroll_item_into_view
from popselect.navigation.typeahead import TypeaheadMatcher
from popselect.popover import PopoverConfig, PopoverLifecycle, TimedPopover

logger = logging.getLogger(LOGGER_NAME)

ItemsSource = Callable[[], Sequence[Item]] | Sequence[Item]


def as_items_getter(items: ItemsSource) -> Callable[[], Sequence[Item]]:
    if callable(items):
        return items
    return lambda: items


class Menu:
    """
    A keyboard accessible list of items shown in a popover.

    Notifications, see `popselect.events`:

    - `open` and `close` when the open state changes.
    - `select` with a `MenuSelectDetail` when an item is chosen with the keyboard or the pointer.
    - `item-focus` with an `ItemFocusDetail` when the current item changes.

    The popover animations run as tasks on the running event loop. Focus moves that depend on them (focusing the
    first item after opening, restoring the previously focused element after closing) happen once the animation is
    over. Without a running loop they happen immediately.
    """

    def __init__(
        self,
        items: ItemsSource,
        options: MenuOptions | None = None,
        surface: ScrollSurface | None = None,
        control: Control | None = None,
        focus_host: FocusHost | None = None,
        popover: PopoverLifecycle | None = None,
        item_kinds: Sequence[str] = DEFAULT_ITEM_KINDS,
    ):
        self.options = resolve_menu_options(options)
        self.surface = surface
        self.control = control
        self.focus_host = focus_host
        self.item_kinds = tuple(item_kinds)
        self.events = EventEmitter()
        self.focus_visible = True

        self._get_items = as_items_getter(items)
        self._open = False
        self._last_focused: Any = None
        self._moved_while_opening = False
        self._pending: set[asyncio.Task] = set()
        self._close_task: asyncio.Task | None = None

        self.popover: PopoverLifecycle = popover or TimedPopover(
            get_config=lambda: PopoverConfig.from_options(self.options),
            on_click_away=self.handle_click_away,
        )
        self.list_controller = FocusCoordinator(
            get_possible_items=self._get_items,
            is_item=lambda item: self.is_possible_item(item) and not item.disabled,
            blur_item=self._blur_item,
            focus_item=self._focus_item,
            wrap_navigation=lambda: self.options.wrap_navigation,
            matcher=TypeaheadMatcher(
                timeout=self.options.typeahead_timeout,
                single_char=self.options.typeahead_single_char,
            ),
        )

    def is_possible_item(self, item: Item) -> bool:
        return item.kind in self.item_kinds

    @property
    def all_items(self) -> list[Item]:
        """Items of an accepted kind, including disabled ones."""
        return [item for item in self._get_items() if self.is_possible_item(item)]

    @property
    def items(self) -> list[Item]:
        """Navigable items."""
        return self.list_controller.items

    @property
    def current_index(self) -> int:
        return self.list_controller.current_index

    @property
    def open(self) -> bool:
        return self._open

    @open.setter
    def open(self, value: bool) -> None:
        if value == self._open:
            return
        self._open = value
        if value:
            self._on_opened()
        else:
            self._on_closed()

    def show(self) -> None:
        self.open = True

    def close(self) -> None:
        self.open = False

    def toggle(self) -> None:
        self.open = not self.open

    def focus_first_item(self) -> None:
        self.list_controller.focus_first_item()

    def focus_last_item(self) -> None:
        self.list_controller.focus_last_item()

    def focus_item(self, item: Item) -> None:
        self.list_controller.focus_item(item)

    async def settle(self) -> None:
        """Waits until the pending open and close animations, and the focus moves that follow them, are done."""

        while self._pending:
            results = await asyncio.gather(*list(self._pending), return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    raise result

    def _blur_item(self, item: Item) -> None:
        item.focused = False

    def _focus_item(self, item: Item) -> None:
        item.focused = True
        if self.surface is not None:
            if not self.options.no_focus_control:
                self.surface.active_descendant = item.id
            scroll_item_into_view(self.surface, item.rect, self.options.scroll_padding)
        self.events.emit(events.ITEM_FOCUS, ItemFocusDetail(item=item))

    def _on_opened(self) -> None:
        logger.debug('Menu opened')
        self.events.emit(events.OPEN)

        # reopening before the close animation is over keeps the element focused before the first open
        if self._close_task is not None and not self._close_task.done():
            logger.debug('Menu reopened during its close animation')
            self._close_task.cancel()
        self._close_task = None

        if self.focus_host is not None and self._last_focused is None:
            self._last_focused = self.focus_host.active_element
        if self.control is not None:
            self.control.expanded = True

        self._after(self.popover.animate_open, self._after_open_animation)

    def _after_open_animation(self) -> None:
        if not self.open:
            return
        if self.options.no_focus_control:
            return
        if self.focus_host is not None and self.surface is not None:
            self.focus_host.focus(self.surface)
        if not self._moved_while_opening:
            self.list_controller.focus_first_item()
        self._moved_while_opening = False

    def _on_closed(self) -> None:
        logger.debug('Menu closed')
        self._moved_while_opening = False
        self.events.emit(events.CLOSE)
        self.list_controller.clear_search()

        if self.control is not None:
            self.control.expanded = False

        self._close_task = self._after(self.popover.animate_close, self._after_close_animation)

    def _after_close_animation(self) -> None:
        if self.open:
            return
        if self._last_focused is not None:
            if not self.options.no_focus_control and self.focus_host is not None:
                self.focus_host.focus(self._last_focused)
            self._last_focused = None

    def _after(
        self, animate: Callable[[], Awaitable[None]], then: Callable[[], None]
    ) -> asyncio.Task | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug('No running event loop, skipping the popover animation')
            then()
            return None

        async def run() -> None:
            await animate()
            then()

        task = loop.create_task(run())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def handle_key(self, key_input: KeyInput) -> NavAction | None:
        """
        Handles a keystroke received by the menu surface or forwarded by its control.

        Keystrokes that were already handled are ignored. The keystroke is marked as handled (`prevent_default`)
        unless it maps to no action or to a typeahead search.

        Returns:
            The resolved action, or None when the keystroke is not handled.
        """

        if key_input.default_prevented or self.options.no_list_control:
            return None

        action = get_action_from_key(key_input, self.open)
        if action is None:
            return None

        if action in MOVE_ACTIONS:
            self._moved_while_opening = True
            if action in (NavAction.FIRST, NavAction.LAST):
                self.open = True
            key_input.prevent_default()
            self.focus_visible = True
            self.list_controller.move(action)
        elif action is NavAction.CLOSE_SELECT:
            key_input.prevent_default()
            current_item = self.list_controller.current_item
            if current_item is not None:
                self._select(current_item)
        elif action is NavAction.CLOSE:
            key_input.prevent_default()
            self.open = False
        elif action is NavAction.TYPE:
            self._moved_while_opening = True
            self.open = True
            self.list_controller.handle_type(key_input.key)
        elif action is NavAction.OPEN:
            key_input.prevent_default()
            self.open = True
        return action

    def handle_focus_out(self, related_target: Any) -> None:
        """Closes the menu when focus moves outside of its surface and its control."""

        if self.options.keep_open_on_blur:
            return
        if not self.contains(related_target):
            self.open = False

    def handle_item_hover(self, item: Item) -> None:
        self.focus_visible = False
        self.list_controller.focus_item(item)

    def handle_item_click(self, item: Item) -> None:
        if item not in self.items:
            logger.debug(f'Ignoring click on item {item.id}, it is not navigable')
            return
        self._select(item)

    def handle_click_away(self) -> None:
        if not self.options.keep_open_on_click_away:
            self.open = False

    def _select(self, item: Item) -> None:
        index = self.items.index(item)
        item.focused = False
        self.events.emit(events.SELECT, MenuSelectDetail(item=item, index=index))
        if self.options.keep_open_on_item_click:
            return
        self.open = False

    def contains(self, node: Any) -> bool:
        if node is None:
            return False
        if node is self or node is self.surface or node is self.control:
            return True
        if self.surface is not None and self.surface.contains(node):
            return True
        if self.control is not None and self.control.contains(node):
            return True
        return node in self._get_items()
