from __future__ import annotations

import logging
from typing import Callable, Sequence

from popselect.constants import LOGGER_NAME
from popselect.host import ScrollSurface
from popselect.models import Item, Rect
from popselect.navigation.actions import NavAction
from popselect.navigation.indexer import get_updated_index
from popselect.navigation.typeahead import TypeaheadMatcher

logger = logging.getLogger(LOGGER_NAME)


def scroll_item_into_view(
    surface: ScrollSurface | None,
    item_rect: Rect | None,
    padding_y: float = 0,
) -> None:
    """
    Adjusts the vertical scroll offset of `surface` so that the item is fully visible.

    Both rectangles are expected in the same coordinate space. Nothing happens when the surface, its rectangle or
    the item rectangle is unknown.
    """

    if surface is None or item_rect is None:
        return
    surface_rect = surface.rect
    if surface_rect is None:
        return

    if item_rect.bottom + padding_y > surface_rect.bottom:
        surface.scroll_top += item_rect.bottom - surface_rect.bottom + padding_y
    elif item_rect.top - padding_y < surface_rect.top:
        surface.scroll_top -= surface_rect.top - item_rect.top + padding_y


class FocusCoordinator:
    """
    Roving focus over the navigable items of a list.

    The coordinator owns the current item: `focus_item` is the only way to change it. The item collection is read
    fresh from `get_possible_items` on every call, filtered with `is_item`, so the host may add or remove items at
    any time; the current index follows the current item and becomes -1 if it is removed.
    """

    def __init__(
        self,
        get_possible_items: Callable[[], Sequence[Item]],
        is_item: Callable[[Item], bool],
        blur_item: Callable[[Item], None],
        focus_item: Callable[[Item], None],
        wrap_navigation: Callable[[], bool] = lambda: False,
        matcher: TypeaheadMatcher | None = None,
    ):
        self._get_possible_items = get_possible_items
        self._is_item = is_item
        self._blur_item = blur_item
        self._focus_item = focus_item
        self._wrap_navigation = wrap_navigation
        self.matcher = matcher or TypeaheadMatcher()
        self._current_item: Item | None = None

    @property
    def items(self) -> list[Item]:
        return [item for item in self._get_possible_items() if self._is_item(item)]

    @property
    def current_item(self) -> Item | None:
        if self._current_item is not None and self._current_item in self.items:
            return self._current_item
        return None

    @property
    def current_index(self) -> int:
        items = self.items
        if self._current_item is not None and self._current_item in items:
            return items.index(self._current_item)
        return -1

    @property
    def search_buffer(self) -> str:
        return self.matcher.search_buffer

    def focus_item(self, item: Item | None) -> None:
        if item is None or item not in self.items:
            logger.debug('Ignoring focus request for an item that is not navigable')
            return

        previous = self._current_item
        if previous is not None:
            self._blur_item(previous)
        self._current_item = item
        self._focus_item(item)

    def focus_first_item(self) -> None:
        items = self.items
        if not items:
            logger.debug('No navigable items to focus')
            return
        self.focus_item(items[0])

    def focus_last_item(self) -> None:
        items = self.items
        if not items:
            logger.debug('No navigable items to focus')
            return
        self.focus_item(items[-1])

    def move(self, action: NavAction) -> None:
        """Moves the current item according to a navigation action."""

        items = self.items
        if not items:
            logger.debug(f'No navigable items for action {action.value}')
            return
        next_index = get_updated_index(
            self.current_index, len(items) - 1, action, wrap=self._wrap_navigation()
        )
        self.focus_item(items[next_index])

    def handle_type(self, key: str) -> None:
        """Feeds a keystroke to the typeahead search and focuses the matching item, if any."""

        items = self.items
        if not items:
            logger.debug('No navigable items to search')
            return
        labels = [item.type_ahead_text for item in items]
        index = self.matcher.match(key, labels, start_index=self.current_index + 1)
        if index >= 0:
            self.focus_item(items[index])

    def clear_search(self) -> None:
        self.matcher.clear()
