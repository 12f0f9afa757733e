from __future__ import annotations

import asyncio
import logging
from typing import Callable

from textual.widget import Widget

from popselect.constants import LOGGER_NAME
from popselect.popover import PopoverConfig

logger = logging.getLogger(LOGGER_NAME)


class TextualPopover:
    """Shows and hides a widget as the popover of a menu."""

    def __init__(
        self,
        widget: Widget,
        get_config: Callable[[], PopoverConfig] | None = None,
        on_click_away: Callable[[], None] | None = None,
    ):
        self.widget = widget
        self._get_config = get_config or PopoverConfig
        self._on_click_away = on_click_away

    @property
    def is_shown(self) -> bool:
        return bool(self.widget.display)

    async def animate_open(self) -> None:
        config = self._get_config()
        self.widget.styles.offset = (0, config.offset)
        self.widget.display = True
        await asyncio.sleep(config.open_duration)

    async def animate_close(self) -> None:
        await asyncio.sleep(self._get_config().close_duration)
        self.widget.display = False

    def click_away(self) -> None:
        if self.is_shown and self._on_click_away is not None:
            logger.debug(f'Click away from the popover #{self.widget.id}')
            self._on_click_away()


class TextualFocusHost:
    """Tracks and moves focus through the Textual app of a widget."""

    def __init__(self, widget: Widget):
        self.widget = widget

    @property
    def active_element(self) -> Widget | None:
        return self.widget.app.focused

    def focus(self, element: object) -> None:
        if isinstance(element, Widget) and element.is_attached:
            element.focus()
