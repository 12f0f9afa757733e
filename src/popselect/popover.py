from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Callable, Protocol

from popselect.config import MenuOptions
from popselect.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class PopoverLifecycle(Protocol):
    """Shows and hides the popover of a menu. Both calls resolve once the animation is over."""

    async def animate_open(self) -> None: ...

    async def animate_close(self) -> None: ...


@dataclass
class PopoverConfig:
    placement: str = 'bottom-start'
    strategy: str = 'absolute'
    offset: int = 0
    window_padding: int = 0
    open_duration: float = 0.0
    close_duration: float = 0.0

    @classmethod
    def from_options(cls, options: MenuOptions) -> PopoverConfig:
        """Builds the configuration of a menu popover. Quick menus use zero durations."""

        return cls(
            placement=options.align,
            strategy=options.align_strategy,
            offset=options.offset,
            window_padding=options.window_padding,
            open_duration=0.0 if options.quick else options.show_duration,
            close_duration=0.0 if options.quick else options.hide_duration,
        )


class TimedPopover:
    """
    A popover without rendering: it tracks whether it is shown and waits for the configured durations.

    The configuration is read through `get_config` on every call so that option changes apply to the next
    animation.
    """

    def __init__(
        self,
        get_config: Callable[[], PopoverConfig] | None = None,
        on_click_away: Callable[[], None] | None = None,
    ):
        self._get_config = get_config or PopoverConfig
        self._on_click_away = on_click_away
        self.is_shown = False

    @property
    def config(self) -> PopoverConfig:
        return self._get_config()

    async def animate_open(self) -> None:
        self.is_shown = True
        await asyncio.sleep(self.config.open_duration)

    async def animate_close(self) -> None:
        await asyncio.sleep(self.config.close_duration)
        self.is_shown = False

    def click_away(self) -> None:
        if self.is_shown and self._on_click_away is not None:
            logger.debug('Click away from an open popover')
            self._on_click_away()
