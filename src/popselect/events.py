from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
import logging
from typing import Any, Callable

from popselect.constants import LOGGER_NAME
from popselect.models import Item

logger = logging.getLogger(LOGGER_NAME)

OPEN = 'open'
CLOSE = 'close'
SELECT = 'select'
ITEM_FOCUS = 'item-focus'
CHANGE = 'change'
INPUT = 'input'

Handler = Callable[[Any], None]


@dataclass
class MenuSelectDetail:
    item: Item
    index: int


@dataclass
class ItemFocusDetail:
    item: Item


class EventEmitter:
    """
    Fire-and-forget notifications.

    Handlers are registered per notification name and called in registration order with the notification detail
    (None when the notification carries none). A failing handler is logged and does not prevent the remaining
    handlers from running.
    """

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def on(self, name: str, handler: Handler) -> Callable[[], None]:
        """Registers a handler and returns a callable that unregisters it."""

        self._handlers[name].append(handler)

        def unsubscribe() -> None:
            self.off(name, handler)

        return unsubscribe

    def off(self, name: str, handler: Handler) -> None:
        handlers = self._handlers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, name: str, detail: Any = None) -> None:
        for handler in list(self._handlers.get(name, [])):
            try:
                handler(detail)
            except Exception:
                logger.exception(f'Handler for the {name!r} notification failed')
