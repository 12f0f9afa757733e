"""Resolution of keyboard input into navigation actions.

Reference: https://www.w3.org/WAI/ARIA/apg/patterns/combobox/examples/combobox-select-only/
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from popselect.constants import OPEN_KEYS, TEXTUAL_KEY_NAMES

if TYPE_CHECKING:
    from textual import events


class NavAction(Enum):
    CLOSE = 'close'
    CLOSE_SELECT = 'close_select'
    FIRST = 'first'
    LAST = 'last'
    NEXT = 'next'
    OPEN = 'open'
    PAGE_DOWN = 'page_down'
    PAGE_UP = 'page_up'
    PREVIOUS = 'previous'
    SELECT = 'select'
    TYPE = 'type'


MOVE_ACTIONS = frozenset(
    {
        NavAction.FIRST,
        NavAction.LAST,
        NavAction.NEXT,
        NavAction.PREVIOUS,
        NavAction.PAGE_UP,
        NavAction.PAGE_DOWN,
    }
)
"""Actions that move the current item."""


@dataclass
class KeyInput:
    """A keystroke using DOM-style key names, e.g. `ArrowDown`, `Enter`, `' '` or `a`."""

    key: str
    alt: bool = False
    ctrl: bool = False
    meta: bool = False
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


def get_action_from_key(key_input: KeyInput, menu_open: bool) -> NavAction | None:
    """
    Maps a keystroke to the navigation action it triggers.

    The order of the checks matters: opening keys are resolved before any open-only rule and printable characters
    are captured before the open-only rules so that typing works while the menu is open.

    Args:
        key_input: the keystroke.
        menu_open: whether the menu is currently open.

    Returns:
        The action, or None when the keystroke is not handled and must pass through.
    """
    key = key_input.key

    if not menu_open and key in OPEN_KEYS:
        return NavAction.OPEN

    if key == 'Home':
        return NavAction.FIRST
    if key == 'End':
        return NavAction.LAST

    if (
        key == 'Backspace'
        or key == 'Clear'
        or (
            len(key) == 1
            and key != ' '
            and not key_input.alt
            and not key_input.ctrl
            and not key_input.meta
        )
    ):
        return NavAction.TYPE

    if menu_open:
        if key == 'ArrowUp' and key_input.alt:
            return NavAction.CLOSE_SELECT
        elif key == 'ArrowDown' and not key_input.alt:
            return NavAction.NEXT
        elif key == 'ArrowUp':
            return NavAction.PREVIOUS
        elif key == 'PageUp':
            return NavAction.PAGE_UP
        elif key == 'PageDown':
            return NavAction.PAGE_DOWN
        elif key == 'Escape':
            return NavAction.CLOSE
        elif key == 'Enter' or key == ' ':
            return NavAction.CLOSE_SELECT
    return None


def key_input_from_textual(event: events.Key) -> KeyInput:
    """Converts a Textual key event, e.g. `alt+up` or `a`, into a `KeyInput`."""

    *modifiers, name = event.key.split('+') if event.key != '+' else ['+']
    key = TEXTUAL_KEY_NAMES.get(name)
    if key is None:
        if not modifiers and event.is_printable and event.character:
            key = event.character
        else:
            key = name
    return KeyInput(
        key=key,
        alt='alt' in modifiers,
        ctrl='ctrl' in modifiers,
        meta='meta' in modifiers or 'super' in modifiers,
    )
