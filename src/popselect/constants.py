LOGGER_NAME = 'popselect'
"""Application logger name identifier."""

LOG_FILE_FILE_NAME = 'popselect.log'
"""Default log file name."""

CONFIG_FILE_NAME = 'config.yaml'
"""Default configuration file name."""

TITLE = 'popselect'
"""Demo application title."""

PAGE_SIZE = 10
"""Number of items skipped by the PageUp/PageDown navigation actions."""

TYPEAHEAD_TIMEOUT = 0.5
"""Seconds after the last keystroke before a typeahead session expires and the search buffer is cleared."""

DEFAULT_WINDOW_PADDING = 16
"""Padding kept between the popover and the boundary of the window when positioning it."""

DEFAULT_ITEM_KINDS = ('menuitem', 'option')
"""Kinds of items accepted as navigable by a menu unless it is configured otherwise."""

OPEN_KEYS = ('ArrowDown', 'ArrowUp', 'Enter', ' ')
"""Keys that open a closed menu."""

TEXTUAL_KEY_NAMES = {
    'down': 'ArrowDown',
    'up': 'ArrowUp',
    'left': 'ArrowLeft',
    'right': 'ArrowRight',
    'enter': 'Enter',
    'space': ' ',
    'home': 'Home',
    'end': 'End',
    'pageup': 'PageUp',
    'pagedown': 'PageDown',
    'escape': 'Escape',
    'backspace': 'Backspace',
    'delete': 'Delete',
    'tab': 'Tab',
}
"""Maps Textual key names to the key names understood by the action resolver."""

DEFAULT_THEME = 'textual-dark'
"""Default UI theme."""

DEMO_ITEMS = [
    'Apple',
    'Apricot',
    'Banana',
    'Blackberry',
    'Blueberry',
    'Cherry',
    'Grape',
    'Lemon',
    'Mango',
    'Orange',
    'Peach',
    'Pear',
    'Plum',
]
"""Labels of the items shown by the demo application when no items file is given."""
