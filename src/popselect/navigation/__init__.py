from popselect.navigation.actions import (
    MOVE_ACTIONS,
    KeyInput,
    NavAction,
    get_action_from_key,
    key_input_from_textual,
)
from popselect.navigation.focus import FocusCoordinator, scroll_item_into_view
from popselect.navigation.indexer import get_updated_index
from popselect.navigation.typeahead import TypeaheadMatcher, filter_options, get_index_by_letter

__all__ = [
    'MOVE_ACTIONS',
    'FocusCoordinator',
    'KeyInput',
    'NavAction',
    'TypeaheadMatcher',
    'filter_options',
    'get_action_from_key',
    'get_index_by_letter',
    'get_updated_index',
    'key_input_from_textual',
    'scroll_item_into_view',
]
