from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

from popselect.constants import LOGGER_NAME, TYPEAHEAD_TIMEOUT

logger = logging.getLogger(LOGGER_NAME)


def filter_options(
    options: Sequence[str],
    search: str,
    exclude: Sequence[str] | None = None,
) -> list[str]:
    """Returns the options that start with `search`, ignoring case, and are not excluded."""

    excluded = exclude or []
    needle = search.lower()
    return [
        option for option in options if option.lower().startswith(needle) and option not in excluded
    ]


def get_index_by_letter(
    options: Sequence[str],
    search: str,
    start_index: int = 0,
    exclude: Sequence[str] | None = None,
) -> int:
    """
    Finds the first option matching the search string, starting at `start_index` and cycling around the list.

    When nothing matches and the search string is a single repeated character (e.g. `aaa`), the search is retried
    with that character alone so that pressing the same key repeatedly cycles through the options sharing an
    initial.

    Args:
        options: the labels of the items, in order.
        search: the accumulated search string.
        start_index: the position the search starts from.
        exclude: labels that never match.

    Returns:
        The index of the match in `options`, or -1 when nothing matches. An empty search matches every option, so the
        result is `start_index` modulo the number of options.
    """

    if not options:
        return -1

    start = start_index % len(options)
    positions = list(range(start, len(options))) + list(range(0, start))
    ordered = [options[position] for position in positions]

    matches = filter_options(ordered, search, exclude)
    if not matches and len(set(search)) == 1:
        matches = filter_options(ordered, search[0], exclude)
    if not matches:
        return -1

    # matches keep the rotated order, so the first match sits at the first rotated position with that label
    return positions[ordered.index(matches[0])]


class TypeaheadMatcher:
    """
    Accumulates typed characters into a search string for as long as keystrokes arrive within `timeout` seconds
    of each other.
    """

    def __init__(
        self,
        timeout: float = TYPEAHEAD_TIMEOUT,
        single_char: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.timeout = timeout
        self.single_char = single_char
        self._clock = clock
        self.search_buffer = ''
        self.search_timestamp: float | None = None

    @property
    def session_expired(self) -> bool:
        if self.search_timestamp is None:
            return True
        return self._clock() - self.search_timestamp > self.timeout

    def clear(self) -> None:
        self.search_buffer = ''
        self.search_timestamp = None

    def feed(self, key: str) -> str:
        """Updates the search buffer with a keystroke and returns the new buffer."""

        if self.session_expired:
            self.search_buffer = ''

        if key in ('Backspace', 'Clear'):
            self.search_buffer = self.search_buffer[:-1]
        elif self.single_char:
            self.search_buffer = key
        else:
            self.search_buffer += key

        self.search_timestamp = self._clock()
        return self.search_buffer

    def match(
        self,
        key: str,
        labels: Sequence[str],
        start_index: int = 0,
        exclude: Sequence[str] | None = None,
    ) -> int:
        """Feeds a keystroke and returns the index of the matching label, or -1."""

        search = self.feed(key)
        index = get_index_by_letter(labels, search, start_index, exclude)
        if index < 0:
            logger.debug(f'No typeahead match for {search!r}')
        return index
