from __future__ import annotations

import logging
from typing import Callable, Sequence

from popselect.constants import LOGGER_NAME
from popselect.models import Item, Projection

logger = logging.getLogger(LOGGER_NAME)

SelectionRecord = tuple[Item, int]


class SelectionReconciler:
    """
    Keeps `value`, `display_text` and `selected_index` consistent with the `selected` flags of the items.

    The flags of the items are the ground truth. When more than one item is selected, the one with the lowest index
    is the authoritative selection; the other flags are left alone until an explicit selection enforces
    exclusivity.

    Every mutating call returns whether the authoritative item changed since the previous computation. The
    reconciler never notifies anyone itself.
    """

    def __init__(
        self,
        get_items: Callable[[], Sequence[Item]],
        get_navigable_items: Callable[[], Sequence[Item]] | None = None,
    ):
        self._get_items = get_items
        self._get_navigable_items = get_navigable_items or (
            lambda: [item for item in self._get_items() if not item.disabled]
        )
        self.value = ''
        self.display_text = ''
        self.last_selected_item: Item | None = None
        self.last_selected_records: list[SelectionRecord] = []
        self.pending_value: str | None = None
        self.pending_index: int | None = None

    @property
    def items(self) -> list[Item]:
        return list(self._get_items())

    def get_selected_records(self) -> list[SelectionRecord]:
        records = [(item, index) for index, item in enumerate(self.items) if item.selected]
        self.last_selected_records = records
        return records

    @property
    def selected_index(self) -> int:
        records = self.get_selected_records()
        if records:
            return records[0][1]
        return -1

    @property
    def selected_items(self) -> list[Item]:
        return [item for item, _ in self.get_selected_records()]

    @property
    def projection(self) -> Projection:
        return Projection(
            value=self.value,
            display_text=self.display_text,
            selected_index=self.selected_index,
        )

    def select_item(self, item: Item) -> bool:
        """Selects `item` and deselects every other item."""

        for selected_item, _ in self.get_selected_records():
            if selected_item is not item:
                selected_item.selected = False
        item.selected = True
        return self.recompute_from_items()

    def select_by_value(self, value: str) -> bool:
        for item in self.items:
            if item.value == value:
                return self.select_item(item)
        logger.debug(f'No item with value {value!r} to select')
        return False

    def select_by_index(self, index: int) -> bool:
        items = self.items
        if 0 <= index < len(items):
            return self.select_item(items[index])
        logger.debug(f'No item at index {index} to select')
        return False

    def set_value(self, value: str) -> bool:
        """Records a value chosen by the host and selects the matching item, if it exists yet."""

        self.pending_value = value
        return self.select_by_value(value)

    def set_selected_index(self, index: int) -> bool:
        """Records an index chosen by the host and selects the item at that position, if it exists yet."""

        self.pending_index = index
        return self.select_by_index(index)

    def apply_pending(self) -> bool:
        """
        Applies the value or index last set by the host, unless items are already selected.

        A pending value takes precedence over a pending index. Without either, the projection is recomputed from
        the items.
        """

        has_selection = bool(self.get_selected_records())
        if self.pending_value and not has_selection:
            return self.select_by_value(self.pending_value)
        if self.pending_index is not None and not has_selection:
            return self.select_by_index(self.pending_index)
        return self.recompute_from_items()

    def recompute_from_items(self) -> bool:
        records = self.get_selected_records()

        if records:
            first_selected_item = records[0][0]
            changed = self.last_selected_item is not first_selected_item
            self.last_selected_item = first_selected_item
            self.value = first_selected_item.value
            self.display_text = first_selected_item.display_text
            return changed

        changed = self.last_selected_item is not None
        self.last_selected_item = None
        self.value = ''
        # a placeholder display text set before the items exist is kept until they do
        if not self._get_navigable_items() and self.display_text:
            return changed
        self.display_text = ''
        return changed

    def reset(self) -> bool:
        """Restores the `selected` flag of every item from its `default_selected` marker."""

        for item in self.items:
            item.selected = item.default_selected
        return self.recompute_from_items()
