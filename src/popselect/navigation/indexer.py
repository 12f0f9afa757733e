from popselect.constants import PAGE_SIZE
from popselect.navigation.actions import NavAction


def get_updated_index(
    current_index: int,
    max_index: int,
    action: NavAction | None,
    wrap: bool = False,
) -> int:
    """
    Computes the index of the next current item.

    Movement is clamped to `[0, max_index]`. When `wrap` is True, Next on the last item moves to the first one and
    Previous on the first item moves to the last one; paging never wraps.

    Args:
        current_index: the index of the current item, -1 when there is none.
        max_index: the index of the last item. Must not be negative.
        action: the navigation action.
        wrap: whether Next/Previous wrap around at the ends of the list.

    Returns:
        The new index. Actions that do not move the current item return `current_index` unchanged.
    """

    if action is NavAction.FIRST:
        return 0
    if action is NavAction.LAST:
        return max_index
    if action is NavAction.PREVIOUS:
        if wrap and current_index <= 0:
            return max_index
        return max(0, current_index - 1)
    if action is NavAction.NEXT:
        if wrap and current_index >= max_index:
            return 0
        return min(max_index, current_index + 1)
    if action is NavAction.PAGE_UP:
        return max(0, current_index - PAGE_SIZE)
    if action is NavAction.PAGE_DOWN:
        return min(max_index, current_index + PAGE_SIZE)
    return current_index
