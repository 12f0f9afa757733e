import pytest

from popselect.navigation.actions import NavAction
from popselect.navigation.indexer import get_updated_index


class TestGetUpdatedIndex:
    def test_first_and_last(self):
        assert get_updated_index(5, 9, NavAction.FIRST) == 0
        assert get_updated_index(5, 9, NavAction.LAST) == 9

    def test_paging_is_clamped(self):
        assert get_updated_index(3, 9, NavAction.PAGE_DOWN) == 9
        assert get_updated_index(3, 9, NavAction.PAGE_UP) == 0
        assert get_updated_index(12, 30, NavAction.PAGE_UP) == 2
        assert get_updated_index(12, 30, NavAction.PAGE_DOWN) == 22

    def test_next_and_previous_are_clamped(self):
        assert get_updated_index(9, 9, NavAction.NEXT) == 9
        assert get_updated_index(0, 9, NavAction.PREVIOUS) == 0

    def test_no_current_item(self):
        assert get_updated_index(-1, 4, NavAction.NEXT) == 0
        assert get_updated_index(-1, 4, NavAction.PREVIOUS) == 0

    @pytest.mark.parametrize('action', [NavAction.OPEN, NavAction.CLOSE, NavAction.TYPE, None])
    def test_other_actions_keep_the_index(self, action):
        assert get_updated_index(2, 4, action) == 2

    def test_next_then_previous_restores_the_index(self):
        max_index = 6
        for current_index in range(max_index + 1):
            moved = get_updated_index(current_index, max_index, NavAction.NEXT)
            restored = get_updated_index(moved, max_index, NavAction.PREVIOUS)
            if current_index == max_index:
                assert restored == max_index - 1
            else:
                assert restored == current_index

    def test_wrap_navigation(self):
        assert get_updated_index(4, 4, NavAction.NEXT, wrap=True) == 0
        assert get_updated_index(0, 4, NavAction.PREVIOUS, wrap=True) == 4
        assert get_updated_index(2, 4, NavAction.NEXT, wrap=True) == 3
        assert get_updated_index(3, 4, NavAction.PAGE_DOWN, wrap=True) == 4
