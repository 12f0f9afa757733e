import pytest

from popselect import events
from popselect.config import MenuOptions
from popselect.items import build_items
from popselect.menu import Menu
from popselect.models import Rect
from popselect.navigation.actions import KeyInput, NavAction


class Recorder:
    def __init__(self, menu: Menu):
        self.calls: list[tuple[str, object]] = []
        for name in (events.OPEN, events.CLOSE, events.SELECT, events.ITEM_FOCUS):
            menu.events.on(name, lambda detail, name=name: self.calls.append((name, detail)))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def details(self, name: str) -> list:
        return [detail for call_name, detail in self.calls if call_name == name]


def make_menu(items, surface, control, focus_host, **options):
    return Menu(
        items,
        options=MenuOptions(**options),
        surface=surface,
        control=control,
        focus_host=focus_host,
    )


async def press(menu: Menu, key: str, **modifiers) -> NavAction | None:
    action = menu.handle_key(KeyInput(key, **modifiers))
    await menu.settle()
    return action


class TestMenuKeyboard:
    @pytest.mark.asyncio
    async def test_end_to_end_navigation_and_select(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)
        recorder = Recorder(menu)

        indices = []
        for _ in range(3):
            await press(menu, 'ArrowDown')
            indices.append(menu.current_index)

        assert indices == [0, 1, 2]

        await press(menu, 'End')
        assert menu.current_index == 4

        action = await press(menu, 'Enter')

        assert action is NavAction.CLOSE_SELECT
        selects = recorder.details(events.SELECT)
        assert len(selects) == 1
        assert selects[0].item is fruit_items[4]
        assert selects[0].index == 4
        assert not fruit_items[4].focused
        assert not menu.open
        assert recorder.names()[-1] == events.CLOSE

    @pytest.mark.asyncio
    async def test_open_side_effects(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)
        recorder = Recorder(menu)

        await press(menu, 'Enter')

        assert menu.open
        assert control.expanded
        assert recorder.names()[0] == events.OPEN
        assert focus_host.active_element is surface
        assert surface.active_descendant == fruit_items[0].id
        assert fruit_items[0].focused

    @pytest.mark.asyncio
    async def test_close_restores_focus(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)
        await press(menu, 'ArrowDown')
        await press(menu, 'b')

        await press(menu, 'Escape')

        assert not menu.open
        assert not control.expanded
        assert focus_host.active_element == 'trigger-button'
        assert menu.list_controller.search_buffer == ''

    @pytest.mark.asyncio
    async def test_no_focus_control(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host, no_focus_control=True)

        menu.show()
        await menu.settle()

        assert menu.current_index == -1
        assert focus_host.history == []
        assert surface.active_descendant is None

        menu.focus_item(fruit_items[1])
        menu.close()
        await menu.settle()

        assert focus_host.history == []

    @pytest.mark.asyncio
    async def test_home_and_end_open_and_move(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)

        await press(menu, 'End')

        assert menu.open
        assert menu.current_index == 4

    @pytest.mark.asyncio
    async def test_typing_opens_and_searches(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)

        action = await press(menu, 'c')

        assert action is NavAction.TYPE
        assert menu.open
        assert menu.current_index == 3

    @pytest.mark.asyncio
    async def test_keep_open_on_item_click(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host, keep_open_on_item_click=True)
        recorder = Recorder(menu)
        await press(menu, 'ArrowDown')

        await press(menu, ' ')

        assert menu.open
        assert len(recorder.details(events.SELECT)) == 1

    @pytest.mark.asyncio
    async def test_close_select_without_current_item(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host, no_focus_control=True)
        recorder = Recorder(menu)
        menu.show()
        await menu.settle()

        await press(menu, 'Enter')

        assert menu.open
        assert recorder.details(events.SELECT) == []

    @pytest.mark.asyncio
    async def test_handled_and_unknown_keys_pass_through(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)
        handled = KeyInput('ArrowDown', default_prevented=True)

        assert menu.handle_key(handled) is None
        assert not menu.open

        unknown = KeyInput('F2')
        assert menu.handle_key(unknown) is None
        assert not unknown.default_prevented

    @pytest.mark.asyncio
    async def test_no_list_control(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host, no_list_control=True)

        assert await press(menu, 'ArrowDown') is None
        assert not menu.open

    @pytest.mark.asyncio
    async def test_empty_menu(self, surface, control, focus_host):
        menu = make_menu([], surface, control, focus_host)

        await press(menu, 'ArrowDown')
        await press(menu, 'ArrowDown')
        await press(menu, 'Enter')

        assert menu.open
        assert menu.current_index == -1


class TestMenuLifecycle:
    @pytest.mark.asyncio
    async def test_closing_before_open_animation_cancels_focus(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host, show_duration=0.05)

        menu.show()
        menu.close()
        await menu.settle()

        assert menu.current_index == -1
        assert focus_host.active_element == 'trigger-button'

    @pytest.mark.asyncio
    async def test_reopening_during_close_animation(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host, hide_duration=0.05)
        menu.show()
        await menu.settle()
        assert focus_host.active_element is surface

        menu.close()
        menu.show()
        await menu.settle()

        assert menu.open
        assert menu.popover.is_shown
        assert control.expanded

        menu.close()
        await menu.settle()

        assert not menu.popover.is_shown
        assert focus_host.active_element == 'trigger-button'

    @pytest.mark.asyncio
    async def test_focus_waits_for_open_animation(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host, show_duration=0.05)

        menu.show()
        assert menu.current_index == -1

        await menu.settle()
        assert menu.current_index == 0

    @pytest.mark.asyncio
    async def test_quick_uses_zero_durations(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host, show_duration=10, quick=True)

        menu.show()
        await menu.settle()

        assert menu.current_index == 0
        assert menu.popover.is_shown

    @pytest.mark.asyncio
    async def test_toggle(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)

        menu.toggle()
        assert menu.open
        menu.toggle()
        assert not menu.open
        await menu.settle()

    def test_without_event_loop_effects_apply_immediately(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)

        menu.show()

        assert menu.current_index == 0
        menu.close()
        assert focus_host.active_element == 'trigger-button'

    def test_options_fall_back_to_configuration(self, fruit_items, mock_configuration):
        mock_configuration.menu = MenuOptions(wrap_navigation=True)

        menu = Menu(fruit_items)

        assert menu.options.wrap_navigation


class TestMenuPointerAndBlur:
    @pytest.mark.asyncio
    async def test_hover_focuses_item(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)
        recorder = Recorder(menu)
        menu.show()
        await menu.settle()

        menu.handle_item_hover(fruit_items[3])

        assert menu.current_index == 3
        assert not menu.focus_visible
        assert recorder.details(events.ITEM_FOCUS)[-1].item is fruit_items[3]

    @pytest.mark.asyncio
    async def test_click_selects_regardless_of_keyboard_index(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)
        recorder = Recorder(menu)
        menu.show()
        await menu.settle()

        menu.handle_item_click(fruit_items[2])

        detail = recorder.details(events.SELECT)[0]
        assert detail.item is fruit_items[2]
        assert detail.index == 2
        assert not menu.open

    @pytest.mark.asyncio
    async def test_click_on_disabled_item_is_ignored(self, fruit_items, surface, control, focus_host):
        fruit_items[2].disabled = True
        menu = make_menu(fruit_items, surface, control, focus_host)
        recorder = Recorder(menu)
        menu.show()

        menu.handle_item_click(fruit_items[2])

        assert recorder.details(events.SELECT) == []
        assert menu.open
        await menu.settle()

    @pytest.mark.asyncio
    async def test_focus_out(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)
        menu.show()

        menu.handle_focus_out(fruit_items[1])
        assert menu.open
        menu.handle_focus_out(control)
        assert menu.open

        menu.handle_focus_out('somewhere-else')
        assert not menu.open
        await menu.settle()

    @pytest.mark.asyncio
    async def test_keep_open_on_blur(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host, keep_open_on_blur=True)
        menu.show()

        menu.handle_focus_out(None)

        assert menu.open
        await menu.settle()

    @pytest.mark.asyncio
    async def test_click_away(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host)
        menu.show()
        await menu.settle()

        menu.popover.click_away()

        assert not menu.open
        await menu.settle()

    @pytest.mark.asyncio
    async def test_keep_open_on_click_away(self, fruit_items, surface, control, focus_host):
        menu = make_menu(fruit_items, surface, control, focus_host, keep_open_on_click_away=True)
        menu.show()
        await menu.settle()

        menu.handle_click_away()

        assert menu.open

    @pytest.mark.asyncio
    async def test_scrolls_current_item_into_view(self, surface, control, focus_host):
        items = build_items([f'Item {n}' for n in range(8)])
        for position, item in enumerate(items):
            item.rect = Rect(top=position, bottom=position + 1)
        menu = make_menu(items, surface, control, focus_host, scroll_padding=1)

        await press(menu, 'ArrowDown')
        await press(menu, 'End')

        assert surface.scroll_top == 6


class TestEventEmitter:
    def test_failing_handler_does_not_stop_others(self):
        emitter = events.EventEmitter()
        received = []

        def failing(detail):
            raise RuntimeError('boom')

        emitter.on('select', failing)
        emitter.on('select', received.append)

        emitter.emit('select', 'detail')

        assert received == ['detail']

    def test_unsubscribe(self):
        emitter = events.EventEmitter()
        received = []
        unsubscribe = emitter.on('open', received.append)

        unsubscribe()
        emitter.emit('open')

        assert received == []
