import pytest
from textual.app import App, ComposeResult
from textual.widgets import Static

from popselect.app import PopselectApp
from popselect.config import MenuOptions
from popselect.items import build_items
from popselect.widgets.menu_list import MenuList, MenuOption
from popselect.widgets.select_field import SelectField, SelectScreen


class SelectFieldApp(App):
    def __init__(self, items, value=None, disabled=False, **options):
        super().__init__()
        self.menu_options = MenuOptions(quick=True, **options)
        self.items = items
        self.value = value
        self.disabled_field = disabled
        self.changes: list[tuple[str, int]] = []

    def compose(self) -> ComposeResult:
        yield SelectField(
            self.items,
            options=self.menu_options,
            value=self.value,
            placeholder='Pick a fruit',
            disabled=self.disabled_field,
            id='fruit-select',
        )
        yield Static('Somewhere else', id='outside')

    def get_default_screen(self) -> SelectScreen:
        return SelectScreen(id='_default')

    def on_mount(self) -> None:
        self.query_one(SelectField).trigger.focus()

    def on_select_field_changed(self, event: SelectField.Changed) -> None:
        self.changes.append((event.value, event.selected_index))


async def press(pilot, *keys: str) -> None:
    select_field = pilot.app.query_one(SelectField)
    for key in keys:
        await pilot.press(key)
        await select_field.engine.menu.settle()
    await pilot.pause()


class TestSelectField:
    @pytest.mark.asyncio
    async def test_keyboard_selection(self, fruit_items):
        app = SelectFieldApp(fruit_items)
        async with app.run_test() as pilot:
            select_field = app.query_one(SelectField)
            menu_list = app.query_one(MenuList)

            await press(pilot, 'down')
            assert select_field.expanded
            assert menu_list.display
            assert select_field.trigger.has_class('-expanded')
            assert menu_list.options[0].has_class('-focused')

            await press(pilot, 'down', 'down', 'enter')

            assert select_field.value == 'Banana'
            assert select_field.selected_index == 2
            assert not select_field.expanded
            assert not menu_list.display
            assert menu_list.options[2].has_class('-selected')
            assert app.changes == [('Banana', 2)]

    @pytest.mark.asyncio
    async def test_initial_value(self, fruit_items):
        app = SelectFieldApp(fruit_items, value='Cherry')
        async with app.run_test() as pilot:
            select_field = app.query_one(SelectField)

            await press(pilot, 'enter')

            assert select_field.engine.menu.current_index == 3
            assert select_field.trigger.active_descendant == fruit_items[3].id
            assert app.changes == []

    @pytest.mark.asyncio
    async def test_typeahead_opens_the_menu(self, fruit_items):
        app = SelectFieldApp(fruit_items)
        async with app.run_test() as pilot:
            select_field = app.query_one(SelectField)

            await press(pilot, 'c')

            assert select_field.expanded
            assert select_field.engine.menu.current_index == 3

    @pytest.mark.asyncio
    async def test_escape_keeps_selection(self, fruit_items):
        app = SelectFieldApp(fruit_items, value='Apricot')
        async with app.run_test() as pilot:
            select_field = app.query_one(SelectField)

            await press(pilot, 'down', 'down', 'escape')

            assert not select_field.expanded
            assert select_field.value == 'Apricot'

    @pytest.mark.asyncio
    async def test_disabled_field_does_not_open(self, fruit_items):
        app = SelectFieldApp(fruit_items, disabled=True)
        async with app.run_test() as pilot:
            select_field = app.query_one(SelectField)

            await press(pilot, 'down')

            assert not select_field.expanded

    @pytest.mark.asyncio
    async def test_click_on_option(self, fruit_items):
        app = SelectFieldApp(fruit_items)
        async with app.run_test() as pilot:
            select_field = app.query_one(SelectField)
            await press(pilot, 'space')

            option = app.query(MenuOption)[1]
            option.post_message(MenuOption.Clicked(option))
            await pilot.pause()
            await select_field.engine.menu.settle()

            assert select_field.value == 'Apricot'
            assert app.changes == [('Apricot', 1)]

    @pytest.mark.asyncio
    async def test_click_outside_closes_the_menu(self, fruit_items):
        app = SelectFieldApp(fruit_items, value='Date')
        async with app.run_test() as pilot:
            select_field = app.query_one(SelectField)
            await press(pilot, 'space')
            assert select_field.expanded

            await pilot.click('#outside')
            await select_field.engine.menu.settle()
            await pilot.pause()

            assert not select_field.expanded
            assert not app.query_one(MenuList).display
            assert select_field.value == 'Date'
            assert app.changes == []

    @pytest.mark.asyncio
    async def test_pointer_down_inside_the_select_is_not_a_click_away(self, fruit_items):
        app = SelectFieldApp(fruit_items)
        async with app.run_test() as pilot:
            select_field = app.query_one(SelectField)
            await press(pilot, 'space')

            select_field.handle_click_away(app.query(MenuOption)[2])
            select_field.handle_click_away(select_field.trigger)
            await select_field.engine.menu.settle()

            assert select_field.expanded

    @pytest.mark.asyncio
    async def test_keep_open_on_click_away(self, fruit_items):
        app = SelectFieldApp(fruit_items, keep_open_on_click_away=True)
        async with app.run_test() as pilot:
            select_field = app.query_one(SelectField)
            await press(pilot, 'space')

            select_field.handle_click_away(app.query_one('#outside'))
            await select_field.engine.menu.settle()

            assert select_field.expanded

    @pytest.mark.asyncio
    async def test_items_changed(self):
        app = SelectFieldApp([])
        async with app.run_test() as pilot:
            select_field = app.query_one(SelectField)
            assert select_field.value == ''

            items = build_items(['One', 'Two'])
            items[1].selected = True
            select_field.items_changed(items)
            await pilot.pause()

            assert select_field.value == 'Two'
            assert len(select_field.menu_list.options) == 2


class TestPopselectApp:
    @pytest.mark.asyncio
    async def test_startup_value(self, mock_configuration):
        app = PopselectApp(mock_configuration, items=build_items(['Red', 'Green', 'Blue']), value='Green')
        async with app.run_test() as pilot:
            await pilot.pause()

            assert app.select_field.value == 'Green'
            assert app.select_field.selected_index == 1
            assert app.focused is app.select_field.trigger

    @pytest.mark.asyncio
    async def test_selection_through_the_app(self, mock_configuration):
        app = PopselectApp(mock_configuration, items=build_items(['Red', 'Green', 'Blue']))
        async with app.run_test() as pilot:
            await press(pilot, 'end')
            await press(pilot, 'enter')

            assert app.select_field.value == 'Blue'
