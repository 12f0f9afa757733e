import logging
import os
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter
from rich.text import Text
from textual import on
from textual.app import App, ComposeResult, InvalidThemeError
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Label, Static

from popselect.config import CONFIGURATION, ApplicationConfiguration
from popselect.constants import DEFAULT_THEME, LOGGER_NAME, TITLE
from popselect.files import get_log_file
from popselect.models import Item
from popselect.widgets.select_field import SelectField, SelectScreen


class PopselectApp(App):
    """Demo application showing a single select."""

    TITLE = TITLE
    BINDINGS = [
        Binding(
            key='ctrl+c',
            action='quit',
            description='Quit',
            tooltip='Quit',
            show=True,
        ),
    ]
    DEFAULT_THEME = DEFAULT_THEME

    DEFAULT_CSS = """
    #demo {
        padding: 1 2;
    }

    #selection-status {
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        settings: ApplicationConfiguration,
        items: list[Item],
        value: str | None = None,
        user_theme: str | None = None,
    ):
        super().__init__()
        self.config = settings
        CONFIGURATION.set(settings)
        self.items = items
        self.initial_value = value
        self._setup_logging()
        self._setup_theme(user_theme)

    def get_default_screen(self) -> SelectScreen:
        return SelectScreen(id='_default')

    @property
    def select_field(self) -> SelectField:
        return self.query_one(SelectField)

    @property
    def status(self) -> Static:
        return self.query_one('#selection-status', Static)

    def compose(self) -> ComposeResult:
        with Vertical(id='demo'):
            yield Label('Choose an item')
            yield SelectField(
                self.items,
                options=self.config.menu,
                value=self.initial_value,
                placeholder='Nothing selected',
                id='demo-select',
            )
            yield Static(id='selection-status')
        yield Footer()

    def on_mount(self) -> None:
        self.select_field.trigger.focus()
        self._update_status()

    @on(SelectField.Changed)
    def handle_selection_changed(self, event: SelectField.Changed) -> None:
        self.logger.info(f'Selected {event.value!r} at index {event.selected_index}')
        self._update_status()

    def _update_status(self) -> None:
        select_field = self.select_field
        if select_field.selected_index < 0:
            self.status.update(Text('No selection'))
        else:
            self.status.update(
                Text(f'value={select_field.value} index={select_field.selected_index}')
            )

    def _setup_theme(self, user_theme: str | None = None) -> None:
        if input_theme := (user_theme or CONFIGURATION.get().theme):
            try:
                self.theme = input_theme
            except InvalidThemeError:
                self.logger.warning(
                    f'Unknown theme {input_theme}. Using the default theme: {self.DEFAULT_THEME}'
                )
                self.theme = self.DEFAULT_THEME
        else:
            self.theme = self.DEFAULT_THEME

    def _setup_logging(self) -> None:
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(CONFIGURATION.get().log_level or logging.WARNING)

        if log_file_env := os.getenv('POPSELECT_LOG_FILE'):
            log_file = Path(log_file_env).resolve()
        elif (config_log_file := CONFIGURATION.get().log_file) is not None:
            if not config_log_file:
                return
            log_file = Path(config_log_file).resolve()
        else:
            log_file = get_log_file()

        try:
            fh = logging.FileHandler(log_file)
        except Exception as e:
            self.logger.warning(f'Failed to create log file handler: {e}')
        else:
            fh.setLevel(CONFIGURATION.get().log_level or logging.WARNING)
            fh.setFormatter(
                JsonFormatter(
                    '%(asctime)s %(levelname)s %(message)s %(lineno)s %(module)s %(pathname)s '
                )
            )
            self.logger.addHandler(fh)
