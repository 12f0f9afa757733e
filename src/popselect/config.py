from contextvars import ContextVar
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from popselect.constants import DEFAULT_WINDOW_PADDING, TYPEAHEAD_TIMEOUT
from popselect.files import get_config_file


class MenuOptions(BaseModel):
    """Behaviour flags recognized by menus and selects."""

    keep_open_on_blur: bool = False
    """If True the menu stays open when focus moves outside of it."""
    keep_open_on_item_click: bool = False
    """If True selecting an item, with the pointer or the keyboard, does not close the menu."""
    keep_open_on_click_away: bool = False
    """If True clicking outside of the popover does not close the menu."""
    no_list_control: bool = False
    """If True the menu does not react to keyboard navigation at all."""
    no_focus_control: bool = False
    """If True the menu does not move focus on open nor restore it on close, and does not set the active
    descendant of its surface."""
    wrap_navigation: bool = False
    """If True Next/Previous wrap around at the ends of the list. Default is False."""
    quick: bool = False
    """If True the popover opens and closes without animation."""
    offset: int = 0
    """Distance, in cells, between the popover and its trigger control."""
    align: str = 'bottom-start'
    """Placement of the popover relative to its trigger control."""
    align_strategy: Literal['absolute', 'fixed'] = 'absolute'
    """Positioning strategy of the popover."""
    window_padding: int = DEFAULT_WINDOW_PADDING
    """Padding kept between the popover and the window boundary."""
    show_duration: float = Field(default=0.0, ge=0)
    """Duration, in seconds, of the open animation."""
    hide_duration: float = Field(default=0.0, ge=0)
    """Duration, in seconds, of the close animation."""
    scroll_padding: int = Field(default=0, ge=0)
    """Vertical padding kept around the current item when scrolling it into view."""
    typeahead_timeout: float = Field(default=TYPEAHEAD_TIMEOUT, gt=0)
    """Seconds between keystrokes after which a typeahead session expires."""
    typeahead_single_char: bool = False
    """If True every keystroke starts a new typeahead search instead of extending the current one."""


class ApplicationConfiguration(BaseSettings):
    """The configuration for the popselect demo application and CLI tool."""

    menu: MenuOptions = Field(default_factory=MenuOptions)
    """Default options applied to menus and selects that are not given explicit options."""
    log_file: str | None = None
    """The filename of the log file to use. If you set an empty string logging to a file is disabled."""
    log_level: str = 'WARNING'
    """The log level to use. Use Python's `logging` names: `CRITICAL`, `FATAL`, `ERROR`, `WARN`, `WARNING`, `INFO`,
    `DEBUG` and `NOTSET`."""
    theme: str | None = None
    """The name of the theme to use for the UI. Accept Textual themes."""

    model_config = SettingsConfigDict(
        extra='ignore',
        validate_assignment=True,
        env_prefix='POPSELECT_',
        env_nested_delimiter='__',
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        if config_file := os.getenv('POPSELECT_CONFIG_FILE'):
            conf_file = Path(config_file).resolve()
        else:
            conf_file = get_config_file()

        if conf_file.exists():
            return (
                init_settings,
                env_settings,
                dotenv_settings,
                YamlConfigSettingsSource(settings_cls, yaml_file=conf_file),
            )
        else:
            return (
                init_settings,
                env_settings,
                dotenv_settings,
            )


CONFIGURATION: ContextVar[ApplicationConfiguration] = ContextVar('configuration')


def resolve_menu_options(options: MenuOptions | None = None) -> MenuOptions:
    """Returns the given options, else the options of the active configuration, else the defaults."""

    if options is not None:
        return options
    try:
        return CONFIGURATION.get().menu
    except LookupError:
        return MenuOptions()
