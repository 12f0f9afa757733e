import logging
from pathlib import Path
import sys

import click
from pydantic import ValidationError
from rich.console import Console
from textual.theme import BUILTIN_THEMES

from popselect.app import PopselectApp
from popselect.config import ApplicationConfiguration
from popselect.constants import LOGGER_NAME
from popselect.exceptions import ItemsFileException
from popselect.items import load_items

console = Console()
logger = logging.getLogger(LOGGER_NAME)


@click.command()
@click.option(
    '--items',
    '-i',
    'items_file',
    default=None,
    type=click.Path(path_type=Path),
    help='A YAML file listing the items of the select.',
)
@click.option('--value', '-v', default=None, help='The value of the item to select on startup.')
@click.option('--theme', '-t', default=None, help='The name of the theme to use.')
@click.option(
    '--quick',
    is_flag=True,
    default=False,
    help='Open and close the menu without animation.',
)
@click.option(
    '--version',
    is_flag=True,
    default=False,
    help='Show the version of the tool.',
)
def cli(
    items_file: Path | None = None,
    value: str | None = None,
    theme: str | None = None,
    quick: bool = False,
    version: bool = False,
):
    """Launches the popselect demo."""

    if version:
        from importlib.metadata import version as get_version

        console.print(get_version('popselect'))
        return

    if theme and theme not in BUILTIN_THEMES:
        console.print('The name of the theme you provided is not supported.')
        console.print('To see the list of supported themes, check the Textual documentation.')
        sys.exit(1)

    try:
        settings = ApplicationConfiguration()
        if quick:
            settings.menu = settings.menu.model_copy(update={'quick': True})
    except FileNotFoundError as e:
        console.print(e)
        sys.exit(1)
    except ValidationError as e:
        console.print('Configuration validation error. Make sure your config file is correct.')
        for _e in e.errors():
            if location := _e.get('loc'):
                console.print(f'Configuration error at {location[0]}: {_e.get("msg")}')
            else:
                console.print(f'Configuration error: {_e.get("msg")}')
        sys.exit(1)

    try:
        items = load_items(items_file)
    except ItemsFileException as e:
        console.print(f'[bold red]Invalid items file:[/bold red] {e}')
        sys.exit(1)

    logger.debug(f'Loaded {len(items)} items')
    PopselectApp(settings, items=items, value=value, user_theme=theme).run()


def popselectCLI():
    cli()


if __name__ == '__main__':
    popselectCLI()
