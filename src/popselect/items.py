from pathlib import Path

import yaml

from popselect.constants import DEMO_ITEMS
from popselect.exceptions import ItemsFileException
from popselect.models import Item


def build_items(labels: list[str]) -> list[Item]:
    return [Item(label=label) for label in labels]


def item_from_mapping(data: dict) -> Item:
    if not isinstance(data, dict) or not data.get('label'):
        raise ItemsFileException('Every item must be a mapping with a "label" key.', extra={'item': data})

    selected = bool(data.get('selected', False))
    return Item(
        label=str(data['label']),
        value=str(data.get('value') or ''),
        disabled=bool(data.get('disabled', False)),
        selected=selected,
        default_selected=selected,
    )


def load_items(path: Path | None = None) -> list[Item]:
    """
    Loads the items of a select from a YAML file.

    The file holds a list of mappings with a `label` and optional `value`, `disabled` and `selected` keys. Without a
    path the demo items are returned.

    Raises:
        ItemsFileException: the file cannot be read or does not hold a list of items.
    """

    if path is None:
        return build_items(DEMO_ITEMS)

    try:
        content = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise ItemsFileException(f'Unable to read the items file {path}: {e}') from e

    if not isinstance(content, list):
        raise ItemsFileException(f'The items file {path} must contain a list of items.')

    return [item_from_mapping(entry) for entry in content]
