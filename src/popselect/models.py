from dataclasses import dataclass, field
import itertools

_item_ids = itertools.count(1)


def _next_item_id() -> str:
    return f'item-{next(_item_ids)}'


@dataclass
class Rect:
    """Vertical extent of a box in the coordinate space of its scroll surface."""

    top: float
    bottom: float


@dataclass(eq=False)
class Item:
    """
    An entry of a menu or select.

    Items are owned by the host. The engine reads `id`, `label`, `value`, `disabled` and `kind` and writes the
    `selected` and `focused` flags. Equality is identity so that the same label or value may appear more than once.
    """

    label: str
    value: str = ''
    id: str = field(default_factory=_next_item_id)
    disabled: bool = False
    selected: bool = False
    focused: bool = False
    default_selected: bool = False
    """Static marker restored by a form reset."""
    kind: str = 'option'
    rect: Rect | None = None
    """Position of the item inside its scroll surface, when the host knows it."""

    def __post_init__(self) -> None:
        if not self.value:
            self.value = self.label

    @property
    def display_text(self) -> str:
        return self.label

    @property
    def type_ahead_text(self) -> str:
        return self.label.strip()


@dataclass
class Projection:
    """The select state exposed to the host."""

    value: str = ''
    display_text: str = ''
    selected_index: int = -1
