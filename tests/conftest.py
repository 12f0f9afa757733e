import pytest

from popselect.config import CONFIGURATION, ApplicationConfiguration, MenuOptions
from popselect.host import InMemoryFocusHost, Surface, TriggerControl
from popselect.items import build_items
from popselect.models import Item


@pytest.fixture(autouse=True)
def mock_configuration():
    config = ApplicationConfiguration(
        menu=MenuOptions(),
        log_file='',
        log_level='WARNING',
        theme=None,
    )

    token = CONFIGURATION.set(config)

    yield config

    CONFIGURATION.reset(token)


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fruit_items() -> list[Item]:
    return build_items(['Apple', 'Apricot', 'Banana', 'Cherry', 'Date'])


@pytest.fixture
def focus_host() -> InMemoryFocusHost:
    return InMemoryFocusHost(active_element='trigger-button')


@pytest.fixture
def surface() -> Surface:
    return Surface(height=3)


@pytest.fixture
def control() -> TriggerControl:
    return TriggerControl()


def make_items(*values: str, selected: tuple[str, ...] = (), disabled: tuple[str, ...] = ()) -> list[Item]:
    return [
        Item(
            label=value.upper(),
            value=value,
            selected=value in selected,
            default_selected=value in selected,
            disabled=value in disabled,
        )
        for value in values
    ]
