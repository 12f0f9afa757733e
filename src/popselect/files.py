import os
from pathlib import Path

from popselect.constants import CONFIG_FILE_NAME, LOG_FILE_FILE_NAME


def get_config_directory() -> Path:
    base = os.getenv('XDG_CONFIG_HOME') or Path.home() / '.config'
    return Path(base) / 'popselect'


def get_config_file() -> Path:
    return get_config_directory() / CONFIG_FILE_NAME


def get_log_file() -> Path:
    base = os.getenv('XDG_STATE_HOME') or Path.home() / '.local' / 'state'
    directory = Path(base) / 'popselect'
    directory.mkdir(parents=True, exist_ok=True)
    return directory / LOG_FILE_FILE_NAME
