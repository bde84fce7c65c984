"""Client configuration.

Settings come from an optional TOML file (``.todo-client.toml`` in the
working directory by default):

    [service]
    base_url = "https://dummyjson.com"
    list_limit = 5
    owner_id = 5

    [ui]
    clear_stale_error = false

    [logging]
    level = "WARNING"
    file = ""

Missing files, sections or keys fall back to the defaults below. A file
with a value of the wrong type, or a list_limit below 1, is ignored as a
whole.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import toml

from .controller import DEFAULT_LIST_LIMIT, DEFAULT_OWNER_ID
from .service import DEFAULT_BASE_URL


CONFIG_FILENAME = ".todo-client.toml"


@dataclass
class ClientConfig:
    """Runtime options for the todo client."""

    base_url: str = DEFAULT_BASE_URL
    list_limit: int = DEFAULT_LIST_LIMIT
    owner_id: int = DEFAULT_OWNER_ID
    clear_stale_error: bool = False
    log_level: str = "WARNING"
    log_file: Optional[str] = None


def default_config_path() -> Path:
    return Path.cwd() / CONFIG_FILENAME


def load_client_config(path: Optional[str] = None) -> ClientConfig:
    """Load configuration from a TOML file.

    Args:
        path: Config file to read. Defaults to ``.todo-client.toml`` in the
            current directory.

    Returns:
        ClientConfig with values from the file, or defaults.
    """
    config_file = Path(path) if path else default_config_path()

    if not config_file.exists():
        return ClientConfig()

    try:
        data = toml.load(config_file)

        service = data.get("service", {})
        ui = data.get("ui", {})
        log = data.get("logging", {})
        defaults = ClientConfig()

        list_limit = int(service.get("list_limit", defaults.list_limit))
        if list_limit < 1:
            raise ValueError(f"list_limit must be at least 1, got {list_limit}")

        clear_stale_error = ui.get("clear_stale_error", defaults.clear_stale_error)
        if not isinstance(clear_stale_error, bool):
            raise ValueError(f"clear_stale_error must be true or false, got {clear_stale_error!r}")

        return ClientConfig(
            base_url=str(service.get("base_url", defaults.base_url)),
            list_limit=list_limit,
            owner_id=int(service.get("owner_id", defaults.owner_id)),
            clear_stale_error=clear_stale_error,
            log_level=str(log.get("level", defaults.log_level)).upper(),
            log_file=log.get("file") or None,
        )
    except (toml.TomlDecodeError, IOError, ValueError, TypeError, AttributeError):
        return ClientConfig()
