"""User settings for forgegraph (hotfix suffixes, graph spacing, history size)."""

import configparser
import logging
import os
import platform
from pathlib import Path
from typing import Any, List, Optional, Tuple

from forgegraph.constants import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_HOTFIX_SUFFIXES,
    FORGE_EXECUTABLE,
    MAX_HISTORY_LIMIT,
)
from forgegraph.graph.layout import LayoutOptions, is_positive_finite

APP_NAME = "forgegraph"

logger = logging.getLogger("forgegraph")

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")


default_cfg = {
    "graph": {
        "hotfix_suffixes": ",".join(DEFAULT_HOTFIX_SUFFIXES),
        "primary_axis_spacing": "80",
        "branch_axis_spacing": "150",
        "node_radius": "20",
    },
    "history": {"limit": str(DEFAULT_HISTORY_LIMIT)},
    "forge": {"executable": FORGE_EXECUTABLE},
}

if platform.system() == "Darwin":
    # macOS
    config_dir = Path("~/Library/Application Support/forgegraph").expanduser()
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file() -> Path:
    return config_dir / f"{APP_NAME}.cfg"


class ConfigAccessor:
    """
    A dict-like accessor for the settings file.

    Missing sections or keys fall back to the given default instead of raising.

    Usage:
        config = ConfigAccessor()
        value = config.get('graph', 'hotfix_suffixes', default='hotfix,patch')
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize a ConfigAccessor with an optional config file path.

        Args:
            config_path: Path to the configuration file. If None, uses the default path.
        """
        self.config_path = config_path if config_path is not None else get_config_file()

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        try:
            return self.config[section][key]
        except (KeyError, configparser.NoSectionError, configparser.NoOptionError):
            return default

    def set(self, section: str, key: str, value: str) -> None:
        if not self.config.has_section(section):
            self.config.add_section(section)

        self.config[section][key] = value

    def save(self) -> None:
        """
        Save the current configuration to the config file.

        Fails gracefully if the file cannot be written (e.g., read-only filesystem).
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as configfile:
                self.config.write(configfile)
        except OSError as e:
            logger.warning(
                f"Could not save configuration to {self.config_path}: {e}. "
                "Configuration changes will not persist."
            )

    def sections(self) -> list:
        return self.config.sections()

    def options(self, section: str) -> list:
        try:
            return self.config.options(section)
        except configparser.NoSectionError:
            return []


def _default(section: str, key: str) -> str:
    return default_cfg[section][key]


def _get_float(accessor: ConfigAccessor, section: str, key: str) -> float:
    """Read a positive finite number, falling back to the default otherwise."""
    value = accessor.get(section, key, _default(section, key))
    number: Optional[float]
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = None
    if number is None or not is_positive_finite(number):
        logger.warning(
            f"Invalid value '{value}' for {section}.{key}, using {_default(section, key)}"
        )
        return float(_default(section, key))
    return number


def get_hotfix_suffixes(accessor: Optional[ConfigAccessor] = None) -> Tuple[str, ...]:
    """Hotfix suffixes from ``[graph] hotfix_suffixes`` (comma separated)."""
    accessor = accessor or ConfigAccessor()
    raw = accessor.get(
        "graph", "hotfix_suffixes", _default("graph", "hotfix_suffixes")
    )
    suffixes: List[str] = [part.strip() for part in str(raw).split(",")]
    return tuple(suffix for suffix in suffixes if suffix)


def get_layout_options(accessor: Optional[ConfigAccessor] = None) -> LayoutOptions:
    accessor = accessor or ConfigAccessor()
    return LayoutOptions(
        primary_axis_spacing=_get_float(accessor, "graph", "primary_axis_spacing"),
        branch_axis_spacing=_get_float(accessor, "graph", "branch_axis_spacing"),
        node_radius=_get_float(accessor, "graph", "node_radius"),
        hotfix_suffixes=get_hotfix_suffixes(accessor),
    )


def get_history_limit(accessor: Optional[ConfigAccessor] = None) -> int:
    """Number of versions to fetch, capped at MAX_HISTORY_LIMIT."""
    accessor = accessor or ConfigAccessor()
    raw = accessor.get("history", "limit", _default("history", "limit"))
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Invalid history limit '{raw}', using {DEFAULT_HISTORY_LIMIT}")
        limit = DEFAULT_HISTORY_LIMIT
    return max(1, min(limit, MAX_HISTORY_LIMIT))


def get_forge_executable(accessor: Optional[ConfigAccessor] = None) -> str:
    accessor = accessor or ConfigAccessor()
    return accessor.get("forge", "executable", _default("forge", "executable"))
