"""
Configuration file support for netlist-rebuild.

Provides hierarchical configuration loading from:
1. Project config: .netlist-rebuild.toml or netlist-rebuild.toml in project root
2. User config: ~/.config/netlist-rebuild/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import sys
import warnings
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from netlist_rebuild.exceptions import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Config file names to search for in project directories
CONFIG_FILENAMES = [".netlist-rebuild.toml", "netlist-rebuild.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "netlist-rebuild" / "config.toml"

WIRE_STRATEGIES = ("immediate", "grouped")

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"verbose", "quiet", "assume_yes"},
    "layout": {"origin_x", "origin_y", "grid_size", "max_per_row"},
    "wires": {"strategy", "stub_length", "drop_single_pin_nets"},
    "library": {"search_page", "cache_lookups", "fuzzy_cutoff"},
}


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    verbose: bool = False
    quiet: bool = False
    assume_yes: bool = False


@dataclass
class LayoutConfig:
    """Grid layout configuration.

    Components advance ``3 * grid_size`` to the right; after ``max_per_row``
    attempts the row wraps and y advances ``2 * grid_size``.
    """

    origin_x: float = 20
    origin_y: float = 20
    grid_size: float = 100
    max_per_row: int = 15


@dataclass
class WiresConfig:
    """Net stub synthesis configuration."""

    strategy: str = "immediate"
    stub_length: float = 30
    drop_single_pin_nets: bool = False


@dataclass
class LibraryConfig:
    """Device lookup configuration."""

    search_page: int = 1
    cache_lookups: bool = False
    fuzzy_cutoff: float = 0.6


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    wires: WiresConfig = field(default_factory=WiresConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)

    # Track which file each setting came from (for --show)
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        config.validate()
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")

    def get_value(self, key: str) -> Any:
        """Get a value by dotted key, e.g. ``wires.strategy``.

        Raises:
            ConfigError: If the key is unknown
        """
        section, _, name = key.partition(".")
        if section not in KNOWN_KEYS or name not in KNOWN_KEYS[section]:
            raise ConfigError(f"Unknown config key: {key}")
        return getattr(getattr(self, section), name)

    def validate(self) -> None:
        """Check value ranges that would make a rebuild meaningless.

        Raises:
            ConfigurationError: If any value is out of range
        """
        if self.wires.strategy not in WIRE_STRATEGIES:
            raise ConfigurationError(
                f"Unknown wire strategy: {self.wires.strategy}",
                context={"available": ", ".join(WIRE_STRATEGIES)},
            )
        if self.layout.max_per_row < 1:
            raise ConfigurationError(
                "layout.max_per_row must be at least 1",
                context={"max_per_row": self.layout.max_per_row},
            )
        if self.layout.grid_size <= 0:
            raise ConfigurationError(
                "layout.grid_size must be positive",
                context={"grid_size": self.layout.grid_size},
            )
        if self.wires.stub_length <= 0:
            raise ConfigurationError(
                "wires.stub_length must be positive",
                context={"stub_length": self.wires.stub_length},
            )
        if self.library.search_page < 1:
            raise ConfigurationError(
                "library.search_page is 1-indexed",
                context={"search_page": self.library.search_page},
            )


class ConfigError(Exception):
    """Configuration file errors."""

    pass


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any] | None:
    """
    Load a TOML file.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML data

    Raises:
        ConfigError: If TOML is invalid or the file cannot be read
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section, known in KNOWN_KEYS.items():
        if section not in data:
            continue
        section_data = data[section]
        if not isinstance(section_data, dict):
            raise ConfigError(f"Config section [{section}] in {source} must be a table")
        _warn_unknown_keys(section_data, known, section, source)

        target = getattr(config, section)
        field_types = {f.name: f.type for f in fields(target)}
        for name in sorted(known):
            if name in section_data:
                value = section_data[name]
                _check_type(f"{section}.{name}", value, field_types[name], source)
                setattr(target, name, value)
                sources[f"{section}.{name}"] = source


def _check_type(key: str, value: Any, expected: type, source: str) -> None:
    """Reject TOML values whose type does not match the config field."""
    if expected is bool:
        ok = isinstance(value, bool)
    elif expected is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    elif expected is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, expected)
    if not ok:
        raise ConfigError(
            f"Config key '{key}' in {source} must be {expected.__name__}, "
            f"got {type(value).__name__}"
        )


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# netlist-rebuild configuration file
# Place as .netlist-rebuild.toml in project root or
# ~/.config/netlist-rebuild/config.toml for user defaults

[defaults]
# Enable verbose logging by default
# verbose = false

# Suppress notifications on the console
# quiet = false

# Skip the confirmation prompt before rebuilding
# assume_yes = false

[layout]
# Position of the first component
# origin_x = 20
# origin_y = 20

# Grid pitch: components are 3 cells apart, rows are 2 cells apart
# grid_size = 100

# Components per row before wrapping
# max_per_row = 15

[wires]
# Stub synthesis: immediate (after each component) or grouped (after all)
# strategy = "immediate"

# Length of each labeled stub
# stub_length = 30

# Grouped strategy only: skip nets that touch a single pin
# drop_single_pin_nets = false

[library]
# Result page requested from name search
# search_page = 1

# Memoize lookups by (supplier part, device name) within a run
# cache_lookups = false

# Minimum difflib similarity for catalog name search
# fuzzy_cutoff = 0.6
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
