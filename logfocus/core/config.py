"""Configuration loading and parsing for logfocus.

This module provides the ConfigLoader class for reading TOML configuration files
and the Config dataclass for storing configuration values.
"""

import logging
import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

import tomli

from logfocus.core.errors import LogFocusError
from logfocus.utils.git import find_git_root

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "logfocus.toml"
DEFAULT_MAX_FILTERS = 20


def user_config_dir() -> Path:
    """Return the per-user configuration directory (~/.config/logfocus)."""
    return Path(os.path.expanduser("~")) / ".config" / "logfocus"


def default_filters_file() -> Path:
    """Return the default location of the persisted filter list."""
    return user_config_dir() / "filters.json"


class ConfigError(LogFocusError):
    """Exception raised for configuration parsing errors.

    Attributes:
        message: Error description
        line: Line number where error occurred (if available)
        path: Path to the config file (if available)
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        path: Optional[Path] = None
    ):
        self.line = line
        self.path = path

        # Build error message with line number if available
        parts = []
        if path:
            parts.append(f"Error in {path}")
        if line is not None:
            parts.append(f"at line {line}")
        if parts:
            full_message = f"{' '.join(parts)}: {message}"
        else:
            full_message = message

        super().__init__(full_message)


def _check_max_filters(value) -> int:
    # bool is an int subclass; "true" is not a capacity
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"max_filters must be a positive integer, got {value!r}")
    return value


@dataclass(frozen=True)
class FilterConfig:
    """Filter store settings.

    Attributes:
        file: Path of the JSON file filters are exported to and imported from.
        max_filters: Maximum number of filters the store accepts.
    """

    file: Path = field(default_factory=default_filters_file)
    max_filters: int = DEFAULT_MAX_FILTERS

    def __post_init__(self) -> None:
        _check_max_filters(self.max_filters)

    @classmethod
    def from_dict(cls, data: dict) -> "FilterConfig":
        """Create FilterConfig from a dictionary."""
        file_value = data.get("file")
        if file_value is not None and not isinstance(file_value, str):
            raise ConfigError(f"file must be a string, got {file_value!r}")
        return cls(
            file=Path(os.path.expanduser(file_value)) if file_value else default_filters_file(),
            max_filters=_check_max_filters(data.get("max_filters", DEFAULT_MAX_FILTERS)),
        )


@dataclass(frozen=True)
class Config:
    """Complete logfocus configuration.

    Configuration is fixed once loaded; ``with_overrides`` returns a new
    instance rather than modifying this one.

    Attributes:
        filters: Filter store settings
    """

    filters: FilterConfig = field(default_factory=FilterConfig)

    @property
    def filters_file(self) -> Path:
        return self.filters.file

    @property
    def max_filters(self) -> int:
        return self.filters.max_filters

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create Config from a dictionary.

        Args:
            data: Dictionary parsed from TOML file

        Returns:
            Config instance with values from dictionary
        """
        filters = data.get("filters", {})
        if not isinstance(filters, dict):
            raise ConfigError("[filters] must be a table")
        return cls(filters=FilterConfig.from_dict(filters))

    def with_overrides(
        self,
        filters_file: Optional[Path] = None,
        max_filters: Optional[int] = None,
    ) -> "Config":
        """Return a copy with caller-supplied options applied.

        Args:
            filters_file: Replacement path for the filters file.
            max_filters: Replacement filter cap.

        Returns:
            New Config; unspecified options keep their current values.
        """
        changes: dict = {}
        if filters_file is not None:
            changes["file"] = Path(filters_file)
        if max_filters is not None:
            changes["max_filters"] = _check_max_filters(max_filters)
        if not changes:
            return self
        return replace(self, filters=replace(self.filters, **changes))


class ConfigLoader:
    """Loader for logfocus TOML configuration files.

    Configuration files use the following format:

        [filters]
        file = "~/.config/logfocus/filters.json"
        max_filters = 20

    Example usage:
        loader = ConfigLoader()
        config = loader.load(Path("logfocus.toml"))

        # Or load defaults when no file exists
        config = loader.load(None)
    """

    def load(self, path: Optional[Path]) -> Config:
        """Load configuration from a TOML file.

        Args:
            path: Path to the TOML configuration file, or None to use defaults

        Returns:
            Config instance with values from file or defaults

        Raises:
            ConfigError: If the file exists but contains invalid TOML or values
            FileNotFoundError: If the path is specified but file doesn't exist
        """
        if path is None:
            return Config()

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = self._read(path)
        try:
            return Config.from_dict(data)
        except ConfigError as e:
            raise ConfigError(str(e), path=path) from e

    def _read(self, path: Path) -> dict:
        try:
            content = path.read_text(encoding="utf-8")
            return tomli.loads(content)
        except tomli.TOMLDecodeError as e:
            # Extract line number from tomli error message if available
            line = self._extract_line_number(str(e))
            raise ConfigError(str(e), line=line, path=path) from e

    def _extract_line_number(self, error_message: str) -> Optional[int]:
        """Extract line number from tomli error message.

        Args:
            error_message: The error message from tomli

        Returns:
            Line number if found, None otherwise
        """
        # tomli error messages often contain "at line N" or "line N"
        match = re.search(r"(?:at )?line (\d+)", error_message, re.IGNORECASE)
        if match:
            return int(match.group(1))
        return None

    def discover_configs(self, start_path: Optional[Path] = None) -> list[Path]:
        """Discover configuration files in order of precedence.

        Precedence order (lowest to highest):
        1. User config: ~/.config/logfocus/config.toml
        2. Git root: <git_root>/logfocus.toml
        3. Local (start_path): <start_path>/logfocus.toml

        An explicit ``--config`` file and CLI options rank above all of
        these but are handled by the caller.

        Args:
            start_path: Starting directory for local config search. If None,
                uses current working directory.

        Returns:
            List of existing config file paths in precedence order (lowest first).
        """
        if start_path is None:
            start_path = Path.cwd()
        else:
            start_path = Path(start_path).resolve()

        candidates = [user_config_dir() / "config.toml"]
        git_root = find_git_root(start_path)
        if git_root:
            candidates.append(git_root / CONFIG_FILENAME)
        candidates.append(start_path / CONFIG_FILENAME)

        configs: list[Path] = []
        seen: set[Path] = set()
        for candidate in candidates:
            if not candidate.exists():
                continue
            # Git root and start_path are often the same directory
            resolved = candidate.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            configs.append(candidate)

        return configs

    def load_merged(
        self,
        start_path: Optional[Path] = None,
        extra: Optional[Path] = None,
    ) -> Config:
        """Load and merge configuration from all discovered config files.

        Later (higher precedence) files override values from earlier files;
        unspecified values fall through to lower precedence files or defaults.

        Args:
            start_path: Starting directory for config discovery. If None,
                uses current working directory.
            extra: Explicit config file merged last (highest file precedence).

        Returns:
            Config instance with merged values from all sources.

        Raises:
            ConfigError: If any config file contains invalid TOML or values.
            FileNotFoundError: If ``extra`` is given but does not exist.
        """
        config_paths = self.discover_configs(start_path)
        if extra is not None:
            if not extra.exists():
                raise FileNotFoundError(f"Config file not found: {extra}")
            config_paths.append(extra)

        merged_data: dict = {}
        for config_path in config_paths:
            logger.debug("Reading config %s", config_path)
            merged_data = self._deep_merge(merged_data, self._read(config_path))

        return Config.from_dict(merged_data)

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries.

        Values from override take precedence over base. Nested dictionaries
        are merged recursively. Lists and other values are replaced entirely.

        Args:
            base: Base dictionary (lower precedence)
            override: Override dictionary (higher precedence)

        Returns:
            New dictionary with merged values.
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
