"""Configuration loading for codewhiskers.

Reads settings *only* from pyproject.toml under the [tool.codewhiskers]
section. The raw ``Config`` object assumes no defaults; the typed views
(``ComplexityThresholds``, ``ProfilerSettings``) supply them and validate
whatever the project overrides.

codewhiskers/src/codewhiskers/config.py
"""

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from .errors import ConfigurationError
from .filesystem import walk_up_for_config

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

__all__ = [
    "Config",
    "load_config",
    "ComplexityThresholds",
    "ProfilerSettings",
    "get_complexity_thresholds",
    "get_profiler_settings",
]

DEFAULT_LOW_MAX = 3.0
DEFAULT_MEDIUM_MAX = 7.0

DEFAULT_IGNORE_DIRS = ("node_modules", "dist", "build", ".git", ".vscode")


class Config:
    """Holds the codewhiskers configuration loaded from pyproject.toml.

    Attributes:
    project_root: The directory containing the pyproject.toml that was read,
    or None if none was found.
    settings: A read-only view of the [tool.codewhiskers] table. Empty if
    the file or section is missing or invalid.
    """

    def __init__(self, project_root: Optional[Path], config_dict: dict[str, Any]):
        self._project_root = project_root
        self._config_dict = config_dict.copy()

    @property
    def project_root(self) -> Optional[Path]:
        return self._project_root

    @property
    def settings(self) -> Mapping[str, Union[str, bool, int, float, list, dict]]:
        return self._config_dict

    def get(self, key: str, default: Any = None) -> Any:
        """Gets a value from the loaded settings, returning default if not found."""
        return self._config_dict.get(key, default)

    def section(self, key: str) -> dict[str, Any]:
        """Return a nested table, or an empty dict if it is missing or not a table."""
        value = self._config_dict.get(key, {})
        if not isinstance(value, dict):
            logger.warning(
                f"Configuration key '{key}' in [tool.codewhiskers] is not a table. Ignoring it."
            )
            return {}
        return value

    def __getitem__(self, key: str) -> Any:
        if key not in self._config_dict:
            raise KeyError(
                f"Required configuration key '{key}' not found in "
                f"[tool.codewhiskers] section of pyproject.toml."
            )
        return self._config_dict[key]

    def __contains__(self, key: str) -> bool:
        return key in self._config_dict

    def is_present(self) -> bool:
        """Checks if a project root was found and some settings were loaded."""
        return self._project_root is not None and bool(self._config_dict)


def load_config(start_path: Path) -> Config:
    """Loads codewhiskers configuration from the nearest pyproject.toml.

    Args:
    start_path: The directory to start searching upwards for pyproject.toml.

    Returns:
    A Config object; empty when no usable [tool.codewhiskers] table exists.
    """
    project_root = walk_up_for_config(start_path)
    if not project_root:
        logger.debug(f"No pyproject.toml found searching from '{start_path}'")
        return Config(project_root=None, config_dict={})

    pyproject_path = project_root / "pyproject.toml"
    loaded_settings: dict[str, Any] = {}

    try:
        with open(pyproject_path, "rb") as f:
            full_toml_config = tomllib.load(f)
        logger.debug(f"Parsed {pyproject_path}")

        tool_section = full_toml_config.get("tool")
        if not isinstance(tool_section, dict):
            logger.debug("pyproject.toml has no [tool] section")
            section = {}
        else:
            section = tool_section.get("codewhiskers", {})

        if isinstance(section, dict):
            loaded_settings = section
            if loaded_settings:
                logger.debug(f"Loaded [tool.codewhiskers] settings from {pyproject_path}")
        else:
            logger.warning(
                f"[tool.codewhiskers] section in {pyproject_path} is not a valid table. "
                "Ignoring this section."
            )

    except tomllib.TOMLDecodeError as e:
        logger.error(f"Error parsing {pyproject_path}: {e}. Using empty configuration.")
    except OSError as e:
        logger.error(f"Error reading {pyproject_path}: {e}. Using empty configuration.")

    return Config(project_root=project_root, config_dict=loaded_settings)


@dataclass(frozen=True)
class ComplexityThresholds:
    """Bucket boundaries shared by the structure and body scorers.

    ``score <= low_max`` is low, ``score <= medium_max`` is medium, anything
    above is high.
    """

    low_max: float = DEFAULT_LOW_MAX
    medium_max: float = DEFAULT_MEDIUM_MAX

    def __post_init__(self):
        if self.low_max < 0:
            raise ConfigurationError("complexity low_max must be non-negative")
        if not self.low_max < self.medium_max:
            raise ConfigurationError(
                f"complexity low_max ({self.low_max}) must be below medium_max ({self.medium_max})"
            )


@dataclass(frozen=True)
class ProfilerSettings:
    """Thresholds used when turning workspace tallies into a profile."""

    long_function_lines: int = 30
    strength_min_files: int = 3
    strength_cluster_threshold: int = 5
    comment_ratio_good: float = 0.1
    comment_ratio_min: float = 0.05
    long_function_limit: int = 2
    nested_callback_limit: int = 3
    debug_logging_limit: int = 5
    advanced_score: float = 20
    intermediate_score: float = 5
    ignore_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_DIRS))

    def __post_init__(self):
        if self.long_function_lines <= 0:
            raise ConfigurationError("long_function_lines must be positive")
        if not self.comment_ratio_min <= self.comment_ratio_good:
            raise ConfigurationError("comment_ratio_min must not exceed comment_ratio_good")
        if not self.intermediate_score < self.advanced_score:
            raise ConfigurationError("intermediate_score must be below advanced_score")


def _get_env_float(key: str) -> Optional[float]:
    """Get float value from environment variable."""
    value = os.getenv(key)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Ignoring non-numeric value for {key}: {value!r}")
            return None
    return None


def _first_set(*values: Optional[Any]) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def get_complexity_thresholds(config: Optional[Config] = None) -> ComplexityThresholds:
    """Typed complexity thresholds from [tool.codewhiskers.complexity].

    Environment variables ``CODEWHISKERS_COMPLEXITY_LOW_MAX`` and
    ``CODEWHISKERS_COMPLEXITY_MEDIUM_MAX`` take precedence over the file.
    """
    table = config.section("complexity") if config is not None else {}
    try:
        return ComplexityThresholds(
            low_max=float(
                _first_set(
                    _get_env_float("CODEWHISKERS_COMPLEXITY_LOW_MAX"),
                    table.get("low_max"),
                    DEFAULT_LOW_MAX,
                )
            ),
            medium_max=float(
                _first_set(
                    _get_env_float("CODEWHISKERS_COMPLEXITY_MEDIUM_MAX"),
                    table.get("medium_max"),
                    DEFAULT_MEDIUM_MAX,
                )
            ),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid [tool.codewhiskers.complexity] value: {e}") from e


def get_profiler_settings(config: Optional[Config] = None) -> ProfilerSettings:
    """Typed profiler settings from [tool.codewhiskers.profile]."""
    table = config.section("profile") if config is not None else {}
    known = {name for name in ProfilerSettings.__dataclass_fields__}
    unknown = sorted(set(table) - known)
    if unknown:
        logger.warning(f"Unknown keys in [tool.codewhiskers.profile]: {', '.join(unknown)}")

    kwargs = {key: value for key, value in table.items() if key in known}
    if "ignore_dirs" in kwargs:
        extra = kwargs["ignore_dirs"]
        if not isinstance(extra, list) or not all(isinstance(item, str) for item in extra):
            raise ConfigurationError("[tool.codewhiskers.profile] ignore_dirs must be a list of strings")
        kwargs["ignore_dirs"] = list(DEFAULT_IGNORE_DIRS) + [d for d in extra if d not in DEFAULT_IGNORE_DIRS]

    try:
        return ProfilerSettings(**kwargs)
    except TypeError as e:
        raise ConfigurationError(f"Invalid [tool.codewhiskers.profile] value: {e}") from e
