"""
Configuration management with Pydantic validation.

This module provides the strongly-typed settings shared by the splitter,
compiler, walker and the bundled file systems.
"""

import os
import sys
from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from filespec_matcher.core.constants import DIRECTORY_SEPARATORS, MAX_PATH_LENGTH
from filespec_matcher.core.exceptions import ConfigurationError


def _default_case_insensitive() -> bool:
    return sys.platform in ("win32", "darwin")


class MatcherSettings(BaseModel):
    """
    Settings for pattern compilation and directory walking.

    Attributes:
        directory_separator: Separator used when composing paths
        case_insensitive_file_system: Whether result paths differing only
            in case are the same entry
        max_path_length: Longest filespec or directory path accepted
        cache_patterns: Whether compiled patterns are memoized by pattern text

    Example:
        >>> settings = MatcherSettings(directory_separator="\\\\")
        >>> matcher = FileMatcher(settings)
    """

    model_config = ConfigDict(validate_assignment=True)

    directory_separator: str = Field(default=os.sep, description="Path separator for output")
    case_insensitive_file_system: bool = Field(
        default_factory=_default_case_insensitive,
        description="Fold case when de-duplicating results",
    )
    max_path_length: int = Field(
        default=MAX_PATH_LENGTH, ge=1, description="Maximum filespec/path length"
    )
    cache_patterns: bool = Field(default=True, description="Memoize compiled patterns")

    @field_validator("directory_separator")
    @classmethod
    def validate_directory_separator(cls, v: str) -> str:
        """Validate directory separator."""
        if v not in DIRECTORY_SEPARATORS:
            raise ValueError(
                f"directory_separator must be one of: {', '.join(repr(s) for s in DIRECTORY_SEPARATORS)}"
            )
        return v

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "MatcherSettings":
        """
        Load settings from YAML file.

        Args:
            config_path: Path to settings YAML file

        Returns:
            Validated MatcherSettings instance

        Raises:
            ConfigurationError: If the file is missing or invalid

        Example:
            >>> settings = MatcherSettings.from_yaml("filespec.yaml")
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError("Invalid YAML syntax in configuration file", str(e))
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {config_path}", str(e))

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Invalid configuration", "Top level of the settings file must be a mapping"
            )

        try:
            return cls(**data)
        except Exception as e:
            raise ConfigurationError("Invalid configuration", str(e))

    def to_yaml(self, output_path: Union[str, Path]) -> None:
        """
        Save settings to YAML file.

        Args:
            output_path: Path to save settings
        """
        output_path = Path(output_path)
        data = self.model_dump()

        try:
            with open(output_path, "w", encoding="utf-8") as f:
                yaml.dump(data, f, default_flow_style=False, allow_unicode=True)
        except OSError as e:
            raise ConfigurationError(f"Failed to write configuration to {output_path}", str(e))
