"""Recorder configuration loaded from YAML.

Example ``config/config.yaml``::

    recorder:
      output_dir: data/records
      allow_empty: false
      log_level: INFO
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .constants import (
    DEFAULT_OUTPUT_DIR, DEFAULT_ALLOW_EMPTY,
    DEFAULT_LOG_LEVEL, VALID_LOG_LEVELS
)
from .exceptions import ConfigurationError


@dataclass
class RecorderConfig:
    """
    Settings of a BacktestRecorder.

    Attributes:
        output_dir: Directory export() writes to when called without one
        allow_empty: Accept an engine with zero instruments
        log_level: Level passed to setup_logger()
    """
    output_dir: str = DEFAULT_OUTPUT_DIR
    allow_empty: bool = DEFAULT_ALLOW_EMPTY
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        """Validate field types and log level."""
        if not isinstance(self.output_dir, (str, Path)) or not str(self.output_dir):
            raise ConfigurationError(
                "recorder.output_dir must be a non-empty path",
                output_dir=self.output_dir
            )
        if not isinstance(self.allow_empty, bool):
            raise ConfigurationError(
                "recorder.allow_empty must be a boolean",
                allow_empty=self.allow_empty
            )
        level = str(self.log_level).upper()
        if level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level: {self.log_level}",
                valid=', '.join(VALID_LOG_LEVELS)
            )
        self.log_level = level

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]]) -> "RecorderConfig":
        """
        Build config from a parsed configuration dict.

        Args:
            config: Full configuration; only the ``recorder`` section is read

        Returns:
            RecorderConfig with defaults for missing keys
        """
        section = (config or {}).get('recorder') or {}
        if not isinstance(section, dict):
            raise ConfigurationError("recorder section must be a mapping")

        unknown = set(section) - {'output_dir', 'allow_empty', 'log_level'}
        if unknown:
            raise ConfigurationError(
                "Unknown recorder settings",
                keys=', '.join(sorted(unknown))
            )

        return cls(
            output_dir=section.get('output_dir', DEFAULT_OUTPUT_DIR),
            allow_empty=section.get('allow_empty', DEFAULT_ALLOW_EMPTY),
            log_level=section.get('log_level', DEFAULT_LOG_LEVEL),
        )


def load_config(config_file: Union[str, Path] = "config/config.yaml") -> RecorderConfig:
    """
    Load recorder configuration from a YAML file.

    Args:
        config_file: Path to configuration file

    Returns:
        RecorderConfig

    Raises:
        ConfigurationError: If the file is missing or not valid YAML
    """
    path = Path(config_file)
    if not path.exists():
        raise ConfigurationError("Config file not found", path=path)

    try:
        with open(path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Config file is not valid YAML: {e}", path=path) from e

    if config is not None and not isinstance(config, dict):
        raise ConfigurationError("Config file must contain a mapping", path=path)

    return RecorderConfig.from_dict(config)
