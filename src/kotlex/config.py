# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Configuration loading and validation for kotlex."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = ".kotlex.yml"

VALID_CHECKS = ("E1", "E2", "E3", "E4")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when configuration validation fails critically."""

    pass


class Config:
    """Configuration for the kotlex analyzer.

    Loads configuration from .kotlex.yml with validation and defaults.
    Problems with the file are logged and never raised.
    """

    DEFAULTS = {
        "max_keyword_distance": 2,
        "min_keyword_length": 3,
        "max_file_size_bytes": 10 * 1024 * 1024,
        "disabled_checks": [],
        "color_output": True,
        "ignore_patterns": [],
        "log_level": "INFO",
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_path: Path to configuration file. If None, uses
                .kotlex.yml in the current directory.
        """
        if config_path is None:
            config_path = Path.cwd() / DEFAULT_CONFIG_FILENAME

        self.config_path = config_path
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load and validate configuration from file."""
        if not self.config_path.exists():
            logger.info(f"Configuration file not found at {self.config_path}, using defaults")
            self._config = self._defaults()
            return

        try:
            with open(self.config_path, encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f)

            if loaded_config is None:
                logger.warning("Configuration file is empty, using defaults")
                self._config = self._defaults()
                return

            if not isinstance(loaded_config, dict):
                logger.warning(
                    f"Configuration file must contain a YAML dictionary, "
                    f"got {type(loaded_config)}, using defaults"
                )
                self._config = self._defaults()
                return

            self._config = self._defaults()
            self._validate_and_merge(loaded_config)

        except yaml.YAMLError as e:
            logger.warning(
                f"Error parsing configuration file {self.config_path}: {e}, using defaults"
            )
            self._config = self._defaults()
        except OSError as e:
            logger.warning(
                f"Unable to read configuration file {self.config_path}: {e}, using defaults"
            )
            self._config = self._defaults()

    def _defaults(self) -> Dict[str, Any]:
        # Copy list values so instances never share them
        return {
            key: list(value) if isinstance(value, list) else value
            for key, value in self.DEFAULTS.items()
        }

    def _validate_and_merge(self, loaded_config: Dict[str, Any]) -> None:
        """Validate loaded configuration and merge with defaults.

        Invalid parameters are logged as warnings and defaults are used.
        """
        for key, value in loaded_config.items():
            if key not in self.DEFAULTS:
                logger.warning(f"Unknown configuration parameter '{key}', ignoring")
                continue

            if not self._validate_parameter(key, value):
                logger.warning(
                    f"Invalid value for '{key}': {value}, using default {self.DEFAULTS[key]}"
                )
                continue

            if key == "log_level":
                value = value.upper()
            self._config[key] = value

    def _validate_parameter(self, key: str, value: Any) -> bool:
        """Validate a configuration parameter.

        Returns:
            True if valid, False if invalid
        """
        expected_type = type(self.DEFAULTS[key])
        # bool is a subclass of int; reject it for numeric settings
        if expected_type is int and isinstance(value, bool):
            return False
        if not isinstance(value, expected_type):
            return False

        if key == "max_keyword_distance":
            return bool(0 <= value <= 10)
        elif key in ("min_keyword_length", "max_file_size_bytes"):
            return bool(value > 0)
        elif key == "disabled_checks":
            return all(isinstance(check, str) and check in VALID_CHECKS for check in value)
        elif key == "ignore_patterns":
            return all(isinstance(pattern, str) for pattern in value)
        elif key == "log_level":
            return value.upper() in VALID_LOG_LEVELS

        return True

    @property
    def max_keyword_distance(self) -> int:
        """Maximum edit distance for a misspelled keyword (E2)."""
        value = self._config["max_keyword_distance"]
        assert isinstance(value, int)
        return value

    @property
    def min_keyword_length(self) -> int:
        """Shortest identifier considered for misspelled keyword checks."""
        value = self._config["min_keyword_length"]
        assert isinstance(value, int)
        return value

    @property
    def max_file_size_bytes(self) -> int:
        """Files larger than this are refused."""
        value = self._config["max_file_size_bytes"]
        assert isinstance(value, int)
        return value

    @property
    def disabled_checks(self) -> List[str]:
        """Diagnostic codes (E1-E4) that are not reported."""
        value = self._config["disabled_checks"]
        assert isinstance(value, list)
        return value

    @property
    def color_output(self) -> bool:
        """Whether reports use colors."""
        value = self._config["color_output"]
        assert isinstance(value, bool)
        return value

    @property
    def ignore_patterns(self) -> List[str]:
        """Glob patterns of files the watcher ignores."""
        value = self._config["ignore_patterns"]
        assert isinstance(value, list)
        return value

    @property
    def log_level(self) -> str:
        """Logging level name."""
        value = self._config["log_level"]
        assert isinstance(value, str)
        return value
