#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KmerScan v0.1.0

Configuration parser: layers a YAML file and command-line values over the
built-in defaults.

Precedence, lowest first: DEFAULT_CONFIG, the YAML file, CLI overrides.
String values in the file may reference the environment as ``${VAR}`` or
``${VAR:-fallback}``.

Author: KmerScan Development Team
License: MIT - See LICENSE
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..errors import InvalidConfigurationError
from .schema import CountingConfig, deep_merge, default_config, validate_config

logger = logging.getLogger(__name__)

ENV_VAR_PATTERN = re.compile(r'\$\{([^}:]+)(?::-(.*?))?\}')


class ConfigValidationError(InvalidConfigurationError):
    """Raised when a configuration file cannot be loaded or fails validation."""
    pass


def _expand_env(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    if isinstance(value, str):
        return ENV_VAR_PATTERN.sub(
            lambda m: os.environ.get(m.group(1), m.group(2) or ''), value
        )
    return value


class ConfigParser:
    """
    Configuration for one KmerScan run.

    Values are read with dotted keys, e.g. ``parser.get('counting.k')``.
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        self.config_file = Path(config_file) if config_file else None
        self._config: Dict[str, Any] = default_config()

        if self.config_file:
            self._load_user_config()

    def _load_user_config(self):
        """Merge the YAML file over the defaults."""
        if not self.config_file.exists():
            raise ConfigValidationError(
                f"Configuration file not found: {self.config_file}"
            )

        try:
            with open(self.config_file, 'r') as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML in config file {self.config_file}: {e}"
            ) from e

        if user_config is None:
            logger.debug(f"Configuration file is empty: {self.config_file}")
            return

        if not isinstance(user_config, dict):
            raise ConfigValidationError(
                f"Config file {self.config_file} must contain a mapping, "
                f"got {type(user_config).__name__}"
            )

        # sections such as 'counting' must stay mappings
        for section, value in user_config.items():
            if isinstance(self._config.get(section), dict) and not isinstance(value, dict):
                raise ConfigValidationError(
                    f"Section '{section}' in {self.config_file} must be a mapping, "
                    f"got {type(value).__name__}"
                )

        self._config = _expand_env(deep_merge(self._config, user_config))
        logger.debug(f"Loaded configuration from {self.config_file}")

    def merge_cli_overrides(self, overrides: Dict[str, Any]):
        """
        Apply command-line values given under dotted keys.

        A value of None means the option was not given and is skipped.
        """
        for dotted_key, value in overrides.items():
            if value is None:
                continue

            *path, leaf = dotted_key.split('.')
            section = self._config
            for name in path:
                if not isinstance(section.get(name), dict):
                    section[name] = {}
                section = section[name]
            section[leaf] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key, returning default when any part is missing."""
        node = self._config
        for name in key.split('.'):
            if not isinstance(node, dict) or name not in node:
                return default
            node = node[name]
        return node

    def to_dict(self) -> Dict[str, Any]:
        return self._config.copy()

    def validate(self) -> bool:
        """
        Raises:
            ConfigValidationError: With every problem found, joined by '; '
        """
        errors = validate_config(self._config)
        if errors:
            raise ConfigValidationError("; ".join(errors))
        return True

    def counting_config(self) -> CountingConfig:
        """Validate, then freeze the settings used by a counting run."""
        self.validate()
        return CountingConfig.from_dict(self._config)

    def __repr__(self) -> str:
        return f"ConfigParser(config_file={self.config_file})"


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Load configuration from file, merged with defaults and CLI overrides.

    Args:
        config_path: Path to YAML configuration file (None = defaults only)
        overrides: Dotted-key overrides (e.g., {'counting.k': 7})

    Returns:
        Configuration dictionary
    """
    parser = ConfigParser(config_path)
    if overrides:
        parser.merge_cli_overrides(overrides)
    return parser.to_dict()

# KmerScan v0.1.0
# Any usage is subject to this software's license.
