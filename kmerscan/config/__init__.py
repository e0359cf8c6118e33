"""
KmerScan v0.1.0

Configuration management for KmerScan.

Author: KmerScan Development Team
License: MIT - See LICENSE
"""

from .parser import ConfigParser, ConfigValidationError, load_config
from .schema import (
    CONFIG_TEMPLATES,
    DEFAULT_CONFIG,
    CountingConfig,
    save_config_template,
    validate_config,
)

__all__ = [
    "ConfigParser",
    "ConfigValidationError",
    "load_config",
    "CONFIG_TEMPLATES",
    "DEFAULT_CONFIG",
    "CountingConfig",
    "save_config_template",
    "validate_config",
]
