"""
KmerScan v0.1.0

Configuration schema for KmerScan.

Defines all available configuration parameters with defaults and validation.

Author: KmerScan Development Team
License: MIT - See LICENSE
"""

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from ..counting.kmer_counter import validate_k, validate_threshold
from ..errors import InvalidConfigurationError
from ..io.io_core_module import SUPPORTED_FORMATS


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # K-mer Counting
    # ========================================================================
    'counting': {
        'k': 5,  # K-mer size
        'threshold': 2,  # Minimum occurrences for a k-mer to be reported
    },

    # ========================================================================
    # Input / Output
    # ========================================================================
    'input': {
        'format': 'auto',  # 'auto', 'fasta', 'fastq'
    },
    'output': {
        'path': None,  # None writes the report to stdout
    },

    # ========================================================================
    # Hardware Settings
    # ========================================================================
    'hardware': {
        'workers': 1,  # Worker processes for counting (1 = in-process)
    },

    # ========================================================================
    # Logging
    # ========================================================================
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        'datefmt': '%H:%M:%S',
    },
}

# Overrides applied on top of DEFAULT_CONFIG by `kmerscan config init --template`
CONFIG_TEMPLATES = {
    'default': {},
    'short-read': {
        'counting': {'k': 21, 'threshold': 2},
        'input': {'format': 'fastq'},
    },
    'assembly': {
        'counting': {'k': 31, 'threshold': 3},
        'input': {'format': 'fasta'},
    },
    'protein': {
        'counting': {'k': 3, 'threshold': 1},
        'input': {'format': 'fasta'},
    },
}

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class CountingConfig:
    """
    Validated, immutable settings for one counting run.

    Attributes:
        k: K-mer size (>= 1)
        threshold: Minimum count to report (>= 0)
        workers: Worker processes (>= 1)
        input_format: 'auto', 'fasta' or 'fastq'
    """
    k: int = 5
    threshold: int = 2
    workers: int = 1
    input_format: str = 'auto'

    def __post_init__(self):
        """Reject out-of-range values."""
        validate_k(self.k)
        validate_threshold(self.threshold)
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise InvalidConfigurationError(
                f"workers must be a positive integer, got {self.workers!r}",
                parameter="workers"
            )
        if self.input_format not in SUPPORTED_FORMATS:
            raise InvalidConfigurationError(
                f"input format must be one of {', '.join(SUPPORTED_FORMATS)}, "
                f"got {self.input_format!r}",
                parameter="input.format"
            )

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'CountingConfig':
        """
        Build from a full configuration dictionary.

        Integer settings given as digit strings (e.g. from ``${VAR}``
        substitution) are converted.

        Raises:
            InvalidConfigurationError: If any value is out of range
        """
        counting = config.get('counting', {})
        return cls(
            k=_coerce_int(counting.get('k', 5), 'counting.k'),
            threshold=_coerce_int(counting.get('threshold', 2), 'counting.threshold'),
            workers=_coerce_int(config.get('hardware', {}).get('workers', 1), 'hardware.workers'),
            input_format=config.get('input', {}).get('format', 'auto'),
        )


def _coerce_int(value: Any, name: str) -> Any:
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise InvalidConfigurationError(
                f"{name} must be an integer, got {value!r}", parameter=name
            ) from None
    return value


def default_config() -> Dict[str, Any]:
    """Return a fresh copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Union[str, Path], template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template name (see CONFIG_TEMPLATES)
    """
    if template not in CONFIG_TEMPLATES:
        raise InvalidConfigurationError(
            f"Unknown template '{template}' (choose from {', '.join(CONFIG_TEMPLATES)})",
            parameter="template"
        )

    config = deep_merge(default_config(), CONFIG_TEMPLATES[template])

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    counting = config.get('counting', {})
    for name, value, check in (
        ('counting.k', counting.get('k'), validate_k),
        ('counting.threshold', counting.get('threshold'), validate_threshold),
    ):
        try:
            check(_coerce_int(value, name))
        except InvalidConfigurationError as e:
            errors.append(f"{name}: {e}")

    try:
        workers = _coerce_int(config.get('hardware', {}).get('workers', 1), 'hardware.workers')
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            errors.append(f"hardware.workers: must be a positive integer, got {workers!r}")
    except InvalidConfigurationError as e:
        errors.append(f"hardware.workers: {e}")

    input_format = config.get('input', {}).get('format', 'auto')
    if input_format not in SUPPORTED_FORMATS:
        errors.append(f"Invalid input format: {input_format}")

    level = str(config.get('logging', {}).get('level', 'INFO')).upper()
    if level not in LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    output_path = config.get('output', {}).get('path')
    if output_path and Path(output_path).is_dir():
        errors.append(f"Output path is a directory: {output_path}")

    return errors


def log_level(config: Dict[str, Any]) -> int:
    """Map the configured level name to a logging constant."""
    level = str(config.get('logging', {}).get('level', 'INFO')).upper()
    return getattr(logging, level, logging.INFO)

# KmerScan v0.1.0
# Any usage is subject to this software's license.
