"""
GapWeaver v0.1.0

Configuration schema for GapWeaver.

Defines all available configuration parameters with defaults and validation.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Barcode / contig end filters
    # ========================================================================
    'thresholds': {
        'min_mult': 2,  # Minimum barcode multiplicity (contig ends per barcode)
        'max_mult': 500,  # Maximum barcode multiplicity
        'min_reads': 5,  # Minimum read pairs per barcode/contig end
        'end_length': 30000,  # Head/tail region length (bp)
        'dist_bin_size': 0.05,  # Jaccard half-window for distance estimation
    },

    # ========================================================================
    # Distance Estimation
    # ========================================================================
    'estimation': {
        'enabled': True,
        'small_window_warning': 3,  # Warn about estimates from fewer samples
    },

    # ========================================================================
    # Runtime
    # ========================================================================
    'runtime': {
        'threads': 2,  # >1 runs calibration and pair scans concurrently
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'prefix': 'gapweaver',
        'write_dist_samples': True,
        'logging': {
            'level': 'INFO',
            'log_file': 'gapweaver.log',
        },
    },
}

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (optional)

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in config file {config_path}: {e}")

        if user_config:
            if not isinstance(user_config, dict):
                raise ConfigValidationError(
                    f"Config file {config_path} must contain a mapping at the top level"
                )
            # Deep merge user config into defaults
            config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
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
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply dotted-key overrides (e.g. 'thresholds.min_reads'), skipping None values.

    Returns:
        New configuration dictionary
    """
    result = copy.deepcopy(config)

    for key, value in overrides.items():
        if value is None:
            continue
        keys = key.split('.')
        target = result
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'sensitive', 'fragmented')
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'sensitive':
        config['thresholds']['min_mult'] = 1
        config['thresholds']['min_reads'] = 2

    elif template == 'fragmented':
        config['thresholds']['end_length'] = 5000
        config['thresholds']['dist_bin_size'] = 0.1

    elif template != 'default':
        raise ValueError(f"Unknown configuration template: {template}")

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

    thresholds = config.get('thresholds', {})
    for name in ('min_mult', 'max_mult', 'min_reads', 'end_length'):
        value = thresholds.get(name)
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            errors.append(f"thresholds.{name} must be a non-negative integer, got {value!r}")

    min_mult = thresholds.get('min_mult')
    max_mult = thresholds.get('max_mult')
    if isinstance(min_mult, int) and isinstance(max_mult, int) and min_mult > max_mult:
        errors.append(f"thresholds.min_mult ({min_mult}) exceeds thresholds.max_mult ({max_mult})")

    bin_size = thresholds.get('dist_bin_size')
    if not isinstance(bin_size, (int, float)) or isinstance(bin_size, bool) or not 0 <= bin_size <= 1:
        errors.append(f"thresholds.dist_bin_size must be in [0, 1], got {bin_size!r}")

    small_window = config.get('estimation', {}).get('small_window_warning', 0)
    if not isinstance(small_window, int) or small_window < 0:
        errors.append(f"estimation.small_window_warning must be a non-negative integer, got {small_window!r}")

    threads = config.get('runtime', {}).get('threads', 1)
    if not isinstance(threads, int) or threads < 1:
        errors.append(f"runtime.threads must be a positive integer, got {threads!r}")

    level = config.get('output', {}).get('logging', {}).get('level', 'INFO')
    if level not in VALID_LOG_LEVELS:
        errors.append(f"Invalid log level: {level}")

    return errors

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
