"""
Configuration loading for the demo runner.

Settings come from a YAML file merged over built-in defaults. Library
modules never read configuration themselves; the runner passes the
relevant values in as arguments.
"""

import copy
import logging
import os
from typing import Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def default_config() -> Dict:
    """Default configuration."""
    return {
        'logging': {
            'level': 'INFO',
            'format': LOG_FORMAT
        },
        'cycle_detection': {
            'directed_strategy': 'three_color'
        },
        'union_find': {
            'path_compression': False,
            'union_by_rank': False
        },
        'dependencies': {
            'method': 'brent'
        },
        'demo': {
            'array': [1, 2, 3, 4, 5],
            'updates': [[1, 3, 10]],
            'queries': [[1, 3], [0, 4]]
        }
    }


def _merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict:
    """
    Load configuration.

    Args:
        config_path: YAML file to read. When omitted, config.yaml in the
            working directory is used if present.

    Returns:
        Configuration dict with every default section filled in
    """
    explicit = config_path is not None
    config_file = config_path if explicit else DEFAULT_CONFIG_PATH

    if not os.path.exists(config_file):
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_file}")
        logger.debug("No config file found, using defaults")
        return default_config()

    with open(config_file, 'r') as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_file} must contain a mapping at top level")

    logger.info(f"Loaded config from {config_file}")
    return _merge(default_config(), loaded)


def configure_logging(config: Dict):
    """Configure the root logger from the 'logging' section."""
    section = config.get('logging', {})
    level = str(section.get('level', 'INFO')).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level '{level}'")

    logging.basicConfig(
        level=level,
        format=section.get('format', LOG_FORMAT)
    )
    logging.getLogger().setLevel(level)
