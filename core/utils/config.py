"""
Configuration utility functions
"""

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def load_yaml(filepath: str | Path) -> dict[str, Any]:
    """
    Load YAML file and return as dictionary

    An empty file loads as {}.

    Raises:
        FileNotFoundError: If file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If the document is not a mapping

    Example:
        >>> config = load_yaml("config/providers/databases.yaml")
        >>> config["postgres"]["port"]
        5432
    """
    path = Path(filepath)

    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {filepath}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a mapping: {filepath}")

    return data


def load_yaml_safe(filepath: str | Path) -> dict[str, Any]:
    """
    Load YAML file, falling back to {} if it is missing or invalid

    Invalid files are logged; missing files are silently treated as empty.
    """
    try:
        return load_yaml(filepath)
    except FileNotFoundError:
        return {}
    except (yaml.YAMLError, ValueError) as e:
        logger.warning(f"Ignoring invalid config {filepath}: {e}")
        return {}
