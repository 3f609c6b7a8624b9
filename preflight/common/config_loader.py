"""
Configuration Loader

Loads the YAML configuration files that describe format profiles
(``formats/*.yaml``) and issue metadata (``issue_meta/*.yaml``).
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml

from .exceptions import ConfigurationError
from .settings import get_settings


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Explicit override from the environment wins
    override = get_settings().config_dir
    if override is not None:
        if override.is_dir():
            return override
        raise FileNotFoundError(f"PREFLIGHT_CONFIG_DIR does not exist: {override}")

    # Shipped alongside the package
    package_config = Path(__file__).parent.parent / 'config'
    if package_config.exists():
        return package_config

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {package_config}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Path of the config file relative to the config directory
            (e.g., 'formats/shopify.yaml')

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {config_path}")
    return data


def list_config_files(subdir: str) -> List[str]:
    """
    List YAML files in a config subdirectory.

    Args:
        subdir: Subdirectory of the config directory (e.g., 'formats')

    Returns:
        Sorted relative paths usable with :func:`load_config`

    Example:
        ['formats/ebay.yaml', 'formats/ebay_variations.yaml', 'formats/shopify.yaml']
    """
    directory = _get_config_dir() / subdir
    if not directory.is_dir():
        return []
    return sorted(
        f"{subdir}/{path.name}"
        for path in directory.iterdir()
        if path.suffix in ('.yaml', '.yml')
    )
