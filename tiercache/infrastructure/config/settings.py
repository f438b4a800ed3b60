"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a YAML
configuration file (``~/.tiercache/config.yaml`` by default).

Example config.yaml::

    logging:
      level: INFO
    cache:
      promotion: admit
      levels:
        - {capacity: 3, policy: LRU}
        - {capacity: 2, policy: LFU}
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from tiercache.domain.exceptions import ConfigurationError, InvalidPolicyError
from tiercache.domain.models.common import LevelSpec, PolicyKind, PromotionMode, parse_integer

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".tiercache"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "TIERCACHE_"

# Default chain: a small LRU tier in front of an LFU tier
DEFAULT_LEVELS: List[Dict[str, Any]] = [
    {"capacity": 3, "policy": "LRU"},
    {"capacity": 2, "policy": "LFU"},
]
DEFAULT_PROMOTION = PromotionMode.ADMIT.value

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False

_MISSING = object()


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables (``TIERCACHE_`` prefix)
    2. .env file
    3. YAML configuration file
    4. Default values passed to get_config

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. Load from YAML file (Lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(yaml_config)
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a mapping.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (Medium priority)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: real environment variables take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug(".env file not found at or above current directory.")

    # 3. Environment Variables (Highest priority) are handled in get_config

    _loaded = True
    logger.debug("Configuration loading process completed.")


def reset_configuration() -> None:
    """Forgets loaded configuration so the next load_configuration reads files again."""
    global _config, _loaded
    _config = {}
    _loaded = False


def _lookup(source: Dict[str, Any], key: str) -> Any:
    """Resolves a dotted key against flat and nested mappings."""
    if key in source:
        return source[key]
    node: Any = source
    for part in key.split('.'):
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _coerce_env_value(value: str) -> Any:
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        return float(value) if '.' in value else int(value)
    except ValueError:
        return value


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dotted key.

    Priority:
    1. Test configuration (if set)
    2. Environment variable, e.g. 'cache.promotion' -> TIERCACHE_CACHE_PROMOTION
    3. YAML config / values stored with set_config
    4. Default value

    Args:
        key: The configuration key
        default: Default value if the key is not found

    Returns:
        The configuration value
    """
    value = _lookup(_test_config, key)
    if value is not _MISSING:
        return value

    env_key = ENV_PREFIX + key.upper().replace('.', '_')
    if env_key in os.environ:
        return _coerce_env_value(os.environ[env_key])

    value = _lookup(_config, key)
    if value is not _MISSING:
        return value

    logger.debug(f"Config key '{key}' not found. Returning default: {default}")
    return default


def set_config(key: str, value: Any) -> None:
    """Sets a configuration value for the rest of the process.

    Args:
        key: Configuration key (e.g., 'logging.level')
        value: Value to set
    """
    logger.debug(f"Setting config: {key} = {value}")
    _config[key] = value


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


# --- Convenience Functions ---

def parse_level_spec(item: Any) -> LevelSpec:
    """Builds a LevelSpec from ``{capacity, policy}`` or a ``"3:LRU"`` string.

    Raises:
        ConfigurationError: If the item cannot be interpreted.
    """
    if isinstance(item, dict):
        capacity, policy = item.get('capacity'), item.get('policy')
    elif isinstance(item, str) and ':' in item:
        capacity, _, policy = item.partition(':')
    else:
        raise ConfigurationError(f"Invalid cache level specification: {item!r}")

    try:
        capacity = parse_integer(capacity)
    except ValueError:
        raise ConfigurationError(f"Invalid capacity in cache level specification: {item!r}") from None
    if capacity < 1:
        raise ConfigurationError(f"Cache level capacity must be positive: {item!r}")

    try:
        kind = PolicyKind.parse(policy)
    except InvalidPolicyError as e:
        raise ConfigurationError(f"Invalid policy in cache level specification {item!r}: {e}") from e
    return LevelSpec(capacity=capacity, policy=kind)


def get_level_specs() -> List[LevelSpec]:
    """Gets the configured level chain, fastest level first.

    Accepts a YAML list of mappings/strings or a comma separated string
    such as ``"3:LRU,2:LFU"`` (the form used in environment variables).
    """
    raw = get_config('cache.levels', DEFAULT_LEVELS)
    if isinstance(raw, str):
        raw = [part.strip() for part in raw.split(',') if part.strip()]
    if not isinstance(raw, list):
        raise ConfigurationError(f"cache.levels must be a list, got {type(raw).__name__}")
    return [parse_level_spec(item) for item in raw]


def get_promotion_mode() -> PromotionMode:
    """Gets how read hits are promoted into faster levels."""
    return PromotionMode.parse(get_config('cache.promotion', DEFAULT_PROMOTION))


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
