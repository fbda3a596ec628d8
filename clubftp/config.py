"""Engine configuration management."""

import logging
from functools import lru_cache
from pathlib import Path

from .schemas import EngineConfig, ScoringWeights
from .utils import load_json

logger = logging.getLogger('clubftp.config')

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'scoring_config.json'


@lru_cache(maxsize=1)
def get_config() -> EngineConfig:
    """
    Load engine configuration from data/scoring_config.json.

    Configuration is cached after first load. When the file is absent the
    built-in defaults are used; a file that exists but is malformed raises.

    Returns:
        EngineConfig object with validated settings

    Raises:
        json.JSONDecodeError: If the config file is not valid JSON
        ValueError: If config file has invalid structure

    Example:
        from clubftp.config import get_config
        config = get_config()
        print(f"Fetch workers: {config.max_workers}")
    """
    if not CONFIG_PATH.exists():
        logger.info(f'No config at {CONFIG_PATH}, using default weights')
        return EngineConfig()
    return load_json(CONFIG_PATH, schema=EngineConfig)


def get_scoring_weights() -> ScoringWeights:
    """Get the FTP weight table from config."""
    return get_config().weights


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
