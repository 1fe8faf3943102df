"""
Configuration management for Good News.
"""
import copy
import os
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_CONFIG = {
    "news": {
        "upstream_url": "https://newsapi.org/v2",
        "page_size": 100,
        "timeout_seconds": 15,
    },
    "transport": {
        "trusted_context": False,
        "always_use_proxy": False,
        "proxy_url": "http://localhost:8080/api/news",
    },
    "sentiment": {
        "scorer": "keyword",
        "positive_threshold": 1.0,
    },
    "proxy": {
        "host": "127.0.0.1",
        "port": 8080,
        "cache_control": "s-maxage=60, stale-while-revalidate=300",
    },
    "geo": {
        "lookup_url": "https://ipapi.co/json/",
        "timeout_seconds": 5,
    },
}


class Config:
    """
    Configuration manager for Good News.
    """
    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the Config.

        Args:
            config_path: Path to a YAML or JSON configuration file
        """
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict:
        """
        Load configuration from file or use defaults.

        Returns:
            Configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_path:
            try:
                path = Path(self.config_path)
                if path.exists():
                    if path.suffix.lower() in ['.yaml', '.yml']:
                        with open(path, 'r') as f:
                            user_config = yaml.safe_load(f) or {}
                    elif path.suffix.lower() == '.json':
                        with open(path, 'r') as f:
                            user_config = json.load(f)
                    else:
                        raise ValueError(f"Unsupported config file format: {path.suffix}")

                    if not isinstance(user_config, dict):
                        raise ValueError(
                            f"Config file must contain a mapping, got {type(user_config).__name__}"
                        )
                    self._update_dict(config, user_config)
                else:
                    logger.warning(f"Config file {self.config_path} not found, using defaults")
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.error(f"Error loading config from {self.config_path}: {e}")
                logger.info("Using default configuration")

        self._override_from_env(config)

        return config

    def _update_dict(self, target: Dict, source: Dict) -> None:
        """
        Recursively update a dictionary.

        Args:
            target: Target dictionary to update
            source: Source dictionary with new values
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _override_from_env(self, config: Dict, prefix: str = 'GOODNEWS_') -> None:
        """
        Override configuration with environment variables.

        Sections are separated by a double underscore so that keys may
        contain single underscores, e.g. GOODNEWS_NEWS__PAGE_SIZE=50.

        Args:
            config: Configuration dictionary to update
            prefix: Prefix for environment variables
        """
        for key, value in os.environ.items():
            if not key.startswith(prefix) or '__' not in key:
                continue
            parts = key[len(prefix):].lower().split('__')

            current = config
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]

            try:
                current[parts[-1]] = json.loads(value)
            except json.JSONDecodeError:
                current[parts[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-separated key path (e.g., 'news.page_size')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        current = self.config
        for part in key.split('.'):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current


@dataclass(frozen=True)
class Settings:
    """
    Immutable settings handed to the news service at construction time.
    """
    api_key: Optional[str] = None
    trusted_context: bool = False
    always_use_proxy: bool = False
    proxy_url: str = DEFAULT_CONFIG["transport"]["proxy_url"]
    upstream_url: str = DEFAULT_CONFIG["news"]["upstream_url"]
    page_size: int = DEFAULT_CONFIG["news"]["page_size"]
    timeout_seconds: float = DEFAULT_CONFIG["news"]["timeout_seconds"]
    scorer: str = DEFAULT_CONFIG["sentiment"]["scorer"]
    positive_threshold: float = DEFAULT_CONFIG["sentiment"]["positive_threshold"]

    @property
    def has_direct_credential(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_config(cls, cfg: "Config") -> "Settings":
        """
        Snapshot a Config into Settings.

        The client credential is read from GOODNEWS_API_KEY; it never lives
        in a config file.
        """
        return cls(
            api_key=os.getenv('GOODNEWS_API_KEY') or None,
            trusted_context=bool(cfg.get('transport.trusted_context', False)),
            always_use_proxy=bool(cfg.get('transport.always_use_proxy', False)),
            proxy_url=str(cfg.get('transport.proxy_url')),
            upstream_url=str(cfg.get('news.upstream_url')).rstrip('/'),
            page_size=int(cfg.get('news.page_size')),
            timeout_seconds=float(cfg.get('news.timeout_seconds')),
            scorer=str(cfg.get('sentiment.scorer')),
            positive_threshold=float(cfg.get('sentiment.positive_threshold')),
        )


# Global configuration instance
config = Config(os.getenv('GOODNEWS_CONFIG_PATH'))


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value.

    Args:
        key: Dot-separated key path (e.g., 'news.page_size')
        default: Default value if key not found

    Returns:
        Configuration value
    """
    return config.get(key, default)
