"""
Configuration Manager
Loads directory settings from defaults, an optional JSON file and the environment
"""

import json
import os
from typing import Dict, Any
from pathlib import Path
from logger import get_logger

logger = get_logger('config_manager')


class ConfigManager:
    """Manages application configuration"""

    DEFAULT_CONFIG = {
        'site_title': 'Miden Ecosystem',
        'catalog_path': '',  # Empty means the built-in catalog
        'host': '0.0.0.0',
        'port': 5000,
        'cors_origins': '*'
    }

    # Environment variable -> (config key, converter)
    ENV_OVERRIDES = {
        'SITE_TITLE': ('site_title', str),
        'CATALOG_PATH': ('catalog_path', str),
        'HOST': ('host', str),
        'PORT': ('port', int),
        'CORS_ORIGINS': ('cors_origins', str)
    }

    def __init__(self, config_path: str = None):
        if config_path is None:
            config_path = os.environ.get('CONFIG_PATH', 'data/config/config.json')
        self.config_path = Path(config_path)
        self.config = self.load()

    def load(self) -> Dict[str, Any]:
        """Load configuration from disk and environment, falling back to defaults"""
        config = self.DEFAULT_CONFIG.copy()

        try:
            if self.config_path.exists():
                with open(self.config_path, 'r') as f:
                    loaded_config = json.load(f)
                if isinstance(loaded_config, dict):
                    # Merge with defaults to ensure all keys exist
                    config.update(loaded_config)
                    logger.info(f"Loaded configuration from {self.config_path}")
                else:
                    logger.warning(f"Ignoring {self.config_path}: expected a JSON object")
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading config from {self.config_path}: {e}")

        for env_name, (key, convert) in self.ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None:
                continue
            try:
                config[key] = convert(value)
            except ValueError:
                logger.warning(f"Ignoring invalid {env_name}={value!r}")

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value"""
        return self.config.get(key, default)

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration"""
        return self.config.copy()
