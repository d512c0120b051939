"""
Configuration Module for the Relayhub Uploader.

This module provides centralized configuration management using YAML files.
Endpoint, token, document toggles and ID numbering are all controlled
through configuration, not hard-coded.

Values from ``settings.yaml`` can be overridden by environment variables
(optionally loaded from a ``.env`` file):

    RELAYHUB_TOKEN        -> api.token
    RELAYHUB_BASE_URL     -> api.base_url
    RELAYHUB_START_INDEX  -> id_allocator.start_index
"""

import os
import yaml
from dotenv import load_dotenv
from pathlib import Path
from typing import Any, Dict, Optional


# Environment variable -> (config key, converter)
ENV_OVERRIDES = {
    "RELAYHUB_TOKEN": ("api.token", str),
    "RELAYHUB_BASE_URL": ("api.base_url", str),
    "RELAYHUB_START_INDEX": ("id_allocator.start_index", int),
}


class ConfigurationManager:
    """
    Centralized configuration management for the uploader.
    
    This class handles loading, validating, and providing access to all
    configuration parameters defined in settings.yaml.
    
    Attributes:
        config_path (Path): Path to the configuration file.
        config (Dict): Loaded configuration dictionary.
    
    Example:
        >>> config = ConfigurationManager()
        >>> base_url = config.get("api.base_url")
        >>> start = config.get("id_allocator.start_index")
    """
    
    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}
    
    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        """
        Singleton pattern to ensure only one configuration instance exists.
        
        Args:
            config_path: Optional path to configuration file.
            
        Returns:
            ConfigurationManager instance.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance
    
    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize the configuration manager.
        
        Args:
            config_path: Optional path to configuration file.
                        Defaults to config/settings.yaml.
        """
        if self._initialized:
            return
            
        if config_path is None:
            self.config_path = Path(__file__).parent / "settings.yaml"
        else:
            self.config_path = Path(config_path)
        
        self._load_config()
        self._initialized = True
    
    def _load_config(self) -> None:
        """
        Load configuration from YAML file and apply environment overrides.
        
        Raises:
            FileNotFoundError: If configuration file doesn't exist.
            yaml.YAMLError: If configuration file is invalid.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}"
            )
        
        with open(self.config_path, 'r', encoding='utf-8') as f:
            self._config = yaml.safe_load(f) or {}
        
        self._resolve_paths()
        self._apply_env_overrides()
    
    def _resolve_paths(self) -> None:
        """
        Resolve relative paths in configuration to absolute paths.
        Uses project root as base directory.
        """
        project_root = Path(__file__).parent.parent
        
        if 'paths' in self._config:
            for key, value in self._config['paths'].items():
                if value and not Path(value).is_absolute():
                    self._config['paths'][key] = str(project_root / value)
    
    def _apply_env_overrides(self) -> None:
        """Override configuration values from the environment (and .env)."""
        load_dotenv()
        
        for env_name, (key, converter) in ENV_OVERRIDES.items():
            raw = os.getenv(env_name)
            if raw is None or raw == "":
                continue
            try:
                self.set(key, converter(raw))
            except ValueError as e:
                raise ValueError(
                    f"Invalid value for {env_name}: {raw!r}"
                ) from e
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.
        
        Args:
            key: Configuration key in dot notation (e.g., "api.base_url").
            default: Default value if key doesn't exist.
            
        Returns:
            Configuration value or default.
            
        Example:
            >>> config.get("api.init_path")
            "/api/v1-0/job-orders/init"
            >>> config.get("nonexistent.key", "default_value")
            "default_value"
        """
        keys = key.split('.')
        value = self._config
        
        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default
    
    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value using dot notation.
        
        Intermediate sections are created when missing. Used for
        environment and command-line overrides.
        
        Args:
            key: Configuration key in dot notation.
            value: New value.
        """
        keys = key.split('.')
        section = self._config
        for k in keys[:-1]:
            if not isinstance(section.get(k), dict):
                section[k] = {}
            section = section[k]
        section[keys[-1]] = value
    
    @classmethod
    def reset(cls) -> None:
        """
        Reset the singleton instance.
        Useful for testing or configuration changes.
        """
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Convenience function to get configuration values.
    
    Args:
        key: Configuration key in dot notation.
        default: Default value if key doesn't exist.
        
    Returns:
        Configuration value or default.
    """
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config']
