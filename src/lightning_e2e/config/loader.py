"""
Config Loader - Load and merge configuration from multiple sources.

Priority order (highest to lowest):
1. Explicit overrides passed to load()
2. Flat SF_* environment variables (SF_USERNAME, SF_BASE_URL, ...)
3. Config file (YAML)
4. LIGHTNING_E2E__* environment variables
5. Default values
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml
from dotenv import load_dotenv

from lightning_e2e.config.settings import Settings, deep_merge
from lightning_e2e.exceptions.base import ConfigurationError


# Flat variable name -> (section, key, converter)
LEGACY_ENV_KEYS: Dict[str, Tuple[str, str, type]] = {
    "SF_BASE_URL": ("salesforce", "base_url", str),
    "SF_LOGIN_URL": ("salesforce", "login_url", str),
    "SF_USERNAME": ("salesforce", "username", str),
    "SF_PASSWORD": ("salesforce", "password", str),
    "SF_NAVIGATION_TIMEOUT": ("browser", "navigation_timeout_ms", int),
    "SF_ACTION_TIMEOUT": ("browser", "action_timeout_ms", int),
}


class ConfigLoader:
    """
    Configuration loader that merges settings from multiple sources.
    """
    
    DEFAULT_CONFIG_PATHS = [
        Path("lightning-e2e.yaml"),
        Path("lightning-e2e.yml"),
        Path("config/lightning-e2e.yaml"),
        Path.home() / ".config" / "lightning-e2e" / "config.yaml",
    ]
    
    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the config loader.
        
        Args:
            config_path: Optional explicit path to config file
        """
        self.config_path = Path(config_path) if config_path else None
        self._file_config: Dict[str, Any] = {}
    
    def find_config_file(self) -> Optional[Path]:
        """
        Find the configuration file to load.
        
        Returns:
            Path to config file, or None if not found
            
        Raises:
            ConfigurationError: if an explicit config_path does not exist
        """
        if self.config_path:
            if not self.config_path.exists():
                raise ConfigurationError(f"Config file not found: {self.config_path}")
            return self.config_path
        
        for path in self.DEFAULT_CONFIG_PATHS:
            if path.exists():
                return path
        
        return None
    
    def load_yaml_config(self, path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            config = yaml.safe_load(f)
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return config
    
    @staticmethod
    def legacy_env_config(environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Translate flat SF_* variables into a nested settings dict.
        
        Unset and empty variables are ignored.
        """
        environ = os.environ if environ is None else environ
        config: Dict[str, Any] = {}
        for name, (section, key, convert) in LEGACY_ENV_KEYS.items():
            raw = environ.get(name)
            if not raw:
                continue
            try:
                value = convert(raw)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from e
            config.setdefault(section, {})[key] = value
        return config
    
    def load(
        self,
        env_file: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Settings:
        """
        Load settings from all sources.
        
        Args:
            env_file: Optional path to .env file
            overrides: Optional dictionary of values to override
            
        Returns:
            Complete Settings instance
        """
        # Load .env file
        if env_file:
            load_dotenv(env_file)
        else:
            for env_path in [Path(".env"), Path(".env.local")]:
                if env_path.exists():
                    load_dotenv(env_path)
                    break
        
        config_file = self.find_config_file()
        if config_file:
            self._file_config = self.load_yaml_config(config_file)
        
        merged = deep_merge(dict(self._file_config), self.legacy_env_config())
        if overrides:
            merged = deep_merge(merged, overrides)
        
        # Pydantic fills whatever is still missing from LIGHTNING_E2E__* vars
        return Settings(**merged)


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> Settings:
    """
    Convenience function to load configuration.
    
    Example:
        >>> settings = load_config()
        >>> settings = load_config(config_path="ci.yaml")
        >>> settings = load_config(browser={"headless": False})
    """
    loader = ConfigLoader(config_path)
    return loader.load(env_file=env_file, overrides=overrides if overrides else None)
