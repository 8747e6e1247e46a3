"""
Configuration management for inky-reader.

Handles loading and managing configuration from YAML files with sensible defaults.
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_PAGE_FILTER = "grayscale(1) contrast(1.2) brightness(1.05)"
DEFAULT_ACTIVATION_DELAY = 1.0


class Config:
    """Configuration manager for inky-reader."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to custom config file. If None, uses default locations.
        """
        self.config_data = self._load_default_config()

        # Load user config if available
        if config_file:
            self._load_config_file(config_file)
        else:
            self._load_user_config()

    def _load_default_config(self) -> Dict[str, Any]:
        """Load default configuration values."""
        return {
            "extractors": {
                "engine": "heuristic",
                "fallback": None,
                "timeout": 30,
                "user_agent": "inky-reader/1.0.0"
            },
            "reader": {
                "activation_delay": DEFAULT_ACTIVATION_DELAY,
                "page_filter": DEFAULT_PAGE_FILTER
            },
            "messages": {
                "enabled": "📝 阅读模式已启用",
                "disabled": "❌ 阅读模式已关闭",
                "extraction_failed": "无法提取文章内容",
                "unavailable": "无法加载阅读模式组件",
                "init_failed": "阅读模式初始化失败"
            },
            "state": {
                "path": "~/.config/inky-reader/state.yml"
            }
        }

    def _load_user_config(self) -> None:
        """Load user configuration from standard locations."""
        possible_paths = [
            Path.home() / ".inky-reader.yml",
            Path.home() / ".inky-reader.yaml",
            Path.home() / ".config" / "inky-reader" / "config.yml",
            Path.home() / ".config" / "inky-reader" / "config.yaml",
            Path("inky-reader.yml"),
            Path("inky-reader.yaml")
        ]

        for config_path in possible_paths:
            if config_path.exists():
                self._load_config_file(str(config_path))
                break

    def _load_config_file(self, config_file: str) -> None:
        """
        Load configuration from a YAML file.

        Args:
            config_file: Path to the configuration file.
        """
        try:
            config_path = Path(config_file).expanduser()
            if config_path.exists():
                with open(config_path, 'r', encoding='utf-8') as f:
                    user_config = yaml.safe_load(f)
                    if user_config:
                        self._merge_config(user_config)
        except (OSError, yaml.YAMLError) as e:
            # Keep defaults on a broken config file
            logger.warning("Could not load config file %s: %s", config_file, e)

    def load_user_config(self, config_file: str) -> None:
        """Merge an explicitly named config file over the current values."""
        self._load_config_file(config_file)

    def _merge_config(self, user_config: Dict[str, Any]) -> None:
        """
        Merge user configuration with defaults.

        Args:
            user_config: User configuration dictionary.
        """
        def deep_merge(default: Dict, user: Dict) -> Dict:
            """Recursively merge user config into default config."""
            result = default.copy()
            for key, value in user.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = deep_merge(result[key], value)
                else:
                    result[key] = value
            return result

        self.config_data = deep_merge(self.config_data, user_config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'reader.activation_delay')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self.config_data

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'extractors.engine')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config_data

        # Navigate to the parent of the target key
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_extractor_config(self) -> Dict[str, Any]:
        """
        Get extractor configuration.

        Returns:
            Dictionary of extractor settings
        """
        return self.get('extractors', {})

    def get_reader_config(self) -> Dict[str, Any]:
        """
        Get reader session configuration.

        Returns:
            Dictionary of reader settings
        """
        return self.get('reader') or {}

    def get_messages(self) -> Dict[str, str]:
        """
        Get the user-facing status messages.

        Returns:
            Dictionary mapping message keys to text
        """
        return self.get('messages', {})

    def expand_path(self, path: str) -> Path:
        """
        Expand a path, handling ~ and relative paths.

        Args:
            path: Path string to expand

        Returns:
            Expanded Path object
        """
        return Path(path).expanduser().resolve()


# Global configuration instance
_config = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
