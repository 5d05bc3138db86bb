"""
pymemfs Configuration Loader

Configuration management for the in-memory store:
- JSON configuration file loading
- Type checking of loaded values
- Default value handling
- Runtime configuration updates by dot-notation key

Author: YSNRFD
Version: 1.0.0
"""

import json
import threading
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from pymemfs.exceptions import ConfigError


@dataclass
class FilesystemConfig:
    """Store configuration settings."""
    temp_dir: str = "tmp"
    temp_name_length: int = 8
    default_file_mode: int = 0o666
    default_dir_mode: int = 0o777
    first_handle_id: int = 100
    seed_working_directory: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True
    buffer_size: int = 10000


@dataclass
class Config:
    """
    Main configuration container.
    
    Holds all configuration settings for the store.
    """
    filesystem: FilesystemConfig = field(default_factory=FilesystemConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_section(section_cls: type, data: Any, name: str) -> Any:
    """Build one config section, keeping defaults for absent keys."""
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{name}' must be an object", key=name)
    
    section = section_cls()
    for f in fields(section_cls):
        if f.name not in data:
            continue
        value = data[f.name]
        default = getattr(section, f.name)
        # bool is an int subclass; keep the two apart
        if default is not None and value is not None:
            if isinstance(default, bool) != isinstance(value, bool) or \
                    not isinstance(value, type(default)):
                raise ConfigError(
                    f"Invalid type for {name}.{f.name}: "
                    f"expected {type(default).__name__}, got {type(value).__name__}",
                    key=f"{name}.{f.name}"
                )
        setattr(section, f.name, value)
    return section


class ConfigLoader:
    """
    Configuration loader and manager.
    
    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('memfs.json')
        >>> print(config.filesystem.temp_dir)
        tmp
    """
    
    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()
    
    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance
    
    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.
        
        Args:
            config_path: Path to the configuration file
        
        Returns:
            Config object with loaded settings
        
        Raises:
            ConfigError: If the file cannot be read, parsed or validated
        """
        path = Path(config_path)
        
        if not path.exists():
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                config_path=config_path
            )
        
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file: {e}",
                config_path=config_path
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Cannot read configuration file: {e}",
                config_path=config_path
            ) from e
        
        self._config = self.parse(data)
        self._loaded = True
        return self._config
    
    @staticmethod
    def parse(data: Any) -> Config:
        """Parse a decoded JSON document into a Config object."""
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be an object")
        
        config = Config()
        if 'filesystem' in data:
            config.filesystem = _build_section(FilesystemConfig, data['filesystem'], 'filesystem')
        if 'logging' in data:
            config.logging = _build_section(LoggingConfig, data['logging'], 'logging')
        
        if config.filesystem.temp_name_length <= 0:
            raise ConfigError(
                "filesystem.temp_name_length must be positive",
                key="filesystem.temp_name_length"
            )
        if not config.filesystem.temp_dir or '/' in config.filesystem.temp_dir:
            raise ConfigError(
                "filesystem.temp_dir must be a single path segment",
                key="filesystem.temp_dir"
            )
        
        return config
    
    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config
    
    @property
    def loaded(self) -> bool:
        return self._loaded
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.
        
        Args:
            key: Dot-notation key (e.g., 'filesystem.temp_dir')
            default: Default value if key not found
        
        Returns:
            Configuration value or default
        """
        obj: Any = self._config
        
        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default
        
        return obj
    
    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.
        
        Args:
            key: Dot-notation key (e.g., 'filesystem.temp_name_length')
            value: Value to set
        
        Note:
            This modifies configuration at runtime but does not
            persist changes to disk.
        """
        parts = key.split('.')
        obj: Any = self._config
        
        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigError(f"Invalid configuration key: {key}", key=key)
        
        final_key = parts[-1]
        if hasattr(obj, final_key):
            setattr(obj, final_key, value)
        else:
            raise ConfigError(f"Invalid configuration key: {key}", key=key)
    
    def reset(self) -> None:
        """Restore the default configuration."""
        self._config = Config()
        self._loaded = False
    
    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: dataclass_to_dict(v) for k, v in obj.items()}
            return obj
        
        return dataclass_to_dict(self._config)


def get_config() -> Config:
    """
    Get the global configuration instance.
    
    Returns:
        Config object with current settings
    """
    return ConfigLoader().config
