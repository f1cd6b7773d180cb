"""
Configuration management for the CBOM analyzer.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, asdict
import logging

from ..error_handling import ConfigurationError

logger = logging.getLogger(__name__)

VALID_OUTPUT_FORMATS = ("table", "json", "yaml")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AnalysisConfig:
    """Classification settings."""
    vulnerability_namespace: str = "pqm"

    @property
    def vulnerability_key(self) -> str:
        """Property name that carries the quantum-vulnerability classification."""
        return f"{self.vulnerability_namespace}.vulnerability"


@dataclass
class OutputConfig:
    """Report output settings."""
    format: str = "table"
    directory: str = "./cbom-reports"
    report_basename: str = "cbom-report"
    include_timestamp: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_file_size: int = 10  # MB
    backup_count: int = 5
    structured: bool = False


@dataclass
class AppConfig:
    """Complete application configuration."""
    analysis: AnalysisConfig
    output: OutputConfig
    logging: LoggingConfig

    def to_dict(self) -> Dict[str, Any]:
        return {
            "analysis": asdict(self.analysis),
            "output": asdict(self.output),
            "logging": asdict(self.logging)
        }


class ConfigManager:
    """
    Manages application configuration from multiple sources.

    Configuration is loaded in the following order (later sources override earlier):
    1. Default configuration
    2. Configuration file
    3. Environment variables
    """

    ENV_VAR_MAPPING = {
        "CBOM_VULNERABILITY_NAMESPACE": "analysis.vulnerability_namespace",
        "CBOM_OUTPUT_FORMAT": "output.format",
        "CBOM_OUTPUT_DIR": "output.directory",
        "CBOM_REPORT_BASENAME": "output.report_basename",
        "CBOM_INCLUDE_TIMESTAMP": "output.include_timestamp",
        "LOG_LEVEL": "logging.level",
        "LOG_FILE": "logging.file",
        "LOG_FORMAT": "logging.format",
        "LOG_MAX_SIZE": "logging.max_file_size",
        "LOG_BACKUP_COUNT": "logging.backup_count",
        "LOG_STRUCTURED": "logging.structured",
    }

    # Values that must stay strings even when they look numeric or boolean
    _STRING_PATHS = {
        "analysis.vulnerability_namespace",
        "output.directory",
        "output.report_basename",
        "logging.file",
        "logging.format",
    }

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to a YAML configuration file
        """
        self.config_file = Path(config_file) if config_file else None
        self._config: Optional[AppConfig] = None

    def load_config(self) -> AppConfig:
        """
        Load configuration from all sources.

        Returns:
            Complete application configuration

        Raises:
            ConfigurationError: If a value is invalid
        """
        if self._config is not None:
            return self._config

        config_dict = self._get_default_config()

        if self.config_file and self.config_file.exists():
            file_config = self._load_config_file(self.config_file)
            config_dict = self._merge_configs(config_dict, file_config)

        env_config = self._load_env_config()
        config_dict = self._merge_configs(config_dict, env_config)

        config_dict = self._substitute_env_vars(config_dict)

        self._validate_config(config_dict)

        self._config = self._dict_to_config(config_dict)
        return self._config

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values."""
        return {
            "analysis": asdict(AnalysisConfig()),
            "output": asdict(OutputConfig()),
            "logging": asdict(LoggingConfig())
        }

    def _load_config_file(self, config_path: Path) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to configuration file

        Returns:
            Configuration dictionary
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to load config file {config_path}",
                config_key="config_file",
                config_value=config_path,
                cause=e
            )

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Config file {config_path} must contain a mapping",
                config_key="config_file",
                config_value=config_path
            )

        logger.info(f"Loaded configuration from {config_path}")
        return config

    def _load_env_config(self) -> Dict[str, Any]:
        """
        Load configuration from environment variables.

        Returns:
            Configuration dictionary from environment variables
        """
        env_config: Dict[str, Any] = {}

        for env_var, config_path in self.ENV_VAR_MAPPING.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            if config_path not in self._STRING_PATHS:
                value = self._convert_env_value(value)
            self._set_nested_value(env_config, config_path, value)

        return env_config

    def _convert_env_value(self, value: str) -> Any:
        """
        Convert environment variable string to appropriate type.

        Args:
            value: String value from environment variable

        Returns:
            Converted value
        """
        if value.lower() in ('true', 'yes', 'on'):
            return True
        elif value.lower() in ('false', 'no', 'off'):
            return False

        try:
            return int(value)
        except ValueError:
            return value

    def _set_nested_value(self, config: Dict[str, Any], path: str, value: Any) -> None:
        """
        Set a nested configuration value using dot notation.

        Args:
            config: Configuration dictionary
            path: Dot-separated path (e.g., 'output.format')
            value: Value to set
        """
        keys = path.split('.')
        current = config

        for key in keys[:-1]:
            current = current.setdefault(key, {})

        current[keys[-1]] = value

    def _substitute_env_vars(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Replace ``${VAR}`` string values with the environment value."""
        def substitute_recursive(obj):
            if isinstance(obj, dict):
                return {k: substitute_recursive(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [substitute_recursive(item) for item in obj]
            elif isinstance(obj, str) and obj.startswith('${') and obj.endswith('}'):
                return os.getenv(obj[2:-1], obj)
            return obj

        return substitute_recursive(config)

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge two configuration dictionaries.

        Args:
            base: Base configuration
            override: Override configuration

        Returns:
            Merged configuration
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """
        Validate configuration values.

        Args:
            config: Configuration dictionary

        Raises:
            ConfigurationError: If configuration is invalid
        """
        for section in ("analysis", "output", "logging"):
            if not isinstance(config.get(section, {}), dict):
                raise ConfigurationError(
                    f"Configuration section '{section}' must be a mapping",
                    config_key=section
                )

        output_format = config.get("output", {}).get("format", "table")
        if output_format not in VALID_OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid output format: {output_format}. Valid formats: {', '.join(VALID_OUTPUT_FORMATS)}",
                config_key="output.format",
                config_value=output_format
            )

        log_level = str(config.get("logging", {}).get("level", "WARNING")).upper()
        if log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {log_level}. Valid levels: {', '.join(VALID_LOG_LEVELS)}",
                config_key="logging.level",
                config_value=log_level
            )

        namespace = config.get("analysis", {}).get("vulnerability_namespace")
        if not namespace or not isinstance(namespace, str):
            raise ConfigurationError(
                "Vulnerability namespace must be a non-empty string",
                config_key="analysis.vulnerability_namespace",
                config_value=namespace
            )

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> AppConfig:
        """
        Convert configuration dictionary to AppConfig object.

        Unknown keys raise ConfigurationError rather than TypeError.
        """
        try:
            return AppConfig(
                analysis=AnalysisConfig(**config_dict.get("analysis", {})),
                output=OutputConfig(**config_dict.get("output", {})),
                logging=LoggingConfig(**config_dict.get("logging", {}))
            )
        except TypeError as e:
            raise ConfigurationError("Unknown configuration key", cause=e)

    def get_config(self) -> AppConfig:
        """
        Get the current configuration.

        Returns:
            Application configuration
        """
        if self._config is None:
            return self.load_config()
        return self._config

    def reload_config(self) -> AppConfig:
        """
        Reload configuration from all sources.

        Returns:
            Reloaded application configuration
        """
        self._config = None
        return self.load_config()

    def save_config(self, config_path: Optional[Path] = None) -> None:
        """
        Save current configuration to file.

        Args:
            config_path: Path to save configuration file
        """
        if config_path is None:
            config_path = self.config_file or Path("cbom-analyzer.yaml")

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.get_config().to_dict(), f, default_flow_style=False, indent=2)

        logger.info(f"Configuration saved to {config_path}")


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[Union[str, Path]] = None) -> ConfigManager:
    """
    Get the global configuration manager instance.

    A config file passed after the first call replaces the global instance.

    Args:
        config_file: Path to configuration file

    Returns:
        ConfigManager instance
    """
    global _config_manager
    if _config_manager is None or config_file is not None:
        _config_manager = ConfigManager(config_file)
    return _config_manager


def get_config() -> AppConfig:
    """
    Get the current application configuration.

    Returns:
        Application configuration
    """
    return get_config_manager().get_config()


def reset_config_manager() -> None:
    """Drop the global configuration manager."""
    global _config_manager
    _config_manager = None
