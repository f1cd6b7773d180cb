"""
Configuration management for the CBOM analyzer.
"""

from .config_manager import (
    ConfigManager, AppConfig, AnalysisConfig, OutputConfig, LoggingConfig,
    VALID_OUTPUT_FORMATS, get_config_manager, get_config, reset_config_manager
)

__all__ = [
    "ConfigManager",
    "AppConfig",
    "AnalysisConfig",
    "OutputConfig",
    "LoggingConfig",
    "VALID_OUTPUT_FORMATS",
    "get_config_manager",
    "get_config",
    "reset_config_manager"
]
