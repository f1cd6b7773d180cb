"""
Error types for the CBOM analyzer.
"""

from .exceptions import (
    CBOMAnalyzerError, ParseError, DocumentLoadError,
    ConfigurationError, ExportError
)

__all__ = [
    "CBOMAnalyzerError",
    "ParseError",
    "DocumentLoadError",
    "ConfigurationError",
    "ExportError"
]
