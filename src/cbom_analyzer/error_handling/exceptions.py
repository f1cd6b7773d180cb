"""
Custom exceptions for the CBOM analyzer.
"""

from typing import Optional, Dict, Any


class CBOMAnalyzerError(Exception):
    """
    Base exception for all CBOM analyzer errors.

    Every error raised by the analyzer derives from this class so callers
    can catch one type and still get the error code and context.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """
        Initialize CBOM analyzer error.

        Args:
            message: Error message
            error_code: Optional error code for categorization
            context: Additional context information
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None
        }

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [self.message]

        if self.error_code:
            parts.append(f"Code: {self.error_code}")

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"Context: {context_str}")

        if self.cause:
            parts.append(f"Caused by: {self.cause}")

        return " | ".join(parts)


class ParseError(CBOMAnalyzerError):
    """
    Raised when a CBOM document is not syntactically valid JSON.

    The previously loaded document, if any, stays active when this is raised.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        source: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize parse error.

        Args:
            message: Error message
            line: Line of the first syntax error, when known
            column: Column of the first syntax error, when known
            source: Name of the document being parsed (usually a file path)
            **kwargs: Additional arguments for base class
        """
        context = kwargs.get('context', {})
        if line is not None:
            context['line'] = line
        if column is not None:
            context['column'] = column
        if source:
            context['source'] = source

        kwargs['context'] = context
        kwargs.setdefault('error_code', "PARSE_ERROR")
        super().__init__(message, **kwargs)

        self.line = line
        self.column = column
        self.source = source


class DocumentLoadError(CBOMAnalyzerError):
    """Raised when a CBOM file cannot be read from disk."""

    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs):
        context = kwargs.get('context', {})
        if file_path:
            context['file_path'] = file_path

        kwargs['context'] = context
        kwargs.setdefault('error_code', "LOAD_ERROR")
        super().__init__(message, **kwargs)

        self.file_path = file_path


class ConfigurationError(CBOMAnalyzerError):
    """
    Exception for configuration errors.

    Raised when a configuration value is missing or outside the
    accepted set.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs
    ):
        """
        Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that caused the error
            config_value: Invalid configuration value
            **kwargs: Additional arguments for base class
        """
        context = kwargs.get('context', {})
        if config_key:
            context['config_key'] = config_key
        if config_value is not None:
            context['config_value'] = str(config_value)

        kwargs['context'] = context
        kwargs.setdefault('error_code', "CONFIG_ERROR")
        super().__init__(message, **kwargs)

        self.config_key = config_key
        self.config_value = config_value


class ExportError(CBOMAnalyzerError):
    """
    Exception for report export errors.

    Raised when a statistics or graph report cannot be written or the
    requested format is not supported.
    """

    def __init__(
        self,
        message: str,
        export_format: Optional[str] = None,
        output_path: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize export error.

        Args:
            message: Error message
            export_format: Format that failed to export
            output_path: Path where export was attempted
            **kwargs: Additional arguments for base class
        """
        context = kwargs.get('context', {})
        if export_format:
            context['export_format'] = export_format
        if output_path:
            context['output_path'] = output_path

        kwargs['context'] = context
        kwargs.setdefault('error_code', "EXPORT_ERROR")
        super().__init__(message, **kwargs)

        self.export_format = export_format
        self.output_path = output_path
