"""
System failure error classifications.

These exceptions represent problems with how the pipeline was invoked or
configured, or with writing its output, rather than with the price data.
"""

from typing import Optional, Dict, Any, Sequence


class SystemFailureError(Exception):
    """Base class for invocation, configuration and output failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class UnsupportedFormatError(SystemFailureError):
    """Unknown vendor format code or unknown time frame name."""

    def __init__(self, message: str, value: Any = None,
                 choices: Optional[Sequence[Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.value = value
        self.choices = list(choices) if choices is not None else []


class ConfigurationError(SystemFailureError):
    """Configuration values failed validation."""

    def __init__(self, message: str, field: Optional[str] = None,
                 errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.errors = errors or []


class PersistenceError(SystemFailureError):
    """Output file or directory could not be written."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
