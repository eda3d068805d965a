"""
Error types for TOON encoding.

Encoding is total over any input value; the only caller-visible failures are
configuration errors, raised before any output is produced.
"""

from typing import Any


class ToonError(Exception):
    """Base exception for all toonfmt errors."""
    pass


class ConfigurationError(ToonError, ValueError):
    """Raised when encode options are invalid."""

    def __init__(self, option: str, value: Any, reason: str):
        self.option = option
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid option {option}={value!r}: {reason}")
