"""
jsontree Security and Validation System.

This module provides resource limits and the exception hierarchy.
"""

from .exceptions import (
    ErrorContext,
    ErrorKind,
    ErrorReporter,
    ErrorSuggestionEngine,
    JsonTreeError,
    OwnershipError,
    ParseError,
    SecurityError,
    SerializeError,
    ValueTypeError,
)
from .limits import LimitValidator

__all__ = [
    'JsonTreeError', 'ParseError', 'SecurityError', 'ValueTypeError',
    'OwnershipError', 'SerializeError', 'ErrorKind', 'ErrorContext',
    'ErrorReporter', 'ErrorSuggestionEngine', 'LimitValidator',
]
