"""
Configuration and limits for jsontree parsing and serialization.

This module defines the resource ceilings that bound a parse and the options
that select how a tree is rendered back to text.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

DEFAULT_MAX_INPUT_SIZE = 64 * 1024 * 1024
DEFAULT_MAX_STRING_LENGTH = 2 * 1024 * 1024 - 1  # UTF-8 bytes
DEFAULT_MAX_NUMBER_LENGTH = 63
DEFAULT_MAX_NESTING_DEPTH = 128


@dataclass
class SizeLimits:
    """Input and content size limits."""
    max_input_size: int = DEFAULT_MAX_INPUT_SIZE
    max_string_length: int = DEFAULT_MAX_STRING_LENGTH
    max_number_length: int = DEFAULT_MAX_NUMBER_LENGTH


@dataclass
class StructureLimits:
    """JSON structure complexity limits."""
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH


@dataclass
class ParseLimits:
    """Ceilings that bound memory and stack use for a single parse."""

    size_limits: Optional[SizeLimits] = None
    structure_limits: Optional[StructureLimits] = None

    def __init__(
        self,
        *,
        size_limits: Optional[SizeLimits] = None,
        structure_limits: Optional[StructureLimits] = None,
        **flat_args: Any,
    ):
        unknown = set(flat_args) - {
            "max_input_size", "max_string_length",
            "max_number_length", "max_nesting_depth",
        }
        if unknown:
            raise TypeError(f"Unknown limit(s): {', '.join(sorted(unknown))}")

        if size_limits is not None:
            self.size_limits = size_limits
        else:
            self.size_limits = SizeLimits(
                max_input_size=flat_args.get("max_input_size", DEFAULT_MAX_INPUT_SIZE),
                max_string_length=flat_args.get(
                    "max_string_length", DEFAULT_MAX_STRING_LENGTH
                ),
                max_number_length=flat_args.get(
                    "max_number_length", DEFAULT_MAX_NUMBER_LENGTH
                ),
            )

        if structure_limits is not None:
            self.structure_limits = structure_limits
        else:
            self.structure_limits = StructureLimits(
                max_nesting_depth=flat_args.get(
                    "max_nesting_depth", DEFAULT_MAX_NESTING_DEPTH
                ),
            )

        for name in (
            "max_input_size", "max_string_length",
            "max_number_length", "max_nesting_depth",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    @property
    def max_input_size(self) -> int:
        """Maximum input size in characters."""
        assert self.size_limits is not None
        return self.size_limits.max_input_size

    @property
    def max_string_length(self) -> int:
        """Maximum decoded length of a single string."""
        assert self.size_limits is not None
        return self.size_limits.max_string_length

    @property
    def max_number_length(self) -> int:
        """Maximum length of a number lexeme."""
        assert self.size_limits is not None
        return self.size_limits.max_number_length

    @property
    def max_nesting_depth(self) -> int:
        """Maximum nesting of arrays and objects."""
        assert self.structure_limits is not None
        return self.structure_limits.max_nesting_depth


@dataclass
class ErrorReporting:
    """Error reporting and context settings."""
    include_context: bool = True
    max_error_context: int = 40


@dataclass
class ParseConfig:
    """Configuration options for a jsontree parse."""

    limits: Optional[ParseLimits] = None
    error_reporting: Optional[ErrorReporting] = None
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        if self.limits is None:
            self.limits = ParseLimits()
        if self.error_reporting is None:
            self.error_reporting = ErrorReporting()

    @property
    def include_context(self) -> bool:
        """Whether errors carry the offending source line."""
        assert self.error_reporting is not None
        return self.error_reporting.include_context

    @property
    def max_error_context(self) -> int:
        """Characters of source kept on each side of an error."""
        assert self.error_reporting is not None
        return self.error_reporting.max_error_context


class SerializeMode(Enum):
    """Output layout for the serializer."""

    COMPACT = "compact"
    PRETTY = "pretty"

    @classmethod
    def coerce(cls, mode: Union["SerializeMode", str]) -> "SerializeMode":
        """Accept either a member or its name/value (case-insensitive)."""
        if isinstance(mode, cls):
            return mode
        try:
            return cls(str(mode).lower())
        except ValueError:
            raise ValueError(
                f"Unknown serialize mode {mode!r}; expected 'compact' or 'pretty'"
            ) from None


@dataclass
class SerializeConfig:
    """Options for rendering a value tree as text."""

    mode: SerializeMode = SerializeMode.COMPACT
    indent: int = 2

    def __post_init__(self) -> None:
        self.mode = SerializeMode.coerce(self.mode)
        if self.indent < 0:
            raise ValueError("indent must not be negative")

    @classmethod
    def compact(cls) -> "SerializeConfig":
        """Create a configuration with no inserted whitespace."""
        return cls(mode=SerializeMode.COMPACT)

    @classmethod
    def pretty(cls, indent: int = 2) -> "SerializeConfig":
        """Create an indented, one-member-per-line configuration."""
        return cls(mode=SerializeMode.PRETTY, indent=indent)
