"""
Security limits and validation for jsontree.
This module enforces the ceilings that bound a parse against adversarial input.
"""

from typing import Optional

from ..core.cursor import Position
from ..utils.config import ParseLimits
from .exceptions import ErrorKind, ErrorReporter, SecurityError


class LimitValidator:
    """Validates parsing limits to prevent resource exhaustion attacks."""

    def __init__(
        self, limits: ParseLimits, error_reporter: Optional[ErrorReporter] = None
    ):
        self.limits = limits
        self.error_reporter = error_reporter
        self.nesting_depth = 0

    def _fail(
        self, message: str, kind: ErrorKind, position: Optional[Position]
    ) -> SecurityError:
        if self.error_reporter:
            return self.error_reporter.create_security_error(message, position, kind)
        return SecurityError(message, position=position, kind=kind)

    def validate_input_size(self, text: str) -> None:
        """Validate that input text size is within limits."""
        if len(text) > self.limits.max_input_size:
            raise self._fail(
                f"Input size {len(text)} exceeds limit {self.limits.max_input_size}",
                ErrorKind.INPUT_TOO_LARGE,
                None,
            )

    def validate_string_length(
        self, length: int, position: Optional[Position] = None
    ) -> None:
        """Validate that the UTF-8 size of a string being decoded is within limits."""
        if length > self.limits.max_string_length:
            raise self._fail(
                f"String too long: exceeds {self.limits.max_string_length} bytes",
                ErrorKind.INVALID_STRING,
                position,
            )

    def validate_number_length(
        self, length: int, position: Optional[Position] = None
    ) -> None:
        """Validate that a number lexeme is within limits."""
        if length > self.limits.max_number_length:
            raise self._fail(
                f"Number too large: lexeme exceeds {self.limits.max_number_length} "
                "characters",
                ErrorKind.INVALID_NUMBER,
                position,
            )

    def enter_structure(self, position: Optional[Position] = None) -> None:
        """Track entering a nested structure and validate depth."""
        self.nesting_depth += 1
        if self.nesting_depth > self.limits.max_nesting_depth:
            raise self._fail(
                f"Maximum nesting depth {self.limits.max_nesting_depth} exceeded",
                ErrorKind.DEPTH_LIMIT_EXCEEDED,
                position,
            )

    def exit_structure(self) -> None:
        """Track exiting a nested structure."""
        if self.nesting_depth > 0:
            self.nesting_depth -= 1

    def reset(self) -> None:
        """Reset validator state for reuse."""
        self.nesting_depth = 0
