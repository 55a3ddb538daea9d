"""
Exception hierarchy and error reporting for jsontree.

Every failure carries a structured ``ErrorKind`` and, when it came from the
parser, the ``Position`` where it was detected. ``str(error)`` is always the
single-line diagnostic ``"<description> at line L, column C"``; ``describe()``
renders the longer form with the offending source line and a caret.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.cursor import Position


class ErrorKind(Enum):
    """Classification of every failure the library can report."""

    UNEXPECTED_END = "end-of-input-unexpected"
    UNEXPECTED_CHARACTER = "unexpected-character"
    INVALID_LITERAL = "invalid-literal"
    INVALID_ESCAPE = "invalid-escape"
    INVALID_UNICODE_ESCAPE = "invalid-unicode-escape"
    INVALID_NUMBER = "invalid-number"
    INVALID_STRING = "invalid-string"
    DEPTH_LIMIT_EXCEEDED = "depth-limit-exceeded"
    TRAILING_DATA = "trailing-data-after-value"
    ALLOCATION_FAILURE = "allocation-failure"
    INVALID_ENCODING = "invalid-encoding"
    INPUT_TOO_LARGE = "input-too-large"
    TYPE_MISMATCH = "type-mismatch"
    OWNERSHIP = "ownership"
    UNSERIALIZABLE = "unserializable"


@dataclass
class ErrorContext:
    """Source excerpt surrounding an error position."""

    text: str
    position: Position
    context_before: str
    context_after: str
    error_char: str
    line_text: str
    column_indicator: str


class JsonTreeError(Exception):
    """Base class for all jsontree errors."""

    default_kind = ErrorKind.UNEXPECTED_CHARACTER

    def __init__(
        self,
        message: str,
        position: Optional[Position] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
        kind: Optional[ErrorKind] = None,
    ):
        self.message = message
        self.position = position
        self.context = context
        self.suggestions = suggestions or []
        self.kind = kind or self.default_kind
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.position is None:
            return self.message
        return (
            f"{self.message} at line {self.position.line}, "
            f"column {self.position.column}"
        )

    def __str__(self) -> str:
        return self._format_message()

    def describe(self) -> str:
        """Multi-line report: diagnostic, source line with caret, suggestions."""
        parts = [self._format_message()]

        if self.context:
            parts.append("Context:")
            parts.append(f"  {self.context.line_text}")
            parts.append(f"  {self.context.column_indicator}")

        if self.suggestions:
            parts.append("Suggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(parts)


class ParseError(JsonTreeError, ValueError):
    """Raised when the input is not valid JSON."""


class SecurityError(ParseError):
    """Raised when the input exceeds one of the configured ceilings."""

    default_kind = ErrorKind.DEPTH_LIMIT_EXCEEDED


class ValueTypeError(JsonTreeError, TypeError):
    """Raised when a payload is read through the wrong accessor."""

    default_kind = ErrorKind.TYPE_MISMATCH


class OwnershipError(JsonTreeError, ValueError):
    """Raised when a node would end up with two owners or inside itself."""

    default_kind = ErrorKind.OWNERSHIP


class SerializeError(JsonTreeError, ValueError):
    """Raised when a tree cannot be rendered as JSON text."""

    default_kind = ErrorKind.UNSERIALIZABLE


class ErrorSuggestionEngine:
    """Short, kind-specific hints attached to parse errors."""

    _SUGGESTIONS = {
        ErrorKind.UNEXPECTED_END: [
            "Check for an unclosed string, array or object",
        ],
        ErrorKind.INVALID_LITERAL: [
            "Literals are lowercase: null, true, false",
        ],
        ErrorKind.INVALID_ESCAPE: [
            'Valid escapes are \\" \\\\ \\/ \\b \\f \\n \\r \\t and \\uXXXX',
            "Escape a literal backslash as \\\\",
        ],
        ErrorKind.INVALID_UNICODE_ESCAPE: [
            "Unicode escapes need exactly four hex digits, e.g. \\u00e9",
        ],
        ErrorKind.INVALID_NUMBER: [
            "Numbers may not have leading zeros, a trailing '.' or an empty exponent",
        ],
        ErrorKind.INVALID_STRING: [
            "Control characters must be escaped, e.g. a newline as \\n",
        ],
        ErrorKind.TRAILING_DATA: [
            "A document holds exactly one top-level value",
            "Wrap multiple values in an array",
        ],
    }

    @classmethod
    def suggest_for(cls, kind: ErrorKind) -> list[str]:
        """Return suggestions for an error kind (possibly none)."""
        return list(cls._SUGGESTIONS.get(kind, []))

    @staticmethod
    def suggest_for_unexpected_character(char: str) -> list[str]:
        """Suggestions for a character that cannot start or continue a value."""
        if char == "'":
            return ["Strings must use double quotes"]
        if char in "]}":
            return ["Remove the trailing comma before the closing bracket"]
        if char.isalpha() or char == "_":
            return [
                "Object keys and string values must be double-quoted",
                "Literals are lowercase: null, true, false",
            ]
        return []

    @staticmethod
    def suggest_for_unclosed_structure(structure_type: str) -> list[str]:
        """Suggestions for a missing separator or closing bracket."""
        closer = "]" if structure_type == "array" else "}"
        return [
            f"Separate {structure_type} members with ','",
            f"Close the {structure_type} with '{closer}'",
        ]


def _decode(data: bytes) -> str:
    # Excerpt boundaries may split a multi-byte sequence; drop the fragment
    return data.decode("utf-8", "ignore")


class ErrorReporter:
    """Builds positioned errors with source context for one input text.

    Positions count UTF-8 bytes; excerpts and the caret are rendered in
    characters so they line up with the decoded text.
    """

    def __init__(self, text: str, max_context: int = 40):
        self.text = text
        self.max_context = max_context
        self._lines: Optional[list[str]] = None
        self._encoded: Optional[bytes] = None

    @property
    def lines(self) -> list[str]:
        """Source lines, split on LF only to match the cursor's line count."""
        if self._lines is None:
            self._lines = self.text.split("\n")
        return self._lines

    @property
    def encoded(self) -> bytes:
        """The source text as UTF-8, indexed by ``Position.offset``."""
        if self._encoded is None:
            self._encoded = self.text.encode("utf-8", "surrogatepass")
        return self._encoded

    def build_context(self, position: Position) -> ErrorContext:
        """Extract the source line and surrounding excerpt for ``position``."""
        line_index = min(max(position.line - 1, 0), len(self.lines) - 1)
        line_text = self.lines[line_index].rstrip("\r")
        line_bytes = line_text.encode("utf-8", "surrogatepass")
        column_index = len(_decode(line_bytes[: max(position.column - 1, 0)]))

        offset = position.offset
        before = _decode(self.encoded[max(0, offset - self.max_context) : offset])
        after = _decode(self.encoded[offset : offset + self.max_context])
        error_char = after[:1]

        if len(line_text) > self.max_context * 2:
            start = max(0, column_index - self.max_context)
            line_text = line_text[start : column_index + self.max_context]
            column_index -= start

        return ErrorContext(
            text=self.text,
            position=position,
            context_before=before,
            context_after=after,
            error_char=error_char,
            line_text=line_text,
            column_indicator=" " * column_index + "^",
        )

    def create_parse_error(
        self,
        message: str,
        position: Position,
        suggestions: Optional[list[str]] = None,
        kind: Optional[ErrorKind] = None,
    ) -> ParseError:
        """Create a ParseError with context attached."""
        return ParseError(
            message,
            position=position,
            context=self.build_context(position),
            suggestions=suggestions,
            kind=kind,
        )

    def create_security_error(
        self,
        message: str,
        position: Optional[Position] = None,
        kind: Optional[ErrorKind] = None,
    ) -> SecurityError:
        """Create a SecurityError, with context when the position is known."""
        context = self.build_context(position) if position else None
        return SecurityError(message, position=position, context=context, kind=kind)
