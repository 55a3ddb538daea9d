"""
Parser for jsontree - strict RFC 8259 recursive descent over a Cursor.
"""

import logging
import math
import time
from pathlib import Path
from typing import NoReturn, Optional, TextIO, Union

from ..security.exceptions import (
    ErrorKind,
    ErrorReporter,
    ErrorSuggestionEngine,
    JsonTreeError,
    ParseError,
    SecurityError,
)
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .constants import (
    DIGITS,
    HEX_DIGITS,
    HIGH_SURROGATES,
    JSON_ESCAPE_MAP,
    LOW_SURROGATES,
    PLAIN_STRING_RUN,
    REPLACEMENT_CHARACTER,
)
from .cursor import Cursor, Position, utf8_length
from .values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    Value,
)


class Parser:
    """Builds a value tree from JSON text, one grammar production per method.

    A parser instance owns its cursor and depth counter and is used for a
    single document; nothing is shared between instances.
    """

    def __init__(self, text: str, config: Optional[ParseConfig] = None):
        self.config = config or ParseConfig()
        self.cursor = Cursor(text)
        self.error_reporter = (
            ErrorReporter(text, self.config.max_error_context)
            if self.config.include_context
            else None
        )
        assert self.config.limits is not None
        self.validator = LimitValidator(self.config.limits, self.error_reporter)

    def parse(self) -> Value:
        """Parse exactly one value followed only by whitespace."""
        self.validator.validate_input_size(self.cursor.text)
        value = self.parse_value()

        self.cursor.skip_whitespace()
        if not self.cursor.at_end():
            self._raise_parse_error(
                "Unexpected data after JSON", ErrorKind.TRAILING_DATA
            )
        return value

    def parse_value(self) -> Value:
        """Dispatch on the next significant character."""
        cursor = self.cursor
        cursor.skip_whitespace()

        char = cursor.peek()
        if not char:
            self._raise_parse_error("Unexpected end of input", ErrorKind.UNEXPECTED_END)

        if char == "n":
            return self.parse_null()
        if char in "tf":
            return self.parse_boolean()
        if char == '"':
            return self.parse_string()
        if char == "[":
            return self.parse_array()
        if char == "{":
            return self.parse_object()
        if char == "-" or char in DIGITS:
            return self.parse_number()

        self._raise_parse_error(
            f"Unexpected character {char!r}",
            ErrorKind.UNEXPECTED_CHARACTER,
            ErrorSuggestionEngine.suggest_for_unexpected_character(char),
        )

    def parse_null(self) -> JsonNull:
        """Parse the ``null`` literal."""
        if not self.cursor.startswith("null"):
            self._raise_parse_error("Invalid null value", ErrorKind.INVALID_LITERAL)
        self.cursor.advance(4)
        return JsonNull()

    def parse_boolean(self) -> JsonBoolean:
        """Parse ``true`` or ``false``."""
        for literal, value in (("true", True), ("false", False)):
            if self.cursor.startswith(literal):
                self.cursor.advance(len(literal))
                return JsonBoolean(value)
        self._raise_parse_error("Invalid boolean value", ErrorKind.INVALID_LITERAL)

    def parse_number(self) -> JsonNumber:
        """Parse a number: ``-? int frac? exp?`` with no leading zeros."""
        cursor = self.cursor
        start = cursor.pos

        if cursor.peek() == "-":
            cursor.advance()

        if cursor.peek() == "" or cursor.peek() not in DIGITS:
            self._raise_parse_error("Invalid number", ErrorKind.INVALID_NUMBER)

        if cursor.peek() == "0":
            cursor.advance()
            if cursor.peek() != "" and cursor.peek() in DIGITS:
                self._raise_parse_error(
                    "Leading zeros not allowed", ErrorKind.INVALID_NUMBER
                )
        else:
            self._read_digits(start)

        if cursor.peek() == ".":
            cursor.advance()
            if cursor.peek() == "" or cursor.peek() not in DIGITS:
                self._raise_parse_error(
                    "Invalid decimal number", ErrorKind.INVALID_NUMBER
                )
            self._read_digits(start)

        if cursor.peek() in ("e", "E"):
            cursor.advance()
            if cursor.peek() in ("+", "-"):
                cursor.advance()
            if cursor.peek() == "" or cursor.peek() not in DIGITS:
                self._raise_parse_error("Invalid exponent", ErrorKind.INVALID_NUMBER)
            self._read_digits(start)

        self._check_number_length(start)
        lexeme = cursor.text[start : cursor.pos]

        try:
            number = float(lexeme)
        except ValueError:
            self._raise_parse_error("Invalid number format", ErrorKind.INVALID_NUMBER)
        if math.isinf(number):
            self._raise_parse_error("Number out of range", ErrorKind.INVALID_NUMBER)
        return JsonNumber(number)

    def _read_digits(self, start: int) -> None:
        cursor = self.cursor
        while cursor.peek() != "" and cursor.peek() in DIGITS:
            cursor.advance()
            self._check_number_length(start)

    def _check_number_length(self, start: int) -> None:
        length = self.cursor.pos - start
        if length > self.validator.limits.max_number_length:
            self.validator.validate_number_length(
                length, self.cursor.current_position()
            )

    def parse_string(self) -> JsonString:
        """Parse a double-quoted string, decoding escapes."""
        return JsonString(self._read_string())

    def _read_string(self) -> str:
        cursor = self.cursor
        if not cursor.consume_expected('"'):
            self._raise_unexpected("'\"'")

        max_length = self.validator.limits.max_string_length
        chunks: list[str] = []
        length = 0
        while True:
            run = PLAIN_STRING_RUN.match(cursor.text, cursor.pos)
            if run:
                decoded = cursor.advance(run.end() - run.start())
            else:
                char = cursor.peek()
                if not char:
                    self._raise_parse_error(
                        "Unterminated string", ErrorKind.INVALID_STRING
                    )
                if char == '"':
                    cursor.advance()
                    return "".join(chunks)
                if char != "\\":
                    self._raise_parse_error(
                        "Invalid control character in string",
                        ErrorKind.INVALID_STRING,
                    )
                cursor.advance()
                decoded = self._read_escape()

            chunks.append(decoded)
            length += utf8_length(decoded)
            if length > max_length:
                self.validator.validate_string_length(
                    length, cursor.current_position()
                )

    def _read_escape(self) -> str:
        cursor = self.cursor
        char = cursor.peek()
        if not char:
            self._raise_parse_error("Unterminated string", ErrorKind.INVALID_STRING)

        if char in JSON_ESCAPE_MAP:
            cursor.advance()
            return JSON_ESCAPE_MAP[char]
        if char == "u":
            cursor.advance()
            return self._read_unicode_escape()

        self._raise_parse_error("Invalid escape sequence", ErrorKind.INVALID_ESCAPE)

    def _read_hex_quad(self) -> int:
        """Read exactly four hex digits following ``\\u``."""
        cursor = self.cursor
        code_point = 0
        for _ in range(4):
            char = cursor.peek()
            if not char:
                self._raise_parse_error(
                    "Invalid unicode escape", ErrorKind.INVALID_UNICODE_ESCAPE
                )
            if char not in HEX_DIGITS:
                self._raise_parse_error(
                    "Invalid hex digit", ErrorKind.INVALID_UNICODE_ESCAPE
                )
            code_point = (code_point << 4) | int(char, 16)
            cursor.advance()
        return code_point

    def _read_unicode_escape(self) -> str:
        """Decode ``\\uXXXX``, joining a high/low surrogate pair into one character.

        A surrogate that is not part of a well-formed pair becomes U+FFFD.
        """
        code_point = self._read_hex_quad()
        if code_point in LOW_SURROGATES:
            return REPLACEMENT_CHARACTER
        if code_point not in HIGH_SURROGATES:
            return chr(code_point)

        cursor = self.cursor
        if not (cursor.peek() == "\\" and cursor.peek(1) == "u"):
            return REPLACEMENT_CHARACTER

        saved = cursor.save()
        cursor.advance(2)
        low = self._read_hex_quad()
        if low in LOW_SURROGATES:
            return chr(0x10000 + ((code_point - 0xD800) << 10) + (low - 0xDC00))

        # Not a pair; the second escape is decoded on its own
        cursor.restore(saved)
        return REPLACEMENT_CHARACTER

    def parse_array(self) -> JsonArray:
        """Parse ``[ value (, value)* ]``."""
        cursor = self.cursor
        if not cursor.consume_expected("["):
            self._raise_unexpected("'['")
        self.validator.enter_structure(cursor.current_position())

        array = JsonArray()
        if cursor.consume_expected("]"):
            self.validator.exit_structure()
            return array

        while True:
            array.append(self.parse_value())
            if cursor.consume_expected("]"):
                break
            if not cursor.consume_expected(","):
                self._raise_unexpected(
                    "',' or ']' after array element",
                    ErrorSuggestionEngine.suggest_for_unclosed_structure("array"),
                )

        self.validator.exit_structure()
        return array

    def parse_object(self) -> JsonObject:
        """Parse ``{ "key": value (, "key": value)* }``."""
        cursor = self.cursor
        if not cursor.consume_expected("{"):
            self._raise_unexpected("'{'")
        self.validator.enter_structure(cursor.current_position())

        obj = JsonObject()
        if cursor.consume_expected("}"):
            self.validator.exit_structure()
            return obj

        while True:
            if not cursor.peek_expected('"'):
                if cursor.at_end():
                    self._raise_parse_error(
                        "Unexpected end of input", ErrorKind.UNEXPECTED_END
                    )
                self._raise_parse_error(
                    "Expected string key",
                    ErrorKind.UNEXPECTED_CHARACTER,
                    ["Object keys must be double-quoted strings"],
                )
            key = self._read_string()

            if not cursor.consume_expected(":"):
                self._raise_unexpected("':' after object key")

            obj.append(key, self.parse_value())

            if cursor.consume_expected("}"):
                break
            if not cursor.consume_expected(","):
                self._raise_unexpected(
                    "',' or '}' after object member",
                    ErrorSuggestionEngine.suggest_for_unclosed_structure("object"),
                )

        self.validator.exit_structure()
        return obj

    def _raise_unexpected(
        self, expected: str, suggestions: Optional[list[str]] = None
    ) -> NoReturn:
        """Fail after a consume-expected miss, naming what was found instead."""
        char = self.cursor.peek()
        if not char:
            self._raise_parse_error("Unexpected end of input", ErrorKind.UNEXPECTED_END)
        self._raise_parse_error(
            f"Expected {expected}, got {char!r}",
            ErrorKind.UNEXPECTED_CHARACTER,
            suggestions,
        )

    def _raise_parse_error(
        self,
        message: str,
        kind: ErrorKind,
        suggestions: Optional[list[str]] = None,
    ) -> NoReturn:
        position = self.cursor.current_position()
        if suggestions is None:
            suggestions = ErrorSuggestionEngine.suggest_for(kind)
        if self.error_reporter:
            raise self.error_reporter.create_parse_error(
                message, position, suggestions, kind
            )
        raise ParseError(message, position, suggestions=suggestions, kind=kind)


def _position_after(prefix: bytes) -> Position:
    """Position of the byte that follows ``prefix``."""
    line_start = prefix.rfind(b"\n") + 1
    return Position(
        prefix.count(b"\n") + 1, len(prefix) - line_start + 1, len(prefix)
    )


def _decode_bytes(data: Union[bytes, bytearray]) -> str:
    """Decode UTF-8 input, reporting the first bad byte with its position."""
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(
            "Invalid UTF-8 byte sequence",
            _position_after(bytes(data[: e.start])),
            kind=ErrorKind.INVALID_ENCODING,
        ) from None


def _check_encodable(text: str) -> None:
    """Reject text holding unpaired surrogates, which have no UTF-8 form."""
    if text.isascii():
        return
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ParseError(
            "Unpaired surrogate in input text",
            _position_after(text[: e.start].encode("utf-8")),
            kind=ErrorKind.INVALID_ENCODING,
        ) from None


def parse(
    text: Union[str, bytes, bytearray], config: Optional[ParseConfig] = None
) -> Value:
    """
    Parse a complete JSON document into a value tree.

    Args:
        text: The whole document; bytes are decoded as UTF-8
        config: Optional ParseConfig for limits, error context and logging

    Returns:
        The root Value of a fully built tree

    Raises:
        ParseError: If the text is not valid JSON; no partial tree is returned
        SecurityError: If a configured ceiling is exceeded
    """
    config = config or ParseConfig()
    logger = config.logger or logging.getLogger(__name__)

    if isinstance(text, (bytes, bytearray)):
        text = _decode_bytes(text)
    elif isinstance(text, str):
        _check_encodable(text)
    else:
        raise TypeError(f"Input must be str or bytes, not {type(text).__name__}")

    logger.debug("Parsing %d characters", len(text))
    started = time.perf_counter()
    parser = Parser(text, config)
    try:
        value = parser.parse()
    except JsonTreeError as e:
        logger.debug("Parse failed: %s", e)
        raise
    except RecursionError:
        error = SecurityError(
            "Maximum nesting depth exceeded",
            parser.cursor.current_position(),
            kind=ErrorKind.DEPTH_LIMIT_EXCEEDED,
        )
        logger.debug("Parse failed: %s", error)
        raise error from None
    except MemoryError:
        error = ParseError(
            "Out of memory while parsing",
            parser.cursor.current_position(),
            kind=ErrorKind.ALLOCATION_FAILURE,
        )
        logger.debug("Parse failed: %s", error)
        raise error from None

    logger.debug(
        "Parsed %s document in %.3f ms",
        value.type.value,
        (time.perf_counter() - started) * 1000,
    )
    return value


def load(fp: TextIO, config: Optional[ParseConfig] = None) -> Value:
    """Parse the full contents of a file-like object."""
    return parse(fp.read(), config)


def parse_file(
    path: Union[str, Path], config: Optional[ParseConfig] = None
) -> Value:
    """Read ``path`` as UTF-8 and parse it."""
    return parse(Path(path).read_bytes(), config)
