"""
Serializer for jsontree - renders a value tree as compact or pretty text.

Output always re-parses to an equal tree, but it is not a copy of the input text:
``1.0`` and ``1`` both print as ``1`` and whitespace is regenerated.
"""

import math
from typing import Optional, TextIO, Union

from ..security.exceptions import SerializeError
from ..utils.config import SerializeConfig, SerializeMode
from .constants import INTEGRAL_PRINT_LIMIT, JSON_UNESCAPE_MAP
from .values import Value, ValueType


def format_number(number: float) -> str:
    """Render a number the way the serializer writes it.

    Integral values below 10^10 in magnitude print without a decimal point;
    everything else uses the shortest text that reads back as the same float.
    """
    if not math.isfinite(number):
        raise SerializeError(f"Cannot serialize non-finite number {number!r}")
    if number == math.floor(number) and abs(number) < INTEGRAL_PRINT_LIMIT:
        return f"{number:.0f}"
    return repr(number)


def escape_string(text: str) -> str:
    """Quote ``text`` as a JSON string literal."""
    parts = ['"']
    for char in text:
        escaped = JSON_UNESCAPE_MAP.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif char < " ":
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


class Serializer:
    """Writes a value tree to a list of text chunks."""

    def __init__(self, config: Optional[SerializeConfig] = None):
        self.config = config or SerializeConfig()
        self.pretty = self.config.mode is SerializeMode.PRETTY
        self._chunks: list[str] = []

    def serialize(self, value: Value) -> str:
        """Render ``value`` and return the text."""
        self._chunks = []
        try:
            self._write_value(value, 0)
        except RecursionError:
            raise SerializeError("Tree is nested too deeply to serialize") from None
        return "".join(self._chunks)

    def _write_indent(self, depth: int) -> None:
        self._chunks.append("\n" + " " * (self.config.indent * depth))

    def _write_value(self, value: Value, depth: int) -> None:
        kind = value.type
        if kind is ValueType.NULL:
            self._chunks.append("null")
        elif kind is ValueType.BOOLEAN:
            self._chunks.append("true" if value.as_bool() else "false")
        elif kind is ValueType.NUMBER:
            self._chunks.append(format_number(value.as_number()))
        elif kind is ValueType.STRING:
            self._chunks.append(escape_string(value.as_string()))
        elif kind is ValueType.ARRAY:
            self._write_array(value, depth)
        else:
            self._write_object(value, depth)

    def _write_array(self, value: Value, depth: int) -> None:
        items = value.as_array()
        self._chunks.append("[")
        for index, item in enumerate(items):
            if index:
                self._chunks.append(",")
            if self.pretty:
                self._write_indent(depth + 1)
            self._write_value(item, depth + 1)
        if self.pretty and items:
            self._write_indent(depth)
        self._chunks.append("]")

    def _write_object(self, value: Value, depth: int) -> None:
        members = value.as_object()
        self._chunks.append("{")
        for index, (key, item) in enumerate(members):
            if index:
                self._chunks.append(",")
            if self.pretty:
                self._write_indent(depth + 1)
            self._chunks.append(escape_string(key))
            self._chunks.append(": " if self.pretty else ":")
            self._write_value(item, depth + 1)
        if self.pretty and members:
            self._write_indent(depth)
        self._chunks.append("}")


def dumps(
    value: Value,
    mode: Union[SerializeMode, str] = SerializeMode.COMPACT,
    *,
    indent: int = 2,
) -> str:
    """
    Serialize a value tree to text.

    Args:
        value: Root of the tree to render
        mode: ``SerializeMode.COMPACT``/``"compact"`` or ``SerializeMode.PRETTY``/``"pretty"``
        indent: Spaces per nesting level in pretty mode

    Returns:
        The JSON text

    Raises:
        SerializeError: If the tree holds a NaN or infinite number
    """
    return Serializer(SerializeConfig(mode=mode, indent=indent)).serialize(value)


def dump(
    value: Value,
    fp: TextIO,
    mode: Union[SerializeMode, str] = SerializeMode.COMPACT,
    *,
    indent: int = 2,
) -> None:
    """Serialize a value tree to a text stream."""
    fp.write(dumps(value, mode, indent=indent))
