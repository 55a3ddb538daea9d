"""
Cursor for jsontree - tracks offset, line and column over the input text.
"""

from dataclasses import dataclass

from .constants import WHITESPACE


@dataclass
class Position:
    """Position in source text (1-based line and column, 0-based offset).

    Column and offset are measured in UTF-8 bytes of the encoded input.
    """

    line: int
    column: int
    offset: int = 0


def utf8_length(text: str) -> int:
    """Number of bytes ``text`` occupies once encoded as UTF-8."""
    return len(text.encode("utf-8", "surrogatepass"))


class Cursor:
    """Read-only view over the input text with line/column bookkeeping.

    The cursor never modifies the text; it only moves its own index. ``pos``
    indexes characters of the decoded text, while the reported column and
    offset advance by the UTF-8 width of each consumed character, so ``é``
    moves the column by two.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.length = len(text)
        self.pos = 0
        self.offset = 0
        self.line = 1
        self.column = 1

    def current_position(self) -> Position:
        """Get current position in the text."""
        return Position(self.line, self.column, self.offset)

    def at_end(self) -> bool:
        """Whether the whole input has been consumed."""
        return self.pos >= self.length

    def peek(self, offset: int = 0) -> str:
        """Peek at character at given offset without consuming it."""
        pos = self.pos + offset
        if pos >= self.length:
            return ""
        return self.text[pos]

    def startswith(self, literal: str) -> bool:
        """Check whether the unconsumed input begins with ``literal``."""
        return self.text.startswith(literal, self.pos)

    def advance(self, count: int = 1) -> str:
        """Consume ``count`` characters and return them."""
        consumed = self.text[self.pos : self.pos + count]
        if not consumed:
            return consumed

        self.pos += len(consumed)
        width = len(consumed) if consumed.isascii() else utf8_length(consumed)
        self.offset += width

        newline = consumed.rfind("\n")
        if newline == -1:
            self.column += width
        else:
            self.line += consumed.count("\n")
            self.column = 1 + utf8_length(consumed[newline + 1 :])
        return consumed

    def skip_whitespace(self) -> None:
        """Skip insignificant whitespace (space, tab, carriage return, newline)."""
        while self.pos < self.length and self.text[self.pos] in WHITESPACE:
            self.advance()

    def peek_expected(self, expected: str) -> bool:
        """Skip whitespace, then report whether ``expected`` comes next."""
        self.skip_whitespace()
        return self.peek() == expected

    def consume_expected(self, expected: str) -> bool:
        """Skip whitespace and consume ``expected`` if it is the next character.

        Returns False when the next character differs, leaving the cursor on
        it so the caller can raise an error positioned at the offender.
        """
        if not self.peek_expected(expected):
            return False
        self.advance()
        return True

    def remaining(self) -> int:
        """Number of characters left to read."""
        return self.length - self.pos

    def save(self) -> tuple[int, int, int, int]:
        """Snapshot the cursor state for a later ``restore``."""
        return (self.pos, self.offset, self.line, self.column)

    def restore(self, state: tuple[int, int, int, int]) -> None:
        """Rewind to a state previously returned by ``save``."""
        self.pos, self.offset, self.line, self.column = state
