"""
Test cases for the jsontree cursor.

Tests focus on offset, line and column bookkeeping.
"""

import unittest

from jsontree.core.cursor import Cursor, Position


class TestCursorMovement(unittest.TestCase):
    """Test peeking and advancing over the input."""

    def test_initial_position(self):
        """A fresh cursor sits at line 1, column 1, offset 0."""
        cursor = Cursor("[1]")
        self.assertEqual(cursor.current_position(), Position(1, 1, 0))
        self.assertFalse(cursor.at_end())

    def test_peek_does_not_consume(self):
        """Peeking leaves the position unchanged."""
        cursor = Cursor("ab")
        self.assertEqual(cursor.peek(), "a")
        self.assertEqual(cursor.peek(1), "b")
        self.assertEqual(cursor.peek(2), "")
        self.assertEqual(cursor.pos, 0)

    def test_advance_updates_column(self):
        """Advancing moves offset and column together."""
        cursor = Cursor("null")
        self.assertEqual(cursor.advance(4), "null")
        self.assertEqual(cursor.current_position(), Position(1, 5, 4))
        self.assertTrue(cursor.at_end())

    def test_advance_past_end(self):
        """Advancing at the end returns an empty string."""
        cursor = Cursor("x")
        cursor.advance()
        self.assertEqual(cursor.advance(), "")
        self.assertEqual(cursor.pos, 1)

    def test_newline_resets_column(self):
        """A line feed increments the line and resets the column to 1."""
        cursor = Cursor("a\nbc")
        cursor.advance(3)
        self.assertEqual(cursor.line, 2)
        self.assertEqual(cursor.column, 2)

    def test_multibyte_characters_count_utf8_bytes(self):
        """Column and offset move by the encoded width of each character."""
        for text, column in (("é", 3), ("€", 4), (chr(0x1F600), 5), ("aé€", 7)):
            with self.subTest(text=text):
                cursor = Cursor(text + "x")
                cursor.advance(len(text))
                self.assertEqual(cursor.peek(), "x")
                self.assertEqual(cursor.pos, len(text))
                self.assertEqual(
                    cursor.current_position(), Position(1, column, column - 1)
                )

    def test_multibyte_column_resets_after_newline(self):
        """Only bytes after the last line feed count toward the column."""
        cursor = Cursor("éé\né!")
        cursor.advance(4)
        self.assertEqual(cursor.current_position(), Position(2, 3, 7))

    def test_startswith(self):
        """Literal matching is relative to the current offset."""
        cursor = Cursor("  true")
        self.assertFalse(cursor.startswith("true"))
        cursor.skip_whitespace()
        self.assertTrue(cursor.startswith("true"))

    def test_save_and_restore(self):
        """Restoring a saved position rewinds offset, line and column."""
        cursor = Cursor("a\nb")
        saved = cursor.save()
        cursor.advance(3)
        cursor.restore(saved)
        self.assertEqual(cursor.current_position(), Position(1, 1, 0))

    def test_restore_after_multibyte_text(self):
        """A restored cursor reads the same character with the same position."""
        cursor = Cursor("éa€b")
        cursor.advance()
        saved = cursor.save()
        cursor.advance(2)
        cursor.restore(saved)
        self.assertEqual(cursor.peek(), "a")
        self.assertEqual(cursor.current_position(), Position(1, 3, 2))


class TestCursorWhitespace(unittest.TestCase):
    """Test whitespace skipping and expected-character helpers."""

    def test_skip_all_json_whitespace(self):
        """Space, tab, carriage return and line feed are all skipped."""
        cursor = Cursor(" \t\r\n \n  x")
        cursor.skip_whitespace()
        self.assertEqual(cursor.peek(), "x")
        self.assertEqual(cursor.current_position(), Position(3, 3, 8))

    def test_other_characters_are_not_whitespace(self):
        """Form feed and non-breaking space are significant."""
        for text in ("\fx", "\u00a0x"):
            with self.subTest(text=repr(text)):
                cursor = Cursor(text)
                cursor.skip_whitespace()
                self.assertEqual(cursor.pos, 0)

    def test_peek_expected_is_non_consuming(self):
        """peek_expected skips whitespace but not the character itself."""
        cursor = Cursor("   ]")
        self.assertTrue(cursor.peek_expected("]"))
        self.assertEqual(cursor.peek(), "]")
        self.assertFalse(cursor.peek_expected(","))

    def test_consume_expected_success(self):
        """consume_expected advances past the matched character."""
        cursor = Cursor("  ,1")
        self.assertTrue(cursor.consume_expected(","))
        self.assertEqual(cursor.peek(), "1")
        self.assertEqual(cursor.column, 4)

    def test_consume_expected_mismatch(self):
        """On a mismatch the cursor stays on the offending character."""
        cursor = Cursor("  x")
        self.assertFalse(cursor.consume_expected(","))
        self.assertEqual(cursor.peek(), "x")
        self.assertEqual(cursor.column, 3)

    def test_consume_expected_at_end(self):
        """Nothing can be consumed at the end of input."""
        cursor = Cursor("   ")
        self.assertFalse(cursor.consume_expected("]"))
        self.assertTrue(cursor.at_end())

    def test_text_is_never_modified(self):
        """Moving the cursor leaves the buffer untouched."""
        text = '{"a": [1, 2]}'
        cursor = Cursor(text)
        while not cursor.at_end():
            cursor.advance()
        self.assertEqual(cursor.text, text)
        self.assertEqual(cursor.remaining(), 0)


if __name__ == "__main__":
    unittest.main()
