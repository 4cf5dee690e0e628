"""
Test cases for the quickdatastore tokenizer.

Tests focus on character stepping, comment skipping, string escapes and
unquoted literal scanning.
"""

import unittest

from quickdatastore.core.constants import END_OF_INPUT
from quickdatastore.core.tokenizer import Tokenizer
from quickdatastore.core.values import NULL, JsonArray, JsonObject
from quickdatastore.security.exceptions import (
    InternalError,
    JsonSyntaxError,
    SecurityError,
)
from quickdatastore.utils.config import ErrorReporting, ParseConfig, ParseLimits


def _u(digits):
    """Spell out a JSON hex escape for the given four digits."""
    return "\\u" + digits


class TestTokenizerStepping(unittest.TestCase):
    """Test next/back and position tracking."""

    def test_next_and_end(self):
        """Test characters are returned in order, then END_OF_INPUT."""
        tokenizer = Tokenizer("ab")
        self.assertTrue(tokenizer.more())
        self.assertEqual(tokenizer.next(), "a")
        self.assertEqual(tokenizer.next(), "b")
        self.assertTrue(tokenizer.end())
        self.assertEqual(tokenizer.next(), END_OF_INPUT)

    def test_back_once(self):
        """Test a single step back re-reads the character."""
        tokenizer = Tokenizer("xy")
        tokenizer.next()
        tokenizer.back()
        self.assertEqual(tokenizer.next(), "x")

    def test_back_twice_fails(self):
        """Test two consecutive steps back are refused."""
        tokenizer = Tokenizer("xy")
        tokenizer.next()
        tokenizer.back()
        with self.assertRaises(InternalError):
            tokenizer.back()

    def test_back_at_start_fails(self):
        """Test stepping back before reading anything is refused."""
        with self.assertRaises(InternalError):
            Tokenizer("x").back()

    def test_line_and_column(self):
        """Test position tracking across newlines."""
        tokenizer = Tokenizer("ab\ncd")
        for _ in range(4):
            tokenizer.next()
        self.assertEqual((tokenizer.line, tokenizer.column), (2, 2))
        tokenizer.back()
        self.assertEqual((tokenizer.line, tokenizer.column), (2, 1))

    def test_next_char(self):
        """Test next_char checks the expected character."""
        tokenizer = Tokenizer("ab")
        self.assertEqual(tokenizer.next_char("a"), "a")
        with self.assertRaises(JsonSyntaxError) as cm:
            tokenizer.next_char("x")
        self.assertIn("Expected 'x' and instead saw 'b'", str(cm.exception))

    def test_next_count(self):
        """Test reading a fixed number of characters."""
        tokenizer = Tokenizer("abcdef")
        self.assertEqual(tokenizer.next_count(0), "")
        self.assertEqual(tokenizer.next_count(3), "abc")
        with self.assertRaises(JsonSyntaxError) as cm:
            tokenizer.next_count(4)
        self.assertIn("Substring bounds error", str(cm.exception))


class TestCommentSkipping(unittest.TestCase):
    """Test next_clean with whitespace and comments."""

    def test_whitespace(self):
        """Test whitespace is skipped."""
        self.assertEqual(Tokenizer(" \t\r\n x").next_clean(), "x")

    def test_line_comments(self):
        """Test // and # comments run to the end of the line."""
        self.assertEqual(Tokenizer("// note\n x").next_clean(), "x")
        self.assertEqual(Tokenizer("# note\r\n x").next_clean(), "x")

    def test_block_comment(self):
        """Test /* */ comments, including ones holding stars."""
        self.assertEqual(Tokenizer("/* a ** b */x").next_clean(), "x")
        self.assertEqual(Tokenizer("/**/x").next_clean(), "x")

    def test_unclosed_block_comment(self):
        """Test an unterminated block comment is a syntax error."""
        with self.assertRaises(JsonSyntaxError) as cm:
            Tokenizer("/* open").next_clean()
        self.assertIn("Unclosed comment", str(cm.exception))

    def test_lone_slash(self):
        """Test a slash that opens no comment is returned and can be stepped back."""
        tokenizer = Tokenizer("/x")
        self.assertEqual(tokenizer.next_clean(), "/")
        tokenizer.back()
        self.assertEqual(tokenizer.next(), "/")

    def test_comment_at_end(self):
        """Test a trailing comment leaves END_OF_INPUT."""
        self.assertEqual(Tokenizer("  # done").next_clean(), END_OF_INPUT)


class TestStringReading(unittest.TestCase):
    """Test quoted string scanning."""

    def _read(self, text):
        tokenizer = Tokenizer(text)
        return tokenizer.next_string(tokenizer.next())

    def test_quote_styles(self):
        """Test double and single quoted strings."""
        self.assertEqual(self._read('"hello"'), "hello")
        self.assertEqual(self._read("'it\"s'"), 'it"s')

    def test_short_escapes(self):
        """Test the backslash escapes."""
        self.assertEqual(
            self._read(r'"\b\t\n\f\r\"\'\\\/"'), "\b\t\n\f\r\"'\\/"
        )

    def test_unicode_escape(self):
        """Test hex escapes, including surrogate pairs."""
        self.assertEqual(
            self._read('"' + _u("0041") + _u("00e9") + '"'),
            "A\N{LATIN SMALL LETTER E WITH ACUTE}",
        )
        self.assertEqual(
            self._read('"' + _u("d83d") + _u("de00") + '"'), "\U0001F600"
        )

    def test_lone_surrogate(self):
        """Test unpaired surrogates become the replacement character."""
        self.assertEqual(
            self._read('"' + _u("d83d") + 'x"'), "\N{REPLACEMENT CHARACTER}x"
        )
        self.assertEqual(
            self._read('"' + _u("de00") + '"'), "\N{REPLACEMENT CHARACTER}"
        )

    def test_illegal_escape(self):
        """Test unknown escapes and bad hex digits fail."""
        with self.assertRaises(JsonSyntaxError) as cm:
            self._read(r'"\x"')
        self.assertIn("Illegal escape.", str(cm.exception))
        with self.assertRaises(JsonSyntaxError):
            self._read(r'"\u12g4"')

    def test_unterminated(self):
        """Test strings must close before a line break or the end."""
        for text in ['"open', '"line\nbreak"', "'cr\rx'"]:
            with self.assertRaises(JsonSyntaxError) as cm:
                self._read(text)
            self.assertIn("Unterminated string", str(cm.exception))

    def test_string_length_limit(self):
        """Test the configured string length limit."""
        config = ParseConfig(limits=ParseLimits(max_string_length=3))
        tokenizer = Tokenizer('"abcd"', config)
        tokenizer.next()
        with self.assertRaises(SecurityError):
            tokenizer.next_string('"')


class TestValueReading(unittest.TestCase):
    """Test next_value dispatch and unquoted literals."""

    def test_unquoted_literals(self):
        """Test unquoted text is coerced."""
        self.assertEqual(Tokenizer("42").next_value(), 42)
        self.assertEqual(Tokenizer("-1.5e2").next_value(), -150.0)
        self.assertIs(Tokenizer("true").next_value(), True)
        self.assertIs(Tokenizer("null").next_value(), NULL)
        self.assertEqual(Tokenizer("hello").next_value(), "hello")

    def test_literal_stops_at_delimiter(self):
        """Test an unquoted literal ends at a delimiter, which is left unread."""
        tokenizer = Tokenizer("abc,def")
        self.assertEqual(tokenizer.next_value(), "abc")
        self.assertEqual(tokenizer.next(), ",")

    def test_literal_stops_at_whitespace(self):
        """Test whitespace ends an unquoted literal."""
        tokenizer = Tokenizer("two words")
        self.assertEqual(tokenizer.next_value(), "two")

    def test_missing_value(self):
        """Test a delimiter where a value should be."""
        with self.assertRaises(JsonSyntaxError) as cm:
            Tokenizer(",").next_value()
        self.assertIn("Missing value", str(cm.exception))
        with self.assertRaises(JsonSyntaxError):
            Tokenizer("   ").next_value()

    def test_containers(self):
        """Test braces and brackets dispatch to the parser."""
        self.assertIsInstance(Tokenizer("{a:1}").next_value(), JsonObject)
        self.assertIsInstance(Tokenizer("[1]").next_value(), JsonArray)


class TestSeeking(unittest.TestCase):
    """Test next_to and skip_to."""

    def test_next_to(self):
        """Test reading up to a delimiter, trimmed."""
        tokenizer = Tokenizer("  key = value")
        self.assertEqual(tokenizer.next_to("="), "key")
        self.assertEqual(tokenizer.next(), "=")

    def test_next_to_stops_at_line_end(self):
        """Test next_to never crosses a line break."""
        tokenizer = Tokenizer("abc\ndef;")
        self.assertEqual(tokenizer.next_to(";"), "abc")

    def test_skip_to(self):
        """Test skipping to a character that exists."""
        tokenizer = Tokenizer("abc;d")
        self.assertEqual(tokenizer.skip_to(";"), ";")
        self.assertEqual(tokenizer.next(), ";")

    def test_skip_to_missing(self):
        """Test skip_to leaves the position unchanged when the target is absent."""
        tokenizer = Tokenizer("abc")
        tokenizer.next()
        self.assertEqual(tokenizer.skip_to("z"), END_OF_INPUT)
        self.assertEqual(tokenizer.next(), "b")


class TestSyntaxErrors(unittest.TestCase):
    """Test error construction."""

    def test_position_in_message(self):
        """Test the message carries index, column and line."""
        tokenizer = Tokenizer("ab\ncd")
        for _ in range(4):
            tokenizer.next()
        error = tokenizer.syntax_error("Boom")
        self.assertEqual(error.index, 4)
        self.assertEqual(error.line, 2)
        self.assertEqual(error.column, 2)
        self.assertTrue(str(error).startswith("Boom at 4 [character 2 line 2]"))

    def test_context_can_be_disabled(self):
        """Test syntax errors without the input snippet."""
        config = ParseConfig(error_reporting=ErrorReporting(include_context=False))
        error = Tokenizer("secret", config).syntax_error("Boom")
        self.assertEqual(error.context, "")
        self.assertNotIn("secret", str(error))

    def test_context_snippet_window(self):
        """Test the snippet is centred on the error index."""
        config = ParseConfig(error_reporting=ErrorReporting(max_error_context=4))
        tokenizer = Tokenizer("0123456789", config)
        for _ in range(5):
            tokenizer.next()
        self.assertEqual(tokenizer.syntax_error("Boom").context, "3456")

    def test_context_snippet_clipped(self):
        """Test the snippet stops at the edges of the input."""
        self.assertEqual(Tokenizer("").syntax_error("Boom").context, "")
        self.assertEqual(Tokenizer("ab").syntax_error("Boom").context, "ab")


if __name__ == '__main__':
    unittest.main()
