"""
Test cases for the quickdatastore exception hierarchy.

Tests focus on message formatting and on which builtin exceptions each error
can be caught as.
"""

import unittest

from quickdatastore.security.exceptions import (
    DuplicateKeyError,
    DuplicateKeySyntaxError,
    InvalidNumberError,
    JsonError,
    JsonSyntaxError,
    KeyNotFoundError,
    MisplacedEndError,
    NestingTooDeepError,
    SecurityError,
    StoreError,
    TypeMismatchError,
    WriterStateError,
)


class TestJsonSyntaxError(unittest.TestCase):
    """Test syntax error construction."""

    def test_message_format(self):
        """Test the position suffix."""
        error = JsonSyntaxError("Missing value", index=7, line=2, column=3)
        self.assertEqual(str(error), "Missing value at 7 [character 3 line 2]")
        self.assertEqual(error.message, "Missing value")
        self.assertEqual((error.index, error.line, error.column), (7, 2, 3))

    def test_context_suffix(self):
        """Test a context snippet is appended when present."""
        error = JsonSyntaxError("Bad", 0, 1, 1, "  {oops  ")
        self.assertEqual(str(error), "Bad at 0 [character 1 line 1]: {oops")

    def test_builtin_bases(self):
        """Test syntax errors are ValueErrors."""
        self.assertTrue(issubclass(JsonSyntaxError, ValueError))
        self.assertTrue(issubclass(JsonSyntaxError, JsonError))

    def test_duplicate_key_syntax_error(self):
        """Test the parser's duplicate key error belongs to both families."""
        error = DuplicateKeySyntaxError('Duplicate key "a"', 5)
        self.assertIsInstance(error, DuplicateKeyError)
        self.assertIsInstance(error, JsonSyntaxError)


class TestHierarchy(unittest.TestCase):
    """Test the remaining classes and their bases."""

    def test_builtin_bases(self):
        """Test each error is catchable as its closest builtin."""
        self.assertTrue(issubclass(TypeMismatchError, TypeError))
        self.assertTrue(issubclass(KeyNotFoundError, KeyError))
        self.assertTrue(issubclass(InvalidNumberError, ValueError))

    def test_families(self):
        """Test subclass grouping."""
        self.assertTrue(issubclass(NestingTooDeepError, SecurityError))
        self.assertTrue(issubclass(MisplacedEndError, WriterStateError))
        for cls in (SecurityError, WriterStateError, StoreError, DuplicateKeyError):
            self.assertTrue(issubclass(cls, JsonError))

    def test_key_not_found_message(self):
        """Test KeyNotFoundError prints its message without quotes."""
        self.assertEqual(str(KeyNotFoundError("missing")), "missing")

    def test_store_error_path(self):
        """Test StoreError names the file involved."""
        error = StoreError("Error writing file", "/tmp/x.qds")
        self.assertEqual(str(error), "Error writing file (/tmp/x.qds)")
        self.assertEqual(error.path, "/tmp/x.qds")
        self.assertEqual(str(StoreError("plain")), "plain")


if __name__ == '__main__':
    unittest.main()
