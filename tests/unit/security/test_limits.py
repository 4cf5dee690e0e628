"""
Test cases for resource limits and validation.

Tests focus on size limits and nesting depth tracking.
"""

import unittest

from quickdatastore.security.exceptions import NestingTooDeepError, SecurityError
from quickdatastore.security.limits import LimitValidator
from quickdatastore.utils.config import ParseLimits


class TestLimitValidator(unittest.TestCase):
    """Test LimitValidator functionality for security constraints."""

    def setUp(self):
        """Set up test validator with custom limits."""
        self.limits = ParseLimits(
            max_input_size=1000,
            max_string_length=50,
            max_nesting_depth=3,
        )
        self.validator = LimitValidator.for_parsing(self.limits)

    def test_input_size_validation_pass(self):
        """Test input size validation within limits."""
        self.validator.validate_input_size("x" * 1000)  # Should not raise

    def test_input_size_validation_fail(self):
        """Test input size validation exceeding limits."""
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_input_size("x" * 1001)
        self.assertIn("Input size 1001 exceeds limit 1000", str(cm.exception))

    def test_string_length_validation_fail(self):
        """Test string length validation exceeding limits."""
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_string_length("x" * 51, "line 5")
        self.assertIn("String length 51 exceeds limit 50", str(cm.exception))
        self.assertIn("at line 5", str(cm.exception))

    def test_string_length_validation_no_position(self):
        """Test string length validation without position info."""
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_string_length("x" * 51)
        self.assertNotIn(" at ", str(cm.exception))

    def test_nesting_depth(self):
        """Test entering structures up to the limit."""
        for _ in range(3):
            self.validator.enter_structure()
        with self.assertRaises(NestingTooDeepError) as cm:
            self.validator.enter_structure()
        self.assertIn("Nesting depth 4 exceeds limit 3", str(cm.exception))
        self.assertIsInstance(cm.exception, SecurityError)

    def test_exit_structure(self):
        """Test leaving structures frees depth."""
        self.validator.enter_structure()
        self.validator.enter_structure()
        self.validator.exit_structure()
        self.assertEqual(self.validator.nesting_depth, 1)
        self.validator.exit_structure()
        self.validator.exit_structure()
        self.assertEqual(self.validator.nesting_depth, 0)


class TestUnboundedValidator(unittest.TestCase):
    """Test a validator without limits."""

    def test_no_limits(self):
        """Test nothing is enforced when no limits are given."""
        validator = LimitValidator()
        for _ in range(1000):
            validator.enter_structure()
        validator.validate_input_size("x" * 100000)
        validator.validate_string_length("x" * 100000)
        self.assertEqual(validator.nesting_depth, 1000)

    def test_depth_only(self):
        """Test a depth ceiling without size limits."""
        validator = LimitValidator(1)
        validator.enter_structure()
        with self.assertRaises(NestingTooDeepError):
            validator.enter_structure()


if __name__ == '__main__':
    unittest.main()
