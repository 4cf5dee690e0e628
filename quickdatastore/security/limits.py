"""
Resource limits and validation for quickdatastore.
This module guards parsing, formatting and writing against runaway nesting
and oversized input.
"""

from typing import Optional

from ..utils.config import ParseLimits
from .exceptions import NestingTooDeepError, SecurityError


class LimitValidator:
    """Tracks nesting depth and validates sizes against configured limits."""

    def __init__(
        self,
        max_nesting_depth: Optional[int] = None,
        limits: Optional[ParseLimits] = None,
    ):
        self.limits = limits
        self.max_nesting_depth = max_nesting_depth
        self.nesting_depth = 0

    @classmethod
    def for_parsing(cls, limits: ParseLimits) -> "LimitValidator":
        """Create a validator enforcing parse limits."""
        return cls(limits.max_nesting_depth, limits)

    def validate_input_size(self, text: str) -> None:
        """Validate that input text size is within limits."""
        if self.limits and len(text) > self.limits.max_input_size:
            raise SecurityError(
                f"Input size {len(text)} exceeds limit {self.limits.max_input_size}"
            )

    def validate_string_length(
        self, string: str, position: Optional[str] = None
    ) -> None:
        """Validate that string length is within limits."""
        if self.limits and len(string) > self.limits.max_string_length:
            pos_info = f" at {position}" if position else ""
            raise SecurityError(
                f"String length {len(string)} exceeds limit "
                f"{self.limits.max_string_length}{pos_info}"
            )

    def enter_structure(self) -> None:
        """Track entering a nested structure and validate depth."""
        if (
            self.max_nesting_depth is not None
            and self.nesting_depth >= self.max_nesting_depth
        ):
            raise NestingTooDeepError(
                f"Nesting depth {self.nesting_depth + 1} exceeds limit "
                f"{self.max_nesting_depth}"
            )
        self.nesting_depth += 1

    def exit_structure(self) -> None:
        """Track exiting a nested structure."""
        if self.nesting_depth > 0:
            self.nesting_depth -= 1
