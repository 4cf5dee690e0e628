"""
Configuration and limits for quickdatastore.

This module defines resource limits and formatting/storage options.
"""

import logging
from dataclasses import dataclass
from typing import Optional

# Writer scope stack capacity
MAX_WRITER_DEPTH = 200

# Formatter recursion guard
MAX_FORMAT_DEPTH = 500


@dataclass
class ParseLimits:
    """Resource limits applied while parsing JSON text."""

    max_input_size: int = 10 * 1024 * 1024
    max_string_length: int = 1024 * 1024
    # None leaves nesting unbounded
    max_nesting_depth: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")
        if self.max_string_length <= 0:
            raise ValueError("max_string_length must be positive")
        if self.max_nesting_depth is not None and self.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be positive")


@dataclass
class ErrorReporting:
    """Error reporting and context settings."""

    include_context: bool = True
    max_error_context: int = 50


@dataclass
class ParseConfig:
    """Configuration options for quickdatastore parsing."""

    limits: Optional[ParseLimits] = None
    error_reporting: Optional[ErrorReporting] = None

    def __post_init__(self) -> None:
        if self.limits is None:
            self.limits = ParseLimits()
        if self.error_reporting is None:
            self.error_reporting = ErrorReporting()

    @property
    def max_nesting_depth(self) -> Optional[int]:
        """Maximum nesting depth for parsed structures."""
        assert self.limits is not None
        return self.limits.max_nesting_depth

    @property
    def include_context(self) -> bool:
        """Whether syntax errors carry a snippet of the input."""
        assert self.error_reporting is not None
        return self.error_reporting.include_context

    @property
    def max_error_context(self) -> int:
        """Maximum characters of context to include in errors."""
        assert self.error_reporting is not None
        return self.error_reporting.max_error_context


@dataclass
class WriterConfig:
    """Settings for the streaming JsonWriter."""

    max_depth: int = MAX_WRITER_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth <= 0:
            raise ValueError("max_depth must be positive")


@dataclass
class FormatConfig:
    """Settings for whole-tree formatting."""

    indent_factor: int = 0
    max_depth: int = MAX_FORMAT_DEPTH

    def __post_init__(self) -> None:
        if self.indent_factor < 0:
            raise ValueError("indent_factor must not be negative")
        if self.max_depth <= 0:
            raise ValueError("max_depth must be positive")

    @property
    def pretty(self) -> bool:
        """Whether output is indented."""
        return self.indent_factor > 0


@dataclass
class StoreConfig:
    """Settings for the line-oriented file store."""

    swap_suffix: str = ".swap"
    encoding: str = "utf-8"
    separator: str = "="

    # Logging
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        if not self.swap_suffix:
            raise ValueError("swap_suffix must not be empty")
        if len(self.separator) != 1:
            raise ValueError("separator must be a single character")
