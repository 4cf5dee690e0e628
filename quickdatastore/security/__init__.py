"""
quickdatastore Errors and Limits.

This module provides the exception hierarchy and resource limit checks.
"""

from .exceptions import (
    JsonError,
    JsonSyntaxError,
    NestingTooDeepError,
    SecurityError,
    StoreError,
)
from .limits import LimitValidator

__all__ = [
    'JsonError', 'JsonSyntaxError', 'SecurityError', 'NestingTooDeepError',
    'StoreError', 'LimitValidator',
]
