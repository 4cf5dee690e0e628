"""
Exception hierarchy for quickdatastore.

Every failure raised by the JSON core derives from JsonError so callers can
catch the whole family at once, while the concrete classes also inherit from
the closest builtin (ValueError, TypeError, KeyError) for code that already
handles those.
"""

from typing import Optional


class JsonError(Exception):
    """Base exception for all quickdatastore errors."""


class JsonSyntaxError(JsonError, ValueError):
    """Malformed JSON text, with the position where parsing stopped."""

    def __init__(
        self,
        message: str,
        index: int = 0,
        line: int = 1,
        column: int = 1,
        context: str = "",
    ):
        self.message = message
        self.index = index
        self.line = line
        self.column = column
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        result = f"{self.message} at {self.index} [character {self.column} line {self.line}]"
        if self.context.strip():
            result += f": {self.context.strip()}"
        return result


class TypeMismatchError(JsonError, TypeError):
    """A value is present but has the wrong type or cannot be coerced."""


class KeyNotFoundError(JsonError, KeyError):
    """A required key or index is absent."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class DuplicateKeyError(JsonError):
    """A key was supplied twice where uniqueness is required."""


class DuplicateKeySyntaxError(JsonSyntaxError, DuplicateKeyError):
    """A duplicate key found while parsing an object text."""


class InvalidNumberError(JsonError, ValueError):
    """A non-finite float, or an integer outside the 64-bit range."""


class SecurityError(JsonError):
    """A resource limit was exceeded."""


class NestingTooDeepError(SecurityError):
    """Too many nested objects or arrays."""


class WriterStateError(JsonError):
    """A JsonWriter call arrived in a state where it is not allowed."""


class MisplacedObjectError(WriterStateError):
    """begin_object() called where no value may start."""


class MisplacedArrayError(WriterStateError):
    """begin_array() called where no value may start."""


class MisplacedKeyError(WriterStateError):
    """key() called outside an object or while a value is pending."""


class MisplacedEndError(WriterStateError):
    """end_object()/end_array() does not match the innermost open scope."""


class ValueOutOfSequenceError(WriterStateError):
    """value() called where no value is expected."""


class InternalError(JsonError):
    """A component was driven outside its contract."""


class StoreError(JsonError):
    """Failure reading or writing the backing value store."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{message} ({path})"
        super().__init__(message)
