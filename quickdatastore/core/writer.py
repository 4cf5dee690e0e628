"""
Streaming JSON writer for quickdatastore.

JsonWriter emits one JSON document to a text stream through a small state
machine, so callers cannot produce malformed text: a key must precede every
object value, brackets must balance, and keys are unique per object.

    writer = JsonWriter()
    writer.begin_object().key("name").value("quick").key("tags")
    writer.begin_array().value(1).value(2).end_array().end_object()
    writer.getvalue()  # '{"name":"quick","tags":[1,2]}'
"""

import io
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, TextIO

from ..security.exceptions import (
    DuplicateKeyError,
    MisplacedArrayError,
    MisplacedEndError,
    MisplacedKeyError,
    MisplacedObjectError,
    TypeMismatchError,
    ValueOutOfSequenceError,
)
from ..security.limits import LimitValidator
from ..utils.config import WriterConfig
from .formatter import format_value, quote


class WriterMode(Enum):
    """What the writer accepts next."""

    INITIAL = "initial"
    OBJECT_KEY = "object_key"
    OBJECT_VALUE = "object_value"
    ARRAY = "array"
    DONE = "done"


@dataclass
class _Scope:
    is_object: bool
    keys: set[str] = field(default_factory=set)


class JsonWriter:
    """Writes a single JSON document incrementally."""

    def __init__(
        self, sink: Optional[TextIO] = None, config: Optional[WriterConfig] = None
    ):
        self.sink = sink if sink is not None else io.StringIO()
        self.config = config or WriterConfig()
        self.validator = LimitValidator(self.config.max_depth)
        self.mode = WriterMode.INITIAL
        self._stack: list[_Scope] = []
        # True once the current scope holds an element
        self._comma = False

    @property
    def depth(self) -> int:
        return len(self._stack)

    def begin_object(self) -> "JsonWriter":
        """Open an object as the next value."""
        if not self._value_may_start():
            raise MisplacedObjectError("Misplaced object.")
        self._open(_Scope(is_object=True), "{")
        return self

    def begin_array(self) -> "JsonWriter":
        """Open an array as the next value."""
        if not self._value_may_start():
            raise MisplacedArrayError("Misplaced array.")
        self._open(_Scope(is_object=False), "[")
        return self

    def key(self, name: str) -> "JsonWriter":
        """Write an object key; a value must follow."""
        if self.mode != WriterMode.OBJECT_KEY:
            raise MisplacedKeyError("Misplaced key.")
        if name is None:
            raise TypeMismatchError("Null key.")
        if not isinstance(name, str):
            raise TypeMismatchError(
                f"JsonObject keys must be strings, not {type(name).__name__}."
            )
        scope = self._stack[-1]
        if name in scope.keys:
            raise DuplicateKeyError(f'Duplicate key "{name}"')

        scope.keys.add(name)
        if self._comma:
            self.sink.write(",")
        self.sink.write(quote(name))
        self.sink.write(":")
        self.mode = WriterMode.OBJECT_VALUE
        return self

    def value(self, value: Any) -> "JsonWriter":
        """Write a complete value: a scalar, NULL/None or a whole tree."""
        if self.mode not in (WriterMode.ARRAY, WriterMode.OBJECT_VALUE):
            raise ValueOutOfSequenceError("Value out of sequence.")
        # Render first so a bad value leaves the output untouched
        text = format_value(value)
        self._emit(text)
        return self

    def end_object(self) -> "JsonWriter":
        """Close the innermost object."""
        if self.mode != WriterMode.OBJECT_KEY:
            raise MisplacedEndError("Misplaced end_object.")
        self._close("}")
        return self

    def end_array(self) -> "JsonWriter":
        """Close the innermost array."""
        if self.mode != WriterMode.ARRAY:
            raise MisplacedEndError("Misplaced end_array.")
        self._close("]")
        return self

    def getvalue(self) -> str:
        """The text written so far, when the sink buffers it."""
        return self.sink.getvalue()  # type: ignore[attr-defined]

    def _value_may_start(self) -> bool:
        return self.mode in (
            WriterMode.INITIAL,
            WriterMode.ARRAY,
            WriterMode.OBJECT_VALUE,
        )

    def _emit(self, text: str) -> None:
        if self.mode == WriterMode.ARRAY and self._comma:
            self.sink.write(",")
        self.sink.write(text)
        if self.mode == WriterMode.OBJECT_VALUE:
            self.mode = WriterMode.OBJECT_KEY
        self._comma = True

    def _open(self, scope: _Scope, bracket: str) -> None:
        self.validator.enter_structure()
        self._emit(bracket)
        self._stack.append(scope)
        self.mode = WriterMode.OBJECT_KEY if scope.is_object else WriterMode.ARRAY
        self._comma = False

    def _close(self, bracket: str) -> None:
        self._stack.pop()
        self.validator.exit_structure()
        self.sink.write(bracket)
        if not self._stack:
            self.mode = WriterMode.DONE
        elif self._stack[-1].is_object:
            self.mode = WriterMode.OBJECT_KEY
        else:
            self.mode = WriterMode.ARRAY
        self._comma = True

    def __str__(self) -> str:
        if isinstance(self.sink, io.StringIO):
            return self.sink.getvalue()
        return super().__str__()

    def __repr__(self) -> str:
        return f"JsonWriter(mode={self.mode.name}, depth={self.depth})"
