"""
Formatter for quickdatastore - renders JSON values as text.

Compact output is the canonical form: no whitespace, keys in the object's
iteration order. Pretty output puts each member of a multi-member container on
its own line; single-member containers stay inline.

The formatter assumes the value graph is acyclic. Trees built through the
JsonObject/JsonArray API always are; a depth guard catches pathological
nesting and cycles hidden in foreign objects.
"""

from collections.abc import Mapping
from typing import Any, Iterator, Optional

from ..security.exceptions import JsonError, TypeMismatchError
from ..security.limits import LimitValidator
from ..utils.config import FormatConfig
from .constants import JSON_SHORT_ESCAPES
from .interfaces import JsonString
from .values import NULL, JsonArray, JsonObject, is_number, test_validity

# Marks a container frame with no entries left
_EXHAUSTED = object()


def _needs_unicode_escape(char: str) -> bool:
    # Control characters, C1 controls and the U+2000 block (line/paragraph
    # separators among them) break when JSON is embedded in HTML or script
    return (
        char < " "
        or "\x80" <= char < "\xa0"
        or "\u2000" <= char < "\u2100"
    )


def quote(string: Optional[str]) -> str:
    """Produce a double-quoted JSON string literal.

    A backslash is inserted into ``</`` so the text can sit inside a
    ``<script>`` element.
    """
    if not string:
        return '""'

    chunks = ['"']
    previous = ""
    for char in string:
        if char in JSON_SHORT_ESCAPES:
            chunks.append(JSON_SHORT_ESCAPES[char])
        elif char == "/":
            if previous == "<":
                chunks.append("\\")
            chunks.append(char)
        elif _needs_unicode_escape(char):
            chunks.append(f"\\u{ord(char):04x}")
        else:
            chunks.append(char)
        previous = char
    chunks.append('"')
    return "".join(chunks)


def number_to_string(number: Any) -> str:
    """Render an int or float; floats lose trailing zeros and a bare '.'."""
    if not is_number(number):
        raise TypeMismatchError(f"{number!r} is not a number.")
    test_validity(number)
    if isinstance(number, int):
        return str(number)

    string = repr(number)
    if "." in string and "e" not in string and "E" not in string:
        string = string.rstrip("0")
        if string.endswith("."):
            string = string[:-1]
    if string == "-0":
        # Keep the sign and the float kind
        return "-0.0"
    return string


class _Frame:
    """An open container: its remaining entries and the text around them."""

    def __init__(
        self,
        entries: Iterator[Any],
        is_object: bool,
        child_indent: int,
        layout: str,
        close: str,
    ):
        self.entries = entries
        self.is_object = is_object
        self.child_indent = child_indent
        # "compact", "inline" (single entry) or "lines"
        self.layout = layout
        self.close = close
        self.first = True


class _Formatter:
    """Renders one value tree; holds the depth guard for that call.

    Containers are walked with an explicit stack of frames, so nesting is
    bounded by the guard rather than the interpreter's recursion limit.
    """

    def __init__(self, pretty: bool, indent_factor: int, max_depth: int):
        if indent_factor < 0:
            raise ValueError("indent_factor must not be negative")
        self.pretty = pretty
        self.indent_factor = indent_factor
        self.validator = LimitValidator(max_depth)

    def render(self, value: Any, indent: int = 0) -> str:
        chunks: list[str] = []
        stack: list[_Frame] = []
        self._emit(value, indent, chunks, stack)
        while stack:
            frame = stack[-1]
            entry = next(frame.entries, _EXHAUSTED)
            if entry is _EXHAUSTED:
                stack.pop()
                self.validator.exit_structure()
                chunks.append(frame.close)
                continue

            if not frame.first:
                chunks.append(",\n" if frame.layout == "lines" else ",")
            frame.first = False
            if frame.layout == "lines":
                chunks.append(" " * frame.child_indent)
            if frame.is_object:
                key, entry = entry
                chunks.append(quote(key))
                chunks.append(":" if frame.layout == "compact" else ": ")
            self._emit(entry, frame.child_indent, chunks, stack)
        return "".join(chunks)

    def _emit(
        self, value: Any, indent: int, chunks: list[str], stack: list[_Frame]
    ) -> None:
        """Append a scalar's text, or open a frame for a container."""
        if value is None or value is NULL:
            chunks.append("null")
        elif isinstance(value, bool):
            chunks.append("true" if value else "false")
        elif is_number(value):
            chunks.append(number_to_string(value))
        elif isinstance(value, str):
            chunks.append(quote(value))
        elif isinstance(value, JsonObject):
            self._open(iter(value.items()), len(value), True, indent, chunks, stack)
        elif isinstance(value, JsonArray):
            self._open(iter(value), len(value), False, indent, chunks, stack)
        elif isinstance(value, JsonString):
            text = value.to_json_string()
            if not isinstance(text, str):
                raise JsonError(f"Bad value from to_json_string: {text!r}")
            chunks.append(text)
        elif isinstance(value, Mapping):
            self._emit(JsonObject(value), indent, chunks, stack)
        elif isinstance(value, (list, tuple, set, frozenset)):
            self._emit(JsonArray(value), indent, chunks, stack)
        else:
            chunks.append(quote(str(value)))

    def _open(
        self,
        entries: Iterator[Any],
        size: int,
        is_object: bool,
        indent: int,
        chunks: list[str],
        stack: list[_Frame],
    ) -> None:
        self.validator.enter_structure()
        opening, closing = ("{", "}") if is_object else ("[", "]")
        if not self.pretty:
            frame = _Frame(entries, is_object, 0, "compact", closing)
        elif size == 0:
            self.validator.exit_structure()
            chunks.append(opening + closing)
            return
        elif size == 1:
            frame = _Frame(entries, is_object, indent, "inline", closing)
        else:
            frame = _Frame(
                entries,
                is_object,
                indent + self.indent_factor,
                "lines",
                "\n" + " " * indent + closing,
            )
            opening += "\n"
        chunks.append(opening)
        stack.append(frame)


def format_value(value: Any, config: Optional[FormatConfig] = None) -> str:
    """Render value as compact JSON text (or pretty, if config asks for it)."""
    config = config or FormatConfig()
    if config.pretty:
        return format_pretty(value, config.indent_factor, config=config)
    return _Formatter(False, 0, config.max_depth).render(value)


def format_pretty(
    value: Any,
    indent_factor: int = 2,
    indent: int = 0,
    config: Optional[FormatConfig] = None,
) -> str:
    """
    Render value as indented JSON text.

    Args:
        value: The value to render.
        indent_factor: Spaces added per nesting level.
        indent: Indentation of the top level (applies to closing brackets).
        config: Supplies the nesting depth guard.

    Raises:
        InvalidNumberError: If the tree holds a non-finite float.
        NestingTooDeepError: If nesting exceeds config.max_depth.
    """
    max_depth = (config or FormatConfig()).max_depth
    return _Formatter(True, indent_factor, max_depth).render(value, indent)


def dumps(value: Any, indent: Optional[int] = None) -> str:
    """Compact JSON text, or pretty text when indent is given."""
    if indent is None:
        return format_value(value)
    return format_pretty(value, indent)
