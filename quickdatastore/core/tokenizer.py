"""
Tokenizer for quickdatastore - walks JSON text one character at a time.

The tokenizer accepts a lenient superset of JSON: ``//``, ``#`` and
``/* */`` comments, single-quoted strings and unquoted literals.
"""

from typing import Any, Optional

from ..security.exceptions import InternalError, JsonSyntaxError
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .constants import END_OF_INPUT, HEX_DIGITS, JSON_ESCAPE_MAP, UNQUOTED_DELIMITERS
from .values import string_to_value


class Tokenizer:
    """Character cursor over JSON text with one character of pushback."""

    def __init__(
        self,
        text: str,
        config: Optional[ParseConfig] = None,
        validator: Optional[LimitValidator] = None,
    ) -> None:
        self.text = text
        self.config = config or ParseConfig()
        assert self.config.limits is not None
        self.validator = validator or LimitValidator.for_parsing(self.config.limits)
        self.index = 0
        self.line = 1
        self.column = 1
        self._saved = (0, 1, 1)
        self._can_back = False

    def more(self) -> bool:
        """True while unread characters remain."""
        return self.index < len(self.text)

    def end(self) -> bool:
        """True once the input is exhausted."""
        return not self.more()

    def next(self) -> str:
        """Consume and return the next character, or END_OF_INPUT."""
        self._saved = (self.index, self.line, self.column)
        self._can_back = True
        if self.index >= len(self.text):
            return END_OF_INPUT

        char = self.text[self.index]
        self.index += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def back(self) -> None:
        """Un-consume the character returned by the last next()."""
        if not self._can_back:
            raise InternalError("Stepping back two steps is not supported")
        self.index, self.line, self.column = self._saved
        self._can_back = False

    def next_char(self, expected: str) -> str:
        """Consume the next character, which must be expected."""
        char = self.next()
        if char != expected:
            raise self.syntax_error(
                f"Expected '{expected}' and instead saw '{char}'"
            )
        return char

    def next_count(self, count: int) -> str:
        """Consume and return the next count characters."""
        if count == 0:
            return ""
        if self.index + count > len(self.text):
            raise self.syntax_error("Substring bounds error")
        return "".join(self.next() for _ in range(count))

    def next_clean(self) -> str:
        """Return the next character that is not whitespace or comment."""
        while True:
            char = self.next()
            if char == "/":
                # Peek so a lone '/' can still be stepped back over
                following = self.text[self.index : self.index + 1]
                if following == "/":
                    self.next()
                    self._skip_line()
                elif following == "*":
                    self.next()
                    self._skip_block_comment()
                else:
                    return char
            elif char == "#":
                self._skip_line()
            elif char == END_OF_INPUT or char > " ":
                return char

    def _skip_line(self) -> None:
        while True:
            char = self.next()
            if char in (END_OF_INPUT, "\n", "\r"):
                return

    def _skip_block_comment(self) -> None:
        while True:
            char = self.next()
            if char == END_OF_INPUT:
                raise self.syntax_error("Unclosed comment")
            if char == "*":
                if self.next() == "/":
                    return
                self.back()

    def next_string(self, quote: str) -> str:
        """Read a quoted string whose opening quote was already consumed."""
        chunks: list[str] = []
        while True:
            char = self.next()
            if char in (END_OF_INPUT, "\n", "\r"):
                raise self.syntax_error("Unterminated string")
            if char == "\\":
                char = self.next()
                if char == "u":
                    chunks.append(self._read_unicode_escape())
                elif char in JSON_ESCAPE_MAP:
                    chunks.append(JSON_ESCAPE_MAP[char])
                else:
                    raise self.syntax_error("Illegal escape.")
            elif char == quote:
                string = "".join(chunks)
                self.validator.validate_string_length(string, f"line {self.line}")
                return string
            else:
                chunks.append(char)

    def _read_unicode_escape(self) -> str:
        """Read the four hex digits of a \\u escape, combining surrogates."""
        code_point = self._read_hex_digits()
        if 0xD800 <= code_point <= 0xDBFF:
            return self._handle_high_surrogate(code_point)
        if 0xDC00 <= code_point <= 0xDFFF:
            return "\ufffd"  # Unicode replacement character
        return chr(code_point)

    def _read_hex_digits(self) -> int:
        hex_digits = self.next_count(4)
        if any(char not in HEX_DIGITS for char in hex_digits):
            raise self.syntax_error("Illegal escape.")
        return int(hex_digits, 16)

    def _handle_high_surrogate(self, code_point: int) -> str:
        """Pair a high surrogate with an immediately following low one."""
        following = self.text[self.index : self.index + 6]
        if (
            len(following) == 6
            and following.startswith("\\u")
            and all(char in HEX_DIGITS for char in following[2:])
        ):
            low = int(following[2:], 16)
            if 0xDC00 <= low <= 0xDFFF:
                self.next_count(6)
                return chr(0x10000 + ((code_point - 0xD800) << 10) + (low - 0xDC00))
        return "\ufffd"

    def next_to(self, delimiters: str) -> str:
        """Read up to (not including) a delimiter or line end; trims the result."""
        chunks: list[str] = []
        while True:
            char = self.next()
            if char in (END_OF_INPUT, "\n", "\r") or char in delimiters:
                if char != END_OF_INPUT:
                    self.back()
                return "".join(chunks).strip()
            chunks.append(char)

    def skip_to(self, target: str) -> str:
        """Skip to target and return it, or stay put and return END_OF_INPUT."""
        start = (self.index, self.line, self.column)
        while True:
            char = self.next()
            if char == END_OF_INPUT:
                self.index, self.line, self.column = start
                self._can_back = False
                return END_OF_INPUT
            if char == target:
                self.back()
                return char

    def next_value(self) -> Any:
        """Read the next value: object, array, string, number, bool or NULL."""
        char = self.next_clean()
        if char in ('"', "'"):
            return self.next_string(char)
        if char == "{":
            from .parser import parse_object  # pylint: disable=import-outside-toplevel

            self.back()
            return parse_object(self)
        if char == "[":
            from .parser import parse_array  # pylint: disable=import-outside-toplevel

            self.back()
            return parse_array(self)

        # Unquoted text: a number, true/false/null, or a bare string
        chunks: list[str] = []
        while (
            char != END_OF_INPUT and char > " " and char not in UNQUOTED_DELIMITERS
        ):
            chunks.append(char)
            char = self.next()
        self.back()

        literal = "".join(chunks).strip()
        if not literal:
            raise self.syntax_error("Missing value")
        self.validator.validate_string_length(literal, f"line {self.line}")
        return string_to_value(literal)

    def _context_snippet(self) -> str:
        """The text around the cursor, at most max_error_context characters."""
        half = self.config.max_error_context // 2
        start = max(0, self.index - half)
        return self.text[start : self.index + half]

    def syntax_error(
        self, message: str, error_class: type = JsonSyntaxError
    ) -> JsonSyntaxError:
        """Build (not raise) a syntax error at the current position."""
        context = self._context_snippet() if self.config.include_context else ""
        error: JsonSyntaxError = error_class(
            message, self.index, self.line, self.column, context
        )
        return error

    def __repr__(self) -> str:
        return f"Tokenizer(at {self.index} [character {self.column} line {self.line}])"
