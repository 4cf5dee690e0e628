"""
Parser for quickdatastore - builds JsonObject/JsonArray trees from text.

Recursive descent over the Tokenizer. Beyond strict JSON the grammar accepts
unquoted keys and values, ``=`` or ``=>`` between key and value, ``;`` between
members, trailing separators and empty array slots (read as NULL). The first
error aborts the parse; there is no recovery.
"""

from typing import Any, Optional

from ..security.exceptions import DuplicateKeyError, DuplicateKeySyntaxError
from ..utils.config import ParseConfig
from .constants import END_OF_INPUT
from .tokenizer import Tokenizer
from .values import NULL, JsonArray, JsonObject


def _key_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    from .formatter import format_value  # pylint: disable=import-outside-toplevel

    return format_value(value)


def parse_object(tokenizer: Tokenizer) -> JsonObject:
    """Parse an object starting at the tokenizer's next significant character."""
    if tokenizer.next_clean() != "{":
        raise tokenizer.syntax_error("A JSON object text must begin with '{'")
    tokenizer.validator.enter_structure()

    result = JsonObject()
    while True:
        char = tokenizer.next_clean()
        if char == END_OF_INPUT:
            raise tokenizer.syntax_error("A JSON object text must end with '}'")
        if char == "}":
            break
        tokenizer.back()
        key = _key_text(tokenizer.next_value())

        # The key is followed by ':', '=' or '=>'
        char = tokenizer.next_clean()
        if char == "=":
            if tokenizer.next() != ">":
                tokenizer.back()
        elif char != ":":
            raise tokenizer.syntax_error("Expected a ':' after a key")

        try:
            result.put_once(key, tokenizer.next_value())
        except DuplicateKeyError:
            raise tokenizer.syntax_error(
                f'Duplicate key "{key}"', DuplicateKeySyntaxError
            ) from None

        # Members are separated by ',' or ';'
        char = tokenizer.next_clean()
        if char in (",", ";"):
            if tokenizer.next_clean() == "}":
                break
            tokenizer.back()
        elif char == "}":
            break
        else:
            raise tokenizer.syntax_error("Expected a ',' or '}'")

    tokenizer.validator.exit_structure()
    return result


def parse_array(tokenizer: Tokenizer) -> JsonArray:
    """Parse an array starting at the tokenizer's next significant character."""
    if tokenizer.next_clean() != "[":
        raise tokenizer.syntax_error("A JSON array text must start with '['")
    tokenizer.validator.enter_structure()

    result = JsonArray()
    if tokenizer.next_clean() != "]":
        tokenizer.back()
        while True:
            if tokenizer.next_clean() in (",", ";"):
                tokenizer.back()
                result.put(NULL)
            else:
                tokenizer.back()
                result.put(tokenizer.next_value())

            char = tokenizer.next_clean()
            if char in (",", ";"):
                if tokenizer.next_clean() == "]":
                    break
                tokenizer.back()
            elif char == "]":
                break
            else:
                raise tokenizer.syntax_error("Expected a ',' or ']'")

    tokenizer.validator.exit_structure()
    return result


def _tokenizer_for(text: str, config: Optional[ParseConfig]) -> Tokenizer:
    if not isinstance(text, str):
        raise TypeError(
            f"the JSON object must be str, not {text.__class__.__name__}"
        )
    tokenizer = Tokenizer(text, config)
    tokenizer.validator.validate_input_size(text)
    return tokenizer


def _expect_end(tokenizer: Tokenizer) -> None:
    if tokenizer.next_clean() != END_OF_INPUT:
        raise tokenizer.syntax_error("Unexpected text after JSON value")


def parse(text: str, config: Optional[ParseConfig] = None) -> Any:
    """
    Parse a complete JSON text into a value.

    Args:
        text: The JSON text; comments and the lenient forms are accepted.
        config: Optional limits and error reporting settings.

    Returns:
        A JsonObject, JsonArray, str, bool, int, float or NULL.

    Raises:
        JsonSyntaxError: If the text is malformed or has trailing content.
        DuplicateKeySyntaxError: If an object repeats a key.
        SecurityError: If a configured limit is exceeded.
    """
    tokenizer = _tokenizer_for(text, config)
    value = tokenizer.next_value()
    _expect_end(tokenizer)
    return value


loads = parse


def parse_object_text(text: str, config: Optional[ParseConfig] = None) -> JsonObject:
    """Parse text that must hold a single JSON object."""
    tokenizer = _tokenizer_for(text, config)
    result = parse_object(tokenizer)
    _expect_end(tokenizer)
    return result


def parse_array_text(text: str, config: Optional[ParseConfig] = None) -> JsonArray:
    """Parse text that must hold a single JSON array."""
    tokenizer = _tokenizer_for(text, config)
    result = parse_array(tokenizer)
    _expect_end(tokenizer)
    return result
