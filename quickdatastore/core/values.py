"""
Value model for quickdatastore.

JSON values are represented with Python scalars (bool, int, float, str) plus
three library types:

- NULL, the singleton standing for JSON ``null``. Python's ``None`` means
  "no value": putting ``None`` under a key removes it, while putting ``NULL``
  stores an explicit null.
- JsonObject, a mutable mapping from string keys to values.
- JsonArray, a mutable ordered sequence of values.

Both containers share the typed accessor family (``get_bool``, ``opt_int``,
...) whose coercion rules let strings stand in for booleans and numbers.
"""

import math
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Optional, TextIO, Union

import regex

from ..security.exceptions import (
    DuplicateKeyError,
    InvalidNumberError,
    JsonError,
    KeyNotFoundError,
    TypeMismatchError,
)
from .constants import (
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    NUMBER_LEAD_CHARS,
)
from .interfaces import JsonString

if TYPE_CHECKING:
    from ..utils.config import ParseConfig

# [0-9] rather than \d: the regex module matches any Unicode digit with \d
_INTEGER_PATTERN = regex.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = regex.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)


class JsonNull:
    """The JSON ``null`` value.

    There is exactly one instance, ``NULL``. It is equal to itself and to
    ``None`` so "is null or absent" checks can compare against either.
    """

    _instance: Optional["JsonNull"] = None

    def __new__(cls) -> "JsonNull":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __eq__(self, other: object) -> bool:
        return other is None or other is self

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(None)

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NULL"

    def __str__(self) -> str:
        return "null"

    def __copy__(self) -> "JsonNull":
        return self

    def __deepcopy__(self, memo: dict) -> "JsonNull":
        return self

    def __reduce__(self) -> tuple:
        return (JsonNull, ())


NULL = JsonNull()


def is_number(value: Any) -> bool:
    """Return True for int and float values, excluding bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def test_validity(value: Any) -> None:
    """Raise InvalidNumberError if value is a number JSON cannot carry."""
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise InvalidNumberError("JSON does not allow non-finite numbers.")
    elif is_number(value):
        if not INT64_MIN <= value <= INT64_MAX:
            raise InvalidNumberError(
                f"Integer {value} is outside the 64-bit range."
            )


def parse_number(text: str) -> Union[int, float, None]:
    """Parse a decimal number literal, or return None if text is not one.

    Literals with a fraction or exponent become floats and must be finite;
    the rest become ints and must fit in 64 bits.
    """
    if _INTEGER_PATTERN.fullmatch(text):
        number = int(text)
        if INT64_MIN <= number <= INT64_MAX:
            return number
        return None
    if _DECIMAL_PATTERN.fullmatch(text):
        real = float(text)
        if math.isfinite(real):
            return real
    return None


def string_to_value(string: str) -> Any:
    """Convert an unquoted literal into a bool, number, NULL or string."""
    if string == "":
        return string
    lowered = string.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return NULL
    if string[0] in NUMBER_LEAD_CHARS:
        number = parse_number(string)
        if number is not None:
            return number
    return string


def wrap(value: Any) -> Any:
    """Convert a Python value into a JSON value.

    None becomes NULL, mappings become JsonObject and lists, tuples and sets
    become JsonArray (recursively, as fresh containers). JSON values and
    JsonString objects pass through unchanged.
    """
    if value is None:
        return NULL
    if isinstance(value, (JsonObject, JsonArray, JsonNull, str, bool)):
        return value
    if isinstance(value, (int, float)):
        test_validity(value)
        return value
    if isinstance(value, Mapping):
        return JsonObject(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return JsonArray(value)
    if isinstance(value, JsonString):
        return value
    raise TypeMismatchError(
        f"Unsupported JSON value type {type(value).__name__}."
    )


def to_python(value: Any) -> Any:
    """Convert a JSON value into plain dicts, lists and None."""
    if isinstance(value, (JsonObject, JsonArray)):
        return value.to_python()
    if value is NULL:
        return None
    return value


def _to_bool(value: Any, describe: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise TypeMismatchError(f"{describe} is not a Boolean.")


def _to_integer(value: Any, describe: str, low: int, high: int, kind: str) -> int:
    if is_number(value):
        number = int(value)
    elif isinstance(value, str) and _INTEGER_PATTERN.fullmatch(value):
        number = int(value)
    else:
        raise TypeMismatchError(f"{describe} is not {kind}.")
    if not low <= number <= high:
        raise TypeMismatchError(f"{describe} is not {kind}.")
    return number


def _to_float(value: Any, describe: str) -> float:
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        number = parse_number(value.strip())
        if number is not None:
            return float(number)
    raise TypeMismatchError(f"{describe} is not a number.")


class _TypedAccessors:
    """The get_*/opt_* accessor family shared by JsonObject and JsonArray."""

    def get(self, key: Any) -> Any:
        raise NotImplementedError

    def opt(self, key: Any) -> Any:
        raise NotImplementedError

    def _describe(self, key: Any) -> str:
        raise NotImplementedError

    def is_null(self, key: Any) -> bool:
        """True if there is no value under key or the value is NULL."""
        return NULL == self.opt(key)

    def get_bool(self, key: Any) -> bool:
        """Get a boolean; the strings "true"/"false" (any case) are accepted."""
        return _to_bool(self.get(key), self._describe(key))

    def get_int(self, key: Any) -> int:
        """Get an integer in the 32-bit signed range."""
        return _to_integer(
            self.get(key), self._describe(key), INT32_MIN, INT32_MAX, "an int"
        )

    def get_long(self, key: Any) -> int:
        """Get an integer in the 64-bit signed range."""
        return _to_integer(
            self.get(key), self._describe(key), INT64_MIN, INT64_MAX, "a long"
        )

    def get_double(self, key: Any) -> float:
        """Get a float; numeric strings are parsed."""
        return _to_float(self.get(key), self._describe(key))

    def get_string(self, key: Any) -> str:
        value = self.get(key)
        if isinstance(value, str):
            return value
        raise TypeMismatchError(f"{self._describe(key)} not a string.")

    def get_array(self, key: Any) -> "JsonArray":
        value = self.get(key)
        if isinstance(value, JsonArray):
            return value
        raise TypeMismatchError(f"{self._describe(key)} is not a JsonArray.")

    def get_object(self, key: Any) -> "JsonObject":
        value = self.get(key)
        if isinstance(value, JsonObject):
            return value
        raise TypeMismatchError(f"{self._describe(key)} is not a JsonObject.")

    def opt_bool(self, key: Any, default: bool = False) -> bool:
        try:
            return self.get_bool(key)
        except JsonError:
            return default

    def opt_int(self, key: Any, default: int = 0) -> int:
        try:
            return self.get_int(key)
        except JsonError:
            return default

    def opt_long(self, key: Any, default: int = 0) -> int:
        try:
            return self.get_long(key)
        except JsonError:
            return default

    def opt_double(self, key: Any, default: float = 0.0) -> float:
        try:
            return self.get_double(key)
        except JsonError:
            return default

    def opt_string(self, key: Any, default: str = "") -> str:
        """Get a string, rendering non-string values as JSON text.

        Returns default when the value is absent or NULL.
        """
        value = self.opt(key)
        if NULL == value:
            return default
        if isinstance(value, str):
            return value
        from .formatter import format_value  # pylint: disable=import-outside-toplevel

        return format_value(value)

    def opt_array(
        self, key: Any, default: Optional["JsonArray"] = None
    ) -> Optional["JsonArray"]:
        value = self.opt(key)
        return value if isinstance(value, JsonArray) else default

    def opt_object(
        self, key: Any, default: Optional["JsonObject"] = None
    ) -> Optional["JsonObject"]:
        value = self.opt(key)
        return value if isinstance(value, JsonObject) else default

    def to_string(self) -> str:
        """Compact JSON text."""
        from .formatter import format_value  # pylint: disable=import-outside-toplevel

        return format_value(self)

    def to_pretty_string(self, indent_factor: int = 2, indent: int = 0) -> str:
        """Indented JSON text."""
        from .formatter import format_pretty  # pylint: disable=import-outside-toplevel

        return format_pretty(self, indent_factor, indent)

    def write(self, sink: TextIO) -> TextIO:
        """Write compact JSON text to a text stream."""
        sink.write(self.to_string())
        return sink

    def __str__(self) -> str:
        return self.to_string()


class JsonObject(_TypedAccessors):
    """A JSON object: unique string keys mapped to JSON values.

    Iteration follows insertion order; replacing a value keeps the key's
    position. Values are never None: absent keys are simply missing.
    """

    def __init__(self, mapping: Optional[Mapping[str, Any]] = None):
        self._map: dict[str, Any] = {}
        if mapping is not None:
            for key, value in mapping.items():
                self._check_key(key)
                self._map[key] = wrap(value)

    @classmethod
    def from_text(
        cls, text: str, config: Optional["ParseConfig"] = None
    ) -> "JsonObject":
        """Parse text that must contain a JSON object."""
        from .parser import parse_object_text  # pylint: disable=import-outside-toplevel

        return parse_object_text(text, config)

    @classmethod
    def from_names(cls, other: "JsonObject", names: Iterable[str]) -> "JsonObject":
        """Copy the named entries of another object; missing names are skipped."""
        result = cls()
        for name in names:
            result.put_opt(name, other.opt(name))
        return result

    @staticmethod
    def _check_key(key: Any) -> None:
        if key is None:
            raise TypeMismatchError("Null key.")
        if not isinstance(key, str):
            raise TypeMismatchError(
                f"JsonObject keys must be strings, not {type(key).__name__}."
            )

    def _describe(self, key: Any) -> str:
        return f'JsonObject["{key}"]'

    def get(self, key: str) -> Any:
        """Get the value under key; raises KeyNotFoundError if absent."""
        self._check_key(key)
        value = self._map.get(key)
        if value is None:
            raise KeyNotFoundError(f"{self._describe(key)} not found.")
        return value

    def opt(self, key: str) -> Any:
        """Get the value under key, or None."""
        if not isinstance(key, str):
            return None
        return self._map.get(key)

    def has(self, key: str) -> bool:
        return key in self._map

    def keys(self) -> Iterator[str]:
        return iter(list(self._map))

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(list(self._map.items()))

    def names(self) -> Optional["JsonArray"]:
        """The keys as a JsonArray, or None when the object is empty."""
        if not self._map:
            return None
        return JsonArray(self._map)

    def length(self) -> int:
        return len(self._map)

    def put(self, key: str, value: Any) -> "JsonObject":
        """Store value under key; a value of None removes the key."""
        self._check_key(key)
        if value is None:
            self.remove(key)
        else:
            self._map[key] = wrap(value)
        return self

    def put_once(self, key: str, value: Any) -> "JsonObject":
        """Store value only if key has no entry yet.

        Does nothing when key or value is None.
        """
        if key is not None and value is not None:
            if self.opt(key) is not None:
                raise DuplicateKeyError(f'Duplicate key "{key}"')
            self.put(key, value)
        return self

    def put_opt(self, key: Optional[str], value: Any) -> "JsonObject":
        """Store value only if both key and value are not None."""
        if key is not None and value is not None:
            self.put(key, value)
        return self

    def remove(self, key: str) -> Any:
        """Remove key and return its value, or None if it was absent."""
        return self._map.pop(key, None)

    def accumulate(self, key: str, value: Any) -> "JsonObject":
        """Put value, or collect it into an array with what is already there."""
        current = self.opt(key)
        if current is None:
            return self.put(key, value)
        value = wrap(value)
        if isinstance(current, JsonArray):
            current.put(value)
        else:
            self.put(key, JsonArray([current, value]))
        return self

    def append(self, key: str, value: Any) -> "JsonObject":
        """Append value to the array under key, creating it if absent."""
        current = self.opt(key)
        if current is None:
            self.put(key, JsonArray([value]))
        elif isinstance(current, JsonArray):
            current.put(value)
        else:
            raise TypeMismatchError(f"{self._describe(key)} is not a JsonArray.")
        return self

    def increment(self, key: str) -> "JsonObject":
        """Add one to the number under key, or set it to 1 if absent."""
        value = self.opt(key)
        if value is None:
            self.put(key, 1)
        elif isinstance(value, int) and not isinstance(value, bool):
            self.put(key, value + 1)
        elif isinstance(value, float):
            self.put(key, value + 1.0)
        else:
            raise TypeMismatchError(f"Unable to increment [{key}].")
        return self

    def to_json_array(self, names: Iterable[str]) -> Optional["JsonArray"]:
        """The values for names, in order; None when names is empty."""
        names = list(names)
        if not names:
            return None
        return JsonArray(self.opt(name) for name in names)

    def to_python(self) -> dict[str, Any]:
        return {key: to_python(value) for key, value in self._map.items()}

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JsonObject):
            return self._map == other._map
        if isinstance(other, Mapping):
            return self.to_python() == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JsonObject({self._map!r})"


class JsonArray(_TypedAccessors):
    """A JSON array: an ordered sequence of JSON values.

    Indexes are zero-based and never negative; reads past the end return None
    from the opt family and raise KeyNotFoundError from the get family.
    """

    def __init__(self, items: Optional[Iterable[Any]] = None):
        self._items: list[Any] = []
        if items is not None:
            for item in items:
                self._items.append(wrap(item))

    @classmethod
    def from_text(
        cls, text: str, config: Optional["ParseConfig"] = None
    ) -> "JsonArray":
        """Parse text that must contain a JSON array."""
        from .parser import parse_array_text  # pylint: disable=import-outside-toplevel

        return parse_array_text(text, config)

    @staticmethod
    def _check_index(index: Any) -> None:
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeMismatchError(
                f"JsonArray indexes must be integers, not {type(index).__name__}."
            )

    def _describe(self, key: Any) -> str:
        return f"JsonArray[{key}]"

    def get(self, index: int) -> Any:
        """Get the value at index; raises KeyNotFoundError if out of range."""
        self._check_index(index)
        value = self.opt(index)
        if value is None:
            raise KeyNotFoundError(f"{self._describe(index)} not found.")
        return value

    def opt(self, index: int) -> Any:
        if (
            not isinstance(index, int)
            or isinstance(index, bool)
            or not 0 <= index < len(self._items)
        ):
            return None
        return self._items[index]

    def put(self, value: Any) -> "JsonArray":
        """Append a value; None is stored as NULL."""
        self._items.append(wrap(value))
        return self

    def put_at(self, index: int, value: Any) -> "JsonArray":
        """Set the value at index, padding with NULL past the end."""
        self._check_index(index)
        if index < 0:
            raise KeyNotFoundError(f"{self._describe(index)} not found.")
        value = wrap(value)
        if index < len(self._items):
            self._items[index] = value
        else:
            while len(self._items) < index:
                self._items.append(NULL)
            self._items.append(value)
        return self

    def remove(self, index: int) -> Any:
        """Remove and return the value at index, or None if out of range."""
        if self.opt(index) is None:
            return None
        return self._items.pop(index)

    def length(self) -> int:
        return len(self._items)

    def join(self, separator: str) -> str:
        """The JSON text of each element, joined by separator."""
        from .formatter import format_value  # pylint: disable=import-outside-toplevel

        return separator.join(format_value(item) for item in self._items)

    def to_json_object(self, names: Iterable[str]) -> Optional[JsonObject]:
        """Pair names with this array's values; None if either is empty."""
        names = list(names)
        if not names or not self._items:
            return None
        result = JsonObject()
        for name, value in zip(names, self._items):
            result.put(str(name), value)
        return result

    def to_python(self) -> list[Any]:
        return [to_python(item) for item in self._items]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JsonArray):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self.to_python() == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JsonArray({self._items!r})"
