"""
Core interfaces and protocols for quickdatastore.

These define the seams between the JSON core and the things that plug into it:
objects that render their own JSON text, backing stores for serialized
documents, and records that map themselves to and from JSON objects.
"""

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .values import JsonObject


@runtime_checkable
class JsonString(Protocol):
    """An object that produces its own JSON text.

    The formatter and writer emit the returned text verbatim, so it must be a
    syntactically complete JSON value.
    """

    def to_json_string(self) -> str:
        """Return the JSON text for this object."""
        ...


@runtime_checkable
class ValueStore(Protocol):
    """Key/value storage for serialized JSON documents."""

    def write_value(self, key: str, value: str) -> None:
        """Store the document text under key, replacing any previous one."""
        ...

    def load_value(self, key: str) -> Optional[str]:
        """Return the document text stored under key, or None."""
        ...


@runtime_checkable
class JsonSerializable(Protocol):
    """A record that maps itself to and from a JSON object."""

    def to_json_object(self) -> "JsonObject":
        """Return the record's fields as a JsonObject."""
        ...

    @classmethod
    def from_json_object(cls, data: "JsonObject") -> "JsonSerializable":
        """Build a record from the fields in data."""
        ...
