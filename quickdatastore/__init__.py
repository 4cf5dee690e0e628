"""
quickdatastore - a forgiving JSON toolkit with a tiny key/value persistence layer.

quickdatastore reads the loose JSON people write by hand (comments, unquoted
keys and values, single quotes, ``=`` separators, trailing commas) into
JsonObject/JsonArray trees, writes canonical JSON back out, and persists
Python values by key in a plain text file.

Quick Start:
    import quickdatastore as qds

    config = qds.loads("{name: demo, retries = 3; debug: true,}")
    config.get_int("retries")      # 3
    config.to_string()             # '{"name":"demo","retries":3,"debug":true}'

    # Streaming output
    writer = qds.JsonWriter()
    writer.begin_array().value(1).value("two").end_array()
    writer.getvalue()              # '[1,"two"]'

    # Persistence
    store = qds.DataStore.for_path("/tmp/settings.qds")
    store.save("volume", 11)
    store.load("volume")           # 11
"""

from .core.formatter import dumps, format_pretty, format_value, number_to_string, quote
from .core.interfaces import JsonSerializable, JsonString, ValueStore
from .core.parser import loads, parse
from .core.values import NULL, JsonArray, JsonNull, JsonObject, string_to_value
from .core.writer import JsonWriter, WriterMode
from .security.exceptions import (
    DuplicateKeyError,
    InvalidNumberError,
    JsonError,
    JsonSyntaxError,
    KeyNotFoundError,
    NestingTooDeepError,
    SecurityError,
    StoreError,
    TypeMismatchError,
    WriterStateError,
)
from .store.datastore import DataStore, default_store_path
from .store.mapping import TypeRegistry
from .store.value_store import FileValueStore, MemoryValueStore
from .utils.config import FormatConfig, ParseConfig, ParseLimits, StoreConfig, WriterConfig

__version__ = "0.1.0"
__author__ = "quickdatastore contributors"

__all__ = [
    # Parsing and formatting
    "parse", "loads", "dumps", "format_value", "format_pretty", "quote",
    "number_to_string", "string_to_value",
    # Value model
    "NULL", "JsonNull", "JsonObject", "JsonArray",
    # Streaming output
    "JsonWriter", "WriterMode",
    # Protocols
    "JsonString", "JsonSerializable", "ValueStore",
    # Persistence
    "DataStore", "default_store_path", "TypeRegistry",
    "FileValueStore", "MemoryValueStore",
    # Configuration classes
    "ParseConfig", "ParseLimits", "WriterConfig", "FormatConfig", "StoreConfig",
    # Exception classes
    "JsonError", "JsonSyntaxError", "TypeMismatchError", "KeyNotFoundError",
    "DuplicateKeyError", "InvalidNumberError", "SecurityError",
    "NestingTooDeepError", "WriterStateError", "StoreError",
]
