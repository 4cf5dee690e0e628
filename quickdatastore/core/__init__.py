"""
quickdatastore Core JSON Engine.

This module provides the value model, the lenient parser and the formatter
and streaming writer used to produce JSON text.
"""

from .formatter import format_pretty, format_value, number_to_string, quote
from .parser import parse, parse_array, parse_object
from .tokenizer import Tokenizer
from .values import NULL, JsonArray, JsonNull, JsonObject, string_to_value, wrap
from .writer import JsonWriter, WriterMode

__all__ = [
    'NULL', 'JsonNull', 'JsonObject', 'JsonArray', 'string_to_value', 'wrap',
    'Tokenizer',
    'parse', 'parse_object', 'parse_array',
    'quote', 'number_to_string', 'format_value', 'format_pretty',
    'JsonWriter', 'WriterMode',
]
