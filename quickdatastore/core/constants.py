"""
Common constants and mappings used across the quickdatastore library.
"""

# Sentinel returned by the tokenizer once the input is exhausted
END_OF_INPUT = ""

# Escape sequences accepted inside quoted strings (after the backslash)
JSON_ESCAPE_MAP = {
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "f": "\f",
    "r": "\r",
    '"': '"',
    "'": "'",
    "\\": "\\",
    "/": "/",
}

# Short escapes written by the formatter
JSON_SHORT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}

# Characters that end an unquoted literal
UNQUOTED_DELIMITERS = frozenset(',:]}/\\"[{;=#')

# Characters that may start a numeric literal
NUMBER_LEAD_CHARS = frozenset("0123456789.-+")

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
