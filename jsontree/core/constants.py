"""
Common constants and mappings used across the jsontree library.
"""

import re

# Standard JSON escape sequences mapping (escape character -> decoded value)
JSON_ESCAPE_MAP = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# Reverse mapping used by the serializer; "/" is never escaped on output
JSON_UNESCAPE_MAP = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

WHITESPACE = " \t\r\n"
DIGITS = "0123456789"
HEX_DIGITS = "0123456789abcdefABCDEF"

# Characters a string can contain without escaping, matched a run at a time
PLAIN_STRING_RUN = re.compile(r'[^"\\\x00-\x1f]+')

# Containers start with this many slots and double when full
INITIAL_CAPACITY = 16

# Integral numbers below this magnitude are printed without a decimal point
INTEGRAL_PRINT_LIMIT = 1e10

HIGH_SURROGATES = range(0xD800, 0xDC00)
LOW_SURROGATES = range(0xDC00, 0xE000)
REPLACEMENT_CHARACTER = "\ufffd"
