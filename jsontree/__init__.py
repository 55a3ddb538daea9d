"""
jsontree - strict JSON parsing into a type-tagged value tree.

jsontree validates text against the RFC 8259 grammar, builds an ordered,
duplicate-key-preserving document tree, reports failures with an exact line
and column, and renders trees back to compact or indented text.

Key Features:
- Strict grammar: no leading zeros, trailing commas or unescaped control characters
- Six closed node types with checked payload accessors
- Objects keep every member in insertion order; lookups return the first match
- Resource ceilings on nesting depth, input size, string and number length
- Compact and pretty serialization
- ``jsontree`` command-line validator and pretty-printer

Quick Start:
    import jsontree

    doc = jsontree.parse('{"a": 1, "b": [1, 2, 3]}')
    jsontree.get(doc, "a")                 # JsonNumber(1.0)
    jsontree.get_path(doc, "b.2")          # JsonNumber(3.0)
    print(jsontree.dumps(doc, "pretty"))

    try:
        jsontree.parse("[01]")
    except jsontree.ParseError as e:
        print(e)                           # Leading zeros not allowed at line 1, column 3
"""

from .core.accessor import get, get_path
from .core.engine import Parser, load, parse, parse_file
from .core.serializer import dump, dumps
from .core.values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    Member,
    Value,
    ValueType,
    from_python,
)
from .security.exceptions import (
    ErrorKind,
    JsonTreeError,
    OwnershipError,
    ParseError,
    SecurityError,
    SerializeError,
    ValueTypeError,
)
from .utils.config import (
    ParseConfig,
    ParseLimits,
    SerializeConfig,
    SerializeMode,
)

__version__ = "0.1.0"
__author__ = "jsontree contributors"

__all__ = [
    # Parsing
    "parse", "load", "parse_file", "Parser",
    # Serialization
    "dumps", "dump",
    # Accessors
    "get", "get_path",
    # Value tree
    "Value", "ValueType", "Member", "from_python",
    "JsonNull", "JsonBoolean", "JsonNumber", "JsonString", "JsonArray", "JsonObject",
    # Configuration classes
    "ParseConfig", "ParseLimits", "SerializeConfig", "SerializeMode",
    # Exception classes
    "JsonTreeError", "ParseError", "SecurityError", "ValueTypeError",
    "OwnershipError", "SerializeError", "ErrorKind",
]
