"""
jsontree Core Parsing Engine.

This module provides the cursor, value tree, grammar parser, serializer and
accessor functions.
"""

from .accessor import get, get_path
from .cursor import Cursor, Position
from .engine import Parser, load, parse, parse_file
from .serializer import Serializer, dump, dumps
from .values import (
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

__all__ = [
    'parse', 'load', 'parse_file', 'Parser',
    'dumps', 'dump', 'Serializer',
    'get', 'get_path',
    'Cursor', 'Position',
    'Value', 'ValueType', 'Member', 'from_python',
    'JsonNull', 'JsonBoolean', 'JsonNumber', 'JsonString', 'JsonArray', 'JsonObject',
]
