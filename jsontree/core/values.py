"""
Value tree for jsontree - the type-tagged document model produced by parsing.

Every node is one of six closed variants. Reading a payload through the wrong
accessor raises ``ValueTypeError``. Containers own their children exclusively:
a node can be attached to at most one container and never to itself or one of
its descendants, so every tree is acyclic.
"""

from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from typing import Any, ClassVar, NamedTuple, Optional, Union

from ..security.exceptions import OwnershipError, ValueTypeError
from .constants import INITIAL_CAPACITY


class ValueType(Enum):
    """Discriminant of a value tree node."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


Selector = Union[str, int]


def _check_text(text: str, what: str) -> None:
    # Unpaired surrogates cannot be encoded as UTF-8
    if text.isascii():
        return
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueTypeError(
            f"{what} contains an unpaired surrogate U+{ord(text[e.start]):04X}"
        ) from None


class Value:
    """Base class for every node of a value tree."""

    type: ClassVar[ValueType]

    __slots__ = ("_owner",)

    def __init__(self) -> None:
        self._owner: Optional["Container"] = None

    @property
    def owner(self) -> Optional["Container"]:
        """The container holding this node, or None for a root."""
        return self._owner

    def is_null(self) -> bool:
        return self.type is ValueType.NULL

    def _mismatch(self, expected: ValueType) -> ValueTypeError:
        return ValueTypeError(
            f"Expected {expected.value} value, got {self.type.value}"
        )

    def as_bool(self) -> bool:
        """Boolean payload."""
        raise self._mismatch(ValueType.BOOLEAN)

    def as_number(self) -> float:
        """Number payload."""
        raise self._mismatch(ValueType.NUMBER)

    def as_string(self) -> str:
        """String payload."""
        raise self._mismatch(ValueType.STRING)

    def as_array(self) -> list["Value"]:
        """Array elements, in order."""
        raise self._mismatch(ValueType.ARRAY)

    def as_object(self) -> list["Member"]:
        """Object members, in insertion order, duplicates included."""
        raise self._mismatch(ValueType.OBJECT)

    def get(self, selector: Selector) -> Optional["Value"]:
        """Look up a child; scalars have none, so the result is absent."""
        return None

    def to_python(self) -> Any:
        """Convert the subtree to plain Python objects."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_python()!r})"


class JsonNull(Value):
    """The JSON ``null`` literal."""

    type = ValueType.NULL

    __slots__ = ()

    def to_python(self) -> None:
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JsonNull)

    def __hash__(self) -> int:
        return hash(None)

    def __repr__(self) -> str:
        return "JsonNull()"


class JsonBoolean(Value):
    """``true`` or ``false``."""

    type = ValueType.BOOLEAN

    __slots__ = ("value",)

    def __init__(self, value: bool) -> None:
        super().__init__()
        if not isinstance(value, bool):
            raise ValueTypeError(
                f"Boolean payload must be bool, got {type(value).__name__}"
            )
        self.value = value

    def as_bool(self) -> bool:
        return self.value

    def to_python(self) -> bool:
        return self.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JsonBoolean) and other.value == self.value

    def __hash__(self) -> int:
        return hash((ValueType.BOOLEAN, self.value))


class JsonNumber(Value):
    """A number, always held as a 64-bit float."""

    type = ValueType.NUMBER

    __slots__ = ("value",)

    def __init__(self, value: Union[int, float]) -> None:
        super().__init__()
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueTypeError(
                f"Number payload must be int or float, got {type(value).__name__}"
            )
        try:
            self.value = float(value)
        except OverflowError:
            raise ValueTypeError(
                "Integer is too large to be held as a 64-bit float"
            ) from None

    def as_number(self) -> float:
        return self.value

    def to_python(self) -> float:
        return self.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JsonNumber) and other.value == self.value

    def __hash__(self) -> int:
        return hash((ValueType.NUMBER, self.value))


class JsonString(Value):
    """A string of Unicode text."""

    type = ValueType.STRING

    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        super().__init__()
        if not isinstance(value, str):
            raise ValueTypeError(
                f"String payload must be str, got {type(value).__name__}"
            )
        _check_text(value, "String payload")
        self.value = value

    def as_string(self) -> str:
        return self.value

    def to_python(self) -> str:
        return self.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JsonString) and other.value == self.value

    def __hash__(self) -> int:
        return hash((ValueType.STRING, self.value))


class Container(Value):
    """Shared ownership and growth bookkeeping for arrays and objects."""

    __slots__ = ("_capacity",)

    # Containers are mutable, so they are compared by content but not hashable
    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        super().__init__()
        self._capacity = INITIAL_CAPACITY

    @property
    def capacity(self) -> int:
        """Reserved slots; starts at 16 and doubles whenever it fills up."""
        return self._capacity

    def _adopt(self, child: Value) -> None:
        if not isinstance(child, Value):
            raise ValueTypeError(
                f"Containers hold Value nodes, got {type(child).__name__}"
            )
        if child._owner is not None:
            raise OwnershipError("Value already belongs to another container")

        node: Optional[Value] = self
        while node is not None:
            if node is child:
                raise OwnershipError("A container cannot be placed inside itself")
            node = node._owner

        child._owner = self

    def _reserve(self, count: int) -> None:
        while count > self._capacity:
            self._capacity *= 2

    def __len__(self) -> int:
        raise NotImplementedError


class JsonArray(Container):
    """An ordered sequence of values addressed by 0-based index."""

    type = ValueType.ARRAY

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Value] = ()) -> None:
        super().__init__()
        self._items: list[Value] = []
        for item in items:
            self.append(item)

    def append(self, item: Value) -> None:
        """Attach ``item`` as the last element."""
        self._adopt(item)
        self._reserve(len(self._items) + 1)
        self._items.append(item)

    def as_array(self) -> list[Value]:
        return list(self._items)

    def get(self, selector: Selector) -> Optional[Value]:
        if isinstance(selector, bool) or not isinstance(selector, int):
            return None
        if 0 <= selector < len(self._items):
            return self._items[selector]
        return None

    def __getitem__(self, index: int) -> Value:
        item = self.get(index)
        if item is None:
            raise IndexError(f"array index {index!r} out of range")
        return item

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JsonArray) and other._items == self._items

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self._items]


class Member(NamedTuple):
    """One key/value pair of an object."""

    key: str
    value: Value


class JsonObject(Container):
    """An ordered sequence of key/value members.

    Keys may repeat. Every member is kept, and lookups return the first
    member with a matching key.
    """

    type = ValueType.OBJECT

    __slots__ = ("_members",)

    def __init__(
        self, members: Union[Mapping[str, Value], Iterable[tuple[str, Value]]] = ()
    ) -> None:
        super().__init__()
        self._members: list[Member] = []
        pairs = members.items() if isinstance(members, Mapping) else members
        for key, value in pairs:
            self.append(key, value)

    def append(self, key: str, value: Value) -> None:
        """Attach a member after the existing ones, even if ``key`` repeats."""
        if not isinstance(key, str):
            raise ValueTypeError(f"Object keys must be str, got {type(key).__name__}")
        _check_text(key, "Object key")
        self._adopt(value)
        self._reserve(len(self._members) + 1)
        self._members.append(Member(key, value))

    def as_object(self) -> list[Member]:
        return list(self._members)

    def get(self, selector: Selector) -> Optional[Value]:
        if not isinstance(selector, str):
            return None
        for member in self._members:
            if member.key == selector:
                return member.value
        return None

    def get_all(self, key: str) -> list[Value]:
        """Every value stored under ``key``, in insertion order."""
        return [member.value for member in self._members if member.key == key]

    def keys(self) -> list[str]:
        return [member.key for member in self._members]

    def values(self) -> list[Value]:
        return [member.value for member in self._members]

    def items(self) -> list[Member]:
        return list(self._members)

    def __getitem__(self, key: str) -> Value:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return any(member.key == key for member in self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Member]:
        return iter(self._members)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JsonObject) and other._members == self._members

    def to_python(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in self._members:
            if key not in result:
                result[key] = value.to_python()
        return result


def from_python(obj: Any) -> Value:
    """Build a value tree from plain Python objects.

    Accepts None, bool, int, float, str, lists/tuples and string-keyed
    mappings. An unowned ``Value`` is returned unchanged.
    """
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return JsonNull()
    if isinstance(obj, bool):
        return JsonBoolean(obj)
    if isinstance(obj, (int, float)):
        return JsonNumber(obj)
    if isinstance(obj, str):
        return JsonString(obj)
    if isinstance(obj, (list, tuple)):
        return JsonArray(from_python(item) for item in obj)
    if isinstance(obj, Mapping):
        return JsonObject((key, from_python(value)) for key, value in obj.items())
    raise ValueTypeError(f"Cannot convert {type(obj).__name__} to a JSON value")
