"""
Accessor API for jsontree - lookups that report absence instead of failing.
"""

from collections.abc import Sequence
from typing import Optional, Union

from .values import Selector, Value, ValueType


def get(container: Optional[Value], selector: Selector) -> Optional[Value]:
    """
    Look up a child of an object (by key) or an array (by index).

    Object lookups return the first member whose key matches exactly. Array
    lookups are bounds-checked. Anything that does not resolve, including a
    ``None`` or non-Value container or a selector of the wrong kind, returns
    None.
    """
    if not isinstance(container, Value):
        return None
    return container.get(selector)


def split_path(path: str) -> list[str]:
    """Split a dotted path such as ``"messages.0.text"`` into segments."""
    if not path:
        return []
    return path.split(".")


def get_path(
    value: Optional[Value], path: Union[str, Sequence[Selector]]
) -> Optional[Value]:
    """
    Follow a chain of selectors from ``value``.

    ``path`` is either a sequence of keys/indexes or a dotted string; in a
    dotted string, a segment made of digits addresses an array element when
    the current node is an array. Returns None as soon as a step is absent.
    """
    selectors = split_path(path) if isinstance(path, str) else list(path)

    current = value
    for selector in selectors:
        if not isinstance(current, Value):
            return None
        if (
            isinstance(selector, str)
            and current.type is ValueType.ARRAY
            and selector.isascii()
            and selector.isdigit()
        ):
            selector = int(selector)
        current = get(current, selector)
    return current
