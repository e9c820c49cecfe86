"""Index reads and writes on collections.

Reads never fail for a missing element: an out-of-range List index or an
absent Map key reads as `nil`. Writes mutate the collection in place, so
every binding sharing it sees the change. A List write outside the current
bounds raises an ``IndexError`` error rather than growing the List.
"""

from typing import Any, Optional

from ._utils import python_obj_to_value
from .base import Expression, List, Map, Object
from .complex import String
from .dispatch import current_dispatcher
from .error import Error
from .primitive import Int, nil


def _list_slot(collection: List, operator: str, key: Object) -> Optional[int]:
    """Translate `key` into a position in `collection`, or None if out of range."""
    if not isinstance(key, Int):
        raise Error.type_mismatch(operator, collection, key)
    index = key.value
    if index < 0:
        index += len(collection)
    return index if 0 <= index < len(collection) else None


def index_get(collection: Object, key: Object) -> Object:
    """``collection[key]``"""
    override = current_dispatcher.get().resolve("[]", collection)
    if override is not None:
        return python_obj_to_value(override(collection, key))

    if isinstance(collection, List):
        slot = _list_slot(collection, "[]", key)
        return collection[slot] if slot is not None else nil
    elif isinstance(collection, Map):
        return collection.get(key, nil)
    elif isinstance(collection, String):
        if not isinstance(key, Int):
            raise Error.type_mismatch("[]", collection, key)
        char = collection.char_at(key.value)
        return char if char is not None else nil
    raise Error.type_mismatch("[]", collection, key)


def index_set(collection: Object, key: Object, value: Object) -> Object:
    """``collection[key] = value``; returns `value`."""
    override = current_dispatcher.get().resolve("[]=", collection)
    if override is not None:
        override(collection, key, value)
        return value

    if isinstance(collection, List):
        slot = _list_slot(collection, "[]=", key)
        if slot is None:
            raise Error.index_error(collection, key)
        collection[slot] = value
    elif isinstance(collection, Map):
        collection[key] = value
    else:
        raise Error.type_mismatch("[]=", collection, key)
    return value


def has_index(collection: Object, key: Object) -> bool:
    """Whether `collection[key]` names an existing element."""
    if isinstance(collection, List):
        return _list_slot(collection, "[]", key) is not None
    elif isinstance(collection, Map):
        return key in collection
    # Anything else answers through its `[]`
    return index_get(collection, key) is not nil


class Index(Expression):
    """``collection[key]``; the collection is evaluated before the key."""

    __slots__ = ("collection", "key")

    def __init__(self, collection: Any, key: Any):
        self.collection = collection
        self.key = key

    def evaluate(self):
        collection = self.evaluate_operand(self.collection)
        return index_get(collection, self.evaluate_operand(self.key))

    def __repr__(self):
        return f"{self.__class__.__name__}({self.collection!r}, {self.key!r})"
