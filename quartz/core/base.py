"""Base classes and fundamental types for quartz.

This module defines the `Object` class every quartz value derives from, the
`Expression` interface implemented by evaluable nodes, and the two
shared-ownership collections, `List` and `Map`.
"""

import abc
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    Iterable,
    Iterator,
    Optional,
    TypeVar,
    overload,
)

from ._utils import equals, python_obj_to_value, recursion_guard, repr_, str_

T = TypeVar("T", bound="Object")

if TYPE_CHECKING:
    from .complex import String


class Object:
    _m_name_: str = "Object"
    """The type tag under which overrides for this value are registered."""

    def _m_equals_(self, other: "Object", active: set[tuple[int, int]], /) -> bool:
        """Structural equality; identity unless a subclass says otherwise."""
        _ = active
        return self is other

    def _m_repr_(self) -> "String":
        """Return the source-like representation used by quartz."""
        raise NotImplementedError

    def _m_str_(self) -> "String":
        """Return the built-in string conversion used by interpolation."""
        return repr_(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Object):
            return NotImplemented
        return equals(self, other)

    def __hash__(self):
        return id(self)

    def __str__(self):
        return str_(self).value


class Expression(abc.ABC):
    """A node that needs evaluating in order to produce a value."""

    @abc.abstractmethod
    def evaluate(self) -> Object:
        """Evaluate the expression recursively and get its value."""

    @staticmethod
    def evaluate_operand(obj: "Expression | Object | Any") -> Object:
        """Evaluate `obj` if it is an expression, otherwise treat it as a literal."""
        if isinstance(obj, Expression):
            return obj.evaluate()
        return python_obj_to_value(obj)


class List(Object, Generic[T]):
    """An ordered, mutable sequence of values, shared by every binding that refers to it."""

    _m_name_ = "List"

    def __init__(self, *items: Any):
        self._m_array_: list[Object] = [python_obj_to_value(x) for x in items]

    @classmethod
    def from_iterable(cls, source: Iterable[Any], /) -> "List":
        obj = cls.__new__(cls)
        obj._m_array_ = [python_obj_to_value(x) for x in source]
        return obj

    def _m_equals_(self, other: Object, active: set[tuple[int, int]], /) -> bool:
        if not isinstance(other, List) or len(self) != len(other):
            return False
        pair = (id(self), id(other))
        if pair in active:
            return True
        active.add(pair)
        try:
            return all(equals(a, b, active) for a, b in zip(self._m_array_, other._m_array_))
        finally:
            active.discard(pair)

    def __hash__(self):
        # Constant per variant: contents are mutable and may be cyclic
        return hash(List)

    def __iter__(self) -> Iterator[T]:
        return iter(self._m_array_)

    def __len__(self):
        return len(self._m_array_)

    @overload
    def __getitem__(self, key: slice, /) -> "List[T]": ...
    @overload
    def __getitem__(self, key: int, /) -> T: ...

    def __getitem__(self, key: Any, /):
        result = self._m_array_[key]
        if isinstance(result, list):
            return List.from_iterable(result)
        return result

    def __setitem__(self, key: int, value: Any, /):
        self._m_array_[key] = python_obj_to_value(value)

    def append(self, value: Any, /):
        self._m_array_.append(python_obj_to_value(value))

    def __repr__(self):
        return f"{self.__class__.__name__}.from_iterable({self._m_array_!r})"

    def _m_repr_(self):
        from .complex import String

        with recursion_guard(self) as reentered:
            if reentered:
                return String("[...]")
            return String("[" + ", ".join(repr_(x).value for x in self) + "]")


class Map(Object):
    """An insertion-ordered mapping of values to values.

    Storing under an existing key keeps that key's position; a new key is
    appended at the end.
    """

    _m_name_ = "Map"

    def __init__(self, items: Iterable[tuple[Any, Any]] = (), /):
        self._m_dict_: dict[Object, Object] = {}
        for key, value in items:
            self[key] = value

    @classmethod
    def from_dict(cls, source: dict[Any, Any], /) -> "Map":
        obj = cls.__new__(cls)
        obj._m_dict_ = {python_obj_to_value(k): python_obj_to_value(v) for k, v in source.items()}
        return obj

    def _m_equals_(self, other: Object, active: set[tuple[int, int]], /) -> bool:
        if not isinstance(other, Map) or len(self) != len(other):
            return False
        pair = (id(self), id(other))
        if pair in active:
            return True
        active.add(pair)
        try:
            for key, value in self._m_dict_.items():
                if key not in other._m_dict_:
                    return False
                if not equals(value, other._m_dict_[key], active):
                    return False
            return True
        finally:
            active.discard(pair)

    def __hash__(self):
        # Constant per variant: contents are mutable and may be cyclic
        return hash(Map)

    def __len__(self):
        return len(self._m_dict_)

    def __iter__(self):
        """Iterate over the keys of the map."""
        return iter(self._m_dict_)

    def __contains__(self, key: Any, /) -> bool:
        return python_obj_to_value(key) in self._m_dict_

    def __setitem__(self, key: Any, value: Any, /):
        self._m_dict_[python_obj_to_value(key)] = python_obj_to_value(value)

    def __getitem__(self, key: Any, /) -> Object:
        return self._m_dict_[python_obj_to_value(key)]

    def get(self, key: Any, default: Optional[Object] = None, /) -> Optional[Object]:
        return self._m_dict_.get(python_obj_to_value(key), default)

    def items(self):
        return self._m_dict_.items()

    def __repr__(self):
        return f"{self.__class__.__name__}({list(self._m_dict_.items())!r})"

    def _m_repr_(self):
        from .complex import String

        if len(self) == 0:
            return String("{}")

        with recursion_guard(self) as reentered:
            if reentered:
                return String("{...}")
            return String("{" + ", ".join(f"{repr_(k)} => {repr_(v)}" for k, v in self.items()) + "}")


class UserObject(Object):
    """A value defined outside the core (instances, modules, callables).

    Only its method table is visible here: the dispatcher looks up operator
    implementations in it before anything else.
    """

    def __init__(self, type_name: str, methods: Optional[dict[str, Callable[..., Any]]] = None, /, **attributes: Any):
        self._m_name_ = type_name
        self.methods: dict[str, Callable[..., Any]] = dict(methods or {})
        self.attributes = attributes

    def find_method(self, name: str, /) -> Optional[Callable[..., Any]]:
        return self.methods.get(name)

    def __repr__(self):
        return f"{self.__class__.__name__}({self._m_name_!r})"

    def _m_repr_(self):
        from .complex import String

        return String(f"#<{self._m_name_}>")
