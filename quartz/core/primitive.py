"""Primitive types for quartz.

This module defines the scalar values: numbers, booleans and nil. `nil`,
`true` and `false` are singletons; constructing them again returns the same
object.
"""

import functools
from typing import Generic, TypeVar, final

from .base import Object


TypeValue = TypeVar("TypeValue")


@functools.cache
def _singleton(cls: type, *key):
    return object.__new__(cls)


class Primitive(Object):
    pass


class Scalar(Primitive, Generic[TypeValue]):
    __slots__ = ("value",)

    def __init__(self, value: TypeValue, /):
        self.value = value

    def _m_equals_(self, other, active, /):
        return isinstance(other, self.__class__) and self.value == other.value

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.value!r})"

    def _m_str_(self):
        from .complex import String

        return String(str(self.value))

    def _m_repr_(self):
        from .complex import String

        return String(repr(self.value))


class Number(Scalar[TypeValue], Generic[TypeValue]):
    def _m_equals_(self, other, active, /):
        # Integer and Float compare by numeric value
        return isinstance(other, Number) and self.value == other.value

    def __int__(self):
        return int(self.value)

    def __float__(self):
        return float(self.value)


@final
class Int(Number[int]):
    _m_name_ = "Integer"

    def __init__(self, value: int, /):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Int requires an int, not {type(value).__name__}")
        self.value = value


@final
class Float(Number[float]):
    _m_name_ = "Float"

    def __init__(self, value: float, /):
        self.value = float(value)


@final
class Bool(Scalar[bool]):
    _m_name_ = "Boolean"

    def __new__(cls, value: object = False, /):
        return _singleton(cls, bool(value))

    def __init__(self, value: object = False, /):
        self.value = bool(value)

    def __bool__(self):
        return self.value

    def __hash__(self):
        return hash((Bool, self.value))

    def _m_repr_(self):
        from .complex import String

        return String("true" if self.value else "false")

    def _m_str_(self):
        return self._m_repr_()

    def __repr__(self):
        return "true" if self.value else "false"


@final
class Nil(Primitive):
    _m_name_ = "Nil"

    def __new__(cls):
        return _singleton(cls)

    def __bool__(self):
        return False

    def __hash__(self):
        return hash(None)

    def _m_repr_(self):
        from .complex import String

        return String("nil")

    def _m_str_(self):
        from .complex import String

        return String("")

    def __repr__(self):
        return "nil"


nil = Nil()
true = Bool(True)
false = Bool(False)
