import operator
from typing import Callable

from ._utils import equals
from .base import List, Map, Object
from .complex import String
from .error import Error
from .primitive import Bool, Float, Int, Number


__all__ = ("builtins",)


# NOTE: The items are populated below
builtins: dict[tuple[str, str], Callable[..., Object]] = {}
"""Built-in operator implementations keyed by (operator name, receiver type tag)."""


NUMERIC = ("Integer", "Float")
ALL = ("Object", "Nil", "Boolean", "Integer", "Float", "String", "Symbol", "List", "Map")


def _op(name: str, *type_tags: str):
    def decorator(func):
        for type_tag in type_tags:
            builtins[(name, type_tag)] = func
        return func

    return decorator


def _numeric_operands(operator: str, a: Number, b: Object):
    """Promote both operands to a common numeric type."""
    if not isinstance(b, Number):
        raise Error.type_mismatch(operator, a, b)
    if isinstance(a, Float) or isinstance(b, Float):
        try:
            return Float, float(a.value), float(b.value)
        except OverflowError:
            raise Error.argument_error(f"Integer operand of {operator} is too large for a Float") from None
    return Int, a.value, b.value


@_op("+", *NUMERIC)
def add(a, b):
    cls, x, y = _numeric_operands("+", a, b)
    return cls(x + y)


@_op("-", *NUMERIC)
def subtract(a, b):
    cls, x, y = _numeric_operands("-", a, b)
    return cls(x - y)


@_op("*", *NUMERIC)
def multiply(a, b):
    cls, x, y = _numeric_operands("*", a, b)
    return cls(x * y)


@_op("/", *NUMERIC)
def divide(a, b):
    cls, x, y = _numeric_operands("/", a, b)
    if y == 0:
        raise Error.division_by_zero("/", a)
    # Integer division floors, pairing with the floored modulo below
    return cls(x // y) if cls is Int else cls(x / y)


@_op("%", *NUMERIC)
def modulo(a, b):
    cls, x, y = _numeric_operands("%", a, b)
    if y == 0:
        raise Error.division_by_zero("%", a)
    return cls(x % y)


@_op("-@", *NUMERIC)
def negate(a):
    return subtract(Int(0), a)


@_op("+", "String")
def concatenate(a, b):
    if not isinstance(b, String):
        raise Error.type_mismatch("+", a, b)
    return String(a.value + b.value)


@_op("*", "String")
def repeat(a, b):
    if not isinstance(b, Int):
        raise Error.type_mismatch("*", a, b)
    if b.value < 0:
        raise Error.argument_error(f"negative repeat count {b.value}")
    return String(a.value * b.value)


@_op("+", "List")
def concatenate_lists(a, b):
    if not isinstance(b, List):
        raise Error.type_mismatch("+", a, b)
    return List.from_iterable((*a, *b))


@_op("+", "Map")
def merge(a, b):
    if not isinstance(b, Map):
        raise Error.type_mismatch("+", a, b)
    merged = Map.from_dict(a._m_dict_)
    # dict.update keeps the position of keys already present
    merged._m_dict_.update(b._m_dict_)
    return merged


@_op("*@", "List")
def splat_list(a):
    return a


@_op("*@", "Map")
def splat_map(a):
    return List.from_iterable(List(k, v) for k, v in a.items())


@_op("==", *ALL)
def equal(a, b):
    return Bool(equals(a, b))


@_op("!=", *ALL)
def not_equal(a, b):
    return Bool(not equals(a, b))


def _compare(name: str, compare: Callable[[object, object], bool], a: Object, b: Object) -> Bool:
    if isinstance(a, Number) and isinstance(b, Number) or isinstance(a, String) and isinstance(b, String):
        return Bool(compare(a.value, b.value))
    raise Error.type_mismatch(name, a, b)


@_op(">", *NUMERIC, "String")
def gt(a, b):
    return _compare(">", operator.gt, a, b)


@_op(">=", *NUMERIC, "String")
def ge(a, b):
    return _compare(">=", operator.ge, a, b)


@_op("<", *NUMERIC, "String")
def lt(a, b):
    return _compare("<", operator.lt, a, b)


@_op("<=", *NUMERIC, "String")
def le(a, b):
    return _compare("<=", operator.le, a, b)


def _members(collection: "List | Map") -> list[Object]:
    if isinstance(collection, Map):
        return [List(k, v) for k, v in collection.items()]
    return list(collection)


def _is_subset(operator: str, a: Object, b: Object) -> bool:
    """Check that every member of `a` is a member of `b`, ignoring order and repetition."""
    if type(a) is not type(b):
        raise Error.type_mismatch(operator, a, b)
    b_members = _members(b)
    return all(any(equals(x, y) for y in b_members) for x in _members(a))


@_op("<", "List", "Map")
def strict_subset(a, b):
    return Bool(_is_subset("<", a, b) and not _is_subset("<", b, a))


@_op("<=", "List", "Map")
def subset(a, b):
    return Bool(_is_subset("<=", a, b))


@_op(">", "List", "Map")
def strict_superset(a, b):
    return Bool(_is_subset(">", b, a) and not _is_subset(">", a, b))


@_op(">=", "List", "Map")
def superset(a, b):
    return Bool(_is_subset(">=", b, a))
