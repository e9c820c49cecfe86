from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, Iterator, Optional


from .context import set_contextvar


# Re-export
__all__ = (
    "set_contextvar",
    "python_obj_to_value",
    "type_tag",
    "equals",
    "recursion_guard",
    "repr_",
    "str_",
)


if TYPE_CHECKING:
    from ..base import Object
    from ..complex import String


def python_obj_to_value(obj) -> "Object":
    """Convert a Python object to a quartz analog."""
    from ..base import List, Map, Object

    if isinstance(obj, Object):
        return obj
    elif obj is None:
        from ..primitive import nil

        return nil
    elif isinstance(obj, bool):
        from ..primitive import Bool

        return Bool(obj)
    elif isinstance(obj, int):
        from ..primitive import Int

        return Int(obj)
    elif isinstance(obj, float):
        from ..primitive import Float

        return Float(obj)
    elif isinstance(obj, str):
        from ..complex import String

        return String(obj)
    elif isinstance(obj, (list, tuple)):
        return List.from_iterable(obj)
    elif isinstance(obj, dict):
        return Map.from_dict(obj)
    else:
        raise NotImplementedError(f"{python_obj_to_value.__name__} is not implemented for type {type(obj)}")


def type_tag(obj: "Object") -> str:
    """Get the name under which overrides for `obj` are registered."""
    return obj._m_name_


def equals(a: "Object", b: "Object", active: Optional[set[tuple[int, int]]] = None, /) -> bool:
    """Structural equality between two values.

    `active` holds the pairs of collections currently being compared, so a
    pair met again further down a cyclic structure is taken as equal.
    """
    if a is b:
        return True
    return a._m_equals_(b, active if active is not None else set())


_reprs_in_progress = ContextVar[frozenset[int]]("reprs_in_progress", default=frozenset())


@contextmanager
def recursion_guard(obj: Any) -> Iterator[bool]:
    """Yield True if `obj` is already being printed further up the stack."""
    in_progress = _reprs_in_progress.get()
    if id(obj) in in_progress:
        yield True
        return
    with set_contextvar(_reprs_in_progress, in_progress | {id(obj)}):
        yield False


def repr_(obj: "Object") -> "String":
    """Get the source-like representation of the value."""
    from ..complex import String

    if hasattr(obj, "_m_repr_"):
        try:
            return obj._m_repr_()
        except NotImplementedError:
            pass
    return String(f"#<{type_tag(obj)}>")


def str_(obj: "Object") -> "String":
    """Get the built-in string conversion of the value (no overrides)."""
    if hasattr(obj, "_m_str_"):
        try:
            return obj._m_str_()
        except NotImplementedError:
            pass
    return repr_(obj)
