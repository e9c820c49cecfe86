"""Operator dispatch.

Every operator is resolved in two steps: an override (a method on a
`UserObject`, or an entry in the `OverrideRegistry` for the receiver's type
tag), then the built-in implementation for the receiver's variant. When
neither exists the operation fails with a ``TypeMismatch`` error.
"""

import logging
from contextvars import ContextVar
from typing import Optional

from ._operators import builtins
from ._utils import python_obj_to_value, repr_, str_, type_tag
from .base import Object, UserObject
from .complex import String
from .error import Error, ErrorKind
from .logic import logical_not
from .overrides import Override, OverrideRegistry


__all__ = ("Dispatcher", "overrides", "dispatcher", "current_dispatcher", "UNARY_OPERATORS")


logger = logging.getLogger(__name__)


UNARY_OPERATORS = {"-": "-@", "*": "*@"}
"""Names under which prefix operators are dispatched."""

_NOT_DISPATCHED = frozenset({"!", "||", "&&"})


class Dispatcher:
    __slots__ = ("registry",)

    def __init__(self, registry: Optional[OverrideRegistry] = None):
        self.registry = registry if registry is not None else OverrideRegistry()

    def resolve(self, name: str, receiver: Object, /) -> Optional[Override]:
        """Find the override for `name` on `receiver`, if there is one."""
        if isinstance(receiver, UserObject):
            method = receiver.find_method(name)
            if method is not None:
                return method
        override = self.registry.lookup(type_tag(receiver), name)
        if override is not None:
            logger.debug("resolved override %s for %s", name, type_tag(receiver))
        return override

    def apply(self, name: str, receiver: Object, *args: Object) -> Object:
        """Apply the operator `name` to `receiver` and at most one argument."""
        if name in _NOT_DISPATCHED:
            raise ValueError(f"Operator {name} is evaluated by the logic nodes, not dispatched")
        if len(args) > 1:
            raise TypeError(f"Operators take at most one argument ({len(args)} given)")

        override = self.resolve(name, receiver)
        if override is not None:
            return python_obj_to_value(override(receiver, *args))

        if name == "!=":
            equality = self.resolve("==", receiver)
            if equality is not None:
                return logical_not(python_obj_to_value(equality(receiver, *args)))

        builtin = builtins.get((name, type_tag(receiver)))
        if builtin is None and name in ("==", "!="):
            # Equality is defined for every value, including user-defined ones
            builtin = builtins[(name, "Object")]
        if builtin is None:
            raise Error.type_mismatch(name, receiver, *args)
        return builtin(receiver, *args)

    def unary(self, operator: str, operand: Object) -> Object:
        """Apply a prefix operator such as unary ``-`` or ``*``."""
        return self.apply(UNARY_OPERATORS.get(operator, operator), operand)

    def to_s(self, value: Object) -> String:
        """Convert `value` to a String, honouring ``to_s`` overrides."""
        override = self.resolve("to_s", value)
        if override is None:
            return str_(value)
        result = python_obj_to_value(override(value))
        if not isinstance(result, String):
            raise Error(
                ErrorKind.TYPE_MISMATCH,
                f"to_s for {type_tag(value)} returned {type_tag(result)}, not String",
                operator="to_s",
                receiver=value,
            )
        return result

    def inspect(self, value: Object) -> String:
        """Get the source-like representation of `value`, honouring ``inspect`` overrides."""
        override = self.resolve("inspect", value)
        if override is None:
            return repr_(value)
        return String(str(python_obj_to_value(override(value))))


overrides = OverrideRegistry()
"""The process-wide override registry."""

dispatcher = Dispatcher(overrides)

current_dispatcher = ContextVar[Dispatcher]("current_dispatcher", default=dispatcher)
"""The dispatcher expression nodes apply operators with."""
