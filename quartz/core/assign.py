"""The four assignment forms.

Each form stores at most one binding per evaluation. The or- and
and-assignment forms decide from the current value whether the right-hand
side runs at all; when it does not, none of its side effects happen.

Targets are either a variable name or an index into a collection
(``list[0] += 1``). For an index target the collection and key are evaluated
once, before the right-hand side.
"""

import abc
import logging
from typing import Any, NamedTuple, Optional, Union

from ._context import current_scope
from .access import has_index, index_get, index_set
from .base import Expression, Object
from .dispatch import current_dispatcher
from .error import Error
from .logic import is_truthy
from .primitive import nil


__all__ = (
    "AssignmentOutcome",
    "NameTarget",
    "IndexTarget",
    "assign",
    "assign_operation",
    "assign_or",
    "assign_and",
    "Assignment",
    "IndexAssignment",
    "OperationalAssignment",
    "OrAssignment",
    "AndAssignment",
)


logger = logging.getLogger(__name__)


class AssignmentOutcome(NamedTuple):
    value: Object
    """The value of the assignment expression."""
    mutated: bool
    """Whether a binding or collection slot was written."""


class _BoundTarget(abc.ABC):
    """A target whose sub-expressions have been evaluated."""

    @abc.abstractmethod
    def exists(self) -> bool: ...

    @abc.abstractmethod
    def get(self) -> Object:
        """Current value; only meaningful when `exists()`."""

    @abc.abstractmethod
    def store(self, value: Object) -> None: ...

    def require(self) -> Object:
        """Current value for an operational assignment; a missing index reads as `nil`."""
        return self.get()


class NameTarget:
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def bind(self) -> "_BoundName":
        return _BoundName(self.name)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name!r})"


class _BoundName(_BoundTarget):
    __slots__ = ("name", "scope")

    def __init__(self, name: str):
        self.name = name
        self.scope = current_scope.get()

    def exists(self):
        return self.scope.exists(self.name)

    def get(self):
        return self.scope.get(self.name)

    def require(self):
        value = self.scope.get(self.name)
        if value is None:
            raise Error.undefined_variable(self.name)
        return value

    def store(self, value):
        if self.scope.is_constant(self.name):
            raise Error.constant_reassignment(self.name)
        self.scope.set(self.name, value)
        logger.debug("bound %s", self.name)


class IndexTarget:
    __slots__ = ("collection", "key")

    def __init__(self, collection: Any, key: Any):
        self.collection = collection
        self.key = key

    def bind(self) -> "_BoundIndex":
        collection = Expression.evaluate_operand(self.collection)
        return _BoundIndex(collection, Expression.evaluate_operand(self.key))

    def __repr__(self):
        return f"{self.__class__.__name__}({self.collection!r}, {self.key!r})"


class _BoundIndex(_BoundTarget):
    __slots__ = ("collection", "key")

    def __init__(self, collection: Object, key: Object):
        self.collection = collection
        self.key = key

    def exists(self):
        return has_index(self.collection, self.key)

    def get(self):
        return index_get(self.collection, self.key)

    def store(self, value):
        index_set(self.collection, self.key, value)
        logger.debug("stored into %s slot", self.collection._m_name_)


Target = Union[NameTarget, IndexTarget]


def _as_target(target: "Target | str") -> Target:
    return NameTarget(target) if isinstance(target, str) else target


def assign(target: "Target | str", expression: Any) -> AssignmentOutcome:
    """``target = expression``"""
    bound = _as_target(target).bind()
    value = Expression.evaluate_operand(expression)
    bound.store(value)
    return AssignmentOutcome(value, True)


def assign_operation(target: "Target | str", operator: str, expression: Any) -> AssignmentOutcome:
    """``target op= expression``: a variable target must already be bound."""
    bound = _as_target(target).bind()
    current = bound.require()
    argument = Expression.evaluate_operand(expression)
    value = current_dispatcher.get().apply(operator, current, argument)
    bound.store(value)
    return AssignmentOutcome(value, True)


def assign_or(target: "Target | str", expression: Any) -> AssignmentOutcome:
    """``target ||= expression``: keeps a truthy current value, otherwise stores the right-hand side."""
    bound = _as_target(target).bind()
    if bound.exists():
        current = bound.get()
        if is_truthy(current):
            return AssignmentOutcome(current, False)
    value = Expression.evaluate_operand(expression)
    bound.store(value)
    return AssignmentOutcome(value, True)


def assign_and(target: "Target | str", expression: Any) -> AssignmentOutcome:
    """``target &&= expression``: a missing target counts as `nil`.

    A truthy current value is replaced by the right-hand side. Otherwise the
    right-hand side is not evaluated, and a missing target is bound to `nil`.
    """
    bound = _as_target(target).bind()
    existed = bound.exists()
    current: Optional[Object] = bound.get() if existed else nil
    if is_truthy(current):
        value = Expression.evaluate_operand(expression)
        bound.store(value)
        return AssignmentOutcome(value, True)
    if not existed:
        bound.store(nil)
        return AssignmentOutcome(nil, True)
    return AssignmentOutcome(current, False)


class _AssignmentExpression(Expression, abc.ABC):
    @abc.abstractmethod
    def assign(self) -> AssignmentOutcome: ...

    def evaluate(self):
        return self.assign().value


class Assignment(_AssignmentExpression):
    __slots__ = ("target", "value")

    def __init__(self, target: "Target | str", value: Any):
        self.target = _as_target(target)
        self.value = value

    def assign(self):
        return assign(self.target, self.value)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.target!r}, {self.value!r})"


class IndexAssignment(Assignment):
    """``collection[key] = value``: changes the collection's contents, never a variable binding."""

    def __init__(self, collection: Any, key: Any, value: Any):
        super().__init__(IndexTarget(collection, key), value)


class OperationalAssignment(_AssignmentExpression):
    __slots__ = ("target", "operator", "value")

    def __init__(self, target: "Target | str", operator: str, value: Any):
        if operator in ("||", "&&"):
            raise ValueError(f"Use {'OrAssignment' if operator == '||' else 'AndAssignment'} for {operator}=")
        self.target = _as_target(target)
        self.operator = operator
        self.value = value

    def assign(self):
        return assign_operation(self.target, self.operator, self.value)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.target!r}, {self.operator!r}, {self.value!r})"


class OrAssignment(Assignment):
    def assign(self):
        return assign_or(self.target, self.value)


class AndAssignment(Assignment):
    def assign(self):
        return assign_and(self.target, self.value)
