"""Expression nodes for literals, variables and dispatched operators."""

import abc
from typing import Any, Iterable

from ._context import current_scope
from ._utils import python_obj_to_value
from .base import Expression, List, Map, Object
from .dispatch import current_dispatcher
from .error import Error
from .primitive import nil


class Literal(Expression):
    """A value written directly in the source."""

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = python_obj_to_value(value)

    def evaluate(self):
        return self.value

    def __repr__(self):
        return f"{self.__class__.__name__}({self.value!r})"


class ListLiteral(Expression):
    """``[a, b, ...]``; each evaluation allocates a new List."""

    __slots__ = ("items",)

    def __init__(self, items: Iterable[Any] = ()):
        self.items = list(items)

    def evaluate(self):
        return List.from_iterable(self.evaluate_operand(item) for item in self.items)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.items!r})"


class MapLiteral(Expression):
    """``{k => v, ...}``; keys and values are evaluated pairwise, left to right."""

    __slots__ = ("pairs",)

    def __init__(self, pairs: Iterable[tuple[Any, Any]] = ()):
        self.pairs = list(pairs)

    def evaluate(self):
        map_ = Map()
        for key, value in self.pairs:
            key = self.evaluate_operand(key)
            map_[key] = self.evaluate_operand(value)
        return map_

    def __repr__(self):
        return f"{self.__class__.__name__}({self.pairs!r})"


class Variable(Expression):
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def evaluate(self):
        value = current_scope.get().get(self.name)
        if value is None:
            raise Error.undefined_variable(self.name)
        return value

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name!r})"


class Operation(Expression, abc.ABC):
    __slots__ = ("operator",)

    def __init__(self, operator: str):
        if operator in ("!", "||", "&&"):
            raise ValueError(f"Operator {operator} has its own node in quartz.core.logic")
        self.operator = operator


class UnaryOperation(Operation):
    """A prefix operator: ``-x`` or ``*x``."""

    __slots__ = ("operand",)

    def __init__(self, operator: str, operand: Any):
        super().__init__(operator)
        self.operand = operand

    def evaluate(self):
        return current_dispatcher.get().unary(self.operator, self.evaluate_operand(self.operand))

    def __repr__(self):
        return f"{self.__class__.__name__}({self.operator!r}, {self.operand!r})"


class BinaryOperation(Operation):
    __slots__ = ("operands",)

    def __init__(self, operator: str, operands: list[Any]):
        super().__init__(operator)
        if len(operands) != 2:
            raise ValueError(f"Binary operation takes exactly 2 operands ({len(operands)} given)")
        self.operands = operands

    def evaluate(self):
        receiver, argument = (self.evaluate_operand(operand) for operand in self.operands)
        return current_dispatcher.get().apply(self.operator, receiver, argument)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.operator!r}, {self.operands!r})"


class ToString(Expression):
    """Convert the operand's value with the override-aware ``to_s``."""

    __slots__ = ("operand",)

    def __init__(self, operand: Any):
        self.operand = operand

    def evaluate(self) -> Object:
        return current_dispatcher.get().to_s(self.evaluate_operand(self.operand))

    def __repr__(self):
        return f"{self.__class__.__name__}({self.operand!r})"


class StatementList(Expression):
    """Statements evaluated in order; the value is the last statement's, or `nil` when empty."""

    __slots__ = ("statements",)

    def __init__(self, statements: Iterable[Any] = ()):
        self.statements = list(statements)

    def evaluate(self):
        result: Object = nil
        for statement in self.statements:
            result = self.evaluate_operand(statement)
        return result

    def __iter__(self):
        return iter(self.statements)

    def __len__(self):
        return len(self.statements)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.statements!r})"
