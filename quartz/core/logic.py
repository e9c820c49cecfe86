"""Truthiness and the short-circuit logical operators.

`!`, `||` and `&&` are control flow rather than methods: they are never
looked up in the override registry.
"""

from .base import Expression, Object
from .primitive import Bool, false, nil


def is_truthy(value: Object) -> bool:
    """Only `nil` and `false` are falsy; `0`, `""`, `[]` and `{}` are all truthy."""
    return value is not nil and value is not false


def logical_not(value: Object) -> Bool:
    return Bool(not is_truthy(value))


class Not(Expression):
    __slots__ = ("operand",)

    def __init__(self, operand):
        self.operand = operand

    def evaluate(self):
        return logical_not(self.evaluate_operand(self.operand))

    def __repr__(self):
        return f"{self.__class__.__name__}({self.operand!r})"


class _ShortCircuit(Expression):
    __slots__ = ("left", "right")

    def __init__(self, left, right):
        self.left = left
        self.right = right

    def __repr__(self):
        return f"{self.__class__.__name__}({self.left!r}, {self.right!r})"


class Or(_ShortCircuit):
    """``left || right``: the left value if truthy, otherwise the right value, uncoerced."""

    def evaluate(self):
        left = self.evaluate_operand(self.left)
        if is_truthy(left):
            return left
        return self.evaluate_operand(self.right)


class And(_ShortCircuit):
    """``left && right``: the left value if falsy, otherwise the right value, uncoerced."""

    def evaluate(self):
        left = self.evaluate_operand(self.left)
        if not is_truthy(left):
            return left
        return self.evaluate_operand(self.right)
