"""Interpolated templates such as ``"total: #{a + b}!"``.

A template is the sum ``segment0 + to_s(expr1) + segment1 + ...``, evaluated
left to right. `Interpolation.expand` builds exactly that tree;
`Interpolation.evaluate` produces the same result in one pass.
"""

from typing import Iterable, Union

from .base import Expression
from .complex import String
from .dispatch import current_dispatcher
from .nodes import BinaryOperation, Literal, ToString


Part = Union[str, String, Expression]


class Interpolation(Expression):
    """A template of literal text segments and embedded expressions.

    With ``raw=True`` (an interpolation that is not building a string, such
    as a map key) a template holding a single expression and no text yields
    that expression's value unconverted.
    """

    __slots__ = ("parts", "raw")

    def __init__(self, parts: Iterable[Part], *, raw: bool = False):
        self.parts: list[String | Expression] = [String(part) if isinstance(part, str) else part for part in parts]
        self.raw = raw

    def _is_single_expression(self) -> bool:
        expressions = [part for part in self.parts if isinstance(part, Expression)]
        texts = [part for part in self.parts if isinstance(part, String) and part.value]
        return len(expressions) == 1 and not texts

    def expand(self) -> Expression:
        """Rewrite the template into an equivalent tree of ``+`` and ``to_s`` nodes."""
        parts = list(self.parts)
        first = parts.pop(0) if parts and isinstance(parts[0], String) else String("")
        tree: Expression = Literal(first)
        for part in parts:
            if isinstance(part, String):
                if not part.value:
                    continue
                node: Expression = Literal(part)
            else:
                node = ToString(part)
            tree = BinaryOperation("+", [tree, node])
        return tree

    def evaluate(self):
        if self.raw and self._is_single_expression():
            (expression,) = (part for part in self.parts if isinstance(part, Expression))
            return expression.evaluate()

        dispatcher = current_dispatcher.get()
        if dispatcher.resolve("+", String("")) is not None:
            # String concatenation is overridden; only the expanded tree reaches it
            return self.expand().evaluate()

        buffer = []
        for part in self.parts:
            if isinstance(part, String):
                buffer.append(part.value)
            else:
                buffer.append(dispatcher.to_s(part.evaluate()).value)
        return String("".join(buffer))

    def __repr__(self):
        return f"{self.__class__.__name__}({self.parts!r}, raw={self.raw!r})"
