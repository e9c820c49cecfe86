"""Variable binding store used by the evaluator, plus the context variables that select it."""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Optional, Protocol

from ._utils import set_contextvar
from .base import Object


class VariableStore(Protocol):
    """What the assignment evaluator needs from a binding store."""

    def get(self, name: str, /) -> Optional[Object]: ...

    def set(self, name: str, value: Object, /) -> None: ...

    def exists(self, name: str, /) -> bool: ...

    def is_constant(self, name: str, /) -> bool: ...


class Scope:
    """A linked list of local variable dictionaries.

    It represents all the bindings available in the current lexical scope.
    Storing to a name bound in an enclosing scope updates that binding;
    storing to an unbound name creates it in this scope. Names starting with
    an uppercase letter are constants once bound.
    """

    __slots__ = ("locals", "parent")

    def __init__(self, locals_: Optional[dict[str, Object]] = None, parent: Optional["Scope"] = None):
        self.locals: dict[str, Object] = locals_ if locals_ is not None else {}
        self.parent = parent

    def find_owner(self, name: str, /) -> Optional["Scope"]:
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope.locals:
                return scope
            scope = scope.parent
        return None

    def get(self, name: str, /) -> Optional[Object]:
        owner = self.find_owner(name)
        return owner.locals[name] if owner is not None else None

    def set(self, name: str, value: Object, /) -> None:
        owner = self.find_owner(name)
        (owner if owner is not None else self).locals[name] = value

    def exists(self, name: str, /) -> bool:
        return self.find_owner(name) is not None

    def is_constant(self, name: str, /) -> bool:
        return name[:1].isupper() and self.exists(name)

    def __getitem__(self, name: str) -> Object:
        value = self.get(name)
        if value is None:
            raise KeyError(f"Key {name!r} not found in scope.")
        return value

    def __contains__(self, name: str) -> bool:
        return self.exists(name)

    def __repr__(self):
        return f"{self.__class__.__name__}({list(self.locals)!r}, parent={self.parent!r})"


global_scope = Scope()
"""The outermost scope; process-wide like the constants bound in it."""


current_scope = ContextVar[Scope]("current_scope", default=global_scope)
"""The scope variable references and assignments resolve against."""


@contextmanager
def nested_scope(locals_: Optional[dict[str, Object]] = None):
    """Evaluate the block in a fresh scope nested inside the current one."""
    scope = Scope(locals_, parent=current_scope.get())
    with set_contextvar(current_scope, scope):
        yield scope
