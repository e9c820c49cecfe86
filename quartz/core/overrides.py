"""Registry of user-supplied operator and method implementations."""

from contextlib import contextmanager
from typing import Any, Callable, Optional


Override = Callable[..., Any]
"""Called as ``override(receiver, *args)``; returns a value or a Python object convertible to one."""


class OverrideRegistry:
    """Maps (type tag, operator or method name) to an implementation.

    The dispatcher consults this before its built-in table, so registering
    ``("Integer", "+")`` changes what ``1 + 2`` does.
    """

    __slots__ = ("_table",)

    def __init__(self):
        self._table: dict[str, dict[str, Override]] = {}

    def register(self, type_tag: str, name: str, func: Optional[Override] = None, /):
        """Register `func` for `name` on values tagged `type_tag`.

        Can be used as a decorator when `func` is omitted.
        """

        def decorator(func: Override) -> Override:
            self._table.setdefault(type_tag, {})[name] = func
            return func

        return decorator(func) if func is not None else decorator

    def unregister(self, type_tag: str, name: str, /) -> None:
        methods = self._table.get(type_tag)
        if methods is None or name not in methods:
            raise KeyError(f"No override {name!r} registered for {type_tag}")
        del methods[name]
        if not methods:
            del self._table[type_tag]

    def lookup(self, type_tag: str, name: str, /) -> Optional[Override]:
        methods = self._table.get(type_tag)
        return methods.get(name) if methods is not None else None

    def __contains__(self, key: tuple[str, str]) -> bool:
        return self.lookup(*key) is not None

    def clear(self) -> None:
        self._table.clear()

    @contextmanager
    def overriding(self, type_tag: str, name: str, func: Override, /):
        """Register `func` for the duration of the block, restoring any previous override."""
        previous = self.lookup(type_tag, name)
        self.register(type_tag, name, func)
        try:
            yield func
        finally:
            if previous is not None:
                self.register(type_tag, name, previous)
            else:
                self.unregister(type_tag, name)
