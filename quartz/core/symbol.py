"""Interned symbols.

The symbol table is process-wide: it is created empty on import, only ever
grows, and ids handed out by `intern` stay valid for the life of the process.
"""

import logging
import re
import threading

from .base import Object


__all__ = ("SymbolTable", "symbols", "intern", "resolve", "Symbol")


logger = logging.getLogger(__name__)


class SymbolTable:
    """An append-only mapping between names and small integer ids."""

    __slots__ = ("_ids", "_names", "_lock")

    def __init__(self):
        self._ids: dict[str, int] = {}
        self._names: list[str] = []
        self._lock = threading.Lock()

    def intern(self, name: str, /) -> int:
        """Get the id of `name`, allocating the next id on first sight."""
        id_ = self._ids.get(name)
        if id_ is not None:
            return id_
        with self._lock:
            id_ = self._ids.get(name)
            if id_ is None:
                id_ = len(self._names)
                self._names.append(name)
                self._ids[name] = id_
                logger.debug("interned symbol %r as %d", name, id_)
        return id_

    def resolve(self, id_: int, /) -> str:
        """Get the name an id was allocated for."""
        if not 0 <= id_ < len(self._names):
            raise LookupError(f"Symbol id {id_} was never interned")
        return self._names[id_]

    def __contains__(self, name: str, /) -> bool:
        return name in self._ids

    def __len__(self):
        return len(self._names)


symbols = SymbolTable()
"""The process-wide symbol table."""


def intern(name: str, /) -> int:
    return symbols.intern(name)


def resolve(id_: int, /) -> str:
    return symbols.resolve(id_)


_BARE_SYMBOL = re.compile(r"[A-Za-z_][A-Za-z0-9_]*[?!]?")


class Symbol(Object):
    """A value carrying an interned id; two symbols are equal iff their ids are."""

    _m_name_ = "Symbol"
    __slots__ = ("id",)

    def __init__(self, name: str, /):
        self.id = symbols.intern(name)

    @classmethod
    def from_id(cls, id_: int, /) -> "Symbol":
        symbols.resolve(id_)
        obj = cls.__new__(cls)
        obj.id = id_
        return obj

    @property
    def name(self) -> str:
        return symbols.resolve(self.id)

    def _m_equals_(self, other, active, /):
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self):
        return hash((Symbol, self.id))

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name!r})"

    def _m_repr_(self):
        from .complex import String

        name = self.name
        if _BARE_SYMBOL.fullmatch(name):
            return String(":" + name)
        return String(":" + str(String(name)._m_repr_()))

    def _m_str_(self):
        from .complex import String

        return String(self.name)
