from typing import Optional

from .base import Object


_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


class String(Object):
    _m_name_ = "String"

    def __init__(self, value: str = ""):
        self.value = value if isinstance(value, str) else str(value)

    def _m_equals_(self, other, active, /):
        return isinstance(other, String) and self.value == other.value

    def _m_repr_(self):
        escaped = "".join(_ESCAPES.get(c, c) for c in self.value).replace("#{", "\\#{")
        return String('"' + escaped + '"')

    def _m_str_(self):
        return self

    def char_at(self, index: int, /) -> Optional["String"]:
        """Get the one-character String at `index`, counting from the end if negative."""
        if -len(self.value) <= index < len(self.value):
            return String(self.value[index])
        return None

    def __len__(self):
        return len(self.value)

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.value!r})"

    def __str__(self):
        return self.value
