import dataclasses
from typing import Any

from .._utils import python_obj_to_value, repr_
from ..base import Map, Object
from ..complex import String
from ..symbol import Symbol


class ErrorKind:
    """Names of the error kinds raised by the core."""

    CONSTANT_REASSIGNMENT = "ConstantReassignment"
    UNDEFINED_VARIABLE = "UndefinedVariable"
    DIVISION_BY_ZERO = "DivisionByZero"
    TYPE_MISMATCH = "TypeMismatch"
    INDEX_ERROR = "IndexError"
    ARGUMENT_ERROR = "ArgumentError"


class Error(Object, Exception):
    """A raised quartz value describing a failure.

    The core never defines an exception class per failure; the `kind` symbol
    says what went wrong and `details` carries the values involved.
    """

    _m_name_ = "Error"

    def __init__(self, kind: "str | Symbol", message: str = "", /, **details: Any):
        self.kind = kind if isinstance(kind, Symbol) else Symbol(kind)
        self.message = String(message)
        self.details = Map((Symbol(key), python_obj_to_value(value)) for key, value in details.items())
        super().__init__(f"{self.kind.name}: {message}" if message else self.kind.name)

    def is_kind(self, kind: "str | Symbol", /) -> bool:
        return self.kind == (kind if isinstance(kind, Symbol) else Symbol(kind))

    def _m_str_(self):
        return self.message if self.message.value else String(self.kind.name)

    def _m_repr_(self):
        return String(f"#<Error {self.kind.name}: {self.message.value}>")

    def __repr__(self):
        return f"{self.__class__.__name__}({self.kind.name!r}, {self.message.value!r})"

    @classmethod
    def type_mismatch(cls, operator: str, receiver: Object, *args: Object) -> "Error":
        if args:
            types = " and ".join(x._m_name_ for x in (receiver, *args))
            message = f"no operator {operator} for {types}"
        else:
            message = f"no operator {operator} for {receiver._m_name_}"
        if args:
            return cls(ErrorKind.TYPE_MISMATCH, message, operator=operator, receiver=receiver, argument=args[0])
        return cls(ErrorKind.TYPE_MISMATCH, message, operator=operator, receiver=receiver)

    @classmethod
    def division_by_zero(cls, operator: str, receiver: Object) -> "Error":
        return cls(ErrorKind.DIVISION_BY_ZERO, f"{repr_(receiver)} {operator} 0", operator=operator)

    @classmethod
    def undefined_variable(cls, name: str) -> "Error":
        return cls(ErrorKind.UNDEFINED_VARIABLE, f"undefined variable {name}", name=name)

    @classmethod
    def constant_reassignment(cls, name: str) -> "Error":
        return cls(ErrorKind.CONSTANT_REASSIGNMENT, f"constant {name} is already assigned", name=name)

    @classmethod
    def index_error(cls, collection: Object, index: Object) -> "Error":
        return cls(
            ErrorKind.INDEX_ERROR,
            f"index {repr_(index)} outside of {collection._m_name_} of length {len(collection)}",
            index=index,
        )

    @classmethod
    def argument_error(cls, message: str) -> "Error":
        return cls(ErrorKind.ARGUMENT_ERROR, message)


@dataclasses.dataclass
class ErrorCarrier(Exception):
    """An exception that carries an arbitrary raised quartz value.

    Override implementations use this to raise values that are not `Error`s;
    the core lets it propagate untouched.
    """

    error: Object

    def __str__(self):
        return str(repr_(self.error))
