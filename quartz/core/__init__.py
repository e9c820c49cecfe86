"""Core quartz evaluation module.

This module provides the value model (primitives, strings, symbols and the
shared List and Map collections), operator dispatch with user overrides,
truthiness and the logical operators, the assignment forms, collection
indexing and string interpolation.
"""

from .primitive import (
    Primitive,
    Scalar,
    Number,
    Int,
    Float,
    Bool,
    Nil,
    nil,
    true,
    false,
)
from .complex import String
from .base import Object, Expression, List, Map, UserObject
from .symbol import Symbol, SymbolTable, symbols, intern, resolve
from .error import Error, ErrorCarrier, ErrorKind
from .overrides import OverrideRegistry
from .dispatch import Dispatcher, dispatcher, overrides, current_dispatcher
from .logic import is_truthy, logical_not, Not, Or, And
from .nodes import (
    Literal,
    ListLiteral,
    MapLiteral,
    Variable,
    Operation,
    UnaryOperation,
    BinaryOperation,
    ToString,
    StatementList,
)
from .access import index_get, index_set, has_index, Index
from .assign import (
    AssignmentOutcome,
    NameTarget,
    IndexTarget,
    assign,
    assign_operation,
    assign_or,
    assign_and,
    Assignment,
    IndexAssignment,
    OperationalAssignment,
    OrAssignment,
    AndAssignment,
)
from .interpolation import Interpolation
from ._context import Scope, VariableStore, current_scope, global_scope, nested_scope

__all__ = (
    "Primitive",
    "Scalar",
    "Number",
    "Int",
    "Float",
    "Bool",
    "Nil",
    "nil",
    "true",
    "false",
    "String",
    "Object",
    "Expression",
    "List",
    "Map",
    "UserObject",
    "Symbol",
    "SymbolTable",
    "symbols",
    "intern",
    "resolve",
    "Error",
    "ErrorCarrier",
    "ErrorKind",
    "OverrideRegistry",
    "Dispatcher",
    "dispatcher",
    "overrides",
    "current_dispatcher",
    "is_truthy",
    "logical_not",
    "Not",
    "Or",
    "And",
    "Literal",
    "ListLiteral",
    "MapLiteral",
    "Variable",
    "Operation",
    "UnaryOperation",
    "BinaryOperation",
    "ToString",
    "StatementList",
    "index_get",
    "index_set",
    "has_index",
    "Index",
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
    "Interpolation",
    "Scope",
    "VariableStore",
    "current_scope",
    "global_scope",
    "nested_scope",
)
