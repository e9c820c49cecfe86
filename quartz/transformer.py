"""Transformer for converting Lark parse trees to quartz expression nodes."""

import re

from lark import Transformer as _Transformer, Token, Tree, UnexpectedInput
from lark.exceptions import VisitError

from .core import (
    And,
    AndAssignment,
    Assignment,
    BinaryOperation,
    Float,
    Index,
    IndexAssignment,
    IndexTarget,
    Int,
    Interpolation,
    ListLiteral,
    Literal,
    MapLiteral,
    Not,
    OperationalAssignment,
    Or,
    OrAssignment,
    StatementList,
    String,
    Symbol,
    UnaryOperation,
    Variable,
    false,
    nil,
    true,
)


_ESCAPE_SEQUENCES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "#": "#",
}

_ESCAPE = re.compile(r"\\(.)", re.DOTALL)


def unescape(text: str) -> str:
    """Replace backslash escapes; unknown escapes are kept as written."""
    return _ESCAPE.sub(lambda m: _ESCAPE_SEQUENCES.get(m[1], m[0]), text)


class Transformer(_Transformer):
    def integer(self, items: list[Token]):
        return Literal(Int(int(items[0])))

    def float_number(self, items: list[Token]):
        return Literal(Float(float(items[0])))

    def nil(self, _):
        return Literal(nil)

    def true(self, _):
        return Literal(true)

    def false(self, _):
        return Literal(false)

    def string(self, items: list[Token]):
        parts = split_template(items[0].value[1:-1])
        if all(isinstance(part, str) for part in parts):
            return Literal(String("".join(parts)))
        return Interpolation(parts)

    def single_quoted_string(self, items: list[Token]):
        return Literal(String(unescape(items[0].value[1:-1])))

    def symbol(self, items: list[Token]):
        return Literal(Symbol(items[0].value[1:]))

    def variable(self, items: list[Token]):
        return Variable(items[0].value)

    def list_literal(self, items: list):
        return ListLiteral(items)

    def map_literal(self, items: list[tuple]):
        return MapLiteral(items)

    def pair(self, items: list):
        return (items[0], items[1])

    def symbol_pair(self, items: list):
        return (Literal(Symbol(items[0].value)), items[1])

    def binary_operation(self, items: tuple[object, Tree, object]):
        return BinaryOperation(_operator_node_to_string(items[1]), [items[0], items[2]])

    def prefix_operation(self, items: tuple[Tree, object]):
        return UnaryOperation(_operator_node_to_string(items[0]), items[1])

    def logical_not(self, items: list):
        return Not(items[0])

    def logical_or(self, items: list):
        return Or(items[0], items[1])

    def logical_and(self, items: list):
        return And(items[0], items[1])

    def index(self, items: list):
        return Index(items[0], items[1])

    def assignment(self, items: list):
        return Assignment(items[0].value, items[1])

    def operational_assignment(self, items: list):
        return OperationalAssignment(items[0].value, _augmented_operator(items[1]), items[2])

    def or_assignment(self, items: list):
        return OrAssignment(items[0].value, items[1])

    def and_assignment(self, items: list):
        return AndAssignment(items[0].value, items[1])

    def index_assignment(self, items: list):
        return IndexAssignment(items[0], items[1], items[2])

    def index_operational_assignment(self, items: list):
        return OperationalAssignment(IndexTarget(items[0], items[1]), _augmented_operator(items[2]), items[3])

    def index_or_assignment(self, items: list):
        return OrAssignment(IndexTarget(items[0], items[1]), items[2])

    def index_and_assignment(self, items: list):
        return AndAssignment(IndexTarget(items[0], items[1]), items[2])

    def module(self, items: list):
        return StatementList(items)


def transform_tree(tree: Tree):
    """Transform a parse tree into core nodes.

    Code inside ``#{...}`` is parsed while transforming; when it does not
    parse, its `UnexpectedInput` is raised as is.
    """
    try:
        return Transformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, UnexpectedInput):
            raise e.orig_exc from None
        raise


def split_template(body: str) -> list:
    """Split the inside of a double-quoted string into text and parsed ``#{...}`` expressions."""
    from .parser import EXPRESSION, parser

    parts: list = []
    text: list[str] = []
    i = 0
    while i < len(body):
        if body[i] == "\\":
            text.append(body[i : i + 2])
            i += 2
        elif body.startswith("#{", i):
            if text:
                parts.append(unescape("".join(text)))
                text = []
            end = _closing_brace(body, i + 2)
            tree = parser.parse(body[i + 2 : end], start=EXPRESSION)
            parts.append(transform_tree(tree))
            i = end + 1
        else:
            text.append(body[i])
            i += 1
    if text or not parts:
        parts.append(unescape("".join(text)))
    return parts


def _closing_brace(body: str, start: int) -> int:
    """Find the ``}`` ending the embedded code that starts at `start`.

    Nested braces are counted and quoted strings skipped. When there is no
    such brace, the whole remainder is taken, so parsing it reports the error.
    """
    depth = 0
    quote = None
    i = start
    while i < len(body):
        char = body[i]
        if quote is not None:
            if char == "\\":
                i += 1
            elif char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            if depth == 0:
                return i
            depth -= 1
        i += 1
    return len(body)


def _operator_node_to_string(operator: Tree):
    """The parsed operator yields a tree whose children are string tokens. This function merges them."""
    return "".join(operator.children)


def _augmented_operator(operator: Tree):
    """``+=`` -> ``+``"""
    return _operator_node_to_string(operator)[:-1]
