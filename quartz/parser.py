"""Parser module for quartz using Lark."""

from pathlib import Path
from lark import Lark


__all__ = ("parser", "MODULE", "STATEMENT", "EXPRESSION")


MODULE = "module"
STATEMENT = "statement"
EXPRESSION = "expression"

_start = [
    MODULE,
    STATEMENT,
    EXPRESSION,
]

with open(Path(__file__).parent.absolute() / "quartz.lark", encoding="utf-8") as f:
    parser = Lark(
        f,
        parser="lalr",
        start=_start,
    )
