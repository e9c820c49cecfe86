"""Command line interface for quartz using argparse."""

import argparse
import dataclasses
import logging
import sys
from typing import Optional, Sequence

__all__ = ("CLI", "Source")


@dataclasses.dataclass(frozen=True)
class Source:
    text: str
    name: str
    """Where the text came from: a file path, ``<command>`` or ``<stdin>``."""


class CLI:
    """Command line interface for quartz.

    Code is taken from ``-c``, from a file, or from stdin when it is not a
    terminal. With none of these the REPL is started.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(prog="quartz", description="quartz expression evaluator")
        self.parser.add_argument("-c", "--command", help="Evaluate the given code string")
        self.parser.add_argument("file", nargs="?", help="File to evaluate (optional)")
        self.parser.add_argument("--tree", action="store_true", help="Print the parse tree before evaluating")
        self.parser.add_argument("--debug", action="store_true", help="Log dispatch and assignment details")
        self.options: argparse.Namespace

    def parse(self, argv: Optional[Sequence[str]] = None):
        self.options = self.parser.parse_args(argv)

    @property
    def show_tree(self) -> bool:
        return self.options.tree

    def configure_logging(self):
        """Send the library's debug records to stderr when --debug is given."""
        if self.options.debug:
            logging.basicConfig(
                level=logging.DEBUG,
                format="%(levelname)s %(name)s: %(message)s",
                stream=sys.stderr,
            )

    def read_source(self) -> Optional[Source]:
        """Get the code to evaluate, or None if the REPL should be started."""
        if self.options.command is not None:
            return Source(self.options.command, "<command>")

        if self.options.file:
            with open(self.options.file, "r", encoding="utf-8") as f:
                return Source(f.read(), self.options.file)

        if not sys.stdin.isatty():
            return Source(sys.stdin.read(), "<stdin>")

        return None
