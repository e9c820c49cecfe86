"""Main module for quartz CLI."""

import sys
from typing import Optional, Sequence

from lark import UnexpectedInput

from quartz.cli import CLI
from quartz.core import Error, ErrorCarrier, current_dispatcher, nested_scope
from quartz.core.nodes import StatementList
from quartz.parser import MODULE, parser
from quartz.repl import repl
from quartz.transformer import transform_tree


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point; returns the process exit status."""
    cli = CLI()
    cli.parse(argv)
    cli.configure_logging()
    source = cli.read_source()

    if source is None:
        print("quartz REPL")
        print("Enter: evaluate | Ctrl+D: exit")
        print()
        repl()
        return 0

    try:
        tree = parser.parse(source.text, start=MODULE)
        statement_list: StatementList = transform_tree(tree)
    except UnexpectedInput as e:
        print(f"{source.name}: parse error: {e}", file=sys.stderr)
        return 2

    if cli.show_tree:
        print(tree.pretty(), end="")

    with nested_scope():
        try:
            result = statement_list.evaluate()
        except (Error, ErrorCarrier) as e:
            print(f"{source.name}: Error: {e}", file=sys.stderr)
            return 1

    print(current_dispatcher.get().inspect(result).value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
