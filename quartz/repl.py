#!/usr/bin/env python3

from lark import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from .core import Error, ErrorCarrier, Object, current_dispatcher, nested_scope
from .core.nodes import StatementList
from .parser import MODULE, parser
from .transformer import transform_tree


def repl():
    """Interactive REPL for quartz.

    - Enter: evaluate the input once it parses as a whole module
    - Ctrl+C: interrupt current input
    - Ctrl+D: exit REPL
    """
    buf = ""

    with nested_scope():
        while True:
            try:
                prompt = "... " if buf else ">>> "

                line = input(prompt)

                if not line.strip() and not buf:
                    continue

                buf = buf + "\n" + line if buf else line

                # Evaluate only when the buffer forms a complete module;
                # otherwise keep collecting lines
                try:
                    tree = parser.parse(buf, start=MODULE)
                except UnexpectedInput as e:
                    if _is_incomplete(e):
                        continue
                    print(f"Parse error: {e}")
                    buf = ""
                    continue

                buf = ""
                try:
                    statement_list: StatementList = transform_tree(tree)
                except UnexpectedInput as e:
                    # Broken code inside "#{...}" is never an incomplete line
                    print(f"Parse error: {e}")
                    continue

                try:
                    repl_print(statement_list.evaluate())
                except (Error, ErrorCarrier) as e:
                    print(f"Error: {e}")

            except EOFError:
                # Ctrl+D pressed
                print("\nGoodbye!")
                break
            except KeyboardInterrupt:
                # Ctrl+C pressed
                print("\nKeyboardInterrupt")
                buf = ""
                continue


def _is_incomplete(error: UnexpectedInput) -> bool:
    """Whether the input merely ended too early, e.g. inside an open bracket."""
    if isinstance(error, UnexpectedEOF):
        return True
    if isinstance(error, UnexpectedToken):
        return error.token.type == "$END"
    if isinstance(error, UnexpectedCharacters):
        # An unterminated string literal
        return error.char in "\"'"
    return False


def repl_print(obj: Object) -> None:
    """Prints the object in a human-readable format."""
    print(current_dispatcher.get().inspect(obj).value)
