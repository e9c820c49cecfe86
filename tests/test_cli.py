# pylint: disable=missing-function-docstring,missing-module-docstring,invalid-name

import io
import logging

import pytest

from quartz.__main__ import main
from quartz.cli import CLI, Source
from quartz.core import Dispatcher, OverrideRegistry, current_dispatcher


@pytest.fixture(autouse=True)
def isolate_dispatcher():
    reset_token = current_dispatcher.set(Dispatcher(OverrideRegistry()))
    yield
    current_dispatcher.reset(reset_token)


class TestCLI:
    def test_command(self):
        cli = CLI()
        cli.parse(["-c", "1 + 1"])
        assert cli.read_source() == Source("1 + 1", "<command>")

    def test_empty_command(self):
        cli = CLI()
        cli.parse(["-c", ""])
        assert cli.read_source() == Source("", "<command>")

    def test_file(self, tmp_path):
        script = tmp_path / "script.qz"
        script.write_text("1", encoding="utf-8")
        cli = CLI()
        cli.parse([str(script)])
        assert cli.read_source() == Source("1", str(script))

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("1 + 2"))
        cli = CLI()
        cli.parse([])
        assert cli.read_source() == Source("1 + 2", "<stdin>")

    def test_show_tree_flag(self):
        cli = CLI()
        cli.parse(["--tree", "-c", "1"])
        assert cli.show_tree is True


class TestMain:
    def test_prints_inspected_result(self, capsys: pytest.CaptureFixture[str]):
        assert main(["-c", 'x = [1, "a"]; x + [:b]']) == 0
        assert capsys.readouterr().out == '[1, "a", :b]\n'

    def test_file(self, tmp_path, capsys: pytest.CaptureFixture[str]):
        script = tmp_path / "script.qz"
        script.write_text('name = "world"; "hello #{name}"', encoding="utf-8")
        assert main([str(script)]) == 0
        assert capsys.readouterr().out == '"hello world"\n'

    def test_error(self, capsys: pytest.CaptureFixture[str]):
        assert main(["-c", "missing + 1"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "<command>: Error: undefined variable missing\n"

    def test_parse_error(self, capsys: pytest.CaptureFixture[str]):
        assert main(["-c", "1 +"]) == 2
        assert capsys.readouterr().err.startswith("<command>: parse error:")

    @pytest.mark.parametrize("command", ['"a#{1 +}b"', '"a#{}b"'])
    def test_parse_error_in_interpolation(self, command, capsys: pytest.CaptureFixture[str]):
        assert main(["-c", command]) == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("<command>: parse error:")

    def test_braces_in_interpolation(self, capsys: pytest.CaptureFixture[str]):
        assert main(["-c", '"v=#{ {a: 1}[:a] }"']) == 0
        assert capsys.readouterr().out == '"v=1"\n'

    def test_int_too_large_for_float(self, capsys: pytest.CaptureFixture[str]):
        assert main(["-c", "1" + "0" * 400 + " + 1.0"]) == 1
        assert capsys.readouterr().err.startswith("<command>: Error:")

    def test_tree(self, capsys: pytest.CaptureFixture[str]):
        assert main(["--tree", "-c", "1 + 2"]) == 0
        assert capsys.readouterr().out == "module\n  binary_operation\n    integer\t1\n    sum_op\t+\n    integer\t2\n3\n"

    def test_bindings_do_not_leak(self, capsys: pytest.CaptureFixture[str]):
        assert main(["-c", "leaked = 1"]) == 0
        assert main(["-c", "leaked"]) == 1
        assert "undefined variable leaked" in capsys.readouterr().err

    def test_debug_logging(self, monkeypatch: pytest.MonkeyPatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        assert main(["--debug", "-c", "a = 1"]) == 0
        assert calls and calls[0]["level"] == logging.DEBUG
