#!/usr/bin/env python3
"""
Tests for the command-line entry point.
"""

import io
import pytest
from erltype.__main__ import main
from tests.test_utils import COMPLEX_EXPECTED, COMPLEX_ACTUAL

pytestmark = pytest.mark.cli


class TestCommands:
    def test_type(self, capsys):
        assert main(["type", "binary() | non_neg_integer()"]) == 0
        assert capsys.readouterr().out == "binary() | non_neg_integer()\n"

    def test_contract_with_module_and_function(self, capsys):
        code = main(["contract", "'Elixir.Foo':bar(binary()) -> 'ok'",
                     "--module", "'Elixir.Foo'", "--function", "bar"])
        assert code == 0
        assert capsys.readouterr().out == "(binary()) :: :ok\n"

    def test_pattern(self, capsys):
        assert main(["pattern", "pattern <'ok', binary()>"]) == 0
        assert capsys.readouterr().out == ":ok, binary()\n"

    def test_args(self, capsys):
        assert main(["args", "('ok', binary())"]) == 0
        assert capsys.readouterr().out == "(:ok, binary())\n"

    def test_shallow(self, capsys):
        assert main(["shallow", "{'ok', binary()}"]) == 0
        assert capsys.readouterr().out == "tuple()\n"

    def test_diff(self, capsys):
        assert main(["diff", COMPLEX_EXPECTED, COMPLEX_ACTUAL]) == 0
        assert capsys.readouterr().out == 'Mismatched fields:\n[:first]: expected "binary()", got "nil"\n'

    def test_empty_diff_prints_nothing(self, capsys):
        assert main(["diff", "binary()", "3"]) == 0
        assert capsys.readouterr().out == ""

    def test_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("'Elixir.Plug.Conn':t()\n"))
        assert main(["type", "-"]) == 0
        assert capsys.readouterr().out == "Plug.Conn.t()\n"

    def test_file(self, capsys, tmp_path):
        path = tmp_path / "types.txt"
        path.write_text("binary()\n\n'ok' | 'error'\n", encoding="utf-8")
        assert main(["file", str(path)]) == 0
        assert capsys.readouterr().out == "binary()\n:ok | :error\n"


class TestFailures:
    def test_parse_error_exit_status(self, capsys, no_color):
        assert main(["type", "{atom(), "]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error[E0002]" in captured.err

    def test_missing_file(self, capsys, tmp_path):
        assert main(["file", str(tmp_path / "absent.txt")]) == 1
        assert "could not read file" in capsys.readouterr().err

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            main([])
