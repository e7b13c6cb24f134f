#!/usr/bin/env python3
"""
Tests for atom and variable name normalization.
"""

from erltype.printer.names import (
    atomize, downcase_first, inspect_atom, inspect_string, normalize_name,
    strip_var_version, struct_name,
)


class TestInspectAtom:
    """Atoms print the way Elixir's inspect/1 prints them"""

    def test_identifiers(self):
        assert inspect_atom("ok") == ":ok"
        assert inspect_atom("foo?") == ":foo?"
        assert inspect_atom("node@host") == ":node@host"
        assert inspect_atom("Foo") == ":Foo"

    def test_bare_literals(self):
        assert inspect_atom("nil") == "nil"
        assert inspect_atom("true") == "true"
        assert inspect_atom("false") == "false"

    def test_aliases(self):
        assert inspect_atom("Elixir.Plug.Conn") == "Plug.Conn"
        assert inspect_atom("Elixir") == "Elixir"

    def test_invalid_alias_is_quoted(self):
        assert inspect_atom("Elixir.foo") == ':"Elixir.foo"'

    def test_operators(self):
        assert inspect_atom("+") == ":+"
        assert inspect_atom("===") == ":==="

    def test_quoted(self):
        assert inspect_atom("hello world") == ':"hello world"'
        assert inspect_atom('say "hi"') == ':"say \\"hi\\""'
        assert inspect_atom("") == ':""'


class TestInspectString:
    def test_plain(self):
        assert inspect_string("hi") == '"hi"'

    def test_escapes(self):
        assert inspect_string('a"b') == '"a\\"b"'
        assert inspect_string("a\\b") == '"a\\\\b"'
        assert inspect_string("line\n") == '"line\\n"'


class TestVersionSuffix:
    def test_strip_var_version(self):
        assert strip_var_version("Opts@1") == "Opts"
        assert strip_var_version("VOpts@12") == "Opts"
        assert strip_var_version("Opts") == "Opts"
        assert strip_var_version("node@host") == "node@host"

    def test_normalize_name(self):
        assert normalize_name("Conn@3") == "Conn"
        assert normalize_name("_@2") == "_"
        assert normalize_name("__@7") == "_"
        assert normalize_name("'quoted'") == "'quoted'"


class TestAtomize:
    def test_quoted_atoms(self):
        assert atomize("'ok'") == ":ok"
        assert atomize("'nil'") == "nil"
        assert atomize("'hello world'") == ':"hello world"'

    def test_module_atoms(self):
        assert atomize("'Elixir.Plug.Conn'") == "Plug.Conn"
        assert atomize("Elixir.Plug.Conn") == "Plug.Conn"

    def test_variables(self):
        assert atomize("Opts@1") == "Opts"
        assert atomize("T") == "T"
        assert atomize("_Ignored") == "_Ignored"
        assert atomize("_@2") == "_"

    def test_bare_atom(self):
        assert atomize("ok") == ":ok"


class TestHelpers:
    def test_struct_name(self):
        assert struct_name("Elixir.DialyzerFun.Complex") == "DialyzerFun.Complex"
        assert struct_name("StructA") == ":StructA"

    def test_downcase_first(self):
        assert downcase_first("Opts: list()") == "opts: list()"
        assert downcase_first("") == ""
