#!/usr/bin/env python3
"""
Tests for the lark frontend: Dialyzer notation text → AST nodes.
"""

import pytest
from erltype.shared.nodes import (
    Wildcard, AnyFunction, InnerAnyFunction, Rest, Atom, Int, TypeRef,
    ModuleTypeRef, ParamTypeRef, TypeList, Tuple, SquareList, ParenList,
    Map, MapEntry, Pattern, Size, BinaryPart, Binary, ByteList, PipeList,
    Range, NamedType, Assignment, Contract, Function,
)
from erltype.shared.errors import LexingError, ParsingError
from tests.test_utils import quoted


class TestLeaves:
    """Atoms, integers and bare type references"""

    def test_type_ref(self, parser):
        assert parser.parse("binary()") == TypeRef("binary")

    def test_quoted_atom_keeps_raw_text(self, parser):
        node = parser.parse("'ok'")
        assert isinstance(node, Atom)
        assert node.raw == "'ok'"
        assert node.name == "ok"

    def test_quoted_and_bare_atoms_are_equal(self, parser):
        assert parser.parse("'ok'") == parser.parse("ok")

    def test_wildcard(self, parser):
        assert parser.parse("_") == Wildcard()

    def test_integers(self, parser):
        assert parser.parse("42") == Int(42)
        assert parser.parse("-1") == Int(-1)

    def test_range(self, parser):
        assert parser.parse("1..10") == Range(Int(1), Int(10))

    def test_versioned_variable_is_an_atom(self, parser):
        node = parser.parse("Opts@1")
        assert isinstance(node, Atom)
        assert node.raw == "Opts@1"


class TestTypeReferences:
    """Module-qualified references pick their node by argument count"""

    def test_module_type_without_args(self, parser):
        assert parser.parse("'Elixir.Plug.Conn':t()") == ModuleTypeRef(quoted("Elixir.Plug.Conn"), "t")

    def test_module_type_with_one_arg(self, parser):
        node = parser.parse("'Elixir.Keyword':t(atom())")
        assert node == ParamTypeRef("'Elixir.Keyword'", "t", TypeRef("atom"))

    def test_module_type_with_several_args(self, parser):
        node = parser.parse("dict:dict(atom(), binary())")
        assert node == ModuleTypeRef(
            Atom("dict"),
            TypeList("dict", ParenList((TypeRef("atom"), TypeRef("binary")))),
        )

    def test_type_call_with_args(self, parser):
        node = parser.parse("nonempty_list(binary())")
        assert node == TypeList("nonempty_list", ParenList((TypeRef("binary"),)))


class TestContainers:
    def test_tuple(self, parser):
        assert parser.parse("{'ok', binary()}") == Tuple((quoted("ok"), TypeRef("binary")))

    def test_empty_tuple(self, parser):
        assert parser.parse("{}") == Tuple(())

    def test_square_list(self, parser):
        assert parser.parse("[atom()]") == SquareList((TypeRef("atom"),))

    def test_square_list_with_rest(self, parser):
        assert parser.parse("[binary(),...]") == SquareList((TypeRef("binary"), Rest()))

    def test_map(self, parser):
        node = parser.parse("#{'a':=binary(), 'b'=>atom()}")
        assert node == Map((
            MapEntry(quoted("a"), TypeRef("binary")),
            MapEntry(quoted("b"), TypeRef("atom")),
        ))

    def test_empty_map(self, parser):
        assert parser.parse("#{}") == Map(())

    def test_pattern(self, parser):
        assert parser.parse("<'ok', binary()>") == Pattern((quoted("ok"), TypeRef("binary")))


class TestStructTag:
    """struct_tag is materialized once at construction"""

    def test_struct_tag(self, parser):
        node = parser.parse("#{'__struct__':='Elixir.Foo', 'a':=binary()}")
        assert node.struct_tag == "Elixir.Foo"
        assert node.is_struct
        assert node.fields == (MapEntry(quoted("a"), TypeRef("binary")),)

    def test_plain_map_has_no_tag(self, parser):
        node = parser.parse("#{'a':=binary()}")
        assert node.struct_tag is None
        assert not node.is_struct

    def test_wildcard_tag_is_not_a_struct(self, parser):
        assert parser.parse("#{'__struct__':=_, _=>_}").struct_tag is None

    def test_two_tags_is_not_a_struct(self):
        node = Map((
            MapEntry(quoted("__struct__"), quoted("A")),
            MapEntry(quoted("__struct__"), quoted("B")),
        ))
        assert node.struct_tag is None


class TestBitstrings:
    def test_fixed_size(self, parser):
        assert parser.parse("<<_:48>>") == Binary(parts=(BinaryPart(Wildcard(), Int(48)),))

    def test_unit_size(self, parser):
        node = parser.parse("<<_:_*8>>")
        assert node == Binary(parts=(BinaryPart(Wildcard(), Size(Int(8)), Wildcard()),))

    def test_empty(self, parser):
        assert parser.parse("<<>>") == Binary(parts=())

    def test_value_and_size_pair(self, parser):
        node = parser.parse("<<X:8>>")
        assert node.is_pair
        assert node == Binary(value=Atom("X"), size=Int(8))

    def test_byte_list(self, parser):
        text = ("#{#<104>(8,1,'integer',['unsigned','big']),"
                "#<105>(8,1,'integer',['unsigned','big'])}#")
        assert parser.parse(text) == ByteList((104, 105))


class TestFunctionsAndContracts:
    def test_any_function(self, parser):
        assert parser.parse("fun()") == AnyFunction()

    def test_function_of_any_arity(self, parser):
        node = parser.parse("fun((...) -> any())")
        assert node == Function(Contract(InnerAnyFunction(), TypeRef("any")))

    def test_function(self, parser):
        node = parser.parse("fun((binary()) -> 'ok')")
        assert node == Function(Contract(ParenList((TypeRef("binary"),)), quoted("ok")))

    def test_contract(self, parser):
        node = parser.parse("(binary()) -> 'ok'")
        assert node == Contract(ParenList((TypeRef("binary"),)), quoted("ok"))
        assert node.whens is None

    def test_contract_with_when_clause(self, parser):
        node = parser.parse("(Opts) -> 'ok' when Opts :: [atom()]")
        assert node.whens == (NamedType(Atom("Opts"), SquareList((TypeRef("atom"),))),)

    def test_when_clause_accepts_single_colon(self, parser):
        node = parser.parse("(T) -> T when T : atom()")
        assert node.whens == (NamedType(Atom("T"), TypeRef("atom")),)

    def test_named_argument(self, parser):
        node = parser.parse("(Conn::'Elixir.Plug.Conn':t()) -> 'ok'")
        assert node.args == ParenList((NamedType(Atom("Conn"), ModuleTypeRef(quoted("Elixir.Plug.Conn"), "t")),))


class TestUnionsAndAssignments:
    def test_union(self, parser):
        node = parser.parse("binary() | non_neg_integer()")
        assert node == PipeList(TypeRef("binary"), TypeRef("non_neg_integer"))

    def test_union_nests_to_the_right(self, parser):
        node = parser.parse("'a' | 'b' | 'c'")
        assert node == PipeList(quoted("a"), PipeList(quoted("b"), quoted("c")))

    def test_long_union(self, parser):
        node = parser.parse(" | ".join(f"a{i}" for i in range(1000)))
        arms = []
        while isinstance(node, PipeList):
            arms.append(node.left)
            node = node.right
        arms.append(node)
        assert arms == [Atom(f"a{i}") for i in range(1000)]

    def test_assignment(self, parser):
        assert parser.parse("X = 'ok'") == Assignment(Atom("X"), quoted("ok"))


class TestParseErrors:
    """Failures surface as LexingError / ParsingError carrying the input"""

    def test_unknown_character_is_a_lexing_error(self, parser):
        with pytest.raises(LexingError) as info:
            parser.parse("$")
        assert info.value.source == "$"
        assert info.value.location.line == 1
        assert info.value.location.column == 1

    def test_truncated_input_is_a_parsing_error(self, parser):
        with pytest.raises(ParsingError) as info:
            parser.parse("{atom(), ")
        assert info.value.source == "{atom(), "

    def test_misplaced_token_is_a_parsing_error(self, parser):
        with pytest.raises(ParsingError):
            parser.parse("{atom(), )")

    def test_lexing_and_parsing_errors_have_distinct_codes(self):
        assert LexingError.error_code != ParsingError.error_code
