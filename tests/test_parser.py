"""Tests for the key lexer, type annotation parser, assignment lexer and argument splitter."""

import pytest

from shellvars.parsing import ArgumentSplitter, KeyIterator, TypeAnnotationParser, assignment_lexer
from shellvars.parsing.key_lexer import KeyLexer
from shellvars.parsing.type_lexer import TypeLexer
from shellvars.types import (
    BOOLEAN,
    FLOAT,
    FLOAT_ARRAY,
    INTEGER,
    INTEGER_ARRAY,
    STR,
    STR_ARRAY,
    InvalidTypeName,
    Key,
    Operator,
    Primitive,
)


class TestTypeLexer:
    """Tests for the type annotation lexer."""

    def test_tokenize_map(self):
        lexer = TypeLexer()
        lexer.build()

        tokens = lexer.tokenize("hmap[int]")
        token_types = [t.type for t in tokens]

        assert token_types == ["IDENTIFIER", "LBRACKET", "IDENTIFIER", "RBRACKET"]

    def test_illegal_character(self):
        lexer = TypeLexer()
        lexer.build()

        with pytest.raises(SyntaxError):
            lexer.tokenize("int!")


class TestTypeAnnotationParser:
    """Tests for parsing annotations into primitives."""

    @pytest.fixture
    def parser(self):
        return TypeAnnotationParser()

    def test_scalars(self, parser):
        assert parser.parse("str") == STR
        assert parser.parse("bool") == BOOLEAN
        assert parser.parse("int") == INTEGER
        assert parser.parse("float") == FLOAT

    def test_arrays(self, parser):
        assert parser.parse("[str]") == STR_ARRAY
        assert parser.parse("[int]") == INTEGER_ARRAY
        assert parser.parse("[float]") == FLOAT_ARRAY

    def test_maps(self, parser):
        assert parser.parse("hmap[int]") == Primitive.hash_map(INTEGER)
        assert parser.parse("bmap[float]") == Primitive.btree_map(FLOAT)

    def test_map_without_value_type_holds_strings(self, parser):
        assert parser.parse("hmap[]") == Primitive.hash_map(STR)

    def test_nested_map_value(self, parser):
        assert parser.parse("hmap[[int]]") == Primitive.hash_map(INTEGER_ARRAY)

    def test_unknown_type(self, parser):
        with pytest.raises(SyntaxError):
            parser.parse("integer")

    def test_unknown_array_type(self, parser):
        with pytest.raises(SyntaxError):
            parser.parse("[char]")

    def test_brackets_after_scalar(self, parser):
        with pytest.raises(SyntaxError):
            parser.parse("int[]")

    def test_empty(self, parser):
        with pytest.raises(SyntaxError):
            parser.parse("")

    def test_display_round_trips(self, parser):
        for text in ("str", "[bool]", "int", "[float]", "hmap[int]", "bmap[str]"):
            assert str(parser.parse(text)) == text


class TestKeyLexer:
    """Tests for the key list lexer."""

    def test_tokenize(self):
        lexer = KeyLexer()
        lexer.build()

        tokens = lexer.tokenize("a:int b[]")
        token_types = [t.type for t in tokens]

        assert token_types == ["WORD", "COLON", "WORD", "WS", "WORD", "LBRACKET", "RBRACKET"]


class TestKeyIterator:
    """Tests for reading declared keys."""

    def test_plain_keys(self):
        assert list(KeyIterator("abc def")) == [Key("abc", STR), Key("def", STR)]

    def test_annotated_keys(self):
        keys = list(KeyIterator("a b[] c:[int] d:float"))
        assert keys == [
            Key("a", STR),
            Key("b", STR_ARRAY),
            Key("c", INTEGER_ARRAY),
            Key("d", FLOAT),
        ]

    def test_map_keys(self):
        keys = list(KeyIterator("h:hmap[int] b:bmap[]"))
        assert keys == [
            Key("h", Primitive.hash_map(INTEGER)),
            Key("b", Primitive.btree_map(STR)),
        ]

    def test_indexed_keys(self):
        keys = list(KeyIterator("x[3] y[$i]:int"))
        assert keys == [
            Key("x", Primitive.indexed("3", STR)),
            Key("y", Primitive.indexed("$i", INTEGER)),
        ]

    def test_extra_whitespace(self):
        assert list(KeyIterator("  a \t b  ")) == [Key("a"), Key("b")]

    def test_empty(self):
        assert list(KeyIterator("")) == []

    def test_unknown_type_reports_annotation(self):
        keys = list(KeyIterator("x:nope y"))
        assert keys == [InvalidTypeName("nope"), Key("y", STR)]

    def test_empty_brackets_with_annotation(self):
        assert list(KeyIterator("x[]:int")) == [InvalidTypeName("x[]:int")]

    def test_missing_name(self):
        assert list(KeyIterator(":int z")) == [InvalidTypeName(":int"), Key("z")]

    def test_trailing_text_after_brackets(self):
        assert list(KeyIterator("a[1]b c")) == [InvalidTypeName("a[1]b"), Key("c")]

    def test_unclosed_bracket(self):
        assert list(KeyIterator("a[1")) == [InvalidTypeName("a[1")]

    def test_error_message(self):
        assert str(InvalidTypeName("nope")) == "invalid type supplied: nope"


class TestAssignmentLexer:
    """Tests for splitting statements on their operator."""

    def test_equal(self):
        assert assignment_lexer("abc def = 123 456") == ("abc def", Operator.EQUAL, "123 456")

    def test_no_spaces(self):
        assert assignment_lexer("a=1") == ("a", Operator.EQUAL, "1")

    def test_operators(self):
        cases = {
            "x += 1": Operator.ADD,
            "x -= 1": Operator.SUBTRACT,
            "x *= 1": Operator.MULTIPLY,
            "x /= 1": Operator.DIVIDE,
            "x //= 1": Operator.INTEGER_DIVIDE,
            "x **= 1": Operator.EXPONENT,
            "x ++= [1]": Operator.CONCATENATE,
            "x ::= [1]": Operator.CONCATENATE_HEAD,
            r"x \\= [1]": Operator.FILTER,
            "x ?= 1": Operator.OPTIONAL_EQUAL,
        }
        for statement, operator in cases.items():
            keys, op, values = assignment_lexer(statement)
            assert keys == "x", statement
            assert op is operator, statement

    def test_typed_key(self):
        assert assignment_lexer("ab:int *= 3") == ("ab:int", Operator.MULTIPLY, "3")

    def test_array_key_before_operator(self):
        assert assignment_lexer("c:[int] = [1 2]") == ("c:[int]", Operator.EQUAL, "[1 2]")

    def test_no_keys(self):
        assert assignment_lexer(" = 1") == ("", Operator.EQUAL, "1")

    def test_no_values(self):
        assert assignment_lexer("x =") == ("x", Operator.EQUAL, "")

    def test_no_operator(self):
        assert assignment_lexer("echo hi") == ("echo hi", None, None)
        assert assignment_lexer("   ") == (None, None, None)

    def test_equals_inside_quotes_and_brackets(self):
        assert assignment_lexer('a = "x=y"') == ("a", Operator.EQUAL, '"x=y"')
        assert assignment_lexer("m[k=v] = 1") == ("m[k=v]", Operator.EQUAL, "1")

    def test_escaped_equals(self):
        assert assignment_lexer(r"a\=b") == (r"a\=b", None, None)


class TestArgumentSplitter:
    """Tests for splitting argument lists."""

    def test_words(self):
        assert list(ArgumentSplitter("123 456")) == ["123", "456"]

    def test_brackets_group(self):
        assert list(ArgumentSplitter("one [two three] [4 5 6]")) == ["one", "[two three]", "[4 5 6]"]

    def test_quotes_group(self):
        tokens = list(ArgumentSplitter("\"hello world\" 'a b' c\\ d"))
        assert tokens == ['"hello world"', "'a b'", "c\\ d"]

    def test_method_call_is_one_token(self):
        assert list(ArgumentSplitter('$join(@a " ") x')) == ['$join(@a " ")', "x"]

    def test_single_quotes_ignore_backslash(self):
        assert list(ArgumentSplitter("'a\\' b")) == ["'a\\'", "b"]

    def test_blank(self):
        assert list(ArgumentSplitter("   ")) == []

    def test_is_lazy(self):
        splitter = ArgumentSplitter("a b c")
        assert next(splitter) == "a"
        assert splitter.read == 1
        assert list(splitter) == ["b", "c"]
