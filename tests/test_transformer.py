# pylint: disable=missing-function-docstring,missing-module-docstring,invalid-name

import pytest
from lark import Token, Tree, UnexpectedInput

from quartz.parser import EXPRESSION, MODULE, parser
from quartz.transformer import Transformer, split_template, transform_tree, unescape
from quartz.core import (
    AndAssignment,
    BinaryOperation,
    Dispatcher,
    Error,
    ErrorKind,
    Float,
    IndexTarget,
    Int,
    Interpolation,
    List,
    Literal,
    Map,
    MapLiteral,
    OperationalAssignment,
    OverrideRegistry,
    Scope,
    StatementList,
    String,
    Symbol,
    UnaryOperation,
    Variable,
    current_dispatcher,
    current_scope,
    false,
    nil,
    true,
)


@pytest.fixture(autouse=True)
def isolate_context():
    reset_token_1 = current_scope.set(Scope())
    reset_token_2 = current_dispatcher.set(Dispatcher(OverrideRegistry()))
    yield
    current_scope.reset(reset_token_1)
    current_dispatcher.reset(reset_token_2)


def run(source: str):
    statement_list: StatementList = transform_tree(parser.parse(source, start=MODULE))
    return statement_list.evaluate()


class TestTransformer:
    def setup_method(self):
        self.transformer = Transformer()

    def test_integer(self):
        result = self.transformer.integer([Token("INT", "42")])
        assert isinstance(result, Literal)
        assert result.value == Int(42)

    def test_float_number(self):
        result = self.transformer.float_number([Token("FLOAT", "3.14")])
        assert isinstance(result.value, Float)
        assert result.value.value == 3.14

    def test_symbol(self):
        result = self.transformer.symbol([Token("SYMBOL", ":name")])
        assert result.value == Symbol("name")

    def test_plain_string(self):
        result = self.transformer.string([Token("STRING", '"a\\tb"')])
        assert isinstance(result, Literal)
        assert result.value == String("a\tb")

    def test_interpolated_string(self):
        result = self.transformer.string([Token("STRING", '"x=#{x}"')])
        assert isinstance(result, Interpolation)
        assert result.parts[0] == String("x=")
        assert isinstance(result.parts[1], Variable)

    def test_single_quoted_string(self):
        result = self.transformer.single_quoted_string([Token("SINGLE_QUOTED_STRING", "'#{x}\\''")])
        assert result.value == String("#{x}'")

    def test_binary_operation(self):
        operator = Tree("sum_op", [Token("PLUS", "+")])
        result = self.transformer.binary_operation((Literal(Int(1)), operator, Literal(Int(2))))
        assert isinstance(result, BinaryOperation)
        assert result.operator == "+"

    def test_prefix_operation(self):
        result = self.transformer.prefix_operation((Tree("prefix_op", [Token("STAR", "*")]), Variable("a")))
        assert isinstance(result, UnaryOperation)
        assert result.operator == "*"

    def test_operational_assignment(self):
        operator = Tree("aug_op", [Token("PLUSEQUAL", "+=")])
        result = self.transformer.operational_assignment([Token("NAME", "a"), operator, Literal(Int(1))])
        assert isinstance(result, OperationalAssignment)
        assert result.operator == "+"

    def test_index_and_assignment(self):
        result = self.transformer.index_and_assignment([Variable("m"), Literal(Int(0)), Literal(Int(1))])
        assert isinstance(result, AndAssignment)
        assert isinstance(result.target, IndexTarget)

    def test_module(self):
        tree = parser.parse("1; 2", start=MODULE)
        result = self.transformer.transform(tree)
        assert isinstance(result, StatementList)
        assert len(result) == 2


class TestTemplates:
    def test_unescape(self):
        assert unescape("a\\nb\\\\c\\#{") == "a\nb\\c#{"
        assert unescape("\\q") == "\\q"

    def test_split_plain(self):
        assert split_template("plain") == ["plain"]
        assert split_template("") == [""]

    def test_split_with_expressions(self):
        parts = split_template("a#{1}b#{x}")
        assert parts[0] == "a"
        assert isinstance(parts[1], Literal)
        assert parts[2] == "b"
        assert isinstance(parts[3], Variable)
        assert len(parts) == 4

    def test_escaped_interpolation_is_text(self):
        assert split_template("\\#{x}") == ["#{x}"]

    def test_split_with_nested_braces(self):
        parts = split_template("v=#{ {a: 1} }!")
        assert parts[0] == "v="
        assert isinstance(parts[1], MapLiteral)
        assert parts[2] == "!"
        assert len(parts) == 3

    def test_closing_brace_in_quotes(self):
        parts = split_template("#{'}'}")
        assert isinstance(parts[0], Literal)
        assert len(parts) == 1

    @pytest.mark.parametrize("body", ["a#{1 +}b", "a#{}b"])
    def test_broken_expression(self, body):
        with pytest.raises(UnexpectedInput):
            split_template(body)

    def test_embedded_expression_uses_expression_rule(self):
        tree = parser.parse("a + 1", start=EXPRESSION)
        assert tree.data == "binary_operation"


class TestEvaluation:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("1 + 2 * 3", Int(7)),
            ("(1 + 2) * 3", Int(9)),
            ("-2 * 3", Int(-6)),
            ("7 / 2", Int(3)),
            ("7.0 / 2", Float(3.5)),
            ("1.0 == 1", true),
            ("5 >= 5.4", false),
            ("[1,2] + [3,4] == [1,2,3,4]", true),
            ("[1,2] < [1,2]", false),
            ("[2,1] <= [1,2]", true),
            ("[] && false", false),
            ("false || nil", nil),
            ("!!0", true),
            ("nil != false", true),
            ('"ab" * 2', String("abab")),
            ("*{a: 1}", List(List(Symbol("a"), 1))),
            ('"abc"[-1]', String("c")),
            ("", nil),
        ],
    )
    def test_expression(self, source, expected):
        assert run(source) == expected

    def test_map_merge(self):
        result = run("{a:1,b:2} + {a:2,c:3}")
        assert list(result.items()) == [
            (Symbol("a"), Int(2)),
            (Symbol("b"), Int(2)),
            (Symbol("c"), Int(3)),
        ]

    def test_map_with_expression_keys(self):
        result = run('k = "key"; {k => 1, :s => 2}')
        assert result == Map([("key", 1), (Symbol("s"), 2)])

    def test_shared_list(self):
        assert run("list = [1,2,3]; other = list; list[0] = 4; other") == List(4, 2, 3)

    def test_missing_index_reads_nil(self):
        assert run("list = [1,2,3]; list[5]") is nil

    def test_index_write_past_end(self):
        with pytest.raises(Error) as excinfo:
            run("list = [1]; list[1] = 2")
        assert excinfo.value.is_kind(ErrorKind.INDEX_ERROR)

    def test_or_assignment_sequence(self):
        assert run("z ||= false; z ||= 3; z ||= 4; z") == Int(3)

    def test_or_assignment_skips_side_effect(self):
        assert run("x = 10; x ||= (y = 1); x") == Int(10)
        with pytest.raises(Error) as excinfo:
            run("y")
        assert excinfo.value.is_kind(ErrorKind.UNDEFINED_VARIABLE)

    def test_and_assignment_skips_side_effect(self):
        assert run("w &&= (s = 1); w") is nil
        assert current_scope.get().exists("w")
        assert not current_scope.get().exists("s")

    def test_operational_assignment(self):
        assert run("n = 1; n += 2; n *= 3; n") == Int(9)

    def test_index_operational_assignment(self):
        assert run('counts = {"a" => 1}; counts["a"] += 1; counts["b"] ||= 0; counts') == Map([("a", 2), ("b", 0)])

    def test_constant(self):
        with pytest.raises(Error) as excinfo:
            run("Limit = 1; Limit = 2")
        assert excinfo.value.is_kind(ErrorKind.CONSTANT_REASSIGNMENT)

    def test_interpolation(self):
        assert run('x = 2; "x = #{x}, list = #{[x, nil]}, #{"in" + "ner"}"') == String('x = 2, list = [2, nil], inner')

    def test_interpolation_with_map_literal(self):
        assert run('"v=#{ {a: 1}[:a] }"') == String("v=1")
        assert run('m = {b: 2}; "#{ {a: m[:b]}[:a] }"') == String("2")

    def test_interpolation_with_brace_in_string(self):
        assert run("\"#{'}'}\"") == String("}")

    def test_broken_interpolation(self):
        with pytest.raises(UnexpectedInput):
            run('"a#{1 +}b"')

    def test_interpolation_escape(self):
        assert run('"\\#{x}"') == String("#{x}")

    def test_single_quoted_is_literal(self):
        assert run("'#{x}'") == String("#{x}")

    def test_type_mismatch(self):
        with pytest.raises(Error) as excinfo:
            run('1 + "a"')
        assert excinfo.value.is_kind(ErrorKind.TYPE_MISMATCH)

    def test_undefined_variable(self):
        with pytest.raises(Error) as excinfo:
            run("undefined_name")
        assert excinfo.value.is_kind(ErrorKind.UNDEFINED_VARIABLE)

    def test_division_by_zero(self):
        with pytest.raises(Error) as excinfo:
            run("1 % 0")
        assert excinfo.value.is_kind(ErrorKind.DIVISION_BY_ZERO)

    def test_override_applies_to_source(self):
        current_dispatcher.get().registry.register("Symbol", "+", lambda a, b: f"{a.name}_{b.name}")
        assert run(":a + :b") == String("a_b")
