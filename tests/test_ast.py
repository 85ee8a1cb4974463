"""
Tests for AST rendering and the debug dump.
"""

import io

import pytest
from intcalc import (
    parse, Program, NumberLiteral, Identifier, BinaryOp, BinaryOperator,
    Assign, Print, format_expression, format_statement, format_program,
    print_ast,
)


def num(value):
    return NumberLiteral(span=None, value=value)


def var(name):
    return Identifier(span=None, name=name)


def binop(left, symbol, right):
    return BinaryOp(span=None, left=left, operator=BinaryOperator(symbol), right=right)


class TestBinaryOperator:
    """Test operator metadata."""

    def test_symbols(self):
        assert [op.value for op in BinaryOperator] == ["+", "-", "*", "/"]

    def test_precedence(self):
        assert BinaryOperator.MULTIPLY.precedence > BinaryOperator.ADD.precedence
        assert BinaryOperator.DIVIDE.precedence == BinaryOperator.MULTIPLY.precedence
        assert BinaryOperator.SUBTRACT.precedence == BinaryOperator.ADD.precedence


class TestExpressionFormatting:
    """Test rendering expressions as source text."""

    def test_atoms(self):
        assert format_expression(num(42)) == "42"
        assert format_expression(var("x")) == "x"

    def test_simple_binary(self):
        assert format_expression(binop(var("x"), "*", var("x"))) == "x * x"

    def test_no_parens_for_higher_precedence_child(self):
        expr = binop(num(1), "+", binop(num(2), "*", num(3)))
        assert format_expression(expr) == "1 + 2 * 3"

    def test_parens_for_lower_precedence_child(self):
        expr = binop(binop(num(1), "+", num(2)), "*", num(3))
        assert format_expression(expr) == "(1 + 2) * 3"

    def test_left_chain_needs_no_parens(self):
        expr = binop(binop(num(10), "-", num(3)), "-", num(2))
        assert format_expression(expr) == "10 - 3 - 2"

    def test_right_nested_same_precedence(self):
        """A right operand of equal precedence keeps its grouping."""
        expr = binop(num(10), "-", binop(num(3), "-", num(2)))
        assert format_expression(expr) == "10 - (3 - 2)"
        expr = binop(num(8), "/", binop(num(4), "*", num(2)))
        assert format_expression(expr) == "8 / (4 * 2)"

    def test_str_uses_formatter(self):
        assert str(binop(var("a"), "/", num(2))) == "a / 2"

    def test_unknown_node_rejected(self):
        with pytest.raises(TypeError):
            format_expression("not a node")


class TestStatementFormatting:
    """Test rendering statements and programs."""

    def test_assign(self):
        stmt = Assign(span=None, name="x", value=num(5))
        assert format_statement(stmt) == "x = 5"
        assert str(stmt) == "x = 5"

    def test_print(self):
        stmt = Print(span=None, expression=binop(var("x"), "*", var("x")))
        assert format_statement(stmt) == "print(x * x)"

    def test_program(self):
        program = Program(span=None)
        program.add(Assign(span=None, name="x", value=num(5)))
        program.add(Print(span=None, expression=var("x")))
        assert format_program(program) == "x = 5; print(x)"
        assert str(program) == "x = 5; print(x)"

    def test_empty_program(self):
        assert format_program(Program(span=None)) == ""


class TestRoundTrip:
    """Rendered programs parse back to the same structure."""

    @pytest.mark.parametrize("source", [
        "x=5;print(x*x);",
        "print((1+2)*3)",
        "print(1-(2-3))",
        "a = 8/(4/2); b = (a+1)*(a-1); print(b/a)",
        "print(((((x)))))",
        "print(((1+2)*3+4)*5)",
    ])
    def test_format_is_stable(self, source):
        rendered = format_program(parse(source))
        assert format_program(parse(rendered)) == rendered

    def test_normalized_text(self):
        assert format_program(parse("x=5;print(x*x);")) == "x = 5; print(x * x)"
        assert format_program(parse("print((1+2)*3)")) == "print((1 + 2) * 3)"
        assert format_program(parse("print((1*2)+3)")) == "print(1 * 2 + 3)"
        assert format_program(parse("print(((1+2)*3+4)*5)")) == "print(((1 + 2) * 3 + 4) * 5)"


class TestPrintAst:
    """Test the debug dump."""

    def test_dump_structure(self):
        stream = io.StringIO()
        print_ast(parse("x = 1 + y"), stream)
        lines = stream.getvalue().splitlines()
        assert lines[0] == "Program"
        text = stream.getvalue()
        assert "Assign" in text
        assert "name: 'x'" in text
        assert "BinaryOp" in text
        assert "operator: '+'" in text
        assert "value: 1" in text
        assert "span" not in text

    def test_dump_nesting(self):
        stream = io.StringIO()
        print_ast(Print(span=None, expression=num(3)), stream)
        assert stream.getvalue().splitlines() == [
            "Print",
            "  expression:",
            "    NumberLiteral",
            "      value: 3",
        ]

    def test_dump_defaults_to_stdout(self, capsys):
        print_ast(var("z"))
        assert "Identifier" in capsys.readouterr().out


class TestLongChains:
    """Rendering does not recurse once per operator."""

    def test_format_long_sum(self):
        program = parse("print(" + "+".join(["1"] * 5000) + ")")
        assert format_program(program) == "print(" + " + ".join(["1"] * 5000) + ")"

    def test_format_long_chain_with_grouped_head(self):
        source = "print((a-b)*" + "*".join(["c"] * 5000) + ")"
        rendered = format_program(parse(source))
        assert rendered.startswith("print((a - b) * c * c")
        assert rendered.count("(") == 2

    def test_dump_long_chain(self):
        stream = io.StringIO()
        print_ast(parse("print(" + "-".join(["1"] * 1100) + ")"), stream)
        lines = stream.getvalue().splitlines()
        assert lines[0] == "Program"
        assert lines[-1] == "  ]"
        assert sum(1 for line in lines if line.strip() == "BinaryOp") == 1099
        assert sum(1 for line in lines if line.strip() == "value: 1") == 1100
