"""
Tree-walking interpreter for intcalc programs.

Evaluates AST nodes against an ExecutionContext. Errors are raised where
they are detected and propagate unchanged to the caller.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO

from .context import ExecutionContext, create_context

from ..ast import (
    Program, Statement, Assign, Print,
    Expression, NumberLiteral, Identifier, BinaryOp, BinaryOperator, left_spine,
)
from ..errors import (
    CalcError,
    error_undeclared_variable,
    error_division_by_zero,
)


@dataclass
class ExecutionResult:
    """Result of compiling and running a program."""
    success: bool
    output: List[int] = field(default_factory=list)
    memory: Dict[str, int] = field(default_factory=dict)
    error: Optional[CalcError] = None

    @property
    def error_message(self) -> Optional[str]:
        """The error's diagnostic text, or None on success."""
        if self.error is None:
            return None
        return str(self.error)


class Interpreter:
    """
    Tree-walking interpreter for intcalc.

    Evaluates AST nodes by dispatching on the node type.
    """

    def __init__(self, output: Optional[TextIO] = None):
        """
        Initialize the interpreter.

        Args:
            output: Stream for print statements (defaults to standard output)
        """
        self.output = output

    def run(self, program: Program, source: str = "") -> ExecutionContext:
        """
        Execute every statement of a program in order.

        Args:
            program: The parsed program
            source: Original source code for error messages

        Returns:
            The context of the finished run (memory and printed values)

        Raises:
            SemanticError: If a variable is read before it is assigned
            ExecutionError: On division by zero
        """
        ctx = create_context(source, self.output)
        self.execute_program(program, ctx)
        return ctx

    def execute_program(self, program: Program, ctx: ExecutionContext) -> None:
        """Execute a program's statements in an existing context."""
        for stmt in program.statements:
            self.execute_statement(stmt, ctx)

    def execute_statement(self, stmt: Statement, ctx: ExecutionContext) -> None:
        """Execute a statement."""
        if isinstance(stmt, Assign):
            ctx.set_variable(stmt.name, self.evaluate(stmt.value, ctx))
        elif isinstance(stmt, Print):
            ctx.write(self.evaluate(stmt.expression, ctx))
        else:
            raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def evaluate(self, expr: Expression, ctx: ExecutionContext) -> int:
        """Evaluate an expression to an integer."""
        if isinstance(expr, NumberLiteral):
            return expr.value
        elif isinstance(expr, Identifier):
            return self._eval_identifier(expr, ctx)
        elif isinstance(expr, BinaryOp):
            return self._eval_binary_op(expr, ctx)
        else:
            raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def _eval_identifier(self, ident: Identifier, ctx: ExecutionContext) -> int:
        """Evaluate an identifier (variable lookup)."""
        value = ctx.get_variable(ident.name)
        if value is None:
            raise error_undeclared_variable(ident.name, ident.span, _line_of(ident, ctx))
        return value

    def _eval_binary_op(self, op: BinaryOp, ctx: ExecutionContext) -> int:
        """
        Evaluate a binary operation, left operand first.

        A left-nested chain (a + b - c ...) is folded in a loop along its
        left spine, so its length is not bounded by the recursion limit.
        """
        spine = left_spine(op)
        value = self.evaluate(spine[-1].left, ctx)
        for node in reversed(spine):
            value = self._apply(node, value, self.evaluate(node.right, ctx), ctx)
        return value

    def _apply(self, op: BinaryOp, left: int, right: int, ctx: ExecutionContext) -> int:
        """Combine two evaluated operands."""
        if op.operator == BinaryOperator.ADD:
            return left + right
        elif op.operator == BinaryOperator.SUBTRACT:
            return left - right
        elif op.operator == BinaryOperator.MULTIPLY:
            return left * right
        elif op.operator == BinaryOperator.DIVIDE:
            if right == 0:
                raise error_division_by_zero(op.span, _line_of(op, ctx))
            return truncating_divide(left, right)
        else:
            raise TypeError(f"Unknown binary operator: {op.operator}")


def truncating_divide(dividend: int, divisor: int) -> int:
    """Integer division rounding toward zero, e.g. -7 / 2 == -3."""
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        return -quotient
    return quotient


def _line_of(node: Expression, ctx: ExecutionContext) -> Optional[str]:
    if node.span is None:
        return None
    return ctx.get_source_line(node.span.start.line)


def execute(program: Program, output: Optional[TextIO] = None, source: str = "") -> ExecutionContext:
    """
    Execute a parsed program.

    This is a convenience wrapper around Interpreter.run().
    """
    return Interpreter(output=output).run(program, source)


def compile_and_run(source: str, output: Optional[TextIO] = None) -> ExecutionResult:
    """
    High-level API to parse and run a program in one call:

        from intcalc import compile_and_run

        result = compile_and_run("x = 5; print(x * x)")
        if result.success:
            print(result.output)    # [25]
        else:
            print(result.error_message)

    Values printed before a runtime failure are still written and reported
    in the result's output.

    Args:
        source: Program text
        output: Stream for print statements (defaults to standard output)

    Returns:
        ExecutionResult with printed values, final memory and any error
    """
    from ..parser import parse

    try:
        program = parse(source)
    except CalcError as e:
        return ExecutionResult(success=False, error=e)

    ctx = create_context(source, output)
    try:
        Interpreter(output=output).execute_program(program, ctx)
    except CalcError as e:
        return ExecutionResult(
            success=False,
            output=ctx.printed,
            memory=ctx.memory.snapshot(),
            error=e,
        )

    return ExecutionResult(
        success=True,
        output=ctx.printed,
        memory=ctx.memory.snapshot(),
    )
