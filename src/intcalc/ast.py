"""
Abstract Syntax Tree (AST) node definitions for intcalc programs.

The node set is closed: expressions are NumberLiteral, Identifier or
BinaryOp, statements are Assign or Print. Every consumer dispatches on
these variants explicitly and rejects anything else.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, TextIO, TYPE_CHECKING
from .tokens import SourceSpan, TokenType

if TYPE_CHECKING:
    from .runtime.context import ExecutionContext


class BinaryOperator(Enum):
    """Arithmetic operators, valued by their source symbol."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def precedence(self) -> int:
        if self in (BinaryOperator.MULTIPLY, BinaryOperator.DIVIDE):
            return 2
        return 1

    @classmethod
    def from_token_type(cls, token_type: TokenType) -> "BinaryOperator":
        return _TOKEN_OPERATORS[token_type]


_TOKEN_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUBTRACT,
    TokenType.MUL: BinaryOperator.MULTIPLY,
    TokenType.DIV: BinaryOperator.DIVIDE,
}


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class AstNode:
    """Base class for all AST nodes."""
    span: Optional[SourceSpan]  # Source location for error reporting


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class Expression(AstNode):
    """Base class for all expressions."""

    def __str__(self) -> str:
        return format_expression(self)


@dataclass
class NumberLiteral(Expression):
    """An integer literal."""
    value: int


@dataclass
class Identifier(Expression):
    """A variable reference."""
    name: str


@dataclass
class BinaryOp(Expression):
    """A binary arithmetic operation (e.g., a + b)."""
    left: Expression
    operator: BinaryOperator
    right: Expression


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class Statement(AstNode):
    """Base class for all statements."""

    def __str__(self) -> str:
        return format_statement(self)


@dataclass
class Assign(Statement):
    """An assignment (e.g., x = 5). Creates the variable if it is new."""
    name: str
    value: Expression


@dataclass
class Print(Statement):
    """A print statement (e.g., print(x * x))."""
    expression: Expression


@dataclass
class Program(AstNode):
    """A complete program: statements in execution order."""
    statements: List[Statement] = field(default_factory=list)

    def add(self, statement: Statement) -> None:
        self.statements.append(statement)

    def run(self, output: Optional[TextIO] = None) -> "ExecutionContext":
        """Execute this program with a fresh memory. See Interpreter.run."""
        from .runtime.interpreter import Interpreter
        return Interpreter(output=output).run(self)

    def __str__(self) -> str:
        return format_program(self)


# =============================================================================
# Rendering
# =============================================================================

def format_expression(expr: Expression) -> str:
    """
    Render an expression as infix source text.

    Operators are surrounded by single spaces and only the parentheses
    needed to re-parse the same tree are emitted: a lower-precedence
    operand, or a right operand of equal precedence (operators are
    left-associative).
    """
    if isinstance(expr, NumberLiteral):
        return str(expr.value)
    elif isinstance(expr, Identifier):
        return expr.name
    elif isinstance(expr, BinaryOp):
        # Walk the left spine iteratively; every opening paren of a wrapped
        # left operand lands at the very start of the text.
        spine = left_spine(expr)
        child = spine[-1].left
        parts = [format_expression(child)]
        opened = 0
        for node in reversed(spine):
            precedence = node.operator.precedence
            if _precedence_of(child) < precedence:
                parts.append(")")
                opened += 1
            right = format_expression(node.right)
            if _precedence_of(node.right) <= precedence:
                right = f"({right})"
            parts.append(f" {node.operator.value} {right}")
            child = node
        return "(" * opened + "".join(parts)
    else:
        raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def left_spine(expr: BinaryOp) -> List[BinaryOp]:
    """
    The chain of BinaryOps reached by following left operands, outermost
    first. Left-associative chains like 1 + 2 + ... + n nest this way, so
    consumers loop over the spine instead of recursing once per operator.
    """
    spine = [expr]
    while isinstance(spine[-1].left, BinaryOp):
        spine.append(spine[-1].left)
    return spine


def _precedence_of(expr: Expression) -> int:
    """Binding strength of an expression; atoms bind tightest."""
    if isinstance(expr, BinaryOp):
        return expr.operator.precedence
    return 3


def format_statement(stmt: Statement) -> str:
    """Render a statement as source text."""
    if isinstance(stmt, Assign):
        return f"{stmt.name} = {format_expression(stmt.value)}"
    elif isinstance(stmt, Print):
        return f"print({format_expression(stmt.expression)})"
    else:
        raise TypeError(f"Unknown statement type: {type(stmt).__name__}")


def format_program(program: Program) -> str:
    """Render a program as a single line of source text."""
    return "; ".join(format_statement(stmt) for stmt in program.statements)


# =============================================================================
# Debug Dump
# =============================================================================

class PrintVisitor:
    """Debug visitor that writes the AST structure to a stream."""

    def __init__(self, stream: TextIO, indent: int = 0):
        self.stream = stream
        self.indent = indent

    def _print(self, indent: int, text: str) -> None:
        print("  " * indent + text, file=self.stream)

    def visit(self, node: AstNode) -> None:
        # Explicit stack of pending nodes and text lines, so long operator
        # chains do not exhaust the interpreter's recursion limit
        stack = [(node, self.indent)]
        while stack:
            item, indent = stack.pop()
            if isinstance(item, str):
                self._print(indent, item)
                continue

            self._print(indent, item.__class__.__name__)
            pending = []
            for name, value in item.__dict__.items():
                if name == "span":
                    continue
                if isinstance(value, AstNode):
                    pending.append((f"  {name}:", indent))
                    pending.append((value, indent + 2))
                elif isinstance(value, list):
                    pending.append((f"  {name}: [", indent))
                    pending.extend((child, indent + 2) for child in value)
                    pending.append(("  ]", indent))
                elif isinstance(value, BinaryOperator):
                    pending.append((f"  {name}: '{value.value}'", indent))
                else:
                    pending.append((f"  {name}: {value!r}", indent))
            stack.extend(reversed(pending))


def print_ast(node: AstNode, stream: Optional[TextIO] = None) -> None:
    """Print an AST node for debugging."""
    PrintVisitor(stream if stream is not None else sys.stdout).visit(node)
