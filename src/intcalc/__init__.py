"""
intcalc - a straight-line integer calculator language.

This module provides:
- Scanner: Tokenizes program text on demand
- Parser: Builds an AST from the token stream
- Interpreter: Executes the AST against a fresh variable memory

Usage:
    from intcalc import parse, Interpreter

    program = parse("x = 5; print(x * x)")
    Interpreter().run(program)      # prints 25

    # Or in one call, collecting the printed values
    from intcalc import compile_and_run
    result = compile_and_run("print((1 + 2) * 3)")
    assert result.output == [9]
"""

import sys
from importlib.metadata import PackageNotFoundError, version

# Program integers are unbounded; lift the decimal conversion cap (3.11+)
# so long literals scan and long results print.
if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)

from .tokens import (
    Token,
    TokenType,
    SourceLocation,
    SourceSpan,
    KEYWORDS,
)

from .lexer import (
    Scanner,
    tokenize,
)

from .parser import (
    Parser,
    parse,
)

from .ast import (
    AstNode,
    Expression,
    NumberLiteral,
    Identifier,
    BinaryOp,
    BinaryOperator,
    Statement,
    Assign,
    Print,
    Program,
    format_expression,
    format_statement,
    format_program,
    print_ast,
)

from .errors import (
    CalcError,
    ArgumentError,
    LexerError,
    ParserError,
    SemanticError,
    ExecutionError,
    Diagnostic,
    ErrorSeverity,
)

from .runtime import (
    Interpreter,
    ExecutionResult,
    ExecutionContext,
    Memory,
    execute,
    compile_and_run,
)

try:
    __version__ = version("intcalc")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

__all__ = [
    # Tokens
    'Token',
    'TokenType',
    'SourceLocation',
    'SourceSpan',
    'KEYWORDS',

    # Scanner
    'Scanner',
    'tokenize',

    # Parser
    'Parser',
    'parse',

    # AST nodes
    'AstNode',
    'Expression',
    'NumberLiteral',
    'Identifier',
    'BinaryOp',
    'BinaryOperator',
    'Statement',
    'Assign',
    'Print',
    'Program',
    'format_expression',
    'format_statement',
    'format_program',
    'print_ast',

    # Errors
    'CalcError',
    'ArgumentError',
    'LexerError',
    'ParserError',
    'SemanticError',
    'ExecutionError',
    'Diagnostic',
    'ErrorSeverity',

    # Runtime
    'Interpreter',
    'ExecutionResult',
    'ExecutionContext',
    'Memory',
    'execute',
    'compile_and_run',
]
