"""
intcalc exceptions and diagnostics.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E3xx: Semantic errors
- E4xx: Runtime errors
- E5xx: Invocation errors

Every error is fatal: the first one raised aborts the run, and only the
command line driver turns it into a report and an exit status.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List
from .tokens import SourceSpan


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    code: str                       # E001, E101, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity
    span: Optional[SourceSpan] = None   # None for errors outside the source
    source_line: Optional[str] = None   # The actual line of source code
    hints: List[str] = field(default_factory=list)

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = []

        # Header: location: severity[code]: message
        header = f"{self.severity.value}[{self.code}]: {self.message}"
        if self.span is not None:
            header = f"{self.span.start}: {header}"
        parts.append(header)

        # Source line with caret
        if show_source and self.span is not None and self.source_line is not None:
            parts.append("  |")
            line_num = str(self.span.start.line)
            parts.append(f"{line_num:>3} | {self.source_line}")

            col = self.span.start.column
            if self.span.start.line == self.span.end.line:
                end_col = self.span.end.column
            else:
                end_col = len(self.source_line) + 1
            underline_len = max(1, end_col - col)
            parts.append(f"    | {' ' * (col - 1)}{'^' * underline_len}")

        for hint in self.hints:
            parts.append(f"    = hint: {hint}")

        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        result = {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "range": None,
            "hints": self.hints,
        }
        if self.span is not None:
            result["range"] = {
                "start": {
                    "line": self.span.start.line,
                    "column": self.span.start.column,
                    "offset": self.span.start.offset,
                },
                "end": {
                    "line": self.span.end.line,
                    "column": self.span.end.column,
                    "offset": self.span.end.offset,
                },
            }
        return result


class CalcError(Exception):
    """Base exception for intcalc errors."""

    exit_code = 1

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.format()


class ArgumentError(CalcError):
    """Wrong command line usage (E5xx)."""
    exit_code = 2


class LexerError(CalcError):
    """Unrecognized character during scanning (E0xx)."""
    exit_code = 3


class ParserError(CalcError):
    """Token sequence does not match the grammar (E1xx)."""
    exit_code = 4


class SemanticError(CalcError):
    """Reference to a variable that was never assigned (E3xx)."""
    exit_code = 5


class ExecutionError(CalcError):
    """Arithmetic failure while running a program (E4xx)."""
    exit_code = 6


# --- Lexer error codes ---

def error_unexpected_character(char: str, span: SourceSpan, source_line: str = None) -> LexerError:
    """E001: Unexpected character."""
    diag = Diagnostic(
        code="E001",
        message=f"unexpected character '{char}'",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=["valid characters are letters, digits, whitespace and + - * / ( ) ; ="],
    )
    return LexerError(diag)


# --- Parser error codes ---

def error_unexpected_token(expected: str, found: str, span: SourceSpan,
                           source_line: str = None) -> ParserError:
    """E101: Unexpected token."""
    diag = Diagnostic(
        code="E101",
        message=f"expected {expected}, found {found}",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return ParserError(diag)


def error_unexpected_end(expected: str, span: SourceSpan, source_line: str = None) -> ParserError:
    """E102: Unexpected end of input."""
    diag = Diagnostic(
        code="E102",
        message=f"unexpected end of input, expected {expected}",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return ParserError(diag)


def error_invalid_expression(found: str, span: SourceSpan, source_line: str = None) -> ParserError:
    """E103: Invalid expression (no factor where one is required)."""
    diag = Diagnostic(
        code="E103",
        message=f"invalid expression: expected a number, identifier or '(', found {found}",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return ParserError(diag)


def error_invalid_statement(found: str, span: SourceSpan, source_line: str = None) -> ParserError:
    """E104: Invalid statement start."""
    diag = Diagnostic(
        code="E104",
        message=f"invalid statement: expected an assignment or 'print', found {found}",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=["statements are 'name = expression' or 'print(expression)'"],
    )
    return ParserError(diag)


# --- Semantic error codes ---

def error_undeclared_variable(name: str, span: SourceSpan,
                              source_line: str = None) -> SemanticError:
    """E301: Variable used before assignment."""
    diag = Diagnostic(
        code="E301",
        message=f"variable '{name}' not declared",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=[f"assign a value first, e.g. '{name} = 0'"],
    )
    return SemanticError(diag)


# --- Runtime error codes ---

def error_division_by_zero(span: SourceSpan, source_line: str = None) -> ExecutionError:
    """E401: Division by zero."""
    diag = Diagnostic(
        code="E401",
        message="division by zero",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return ExecutionError(diag)


# --- Invocation error codes ---

def error_argument_count(count: int) -> ArgumentError:
    """E501: Wrong number of command line arguments."""
    diag = Diagnostic(
        code="E501",
        message=f"incorrect number of arguments: expected 1 program, got {count}",
        severity=ErrorSeverity.ERROR,
        hints=["pass the whole program as one quoted argument, e.g. 'x = 5; print(x * x)'"],
    )
    return ArgumentError(diag)
