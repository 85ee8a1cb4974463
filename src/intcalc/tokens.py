"""
Token types for the intcalc scanner.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E3xx: Semantic errors
- E4xx: Runtime errors
- E5xx: Invocation errors
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional


class TokenType(Enum):
    """All token types recognized by the scanner."""

    # --- Arithmetic operators ---
    PLUS = auto()               # +
    MINUS = auto()              # -
    MUL = auto()                # *
    DIV = auto()                # /

    # --- Literals and names ---
    NUMBER = auto()             # 42
    IDENTIFIER = auto()         # user-defined names

    # --- Keywords ---
    PRINT = auto()              # print

    # --- Punctuation ---
    LPAREN = auto()             # (
    RPAREN = auto()             # )
    SEMICOLON = auto()          # ;
    ASSIGN = auto()             # =

    # --- Special ---
    ERROR = auto()              # unrecognized character
    END = auto()                # end of input


@dataclass(frozen=True)
class SourceLocation:
    """Represents a position in source code."""
    line: int           # 1-indexed line number
    column: int         # 1-indexed column number
    offset: int         # 0-indexed character offset from start
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a range in source code."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"


@dataclass(frozen=True)
class Token:
    """A single token from the scanner."""
    type: TokenType
    value: Any              # int for NUMBER, name for IDENTIFIER, char for ERROR
    lexeme: str             # The original source text
    span: SourceSpan        # Location in source

    def __str__(self) -> str:
        if self.lexeme:
            return f"{self.type.name}({self.lexeme})"
        return self.type.name


# Reserved words shadow identifiers exactly (case-sensitive)
KEYWORDS: dict[str, TokenType] = {
    "print": TokenType.PRINT,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MUL,
    '/': TokenType.DIV,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    ';': TokenType.SEMICOLON,
    '=': TokenType.ASSIGN,
}

# Human-readable names used in parser diagnostics
TOKEN_DESCRIPTIONS: dict[TokenType, str] = {
    TokenType.PLUS: "'+'",
    TokenType.MINUS: "'-'",
    TokenType.MUL: "'*'",
    TokenType.DIV: "'/'",
    TokenType.NUMBER: "number",
    TokenType.IDENTIFIER: "identifier",
    TokenType.PRINT: "'print'",
    TokenType.LPAREN: "'('",
    TokenType.RPAREN: "')'",
    TokenType.SEMICOLON: "';'",
    TokenType.ASSIGN: "'='",
    TokenType.ERROR: "invalid character",
    TokenType.END: "end of input",
}


def describe_token(token: Token) -> str:
    """Describe a token for an error message, e.g. "number '42'"."""
    if token.type in (TokenType.NUMBER, TokenType.IDENTIFIER):
        return f"{TOKEN_DESCRIPTIONS[token.type]} '{token.lexeme}'"
    return TOKEN_DESCRIPTIONS[token.type]
