"""
Recursive descent parser for intcalc programs.

Pulls tokens from the scanner on demand (one token of lookahead) and builds
the AST bottom-up in a single pass. The first malformed construct aborts
the parse; no partial program is returned.

Grammar (lowest to highest precedence):

    Program    ::= Stmt (';' Stmt)* [';']
    Stmt       ::= Identifier '=' Expression
                 | 'print' '(' Expression ')'
    Expression ::= Term (('+' | '-') Term)*
    Term       ::= Factor (('*' | '/') Factor)*
    Factor     ::= Identifier | Number | '(' Expression ')'
"""

from typing import Optional
from .tokens import Token, TokenType, SourceSpan, describe_token
from .lexer import Scanner
from .ast import (
    Expression, NumberLiteral, Identifier, BinaryOp, BinaryOperator,
    Statement, Assign, Print, Program,
)
from .errors import (
    error_unexpected_character,
    error_unexpected_token,
    error_unexpected_end,
    error_invalid_expression,
    error_invalid_statement,
)


class Parser:
    """
    Recursive descent parser for intcalc.

    Usage:
        parser = Parser(Scanner(source))
        program = parser.parse_program()

    Only the current and the previous token are kept; an ERROR token is
    reported as a lexer error the moment it becomes current, before any
    grammar check looks at it.
    """

    def __init__(self, scanner: Scanner):
        self.scanner = scanner
        self.previous: Optional[Token] = None
        self.current: Token = self._next_token()

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _next_token(self) -> Token:
        """Pull the next token from the scanner, rejecting invalid characters."""
        token = self.scanner.next_token()
        if token.type == TokenType.ERROR:
            raise error_unexpected_character(
                token.value, token.span, self._source_line(token.span)
            )
        return token

    def _is_at_end(self) -> bool:
        """Check if the current token is END."""
        return self.current.type == TokenType.END

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self.current.type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self.current
        if not self._is_at_end():
            self.previous = token
            self.current = self._next_token()
        return token

    def _match(self, token_type: TokenType) -> bool:
        """Consume the current token if it has the given type."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _consume(self, token_type: TokenType, expected: str) -> Token:
        """Consume token of expected type, or raise error."""
        if self._check(token_type):
            return self._advance()
        self._error(expected)

    def _error(self, expected: str) -> None:
        """Raise a parser error for the current token."""
        token = self.current
        if token.type == TokenType.END:
            raise error_unexpected_end(expected, token.span, self._source_line(token.span))
        raise error_unexpected_token(
            expected, describe_token(token), token.span, self._source_line(token.span)
        )

    def _source_line(self, span: SourceSpan) -> Optional[str]:
        return self.scanner.get_source_line(span.start.line)

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def _parse_expression(self) -> Expression:
        """Expression ::= Term (('+' | '-') Term)*"""
        left = self._parse_term()
        while self._match(TokenType.PLUS) or self._match(TokenType.MINUS):
            operator = BinaryOperator.from_token_type(self.previous.type)
            right = self._parse_term()
            left = BinaryOp(
                span=SourceSpan(left.span.start, right.span.end),
                left=left,
                operator=operator,
                right=right,
            )
        return left

    def _parse_term(self) -> Expression:
        """Term ::= Factor (('*' | '/') Factor)*"""
        left = self._parse_factor()
        while self._match(TokenType.MUL) or self._match(TokenType.DIV):
            operator = BinaryOperator.from_token_type(self.previous.type)
            right = self._parse_factor()
            left = BinaryOp(
                span=SourceSpan(left.span.start, right.span.end),
                left=left,
                operator=operator,
                right=right,
            )
        return left

    def _parse_factor(self) -> Expression:
        """Factor ::= Identifier | Number | '(' Expression ')'"""
        if self._match(TokenType.IDENTIFIER):
            return Identifier(span=self.previous.span, name=self.previous.value)

        if self._match(TokenType.NUMBER):
            return NumberLiteral(span=self.previous.span, value=self.previous.value)

        if self._match(TokenType.LPAREN):
            # Parentheses only group; the inner node keeps its own span
            expr = self._parse_expression()
            self._consume(TokenType.RPAREN, "')'")
            return expr

        token = self.current
        if token.type == TokenType.END:
            self._error("a number, identifier or '('")
        raise error_invalid_expression(
            describe_token(token), token.span, self._source_line(token.span)
        )

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement(self) -> Statement:
        """Stmt ::= Identifier '=' Expression | 'print' '(' Expression ')'"""
        start = self.current

        if self._match(TokenType.IDENTIFIER):
            name = self.previous.value
            self._consume(TokenType.ASSIGN, "'='")
            value = self._parse_expression()
            return Assign(span=SourceSpan(start.span.start, value.span.end), name=name, value=value)

        if self._match(TokenType.PRINT):
            self._consume(TokenType.LPAREN, "'('")
            expression = self._parse_expression()
            closing = self._consume(TokenType.RPAREN, "')'")
            return Print(span=SourceSpan(start.span.start, closing.span.end), expression=expression)

        if self._is_at_end():
            self._error("a statement")
        raise error_invalid_statement(
            describe_token(start), start.span, self._source_line(start.span)
        )

    def parse_program(self) -> Program:
        """Program ::= Stmt (';' Stmt)* [';']"""
        start = self.current
        program = Program(span=None)
        program.add(self._parse_statement())

        while self._match(TokenType.SEMICOLON):
            if self._is_at_end():
                break  # trailing ';'
            program.add(self._parse_statement())

        if not self._is_at_end():
            self._error("';' or end of input")

        program.span = SourceSpan(start.span.start, self.current.span.end)
        return program


def parse(source: str, filename: Optional[str] = None) -> Program:
    """
    Parse source text into a Program.

    Args:
        source: The program text
        filename: Optional filename for error messages

    Returns:
        The parsed Program

    Raises:
        LexerError: If the source contains an unrecognized character
        ParserError: If the tokens do not match the grammar
    """
    return Parser(Scanner(source, filename)).parse_program()
