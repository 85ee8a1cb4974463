"""
Scanner for intcalc programs.

Converts source text into a lazy, forward-only stream of tokens for the
parser. Unrecognized characters become ERROR tokens; the scanner itself
never raises, the parser decides when to report them.
"""

from typing import List, Optional, Iterator
from .tokens import (
    Token, TokenType, SourceLocation, SourceSpan, KEYWORDS, SINGLE_CHAR_TOKENS,
)
from .errors import error_unexpected_character

WHITESPACE = ' \t\r\n\f\v'


class Scanner:
    """
    Tokenizer for intcalc source text.

    Usage:
        scanner = Scanner(source)
        token = scanner.next_token()

    Or for streaming:
        for token in Scanner(source):
            process(token)

    Once the input is exhausted every call to next_token() returns an END
    token again.
    """

    def __init__(self, source: str, filename: Optional[str] = None):
        self.source = source
        self.filename = filename
        self.pos = 0            # Current position in source
        self.line = 1           # Current line (1-indexed)
        self.column = 1         # Current column (1-indexed)
        self._lines: Optional[List[str]] = None  # Cached line list

    @property
    def lines(self) -> List[str]:
        """Lazy-load line list for error reporting."""
        if self._lines is None:
            self._lines = self.source.split('\n')
        return self._lines

    def get_source_line(self, line_num: int) -> Optional[str]:
        """Get a specific line of source (1-indexed)."""
        if 1 <= line_num <= len(self.lines):
            return self.lines[line_num - 1]
        return None

    def _location(self) -> SourceLocation:
        """Get current source location."""
        return SourceLocation(self.line, self.column, self.pos, self.filename)

    def _span(self, start: SourceLocation) -> SourceSpan:
        """Create a span from start to current position."""
        return SourceSpan(start, self._location())

    def _peek(self) -> str:
        """Look at the current character without consuming it."""
        if self.pos >= len(self.source):
            return '\0'
        return self.source[self.pos]

    def _advance(self) -> str:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return '\0'
        ch = self.source[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _is_at_end(self) -> bool:
        """Check if we've reached end of source."""
        return self.pos >= len(self.source)

    def _skip_whitespace(self) -> None:
        while not self._is_at_end() and self._peek() in WHITESPACE:
            self._advance()

    def _make_token(self, token_type: TokenType, value, start: SourceLocation) -> Token:
        """Create a token whose lexeme runs from start to the current position."""
        lexeme = self.source[start.offset:self.pos]
        return Token(token_type, value, lexeme, self._span(start))

    def _scan_number(self) -> Token:
        """Scan a maximal run of digits."""
        start = self._location()
        while _is_digit(self._peek()):
            self._advance()
        lexeme = self.source[start.offset:self.pos]
        return self._make_token(TokenType.NUMBER, int(lexeme), start)

    def _scan_identifier_or_keyword(self) -> Token:
        """Scan a letter followed by letters and digits."""
        start = self._location()
        while _is_letter(self._peek()) or _is_digit(self._peek()):
            self._advance()

        lexeme = self.source[start.offset:self.pos]
        if lexeme in KEYWORDS:
            return self._make_token(KEYWORDS[lexeme], lexeme, start)
        return self._make_token(TokenType.IDENTIFIER, lexeme, start)

    def next_token(self) -> Token:
        """Scan the next token."""
        self._skip_whitespace()

        start = self._location()
        if self._is_at_end():
            return Token(TokenType.END, None, "", self._span(start))

        ch = self._peek()

        if _is_digit(ch):
            return self._scan_number()

        if _is_letter(ch):
            return self._scan_identifier_or_keyword()

        self._advance()

        if ch in SINGLE_CHAR_TOKENS:
            return self._make_token(SINGLE_CHAR_TOKENS[ch], None, start)

        # Unknown character
        return self._make_token(TokenType.ERROR, ch, start)

    def tokenize(self) -> List[Token]:
        """Tokenize the rest of the source, raising on the first invalid character."""
        tokens = []
        for token in self:
            if token.type == TokenType.ERROR:
                raise error_unexpected_character(
                    token.value, token.span, self.get_source_line(token.span.start.line)
                )
            tokens.append(token)
        return tokens

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens, ending with the first END token."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.END:
                break


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def _is_letter(ch: str) -> bool:
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z')


def tokenize(source: str, filename: Optional[str] = None) -> List[Token]:
    """
    Convenience function to tokenize source code.

    Args:
        source: The source code to tokenize
        filename: Optional filename for error messages

    Returns:
        List of tokens, ending with END

    Raises:
        LexerError: If the source contains an unrecognized character
    """
    return Scanner(source, filename).tokenize()
