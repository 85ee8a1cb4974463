"""
Unit tests for the intcalc scanner.
"""

import pytest
from intcalc import tokenize, Scanner, TokenType, LexerError


class TestScannerBasics:
    """Test basic scanner functionality."""

    def test_empty_source(self):
        """Empty source produces only END."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.END

    def test_whitespace_only(self):
        """Whitespace of any kind is skipped."""
        tokens = tokenize("  \t\n\r  ")
        assert [t.type for t in tokens] == [TokenType.END]

    def test_assignment_statement(self):
        """Basic assignment tokenization."""
        tokens = tokenize("x = 42;")
        types = [t.type for t in tokens]
        assert types == [
            TokenType.IDENTIFIER,
            TokenType.ASSIGN,
            TokenType.NUMBER,
            TokenType.SEMICOLON,
            TokenType.END,
        ]

    def test_print_statement(self):
        """Print statement tokenization."""
        tokens = tokenize("print(a+b*c)")
        types = [t.type for t in tokens]
        assert types == [
            TokenType.PRINT,
            TokenType.LPAREN,
            TokenType.IDENTIFIER,
            TokenType.PLUS,
            TokenType.IDENTIFIER,
            TokenType.MUL,
            TokenType.IDENTIFIER,
            TokenType.RPAREN,
            TokenType.END,
        ]

    def test_all_operators(self):
        """Every single-character token."""
        tokens = tokenize("+-*/();=")
        types = [t.type for t in tokens]
        assert types == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.MUL,
            TokenType.DIV,
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.SEMICOLON,
            TokenType.ASSIGN,
            TokenType.END,
        ]
        assert [t.lexeme for t in tokens[:-1]] == list("+-*/();=")

    def test_position_tracking(self):
        """Token positions are tracked correctly."""
        tokens = tokenize("x = 5;")
        assert tokens[0].span.start.line == 1
        assert tokens[0].span.start.column == 1
        # '5' starts at column 5
        assert tokens[2].span.start.column == 5
        assert tokens[2].span.start.offset == 4

    def test_multiline_position_tracking(self):
        """Position tracking across multiple lines."""
        tokens = tokenize("x = 5;\nprint(x)")
        print_token = [t for t in tokens if t.type == TokenType.PRINT][0]
        assert print_token.span.start.line == 2
        assert print_token.span.start.column == 1


class TestNumbers:
    """Test number scanning."""

    def test_integer(self):
        tokens = tokenize("42")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == 42
        assert tokens[0].lexeme == "42"

    def test_maximal_munch(self):
        """A run of digits is a single token."""
        tokens = tokenize("12345 6")
        assert [t.value for t in tokens[:-1]] == [12345, 6]

    def test_leading_zeros(self):
        """Leading zeros are kept in the lexeme."""
        tokens = tokenize("007")
        assert tokens[0].value == 7
        assert tokens[0].lexeme == "007"

    def test_large_integer(self):
        """Numbers are not limited to machine width."""
        tokens = tokenize("123456789012345678901234567890")
        assert tokens[0].value == 123456789012345678901234567890

    def test_digits_then_letters(self):
        """A number stops at the first letter."""
        tokens = tokenize("3x")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[1].type == TokenType.IDENTIFIER
        assert tokens[1].value == "x"


class TestIdentifiers:
    """Test identifier and keyword scanning."""

    def test_identifier_value(self):
        tokens = tokenize("foo123")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "foo123"

    def test_print_keyword(self):
        tokens = tokenize("print")
        assert tokens[0].type == TokenType.PRINT
        assert tokens[0].lexeme == "print"

    def test_keyword_is_case_sensitive(self):
        """Only the exact word 'print' is reserved."""
        tokens = tokenize("Print PRINT")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[1].type == TokenType.IDENTIFIER

    def test_keyword_prefix_is_identifier(self):
        """Longer words starting with 'print' are identifiers."""
        tokens = tokenize("printer print2")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "printer"
        assert tokens[1].type == TokenType.IDENTIFIER
        assert tokens[1].value == "print2"


class TestInvalidCharacters:
    """Test handling of characters outside the language."""

    def test_scanner_returns_error_token(self):
        """The scanner reports bad characters as ERROR tokens."""
        scanner = Scanner("x @ y")
        assert scanner.next_token().type == TokenType.IDENTIFIER
        bad = scanner.next_token()
        assert bad.type == TokenType.ERROR
        assert bad.value == "@"
        assert bad.lexeme == "@"
        # Scanning continues after the bad character
        assert scanner.next_token().type == TokenType.IDENTIFIER

    @pytest.mark.parametrize("char", ["@", "_", "%", "{", "é"])
    def test_tokenize_raises(self, char):
        """tokenize() raises E001 on the first bad character."""
        with pytest.raises(LexerError) as exc_info:
            tokenize(f"x = {char}")
        assert "E001" in str(exc_info.value)
        assert exc_info.value.diagnostic.span.start.column == 5

    def test_underscore_is_not_a_letter(self):
        """Identifiers are letters and digits only."""
        scanner = Scanner("a_b")
        assert scanner.next_token().value == "a"
        assert scanner.next_token().type == TokenType.ERROR


class TestEndOfInput:
    """Test behaviour at the end of the source."""

    def test_end_is_idempotent(self):
        """Scanning past END keeps returning END."""
        scanner = Scanner("1")
        assert scanner.next_token().type == TokenType.NUMBER
        for _ in range(5):
            token = scanner.next_token()
            assert token.type == TokenType.END
            assert token.lexeme == ""

    def test_iteration_stops_at_end(self):
        """Iterating a scanner yields tokens up to the first END."""
        types = [t.type for t in Scanner("x = 1")]
        assert types == [
            TokenType.IDENTIFIER,
            TokenType.ASSIGN,
            TokenType.NUMBER,
            TokenType.END,
        ]

    def test_source_cursor_never_moves_back(self):
        scanner = Scanner("a = 1; print(a)")
        offsets = [t.span.start.offset for t in scanner]
        assert offsets == sorted(offsets)


class TestTokenDisplay:
    """Test token string rendering."""

    def test_token_with_lexeme(self):
        tokens = tokenize("x = 5")
        assert str(tokens[0]) == "IDENTIFIER(x)"
        assert str(tokens[1]) == "ASSIGN(=)"
        assert str(tokens[2]) == "NUMBER(5)"

    def test_token_without_lexeme(self):
        assert str(tokenize("")[0]) == "END"


class TestLongInput:
    """Inputs beyond the default integer conversion limits."""

    def test_long_number_literal(self):
        token = Scanner("1" * 5000).next_token()
        assert token.type == TokenType.NUMBER
        assert token.value == (10 ** 5000 - 1) // 9
        assert len(token.lexeme) == 5000

    def test_carriage_return_stays_on_line(self):
        """Only '\\n' starts a new line, for positions and source excerpts."""
        scanner = Scanner("x = 1;\ry = @")
        tokens = list(scanner)
        bad = [t for t in tokens if t.type == TokenType.ERROR][0]
        assert bad.span.start.line == 1
        assert bad.span.start.column == 12
        assert scanner.get_source_line(1) == "x = 1;\ry = @"
        assert scanner.get_source_line(2) is None
