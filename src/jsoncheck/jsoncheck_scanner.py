"""Position-tracking scanner that turns JSON text into tokens."""

from types import MappingProxyType
from typing import ClassVar, Iterator, List, Mapping

from jsoncheck.jsoncheck_token import JSONCheckToken, JSONCheckTokenType


class JSONCheckScanner:
    """
    Scanner for JSON text.

    Tokens are produced on demand by `next_token()`.  The scanner never raises
    for malformed input: anything it cannot classify becomes an ILLEGAL token
    and the caller decides what to do with it.  Once the end of the input is
    reached every further call returns the same EOF token.
    """

    # Returned by _read_char() and _peek_char() past the end of the text
    _END: ClassVar[str] = ""

    _KEYWORDS: ClassVar[Mapping[str, JSONCheckTokenType]] = MappingProxyType({
        "true": JSONCheckTokenType.TRUE,
        "false": JSONCheckTokenType.FALSE,
        "null": JSONCheckTokenType.NULL,
    })

    _PUNCTUATION: ClassVar[Mapping[str, JSONCheckTokenType]] = MappingProxyType({
        "{": JSONCheckTokenType.LEFT_BRACE,
        "}": JSONCheckTokenType.RIGHT_BRACE,
        "[": JSONCheckTokenType.LEFT_BRACKET,
        "]": JSONCheckTokenType.RIGHT_BRACKET,
        ":": JSONCheckTokenType.COLON,
        ",": JSONCheckTokenType.COMMA,
    })

    _SPACES: ClassVar[frozenset] = frozenset(" \t")
    _DIGITS: ClassVar[frozenset] = frozenset("0123456789")
    _LETTERS: ClassVar[frozenset] = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
    _IDENTIFIER_CHARS: ClassVar[frozenset] = _LETTERS | _DIGITS

    def __init__(self, text: str) -> None:
        """
        Initialize the scanner.

        Args:
            text: The complete, already decoded document
        """
        self._text = text
        self._text_len = len(text)
        self._position = 0
        self._read_position = 0
        self._current = self._END
        self._line = 1
        self._column = 0
        self._read_char()

    def __iter__(self) -> Iterator[JSONCheckToken]:
        """Yield tokens up to and including the first EOF token."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is JSONCheckTokenType.EOF:
                return

    def next_token(self) -> JSONCheckToken:
        """
        Read the next token and advance past it.

        Returns:
            The next token in the input
        """
        self._skip_whitespace()

        ch = self._current
        if ch == self._END:
            return self._make_token(JSONCheckTokenType.EOF, "EOF")

        kind = self._PUNCTUATION.get(ch)
        if kind is not None:
            token = self._make_token(kind, ch)
            self._read_char()
            self._column += 1
            return token

        if ch == '"':
            start = self._position
            token = self._make_token(JSONCheckTokenType.STRING_LITERAL, self._read_string())
            if self._current == '"':
                self._read_char()

            self._advance_over(self._text[start:self._position])
            return token

        if ch in self._LETTERS:
            identifier = self._read_identifier()
            token = self._make_token(self._KEYWORDS.get(identifier, JSONCheckTokenType.ILLEGAL), identifier)
            self._column += len(identifier)
            return token

        if ch == '-' or ch in self._DIGITS:
            number = self._read_number()
            token = self._make_token(JSONCheckTokenType.NUMBER_LITERAL, number)
            self._column += len(number)
            return token

        token = self._make_token(JSONCheckTokenType.ILLEGAL, ch)
        self._read_char()
        self._column += 1
        return token

    def _make_token(self, kind: JSONCheckTokenType, literal: str) -> JSONCheckToken:
        return JSONCheckToken(kind=kind, literal=literal, line=self._line, column=self._column)

    def _read_char(self) -> None:
        """Move to the next character of the input."""
        if self._read_position >= self._text_len:
            self._current = self._END
            self._position = self._text_len
            return

        self._current = self._text[self._read_position]
        self._position = self._read_position
        self._read_position += 1

    def _peek_char(self) -> str:
        if self._read_position >= self._text_len:
            return self._END

        return self._text[self._read_position]

    def _skip_whitespace(self) -> None:
        """
        Skip spaces, tabs and line breaks, keeping the line and column current.

        A carriage return followed by a line feed counts as a single line break.
        """
        while True:
            ch = self._current
            if ch in self._SPACES:
                self._column += 1
                self._read_char()
                continue

            if ch == '\n' or ch == '\r':
                if ch == '\r' and self._peek_char() == '\n':
                    self._read_char()

                self._line += 1
                self._column = 0
                self._read_char()
                continue

            return

    def _advance_over(self, lexeme: str) -> None:
        """
        Move the line and column past a lexeme that may span several lines.

        Line breaks are counted the same way as in `_skip_whitespace()`.
        """
        normalized = lexeme.replace("\r\n", "\n").replace("\r", "\n")
        breaks = normalized.count("\n")
        if breaks == 0:
            self._column += len(lexeme)
            return

        self._line += breaks
        self._column = len(normalized) - normalized.rfind("\n") - 1

    def _read_string(self) -> str:
        """
        Read a string literal starting at the opening quote.

        Escapes are recognized only so that an escaped quote does not end the
        string; their contents are not checked.  Raw line breaks are kept in the
        literal.  On return the current character is the closing quote, or the
        end of the input for an unterminated string.

        Returns:
            The string contents without the enclosing quotes
        """
        start = self._position + 1
        while True:
            self._read_char()
            ch = self._current
            if ch == self._END or ch == '"':
                break

            if ch != '\\':
                continue

            escaped = self._peek_char()
            if escaped == self._END:
                continue

            self._read_char()
            if escaped != 'u':
                continue

            # \uXXXX: the four digits are skipped without checking them
            for _ in range(4):
                following = self._peek_char()
                if following == self._END or following == '"':
                    break

                self._read_char()

        return self._text[start:self._position]

    def _read_identifier(self) -> str:
        start = self._position
        while self._current != self._END and self._current in self._IDENTIFIER_CHARS:
            self._read_char()

        return self._text[start:self._position]

    def _read_digits(self) -> None:
        while self._current != self._END and self._current in self._DIGITS:
            self._read_char()

    def _read_number(self) -> str:
        """
        Read a number literal: sign, integer digits, fraction and exponent.

        No digit is required anywhere, so inputs such as "-" or "1." are
        returned as they are.
        """
        start = self._position
        if self._current == '-':
            self._read_char()

        self._read_digits()

        if self._current == '.':
            self._read_char()
            self._read_digits()

        if self._current in ('e', 'E'):
            self._read_char()
            if self._current in ('+', '-'):
                self._read_char()

            self._read_digits()

        return self._text[start:self._position]


def tokenize(text: str) -> List[JSONCheckToken]:
    """
    Tokenize a complete JSON document.

    Args:
        text: The document to tokenize

    Returns:
        List of tokens, always ending with a single EOF token
    """
    return list(JSONCheckScanner(text))
