"""Token types and token representation for JSON documents."""

from dataclasses import dataclass
from enum import Enum


class JSONCheckTokenType(Enum):
    """Token types for JSON documents."""
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    LEFT_BRACKET = "["
    RIGHT_BRACKET = "]"
    COLON = ":"
    COMMA = ","
    STRING_LITERAL = "STRING_LITERAL"
    NUMBER_LITERAL = "NUMBER_LITERAL"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    EOF = "EOF"
    ILLEGAL = "ILLEGAL"


@dataclass(frozen=True)
class JSONCheckToken:
    """
    Represents a single token in a JSON document.

    Attributes:
        kind: The type of the token
        literal: The source text of the token (string contents exclude the quotes)
        line: 1-based line of the token's first character
        column: 0-based column of the token's first character
    """
    kind: JSONCheckTokenType
    literal: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"JSONCheckToken({self.kind.name}, {self.literal!r}, line={self.line}, col={self.column})"
