"""Validation error records and exception classes for jsoncheck."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from jsoncheck.jsoncheck_token import JSONCheckToken


class JSONCheckErrorKind(Enum):
    """Kinds of syntax violation.  The value of each kind is its message."""
    EXPECTED_LEFT_BRACE = "expected left brace"
    EXPECTED_RIGHT_BRACE = "expected right brace"
    EXPECTED_LEFT_BRACKET = "expected left bracket"
    EXPECTED_RIGHT_BRACKET = "expected right bracket"
    EXPECTED_STRING_LITERAL = "expected string literal"
    EXPECTED_COLON = "expected a colon"
    EXPECTED_VALUE = "expected value"
    EXPECTED_COMMA = "expected a comma"
    EXPECTED_END_OF_INPUT = "expected end of input"
    INVALID_STRING_LITERAL = "invalid string literal"
    INVALID_NUMBER_LITERAL = "invalid number literal"
    MAXIMUM_DEPTH_EXCEEDED = "maximum nesting depth exceeded"


@dataclass(frozen=True)
class JSONCheckValidationError:
    """
    A single syntax violation found while validating a document.

    Attributes:
        kind: What was expected at the failure point
        token: The current token when the violation was detected
        source_name: Optional name of the document, used only for display
    """
    kind: JSONCheckErrorKind
    token: JSONCheckToken
    source_name: Optional[str] = None

    @property
    def message(self) -> str:
        """Human-readable description of the violation."""
        return self.kind.value

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column

    def __str__(self) -> str:
        location = f"{self.token.line}:{self.token.column}"
        if self.source_name:
            location = f"{self.source_name}:{location}"

        return f"{location}: {self.message} (near {self.token.kind.name} {self.token.literal!r})"


class JSONCheckError(Exception):
    """Base exception for conditions that stop jsoncheck from producing a verdict."""

    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        context: Optional[str] = None
    ):
        """
        Initialize error.

        Args:
            message: Core error description
            source_name: Document or file the error relates to
            context: Additional context information
        """
        self.message = message
        self.source_name = source_name
        self.context = context

        super().__init__(self._format_detailed_message())

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.source_name:
            parts.append(f"Source: {self.source_name}")

        if self.context:
            parts.append(f"Context: {self.context}")

        return "\n".join(parts)


class JSONCheckSourceError(JSONCheckError):
    """The input source could not be read or decoded."""


class JSONCheckConfigError(JSONCheckError):
    """A configuration file or value is invalid."""


class JSONCheckUsageError(JSONCheckError):
    """A jsoncheck object was used in a way its lifecycle does not allow."""
