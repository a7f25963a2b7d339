"""Recursive-descent structural validator for JSON documents."""

import logging
import re
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Tuple

from jsoncheck.jsoncheck_config import JSONCheckConfig, JSONCheckErrorPolicy
from jsoncheck.jsoncheck_error import (
    JSONCheckErrorKind, JSONCheckSourceError, JSONCheckUsageError, JSONCheckValidationError
)
from jsoncheck.jsoncheck_scanner import JSONCheckScanner
from jsoncheck.jsoncheck_token import JSONCheckTokenType


# Literal grammars enforced only by the strict options; the scanner accepts more
_STRICT_STRING = re.compile(r'(?:[^"\\\x00-\x1f]|\\["\\/bfnrt]|\\u[0-9a-fA-F]{4})*')
_STRICT_NUMBER = re.compile(r'-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?')


@dataclass
class JSONCheckResult:
    """Outcome of validating one document."""

    source_name: Optional[str]
    accepted: bool
    errors: List[JSONCheckValidationError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        """Get the number of violations found."""
        return len(self.errors)


class JSONCheckValidator:
    """
    Validates the structure of one JSON document.

    The validator pulls tokens from its own scanner, holding the current token
    plus one token of lookahead, and walks the grammar with the mutually
    recursive `_parse_object()`, `_parse_array()` and `_parse_value()`.  Each
    of these returns True if the walk can continue and False if it must stop.
    Violations are never raised: they are appended to the error list, and the
    configured error policy decides whether the walk goes on.

    A validator is built for a single document and can only be used once.
    """

    _SCALARS: ClassVar[frozenset] = frozenset({
        JSONCheckTokenType.STRING_LITERAL,
        JSONCheckTokenType.NUMBER_LITERAL,
        JSONCheckTokenType.TRUE,
        JSONCheckTokenType.FALSE,
        JSONCheckTokenType.NULL,
    })

    _OPENERS: ClassVar[frozenset] = frozenset({JSONCheckTokenType.LEFT_BRACE, JSONCheckTokenType.LEFT_BRACKET})
    _CLOSERS: ClassVar[frozenset] = frozenset({JSONCheckTokenType.RIGHT_BRACE, JSONCheckTokenType.RIGHT_BRACKET})

    def __init__(
        self,
        text: str,
        source_name: Optional[str] = None,
        config: Optional[JSONCheckConfig] = None
    ) -> None:
        """
        Initialize the validator.

        Args:
            text: The complete, already decoded document
            source_name: Optional name of the document, attached to every error
            config: Validation options; defaults are used if not given
        """
        self._config = config if config is not None else JSONCheckConfig()
        self._source_name = source_name
        self._scanner = JSONCheckScanner(text)
        self._errors: List[JSONCheckValidationError] = []
        self._depth = 0
        self._halted = False
        self._used = False
        self._logger = logging.getLogger("JSONCheckValidator")

        # Read two tokens so the current and lookahead tokens are both set
        self._current_token = self._scanner.next_token()
        self._peek_token = self._scanner.next_token()

    @property
    def errors(self) -> List[JSONCheckValidationError]:
        """Get the violations recorded so far."""
        return list(self._errors)

    @property
    def source_name(self) -> Optional[str]:
        return self._source_name

    def validate(self) -> Tuple[bool, List[JSONCheckValidationError]]:
        """
        Validate the document.

        Returns:
            Tuple of (accepted, errors).  A valid document gives (True, []); an
            invalid one gives False and at least one error, in detection order.

        Raises:
            JSONCheckUsageError: If this validator has already been used
        """
        if self._used:
            raise JSONCheckUsageError(
                "A validator can only validate one document",
                source_name=self._source_name,
                context="Create a new JSONCheckValidator for each validation"
            )

        self._used = True

        if self._config.require_object_root:
            ok = self._parse_object()

        else:
            ok = self._parse_value()

        if ok and self._config.reject_trailing_tokens and self._current_token.kind is not JSONCheckTokenType.EOF:
            self._fail(JSONCheckErrorKind.EXPECTED_END_OF_INPUT)

        accepted = not self._errors
        self._logger.debug(
            "Validated %s: %s, %d error(s)",
            self._source_name or "<document>", "accepted" if accepted else "rejected", len(self._errors)
        )
        return accepted, list(self._errors)

    def _next_token(self) -> None:
        self._current_token = self._peek_token
        self._peek_token = self._scanner.next_token()

    def _fail(self, kind: JSONCheckErrorKind) -> bool:
        """
        Record a violation at the current token.

        Returns:
            Always False, so callers can return the result directly
        """
        token = self._current_token
        self._errors.append(JSONCheckValidationError(kind=kind, token=token, source_name=self._source_name))
        self._logger.debug(
            "%s at line %d column %d (token %s %r)",
            kind.value, token.line, token.column, token.kind.name, token.literal
        )
        return False

    def _halt(self) -> bool:
        self._halted = True
        return False

    def _recover(self, closing: JSONCheckTokenType) -> bool:
        """
        Decide whether the walk continues after a violation inside an object or array.

        Under the fail-fast policy it never does.  Under the collect policy the
        tokens of the broken member are skipped up to the next comma or the
        enclosing `closing` delimiter at the same nesting level.

        Args:
            closing: The token type that closes the enclosing object or array

        Returns:
            True if the enclosing object or array should carry on with its next member
        """
        if self._halted:
            return False

        if self._config.error_policy is JSONCheckErrorPolicy.FAIL_FAST:
            return self._halt()

        if len(self._errors) >= self._config.max_errors:
            self._logger.debug("Stopping after %d error(s)", len(self._errors))
            return self._halt()

        self._synchronize(closing)
        if self._current_token.kind is JSONCheckTokenType.EOF:
            return self._halt()

        return True

    def _synchronize(self, closing: JSONCheckTokenType) -> None:
        nesting = 0
        while True:
            kind = self._current_token.kind
            if kind is JSONCheckTokenType.EOF:
                return

            if nesting == 0 and (kind is JSONCheckTokenType.COMMA or kind is closing):
                return

            if kind in self._OPENERS:
                nesting += 1

            elif kind in self._CLOSERS and nesting > 0:
                nesting -= 1

            self._next_token()

    def _enter_container(self) -> bool:
        """Track one more level of nesting, failing if the limit is reached."""
        if self._depth >= self._config.max_depth:
            self._fail(JSONCheckErrorKind.MAXIMUM_DEPTH_EXCEEDED)
            return self._halt()

        self._depth += 1
        return True

    def _leave_container(self, result: bool) -> bool:
        self._depth -= 1
        return result

    def _accept_separator(self) -> bool:
        """Consume the comma between two members.  It may be left out unless commas are strict."""
        if self._current_token.kind is JSONCheckTokenType.COMMA:
            self._next_token()
            return True

        if self._config.strict_commas:
            return self._fail(JSONCheckErrorKind.EXPECTED_COMMA)

        return True

    def _check_literal(self) -> bool:
        """Apply the strict string and number grammars to the current token."""
        token = self._current_token
        if (token.kind is JSONCheckTokenType.STRING_LITERAL and self._config.strict_strings and
                not _STRICT_STRING.fullmatch(token.literal)):
            return self._fail(JSONCheckErrorKind.INVALID_STRING_LITERAL)

        if (token.kind is JSONCheckTokenType.NUMBER_LITERAL and self._config.strict_numbers and
                not _STRICT_NUMBER.fullmatch(token.literal)):
            return self._fail(JSONCheckErrorKind.INVALID_NUMBER_LITERAL)

        return True

    def _parse_object(self) -> bool:
        if self._current_token.kind is not JSONCheckTokenType.LEFT_BRACE:
            return self._fail(JSONCheckErrorKind.EXPECTED_LEFT_BRACE)

        if not self._enter_container():
            return False

        self._next_token()

        first = True
        while True:
            kind = self._current_token.kind
            if kind is JSONCheckTokenType.RIGHT_BRACE or kind is JSONCheckTokenType.EOF:
                break

            if not first and not self._accept_separator():
                if not self._recover(JSONCheckTokenType.RIGHT_BRACE):
                    return self._leave_container(False)

                continue

            first = False
            if not self._parse_member_key() or not self._parse_value():
                if not self._recover(JSONCheckTokenType.RIGHT_BRACE):
                    return self._leave_container(False)

        if self._current_token.kind is not JSONCheckTokenType.RIGHT_BRACE:
            return self._leave_container(self._fail(JSONCheckErrorKind.EXPECTED_RIGHT_BRACE))

        self._next_token()
        return self._leave_container(True)

    def _parse_member_key(self) -> bool:
        """Parse a member's key and the colon after it."""
        if self._current_token.kind is not JSONCheckTokenType.STRING_LITERAL:
            return self._fail(JSONCheckErrorKind.EXPECTED_STRING_LITERAL)

        if not self._check_literal():
            return False

        self._next_token()
        if self._current_token.kind is not JSONCheckTokenType.COLON:
            return self._fail(JSONCheckErrorKind.EXPECTED_COLON)

        self._next_token()
        return True

    def _parse_array(self) -> bool:
        if self._current_token.kind is not JSONCheckTokenType.LEFT_BRACKET:
            return self._fail(JSONCheckErrorKind.EXPECTED_LEFT_BRACKET)

        if not self._enter_container():
            return False

        self._next_token()

        first = True
        while True:
            kind = self._current_token.kind
            if kind is JSONCheckTokenType.RIGHT_BRACKET or kind is JSONCheckTokenType.EOF:
                break

            if not first and not self._accept_separator():
                if not self._recover(JSONCheckTokenType.RIGHT_BRACKET):
                    return self._leave_container(False)

                continue

            first = False
            if not self._parse_value():
                if not self._recover(JSONCheckTokenType.RIGHT_BRACKET):
                    return self._leave_container(False)

        if self._current_token.kind is not JSONCheckTokenType.RIGHT_BRACKET:
            return self._leave_container(self._fail(JSONCheckErrorKind.EXPECTED_RIGHT_BRACKET))

        self._next_token()
        return self._leave_container(True)

    def _parse_value(self) -> bool:
        kind = self._current_token.kind
        if kind in self._SCALARS:
            if not self._check_literal():
                return False

            self._next_token()
            return True

        if kind is JSONCheckTokenType.LEFT_BRACKET:
            return self._parse_array()

        if kind is JSONCheckTokenType.LEFT_BRACE:
            return self._parse_object()

        return self._fail(JSONCheckErrorKind.EXPECTED_VALUE)


def validate(
    text: str,
    source_name: Optional[str] = None,
    config: Optional[JSONCheckConfig] = None
) -> Tuple[bool, List[JSONCheckValidationError]]:
    """
    Validate a JSON document held in memory.

    Args:
        text: The document
        source_name: Optional name attached to every error
        config: Validation options

    Returns:
        Tuple of (accepted, errors)
    """
    return JSONCheckValidator(text, source_name=source_name, config=config).validate()


def validate_file(path: str, config: Optional[JSONCheckConfig] = None) -> JSONCheckResult:
    """
    Read and validate a UTF-8 JSON file.  A leading byte order mark is ignored.

    Args:
        path: Path of the file
        config: Validation options

    Returns:
        The validation result, named after the path

    Raises:
        JSONCheckSourceError: If the file cannot be read or is not valid UTF-8
    """
    source_name = str(path)
    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            text = f.read()

    except (OSError, UnicodeDecodeError) as e:
        raise JSONCheckSourceError("Cannot read input", source_name=source_name, context=str(e)) from e

    accepted, errors = validate(text, source_name=source_name, config=config)
    return JSONCheckResult(source_name=source_name, accepted=accepted, errors=errors)
