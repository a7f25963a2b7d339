"""jsoncheck: structural validation of JSON documents with precise error positions."""

# Main API
from jsoncheck.jsoncheck_validator import JSONCheckValidator, JSONCheckResult, validate, validate_file

# Configuration
from jsoncheck.jsoncheck_config import JSONCheckConfig, JSONCheckErrorPolicy

# Errors and exceptions
from jsoncheck.jsoncheck_error import (
    JSONCheckErrorKind, JSONCheckValidationError,
    JSONCheckError, JSONCheckSourceError, JSONCheckConfigError, JSONCheckUsageError
)

# Lower-level components
from jsoncheck.jsoncheck_token import JSONCheckToken, JSONCheckTokenType
from jsoncheck.jsoncheck_scanner import JSONCheckScanner, tokenize
from jsoncheck.jsoncheck_reporter import JSONCheckReporter


__version__ = "0.1.0"

__all__ = [
    # Main API
    "JSONCheckValidator", "JSONCheckResult", "validate", "validate_file",

    # Configuration
    "JSONCheckConfig", "JSONCheckErrorPolicy",

    # Errors and exceptions
    "JSONCheckErrorKind", "JSONCheckValidationError",
    "JSONCheckError", "JSONCheckSourceError", "JSONCheckConfigError", "JSONCheckUsageError",

    # Lower-level components
    "JSONCheckToken", "JSONCheckTokenType", "JSONCheckScanner", "tokenize", "JSONCheckReporter"
]
