"""Shared fixtures and utilities for jsoncheck tests."""

import pytest
from typing import List, Tuple

from jsoncheck import JSONCheckConfig, JSONCheckErrorPolicy, JSONCheckToken, tokenize


@pytest.fixture
def default_config():
    """Create a configuration with default options."""
    return JSONCheckConfig()


@pytest.fixture
def collect_config():
    """Create a configuration that keeps going after errors."""
    return JSONCheckConfig(error_policy=JSONCheckErrorPolicy.COLLECT)


@pytest.fixture
def strict_config():
    """Create a configuration with every strict option enabled."""
    return JSONCheckConfig.strict()


@pytest.fixture
def json_file(tmp_path):
    """Factory writing a JSON document to a temporary file and returning its path."""
    def _write(text: str, name: str = "document.json") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


class JSONCheckTestHelpers:
    """Helper utilities for jsoncheck testing."""

    @staticmethod
    def token_tuples(text: str) -> List[Tuple[str, str, int, int]]:
        """Tokenize text into (kind name, literal, line, column) tuples."""
        return [(t.kind.name, t.literal, t.line, t.column) for t in tokenize(text)]

    @staticmethod
    def build_nested_arrays(depth: int) -> str:
        """Build an object holding `depth - 1` levels of nested arrays."""
        return '{"a":' + "[" * (depth - 1) + "]" * (depth - 1) + "}"

    @staticmethod
    def assert_position(token: JSONCheckToken, line: int, column: int) -> None:
        assert (token.line, token.column) == (line, column), \
            f"Expected token at ({line},{column}), got ({token.line},{token.column})"


@pytest.fixture
def helpers():
    """Provide access to test helper utilities."""
    return JSONCheckTestHelpers
