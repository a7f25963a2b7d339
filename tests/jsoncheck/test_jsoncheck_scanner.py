"""
Tests for JSON tokenization and position tracking.
"""
import dataclasses

import pytest

from jsoncheck import JSONCheckScanner, JSONCheckToken, JSONCheckTokenType, tokenize


class TestJSONCheckScannerBasics:
    """Test single tokens and the end of input."""

    def test_empty_input(self, helpers):
        """Test that empty input yields a single EOF token at line 1, column 0."""
        assert helpers.token_tuples("") == [("EOF", "EOF", 1, 0)]

    def test_empty_object_with_whitespace(self, helpers):
        """Test that tabs and spaces each advance the column by one."""
        assert helpers.token_tuples("\t{  } ") == [
            ("LEFT_BRACE", "{", 1, 1),
            ("RIGHT_BRACE", "}", 1, 4),
            ("EOF", "EOF", 1, 6),
        ]

    def test_punctuation(self, helpers):
        """Test every single-character token."""
        assert helpers.token_tuples("{}[]:,") == [
            ("LEFT_BRACE", "{", 1, 0),
            ("RIGHT_BRACE", "}", 1, 1),
            ("LEFT_BRACKET", "[", 1, 2),
            ("RIGHT_BRACKET", "]", 1, 3),
            ("COLON", ":", 1, 4),
            ("COMMA", ",", 1, 5),
            ("EOF", "EOF", 1, 6),
        ]

    def test_string_and_number_columns(self, helpers):
        """Test that strings and numbers advance the column by their full width."""
        assert helpers.token_tuples('{"n5":-12.345e12}') == [
            ("LEFT_BRACE", "{", 1, 0),
            ("STRING_LITERAL", "n5", 1, 1),
            ("COLON", ":", 1, 5),
            ("NUMBER_LITERAL", "-12.345e12", 1, 6),
            ("RIGHT_BRACE", "}", 1, 16),
            ("EOF", "EOF", 1, 17),
        ]

    def test_keywords(self, helpers):
        """Test that true, false and null map to their own token types."""
        assert helpers.token_tuples('{"t":true,"f":false,"n":null}') == [
            ("LEFT_BRACE", "{", 1, 0),
            ("STRING_LITERAL", "t", 1, 1),
            ("COLON", ":", 1, 4),
            ("TRUE", "true", 1, 5),
            ("COMMA", ",", 1, 9),
            ("STRING_LITERAL", "f", 1, 10),
            ("COLON", ":", 1, 13),
            ("FALSE", "false", 1, 14),
            ("COMMA", ",", 1, 19),
            ("STRING_LITERAL", "n", 1, 20),
            ("COLON", ":", 1, 23),
            ("NULL", "null", 1, 24),
            ("RIGHT_BRACE", "}", 1, 28),
            ("EOF", "EOF", 1, 29),
        ]

    def test_unknown_identifiers_are_illegal(self):
        """Test that identifiers outside the keyword table become ILLEGAL tokens."""
        for text in ['nul', 'True', 'NULL', 'undefined', 'true_value', '_x1']:
            tokens = tokenize(text)
            assert tokens[0].kind == JSONCheckTokenType.ILLEGAL, f"'{text}' should be ILLEGAL"
            assert tokens[0].literal == text
            assert tokens[1].kind == JSONCheckTokenType.EOF
            assert tokens[1].column == len(text)

    def test_illegal_characters(self, helpers):
        """Test that unknown characters become single-character ILLEGAL tokens."""
        assert helpers.token_tuples("@'.") == [
            ("ILLEGAL", "@", 1, 0),
            ("ILLEGAL", "'", 1, 1),
            ("ILLEGAL", ".", 1, 2),
            ("EOF", "EOF", 1, 3),
        ]


class TestJSONCheckScannerStrings:
    """Test string literal scanning."""

    def test_literal_excludes_quotes(self):
        """Test that a string token holds only the text between the quotes."""
        tokens = tokenize('"hello world"')
        assert tokens[0].kind == JSONCheckTokenType.STRING_LITERAL
        assert tokens[0].literal == "hello world"
        assert tokens[1].column == 13

    def test_empty_string(self):
        """Test the empty string literal."""
        tokens = tokenize('""')
        assert tokens[0].literal == ""
        assert tokens[1].column == 2

    def test_escaped_quote_does_not_end_string(self, helpers):
        """Test that an escaped quote stays inside the literal."""
        assert helpers.token_tuples('"a\\"b"') == [
            ("STRING_LITERAL", 'a\\"b', 1, 0),
            ("EOF", "EOF", 1, 6),
        ]

    def test_standard_escapes(self):
        """Test that every standard escape is kept verbatim in the literal."""
        for escape in ['\\"', '\\\\', '\\/', '\\b', '\\f', '\\n', '\\r', '\\t']:
            tokens = tokenize(f'"x{escape}y"')
            assert len(tokens) == 2, f"Escape {escape} should not split the string"
            assert tokens[0].literal == f"x{escape}y"

    def test_escaped_backslash_before_closing_quote(self):
        """Test that an escaped backslash does not escape the closing quote."""
        tokens = tokenize('"a\\\\" ,')
        assert tokens[0].literal == "a\\\\"
        assert tokens[1].kind == JSONCheckTokenType.COMMA

    def test_unicode_escape(self):
        """Test that \\u escapes are kept as written."""
        tokens = tokenize('"\\u00e9x"')
        assert tokens[0].literal == "\\u00e9x"
        assert tokens[1].kind == JSONCheckTokenType.EOF

    def test_malformed_unicode_escape_is_accepted(self):
        """Test that \\u digits are not checked by the scanner."""
        tokens = tokenize('"\\uZZZZ"')
        assert tokens[0].kind == JSONCheckTokenType.STRING_LITERAL
        assert tokens[0].literal == "\\uZZZZ"

    def test_short_unicode_escape_stops_at_quote(self):
        """Test that a short \\u escape does not swallow the closing quote."""
        tokens = tokenize('"\\u12":')
        assert tokens[0].literal == "\\u12"
        assert tokens[1].kind == JSONCheckTokenType.COLON

    def test_unknown_escape_is_accepted(self):
        """Test that an unknown escape such as \\q is part of the literal, not an error."""
        tokens = tokenize('"\\q"')
        assert [t.kind for t in tokens] == [JSONCheckTokenType.STRING_LITERAL, JSONCheckTokenType.EOF]
        assert tokens[0].literal == "\\q"

    def test_unterminated_string(self):
        """Test that an unterminated string runs to the end of input."""
        tokens = tokenize('"abc')
        assert tokens[0].kind == JSONCheckTokenType.STRING_LITERAL
        assert tokens[0].literal == "abc"
        assert tokens[1].kind == JSONCheckTokenType.EOF
        assert tokens[1].column == 4

    def test_trailing_backslash_in_unterminated_string(self):
        """Test a string that ends with a lone backslash."""
        tokens = tokenize('"abc\\')
        assert tokens[0].literal == "abc\\"
        assert tokens[1].kind == JSONCheckTokenType.EOF
        assert tokens[1].column == 5

    def test_raw_line_break_in_string(self, helpers):
        """Test that a line break inside a string moves later tokens to the next line."""
        assert helpers.token_tuples('{"a":"x\ny", "b"}') == [
            ("LEFT_BRACE", "{", 1, 0),
            ("STRING_LITERAL", "a", 1, 1),
            ("COLON", ":", 1, 4),
            ("STRING_LITERAL", "x\ny", 1, 5),
            ("COMMA", ",", 2, 2),
            ("STRING_LITERAL", "b", 2, 4),
            ("RIGHT_BRACE", "}", 2, 7),
            ("EOF", "EOF", 2, 8),
        ]

    def test_crlf_in_string_is_one_line_break(self, helpers):
        """Test that CR LF inside a string counts as a single line break."""
        assert helpers.token_tuples('"a\r\nb" 1') == [
            ("STRING_LITERAL", "a\r\nb", 1, 0),
            ("NUMBER_LITERAL", "1", 2, 3),
            ("EOF", "EOF", 2, 4),
        ]

    def test_several_line_breaks_in_string(self, helpers):
        """Test that LF followed by a lone CR inside a string counts as two line breaks."""
        tokens = tokenize('"a\n\rbc" :')
        helpers.assert_position(tokens[1], 3, 4)

    def test_multibyte_characters_count_as_one_column(self, helpers):
        """Test that each code point counts as one column."""
        assert helpers.token_tuples('{"é€":1}') == [
            ("LEFT_BRACE", "{", 1, 0),
            ("STRING_LITERAL", "é€", 1, 1),
            ("COLON", ":", 1, 5),
            ("NUMBER_LITERAL", "1", 1, 6),
            ("RIGHT_BRACE", "}", 1, 7),
            ("EOF", "EOF", 1, 8),
        ]


class TestJSONCheckScannerNumbers:
    """Test number literal scanning."""

    def test_number_forms(self):
        """Test integers, fractions and exponents."""
        test_cases = ['0', '42', '-12', '-12.345', '1e5', '1E5', '-12.345E-12', '-12.345E+12', '0.5e10']
        for num in test_cases:
            tokens = tokenize(num)
            assert len(tokens) == 2, f"Number '{num}' should produce one token"
            assert tokens[0].kind == JSONCheckTokenType.NUMBER_LITERAL
            assert tokens[0].literal == num
            assert tokens[1].column == len(num)

    def test_permissive_numbers(self):
        """Test that malformed numbers are still scanned as numbers."""
        for num in ['-', '01', '1.', '1e', '1e+', '-.5']:
            tokens = tokenize(num)
            assert tokens[0].kind == JSONCheckTokenType.NUMBER_LITERAL, f"'{num}' should be a number"
            assert tokens[0].literal == num

    def test_number_followed_by_letters(self, helpers):
        """Test that letters after a number start a new token."""
        assert helpers.token_tuples("12ab") == [
            ("NUMBER_LITERAL", "12", 1, 0),
            ("ILLEGAL", "ab", 1, 2),
            ("EOF", "EOF", 1, 4),
        ]

    def test_plus_sign_is_illegal(self):
        """Test that a leading plus sign is not part of a number."""
        tokens = tokenize("+1")
        assert tokens[0].kind == JSONCheckTokenType.ILLEGAL
        assert tokens[0].literal == "+"
        assert tokens[1].kind == JSONCheckTokenType.NUMBER_LITERAL


class TestJSONCheckScannerLines:
    """Test line and column bookkeeping across line breaks."""

    def test_multiline_document(self, helpers):
        """Test positions in a document spread over several lines."""
        text = '{\n"n1":0,\n"n2":1234567890,\n"n3":-12.345E+12,\n}'
        assert helpers.token_tuples(text) == [
            ("LEFT_BRACE", "{", 1, 0),
            ("STRING_LITERAL", "n1", 2, 0),
            ("COLON", ":", 2, 4),
            ("NUMBER_LITERAL", "0", 2, 5),
            ("COMMA", ",", 2, 6),
            ("STRING_LITERAL", "n2", 3, 0),
            ("COLON", ":", 3, 4),
            ("NUMBER_LITERAL", "1234567890", 3, 5),
            ("COMMA", ",", 3, 15),
            ("STRING_LITERAL", "n3", 4, 0),
            ("COLON", ":", 4, 4),
            ("NUMBER_LITERAL", "-12.345E+12", 4, 5),
            ("COMMA", ",", 4, 16),
            ("RIGHT_BRACE", "}", 5, 0),
            ("EOF", "EOF", 5, 1),
        ]

    def test_array_positions(self, helpers):
        """Test positions of array elements."""
        assert helpers.token_tuples('{\n"a1":[0,1,2]\n}') == [
            ("LEFT_BRACE", "{", 1, 0),
            ("STRING_LITERAL", "a1", 2, 0),
            ("COLON", ":", 2, 4),
            ("LEFT_BRACKET", "[", 2, 5),
            ("NUMBER_LITERAL", "0", 2, 6),
            ("COMMA", ",", 2, 7),
            ("NUMBER_LITERAL", "1", 2, 8),
            ("COMMA", ",", 2, 9),
            ("NUMBER_LITERAL", "2", 2, 10),
            ("RIGHT_BRACKET", "]", 2, 11),
            ("RIGHT_BRACE", "}", 3, 0),
            ("EOF", "EOF", 3, 1),
        ]

    def test_crlf_is_one_line_break(self, helpers):
        """Test that CR LF counts as a single line break."""
        assert helpers.token_tuples("{\r\n}") == [
            ("LEFT_BRACE", "{", 1, 0),
            ("RIGHT_BRACE", "}", 2, 0),
            ("EOF", "EOF", 2, 1),
        ]

    def test_lone_carriage_returns(self, helpers):
        """Test that lone CR characters each count as a line break."""
        assert helpers.token_tuples("\r\r  1") == [
            ("NUMBER_LITERAL", "1", 3, 2),
            ("EOF", "EOF", 3, 3),
        ]

    def test_blank_lines(self):
        """Test that blank lines are counted."""
        tokens = tokenize("{\n\n\n}")
        assert (tokens[1].line, tokens[1].column) == (4, 0)


class TestJSONCheckScannerLifecycle:
    """Test scanner state and token immutability."""

    def test_eof_is_idempotent(self):
        """Test that reading past the end keeps returning the same EOF token."""
        scanner = JSONCheckScanner("{}")
        scanner.next_token()
        scanner.next_token()
        eofs = [scanner.next_token() for _ in range(5)]
        assert all(t.kind == JSONCheckTokenType.EOF for t in eofs)
        assert len(set(eofs)) == 1
        assert eofs[0].column == 2

    def test_iteration_stops_after_eof(self):
        """Test that iterating a scanner ends with exactly one EOF token."""
        tokens = list(JSONCheckScanner('{"a":[1,2]}'))
        assert tokens[-1].kind == JSONCheckTokenType.EOF
        assert [t.kind for t in tokens].count(JSONCheckTokenType.EOF) == 1

    def test_fresh_scanners_agree(self):
        """Test that two scanners over the same text give identical tokens."""
        text = '{"a": [1, 2.5e3, "x\\n"], "b": {"c": null}}\n'
        assert tokenize(text) == tokenize(text)

    def test_tokens_are_immutable(self):
        """Test that tokens cannot be modified."""
        token = tokenize("{")[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.line = 5  # type: ignore[misc]

    def test_tokens_compare_by_value(self):
        """Test that tokens with the same fields are equal."""
        assert tokenize("[")[0] == JSONCheckToken(JSONCheckTokenType.LEFT_BRACKET, "[", 1, 0)

    def test_keyword_table_is_read_only(self):
        """Test that the keyword table cannot be changed at runtime."""
        with pytest.raises(TypeError):
            JSONCheckScanner._KEYWORDS["yes"] = JSONCheckTokenType.TRUE  # type: ignore[index]
