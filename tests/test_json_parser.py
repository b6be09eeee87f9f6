"""Tests for the strict JSON parser."""

from __future__ import annotations

import pytest

from core.json_errors import (
    EmptyInputError,
    JsonParseError,
    JsonRangeError,
    JsonSyntaxError,
    locate_error,
)
from core.json_parser import MAX_DEPTH, offset_to_position, parse


def _error_for(text: str) -> JsonParseError:
    with pytest.raises(JsonParseError) as excinfo:
        parse(text)
    return excinfo.value


class TestParseValues:
    """Accepted grammar."""

    def test_parses_scalars(self) -> None:
        assert parse("null") is None
        assert parse("true") is True
        assert parse("false") is False
        assert parse('"hi"') == "hi"
        assert parse("0") == 0.0
        assert parse("-12.5e2") == -1250.0
        assert parse("1E+2") == 100.0

    def test_numbers_are_doubles(self) -> None:
        value = parse("[1, 2]")
        assert value == [1, 2]
        assert all(isinstance(x, float) for x in value)

    def test_large_integer_loses_precision_to_double(self) -> None:
        assert parse("12345678901234567890") == 1.2345678901234567e19

    def test_parses_nested_containers_preserving_order(self) -> None:
        value = parse('{"z": [1, {"b": null, "a": true}], "a": {}}')
        assert value == {"z": [1, {"b": None, "a": True}], "a": {}}
        assert list(value) == ["z", "a"]
        assert list(value["z"][1]) == ["b", "a"]

    def test_whitespace_between_tokens(self) -> None:
        assert parse(' \t\r\n[ 1 ,\n 2 ]\r\n ') == [1, 2]

    def test_duplicate_keys_last_occurrence_wins(self) -> None:
        value = parse('{"a": 1, "b": 2, "a": 3}')
        assert value == {"a": 3, "b": 2}
        assert list(value) == ["a", "b"]

    def test_string_escapes(self) -> None:
        assert parse(r'"\" \\ \/ \b \f \n \r \t"') == '" \\ / \b \f \n \r \t'

    def test_unicode_escapes_and_surrogate_pairs(self) -> None:
        assert parse(r'"\u00e9\ud83d\ude00"') == "\u00e9\U0001f600"
        assert parse(r'"\u004a\u004A"') == "JJ"

    def test_lone_surrogate_is_kept(self) -> None:
        assert parse(r'"\ud800x"') == "\ud800x"

    def test_non_ascii_text_passes_through(self) -> None:
        assert parse('{"名字": "值 😀"}') == {"名字": "值 😀"}


class TestParseErrors:
    """Strict rejection with structured positions."""

    def test_missing_value_is_located_at_offending_token(self) -> None:
        err = _error_for('{"a":}')
        assert isinstance(err, JsonSyntaxError)
        assert (err.line, err.column) == (0, 5)
        assert locate_error(err) == (0, 5)

    def test_empty_input_has_no_location(self) -> None:
        for text in ("", "   ", "\n\t\r\n"):
            err = _error_for(text)
            assert isinstance(err, EmptyInputError)
            assert err.line is None and err.column is None
            assert locate_error(err) is None

    @pytest.mark.parametrize("text", ["\x0b", "\x1c", " \u00a0 ", "\u3000", "\x0c"])
    def test_non_json_whitespace_is_a_located_syntax_error(self, text: str) -> None:
        err = _error_for(text)
        assert isinstance(err, JsonSyntaxError)
        assert err.position is not None

    def test_empty_input_message_differs_from_syntax_message(self) -> None:
        assert str(_error_for("")) != str(_error_for("x"))

    @pytest.mark.parametrize(
        ("text", "column"),
        [
            ('{"a":1,}', 7),       # trailing comma in object
            ("[1,2,]", 5),         # trailing comma in array
            ("{a:1}", 1),          # unquoted key
            ("'x'", 0),            # single-quoted string
            ("NaN", 0),
            ("Infinity", 0),
            ("-Infinity", 1),
            ("01", 1),             # leading zero
            ("1.", 2),
            ("1.e5", 2),
            ("1e", 2),
            ("1e+", 3),
            (".5", 0),
            ("+1", 0),
            ("// c\n{}", 0),
            ('{"a":1 /* c */}', 7),
            ("{} x", 3),
            ("[1 2]", 3),
            ('{"a" 1}', 5),
            ("tru", 3),
            ("nul", 3),
            ("trUe", 2),
            ('"abc', 0),           # unterminated string points at its opening quote
            ('"a\tb"', 2),         # raw control character
            (r'"\x"', 1),          # invalid escape
            (r'"\u12G4"', 5),      # bad hex digit
            (r'"\u12"', 5),
            ("[", 1),
            ('{"a":1', 6),
        ],
    )
    def test_rejects_non_strict_input(self, text: str, column: int) -> None:
        err = _error_for(text)
        assert isinstance(err, JsonSyntaxError)
        assert err.line == 0
        assert err.column == column

    def test_error_message_names_expected_construct(self) -> None:
        assert "':'" in _error_for('{"a" 1}').message
        assert "',' 或 ']'" in _error_for("[1 2]").message
        assert "对象键" in _error_for('{"a":1,}').message
        assert "双引号" in _error_for("'x'").message

    def test_multiline_position(self) -> None:
        err = _error_for('{\n  "a": 1,\n  "b": tru\n}')
        assert (err.line, err.column) == (2, 10)

    def test_escapes_advance_column_by_raw_length(self) -> None:
        err = _error_for(r'["\n\t", x]')
        assert (err.line, err.column) == (0, 9)

    def test_crlf_counts_as_one_line_break(self) -> None:
        err = _error_for('{\r\n"a":}')
        assert (err.line, err.column) == (1, 4)

    def test_str_includes_one_based_position(self) -> None:
        err = _error_for('{"a":}')
        assert str(err).startswith("第 1 行, 第 6 列")

    def test_errors_are_value_errors(self) -> None:
        assert isinstance(_error_for("[1,]"), ValueError)
        assert isinstance(_error_for(""), ValueError)

    def test_excessive_nesting_is_a_syntax_error(self) -> None:
        depth = MAX_DEPTH + 44
        err = _error_for("[" * depth + "]" * depth)
        assert isinstance(err, JsonSyntaxError)
        assert (err.line, err.column) == (0, MAX_DEPTH)

    def test_nesting_at_limit_is_accepted(self) -> None:
        value = parse("[" * MAX_DEPTH + "]" * MAX_DEPTH)
        for _ in range(MAX_DEPTH - 1):
            value = value[0]
        assert value == []

    def test_number_outside_double_range(self) -> None:
        err = _error_for("[0, 1e400]")
        assert isinstance(err, JsonRangeError)
        assert not isinstance(err, JsonSyntaxError)
        assert err.position == (0, 4)
        assert "范围" in err.message


class TestOffsetToPosition:

    def test_counts_every_separator_kind(self) -> None:
        text = "a\nb\r\nc\rd"
        assert offset_to_position(text, 0) == (0, 0)
        assert offset_to_position(text, 2) == (1, 0)
        assert offset_to_position(text, 5) == (2, 0)
        assert offset_to_position(text, 7) == (3, 0)
