"""Tests for pretty-print, minify and canonicalize."""

from __future__ import annotations

import math

import pytest

from core.json_parser import parse
from core.json_serialize import (
    canonicalize,
    format_number,
    minify,
    pretty_print,
    quote_string,
    walk,
)

SAMPLES = [
    None,
    True,
    0.0,
    -3.25,
    "text with \"quotes\", \\ and \n newline",
    [],
    {},
    [1, [2, [3, []]], {"k": None}],
    {"name": "x", "list": [1, 2], "nested": {"b": False, "a": "é😀"}},
    {"z": 1e21, "y": 1.5e-7, "x": 0.1, "w": -0.0},
]


class TestPrettyPrint:

    def test_indent_four_exact_output(self) -> None:
        value = parse('{"name":"x","list":[1,2]}')
        expected = (
            "{\n"
            '    "name": "x",\n'
            '    "list": [\n'
            "        1,\n"
            "        2\n"
            "    ]\n"
            "}"
        )
        out = pretty_print(value, 4)
        assert out == expected
        assert all(line == line.rstrip() for line in out.split("\n"))

    def test_empty_containers_stay_on_one_line(self) -> None:
        assert pretty_print({"a": [], "b": {}}, 2) == '{\n  "a": [],\n  "b": {}\n}'

    def test_top_level_scalars(self) -> None:
        assert pretty_print("x") == '"x"'
        assert pretty_print(None) == "null"
        assert pretty_print(2.0) == "2"

    def test_preserves_key_order(self) -> None:
        out = pretty_print({"b": 1, "a": 2}, 2)
        assert out.index('"b"') < out.index('"a"')

    def test_large_indent_has_no_upper_bound(self) -> None:
        assert pretty_print([1], 12) == "[\n" + " " * 12 + "1\n]"

    @pytest.mark.parametrize("indent", [0, -2, True, 2.0, "2"])
    def test_rejects_invalid_indent(self, indent: object) -> None:
        with pytest.raises(ValueError):
            pretty_print([1], indent)  # type: ignore[arg-type]

    @pytest.mark.parametrize("indent", [2, 4, 8])
    def test_round_trip(self, indent: int) -> None:
        for value in SAMPLES:
            assert parse(pretty_print(value, indent)) == value


class TestMinify:

    def test_removes_all_inter_token_whitespace(self) -> None:
        value = parse('{ "a" : [ 1 , true , null ] ,\n "b" : "x y" }')
        assert minify(value) == '{"a":[1,true,null],"b":"x y"}'

    def test_round_trip_and_idempotence(self) -> None:
        for value in SAMPLES:
            once = minify(value)
            assert parse(once) == value
            assert minify(parse(once)) == once


class TestCanonicalize:

    def test_sorts_top_level_keys(self) -> None:
        assert list(canonicalize({"b": 1, "a": 2})) == ["a", "b"]

    def test_sorts_nested_keys(self) -> None:
        result = canonicalize(parse('{"z":{"b":1,"a":2}}'))
        assert minify(result) == '{"z":{"a":2,"b":1}}'

    def test_array_order_is_untouched(self) -> None:
        value = [3, 1, {"b": 0, "a": 0}, 2]
        result = canonicalize(value)
        assert result[:2] == [3, 1] and result[3] == 2
        assert list(result[2]) == ["a", "b"]

    def test_sorts_by_code_point(self) -> None:
        result = canonicalize({"b": 1, "B": 2, "a": 3, "é": 4, "_": 5})
        assert list(result) == ["B", "_", "a", "b", "é"]

    def test_is_idempotent(self) -> None:
        for value in SAMPLES:
            once = canonicalize(value)
            assert canonicalize(once) == once
            assert minify(canonicalize(once)) == minify(once)

    def test_returns_new_value(self) -> None:
        value = {"b": {"d": 1, "c": 2}, "a": 1}
        canonicalize(value)
        assert list(value) == ["b", "a"]
        assert list(value["b"]) == ["d", "c"]

    def test_scalars_pass_through(self) -> None:
        for scalar in (None, True, 1.5, "s"):
            assert canonicalize(scalar) == scalar


class TestWalk:

    def test_visitor_sees_depth(self) -> None:
        class DepthVisitor:
            def visit_object(self, items, depth):
                return max([depth] + [d for _, d in items])

            def visit_array(self, children, depth):
                return max([depth] + children)

            def visit_scalar(self, value, depth):
                return depth

        assert walk({"a": [[1]], "b": 2}, DepthVisitor()) == 3


class TestFormatNumber:

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1.0, "1"),
            (-0.0, "0"),
            (0.1, "0.1"),
            (0.5, "0.5"),
            (100.0, "100"),
            (123.456, "123.456"),
            (-42.0, "-42"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (1.2345678901234567e19, "12345678901234567000"),
            (1e-6, "0.000001"),
            (1e-7, "1e-7"),
            (1.5e-7, "1.5e-7"),
            (-2.5e-10, "-2.5e-10"),
            (5e-324, "5e-324"),
            (1.7976931348623157e308, "1.7976931348623157e+308"),
        ],
    )
    def test_ecmascript_layout(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    def test_shortest_round_trip(self) -> None:
        for value in (0.1 + 0.2, 1 / 3, 2.0 ** 60, 6.02214076e23, 9007199254740993.0):
            assert float(format_number(value)) == value

    def test_rejects_non_finite(self) -> None:
        for value in (math.inf, -math.inf, math.nan):
            with pytest.raises(ValueError):
                format_number(value)

    def test_rejects_booleans(self) -> None:
        with pytest.raises(TypeError):
            format_number(True)


class TestQuoteString:

    def test_escapes_quotes_backslashes_and_controls(self) -> None:
        assert quote_string('a"b\\c\n\t\x01') == '"a\\"b\\\\c\\n\\t\\u0001"'

    def test_keeps_slash_and_non_ascii(self) -> None:
        assert quote_string("a/é😀") == '"a/é😀"'

    def test_escapes_lone_surrogate(self) -> None:
        assert quote_string("\ud800") == '"\\ud800"'

    def test_round_trips_through_parser(self) -> None:
        s = "\b\f\r\x1f \"\\ \u2028 é"
        assert parse(quote_string(s)) == s

    def test_escapes_line_and_paragraph_separators(self) -> None:
        assert quote_string("x\u2028y\u2029z") == '"x\\u2028y\\u2029z"'

    def test_output_survives_editor_line_splitting(self) -> None:
        # Editors treat U+2028/U+2029 as line breaks; serialized text must not
        # contain them raw, while NBSP stays literal and unchanged.
        value = {"a": "x\u2028y", "b": "p\u00a0q", "c": ["\u2029"]}
        for text in (pretty_print(value, 2), minify(value),
                     pretty_print(canonicalize(value), 4)):
            assert "\u2028" not in text and "\u2029" not in text
            assert "p\u00a0q" in text
            assert parse(text) == value
