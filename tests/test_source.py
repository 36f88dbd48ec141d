# tests/test_source.py
"""
Tests for value parsing, line normalisation and the two value sources.
"""

import io

import pytest

from flagdec.errors import UnparsableValueError, UsageError
from flagdec.source import (
    LINE_MAX,
    StreamSource,
    TokenSource,
    normalize_line,
    open_source,
    parse_value,
)


class TestParseValue:

    @pytest.mark.parametrize("token, expected", [
        ("0", 0),
        ("42", 42),
        ("0x12", 0x12),
        ("0X1f", 0x1f),
        ("0x00a1c002", 0x00a1c002),
        ("010", 8),
        ("00", 0),
        ("+5", 5),
        ("+0x10", 0x10),
        ("4294967295", 0xffffffff),
        ("  7", 7),
    ])
    def test_valid(self, token, expected):
        assert parse_value(token) == expected

    def test_negative_wraps(self):
        assert parse_value("-1") == 0xffffffff
        assert parse_value("-0x10") == 0xfffffff0

    def test_wide_value_keeps_low_bits(self):
        assert parse_value("0x100000001") == 1

    @pytest.mark.parametrize("token", [
        "",
        "0xZZ",
        "0x",
        "08",
        "12abc",
        "1 ",
        "-",
        "+",
        "x12",
        "1.5",
        "conn",
    ])
    def test_invalid(self, token):
        with pytest.raises(UnparsableValueError) as info:
            parse_value(token)
        assert info.value.token == token
        assert info.value.code == "FLAG-0002"

    def test_message_names_token(self):
        with pytest.raises(UnparsableValueError, match=r"Unparsable value: <0xZZ>"):
            parse_value("0xZZ")


class TestNormalizeLine:

    @pytest.mark.parametrize("line, expected", [
        ("  = 0x12UL\n", "0x12"),
        ("0x12\n", "0x12"),
        (":\t42\n", "42"),
        ("0x1fu", "0x1f"),
        ("0x1fLL\n", "0x1f"),
        ("==-5L", "-5"),
        ("0x00a1c002 flags\n", "0x00a1c002"),
        ("0x3,\n", "0x3"),
        ("\n", ""),
        ("", ""),
    ])
    def test_normalize(self, line, expected):
        assert normalize_line(line) == expected

    def test_non_hex_letters_kept(self):
        # letters other than U/L are left for the parser to reject
        assert normalize_line("0xZZ\n") == "0xZZ"


class TestTokenSource:

    def test_values_in_order(self):
        assert list(TokenSource(["1", "0x2", "03"])) == [1, 2, 3]

    def test_trims_tokens(self):
        assert list(TokenSource([" 0x10 "])) == [0x10]

    def test_multi(self):
        assert not TokenSource(["1"]).multi
        assert TokenSource(["1", "2"]).multi

    def test_lazy_failure(self):
        seen = []
        with pytest.raises(UnparsableValueError) as info:
            for value in TokenSource(["0x1", "0xZZ", "0x3"]):
                seen.append(value)
        assert seen == [1]
        assert info.value.token == "0xZZ"


class TestStreamSource:

    def test_lines(self):
        stream = io.StringIO("0x1\n  = 0x12UL\n:7\n")
        assert list(StreamSource(stream)) == [1, 0x12, 7]

    def test_last_line_without_newline(self):
        assert list(StreamSource(io.StringIO("1\n2"))) == [1, 2]

    def test_empty_stream(self):
        assert list(StreamSource(io.StringIO(""))) == []

    def test_always_multi(self):
        assert StreamSource(io.StringIO("")).multi

    def test_blank_line_is_fatal(self):
        with pytest.raises(UnparsableValueError) as info:
            list(StreamSource(io.StringIO("1\n\n2\n")))
        assert info.value.token == ""

    def test_overlong_line_truncated(self):
        stream = io.StringIO("0x1234567890\n0x2\n")
        assert list(StreamSource(stream, line_max=8)) == [0x123456, 2]

    def test_default_bound_drops_tail(self):
        assert LINE_MAX == 256
        stream = io.StringIO("1" + " " * 300 + "junk\n2\n")
        assert list(StreamSource(stream)) == [1, 2]


class TestOpenSource:

    def test_no_tokens(self):
        with pytest.raises(UsageError) as info:
            open_source([], io.StringIO())
        assert info.value.code == "FLAG-0001"

    def test_dash_selects_stream(self):
        assert isinstance(open_source(["-"], io.StringIO()), StreamSource)

    def test_dash_must_be_alone(self):
        with pytest.raises(UsageError):
            open_source(["-", "1"], io.StringIO())

    def test_tokens(self):
        source = open_source(["1", "2"], io.StringIO())
        assert isinstance(source, TokenSource)
        assert source.multi

    def test_dash_after_value_is_a_value(self):
        source = open_source(["1", "-"], io.StringIO())
        with pytest.raises(UnparsableValueError):
            list(source)
