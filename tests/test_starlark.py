"""Tests for Starlark literal quoting and attribute type mapping."""

import typing
from collections.abc import Sequence

import pytest

from capgen.errors import UnsupportedTypeError
from capgen.starlark import AttributeType, bzl_quote, map_type

# ---------------------------------------------------------------------------
# bzl_quote()
# ---------------------------------------------------------------------------


class TestBzlQuote:
    def test_plain(self) -> None:
        assert bzl_quote("abc") == '"abc"'

    def test_empty(self) -> None:
        assert bzl_quote("") == '""'

    def test_single_quotes_stay_single_delimited(self) -> None:
        assert bzl_quote("it's") == "\"it's\""

    def test_embedded_quote_uses_triple(self) -> None:
        assert bzl_quote('a "b" c') == '"""a "b" c"""'

    def test_embedded_newline_uses_triple(self) -> None:
        assert bzl_quote("line1\nline2") == '"""line1\nline2"""'

    def test_no_escaping(self) -> None:
        # Backslashes and quotes pass through untouched
        assert bzl_quote('x\\"y') == '"""x\\"y"""'

    def test_non_string_is_stringified(self) -> None:
        assert bzl_quote(42) == '"42"'

    @pytest.mark.parametrize("text", ["plain", "with space", "-Xflag=value", "{a|b}"])
    def test_delimiter_length_one(self, text: str) -> None:
        quoted = bzl_quote(text)
        assert quoted.startswith('"') and not quoted.startswith('""')
        assert quoted[1:-1] == text

    @pytest.mark.parametrize("text", ['"', 'say "hi"', "a\nb", '\n"\n'])
    def test_delimiter_length_three(self, text: str) -> None:
        quoted = bzl_quote(text)
        assert quoted.startswith('"""') and quoted.endswith('"""')
        assert quoted[3:-3] == text


# ---------------------------------------------------------------------------
# AttributeType.convert()
# ---------------------------------------------------------------------------


class TestAttributeTypeConvert:
    def test_attr_names(self) -> None:
        assert AttributeType.BOOL.attr == "attr.bool"
        assert AttributeType.STR.attr == "attr.string"
        assert AttributeType.STR_LIST.attr == "attr.string_list"

    def test_bool_true(self) -> None:
        assert AttributeType.BOOL.convert("true") == "True"

    @pytest.mark.parametrize("raw", ["false", None, "True", "TRUE", "1", "yes", ""])
    def test_bool_everything_else_is_false(self, raw: str | None) -> None:
        assert AttributeType.BOOL.convert(raw) == "False"

    def test_str_absent(self) -> None:
        assert AttributeType.STR.convert(None) == "None"

    def test_str_value(self) -> None:
        assert AttributeType.STR.convert("v1") == '"v1"'

    def test_str_value_with_quote(self) -> None:
        assert AttributeType.STR.convert('a"b') == '"""a"b"""'

    def test_str_list_absent(self) -> None:
        assert AttributeType.STR_LIST.convert(None) == "[]"

    def test_str_list_wraps_single_value(self) -> None:
        assert AttributeType.STR_LIST.convert("a,b") == '["a,b"]'


# ---------------------------------------------------------------------------
# map_type()
# ---------------------------------------------------------------------------


class TestMapType:
    @pytest.mark.parametrize("tp", [bool, bool | None, typing.Optional[bool]])
    def test_bool(self, tp: object) -> None:
        assert map_type(tp) is AttributeType.BOOL

    @pytest.mark.parametrize("tp", [str, str | None, typing.Optional[str]])
    def test_str(self, tp: object) -> None:
        assert map_type(tp) is AttributeType.STR

    @pytest.mark.parametrize(
        "tp",
        [
            list[str],
            list[str] | None,
            tuple[str, ...],
            Sequence[str],
            typing.List[str],  # noqa: UP006
            typing.Optional[list[str]],
        ],
    )
    def test_string_array(self, tp: object) -> None:
        assert map_type(tp) is AttributeType.STR_LIST

    @pytest.mark.parametrize(
        "tp",
        [int, float, dict[str, str], list[int], tuple[str, str], list, bool | str, None],
    )
    def test_unsupported(self, tp: object) -> None:
        with pytest.raises(UnsupportedTypeError):
            map_type(tp)

    def test_error_names_type(self) -> None:
        with pytest.raises(UnsupportedTypeError, match="int") as exc_info:
            map_type(int)
        assert exc_info.value.type is int
        assert "not a starlark mappable type" in str(exc_info.value)
