import pytest
from indexblocks import parser_utils as pu
from indexblocks.exceptions import IndexFormatError


def test_strip_comments():
    text = "a # comment\nb"
    out = pu.strip_comments(text)
    assert out == "a\nb"


def test_parse_int():
    assert pu.parse_int(" -12 ", 1, "x") == -12
    assert pu.parse_int("+3", 1, "x") == 3


def test_parse_int_error():
    with pytest.raises(IndexFormatError) as ei:
        pu.parse_int("1.0", 7, "block count")
    assert ei.value.line_no == 7
    assert "block count" in str(ei.value)


def test_token_stream_lines():
    ts = pu.TokenStream("A 1  # note\n\n  [1:2]  # x\n")
    assert ts.peek() == "A"
    assert ts.next_token() == "A"
    assert ts.next_int() == 1
    assert ts.line_no == 1
    assert ts.next_token() == "[1:2]"
    assert ts.line_no == 3
    assert ts.at_end()
    assert ts.peek() is None


def test_token_stream_end():
    ts = pu.TokenStream("", source="blocks.txt")
    with pytest.raises(IndexFormatError) as ei:
        ts.next_token("keyword")
    assert "blocks.txt" in str(ei.value)


def test_token_stream_from_path(tmp_path):
    p = tmp_path / "b.txt"
    p.write_text("X 2\n", encoding="utf-8")
    ts = pu.TokenStream.from_path(p)
    assert ts.source == str(p)
    assert [ts.next_token(), ts.next_int()] == ["X", 2]


def test_token_stream_from_path_not_utf8(tmp_path):
    p = tmp_path / "b.bin"
    p.write_bytes(b"X \xff\n")
    with pytest.raises(IndexFormatError) as ei:
        pu.TokenStream.from_path(p)
    assert ei.value.source == str(p)
    assert str(ei.value).startswith(f"{p} [line 0]")


def test_error_without_source():
    e = IndexFormatError(3, "bad")
    assert str(e) == "[line 3] bad"
    assert e.source is None
