import pytest

from ring_scout.utils import (
    DEFAULT_PREVIEW_QUERIES,
    clean_text,
    has_banned_suffix,
    read_list,
    read_preview_queries,
)


def test_read_list_trims_and_skips_blank_lines(tmp_path):
    path = tmp_path / "list.txt"
    path.write_text("  one \n\ntwo\n   \nthree\none\n", encoding="utf-8")
    assert read_list(path) == ["one", "two", "three", "one"]


@pytest.mark.parametrize("path", [None, "", "does/not/exist.txt"])
def test_read_list_missing_gives_empty(path):
    assert read_list(path) == []


def test_read_list_directory_gives_empty(tmp_path):
    assert read_list(tmp_path) == []


def test_read_list_undecodable_gives_empty(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\xfa\x00bad")
    assert read_list(path) == []


def test_preview_queries_fallback(tmp_path):
    empty = tmp_path / "empty.txt"
    empty.write_text("\n\n", encoding="utf-8")
    assert read_preview_queries(empty) == list(DEFAULT_PREVIEW_QUERIES)
    assert read_preview_queries(None) == ["main p", "article p", "section p", "p"]


def test_preview_queries_from_file(tmp_path):
    path = tmp_path / "queries.txt"
    path.write_text("div.intro p\n", encoding="utf-8")
    assert read_preview_queries(path) == ["div.intro p"]


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("  hello  ", "hello"),
        ("line one\nline two", "line one line two"),
        ("a   b", "a b"),
        ("a    b", "a b"),
        ("", ""),
    ],
)
def test_clean_text(raw, expected):
    assert clean_text(raw) == expected


def test_has_banned_suffix_is_case_insensitive():
    assert has_banned_suffix([".pdf"], "https://ring.example/FILE.PDF")
    assert not has_banned_suffix([".pdf"], "https://ring.example/file.pdf.html")
    assert not has_banned_suffix([], "https://ring.example/file.pdf")
