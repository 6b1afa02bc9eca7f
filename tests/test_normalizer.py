import pytest

from recipe_importer.app.services.segmentation.normalizer import (
    clean_text,
    is_page_marker,
    normalize_whitespace,
    page_marker,
    split_lines,
    strip_page_markers,
)


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "Title\r\n\r\n\r\n\r\n1 cup flour   \r\n",
        "a\rb\r\rc",
        "  leading\t\n\n\n\n\ntrailing  \t",
        "no\0nulls\n\n\n",
        "one line",
    ],
)
def test_normalize_whitespace_is_idempotent(raw):
    once = normalize_whitespace(raw)
    assert normalize_whitespace(once) == once


def test_normalize_whitespace_canonicalizes_lines():
    raw = "Title  \r\n\r\n\r\n\r\nINGREDIENTS\t\r1 cup flour"
    assert normalize_whitespace(raw) == "Title\n\nINGREDIENTS\n1 cup flour"


def test_normalize_whitespace_strips_unicode_trailing_blanks():
    raw = "Title\u00a0\nServes 4\x0c\n1 cup flour\u00a0\u2009"
    assert normalize_whitespace(raw) == "Title\nServes 4\n1 cup flour"


def test_normalize_whitespace_empty():
    assert normalize_whitespace("") == ""
    assert normalize_whitespace(None) == ""


def test_clean_text_collapses_whitespace():
    assert clean_text("  1 \n cup\tflour ") == "1 cup flour"


def test_page_markers_are_recognized_and_stripped():
    marker = page_marker(3, "START")
    assert marker == "=== PAGE 3 START ==="
    assert is_page_marker(marker)
    assert not is_page_marker("PAGE 3")

    text = f"{page_marker(1, 'START')}\nPancakes\n{page_marker(1, 'END')}"
    assert strip_page_markers(text) == "Pancakes"


def test_split_lines_trims_and_skips_blank_and_markers():
    text = "  Pancakes \n\n=== PAGE 1 END ===\n 2 eggs\n"
    assert split_lines(text) == ["Pancakes", "2 eggs"]
