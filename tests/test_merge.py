"""Tests for the merge rules."""

import pytest

from levelnotes.services.merge import (
    derive_title,
    first_write_preview,
    make_snippet,
    merge_tags,
    merge_text,
)


def test_merge_text_appends_with_blank_line():
    assert merge_text("Hello world", "More info") == "Hello world\n\nMore info"


@pytest.mark.parametrize("addition", ["", None])
def test_merge_text_empty_addition_keeps_existing(addition):
    assert merge_text("Hello world", addition) == "Hello world"


@pytest.mark.parametrize("existing", ["", None])
def test_merge_text_empty_existing_takes_addition(existing):
    assert merge_text(existing, "More info") == "More info"


def test_merge_text_nothing_on_either_side():
    assert merge_text(None, None) == ""


def test_merge_text_does_not_deduplicate():
    once = merge_text("A", "B")
    assert merge_text(once, "B") == "A\n\nB\n\nB"


def test_merge_tags_sorted_union():
    assert merge_tags(["ml"], ["ml", "ai"]) == ["ai", "ml"]


def test_merge_tags_trims_and_drops_empty():
    assert merge_tags([], ["  web ", "", "   ", "web"]) == ["web"]


def test_merge_tags_never_removes():
    assert merge_tags(["a", "b"], []) == ["a", "b"]
    assert merge_tags(["a", "b"], None) == ["a", "b"]


def test_merge_tags_idempotent():
    additions = ["x", "y ", "z"]
    once = merge_tags(["a"], additions)
    assert merge_tags(once, additions) == once


def test_merge_tags_order_independent():
    assert merge_tags(["m"], ["c", "a", "b"]) == merge_tags(["m"], ["b", "c", "a"])


def test_first_write_preview():
    assert first_write_preview(None, "previews/new.png") == "previews/new.png"
    assert first_write_preview("previews/old.png", "previews/new.png") == "previews/old.png"
    assert first_write_preview(None, None) is None


def test_derive_title_from_text():
    assert derive_title("  Hello world  ") == "Hello world"
    assert derive_title("x" * 100) == "x" * 80


@pytest.mark.parametrize("text", [None, "", "   \n"])
def test_derive_title_placeholder(text):
    assert derive_title(text) == "Untitled clip"


def test_make_snippet():
    assert make_snippet(None) is None
    assert make_snippet("  Hello world \n") == "Hello world"
    long = "word " * 100
    snippet = make_snippet(long)
    assert snippet is not None
    assert snippet.endswith("…")
    assert len(snippet) == 161
