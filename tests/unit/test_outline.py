"""Tests for plain-text outline rendering."""

from threadnav.core.tree.outline import render_outline
from threadnav.models.thread import Comment

COMMENTS = [
    Comment("1", 0, author="alice", age="2 hours ago", text="hello\nworld"),
    Comment("2", 1, author="bob", natively_folded=True),
    Comment("3", 0, text="x" * 200),
]


def test_full_outline_uses_native_fold_flags() -> None:
    out = render_outline(COMMENTS)
    assert out.splitlines() == [
        "  ▾ [0] alice 2 hours ago",
        "    hello world",
        "      ▸ [1] bob",
        "  ▾ [2] 3",
        "    " + "x" * 69 + "...",
    ]


def test_hidden_rows_are_skipped_and_cursor_marked() -> None:
    out = render_outline(COMMENTS, visible=[True, False, True], collapsed={0}, active=2)
    lines = out.splitlines()
    assert lines[0] == "  ▸ [0] alice 2 hours ago"
    assert "[1]" not in out
    assert lines[2] == "> ▾ [2] 3"


def test_empty_outline() -> None:
    assert render_outline([]) == ""
