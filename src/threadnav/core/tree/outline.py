"""Render comment rows as an indented plain-text outline."""

import io
from collections.abc import Container, Sequence

from threadnav.models.thread import Comment


def render_outline(
    comments: Sequence[Comment],
    *,
    visible: Sequence[bool] | None = None,
    collapsed: Container[int] | None = None,
    active: int | None = None,
    snippet_width: int = 72,
) -> str:
    """Render rows as an outline.

    Args:
        comments: Rows in page order.
        visible: Per-row visibility; hidden rows are skipped. None shows all rows.
        collapsed: Rows drawn with a folded marker. None uses the page's own fold flags.
        active: Row marked with ``>``.
        snippet_width: Max characters of comment text shown per row.

    Returns:
        One header line per row, plus a text line when the row has text.
    """
    out = io.StringIO()
    for position, comment in enumerate(comments):
        if visible is not None and not (position < len(visible) and visible[position]):
            continue

        folded = comment.natively_folded if collapsed is None else position in collapsed
        cursor = ">" if position == active else " "
        marker = "▸" if folded else "▾"
        indent = "    " * comment.depth
        head = " ".join(part for part in (comment.author, comment.age) if part)
        out.write(f"{cursor} {indent}{marker} [{position}] {head or comment.comment_id}\n")

        if comment.text:
            text = " ".join(comment.text.split())
            if len(text) > snippet_width:
                text = text[: snippet_width - 3] + "..."
            out.write(f"  {indent}  {text}\n")

    return out.getvalue()
