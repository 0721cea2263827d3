"""Tree navigation over a flat depth sequence: parent, children, subtree span.

Nothing is stored: every relationship is recovered by scanning neighbours and
comparing depths. The scans are linear, which is fine for queries triggered by
a keypress.
"""

from collections.abc import Iterator, Sequence


def _check(depths: Sequence[int], position: int) -> None:
    if not 0 <= position < len(depths):
        msg = f"Position {position!r} out of range for {len(depths)} rows"
        raise IndexError(msg)


def parent(depths: Sequence[int], position: int) -> int | None:
    """Return the nearest preceding position one level shallower, or None for a root."""
    _check(depths, position)
    depth = depths[position]
    if depth == 0:
        return None
    for i in range(position - 1, -1, -1):
        if depths[i] == depth - 1:
            return i
    return None


def first_child(depths: Sequence[int], position: int) -> int | None:
    """Return the first direct child of ``position``, or None.

    The forward scan stops at the first row that is not deeper than
    ``position``, so a following sibling is never mistaken for a child.
    """
    _check(depths, position)
    depth = depths[position]
    for i in range(position + 1, len(depths)):
        if depths[i] == depth + 1:
            return i
        if depths[i] <= depth:
            break
    return None


def has_child(depths: Sequence[int], position: int) -> bool:
    return first_child(depths, position) is not None


def subtree_end(depths: Sequence[int], position: int) -> int:
    """Return the exclusive end of the subtree rooted at ``position``."""
    _check(depths, position)
    depth = depths[position]
    end = position + 1
    while end < len(depths) and depths[end] > depth:
        end += 1
    return end


def ancestors(depths: Sequence[int], position: int) -> Iterator[int]:
    """Yield ancestors of ``position``, nearest first."""
    current = parent(depths, position)
    while current is not None:
        yield current
        current = parent(depths, current)
