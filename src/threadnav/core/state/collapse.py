"""Collapse state: the set of rows explicitly folded by the navigator."""

from collections.abc import Iterable, Iterator, Sequence

from threadnav.core.tree.index import subtree_end


class CollapseState:
    """Positions whose subtrees are folded.

    This set is the only source of truth for folding done by the navigator.
    The page's own fold control is tracked separately by the host adapter.
    """

    def __init__(self, collapsed: Iterable[int] = ()) -> None:
        self._collapsed: set[int] = set(collapsed)

    def collapse(self, position: int) -> None:
        self._collapsed.add(position)

    def expand(self, position: int) -> None:
        self._collapsed.discard(position)

    def collapse_subtree(self, depths: Sequence[int], position: int) -> None:
        """Collapse ``position`` and every descendant.

        Descendants stay collapsed when the root is later expanded on its own.
        """
        self._collapsed.update(range(position, subtree_end(depths, position)))

    def expand_subtree(self, depths: Sequence[int], position: int) -> None:
        """Expand ``position`` and every descendant, whatever their prior state."""
        self._collapsed.difference_update(range(position, subtree_end(depths, position)))

    def snapshot(self) -> frozenset[int]:
        return frozenset(self._collapsed)

    def __contains__(self, position: object) -> bool:
        return position in self._collapsed

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._collapsed))

    def __len__(self) -> int:
        return len(self._collapsed)
