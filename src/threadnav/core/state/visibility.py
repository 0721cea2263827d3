"""Derive row visibility from the collapse state."""

from collections.abc import Container, Sequence

from loguru import logger

from threadnav.core.state.collapse import CollapseState


def compute_visibility(depths: Sequence[int], collapsed: Container[int]) -> list[bool]:
    """Return one visibility flag per row.

    A single forward pass keeps, per depth, whether the most recent row at
    that depth is collapsed. A row is hidden when any slot above its own depth
    is set, i.e. when one of its ancestors is collapsed.
    """
    stack: list[bool] = []
    visible: list[bool] = []
    for position, depth in enumerate(depths):
        del stack[depth:]
        if len(stack) < depth:
            # Depth jumped by more than one level; treat the gap as expanded.
            stack.extend([False] * (depth - len(stack)))
        visible.append(not any(stack))
        stack.append(position in collapsed)
    return visible


class VisibilityEngine:
    """Caches the last visibility pass over a growing depth sequence.

    ``recompute`` must be called after every change to the collapse state;
    growth of the sequence is picked up automatically on the next query.
    """

    def __init__(self, depths: Sequence[int], collapsed: CollapseState) -> None:
        self.depths = depths
        self.collapsed = collapsed
        self._visible: list[bool] = []
        # Bumped on every pass so dependents can tell when their caches are stale.
        self.generation = 0
        self.recompute()

    def recompute(self) -> None:
        self._visible = compute_visibility(self.depths, self.collapsed)
        self.generation += 1
        logger.debug(
            "Visibility recomputed: {} of {} rows visible", sum(self._visible), len(self._visible)
        )

    def is_visible(self, position: int | None) -> bool:
        if position is None or not 0 <= position < len(self.depths):
            return False
        if len(self._visible) != len(self.depths):
            self.recompute()
        return self._visible[position]

    def visible_positions(self) -> list[int]:
        return [i for i in range(len(self.depths)) if self.is_visible(i)]

    def first_visible(self) -> int | None:
        for i in range(len(self.depths)):
            if self.is_visible(i):
                return i
        return None

    def last_visible(self) -> int | None:
        for i in range(len(self.depths) - 1, -1, -1):
            if self.is_visible(i):
                return i
        return None
