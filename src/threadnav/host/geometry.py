"""Estimated row geometry for page jumps when no browser layout is available."""

import math
from collections.abc import Callable, Hashable, Iterable, Sequence

from threadnav.config import DEFAULT_CHARS_PER_LINE, DEFAULT_LINE_HEIGHT_PX, DEFAULT_VIEWPORT_HEIGHT_PX
from threadnav.models.thread import Comment


def estimate_row_heights(
    comments: Iterable[Comment],
    *,
    line_height: int = DEFAULT_LINE_HEIGHT_PX,
    chars_per_line: int = DEFAULT_CHARS_PER_LINE,
) -> list[int]:
    """Guess each row's rendered height: one header line plus wrapped text."""
    heights = []
    for comment in comments:
        text_lines = max(1, math.ceil(len(comment.text) / chars_per_line))
        heights.append((1 + text_lines) * line_height)
    return heights


class RowGeometry:
    """Stacks visible rows top to bottom; hidden rows take no space.

    Offsets are prefix sums cached per ``version()`` token, so one page jump
    costs a single pass over the rows. Without ``version`` the visibility
    callback is assumed not to change.
    """

    def __init__(
        self,
        row_heights: Sequence[float],
        *,
        viewport_height: float = DEFAULT_VIEWPORT_HEIGHT_PX,
        is_visible: Callable[[int], bool] | None = None,
        version: Callable[[], Hashable] | None = None,
        default_height: float = 2 * DEFAULT_LINE_HEIGHT_PX,
    ) -> None:
        self.row_heights = list(row_heights)
        self._viewport_height = viewport_height
        self.is_visible = is_visible or (lambda _position: True)
        self.version = version
        self.default_height = default_height
        self._offsets: list[float] = []
        self._token: tuple[int, Hashable] | None = None

    def extend(self, row_heights: Iterable[float]) -> None:
        self.row_heights.extend(row_heights)

    def height(self, position: int) -> float:
        if 0 <= position < len(self.row_heights):
            return self.row_heights[position]
        return self.default_height

    def vertical_offset(self, position: int) -> float:
        offsets = self._prefix_sums()
        known = len(self.row_heights)
        if position <= known:
            return offsets[max(position, 0)]
        extra = sum(self.default_height for i in range(known, position) if self.is_visible(i))
        return offsets[known] + extra

    def viewport_height(self) -> float:
        return self._viewport_height

    def _prefix_sums(self) -> list[float]:
        token = (len(self.row_heights), self.version() if self.version else None)
        if token != self._token:
            offsets = [0.0]
            for i, h in enumerate(self.row_heights):
                offsets.append(offsets[-1] + (h if self.is_visible(i) else 0.0))
            self._offsets = offsets
            # Re-read: querying visibility may itself trigger a pass.
            self._token = (len(self.row_heights), self.version() if self.version else None)
        return self._offsets
