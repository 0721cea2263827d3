"""In-memory model of the page's native fold controls."""

from collections.abc import Iterable

from loguru import logger

from threadnav.models.thread import Comment


class NativeFoldTable:
    """Host sync adapter backed by the fold flags read from the page.

    Each forwarded toggle click is recorded in ``clicks`` so callers can replay
    them against a live page.
    """

    def __init__(self, comments: Iterable[Comment] = ()) -> None:
        self._folded: list[bool] = []
        self._has_toggle: list[bool] = []
        self.clicks: list[int] = []
        self.extend(comments)

    def extend(self, comments: Iterable[Comment]) -> None:
        for comment in comments:
            self._folded.append(comment.natively_folded)
            self._has_toggle.append(comment.has_toggle)

    def is_natively_folded(self, position: int) -> bool:
        return 0 <= position < len(self._folded) and self._folded[position]

    def set_natively_collapsed(self, position: int, collapsed: bool) -> None:
        if not 0 <= position < len(self._folded):
            logger.debug("No row {} to mirror fold state onto", position)
            return
        if self._folded[position] == collapsed:
            return
        self.click(position)

    def click(self, position: int) -> bool:
        """Press the row's native toggle. Returns False when the row has none."""
        if not 0 <= position < len(self._has_toggle) or not self._has_toggle[position]:
            logger.debug("Row {} has no native toggle control", position)
            return False
        self._folded[position] = not self._folded[position]
        self.clicks.append(position)
        return True

    def folded_positions(self) -> list[int]:
        return [i for i, folded in enumerate(self._folded) if folded]

    def __len__(self) -> int:
        return len(self._folded)
