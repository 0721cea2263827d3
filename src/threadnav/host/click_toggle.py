"""Click anywhere on a comment row to fold or unfold it.

The click is forwarded to the row's native ``[-]``/``[+]`` control, except when
the user is selecting text or clicked a link or form control.
"""

from loguru import logger
from lxml.html import HtmlElement

from threadnav.host.dom import class_test, find_toggle_anchor, is_interactive_target
from threadnav.host.html_page import ThreadPage
from threadnav.protocols import HostSyncProtocol


class ClickToggle:
    """Forwards row clicks to the native fold control."""

    def __init__(self, page: ThreadPage, host: HostSyncProtocol) -> None:
        self.page = page
        self.host = host
        self.enhanced: set[int] = set()

    def enhance(self, position: int) -> bool:
        """Start handling clicks on a row. Returns False if it already was, or does not exist."""
        if position in self.enhanced or not 0 <= position < len(self.page.rows):
            return False
        self.enhanced.add(position)
        return True

    def enhance_all(self) -> int:
        """Enhance every row not handled yet (including rows appended since the last call)."""
        return sum(self.enhance(i) for i in range(len(self.page.rows)))

    def default_target(self, position: int) -> HtmlElement:
        """The comment body cell, which is where a plain click usually lands."""
        row = self.page.rows[position]
        cells = row.xpath(f".//td[{class_test('default')}]")
        return cells[0] if cells else row

    def handle_click(
        self, position: int, target: HtmlElement | None = None, *, selection: str = ""
    ) -> bool:
        """Handle a click on a row.

        Returns True when the click was forwarded to the native toggle, in which
        case the caller should stop it from propagating further.
        """
        if position not in self.enhanced:
            return False
        if selection:
            logger.debug("Row {}: text is selected, not toggling", position)
            return False
        if target is None:
            target = self.default_target(position)
        if is_interactive_target(target):
            return False
        if find_toggle_anchor(self.page.rows[position]) is None:
            return False
        self.host.set_natively_collapsed(position, not self.host.is_natively_folded(position))
        return True
