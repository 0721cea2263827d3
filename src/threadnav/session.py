"""Wire a parsed page, its native fold controls and the navigator together."""

from loguru import logger
from lxml.html import HtmlElement

from threadnav.config import DEFAULT_VIEWPORT_HEIGHT_PX
from threadnav.core.navigation.effects import Effect, MirrorFold, OpenPermalink, ScrollIntoView
from threadnav.core.navigation.events import InputEvent, event_from_key_name, parse_key_spec
from threadnav.core.navigation.navigator import Navigator
from threadnav.core.navigation.transition import NavigatorState
from threadnav.core.tree.outline import render_outline
from threadnav.host.dom import is_typing_target
from threadnav.host.geometry import RowGeometry, estimate_row_heights
from threadnav.host.html_page import ThreadPage
from threadnav.host.native import NativeFoldTable
from threadnav.protocols import HostSyncProtocol


class ThreadSession:
    """One navigation session over one page.

    Applies the navigator's effects as they happen: fold mirrors go to the
    host adapter, scroll requests and opened permalinks are recorded.
    """

    def __init__(
        self,
        page: ThreadPage,
        *,
        host: HostSyncProtocol | None = None,
        honor_native_folds: bool = True,
        viewport_height: float = DEFAULT_VIEWPORT_HEIGHT_PX,
    ) -> None:
        self.page = page
        self.host: HostSyncProtocol = host if host is not None else NativeFoldTable(page.comments)
        self.scroll_requests: list[int] = []
        self.opened: list[str] = []

        self.navigator = Navigator(
            page.depths, host=self.host, honor_native_folds=honor_native_folds
        )
        self.geometry = RowGeometry(
            estimate_row_heights(page.comments),
            viewport_height=viewport_height,
            is_visible=self.navigator.is_visible,
            version=lambda: self.navigator.visibility.generation,
        )
        self.navigator.geometry = self.geometry

        if not self.navigator.sequence.is_well_formed():
            logger.warning("Comment depths are not a valid tree; navigation may misbehave")
        self._apply(self.navigator.drain_effects())

    def handle(self, event: InputEvent) -> bool:
        """Dispatch one event. Returns True if the host should suppress its default action."""
        handled = self.navigator.dispatch(event)
        self._apply(self.navigator.drain_effects())
        return handled

    def press(self, spec: str) -> bool:
        return self.handle(parse_key_spec(spec))

    def key(self, name: str, *, shift: bool = False, target: HtmlElement | None = None) -> bool:
        """Handle a DOM key press aimed at ``target``. Unknown keys are left to the host."""
        typing = target is not None and is_typing_target(target)
        event = event_from_key_name(name, shift=shift, from_text_input=typing)
        if event is None:
            return False
        return self.handle(event)

    def extend(self, fresh: ThreadPage) -> None:
        """Append rows that showed up after the page was first read."""
        if not fresh.comments:
            return
        self.page.extend(fresh)
        if isinstance(self.host, NativeFoldTable):
            self.host.extend(fresh.comments)
        self.geometry.extend(estimate_row_heights(fresh.comments))
        self.navigator.append(fresh.depths)
        if not self.navigator.sequence.is_well_formed():
            logger.warning("Appended rows break the comment tree; navigation may misbehave")
        self._apply(self.navigator.drain_effects())
        logger.debug("Session extended by {} rows", len(fresh.comments))

    def state(self) -> NavigatorState:
        return NavigatorState.of(self.navigator)

    def visible_positions(self) -> list[int]:
        return self.navigator.visibility.visible_positions()

    def render(self) -> str:
        nav = self.navigator
        rows = range(len(self.page.comments))
        return render_outline(
            self.page.comments,
            visible=[nav.is_visible(i) for i in rows],
            collapsed={i for i in rows if nav.is_collapsed(i)},
            active=nav.active,
        )

    def _apply(self, effects: tuple[Effect, ...]) -> None:
        for effect in effects:
            if isinstance(effect, MirrorFold):
                self.host.set_natively_collapsed(effect.position, effect.collapsed)
            elif isinstance(effect, ScrollIntoView):
                self.scroll_requests.append(effect.position)
            elif isinstance(effect, OpenPermalink):
                link = self.page.comments[effect.position].permalink
                if link:
                    self.opened.append(link)
                else:
                    logger.debug("Row {} has no link to open", effect.position)
