"""Keyboard and pointer navigation over a folded comment tree."""

from collections.abc import Callable, Iterable

from loguru import logger

from threadnav.config import PAGE_JUMP_MARGIN_PX
from threadnav.core.navigation.effects import Effect, MirrorFold, OpenPermalink, ScrollIntoView
from threadnav.core.navigation.events import InputEvent, Key
from threadnav.core.state.collapse import CollapseState
from threadnav.core.state.visibility import VisibilityEngine
from threadnav.core.tree.index import ancestors, first_child, has_child, parent
from threadnav.core.tree.sequence import DepthSequence
from threadnav.protocols import GeometryProtocol, HostSyncProtocol


class Navigator:
    """Owns the collapse state and the active cursor for one page session.

    Every public operation leaves ``active`` on a visible row. Operations that
    cannot apply (no row there, nothing to move to) do nothing. Requests for
    the host (mirroring a fold, scrolling, opening a link) are queued as
    effects and collected with ``drain_effects``.

    Args:
        depths: Row depths in page order.
        host: Native fold control of the page, if any.
        geometry: Row offsets, needed only for page jumps.
        honor_native_folds: Treat natively folded rows as collapsed when
            deciding how left/right/space behave.
        collapsed: Initial collapse state.
        active: Initial cursor. Defaults to the first visible row.
    """

    def __init__(
        self,
        depths: Iterable[int],
        *,
        host: HostSyncProtocol | None = None,
        geometry: GeometryProtocol | None = None,
        honor_native_folds: bool = True,
        collapsed: Iterable[int] = (),
        active: int | None = None,
    ) -> None:
        self.sequence = depths if isinstance(depths, DepthSequence) else DepthSequence(depths)
        self.collapsed = CollapseState(collapsed)
        self.visibility = VisibilityEngine(self.sequence, self.collapsed)
        self.host = host
        self.geometry = geometry
        self.honor_native_folds = honor_native_folds
        self.active: int | None = None
        self._effects: list[Effect] = []

        if active is not None and self.visibility.is_visible(active):
            self.active = active
        else:
            self._activate_first()

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def is_visible(self, position: int | None) -> bool:
        return self.visibility.is_visible(position)

    def is_folded(self, position: int) -> bool:
        """Return whether the host shows the row folded, whoever folded it."""
        if self.host is None or not self.sequence.contains(position):
            return False
        return self.host.is_natively_folded(position)

    def is_collapsed(self, position: int) -> bool:
        if position in self.collapsed:
            return True
        return self.honor_native_folds and self.is_folded(position)

    def is_root(self, position: int) -> bool:
        return self.sequence.depth(position) == 0

    def step_visible(self, direction: int, start: int | None = None) -> int | None:
        """Return the next visible row in ``direction``, without wrapping.

        Moving forward also steps over natively folded rows.
        """
        origin = self.active if start is None else start
        if origin is None or direction == 0:
            return None
        step = 1 if direction > 0 else -1
        i = origin + step
        while 0 <= i < len(self.sequence):
            if self.is_visible(i) and not (step > 0 and self.is_folded(i)):
                return i
            i += step
        return None

    # ------------------------------------------------------------------ #
    # Collapse state
    # ------------------------------------------------------------------ #

    def collapse(self, position: int, *, mirror: bool = False) -> None:
        if not self._valid(position):
            return
        self.collapsed.collapse(position)
        if mirror:
            self._mirror(position, collapsed=True)
        self.visibility.recompute()

    def expand(self, position: int) -> None:
        if not self._valid(position):
            return
        self.collapsed.expand(position)
        if self.is_root(position) or self.is_folded(position):
            self._mirror(position, collapsed=False)
        self.visibility.recompute()

    def collapse_subtree(self, position: int) -> None:
        if not self._valid(position):
            return
        self.collapsed.collapse_subtree(self.sequence, position)
        if self.is_root(position):
            self._mirror(position, collapsed=True)
        self.visibility.recompute()

    def expand_subtree(self, position: int) -> None:
        if not self._valid(position):
            return
        self.collapsed.expand_subtree(self.sequence, position)
        if self.is_root(position):
            self._mirror(position, collapsed=False)
        self.visibility.recompute()

    def reveal(self, position: int) -> None:
        """Expand every ancestor of ``position`` so that it becomes visible."""
        if not self._valid(position):
            return
        for ancestor in ancestors(self.sequence, position):
            self.collapsed.expand(ancestor)
        self.visibility.recompute()

    # ------------------------------------------------------------------ #
    # Cursor movement
    # ------------------------------------------------------------------ #

    def set_active(self, position: int | None, *, reveal: bool = True) -> bool:
        """Move the cursor to ``position``. Returns False if nothing happened."""
        if position is None or not self._valid(position):
            return False
        if reveal:
            self.reveal(position)
        elif not self.is_visible(position):
            logger.debug("Ignoring activation of hidden row {}", position)
            return False
        self.active = position
        self._effects.append(ScrollIntoView(position))
        return True

    def move_up(self) -> bool:
        return self.set_active(self.step_visible(-1))

    def move_down(self) -> bool:
        return self.set_active(self.step_visible(+1))

    def move_left(self) -> bool:
        """Fold the active row, or climb to its parent when there is nothing to fold.

        Roots are folded natively too; deeper rows are folded internally only.
        """
        me = self.active
        if me is None:
            return False
        if self.is_root(me) and not self.is_collapsed(me):
            self.collapse(me, mirror=True)
            return True
        if has_child(self.sequence, me) and not self.is_collapsed(me):
            self.collapse(me)
            return True
        return self.set_active(parent(self.sequence, me))

    def move_right(self) -> bool:
        """Unfold the active row, or descend to its first child."""
        me = self.active
        if me is None:
            return False
        if self.is_collapsed(me):
            self.expand(me)
            return True
        return self.set_active(first_child(self.sequence, me))

    def toggle_at_cursor(self) -> bool:
        me = self.active
        if me is None:
            return False
        if self.is_collapsed(me):
            self.expand(me)
            return True
        if has_child(self.sequence, me):
            self.collapse(me)
            return True
        return False

    def collapse_subtree_at_cursor(self) -> bool:
        if self.active is None:
            return False
        self.collapse_subtree(self.active)
        return True

    def expand_subtree_at_cursor(self) -> bool:
        if self.active is None:
            return False
        self.expand_subtree(self.active)
        return True

    def jump_home(self) -> bool:
        return self.set_active(self.visibility.first_visible())

    def jump_end(self) -> bool:
        return self.set_active(self.visibility.last_visible())

    def page_jump(self, direction: int) -> bool:
        """Move roughly one viewport up or down.

        Picks the first visible row past ``offset(active) +/- (viewport - margin)``,
        falling back to the first or last visible row. Depends on the geometry
        collaborator and is only as exact as the offsets it reports.
        """
        if self.active is None or direction == 0:
            return False
        if self.geometry is None:
            logger.debug("Page jump ignored: no geometry available")
            return False

        step = 1 if direction > 0 else -1
        span = self.geometry.viewport_height() - PAGE_JUMP_MARGIN_PX
        threshold = self.geometry.vertical_offset(self.active) + step * span

        target: int | None = None
        if step > 0:
            for i in range(self.active + 1, len(self.sequence)):
                if self.is_visible(i) and self.geometry.vertical_offset(i) >= threshold:
                    target = i
                    break
            if target is None:
                target = self.visibility.last_visible()
        else:
            for i in range(self.active - 1, -1, -1):
                if self.is_visible(i) and self.geometry.vertical_offset(i) <= threshold:
                    target = i
                    break
            if target is None:
                target = self.visibility.first_visible()
        return self.set_active(target)

    def activate(self) -> bool:
        if self.active is None:
            return False
        self._effects.append(OpenPermalink(self.active))
        return True

    def point_at(self, position: int | None) -> bool:
        """Pointer activation: select a row directly, without unfolding anything."""
        return self.set_active(position, reveal=False)

    # ------------------------------------------------------------------ #
    # Events and growth
    # ------------------------------------------------------------------ #

    def dispatch(self, event: InputEvent) -> bool:
        """Apply one input event.

        Returns True when the event was consumed and the host should suppress
        its default action. Events from text inputs and pointer activations are
        never consumed.
        """
        if event.from_text_input:
            return False
        if event.key is Key.POINTER:
            self.point_at(event.position)
            return False
        if event.shift and event.key is Key.RIGHT:
            self.expand_subtree_at_cursor()
            return True
        if event.shift and event.key is Key.LEFT:
            self.collapse_subtree_at_cursor()
            return True

        handlers: dict[Key, Callable[[], bool]] = {
            Key.UP: self.move_up,
            Key.DOWN: self.move_down,
            Key.LEFT: self.move_left,
            Key.RIGHT: self.move_right,
            Key.SPACE: self.toggle_at_cursor,
            Key.ENTER: self.activate,
            Key.HOME: self.jump_home,
            Key.END: self.jump_end,
            Key.PAGE_UP: lambda: self.page_jump(-1),
            Key.PAGE_DOWN: lambda: self.page_jump(+1),
        }
        handler = handlers.get(event.key)
        if handler is None:
            return False
        handler()
        return True

    def append(self, depths: Iterable[int]) -> None:
        """Extend the session with rows that appeared after load."""
        self.sequence.extend(depths)
        self.visibility.recompute()
        if self.active is None:
            self._activate_first()

    def drain_effects(self) -> tuple[Effect, ...]:
        effects = tuple(self._effects)
        self._effects.clear()
        return effects

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _activate_first(self) -> None:
        first = self.visibility.first_visible()
        self.set_active(first if first is not None else 0)

    def _mirror(self, position: int, *, collapsed: bool) -> None:
        self._effects.append(MirrorFold(position, collapsed))

    def _valid(self, position: int) -> bool:
        if self.sequence.contains(position):
            return True
        logger.debug("Ignoring out-of-range position {}", position)
        return False
