"""Event handling as a pure state transition.

``transition`` never touches the host: it reads the native fold flags and
returns the writes it wants as ``MirrorFold`` effects, which makes every
keypress testable without a live page.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from threadnav.core.navigation.effects import Effect
from threadnav.core.navigation.events import InputEvent
from threadnav.core.navigation.navigator import Navigator
from threadnav.protocols import GeometryProtocol, HostSyncProtocol


@dataclass(frozen=True)
class NavigatorState:
    """Everything the navigator mutates: the cursor and the collapse set."""

    active: int | None
    collapsed: frozenset[int] = frozenset()

    @classmethod
    def of(cls, navigator: Navigator) -> "NavigatorState":
        return cls(active=navigator.active, collapsed=navigator.collapsed.snapshot())


@dataclass(frozen=True)
class Transition:
    """Result of applying one event."""

    state: NavigatorState
    effects: tuple[Effect, ...]
    handled: bool


def initial_state(depths: Sequence[int]) -> NavigatorState:
    """Return the state of a fresh session: nothing collapsed, cursor on the first row."""
    return NavigatorState(active=0 if len(depths) else None)


def transition(
    state: NavigatorState,
    event: InputEvent,
    *,
    depths: Sequence[int],
    host: HostSyncProtocol | None = None,
    geometry: GeometryProtocol | None = None,
    honor_native_folds: bool = True,
) -> Transition:
    """Apply ``event`` to ``state`` and return the new state plus requested effects."""
    navigator = Navigator(
        list(depths),
        host=host,
        geometry=geometry,
        honor_native_folds=honor_native_folds,
        collapsed=state.collapsed,
        active=state.active,
    )
    navigator.drain_effects()
    handled = navigator.dispatch(event)
    return Transition(
        state=NavigatorState.of(navigator),
        effects=navigator.drain_effects(),
        handled=handled,
    )
