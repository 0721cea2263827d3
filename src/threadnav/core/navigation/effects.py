"""Side effects requested by the navigator, applied by the host."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MirrorFold:
    """Drive the host's native fold control for a row."""

    position: int
    collapsed: bool


@dataclass(frozen=True)
class ScrollIntoView:
    """Highlight the newly active row and scroll it to the middle of the viewport."""

    position: int


@dataclass(frozen=True)
class OpenPermalink:
    """Follow the active row's permalink."""

    position: int


Effect = MirrorFold | ScrollIntoView | OpenPermalink
