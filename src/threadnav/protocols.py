"""Protocols for the collaborators the navigator talks to."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class HostSyncProtocol(Protocol):
    """Protocol for the host page's native fold control."""

    def is_natively_folded(self, position: int) -> bool:
        """Return whether the host currently shows the row as folded."""
        ...

    def set_natively_collapsed(self, position: int, collapsed: bool) -> None:
        """Drive the native control to the requested state.

        Must do nothing when the control is already in that state or when the
        row has no control at all.
        """
        ...


@runtime_checkable
class GeometryProtocol(Protocol):
    """Protocol for on-screen row geometry, used by page jumps only."""

    def vertical_offset(self, position: int) -> float:
        """Return the absolute top offset of a row."""
        ...

    def viewport_height(self) -> float:
        """Return the height of the visible viewport."""
        ...
