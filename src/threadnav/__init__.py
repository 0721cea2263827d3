"""Keyboard navigation and folding for threaded discussion pages."""

__version__ = "0.1.0"

from threadnav.core.navigation.navigator import Navigator  # noqa: E402
from threadnav.protocols import GeometryProtocol, HostSyncProtocol  # noqa: E402

__all__ = ["GeometryProtocol", "HostSyncProtocol", "Navigator", "__version__"]
