"""Configuration constants for threadnav."""

import os

# Hacker News draws comment indentation as a spacer image this many pixels wide per level.
INDENT_WIDTH_PX: int = 40

# Page jumps move by one viewport minus this overlap.
PAGE_JUMP_MARGIN_PX: int = 60

# Geometry estimate used when no real layout is available (CLI, tests).
DEFAULT_VIEWPORT_HEIGHT_PX: int = 900
DEFAULT_LINE_HEIGHT_PX: int = 18
DEFAULT_CHARS_PER_LINE: int = 100

HN_ITEM_URL: str = "https://news.ycombinator.com/item"

# Seconds before an item page request is abandoned.
REQUEST_TIMEOUT: float = 10.0

# Cache prefix for fetched pages, used only when --cache is passed.
PAGE_CACHE_PREFIX: str = "/tmp/threadnav-cache/item-"

FOLD_MODES: tuple[str, ...] = ("merged", "strict")


def resolve_fold_mode() -> bool:
    """Return whether natively folded rows count as collapsed.

    ``THREADNAV_FOLD_MODE=strict`` makes the internal collapse set the only
    authority; ``merged`` (the default) also honors the page's own fold flag.
    """
    mode = os.environ.get("THREADNAV_FOLD_MODE", "merged").strip().lower() or "merged"
    if mode not in FOLD_MODES:
        msg = f"THREADNAV_FOLD_MODE must be one of {FOLD_MODES!r}, got {mode!r}"
        raise ValueError(msg)
    return mode == "merged"
