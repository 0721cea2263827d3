"""Fetch Hacker News item pages, with optional on-disk caching."""

from pathlib import Path
from urllib.parse import parse_qs, urlparse

import requests
from loguru import logger

from threadnav import __version__
from threadnav.config import HN_ITEM_URL, PAGE_CACHE_PREFIX, REQUEST_TIMEOUT


def resolve_item_id(source: str) -> str | None:
    """Return the item id named by ``source`` (a bare id or an ``item?id=`` URL)."""
    source = source.strip()
    if source.isdigit():
        return source
    parsed = urlparse(source)
    if parsed.scheme in ("http", "https"):
        ids = parse_qs(parsed.query).get("id")
        if ids and ids[0].isdigit():
            return ids[0]
    return None


def item_url(item_id: str) -> str:
    return f"{HN_ITEM_URL}?id={item_id}"


class HackerNewsClient:
    """Item page fetcher.

    With ``from_cache`` set, pages are stored under ``PAGE_CACHE_PREFIX`` and
    served from there on later calls. Returns stale data, but spares the site
    while developing.
    """

    def __init__(self, *, from_cache: bool = False, timeout: float = REQUEST_TIMEOUT) -> None:
        self.sess = requests.Session()
        self.sess.headers["User-Agent"] = f"threadnav/{__version__}"
        self.timeout = timeout
        self.cache_prefix: str | None = PAGE_CACHE_PREFIX if from_cache else None

        if self.cache_prefix:
            Path(self.cache_prefix).parent.mkdir(parents=True, exist_ok=True)

    def fetch_item(self, item_id: str) -> str:
        """Return the HTML of an item page."""
        cache_path: Path | None = None
        if self.cache_prefix:
            cache_path = Path(f"{self.cache_prefix}{item_id}.html")
            if cache_path.exists():
                logger.debug("Filled from cache: {}", cache_path)
                return cache_path.read_text(encoding="utf-8")

        logger.debug("Fetching item {}", item_id)
        r = self.sess.get(HN_ITEM_URL, params={"id": item_id}, timeout=self.timeout)
        r.raise_for_status()

        if cache_path is not None:
            cache_path.write_text(r.text, encoding="utf-8")
        return r.text
