"""Parse a Hacker News item page into comment rows."""

from dataclasses import dataclass, field
from urllib.parse import urljoin

import lxml.html
from loguru import logger
from lxml.html import HtmlElement

from threadnav.config import HN_ITEM_URL, INDENT_WIDTH_PX
from threadnav.host.dom import class_test, find_toggle_anchor, has_class
from threadnav.models.thread import Comment

_ROW_XPATH = f"//tr[{class_test('athing')} and {class_test('comtr')}]"
_HEAD = f"*[{class_test('comhead')} or {class_test('commhead')}]"


@dataclass
class ThreadPage:
    """Comment rows of one page, with their elements kept for the click handler."""

    title: str
    url: str | None
    comments: list[Comment] = field(default_factory=list)
    rows: list[HtmlElement] = field(default_factory=list)

    @property
    def depths(self) -> list[int]:
        return [c.depth for c in self.comments]

    def comment_ids(self) -> set[str]:
        return {c.comment_id for c in self.comments}

    def extend(self, other: "ThreadPage") -> None:
        self.comments.extend(other.comments)
        self.rows.extend(other.rows)


def _int_attr(value: str | None) -> int:
    try:
        return int(float(value)) if value else 0
    except ValueError:
        return 0


def row_depth(row: HtmlElement) -> int:
    """Indent level of a row, from the width of its spacer image."""
    cells = row.xpath(f".//td[{class_test('ind')}]")
    if not cells:
        return 0
    images = cells[0].xpath(".//img")
    if images:
        return max(_int_attr(images[0].get("width")), 0) // INDENT_WIDTH_PX
    return max(_int_attr(cells[0].get("indent")), 0)


def _first_text(row: HtmlElement, xpath: str) -> str:
    found = row.xpath(xpath)
    return found[0].text_content().strip() if found else ""


def _permalink(row: HtmlElement, base_url: str) -> str | None:
    for xpath in (
        f".//{_HEAD}//*[{class_test('age')}]//a/@href",
        f".//{_HEAD}//a[contains(@href, 'item?id=')]/@href",
        ".//a/@href",
    ):
        found = row.xpath(xpath)
        if found:
            return urljoin(base_url, str(found[0]))
    return None


def parse_comment_row(row: HtmlElement, *, base_url: str = HN_ITEM_URL) -> Comment:
    toggle = find_toggle_anchor(row)
    toggle_text = toggle.text_content().strip() if toggle is not None else ""
    return Comment(
        comment_id=row.get("id", ""),
        depth=row_depth(row),
        author=_first_text(row, f".//a[{class_test('hnuser')}]"),
        age=_first_text(row, f".//*[{class_test('age')}]"),
        text=_first_text(row, f".//*[{class_test('commtext')}]"),
        permalink=_permalink(row, base_url),
        natively_folded=has_class(row, "collapsed") or toggle_text.startswith("[+]"),
        has_toggle=toggle is not None,
    )


def parse_thread_page(html: str, *, url: str | None = None) -> ThreadPage:
    """Parse an item page.

    Args:
        html: Page source.
        url: Address the page was loaded from, used to resolve permalinks.

    Returns:
        The page's comment rows in document order. A page without comments
        yields an empty ThreadPage.
    """
    if not html.strip():
        return ThreadPage(title="", url=url)
    doc = lxml.html.fromstring(html)
    title = _first_text(doc, f"//*[{class_test('titleline')}]//a") or _first_text(doc, "//title")
    page = ThreadPage(title=title, url=url)
    base_url = url or HN_ITEM_URL
    for row in doc.xpath(_ROW_XPATH):
        page.comments.append(parse_comment_row(row, base_url=base_url))
        page.rows.append(row)
    logger.debug("Parsed {} comment rows from {!r}", len(page.comments), title)
    return page


def new_comment_rows(page: ThreadPage, html: str) -> ThreadPage:
    """Return the rows of a later snapshot that follow the last row ``page`` already has.

    Rows are only ever appended, so replies that appeared between known rows
    are skipped: appending them would attach them to the wrong parent.
    """
    snapshot = parse_thread_page(html, url=page.url)
    known = page.comment_ids()
    last_known = max(
        (i for i, c in enumerate(snapshot.comments) if c.comment_id in known), default=-1
    )
    fresh = ThreadPage(title=snapshot.title, url=page.url)
    skipped = 0
    for i, (comment, row) in enumerate(zip(snapshot.comments, snapshot.rows, strict=True)):
        if comment.comment_id in known:
            continue
        if i < last_known:
            skipped += 1
            continue
        fresh.comments.append(comment)
        fresh.rows.append(row)
    if skipped:
        logger.debug("Skipped {} new rows inserted between known rows", skipped)
    return fresh
