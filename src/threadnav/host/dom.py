"""Small lxml helpers shared by the page parser and the click handler."""

from lxml.html import HtmlElement

INTERACTIVE_TAGS: frozenset[str] = frozenset(
    {"a", "button", "input", "textarea", "select", "summary", "details"}
)
TYPING_TAGS: frozenset[str] = frozenset({"input", "textarea", "select"})
TOGGLE_TEXTS: frozenset[str] = frozenset({"[-]", "[–]", "[+]"})


def class_test(name: str) -> str:
    """XPath predicate matching elements that carry the CSS class ``name``."""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


def has_class(el: HtmlElement, name: str) -> bool:
    return name in (el.get("class") or "").split()


def _self_and_ancestors(el: HtmlElement) -> list[HtmlElement]:
    return [el, *el.iterancestors()]


def is_interactive_target(el: HtmlElement) -> bool:
    """True if a click on ``el`` belongs to a link, form control or disclosure widget."""
    return any(
        isinstance(node.tag, str) and node.tag.lower() in INTERACTIVE_TAGS
        for node in _self_and_ancestors(el)
    )


def is_typing_target(el: HtmlElement) -> bool:
    """True if key presses on ``el`` are text entry and must be left alone."""
    if isinstance(el.tag, str) and el.tag.lower() in TYPING_TAGS:
        return True
    for node in _self_and_ancestors(el):
        editable = node.get("contenteditable")
        if editable is None:
            continue
        # "inherit" and unknown values defer to the parent.
        value = editable.strip().lower()
        if value in ("", "true", "plaintext-only"):
            return True
        if value == "false":
            return False
    return False


def find_toggle_anchor(row: HtmlElement) -> HtmlElement | None:
    """Find the native ``[-]``/``[+]`` fold control inside a comment row.

    Prefers the ``a.togg`` anchor and falls back to matching the anchor text.
    """
    found = row.xpath(f".//a[{class_test('togg')}]")
    if found:
        return found[0]
    for anchor in row.iter("a"):
        if anchor.text_content().strip() in TOGGLE_TEXTS:
            return anchor
    return None
