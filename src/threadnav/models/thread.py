"""Domain models for discussion threads."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Comment:
    """A single rendered comment row, in page order."""

    comment_id: str
    depth: int
    author: str = ""
    age: str = ""
    text: str = ""
    permalink: str | None = None
    natively_folded: bool = False
    has_toggle: bool = False
