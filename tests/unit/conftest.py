"""Shared test fixtures."""

from pathlib import Path

import pytest

from tests.unit.fakes import RowSpec, build_item_html
from threadnav.host.html_page import ThreadPage, parse_thread_page

# depths [0, 1, 1, 2, 0]: two root threads, the first with two replies,
# the second reply having one nested reply of its own.
SCENARIO_ROWS = [
    RowSpec("100", 0, author="alice", text="Root comment about trees"),
    RowSpec("101", 1, author="bob", text="First reply"),
    RowSpec("102", 1, author="carol", text="Second reply"),
    RowSpec("103", 2, author="dave", text="Reply to carol"),
    RowSpec("104", 0, author="erin", text="Another root"),
]


@pytest.fixture
def scenario_depths() -> list[int]:
    return [0, 1, 1, 2, 0]


@pytest.fixture
def scenario_html() -> str:
    return build_item_html(SCENARIO_ROWS)


@pytest.fixture
def scenario_page(scenario_html: str) -> ThreadPage:
    return parse_thread_page(scenario_html, url="https://news.ycombinator.com/item?id=1")


@pytest.fixture
def scenario_file(tmp_path: Path, scenario_html: str) -> Path:
    path = tmp_path / "item.html"
    path.write_text(scenario_html, encoding="utf-8")
    return path
