"""Tests for a full page session: navigator, native controls and effects together."""

from collections.abc import Iterator

import lxml.html
import pytest
from loguru import logger

from tests.unit.fakes import RowSpec, build_item_html
from threadnav.host.html_page import ThreadPage, new_comment_rows, parse_thread_page
from threadnav.host.native import NativeFoldTable
from threadnav.session import ThreadSession


def test_root_fold_is_mirrored_to_native_control(scenario_page: ThreadPage) -> None:
    session = ThreadSession(scenario_page)
    table = session.host
    assert isinstance(table, NativeFoldTable)

    assert session.press("left")
    assert table.is_natively_folded(0)
    assert session.visible_positions() == [0, 4]

    session.press("right")
    assert not table.is_natively_folded(0)
    assert table.clicks == [0, 0]
    assert session.visible_positions() == [0, 1, 2, 3, 4]


def test_reply_fold_stays_internal(scenario_page: ThreadPage) -> None:
    session = ThreadSession(scenario_page)
    session.press("down")
    session.press("down")
    session.press("left")
    assert session.state().collapsed == frozenset({2})
    assert session.host.clicks == []  # type: ignore[attr-defined]


def test_enter_opens_permalink(scenario_page: ThreadPage) -> None:
    session = ThreadSession(scenario_page)
    session.press("end")
    session.press("enter")
    assert session.opened == ["https://news.ycombinator.com/item?id=104"]
    assert session.scroll_requests == [0, 4]


def test_page_down_on_estimated_geometry(scenario_page: ThreadPage) -> None:
    session = ThreadSession(scenario_page, viewport_height=100)
    session.press("pagedown")
    # every row is two lines of 18px; 100 - 60 leaves a 40px jump
    assert session.state().active == 2


def test_natively_folded_row_in_strict_and_merged_modes() -> None:
    html = build_item_html([RowSpec("1", 0), RowSpec("2", 1, folded=True), RowSpec("3", 2)])
    merged = ThreadSession(parse_thread_page(html))
    merged.press("click:1")
    merged.press("right")
    assert merged.state().active == 1
    assert not merged.host.is_natively_folded(1)

    strict = ThreadSession(parse_thread_page(html), honor_native_folds=False)
    strict.press("click:1")
    strict.press("right")
    assert strict.state().active == 2


def test_extend_with_late_rows(scenario_page: ThreadPage) -> None:
    session = ThreadSession(scenario_page)
    session.press("left")
    later = build_item_html(
        [RowSpec(str(100 + i), depth) for i, depth in enumerate([0, 1, 1, 2, 0, 1])]
    )
    fresh = new_comment_rows(scenario_page, later)
    assert fresh.depths == [1]

    session.extend(fresh)

    assert len(session.page.comments) == 6
    assert session.visible_positions() == [0, 4, 5]
    session.press("end")
    assert session.state().active == 5
    session.press("up")
    session.press("left")
    assert session.visible_positions() == [0, 4]
    assert session.host.clicks == [0, 4]  # type: ignore[attr-defined]


def test_render_marks_cursor_and_folds(scenario_page: ThreadPage) -> None:
    session = ThreadSession(scenario_page)
    session.press("down")
    session.press("down")
    session.press("left")
    out = session.render()
    assert "> " + "    " + "▸ [2] carol" in out
    assert "[3]" not in out
    assert "▾ [4] erin" in out


def test_dom_keys_and_typing_targets(scenario_page: ThreadPage) -> None:
    session = ThreadSession(scenario_page)
    form = lxml.html.fromstring('<form><textarea name="text"></textarea></form>')
    textarea = form.xpath("//textarea")[0]

    assert not session.key("ArrowDown", target=textarea)
    assert session.state().active == 0

    assert session.key("ArrowDown", target=scenario_page.rows[0])
    assert session.state().active == 1
    assert not session.key("Tab")


@pytest.fixture
def warnings() -> Iterator[list[str]]:
    messages: list[str] = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(sink_id)


def test_extend_ignores_replies_inserted_mid_thread(
    scenario_page: ThreadPage, warnings: list[str]
) -> None:
    session = ThreadSession(scenario_page)
    later = build_item_html(
        [
            RowSpec("100", 0),
            RowSpec("101", 1),
            RowSpec("105", 2),
            RowSpec("102", 1),
            RowSpec("103", 2),
            RowSpec("104", 0),
        ]
    )

    session.extend(new_comment_rows(scenario_page, later))

    assert session.page.depths == [0, 1, 1, 2, 0]
    assert session.navigator.sequence.is_well_formed()
    assert warnings == []


def test_extend_warns_when_rows_break_the_tree(
    scenario_page: ThreadPage, warnings: list[str]
) -> None:
    session = ThreadSession(scenario_page)
    stray = parse_thread_page(build_item_html([RowSpec("200", 3)]))

    session.extend(stray)

    assert not session.navigator.sequence.is_well_formed()
    assert len(warnings) == 1


def test_root_without_native_toggle_collapses_internally() -> None:
    html = build_item_html(
        [RowSpec("100", 0, toggle=False), RowSpec("101", 1), RowSpec("102", 0)]
    )
    session = ThreadSession(parse_thread_page(html))
    table = session.host
    assert isinstance(table, NativeFoldTable)

    assert session.press("left")

    assert session.state().collapsed == frozenset({0})
    assert session.visible_positions() == [0, 2]
    assert table.clicks == []
    assert not table.is_natively_folded(0)


def test_render_marks_natively_folded_rows_in_merged_mode() -> None:
    html = build_item_html(
        [RowSpec("100", 0, author="alice", folded=True), RowSpec("101", 1), RowSpec("102", 0)]
    )
    merged = ThreadSession(parse_thread_page(html))
    assert "▸ [0] alice" in merged.render()

    strict = ThreadSession(parse_thread_page(html), honor_native_folds=False)
    assert "▾ [0] alice" in strict.render()
