"""Tests for collapse state and the visibility pass."""

import itertools

from threadnav.core.state.collapse import CollapseState
from threadnav.core.state.visibility import VisibilityEngine, compute_visibility
from threadnav.core.tree.index import ancestors, subtree_end

DEPTHS = [0, 1, 2, 2, 1, 2, 0, 1]


def _expected(depths: list[int], collapsed: set[int]) -> list[bool]:
    return [not any(a in collapsed for a in ancestors(depths, i)) for i in range(len(depths))]


def test_nothing_collapsed_everything_visible() -> None:
    assert compute_visibility([0, 1, 1, 2, 0], set()) == [True] * 5


def test_collapsing_root_hides_its_subtree_only() -> None:
    assert compute_visibility([0, 1, 1, 2, 0], {0}) == [True, False, False, False, True]


def test_collapsed_row_itself_stays_visible() -> None:
    assert compute_visibility([0, 1, 1, 2, 0], {2}) == [True, True, True, False, True]


def test_visibility_matches_ancestor_chain_for_every_collapse_set() -> None:
    positions = range(len(DEPTHS))
    for size in range(4):
        for combo in itertools.combinations(positions, size):
            collapsed = set(combo)
            assert compute_visibility(DEPTHS, collapsed) == _expected(DEPTHS, collapsed), combo


def test_collapse_subtree_then_expand_subtree_restores_visibility() -> None:
    """Holds whenever nothing inside the span was collapsed beforehand."""
    for root in range(len(DEPTHS)):
        end = subtree_end(DEPTHS, root)
        outside = [p for p in range(len(DEPTHS)) if not root <= p < end]
        for prior in [set(), *({p} for p in outside)]:
            state = CollapseState(prior)
            before = compute_visibility(DEPTHS, state)
            state.collapse_subtree(DEPTHS, root)
            state.expand_subtree(DEPTHS, root)
            assert compute_visibility(DEPTHS, state) == before, (root, prior)


def test_collapse_subtree_keeps_descendants_collapsed_after_root_expand() -> None:
    state = CollapseState()
    state.collapse_subtree(DEPTHS, 0)
    assert list(state) == [0, 1, 2, 3, 4, 5]
    state.expand(0)
    visible = compute_visibility(DEPTHS, state)
    assert visible[:6] == [True, True, False, False, True, False]


def test_expand_subtree_clears_whole_span() -> None:
    state = CollapseState({1, 2, 5, 6})
    state.expand_subtree(DEPTHS, 0)
    assert list(state) == [6]


def test_malformed_depth_jump_does_not_crash() -> None:
    assert compute_visibility([0, 2, 1], {0}) == [True, False, False]


def test_engine_recomputes_after_growth() -> None:
    depths = [0, 1]
    state = CollapseState({0})
    engine = VisibilityEngine(depths, state)
    assert engine.visible_positions() == [0]
    depths.extend([2, 0])
    assert engine.is_visible(3)
    assert not engine.is_visible(2)
    assert engine.last_visible() == 3


def test_engine_out_of_range_is_not_visible() -> None:
    engine = VisibilityEngine([0], CollapseState())
    assert not engine.is_visible(5)
    assert not engine.is_visible(-1)
    assert not engine.is_visible(None)


def test_engine_on_empty_sequence() -> None:
    engine = VisibilityEngine([], CollapseState())
    assert engine.first_visible() is None
    assert engine.last_visible() is None
