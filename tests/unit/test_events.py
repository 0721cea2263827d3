"""Tests for key name and key token parsing."""

import pytest

from threadnav.core.navigation.events import (
    InputEvent,
    Key,
    event_from_key_name,
    parse_key_spec,
    pointer_event,
)


@pytest.mark.parametrize(
    ("name", "key"),
    [
        ("ArrowUp", Key.UP),
        ("ArrowDown", Key.DOWN),
        (" ", Key.SPACE),
        ("Spacebar", Key.SPACE),
        ("Enter", Key.ENTER),
        ("PageDown", Key.PAGE_DOWN),
        ("Home", Key.HOME),
    ],
)
def test_dom_key_names(name: str, key: Key) -> None:
    event = event_from_key_name(name)
    assert event is not None
    assert event.key is key


def test_unhandled_dom_key_returns_none() -> None:
    assert event_from_key_name("a") is None
    assert event_from_key_name("Tab") is None


def test_key_spec_with_shift() -> None:
    assert parse_key_spec("shift+left") == InputEvent(Key.LEFT, shift=True)
    assert parse_key_spec(" Down ") == InputEvent(Key.DOWN)


def test_key_spec_pointer() -> None:
    assert parse_key_spec("click:3") == pointer_event(3)
    assert parse_key_spec("click:3").position == 3


@pytest.mark.parametrize("spec", ["jump", "click:x", "click:-1", "shift+"])
def test_bad_key_spec_raises(spec: str) -> None:
    with pytest.raises(ValueError):
        parse_key_spec(spec)
