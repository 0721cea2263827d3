"""Input events understood by the navigator."""

from dataclasses import dataclass
from enum import StrEnum


class Key(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SPACE = "space"
    ENTER = "enter"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"
    POINTER = "pointer"


@dataclass(frozen=True)
class InputEvent:
    """One discrete keyboard or pointer signal.

    ``position`` is set only for pointer activation. Events raised while a text
    field has focus carry ``from_text_input`` and are ignored by the navigator.
    """

    key: Key
    shift: bool = False
    position: int | None = None
    from_text_input: bool = False


# DOM KeyboardEvent.key values (lowercased) and a few spellings accepted on the command line.
_KEY_NAMES: dict[str, Key] = {
    "arrowup": Key.UP,
    "up": Key.UP,
    "arrowdown": Key.DOWN,
    "down": Key.DOWN,
    "arrowleft": Key.LEFT,
    "left": Key.LEFT,
    "arrowright": Key.RIGHT,
    "right": Key.RIGHT,
    " ": Key.SPACE,
    "space": Key.SPACE,
    "spacebar": Key.SPACE,
    "enter": Key.ENTER,
    "home": Key.HOME,
    "end": Key.END,
    "pageup": Key.PAGE_UP,
    "pgup": Key.PAGE_UP,
    "pagedown": Key.PAGE_DOWN,
    "pgdn": Key.PAGE_DOWN,
}


def event_from_key_name(
    name: str, *, shift: bool = False, from_text_input: bool = False
) -> InputEvent | None:
    """Translate a DOM key name into an event, or None for keys we do not handle."""
    key = _KEY_NAMES.get(name if name == " " else name.strip().lower())
    if key is None:
        return None
    return InputEvent(key=key, shift=shift, from_text_input=from_text_input)


def pointer_event(position: int) -> InputEvent:
    return InputEvent(key=Key.POINTER, position=position)


def parse_key_spec(spec: str) -> InputEvent:
    """Parse a command-line key token.

    Accepted forms: ``down``, ``shift+left``, ``click:3``.

    Raises:
        ValueError: If the token names no known key.
    """
    token = spec.strip().lower()
    if token.startswith("click:"):
        raw = token.removeprefix("click:")
        if not raw.isdigit():
            msg = f"Pointer position must be a non-negative integer: {spec!r}"
            raise ValueError(msg)
        return pointer_event(int(raw))

    shift = False
    if token.startswith("shift+"):
        shift = True
        token = token.removeprefix("shift+")

    event = event_from_key_name(token, shift=shift)
    if event is None:
        msg = f"Unknown key: {spec!r}"
        raise ValueError(msg)
    return event
