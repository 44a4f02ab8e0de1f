"""
Named keys and key chords for `ElementHandle.enter()` / `press()`.

Key names follow the DOM `KeyboardEvent.key` values; a chord is rendered as
"Modifier+Key" (e.g. "Control+a"), the notation drivers accept for key presses.
"""
# @file purpose: Key names, chords and the platform modifier key.

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Union


class Key(str, Enum):
    ENTER = "Enter"
    RETURN = "Enter"
    TAB = "Tab"
    ESCAPE = "Escape"
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    SPACE = " "
    HOME = "Home"
    END = "End"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ARROW_LEFT = "ArrowLeft"
    ARROW_RIGHT = "ArrowRight"
    SHIFT = "Shift"
    CONTROL = "Control"
    ALT = "Alt"
    META = "Meta"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Chord:
    """Keys pressed together; the last one is the key, the others are held modifiers."""

    keys: tuple[Union[Key, str], ...]

    def __str__(self) -> str:
        return "+".join(str(k) for k in self.keys)


def chord(*keys: Union[Key, str]) -> Chord:
    if not keys:
        raise ValueError("chord() needs at least one key")
    return Chord(tuple(keys))


def modifier_key(platform: str | None = None) -> Key:
    """
    Modifier of the platform's standard accelerators (select-all, open-in-new-tab).

    macOS -> META, Linux/Windows -> CONTROL.
    """
    platform = sys.platform if platform is None else platform
    return Key.META if platform.startswith("darwin") else Key.CONTROL


KeyInput = Union[str, Key, Chord]
