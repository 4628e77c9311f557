"""Utilities for converting pynput keys into key presses."""

from typing import Dict, Optional, Union

import pynput  # pylint: disable=import-error
import pynput.keyboard  # pylint: disable=import-error

from kiku import keys
from kiku.events import KeyPress

_KeyImpl = Union[pynput.keyboard.Key, pynput.keyboard.KeyCode]

_SPECIAL_KEYS: Dict[pynput.keyboard.Key, int] = {
    pynput.keyboard.Key.backspace: keys.BACKSPACE,
    pynput.keyboard.Key.tab: keys.TAB,
    pynput.keyboard.Key.enter: keys.ENTER,
    pynput.keyboard.Key.shift: keys.SHIFT,
    pynput.keyboard.Key.shift_l: keys.SHIFT,
    pynput.keyboard.Key.shift_r: keys.SHIFT,
    pynput.keyboard.Key.ctrl: keys.CTRL,
    pynput.keyboard.Key.ctrl_l: keys.CTRL,
    pynput.keyboard.Key.ctrl_r: keys.CTRL,
    pynput.keyboard.Key.alt: keys.ALT,
    pynput.keyboard.Key.alt_l: keys.ALT,
    pynput.keyboard.Key.alt_r: keys.ALT,
    pynput.keyboard.Key.caps_lock: keys.CAPS_LOCK,
    pynput.keyboard.Key.esc: keys.ESCAPE,
    pynput.keyboard.Key.space: keys.SPACE,
    pynput.keyboard.Key.cmd: keys.META,
    pynput.keyboard.Key.cmd_l: keys.META,
    pynput.keyboard.Key.cmd_r: keys.META,
}


def key_code_for_char(char: str) -> int:
    """Key code a keyboard reports for a character key; letters use their upper case."""
    if len(char) != 1:
        raise ValueError(f"Only single character strings are supported, got {char}")
    if char.isascii() and char.isalpha():
        return ord(char.upper())
    return ord(char)


def to_key_press(k: _KeyImpl) -> Optional[KeyPress]:
    """Return a KeyPress for a pynput key, or None for keys we do not track."""
    if isinstance(k, pynput.keyboard.Key):
        code = _SPECIAL_KEYS.get(k)
        if code is None:
            return None
        return KeyPress(key_code=code, key=keys.KEY_NAMES[code])

    if isinstance(k, pynput.keyboard.KeyCode):
        if k.char is not None and len(k.char) == 1:
            return KeyPress(key_code=key_code_for_char(k.char), key=k.char)
        if k.vk is not None and 0 <= k.vk:
            return KeyPress(key_code=k.vk)
        return None

    raise ValueError(f"Unsupported key type {type(k)}")
