"""Turn raw key presses into recognizer signals."""

import re
from typing import Optional

from kiku.config import Config
from kiku.events import Decoded, KeyPress, Mode, Signal

__all__ = ["decode", "char_for"]

_PRINTABLE = re.compile(r"[A-Za-z0-9]")


def char_for(press: KeyPress) -> str:
    """
    Return the character a press contributes to the buffer.

    A one-character alphanumeric key identity wins; anything else falls back
    to reading the key code as a code point.
    """
    if press.key is not None and len(press.key) == 1 and _PRINTABLE.fullmatch(press.key):
        return press.key
    return chr(press.key_code)


def decode(press: KeyPress, mode: Mode, config: Config) -> Optional[Decoded]:
    """Map a key press to a signal given the current mode, or None for a no-op."""
    if config.is_blacklisted(press.key_code):
        return None

    if mode is Mode.INACTIVE:
        if press.key_code == config.activation_key_code:
            return Decoded(Signal.ACTIVATE)
        return None

    if press.key_code == config.activation_key_code:
        return Decoded(Signal.EVALUATE)
    if press.key_code == config.dismiss_key_code:
        return Decoded(Signal.DISMISS)
    if config.dismiss_key is not None and press.key == config.dismiss_key:
        return Decoded(Signal.DISMISS)
    return Decoded.character(char_for(press))
