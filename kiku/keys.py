"""Key codes for the keys the recognizer cares about."""

__all__ = [
    "BACKSPACE",
    "TAB",
    "ENTER",
    "SHIFT",
    "CTRL",
    "ALT",
    "CAPS_LOCK",
    "ESCAPE",
    "SPACE",
    "META",
    "MODIFIER_CODES",
    "KEY_NAMES",
]

BACKSPACE = 8
TAB = 9
ENTER = 13
SHIFT = 16
CTRL = 17
ALT = 18
CAPS_LOCK = 20
ESCAPE = 27
SPACE = 32
META = 91

MODIFIER_CODES = frozenset({SHIFT, CTRL, ALT, CAPS_LOCK, META})

# Key identity strings, as reported alongside the code.
KEY_NAMES = {
    BACKSPACE: "Backspace",
    TAB: "Tab",
    ENTER: "Enter",
    SHIFT: "Shift",
    CTRL: "Control",
    ALT: "Alt",
    CAPS_LOCK: "CapsLock",
    ESCAPE: "Escape",
    SPACE: " ",
    META: "Meta",
}
