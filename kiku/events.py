"""Key press descriptors and the signals derived from them."""

# pylint: disable=missing-function-docstring

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Mode(Enum):
    """Recognizer modes."""

    INACTIVE = "INACTIVE"
    ACTIVE = "ACTIVE"


class Signal(Enum):
    """What a key press means to the recognizer."""

    ACTIVATE = "ACTIVATE"
    EVALUATE = "EVALUATE"
    DISMISS = "DISMISS"
    CHARACTER = "CHARACTER"


class Notification(Enum):
    """Events published to the host sink."""

    ACTIVATED = "ACTIVATED"
    EVALUATED = "EVALUATED"
    DISMISSED = "DISMISSED"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


@dataclass(frozen=True)
class KeyPress:
    """A single physical key press as delivered by the host."""

    key_code: int
    key: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.key_code, bool) or not isinstance(self.key_code, int):
            raise ValueError(f"key_code must be an int, got {type(self.key_code)}")
        if not 0 <= self.key_code <= sys.maxunicode:
            raise ValueError(f"key_code out of range, got {self.key_code}")
        if self.key is not None and (not isinstance(self.key, str) or not self.key):
            raise ValueError(f"key must be a non-empty string, got {self.key!r}")

    def __str__(self):
        return self.key if self.key is not None else str(self.key_code)


@dataclass(frozen=True)
class Decoded:
    signal: Signal
    char: Optional[str] = None

    @classmethod
    def character(cls, char: str) -> "Decoded":
        return cls(Signal.CHARACTER, char)

    def __repr__(self):
        if self.signal is Signal.CHARACTER:
            return f"Decoded({self.signal.value}, {self.char!r})"
        return f"Decoded({self.signal.value})"
