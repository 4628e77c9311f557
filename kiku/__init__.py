"""Run callbacks when a typed command is confirmed.

Press the activation key, type a trigger string, press it again::

    from kiku import KeyPress, create

    recognizer = create({"case_sensitive": False})
    recognizer.add({"trigger": "save", "callback": save})
    for press in presses:
        recognizer.feed(press)

The pynput-backed host lives in :mod:`kiku.app` and is imported separately.
"""

from kiku.bindings import Binding, BindingTable, bind
from kiku.config import Config, ConfigError
from kiku.events import KeyPress, Mode, Notification, Signal
from kiku.recognizer import (
    AlreadyInitializedError,
    Recognizer,
    StateSnapshot,
    create,
    reset_instance_guard,
)

__all__ = [
    "AlreadyInitializedError",
    "Binding",
    "BindingTable",
    "Config",
    "ConfigError",
    "KeyPress",
    "Mode",
    "Notification",
    "Recognizer",
    "Signal",
    "StateSnapshot",
    "bind",
    "create",
    "reset_instance_guard",
]
