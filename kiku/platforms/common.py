"""Shared pynput-backed key source implementation."""

# pylint: disable=missing-function-docstring,import-error

import os
import subprocess
import sys
from typing import Optional, Union

import pynput
import pynput.keyboard

from kiku.key_utils import to_key_press
from kiku.platforms.base import KeyPressHandler, KeySource
from kiku.util import _debug, _warn

SKIP_HINT_ENV = "KIKU_SKIP_PERMISSION_PROMPT"
_MAC_INPUT_MONITORING_URL = "x-apple.systempreferences:com.apple.preference.security?Privacy_Keyboard"


def _platform() -> str:
    return sys.platform


def _running_interactively() -> bool:
    return sys.stdout.isatty() or sys.stderr.isatty()


def start_failure_hint(platform: str) -> Optional[str]:
    """What to tell the user when no key presses can be observed on ``platform``."""
    if platform == "darwin":
        return (
            "Grant Input Monitoring to this executable in "
            "System Settings > Privacy & Security > Input Monitoring."
        )
    if platform.startswith("linux"):
        return (
            "Make sure an X display is reachable (DISPLAY is set) "
            "or that this user may read from /dev/input."
        )
    return None


class PynputKeySource(KeySource):
    """
    Key source backed by a pynput listener.

    A listener that cannot start is reported once per process with a hint on
    the permission it most likely lacks, then the error is re-raised.
    """

    _hint_shown = False

    def __init__(self, on_press: KeyPressHandler):
        super().__init__(on_press)
        self._listener = None

    def start(self):
        try:
            self._listener = pynput.keyboard.Listener(on_press=self._handle_press)
            self._listener.start()
        except Exception as exc:
            self._listener = None
            self._report_start_failure(exc)
            raise

    def stop(self):
        if self._listener:
            self._listener.stop()
            self._listener = None

    def _handle_press(self, key: Union[pynput.keyboard.Key, pynput.keyboard.KeyCode]):
        press = to_key_press(key)
        if press is None:
            _debug(f"Unmapped key {key!r}")
            return
        self._on_press(press)

    def _report_start_failure(self, exc: Exception) -> bool:
        """Print the start failure hint. Returns False when it was suppressed."""
        if PynputKeySource._hint_shown or os.environ.get(SKIP_HINT_ENV):
            return False
        PynputKeySource._hint_shown = True

        platform = _platform()
        message = f"kiku cannot observe key presses, typed commands will not run ({exc})."
        hint = start_failure_hint(platform)
        if hint:
            message = f"{message} {hint}"

        if platform == "darwin" and _running_interactively():
            _warn(f"{message} Opening Input Monitoring settings...")
            subprocess.Popen(  # pylint: disable=consider-using-with
                ["open", _MAC_INPUT_MONITORING_URL],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        else:
            _warn(message)
        return True
