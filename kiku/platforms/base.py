"""Platform-specific key source abstraction."""

# pylint: disable=missing-function-docstring

import abc
from typing import Callable

from kiku.events import KeyPress

KeyPressHandler = Callable[[KeyPress], None]


class KeySource(abc.ABC):
    """Interface implemented by each platform backend."""

    def __init__(self, on_press: KeyPressHandler):
        self._on_press = on_press

    @abc.abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def stop(self) -> None:
        raise NotImplementedError
