"""Typed command recognizer: activation, buffering and evaluation."""

# pylint: disable=missing-function-docstring

from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from kiku.bindings import BindingTable
from kiku.config import Config, ConfigError
from kiku.decoder import decode
from kiku.events import Decoded, KeyPress, Mode, Notification, Signal
from kiku.util import _debug, _warn

__all__ = [
    "AlreadyInitializedError",
    "Mode",
    "Recognizer",
    "RecognizerState",
    "StateSnapshot",
    "create",
    "reset_instance_guard",
]

Sink = Callable[[Notification], Any]
Dispatch = Callable[[], Optional[bool]]


class AlreadyInitializedError(RuntimeError):
    """Raised when a recognizer is created while another one is still open."""


class _InstanceGuard:
    """Process-wide flag allowing a single open recognizer."""

    def __init__(self):
        self._owner: Optional["Recognizer"] = None

    @property
    def held(self) -> bool:
        return self._owner is not None

    def acquire(self, owner: "Recognizer") -> None:
        if self._owner is not None:
            raise AlreadyInitializedError("kiku has already been initialized")
        self._owner = owner

    def release(self, owner: "Recognizer") -> None:
        if self._owner is owner:
            self._owner = None

    def reset(self) -> None:
        self._owner = None


_guard = _InstanceGuard()


def reset_instance_guard() -> None:
    """Forget the open recognizer, if any. Meant for tests."""
    _guard.reset()


@dataclass(frozen=True)
class StateSnapshot:
    mode: Mode
    buffer: str

    @property
    def active(self) -> bool:
        return self.mode is Mode.ACTIVE


class RecognizerState:
    """Mode and input buffer. The buffer is only ever non-empty while ACTIVE."""

    def __init__(self):
        self.mode = Mode.INACTIVE
        self._chars: List[str] = []

    @property
    def buffer(self) -> str:
        return "".join(self._chars)

    def activate(self) -> None:
        self.mode = Mode.ACTIVE
        self._chars.clear()

    def append(self, char: str) -> None:
        self._chars.append(char)

    def reset(self) -> str:
        """Return to INACTIVE and hand back whatever was buffered."""
        captured = self.buffer
        self._chars.clear()
        self.mode = Mode.INACTIVE
        return captured

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(mode=self.mode, buffer=self.buffer)


class Recognizer:
    """
    Watches key presses for the activation key, buffers what is typed after it
    and, on the evaluation key, runs the callback bound to the buffered string.

    Obtain one through :func:`create`, which enforces the single instance rule.
    """

    def __init__(self, config: Optional[Config] = None, sink: Optional[Sink] = None):
        self._config = config if config is not None else Config()
        self._sink = sink
        self._state = RecognizerState()
        self._table = BindingTable()
        self._closed = False

    @property
    def config(self) -> Config:
        return self._config

    @property
    def bindings(self) -> BindingTable:
        return self._table

    @property
    def closed(self) -> bool:
        return self._closed

    # Intake -------------------------------------------------------------------
    def feed(self, press: KeyPress) -> Optional[Decoded]:
        """
        Process one key press. Returns the signal it decoded to, or None when the
        press was ignored. Exceptions raised by a bound callback propagate; the
        recognizer is already back to INACTIVE when they do.
        """
        decoded, dispatch = self.intake(press)
        if dispatch is not None:
            dispatch()
        return decoded

    def intake(self, press: KeyPress) -> Tuple[Optional[Decoded], Optional[Dispatch]]:
        """
        Apply a key press to the state without running any callback.

        When the press completes an evaluation the recognizer is already back to
        INACTIVE and the matching step is returned for the caller to run, so a
        host can release its own locks before user code executes.
        """
        self._check_open()
        decoded = decode(press, self._state.mode, self._config)
        if decoded is None:
            _debug(f"Ignoring {press} while {self._state.mode.value}")
            return None, None

        signal = decoded.signal
        if signal is Signal.ACTIVATE:
            self.activate()
        elif signal is Signal.CHARACTER:
            self._state.append(decoded.char)
        elif signal is Signal.EVALUATE:
            return decoded, partial(self._dispatch, self._begin_evaluation())
        elif signal is Signal.DISMISS:
            self.deactivate()
        return decoded, None

    # Transitions --------------------------------------------------------------
    def activate(self) -> bool:
        self._check_open()
        if self._state.mode is Mode.ACTIVE:
            return False
        self._state.activate()
        self._emit(Notification.ACTIVATED)
        return True

    def deactivate(self) -> bool:
        """Dismiss the current input without evaluating it."""
        self._check_open()
        if self._state.mode is Mode.INACTIVE:
            return False
        self._state.reset()
        self._emit(Notification.DISMISSED)
        return True

    def evaluate(self) -> Optional[bool]:
        """
        Leave ACTIVE and match the buffered input.

        Returns True when a binding ran, False when nothing matched and None when
        there was nothing to evaluate (inactive, or an empty buffer).
        """
        self._check_open()
        if self._state.mode is Mode.INACTIVE:
            return None
        return self._dispatch(self._begin_evaluation())

    def _begin_evaluation(self) -> str:
        candidate = self._state.reset()
        self._emit(Notification.EVALUATED)
        return candidate

    def _dispatch(self, candidate: str) -> Optional[bool]:
        if not candidate:
            return None

        binding = self._table.lookup(candidate, self._config.case_sensitive)
        if binding is None or not callable(binding.callback):
            _debug(f"No binding for {candidate!r}")
            self._emit(Notification.FAILURE)
            return False

        _debug(f"Matched {binding}")
        binding.callback()
        self._emit(Notification.SUCCESS)
        return True

    def _emit(self, notification: Notification) -> None:
        _debug(f"Notification: {notification.value}")
        if self._sink is not None:
            self._sink(notification)

    # Bindings -----------------------------------------------------------------
    def add(self, bindings: Any) -> bool:
        return self._table.add(bindings)

    def remove(self, triggers: Any) -> bool:
        return self._table.remove(triggers)

    def get_function_keys(self) -> List[str]:
        return self._table.keys()

    # Introspection ------------------------------------------------------------
    def get_state(self) -> StateSnapshot:
        return self._state.snapshot()

    def describe_settings(self) -> List[str]:
        return self._config.describe()

    # Lifecycle ----------------------------------------------------------------
    def close(self) -> None:
        """Release the instance guard so a new recognizer can be created."""
        if self._closed:
            return
        self._closed = True
        self._state.reset()
        _guard.release(self)

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("Recognizer is closed")

    def __enter__(self) -> "Recognizer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        state = self._state.snapshot()
        return (
            f"Recognizer(mode={state.mode.value}, buffer={state.buffer!r}, "
            f"bindings={len(self._table)})"
        )


def create(
    config: Union[Config, Mapping[str, Any], None] = None,
    *,
    sink: Optional[Sink] = None,
    bindings: Optional[Any] = None,
) -> Recognizer:
    """
    Create the process-wide recognizer.

    ``config`` may be a :class:`Config`, a mapping of its fields or None for the
    defaults. ``sink`` receives every :class:`Notification`. ``bindings`` are
    registered as if passed to :meth:`Recognizer.add`.

    Raises AlreadyInitializedError while a previous recognizer is still open, and
    ConfigError when the configuration is invalid.
    """
    try:
        if not isinstance(config, Config):
            config = Config.from_mapping(config)
        if sink is not None and not callable(sink):
            raise ConfigError(f"sink must be callable, got {type(sink)}")
    except ConfigError as exc:
        _warn(f"kiku could not be initialized: {exc}")
        raise

    recognizer = Recognizer(config, sink=sink)
    try:
        _guard.acquire(recognizer)
    except AlreadyInitializedError:
        _warn("kiku has already been initialized; close the existing recognizer first")
        raise

    if bindings is not None:
        recognizer.add(bindings)
    return recognizer
