"""Host wiring: key source, bindings decorator and hot reload."""

# pylint: disable=missing-function-docstring,too-many-instance-attributes

import os
import threading
import time
from time import sleep
from typing import Any, Callable, List, Mapping, Optional, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler  # pylint: disable=import-error
from watchdog.observers import Observer  # pylint: disable=import-error

from kiku.bindings import Binding, bind
from kiku.config import Config
from kiku.events import Decoded, KeyPress
from kiku.loader import load_bindings
from kiku.platforms import KeySource, create_key_source
from kiku.recognizer import Recognizer, Sink, create
from kiku.util import _debug, _warn

__all__ = ["App"]


def _same_file(a: Optional[str], b: Optional[str]) -> bool:
    if a is None or b is None:
        return False
    return os.path.abspath(a) == os.path.abspath(b)


class _HotReloader(FileSystemEventHandler):
    def __init__(self, app: "App"):
        self.app = app
        self.last_modified = 0

    def on_modified(self, event: FileSystemEvent):
        if not _same_file(event.src_path, self.app.bindings_file):
            return
        current_time = time.time()
        if current_time - self.last_modified > 1:  # Debounce
            self.last_modified = current_time
            _debug(f"Detected change in {event.src_path}. Reloading bindings...")
            self.reload_bindings(event.src_path)

    def reload_bindings(self, path: str):
        try:
            bindings = load_bindings(path)
            self.app.replace_bindings(path, bindings)
        except Exception as e:  # pylint: disable=broad-exception-caught
            _warn(f"Failed to reload bindings: {e}")
        else:
            print(f"Bindings reloaded successfully ({len(bindings)} from {path}).")


class App:
    """
    Runs a recognizer against the physical keyboard.

    Bindings registered with :meth:`on` before :meth:`start` are handed to the
    recognizer when it is created; later ones are added directly.
    """

    def __init__(self,
                 config: Union[Config, Mapping[str, Any], None] = None,
                 *,
                 sink: Optional[Sink] = None,
                 bindings_file: Optional[str] = None,
                 ):
        self._config = config
        self._sink = sink
        self._pending: List[Binding] = []
        self._running = threading.Event()
        self._lock = threading.Lock()

        self.recognizer: Optional[Recognizer] = None
        self._keyboard: Optional[KeySource] = None

        # Hot-reload
        self._observer = None
        self._reloader = None
        self.bindings_file = bindings_file

    def on(self, trigger: str) -> Callable[[Callable[[], Any]], Binding]:
        def _decorator(func: Callable[[], Any]) -> Binding:
            binding = bind(trigger)(func)
            with self._lock:
                if self.recognizer is None:
                    self._pending.append(binding)
                else:
                    self.recognizer.add(binding)
            return binding

        return _decorator

    def feed(self, press: KeyPress) -> Optional[Decoded]:
        """
        Deliver a key press to the recognizer.

        State changes are serialized; a matched callback runs after the lock is
        released, so it may call :meth:`on` or :meth:`stop` itself.
        """
        with self._lock:
            if self.recognizer is None:
                return None
            decoded, dispatch = self.recognizer.intake(press)
        if dispatch is not None:
            dispatch()
        return decoded

    def _on_key_press(self, press: KeyPress):
        try:
            self.feed(press)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            _warn(f"Binding callback failed: {exc!r}")

    def replace_bindings(self, path: str, bindings: List[Binding]):
        """Swap the bindings that came from ``path`` for ``bindings``."""
        with self._lock:
            if self.recognizer is None:
                self._pending = [
                    b for b in self._pending if not (b.origin and _same_file(b.origin.file, path))
                ]
                self._pending.extend(bindings)
                return
            stale = [
                b.trigger
                for b in self.recognizer.bindings
                if b.origin and _same_file(b.origin.file, path)
            ]
            self.recognizer.remove(stale)
            self.recognizer.add(bindings)

    def start(self):
        """Create the recognizer and start listening for key presses."""
        with self._lock:
            self.recognizer = create(self._config, sink=self._sink, bindings=self._pending)
            self._pending = []
        try:
            self._keyboard = create_key_source(self._on_key_press)
            self._keyboard.start()
        except Exception as exc:
            _warn(f"Keyboard listener failed to start, releasing the recognizer: {exc!r}")
            self._keyboard = None
            with self._lock:
                self._pending = list(self.recognizer.bindings)
                self.recognizer.close()
                self.recognizer = None
            raise
        self._running.set()

    def __call__(self):
        self.start()

        # Hot-reload
        self._setup_hot_reload()

        try:
            while self._running.is_set():
                sleep(0.1)
        except KeyboardInterrupt:
            self.stop()

    def stop(self):
        self._running.clear()
        if self._keyboard:
            self._keyboard.stop()
            self._keyboard = None
        if self._observer:
            self._observer.stop()
            self._observer.join()
            self._observer = None
        with self._lock:
            if self.recognizer is not None:
                self.recognizer.close()
                self.recognizer = None

    def _setup_hot_reload(self):
        if self.bindings_file is None:
            self.bindings_file = self._guess_bindings_file()
        if self.bindings_file is None:
            _debug("No bindings file to watch; hot reload disabled")
            return

        self._reloader = _HotReloader(self)
        self._observer = Observer()
        self._observer.schedule(
            self._reloader, path=os.path.dirname(os.path.abspath(self.bindings_file)),
            recursive=False,
        )
        self._observer.start()

    def _guess_bindings_file(self) -> Optional[str]:
        for binding in self.recognizer.bindings if self.recognizer else []:
            if binding.origin is not None and os.path.isfile(binding.origin.file):
                return binding.origin.file
        return None
