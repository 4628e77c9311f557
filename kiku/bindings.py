"""Trigger string bindings and the table that holds them."""

# pylint: disable=missing-function-docstring

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional

from kiku.util import FunctionDetails, _debug, describe_callable

__all__ = ["Binding", "BindingTable", "bind"]


@dataclass(frozen=True)
class Binding:
    """A trigger string and the zero-argument callback it runs."""

    trigger: str
    callback: Callable[[], Any]
    origin: Optional[FunctionDetails] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.trigger, str) or not self.trigger:
            raise ValueError(f"trigger must be a non-empty string, got {self.trigger!r}")
        if not callable(self.callback):
            raise ValueError(f"callback must be callable, got {type(self.callback)}")

    def __str__(self) -> str:
        if self.origin is None:
            return f"Binding({self.trigger!r})"
        return f"Binding({self.trigger!r}, func={self.origin})"

    def matches(self, candidate: str, case_sensitive: bool = True) -> bool:
        if case_sensitive:
            return self.trigger == candidate
        return self.trigger.lower() == candidate.lower()

    @classmethod
    def coerce(cls, candidate: Any) -> Optional["Binding"]:
        """
        Build a Binding from a Binding, a ``{"trigger", "callback"}`` mapping or a
        ``(trigger, callback)`` pair. Returns None when the candidate is invalid.
        """
        if isinstance(candidate, Binding):
            return candidate

        if isinstance(candidate, Mapping):
            trigger, callback = candidate.get("trigger"), candidate.get("callback")
        elif _is_pair(candidate):
            trigger, callback = candidate
        else:
            return None

        try:
            origin = describe_callable(callback) if callable(callback) else None
            return cls(trigger, callback, origin=origin)
        except ValueError as exc:
            _debug(f"Discarding binding candidate: {exc}")
            return None


def _is_pair(candidate: Any) -> bool:
    return isinstance(candidate, tuple) and len(candidate) == 2 and isinstance(candidate[0], str)


def _is_single(candidate: Any) -> bool:
    if isinstance(candidate, (Binding, Mapping, str, bytes)) or _is_pair(candidate):
        return True
    return not isinstance(candidate, Iterable)


def bind(trigger: str) -> Callable[[Callable[[], Any]], Binding]:
    """Decorator turning a function into a Binding for ``trigger``."""

    def _decorator(func: Callable[[], Any]) -> Binding:
        if not callable(func):
            raise ValueError("bind decorator must be used with a callable")
        return Binding(trigger, func, origin=describe_callable(func))

    return _decorator


class BindingTable:
    """
    Ordered collection of bindings.

    Duplicate triggers are accepted on insertion; lookups resolve to the
    first binding registered for a trigger.
    """

    def __init__(self):
        self._bindings: List[Binding] = []

    def add(self, candidates: Any) -> bool:
        """Append every valid candidate. Returns True if anything was added."""
        if _is_single(candidates):
            candidates = [candidates]

        added = 0
        for candidate in candidates:
            binding = Binding.coerce(candidate)
            if binding is None:
                continue
            self._bindings.append(binding)
            added += 1
            _debug(f"Registered {binding}")
        return added > 0

    def remove(self, triggers: Any) -> bool:
        """Drop every binding whose trigger is one of ``triggers``."""
        if isinstance(triggers, str):
            triggers = [triggers]
        elif not isinstance(triggers, Iterable):
            return False

        targets = {t for t in triggers if isinstance(t, str)}
        if not targets:
            return False

        size = len(self._bindings)
        self._bindings = [b for b in self._bindings if b.trigger not in targets]
        return len(self._bindings) != size

    def keys(self) -> List[str]:
        return [b.trigger for b in self._bindings]

    def lookup(self, candidate: str, case_sensitive: bool = True) -> Optional[Binding]:
        for binding in self._bindings:
            if binding.matches(candidate, case_sensitive):
                return binding
        return None

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[Binding]:
        return iter(list(self._bindings))

    def __contains__(self, trigger: object) -> bool:
        return any(b.trigger == trigger for b in self._bindings)
