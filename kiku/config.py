"""Recognizer configuration."""

# pylint: disable=missing-function-docstring

from dataclasses import dataclass, field, fields
from collections.abc import Iterable, Mapping
from typing import Any, FrozenSet, List, Optional

from kiku import keys

__all__ = ["Config", "ConfigError"]


class ConfigError(ValueError):
    """Raised when a configuration field has the wrong type or value."""


def _check_code(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ConfigError(f"{name} cannot be negative, got {value}")


@dataclass(frozen=True)
class Config:
    """
    Immutable settings for a recognizer.

    Every field has a default, so ``Config()`` is a working configuration.
    Values are validated once here; the recognizer never re-checks them.
    """

    activation_key_code: int = keys.ENTER
    dismiss_key_code: int = keys.ESCAPE
    dismiss_key: Optional[str] = "Escape"
    case_sensitive: bool = True
    blacklisted_key_codes: FrozenSet[int] = field(
        default_factory=lambda: frozenset({keys.SHIFT})
    )

    def __post_init__(self):
        _check_code("activation_key_code", self.activation_key_code)
        _check_code("dismiss_key_code", self.dismiss_key_code)
        if self.activation_key_code == self.dismiss_key_code:
            raise ConfigError("activation_key_code and dismiss_key_code must differ")

        if self.dismiss_key is not None and (
            not isinstance(self.dismiss_key, str) or not self.dismiss_key
        ):
            raise ConfigError(f"dismiss_key must be a non-empty string, got {self.dismiss_key!r}")

        if not isinstance(self.case_sensitive, bool):
            raise ConfigError(
                f"case_sensitive must be a bool, got {type(self.case_sensitive).__name__}"
            )

        blacklist = self.blacklisted_key_codes
        if isinstance(blacklist, (str, bytes)) or not isinstance(blacklist, Iterable):
            raise ConfigError("blacklisted_key_codes must be an iterable of ints")
        blacklist = frozenset(blacklist)
        for code in blacklist:
            _check_code("blacklisted_key_codes entry", code)
        if self.activation_key_code in blacklist:
            raise ConfigError("activation_key_code cannot be blacklisted")
        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "blacklisted_key_codes", blacklist)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "Config":
        """Build a config from a plain mapping, filling in defaults."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"Expected a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration fields: {', '.join(unknown)}")
        return cls(**data)

    def is_blacklisted(self, key_code: int) -> bool:
        return key_code in self.blacklisted_key_codes

    def describe(self) -> List[str]:
        """Return one ``name: value`` line per setting."""
        lines = []
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, frozenset):
                value = sorted(value)
            lines.append(f"{f.name}: {value}")
        return lines
