from kiku.platforms.base import KeyPressHandler, KeySource
from kiku.platforms.common import PynputKeySource


def create_key_source(on_press: KeyPressHandler) -> KeySource:
    return PynputKeySource(on_press)


__all__ = ["KeySource", "PynputKeySource", "create_key_source"]
