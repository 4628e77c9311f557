# pylint: disable=duplicate-code
"""Debug output and function metadata helpers."""

import inspect
import os
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional

__all__ = ["FunctionDetails", "get_function_details", "describe_callable"]


def _debug(msg):
    if os.environ.get("DEBUG", False):
        print(msg)


def _warn(msg):
    print(msg, file=sys.stderr)


@dataclass(frozen=True)
class FunctionDetails:
    """Captured metadata about a callable."""
    name: str
    line: int
    file: str

    def __str__(self):
        return f"{self.name} ({self.file}:{self.line})"


def get_function_details(obj: Callable[..., Any]) -> FunctionDetails:
    """Extract function name, line number, and file path."""
    if inspect.ismethod(obj):
        obj = obj.__func__
    if inspect.isfunction(obj):
        return FunctionDetails(
            name=obj.__name__,
            line=obj.__code__.co_firstlineno,
            file=obj.__code__.co_filename,
        )

    raise ValueError(f"Unsupported object type {type(obj)} - expected function or method")


def describe_callable(obj: Callable[..., Any]) -> Optional[FunctionDetails]:
    """Like get_function_details, but None for callables without source."""
    try:
        return get_function_details(obj)
    except ValueError:
        return None
