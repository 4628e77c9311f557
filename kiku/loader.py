"""Loading bindings from Python files and validating them."""

import argparse
import importlib.util
import inspect
import sys
from typing import List

from kiku.bindings import Binding

__all__ = ["load_bindings", "check_bindings", "duplicate_triggers"]

_MODULE_NAME = "_kiku_bindings"


def load_bindings(file_path: str) -> List[Binding]:
    """
    Execute ``file_path`` as a throwaway module and collect its module-level
    Binding objects, in definition order. A file with a syntax error yields no
    bindings.
    """
    try:
        spec = importlib.util.spec_from_file_location(_MODULE_NAME, file_path)
        if spec is None or spec.loader is None:
            raise ValueError(f"Cannot load bindings from {file_path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[_MODULE_NAME] = module
        spec.loader.exec_module(module)

        found: List[Binding] = []
        for _, obj in inspect.getmembers(module):
            if isinstance(obj, Binding) and not any(obj is b for b in found):
                found.append(obj)
        # getmembers sorts by name; keep the order the file defines them in.
        found.sort(key=lambda b: b.origin.line if b.origin else 0)
        return found
    except SyntaxError:
        return []
    finally:
        # Clean up the temporary module from sys.modules
        if _MODULE_NAME in sys.modules:
            del sys.modules[_MODULE_NAME]


def check_bindings(file_path: str) -> List[Binding]:
    """
    Load and validate bindings defined in the given file.

    Returns the bindings or raises ValueError when the file defines none.
    """
    bindings = load_bindings(file_path)
    if not bindings:
        raise ValueError(f"No bindings found in {file_path}")
    return bindings


def duplicate_triggers(bindings: List[Binding], case_sensitive: bool = True) -> List[Binding]:
    """Bindings that can never run because an earlier binding claims the same trigger."""
    seen = set()
    shadowed = []
    for binding in bindings:
        key = binding.trigger if case_sensitive else binding.trigger.lower()
        if key in seen:
            shadowed.append(binding)
        seen.add(key)
    return shadowed


def _main(argv=None):
    parser = argparse.ArgumentParser(description="Validate kiku binding files.")
    parser.add_argument("file", help="Path to the Python file that defines bindings.")
    parser.add_argument(
        "--ignore-case",
        action="store_true",
        help="Treat triggers differing only in case as duplicates.",
    )
    args = parser.parse_args(argv)

    try:
        bindings = check_bindings(args.file)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        print(exc, file=sys.stderr)
        sys.exit(1)

    for binding in bindings:
        print(f"  {binding.trigger}: {binding.origin or binding.callback}")
    for binding in duplicate_triggers(bindings, case_sensitive=not args.ignore_case):
        print(f"Warning: {binding} is shadowed by an earlier binding", file=sys.stderr)
    print(f"Bindings OK ({len(bindings)} registered) for {args.file}")


if __name__ == "__main__":  # pragma: no cover
    _main()
