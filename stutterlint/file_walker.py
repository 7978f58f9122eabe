"""Directory walking utilities."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator


DEFAULT_EXCLUDES = frozenset({"testdata", "vendor"})
TEST_SUFFIX = "_test.go"


def is_source_file(name: str, include_tests: bool = False) -> bool:
    if not name.endswith(".go"):
        return False
    return include_tests or not name.endswith(TEST_SUFFIX)


def iter_package_dirs(root: str | Path, excludes: Iterable[str] | None = None) -> Iterator[str]:
    """Yield ``root`` and each directory below it, top-down.

    A directory whose name is excluded is skipped together with its subtree,
    the root included. A root that is a plain file yields nothing. Walk
    errors, a missing root among them, are raised, not ignored.
    """
    exclude_set = set(DEFAULT_EXCLUDES if excludes is None else excludes)
    root = str(root)

    if os.path.isfile(root):
        return
    if not os.path.isdir(root):
        raise FileNotFoundError(f"no such directory: {root}")
    if os.path.basename(os.path.normpath(root)) in exclude_set:
        return

    def _raise(exc: OSError) -> None:
        raise exc

    for dirpath, dirnames, _ in os.walk(root, onerror=_raise):
        dirnames[:] = sorted(d for d in dirnames if d not in exclude_set)
        yield dirpath
