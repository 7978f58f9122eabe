"""Name comparison helpers shared by detection and findings."""

from __future__ import annotations


def find_fold(name: str, package: str) -> int:
    """Index of the first case-insensitive occurrence of ``package`` in ``name``, or -1."""
    width = len(package)
    needle = package.lower()
    for idx in range(len(name) - width + 1):
        if name[idx : idx + width].lower() == needle:
            return idx
    return -1


def contains_fold(name: str, package: str) -> bool:
    return find_fold(name, package) != -1


def suggest(package: str, name: str) -> str:
    """Return ``package.<name without its first package occurrence>``.

    Only one occurrence is removed and the remainder keeps its original case,
    so ``suggest("widget", "WidgetWidget")`` gives ``"widget.Widget"``.
    """
    idx = find_fold(name, package)
    if idx != -1:
        name = name[:idx] + name[idx + len(package) :]
    return f"{package}.{name}"


def is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()
