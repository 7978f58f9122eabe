from __future__ import annotations

import pytest

from stutterlint.naming import contains_fold, find_fold, is_exported, suggest


@pytest.mark.parametrize(
    ("package", "name", "expected"),
    [
        ("widget", "WidgetCreate", "widget.Create"),
        ("cache", "CacheSize", "cache.Size"),
        ("http", "NewHTTPClient", "http.NewClient"),
        ("widget", "WidgetWidget", "widget.Widget"),
        ("log", "DefaultLogLevel", "log.DefaultLevel"),
    ],
)
def test_suggest_removes_first_occurrence(package, name, expected):
    assert suggest(package, name) == expected


def test_suggest_keeps_name_when_package_absent():
    assert suggest("cache", "Size") == "cache.Size"


def test_suggest_never_adds_occurrences():
    name = "ZipZipZip"
    suggested = suggest("zip", name)
    remainder = suggested.split(".", 1)[1]
    assert remainder.lower().count("zip") == name.lower().count("zip") - 1


def test_find_fold_is_case_insensitive():
    assert find_fold("NewHTTPClient", "http") == 3
    assert find_fold("Client", "http") == -1
    assert contains_fold("sqlDB", "SQL")
    assert not contains_fold("Widget", "widgets")


def test_is_exported():
    assert is_exported("Widget")
    assert is_exported("Ünicode")
    assert not is_exported("widget")
    assert not is_exported("_Widget")
    assert not is_exported("")
