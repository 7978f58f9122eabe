"""Tree-sitter based parser for Go sources."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Iterable

from tree_sitter import Parser

from .ts_lang import load_go_language


class StutterlintError(RuntimeError):
    """Base exception for all stutterlint errors."""


class ParseError(StutterlintError):
    def __init__(self, path: str, message: str, line: int = 0, column: int = 0) -> None:
        location = f"{path}:{line}:{column}" if line else path
        super().__init__(f"{location}: {message}")
        self.path = path
        self.message = message
        self.line = line
        self.column = column


@dataclass
class ParsedSource:
    tree: object
    source_bytes: bytes
    path: str = "<source>"


class GoParser:
    def __init__(self) -> None:
        language = load_go_language()
        self._parser = Parser()
        # tree-sitter API supports either set_language or direct attribute.
        if hasattr(self._parser, "set_language"):
            self._parser.set_language(language)
        else:
            self._parser.language = language

    def parse_bytes(self, source_bytes: bytes, path: str = "<source>") -> ParsedSource:
        try:
            source_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(path, "invalid UTF-8 encoding") from exc
        tree = self._parser.parse(source_bytes)
        parsed = ParsedSource(tree=tree, source_bytes=source_bytes, path=path)
        _check_syntax(parsed)
        return parsed

    def parse_text(self, source_text: str, path: str = "<source>") -> ParsedSource:
        return self.parse_bytes(source_text.encode("utf-8"), path=path)

    def parse_file(self, path: str) -> ParsedSource:
        try:
            with open(path, "rb") as handle:
                source_bytes = handle.read()
        except OSError as exc:
            raise ParseError(path, exc.strerror or str(exc)) from exc
        return self.parse_bytes(source_bytes, path=path)


def package_name(parsed: ParsedSource) -> str:
    root = parsed.tree.root_node
    for child in root.children:
        if child.type != "package_clause":
            continue
        for ident in child.children:
            if ident.type == "package_identifier":
                return parsed.source_bytes[ident.start_byte : ident.end_byte].decode("utf-8")
    raise ParseError(parsed.path, "expected 'package' clause", line=1, column=1)


def parse_dir(
    parser: GoParser,
    directory: str,
    file_filter: Callable[[str], bool] | None = None,
) -> dict[str, dict[str, ParsedSource]]:
    """Parse the Go files directly inside ``directory``, grouped by package clause.

    Files are visited in name order and both mapping levels keep that order.
    The first file that fails to parse aborts the whole directory.
    """
    packages: dict[str, dict[str, ParsedSource]] = {}
    for path in _iter_go_files(directory, file_filter):
        parsed = parser.parse_file(path)
        packages.setdefault(package_name(parsed), {})[path] = parsed
    return packages


def _iter_go_files(directory: str, file_filter: Callable[[str], bool] | None) -> Iterable[str]:
    with os.scandir(directory) as entries:
        names = sorted(
            entry.name
            for entry in entries
            if entry.name.endswith(".go") and entry.is_file()
        )
    for name in names:
        if file_filter is None or file_filter(name):
            yield os.path.join(directory, name)


def _check_syntax(parsed: ParsedSource) -> None:
    root = parsed.tree.root_node
    if not root.has_error:
        return
    bad = _first_error_node(root)
    if bad is None:
        raise ParseError(parsed.path, "syntax error")
    line, column = bad.start_point
    what = f"missing {bad.type}" if bad.is_missing else "syntax error"
    raise ParseError(parsed.path, what, line=line + 1, column=column + 1)


def _first_error_node(node):
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error_node(child)
            if found is not None:
                return found
    return None
