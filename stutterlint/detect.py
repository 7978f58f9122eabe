"""Stutter detection for one package."""

from __future__ import annotations

from .extract import DEFAULT_TAB_WIDTH, iter_symbols
from .models import KIND_FUNCTION, KIND_METHOD, KIND_TYPE, IdenticalName, Stutter, Symbol
from .naming import contains_fold, is_exported
from .parser import ParsedSource
from .stats import SymbolStats


class PackageVisitor:
    """Collects findings for the files of a single package.

    Every symbol is fed to ``stats``. Functions are only checked when they
    are exported and have no receiver; types and values are always checked.
    """

    def __init__(
        self,
        package: str,
        stats: SymbolStats,
        tab_width: int = DEFAULT_TAB_WIDTH,
    ) -> None:
        self.package = package
        self.stats = stats
        self.tab_width = tab_width
        self.findings: list[Stutter | IdenticalName] = []

    @property
    def stutters(self) -> list[Stutter]:
        return [item for item in self.findings if isinstance(item, Stutter)]

    @property
    def identical(self) -> list[IdenticalName]:
        return [item for item in self.findings if isinstance(item, IdenticalName)]

    def visit(self, parsed: ParsedSource) -> None:
        for symbol in iter_symbols(parsed, self.package, tab_width=self.tab_width):
            self.stats.accumulate(symbol.name, symbol.position)
            finding = classify(symbol)
            if finding is not None:
                self.findings.append(finding)


def classify(symbol: Symbol) -> Stutter | IdenticalName | None:
    name, package = symbol.name, symbol.package

    if symbol.kind == KIND_METHOD:
        return None
    if symbol.kind == KIND_FUNCTION:
        if is_exported(name) and contains_fold(name, package):
            return Stutter.create(name, package, symbol.position)
        return None
    if symbol.kind == KIND_TYPE and name.lower() == package.lower():
        return IdenticalName(symbol=name, package=package, position=symbol.position)
    if contains_fold(name, package):
        return Stutter.create(name, package, symbol.position)
    return None
