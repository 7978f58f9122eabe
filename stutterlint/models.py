"""Lightweight data models for symbols and findings."""

from __future__ import annotations

from dataclasses import dataclass

from .naming import suggest


KIND_FUNCTION = "function"
KIND_METHOD = "method"
KIND_TYPE = "type"
KIND_VALUE = "value"

SYMBOL_KINDS = (KIND_FUNCTION, KIND_METHOD, KIND_TYPE, KIND_VALUE)


@dataclass(frozen=True)
class Position:
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Symbol:
    kind: str
    name: str
    package: str
    position: Position


@dataclass(frozen=True)
class Stutter:
    symbol: str
    package: str
    position: Position
    suggestion: str

    @classmethod
    def create(cls, symbol: str, package: str, position: Position) -> "Stutter":
        return cls(
            symbol=symbol,
            package=package,
            position=position,
            suggestion=suggest(package, symbol),
        )

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.symbol}"

    def __str__(self) -> str:
        return (
            f'{self.position}: consider changing "{self.qualified_name}" '
            f'to "{self.suggestion}"'
        )


@dataclass(frozen=True)
class IdenticalName:
    """A type named exactly like its package, e.g. ``widget.Widget``."""

    symbol: str
    package: str
    position: Position

    def __str__(self) -> str:
        return (
            f"{self.position}: type {self.symbol} is identical to package "
            f"{self.package}, confirm this is intended"
        )
