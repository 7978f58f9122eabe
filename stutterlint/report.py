"""Finding and summary output."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
import threading
from pathlib import Path
from typing import IO, Any, Iterable

from .detect import PackageVisitor
from .models import IdenticalName, Position, Stutter
from .stats import SymbolStats


logger = logging.getLogger(__name__)

Finding = Stutter | IdenticalName


def format_finding(finding: Finding) -> str:
    return str(finding)


class ReportPrinter:
    """Writes findings package by package from any number of threads."""

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()
        self.printed = 0

    def __call__(self, visitors: Iterable[PackageVisitor]) -> None:
        self.emit(visitors)

    def emit(self, visitors: Iterable[PackageVisitor]) -> None:
        lines = [
            format_finding(finding)
            for visitor in visitors
            for finding in visitor.findings
        ]
        if not lines:
            return
        stream = self._stream or sys.stdout
        with self._lock:
            stream.write("\n".join(lines) + "\n")
            stream.flush()
            self.printed += len(lines)


def relative_position(position: Position, base: str | Path | None) -> Position:
    if base is None:
        return position
    return dataclasses.replace(position, filename=os.path.relpath(position.filename, base))


def summary_lines(stats: SymbolStats, relative_to: str | Path | None = None) -> list[str]:
    snapshot = stats.snapshot()
    position = stats.longest_position
    where = str(relative_position(position, relative_to)) if position else "-"
    longest = f'longest symbol "{snapshot["longest_name"]}" ({snapshot["longest"]}) at {where}'
    if snapshot["average"] is None:
        return [longest, "average symbol length is n/a, no symbols found"]
    return [longest, f'average symbol length is {snapshot["average"]:f}']


def log_summary(stats: SymbolStats) -> None:
    for line in summary_lines(stats):
        logger.info(line)


def finding_to_dict(finding: Finding, relative_to: str | Path | None = None) -> dict[str, Any]:
    finding = dataclasses.replace(
        finding, position=relative_position(finding.position, relative_to)
    )
    position = finding.position
    payload: dict[str, Any] = {
        "kind": "stutter" if isinstance(finding, Stutter) else "identical",
        "package": finding.package,
        "symbol": finding.symbol,
        "file": position.filename,
        "line": position.line,
        "column": position.column,
        "message": format_finding(finding),
    }
    if isinstance(finding, Stutter):
        payload["suggestion"] = finding.suggestion
    return payload


def report_to_dict(
    visitors: Iterable[PackageVisitor],
    stats: SymbolStats,
    relative_to: str | Path | None = None,
) -> dict[str, Any]:
    snapshot = stats.snapshot()
    if stats.longest_position is not None:
        snapshot["longest_position"] = str(
            relative_position(stats.longest_position, relative_to)
        )
    return {
        "findings": [
            finding_to_dict(finding, relative_to)
            for visitor in visitors
            for finding in visitor.findings
        ],
        "stats": snapshot,
        "summary": summary_lines(stats, relative_to),
    }
