"""Per-directory package analysis."""

from __future__ import annotations

import logging
from functools import partial

from .detect import PackageVisitor
from .extract import DEFAULT_TAB_WIDTH
from .file_walker import is_source_file
from .parser import GoParser, parse_dir
from .stats import SymbolStats


logger = logging.getLogger(__name__)


def analyze_dir(
    parser: GoParser,
    directory: str,
    stats: SymbolStats,
    include_tests: bool = False,
    tab_width: int = DEFAULT_TAB_WIDTH,
) -> list[PackageVisitor]:
    """Run one visitor per package declared in ``directory``.

    Visitors come back in package discovery order and each one has seen
    only the files of its own package, in file name order.
    """
    packages = parse_dir(parser, directory, partial(is_source_file, include_tests=include_tests))

    visitors: list[PackageVisitor] = []
    for name, files in packages.items():
        visitor = PackageVisitor(name, stats, tab_width=tab_width)
        for parsed in files.values():
            visitor.visit(parsed)
        logger.debug(
            "analyzed package %s in %s: %d files, %d findings",
            name,
            directory,
            len(files),
            len(visitor.findings),
        )
        visitors.append(visitor)
    return visitors
