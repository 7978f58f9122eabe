"""Bounded-parallel lint run over one or more source roots."""

from __future__ import annotations

import argparse
import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Iterable, Sequence

from .analyzer import analyze_dir
from .detect import PackageVisitor
from .extract import DEFAULT_TAB_WIDTH
from .file_walker import DEFAULT_EXCLUDES, iter_package_dirs
from .parser import GoParser, StutterlintError
from .report import ReportPrinter, log_summary, report_to_dict
from .stats import SymbolStats
from .storage import save_report


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(message)s"
LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def default_workers() -> int:
    return (os.cpu_count() or 1) * 4


@dataclass(frozen=True)
class LintConfig:
    workers: int = field(default_factory=default_workers)
    include_tests: bool = False
    excludes: frozenset[str] = DEFAULT_EXCLUDES
    tab_width: int = DEFAULT_TAB_WIDTH


class ConfigError(StutterlintError):
    pass


def _env_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, value: str) -> int:
    try:
        return max(1, int(value))
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


def resolve_config() -> LintConfig:
    config = LintConfig()

    workers = os.getenv("STUTTERLINT_WORKERS")
    if workers:
        config = replace(config, workers=_env_int("STUTTERLINT_WORKERS", workers))
    include_tests = os.getenv("STUTTERLINT_INCLUDE_TESTS")
    if include_tests:
        config = replace(config, include_tests=_env_bool(include_tests))
    excludes = os.getenv("STUTTERLINT_EXCLUDES")
    if excludes is not None:
        names = frozenset(name.strip() for name in excludes.split(",") if name.strip())
        config = replace(config, excludes=names)
    tab_width = os.getenv("STUTTERLINT_TAB_WIDTH")
    if tab_width:
        config = replace(config, tab_width=_env_int("STUTTERLINT_TAB_WIDTH", tab_width))

    return config


PackageCallback = Callable[[list[PackageVisitor]], None]


def lint_roots(
    roots: Iterable[str | Path],
    stats: SymbolStats,
    config: LintConfig | None = None,
    on_package: PackageCallback | None = None,
) -> None:
    """Walk every root on its own worker, at most ``config.workers`` at a time.

    The caller blocks while all slots are taken and the call only returns
    once every admitted walk has given its slot back, so ``stats`` is
    complete afterwards. The first failure stops further admissions, makes
    running walks stop at their next directory, and is re-raised here.
    """
    config = config or resolve_config()
    gate = threading.BoundedSemaphore(config.workers)
    errors: list[Exception] = []
    errors_lock = threading.Lock()
    failed = threading.Event()

    def run(root: str) -> None:
        try:
            parser = GoParser()
            for directory in iter_package_dirs(root, config.excludes):
                if failed.is_set():
                    return
                visitors = analyze_dir(
                    parser,
                    directory,
                    stats,
                    include_tests=config.include_tests,
                    tab_width=config.tab_width,
                )
                if on_package is not None:
                    on_package(visitors)
        except Exception as exc:
            with errors_lock:
                errors.append(exc)
            failed.set()
        finally:
            gate.release()

    with ThreadPoolExecutor(
        max_workers=config.workers, thread_name_prefix="stutterlint"
    ) as executor:
        for root in roots:
            gate.acquire()
            if failed.is_set():
                gate.release()
                break
            logger.debug("walking %s", root)
            executor.submit(run, str(root))

        # Drain: every slot must come back before stats are read.
        for _ in range(config.workers):
            gate.acquire()

    if errors:
        raise errors[0]


def lint_paths(
    roots: Iterable[str | Path],
    config: LintConfig | None = None,
) -> tuple[list[PackageVisitor], SymbolStats]:
    stats = SymbolStats()
    visitors: list[PackageVisitor] = []
    lock = threading.Lock()

    def collect(batch: list[PackageVisitor]) -> None:
        with lock:
            visitors.extend(batch)

    lint_roots(roots, stats, config=config, on_package=collect)
    return visitors, stats


def configure_logging(level: str | None = None) -> None:
    name = (level or os.getenv("STUTTERLINT_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Report Go declarations whose name repeats their package name"
    )
    parser.add_argument("roots", nargs="*", help="Directories to walk")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Maximum number of roots walked at once (default: 4x CPU count)",
    )
    parser.add_argument(
        "--include-tests",
        action="store_true",
        default=None,
        help="Also analyze *_test.go files",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="NAME",
        help="Directory name to skip (repeatable, replaces testdata/vendor)",
    )
    parser.add_argument(
        "--tab-width",
        type=int,
        default=None,
        help="Columns per tab when reporting positions",
    )
    parser.add_argument("--output", help="Also write a JSON report to this path")
    parser.add_argument("--log-level", default=None, help="Logging level")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = resolve_config()
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1
    if args.workers is not None:
        config = replace(config, workers=max(1, args.workers))
    if args.include_tests:
        config = replace(config, include_tests=True)
    if args.exclude is not None:
        config = replace(config, excludes=frozenset(args.exclude))
    if args.tab_width is not None:
        config = replace(config, tab_width=max(1, args.tab_width))

    stats = SymbolStats()
    printer = ReportPrinter()
    collected: list[PackageVisitor] = []
    collected_lock = threading.Lock()

    def on_package(visitors: list[PackageVisitor]) -> None:
        printer.emit(visitors)
        if args.output:
            with collected_lock:
                collected.extend(visitors)

    try:
        lint_roots(args.roots, stats, config=config, on_package=on_package)
    except (StutterlintError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    log_summary(stats)
    if args.output:
        save_report(report_to_dict(collected, stats), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
