"""Go package-name stutter linter."""

from .analyzer import analyze_dir
from .detect import PackageVisitor
from .file_walker import iter_package_dirs
from .naming import suggest
from .parser import GoParser, ParseError, parse_dir
from .pipeline import LintConfig, lint_paths, lint_roots
from .stats import SymbolStats

__all__ = [
    "GoParser",
    "LintConfig",
    "PackageVisitor",
    "ParseError",
    "SymbolStats",
    "analyze_dir",
    "iter_package_dirs",
    "lint_paths",
    "lint_roots",
    "parse_dir",
    "suggest",
]
