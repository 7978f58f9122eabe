"""MCP server exposing stutter lint tools."""

from __future__ import annotations

import argparse
from dataclasses import replace

from mcp.server.fastmcp import FastMCP

from .detect import classify
from .models import KIND_TYPE, SYMBOL_KINDS, IdenticalName, Position, Stutter, Symbol
from .pipeline import LintConfig, lint_paths, resolve_config
from .report import report_to_dict


def create_server(config: LintConfig | None = None) -> FastMCP:
    base_config = config or resolve_config()
    mcp = FastMCP(
        name="stutterlint",
        instructions=(
            "Find Go declarations whose names repeat their package name. "
            "Use lint() on directories, or suggest_name() for a single name."
        ),
        json_response=True,
    )

    @mcp.tool()
    def lint(paths: list[str], include_tests: bool = False) -> dict:
        """Lint Go source trees and return findings plus name statistics."""
        run_config = replace(base_config, include_tests=include_tests)
        visitors, stats = lint_paths(paths, config=run_config)
        return report_to_dict(visitors, stats)

    @mcp.tool()
    def suggest_name(package: str, symbol: str, kind: str = KIND_TYPE) -> dict:
        """Check one type, value or function name against its package."""
        return check_name(package, symbol, kind=kind)

    return mcp


def check_name(package: str, symbol: str, kind: str = KIND_TYPE) -> dict:
    if kind not in SYMBOL_KINDS:
        raise ValueError(f"kind must be one of {', '.join(SYMBOL_KINDS)}")
    finding = classify(
        Symbol(
            kind=kind,
            name=symbol,
            package=package,
            position=Position(filename="<input>", line=1, column=1),
        )
    )
    return {
        "stutters": isinstance(finding, Stutter),
        "identical": isinstance(finding, IdenticalName),
        "suggestion": finding.suggestion if isinstance(finding, Stutter) else None,
    }


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run MCP server for stutterlint")
    parser.add_argument(
        "--transport",
        default="stdio",
        choices=["stdio", "sse", "streamable-http"],
        help="Transport type",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for HTTP transports",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8001,
        help="Port for HTTP transports",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    mcp = create_server()
    mcp.settings.host = args.host
    mcp.settings.port = args.port
    mcp.run(transport=args.transport)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
