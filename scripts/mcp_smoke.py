from __future__ import annotations

import argparse
import sys

import anyio
from mcp.client.session import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="MCP stdio smoke test")
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Go source trees to lint through the server",
    )
    return parser.parse_args()


async def run() -> None:
    args = parse_args()
    params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "stutterlint.mcp_server", "--transport", "stdio"],
    )

    async with stdio_client(params) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()
            tools = await session.list_tools()
            result = await session.call_tool("lint", {"paths": args.paths})

    payload = result.structuredContent
    if payload is None and result.content:
        payload = [item.model_dump() for item in result.content]

    print({
        "tools": [tool.name for tool in tools.tools],
        "lint": payload,
    })


if __name__ == "__main__":
    anyio.run(run)
