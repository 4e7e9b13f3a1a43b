#!/usr/bin/env python3
"""
Excalidraw MCP server
=====================

Exposes the renderer to MCP clients over stdio.

Tools:
- excalidraw_read_me: element format reference (call once before drawing)
- create_excalidraw_diagram: render elements JSON to a PNG or SVG file

Run with:
    uv run mcp_server.py
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

import config as cfg
from backends import excalidraw
from tools import implementations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def server_lifespan(server: FastMCP):
    """Release the headless browser when the server stops."""
    try:
        yield
    finally:
        await excalidraw.shutdown()


mcp = FastMCP("Excalidraw", lifespan=server_lifespan)


def _unwrap(result: dict) -> str:
    text = "\n".join(block["text"] for block in result["content"])
    if result["isError"]:
        # FastMCP reports ToolError as a result with isError set.
        raise ToolError(text)
    return text


@mcp.tool()
def excalidraw_read_me() -> str:
    """Returns the Excalidraw element format reference with color palettes, examples, and tips.

    Call this BEFORE using create_excalidraw_diagram for the first time.
    """
    return _unwrap(implementations.read_me())


@mcp.tool()
async def create_excalidraw_diagram(
    elements: Annotated[
        str,
        Field(
            description=(
                "JSON array string of Excalidraw elements. Must be valid JSON: no comments, "
                "no trailing commas. Keep compact. Call read_me first for format reference."
            )
        ),
    ],
    outputPath: Annotated[
        Optional[str],
        Field(description="Optional absolute file path for the output file. If omitted, saves to a temp file."),
    ] = None,
    format: Annotated[
        Optional[Literal["png", "svg"]],
        Field(description="Output format: 'png' (default, rasterized) or 'svg' (vector, scalable)."),
    ] = None,
) -> str:
    """Renders a hand-drawn Excalidraw diagram to a PNG or SVG file.

    Call excalidraw_read_me first to learn the element format.
    Returns the file path of the saved file.
    """
    result = await implementations.create_diagram(elements, output_path=outputPath, fmt=format)
    return _unwrap(result)


def main() -> None:
    logging.basicConfig(level=cfg.LOG_LEVEL)
    mcp.run()


if __name__ == "__main__":
    main()
