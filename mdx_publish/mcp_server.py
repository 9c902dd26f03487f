"""MCP server exposing mdx-publish post/page tools."""

from __future__ import annotations

import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from .config import DEFAULT_OUTPUT_ROOT, PublishConfig
from .models import DocumentKind
from .publisher import Publisher

logger = logging.getLogger("mdx_publish.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="mdx-publish")


def _render_once(path: str, kind: DocumentKind, output_root: str) -> str:
    source = Path(path).expanduser()
    if not source.exists():
        raise FileNotFoundError(f"Document path does not exist: {source}")

    publisher = Publisher(PublishConfig(output_root=Path(output_root)))
    try:
        rendered = publisher.load_document(source, kind)
    finally:
        publisher.close()
    return rendered.html


@mcp.tool()
async def post(path: str, output_root: str = str(DEFAULT_OUTPUT_ROOT)) -> str:
    """Render a Markdown blog post with front matter to HTML."""
    return _render_once(path, DocumentKind.POST, output_root)


@mcp.tool()
async def page(path: str, output_root: str = str(DEFAULT_OUTPUT_ROOT)) -> str:
    """Render a standalone Markdown page with front matter to HTML."""
    return _render_once(path, DocumentKind.PAGE, output_root)


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
