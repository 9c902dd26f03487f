"""Markdown rendering backed by mistune."""

from __future__ import annotations

import logging
from typing import Optional

import mistune

from .config import RenderOptions

logger = logging.getLogger("mdx_publish")

CODE_BLOCK_OPENING = '<pre><code class="language-'
LINE_NUMBERED_CODE_BLOCK_OPENING = '<pre class="line-numbers"><code class="language-'


def mark_line_numbers(html: str) -> str:
    """Tag fenced code blocks that declare a language for line numbering.

    This is a literal substring replacement that depends on mistune's exact
    ``block_code`` output.
    """
    return html.replace(CODE_BLOCK_OPENING, LINE_NUMBERED_CODE_BLOCK_OPENING)


class MarkdownRenderer:
    """Thin wrapper around a mistune parser with the extended dialect enabled."""

    def __init__(self, options: Optional[RenderOptions] = None) -> None:
        self.options = options or RenderOptions()
        self._markdown = mistune.create_markdown(
            escape=self.options.escape_html,
            hard_wrap=self.options.hard_wrap,
            plugins=list(self.options.plugins),
        )

    def render(self, body: str) -> str:
        """Render Markdown body text to an HTML fragment."""
        html = self._markdown(body)
        logger.debug("Rendered %d characters of Markdown", len(body))
        return mark_line_numbers(html)


def render(body: str, options: Optional[RenderOptions] = None) -> str:
    """Render ``body`` with a one-off renderer."""
    return MarkdownRenderer(options).render(body)
