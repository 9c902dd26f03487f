"""Configuration objects and constants for the publisher."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

DEFAULT_OUTPUT_ROOT = Path("docs")
DEFAULT_DESTINATION_TEMPLATE = "docs/posts/{slug}.html"
DEFAULT_IMAGE_TIMEOUT = 10.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_WORDS_PER_MINUTE = 200
DEFAULT_MARKDOWN_PLUGINS = ("table", "strikethrough", "footnotes", "task_lists")


@dataclass(frozen=True)
class RenderOptions:
    """Static options handed to the Markdown renderer.

    Smart punctuation is always off: quotes and dashes are emitted verbatim.
    ``escape_html`` controls whether raw HTML in the body is escaped or passed
    through untouched.
    """

    plugins: Tuple[str, ...] = DEFAULT_MARKDOWN_PLUGINS
    escape_html: bool = False
    hard_wrap: bool = False


@dataclass
class PublishConfig:
    """Top-level settings that control rendering and image resolution."""

    output_root: Path = DEFAULT_OUTPUT_ROOT
    destination_template: str = DEFAULT_DESTINATION_TEMPLATE
    image_timeout: float = DEFAULT_IMAGE_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
    image_workers: int = 1
    render: RenderOptions = field(default_factory=RenderOptions)
