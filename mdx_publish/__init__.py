"""Render Markdown documents with front matter into publishable HTML."""

from .config import PublishConfig, RenderOptions
from .errors import (
    ConfigurationError,
    ImageUnresolvable,
    InvalidMetadata,
    MalformedDocument,
    PublishError,
)
from .models import (
    DocumentKind,
    ImageDimensions,
    PageMetadata,
    PostMetadata,
    RenderedPage,
    RenderedPost,
)
from .publisher import Publisher, destination_name, write_document

__all__ = [
    "ConfigurationError",
    "DocumentKind",
    "ImageDimensions",
    "ImageUnresolvable",
    "InvalidMetadata",
    "MalformedDocument",
    "PageMetadata",
    "PostMetadata",
    "PublishConfig",
    "PublishError",
    "Publisher",
    "RenderOptions",
    "RenderedPage",
    "RenderedPost",
    "destination_name",
    "write_document",
]
