"""Data models used throughout the publishing pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union


class DocumentKind(enum.Enum):
    """Which front matter schema and post-processing a document gets."""

    POST = "post"
    PAGE = "page"


@dataclass(frozen=True)
class PostMetadata:
    """Front matter for a blog post."""

    title: str
    date: str
    author: str
    description: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class PageMetadata:
    """Front matter for a standalone page such as About."""

    title: str
    author: str
    description: Optional[str] = None


@dataclass(frozen=True)
class ImageReference:
    """Image reference discovered in rendered HTML."""

    src: str
    alt: str


@dataclass(frozen=True)
class ImageDimensions:
    """Pixel size of an image."""

    width: int
    height: int


@dataclass
class RenderedPost:
    """A fully converted post, ready to be written out."""

    metadata: PostMetadata
    html: str
    reading_time_minutes: int
    destination_name: str


@dataclass
class RenderedPage:
    """A fully converted page."""

    metadata: PageMetadata
    html: str


Metadata = Union[PostMetadata, PageMetadata]
RenderedDocument = Union[RenderedPost, RenderedPage]
