"""High-level orchestration for turning documents into publishable HTML."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Tuple, Union, cast

from .config import DEFAULT_DESTINATION_TEMPLATE, PublishConfig
from .frontmatter import extract, parse_metadata
from .images import DimensionResolver, ImageDimensionResolver
from .markdown import MarkdownRenderer
from .models import (
    DocumentKind,
    Metadata,
    PageMetadata,
    PostMetadata,
    RenderedDocument,
    RenderedPage,
    RenderedPost,
)
from .rewrite import ImageRewriter
from .utils import reading_time_minutes, slugify

logger = logging.getLogger("mdx_publish")


def destination_name(title: str, template: str = DEFAULT_DESTINATION_TEMPLATE) -> str:
    """Derive the output path of a post from its title."""
    return template.format(slug=slugify(title))


class Publisher:
    """Run documents through extraction, rendering, and image rewriting."""

    def __init__(
        self,
        config: Optional[PublishConfig] = None,
        resolver: Optional[DimensionResolver] = None,
    ) -> None:
        self.config = config or PublishConfig()
        self.renderer = MarkdownRenderer(self.config.render)
        self._owned_resolver: Optional[ImageDimensionResolver] = None
        if resolver is None:
            resolver = self._owned_resolver = ImageDimensionResolver(
                self.config.output_root,
                timeout=self.config.image_timeout,
                user_agent=self.config.user_agent,
            )
        self.resolver = resolver
        self.rewriter = ImageRewriter(resolver, self.config.image_workers)

    def _convert(
        self, raw_text: str, kind: DocumentKind, source: Optional[str]
    ) -> Tuple[Metadata, str, str]:
        block, body = extract(raw_text, source)
        metadata = parse_metadata(block, kind, source)
        html = self.renderer.render(body)
        html = self.rewriter.rewrite(html)
        return metadata, body, html

    def render_document(
        self,
        raw_text: str,
        kind: DocumentKind,
        source: Optional[str] = None,
    ) -> RenderedDocument:
        """Convert raw document text according to its kind."""
        start = time.perf_counter()
        metadata, body, html = self._convert(raw_text, kind, source)
        if kind is DocumentKind.POST:
            rendered: RenderedDocument = RenderedPost(
                metadata=cast(PostMetadata, metadata),
                html=html,
                reading_time_minutes=reading_time_minutes(
                    body, self.config.words_per_minute
                ),
                destination_name=destination_name(
                    metadata.title, self.config.destination_template
                ),
            )
        else:
            rendered = RenderedPage(metadata=cast(PageMetadata, metadata), html=html)
        logger.debug(
            "Converted %s '%s' in %.2fs",
            kind.value,
            metadata.title,
            time.perf_counter() - start,
        )
        return rendered

    def render_post(self, raw_text: str, source: Optional[str] = None) -> RenderedPost:
        return cast(RenderedPost, self.render_document(raw_text, DocumentKind.POST, source))

    def render_page(self, raw_text: str, source: Optional[str] = None) -> RenderedPage:
        return cast(RenderedPage, self.render_document(raw_text, DocumentKind.PAGE, source))

    def load_document(
        self, path: Union[str, Path], kind: DocumentKind
    ) -> RenderedDocument:
        """Read a document from disk and convert it."""
        path = Path(path)
        raw_text = path.read_text(encoding="utf-8")
        logger.info("Converting %s", path)
        return self.render_document(raw_text, kind, source=str(path))

    def close(self) -> None:
        if self._owned_resolver is not None:
            self._owned_resolver.close()


def write_document(
    rendered: RenderedDocument,
    root: Path = Path("."),
    output_path: Optional[Path] = None,
) -> Path:
    """Persist rendered HTML.

    Posts land at ``root / destination_name`` unless ``output_path`` is given;
    pages need an explicit ``output_path``.
    """
    if output_path is None:
        if not isinstance(rendered, RenderedPost):
            raise ValueError("pages need an explicit output path")
        output_path = root / rendered.destination_name
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered.html, encoding="utf-8")
    logger.info("Saved HTML to %s", output_path)
    return output_path
