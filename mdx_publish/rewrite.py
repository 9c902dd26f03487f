"""Rewrite rendered ``<img>`` tags into aspect-ratio placeholders."""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_OUTPUT_ROOT
from .images import DimensionResolver, ImageDimensionResolver
from .models import ImageDimensions, ImageReference

logger = logging.getLogger("mdx_publish")

# ``src`` must come before ``alt``; tags missing either are left alone.
IMG_TAG_PATTERN = re.compile(r'<img\s+[^>]*src="([^"]+)"\s+alt="([^"]*)".*?/?>')

PLACEHOLDER_TEMPLATE = (
    "<div class='shimmer aspect-ratio' style='--aspect-ratio:{width} / {height}'>"
    '<img src="{src}" alt="{alt}"/></div>'
)


def find_images(html: str) -> List[ImageReference]:
    """Return every matching image reference in document order."""
    return [
        ImageReference(src=match.group(1), alt=match.group(2))
        for match in IMG_TAG_PATTERN.finditer(html)
    ]


def placeholder_markup(image: ImageReference, dims: ImageDimensions) -> str:
    return PLACEHOLDER_TEMPLATE.format(
        width=dims.width,
        height=dims.height,
        src=image.src,
        alt=image.alt,
    )


class ImageRewriter:
    """Replace each image with a dimension-aware wrapper, or drop it.

    With ``max_workers`` above one, dimensions are resolved on a thread pool;
    results are always substituted back in document order.
    """

    def __init__(self, resolver: DimensionResolver, max_workers: int = 1) -> None:
        self.resolver = resolver
        self.max_workers = max(1, max_workers)

    def _resolve_all(self, images: List[ImageReference]) -> List[Optional[ImageDimensions]]:
        srcs = [image.src for image in images]
        if self.max_workers == 1 or len(srcs) < 2:
            return [self.resolver.resolve(src) for src in srcs]
        workers = min(self.max_workers, len(srcs))
        logger.debug("Resolving %d images with %d workers", len(srcs), workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self.resolver.resolve, srcs))

    def rewrite(self, html: str) -> str:
        """Return ``html`` with every matching ``<img>`` tag rewritten."""
        images = find_images(html)
        if not images:
            return html
        replacements: List[str] = []
        for image, dims in zip(images, self._resolve_all(images)):
            if dims is None:
                logger.warning("Dropping image %s from output", image.src)
                replacements.append("")
            else:
                replacements.append(placeholder_markup(image, dims))
        replacement_iter = iter(replacements)
        return IMG_TAG_PATTERN.sub(lambda _match: next(replacement_iter), html)


def rewrite(
    html: str,
    base_dir: Path = DEFAULT_OUTPUT_ROOT,
    resolver: Optional[DimensionResolver] = None,
    max_workers: int = 1,
) -> str:
    """Rewrite images in ``html``, resolving local files under ``base_dir``."""
    if resolver is not None:
        return ImageRewriter(resolver, max_workers).rewrite(html)
    owned = ImageDimensionResolver(base_dir)
    try:
        return ImageRewriter(owned, max_workers).rewrite(html)
    finally:
        owned.close()
