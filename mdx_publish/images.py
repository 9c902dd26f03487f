"""Image dimension lookup for local files and remote URLs."""

from __future__ import annotations

import html
import io
import logging
import time
from pathlib import Path
from typing import Iterable, Optional, Protocol, Tuple

import requests
from filetype import guess
from PIL import Image, UnidentifiedImageError

from .config import DEFAULT_IMAGE_TIMEOUT, DEFAULT_OUTPUT_ROOT, DEFAULT_USER_AGENT
from .errors import ConfigurationError, ImageUnresolvable
from .models import ImageDimensions

logger = logging.getLogger("mdx_publish")

REMOTE_PREFIX = "http"
PARENT_MARKER = "../"
MAX_IMAGE_BYTES = 10 * 1024 * 1024
CHUNK_SIZE = 64 * 1024


class DimensionResolver(Protocol):
    """Anything that can turn an image ``src`` into pixel dimensions."""

    def resolve(self, src: str) -> Optional[ImageDimensions]:
        ...


def is_remote(src: str) -> bool:
    return src.startswith(REMOTE_PREFIX)


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect the payload type using filetype; returns the MIME type."""
    kind = guess(data)
    if kind is None:
        return None
    return kind.mime


def local_image_path(src: str, output_root: Path) -> Path:
    """Map a source-relative image reference onto the output tree."""
    cleaned = src
    while cleaned.startswith(PARENT_MARKER):
        cleaned = cleaned[len(PARENT_MARKER):]
    return output_root / cleaned


def _checked(src: str, width: int, height: int) -> ImageDimensions:
    if width <= 0 or height <= 0:
        raise ImageUnresolvable(src, f"invalid dimensions {width}x{height}")
    return ImageDimensions(width=width, height=height)


def _header_size(src: str, data: bytes) -> Optional[Tuple[int, int]]:
    """Return the size Pillow reads from the header, or ``None`` if it needs more data."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except Image.DecompressionBombError as exc:
        raise ImageUnresolvable(src, f"image too large to inspect: {exc}") from exc
    except (OSError, EOFError):
        return None


def decode_dimensions(
    src: str,
    chunks: Iterable[bytes],
    deadline: Optional[float] = None,
    max_bytes: int = MAX_IMAGE_BYTES,
) -> ImageDimensions:
    """Read width and height from a streamed image payload.

    ``chunks`` is consumed only until the header can be identified. ``deadline``
    is a ``time.monotonic()`` value checked before each chunk.
    """
    buffer = bytearray()
    for chunk in chunks:
        if deadline is not None and time.monotonic() > deadline:
            raise ImageUnresolvable(src, "download did not finish within the time limit")
        if not chunk:
            continue
        if not buffer:
            mime = detect_image_format(chunk)
            if mime and not mime.startswith("image/"):
                raise ImageUnresolvable(src, f"payload is {mime}, not an image")
        buffer.extend(chunk)
        size = _header_size(src, bytes(buffer))
        if size is not None:
            return _checked(src, *size)
        if len(buffer) > max_bytes:
            raise ImageUnresolvable(src, f"no image header in the first {max_bytes} bytes")
    if not buffer:
        raise ImageUnresolvable(src, "empty response")
    raise ImageUnresolvable(src, "cannot decode image")


def read_local_header(src: str, path: Path) -> ImageDimensions:
    """Read dimensions from a local file header without decoding pixels."""
    try:
        with Image.open(path) as img:
            width, height = img.size
    except FileNotFoundError as exc:
        raise ImageUnresolvable(src, f"file not found at {path}") from exc
    except Image.DecompressionBombError as exc:
        raise ImageUnresolvable(src, f"image too large to inspect: {exc}") from exc
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageUnresolvable(src, f"cannot read image header: {exc}") from exc
    return _checked(src, width, height)


class ImageDimensionResolver:
    """Resolve image dimensions from the output tree or over HTTP.

    Every failure is logged and reported as ``None``; nothing is retried.
    """

    def __init__(
        self,
        output_root: Path = DEFAULT_OUTPUT_ROOT,
        timeout: float = DEFAULT_IMAGE_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        if timeout <= 0:
            raise ConfigurationError(f"image timeout must be positive, got {timeout}")
        if not user_agent or not user_agent.strip():
            raise ConfigurationError("a user agent is required for remote image requests")
        self.output_root = Path(output_root)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent

    def fetch_remote(self, src: str) -> ImageDimensions:
        url = html.unescape(src)
        deadline = time.monotonic() + self.timeout
        try:
            resp = self.session.get(url, timeout=self.timeout, stream=True)
        except requests.RequestException as exc:
            raise ImageUnresolvable(src, f"request failed: {exc}") from exc
        try:
            resp.raise_for_status()
            return decode_dimensions(
                src, resp.iter_content(chunk_size=CHUNK_SIZE), deadline
            )
        except requests.RequestException as exc:
            raise ImageUnresolvable(src, f"request failed: {exc}") from exc
        finally:
            resp.close()

    def read_local(self, src: str) -> ImageDimensions:
        path = local_image_path(html.unescape(src), self.output_root)
        return read_local_header(src, path)

    def resolve(self, src: str) -> Optional[ImageDimensions]:
        """Return the image's dimensions, or ``None`` when they are unknown."""
        try:
            if is_remote(src):
                dims = self.fetch_remote(src)
            else:
                dims = self.read_local(src)
        except ImageUnresolvable as exc:
            logger.warning(
                "Could not resolve image %s (%s), continuing without image",
                src,
                exc.reason,
            )
            return None
        logger.debug("Resolved %s to %dx%d", src, dims.width, dims.height)
        return dims

    def close(self) -> None:
        self.session.close()


def resolve(src: str, base_dir: Path = DEFAULT_OUTPUT_ROOT) -> Optional[ImageDimensions]:
    """Resolve a single image with a throwaway resolver."""
    resolver = ImageDimensionResolver(base_dir)
    try:
        return resolver.resolve(src)
    finally:
        resolver.close()
