"""Pytest configuration and fixtures."""

import io
import struct
import zlib
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest
from PIL import Image

from mdx_publish.models import ImageDimensions


def image_bytes(size: Tuple[int, int], fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 120, 40)).save(buffer, format=fmt)
    return buffer.getvalue()


def png_header(width: int, height: int) -> bytes:
    """A PNG with a real IHDR but no pixel data, for sizes too big to allocate."""

    def chunk(kind: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(kind + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", ihdr)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )


class StubResolver:
    """Resolver returning canned dimensions and recording every lookup."""

    def __init__(self, known: Optional[Dict[str, Tuple[int, int]]] = None) -> None:
        self.known = known or {}
        self.calls: List[str] = []

    def resolve(self, src: str) -> Optional[ImageDimensions]:
        self.calls.append(src)
        if src not in self.known:
            return None
        width, height = self.known[src]
        return ImageDimensions(width=width, height=height)


@pytest.fixture
def write_image():
    """Write a real image file of the given size, creating parent dirs."""

    def _write(path: Path, size: Tuple[int, int], fmt: str = "PNG") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(image_bytes(size, fmt))
        return path

    return _write


@pytest.fixture
def post_text() -> str:
    return '---\ntitle: "T"\ndate: "2025-01-01"\nauthor: "A"\n---\n\nHello **world**'
