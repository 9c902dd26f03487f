"""Exceptions raised while publishing documents."""

from __future__ import annotations

from typing import Optional


class PublishError(Exception):
    """Base class for every error raised by mdx_publish."""


class ConfigurationError(PublishError):
    """Settings that cannot produce a working publisher."""


class DocumentError(PublishError):
    """A document that cannot be converted at all."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class MalformedDocument(DocumentError):
    """Front matter delimiters are missing or out of place."""

    def __init__(self, reason: str, source: Optional[str] = None) -> None:
        self.reason = reason
        super().__init__(reason, source)


class InvalidMetadata(DocumentError):
    """A front matter field is missing or has the wrong type."""

    def __init__(
        self, field: Optional[str], reason: str, source: Optional[str] = None
    ) -> None:
        self.field = field
        self.reason = reason
        message = f"front matter field '{field}' {reason}" if field else f"front matter {reason}"
        super().__init__(message, source)


class ImageUnresolvable(PublishError):
    """Image dimensions could not be determined."""

    def __init__(self, src: str, reason: str) -> None:
        self.src = src
        self.reason = reason
        super().__init__(f"{src}: {reason}")
