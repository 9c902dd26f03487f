"""Front matter splitting and typed metadata parsing.

A document looks like::

    ---
    title: "My Post"
    date: "2025-01-30"
    author: "John Doe"
    ---

    # My Post Content

The block between the two ``---`` lines is YAML; everything after the closing
line is the Markdown body, returned exactly as written.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Any, Dict, Optional, Tuple, Type

import yaml

from .errors import InvalidMetadata, MalformedDocument
from .models import DocumentKind, Metadata, PageMetadata, PostMetadata

OPENING_DELIMITER = re.compile(r"\A---\r?\n")
CLOSING_DELIMITER = re.compile(r"^---(?:\r?\n|\Z)", re.MULTILINE)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"

SCHEMAS: Dict[DocumentKind, Type[Any]] = {
    DocumentKind.POST: PostMetadata,
    DocumentKind.PAGE: PageMetadata,
}


class FrontMatterLoader(yaml.SafeLoader):
    """Safe loader that leaves dates and timestamps as plain strings."""


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def extract(raw_text: str, source: Optional[str] = None) -> Tuple[str, str]:
    """Split a document into its front matter block and Markdown body."""
    opening = OPENING_DELIMITER.match(raw_text)
    if opening is None:
        raise MalformedDocument(
            "missing front matter section (opening '---' line not found)", source
        )
    remainder = raw_text[opening.end():]
    closing = CLOSING_DELIMITER.search(remainder)
    if closing is None:
        raise MalformedDocument(
            "front matter is not closed (closing '---' line not found)", source
        )
    return remainder[: closing.start()], remainder[closing.end():]


def _load_mapping(block: str, source: Optional[str]) -> Dict[str, Any]:
    try:
        data = yaml.load(block, Loader=FrontMatterLoader)
    except yaml.YAMLError as exc:
        raise InvalidMetadata(None, f"is not valid YAML: {exc}", source) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidMetadata(
            None, f"must be a mapping, got {type(data).__name__}", source
        )
    return data


def parse_metadata(
    block: str,
    kind: DocumentKind = DocumentKind.POST,
    source: Optional[str] = None,
) -> Metadata:
    """Deserialize a front matter block into the schema for ``kind``.

    Required fields must be non-empty strings; optional fields may be absent or
    null. Keys outside the schema are ignored.
    """
    schema = SCHEMAS[kind]
    data = _load_mapping(block, source)
    values: Dict[str, Optional[str]] = {}
    for schema_field in dataclasses.fields(schema):
        required = schema_field.default is dataclasses.MISSING
        value = data.get(schema_field.name)
        if value is None:
            if required:
                raise InvalidMetadata(schema_field.name, "is required", source)
            values[schema_field.name] = None
            continue
        if not isinstance(value, str):
            raise InvalidMetadata(
                schema_field.name,
                f"must be a string, got {type(value).__name__}",
                source,
            )
        if required and not value.strip():
            raise InvalidMetadata(schema_field.name, "must not be empty", source)
        values[schema_field.name] = value
    return schema(**values)
