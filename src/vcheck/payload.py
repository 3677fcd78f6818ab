"""Document payloads describing what a host wants validated.

A payload file is YAML with the document-level context at the top level and
an optional list of objects to check individually:

    document: {title: Report}
    fonts: [Helvetica]
    objects:
      - key: content_stream
        object: "BT /F1 12 Tf ET"
        resources: {Font: {F1: Helvetica}}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from vcheck.checkers.base import IsoKey, ValidationContext
from vcheck.container import ValidationContainer


class PayloadError(Exception):
    """Raised when a payload file cannot be read or is malformed."""


@dataclass
class ObjectPayload:
    """The five values passed to object-level validation.

    Attributes:
        obj: The object under test.
        key: What kind of element obj is.
        resources: Resource scope, or None.
        content_stream: Content stream scope, or None.
        extra: Checker-defined additional information.
    """

    obj: Any
    key: IsoKey
    resources: Any = None
    content_stream: Any = None
    extra: Any = None

    def dispatch(self, container: ValidationContainer) -> None:
        """Validate this object against every checker in the container."""
        container.validate_object(
            self.obj, self.key, self.resources, self.content_stream, self.extra
        )


@dataclass
class DocumentPayload:
    """A document-level context plus the objects to check individually."""

    context: ValidationContext
    objects: list[ObjectPayload] = field(default_factory=list)


def _parse_object(index: int, entry: Any) -> ObjectPayload:
    if not isinstance(entry, dict):
        raise PayloadError(f"objects[{index}] must be a mapping")
    if "key" not in entry:
        raise PayloadError(f"objects[{index}] is missing 'key'")
    try:
        key = IsoKey.parse(entry["key"])
    except ValueError as e:
        raise PayloadError(f"objects[{index}]: {e}") from e

    return ObjectPayload(
        obj=entry.get("object"),
        key=key,
        resources=entry.get("resources"),
        content_stream=entry.get("content_stream"),
        extra=entry.get("extra"),
    )


def parse_payload(data: Any) -> DocumentPayload:
    """Build a DocumentPayload from already-parsed YAML data.

    Args:
        data: The parsed document. None is treated as an empty payload.

    Returns:
        The payload.

    Raises:
        PayloadError: If the data is not shaped like a payload.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise PayloadError("Payload root must be a mapping")

    fonts = data.get("fonts")
    if fonts is None:
        fonts = []
    if not isinstance(fonts, list):
        raise PayloadError("'fonts' must be a list")
    metadata = data.get("metadata")
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise PayloadError("'metadata' must be a mapping")

    context = ValidationContext(
        document=data.get("document"),
        catalog=data.get("catalog"),
        fonts=fonts,
        metadata=metadata,
    )

    raw_objects = data.get("objects")
    if raw_objects is None:
        raw_objects = []
    if not isinstance(raw_objects, list):
        raise PayloadError("'objects' must be a list")

    objects = [_parse_object(i, entry) for i, entry in enumerate(raw_objects)]
    return DocumentPayload(context=context, objects=objects)


def load_payload(path: Path) -> DocumentPayload:
    """Load a payload from a YAML file.

    Args:
        path: Path to the payload file.

    Returns:
        The parsed payload.

    Raises:
        PayloadError: If the file is missing, unreadable, or malformed.
    """
    if not path.is_file():
        raise PayloadError(f"Payload file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PayloadError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise PayloadError(f"Cannot read {path}: {e}") from e

    return parse_payload(data)
