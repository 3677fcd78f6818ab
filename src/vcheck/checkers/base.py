"""Base checker classes and models for the conformance checking framework.

Provides the capability contract every pluggable conformance rule satisfies,
the violation error kind checkers raise, and the values a host passes into
validation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class IsoKey(str, Enum):
    """Classification tag for the kind of structural element being checked."""

    ANNOTATION = "annotation"
    CANVAS_STACK = "canvas_stack"
    CONTENT_STREAM = "content_stream"
    CRYPTO = "crypto"
    EXTENDED_GRAPHICS_STATE = "extended_graphics_state"
    FILL_COLOR = "fill_color"
    FONT = "font"
    FONT_GLYPHS = "font_glyphs"
    FORM_FIELD = "form_field"
    GRAPHIC_STATE_ONLY = "graphic_state_only"
    IMAGE = "image"
    INLINE_IMAGE = "inline_image"
    LAYOUT = "layout"
    PAGE = "page"
    RENDERING_INTENT = "rendering_intent"
    RESOURCES = "resources"
    SIGNATURE = "signature"
    STROKE_COLOR = "stroke_color"
    TAG_STRUCTURE_ELEMENT = "tag_structure_element"
    XREF_TABLE = "xref_table"

    @classmethod
    def parse(cls, value: IsoKey | str) -> IsoKey:
        """Resolve a key from a member, its name, or its value.

        Args:
            value: An IsoKey, or a string such as "CONTENT_STREAM" or
                "content_stream" (case-insensitive).

        Returns:
            The matching IsoKey member.

        Raises:
            ValueError: If the value does not name a known key.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise ValueError(f"Unknown IsoKey: {value!r}")


class ConformanceViolation(Exception):
    """Raised by a checker when validated content fails its rule.

    Attributes:
        message: Human-readable description of the violation.
        key: Optional classification of the element that failed.
    """

    def __init__(self, message: str, key: IsoKey | str | None = None) -> None:
        self.message = message
        self.key = key
        super().__init__(message)

    def __str__(self) -> str:
        if self.key is None:
            return self.message
        # Checkers may pass the key as a plain string.
        label = getattr(self.key, "value", self.key)
        return f"[{label}] {self.message}"


class DocumentConformanceViolation(ConformanceViolation):
    """A violation found while checking the whole document."""


class ObjectConformanceViolation(ConformanceViolation):
    """A violation found while checking a single structural object."""


@dataclass
class ValidationContext:
    """Document-level context handed to every checker.

    The container forwards this value untouched; only checkers interpret it.

    Attributes:
        document: The document being produced or traversed.
        catalog: Optional document catalog (root dictionary).
        fonts: Fonts used by the document.
        metadata: Free-form host metadata (e.g. the selected profile).
    """

    document: Any = None
    catalog: Any = None
    fonts: list[Any] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def with_document(self, document: Any) -> ValidationContext:
        self.document = document
        return self

    def with_catalog(self, catalog: Any) -> ValidationContext:
        self.catalog = catalog
        return self

    def with_fonts(self, fonts: list[Any]) -> ValidationContext:
        self.fonts = list(fonts)
        return self


class ValidationChecker(ABC):
    """Abstract base class for all conformance checkers.

    Every registered checker is asked at both granularities: once per
    document-level checkpoint and once per object the host inspects. A
    checker that only cares about one granularity implements the other as a
    no-op. Success is silence; failure is a raised ConformanceViolation.
    """

    @abstractmethod
    def validate_document(self, context: Any) -> None:
        """Check the document as a whole.

        Args:
            context: Document-level context, usually a ValidationContext.

        Raises:
            ConformanceViolation: If the document fails this checker's rule.
        """

    @abstractmethod
    def validate_object(
        self,
        obj: Any,
        key: IsoKey,
        resources: Any,
        content_stream: Any,
        extra: Any,
    ) -> None:
        """Check a single structural object.

        Args:
            obj: The object under test.
            key: What kind of element obj is.
            resources: Resource scope the object lives in, or None.
            content_stream: Content stream the object was found in, or None.
            extra: Checker-defined additional information.

        Raises:
            ConformanceViolation: If the object fails this checker's rule.
        """
