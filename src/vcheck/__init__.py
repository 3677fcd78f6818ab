"""vcheck - Pluggable conformance checker registry and dispatcher."""

from __future__ import annotations

from vcheck.checkers import (
    ConformanceViolation,
    DocumentConformanceViolation,
    IsoKey,
    ObjectConformanceViolation,
    ValidationChecker,
    ValidationContext,
)
from vcheck.container import ValidationContainer

__version__ = "0.1.0"

__all__ = [
    "ConformanceViolation",
    "DocumentConformanceViolation",
    "IsoKey",
    "ObjectConformanceViolation",
    "ValidationChecker",
    "ValidationContainer",
    "ValidationContext",
    "__version__",
]
