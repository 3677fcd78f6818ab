"""Checker framework for pluggable conformance rules.

Provides the base class concrete rules implement and the values that flow
through validation.
"""

from __future__ import annotations

from vcheck.checkers.base import (
    ConformanceViolation,
    DocumentConformanceViolation,
    IsoKey,
    ObjectConformanceViolation,
    ValidationChecker,
    ValidationContext,
)

__all__ = [
    # Base types
    "ValidationChecker",
    "ValidationContext",
    "IsoKey",
    # Errors
    "ConformanceViolation",
    "DocumentConformanceViolation",
    "ObjectConformanceViolation",
]
