"""Validation container for dispatching to registered checkers.

The container holds an ordered list of checkers and fans every validation
call out to each of them, in the order they were added.
"""

from __future__ import annotations

from typing import Any

from vcheck.checkers.base import IsoKey, ValidationChecker


class ValidationContainer:
    """Ordered collection of checkers with fan-out dispatch.

    Checkers are held by reference: the same instance may be registered in
    several containers, and the container never copies or disposes of one.
    Registration is append-only and performs no deduplication, so a checker
    added twice runs twice per dispatch.

    Dispatch is fail-fast. The first exception raised by a checker propagates
    unchanged and the remaining checkers are not called. Nothing is caught,
    wrapped, aggregated or logged here.

    A container is meant to have a single owner that registers its checkers
    up front and then dispatches. Concurrent dispatch over an unchanging
    container is fine; calling add_checker while another thread dispatches
    is not supported.

    Example:
        >>> container = ValidationContainer()
        >>> container.add_checker(PdfAChecker())
        >>> container.validate(context)
        >>> container.validate_object(stream, IsoKey.CONTENT_STREAM, resources, None, None)
    """

    def __init__(self) -> None:
        """Initialize an empty container."""
        self._checkers: list[ValidationChecker] = []

    def add_checker(self, checker: ValidationChecker) -> None:
        """Append a checker to the end of the dispatch order.

        Args:
            checker: The checker to register.

        Raises:
            ValueError: If checker is None.
        """
        if checker is None:
            raise ValueError("Cannot add None as a validation checker")
        self._checkers.append(checker)

    def contains_checker(self, checker: ValidationChecker) -> bool:
        """Check whether this exact checker instance is registered.

        Membership is by identity, so a distinct instance that compares
        equal to a registered one is not a member.

        Args:
            checker: The checker to look for.

        Returns:
            True if the same instance has been added.
        """
        return any(registered is checker for registered in self._checkers)

    def validate(self, context: Any) -> None:
        """Run every checker's document-level validation.

        Args:
            context: Document-level context, forwarded unchanged.

        Raises:
            ConformanceViolation: Propagated from the first failing checker.
        """
        for checker in self._checkers:
            checker.validate_document(context)

    def validate_object(
        self,
        obj: Any,
        key: IsoKey,
        resources: Any = None,
        content_stream: Any = None,
        extra: Any = None,
    ) -> None:
        """Run every checker's object-level validation.

        Args:
            obj: The object to check.
            key: What kind of element obj is.
            resources: Resource scope of the object, or None.
            content_stream: Content stream of the object, or None.
            extra: Additional checker-defined information.

        Raises:
            ConformanceViolation: Propagated from the first failing checker.
        """
        for checker in self._checkers:
            checker.validate_object(obj, key, resources, content_stream, extra)

    @property
    def checkers(self) -> tuple[ValidationChecker, ...]:
        """Registered checkers in dispatch order."""
        return tuple(self._checkers)

    def __len__(self) -> int:
        return len(self._checkers)
