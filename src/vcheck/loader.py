"""Checker loading from "module:attribute" references.

Lets a host name its checkers in configuration and get back a populated
ValidationContainer, registered in the order the references are listed.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable
from typing import Any

from vcheck.checkers.base import ValidationChecker
from vcheck.config import validate_reference
from vcheck.container import ValidationContainer

logger = logging.getLogger(__name__)


class CheckerLoadError(Exception):
    """Raised when a checker reference cannot be turned into a checker."""

    def __init__(self, reference: str, reason: str) -> None:
        self.reference = reference
        self.reason = reason
        super().__init__(f"Cannot load checker '{reference}': {reason}")


def _import_target(reference: str) -> Any:
    """Import the object a reference points at.

    Raises:
        CheckerLoadError: If the module or attribute cannot be found.
    """
    try:
        validate_reference(reference)
    except ValueError as e:
        raise CheckerLoadError(str(reference), str(e)) from e

    module_name, attr_path = (part.strip() for part in reference.split(":"))

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise CheckerLoadError(reference, f"cannot import module '{module_name}' ({e})") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise CheckerLoadError(reference, f"no attribute '{attr}'") from e

    return target


def resolve_checker(reference: str) -> ValidationChecker:
    """Resolve a reference into a checker instance.

    Classes are instantiated with no arguments. Anything else is used as-is,
    so a module-level checker instance stays shared between containers.

    Args:
        reference: Reference of the form "package.module:Name".

    Returns:
        The checker instance.

    Raises:
        CheckerLoadError: If the reference cannot be imported, the class cannot
            be instantiated, or the result is not a ValidationChecker.
    """
    target = _import_target(reference)

    if isinstance(target, type):
        if not issubclass(target, ValidationChecker):
            raise CheckerLoadError(
                reference, f"{target.__name__} is not a ValidationChecker subclass"
            )
        try:
            checker = target()
        except Exception as e:
            raise CheckerLoadError(
                reference, f"failed to instantiate {target.__name__}: {e}"
            ) from e
    else:
        checker = target

    if not isinstance(checker, ValidationChecker):
        raise CheckerLoadError(
            reference, f"{type(checker).__name__} is not a ValidationChecker"
        )

    return checker


def build_container(
    references: Iterable[str],
    container: ValidationContainer | None = None,
) -> ValidationContainer:
    """Resolve references and register the checkers in order.

    Args:
        references: Checker references, in registration order.
        container: Existing container to extend. A new one is created if None.

    Returns:
        The populated container.

    Raises:
        CheckerLoadError: On the first reference that fails to resolve.
    """
    if container is None:
        container = ValidationContainer()

    for reference in references:
        checker = resolve_checker(reference)
        if container.contains_checker(checker):
            logger.warning(
                "Checker '%s' is already registered; it will run more than once",
                reference,
            )
        container.add_checker(checker)
        logger.debug(
            "Registered checker %s from '%s' at position %d",
            type(checker).__name__,
            reference,
            len(container),
        )

    return container
