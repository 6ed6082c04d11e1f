"""
Error taxonomy shared by repositories and domain services.

Repositories raise ``NotFoundError`` and ``BackendError``; the remaining
kinds are raised by domain services when a business rule blocks a call.
"""
from __future__ import annotations

from typing import Any, Optional


class AdminCoreError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(AdminCoreError):
    pass


class ConflictError(AdminCoreError):
    pass


class InvalidReferenceError(AdminCoreError):
    pass


class GuardViolationError(AdminCoreError):
    pass


class BackendError(AdminCoreError):
    """The underlying store rejected the operation."""


class NoDefaultLanguageError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("No default language configured")


class NoActiveLanguagesError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("No active languages found")


class DefaultLanguageDeletionError(GuardViolationError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f"Language '{name}' is the default language and cannot be deleted",
            details={"name": name},
        )


class ResourceInUseError(GuardViolationError):
    def __init__(self, resource: str, name: str, use_count: int) -> None:
        super().__init__(
            f"Cannot delete {resource} '{name}': it is currently in use (use_count: {use_count})",
            details={"resource": resource, "name": name, "use_count": use_count},
        )
        self.use_count = use_count
