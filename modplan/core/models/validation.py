"""
Validation result types — returned as data, never raised.

Every check in the semantic validation engine produces a list of
``ValidationIssue``. ``validate_manifest`` folds them into a
``ValidationResult``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class IssueCode(str, Enum):
    """Machine-readable semantic validation error kinds."""

    MISSING_DEPENDENCY = "MISSING_DEPENDENCY"
    DEPENDENCY_CYCLE = "DEPENDENCY_CYCLE"
    PHASE_VIOLATION = "PHASE_VIOLATION"
    FUNCTION_NAME_COLLISION = "FUNCTION_NAME_COLLISION"
    RESERVED_NAME_COLLISION = "RESERVED_NAME_COLLISION"
    INVALID_VERIFIED_INSTALLER_RUNNER = "INVALID_VERIFIED_INSTALLER_RUNNER"


@dataclass(frozen=True)
class ValidationIssue:
    """One semantic violation, attributed to a module."""

    code: IssueCode
    message: str
    module_id: str
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "module_id": self.module_id,
            "context": self.context,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Combined outcome of all semantic checks."""

    errors: tuple[ValidationIssue, ...] = ()

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    def codes(self) -> list[str]:
        """Error codes in report order (handy for assertions and summaries)."""
        return [e.code.value for e in self.errors]

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass(frozen=True)
class StructuralIssue:
    """A per-field problem found while turning a raw document into a Manifest."""

    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}" if self.location else self.message

    def to_dict(self) -> dict:
        return {"location": self.location, "message": self.message}
