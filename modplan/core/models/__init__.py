"""
Domain models — Pydantic types and result dataclasses.

All models are re-exported here for convenient access:

    from modplan.core.models import Manifest, Module, ExecutionPlan
"""

from modplan.core.models.manifest import Manifest, ManifestDefaults
from modplan.core.models.module import (
    ALLOWED_RUNNERS,
    InstalledCheck,
    Module,
    RunAs,
    VerifiedInstaller,
    to_function_name,
)
from modplan.core.models.selection import (
    ExecutionPlan,
    SelectionCode,
    SelectionDirectives,
    SelectionIssue,
    SelectionResult,
)
from modplan.core.models.validation import (
    IssueCode,
    StructuralIssue,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "ALLOWED_RUNNERS",
    # selection.py
    "ExecutionPlan",
    "InstalledCheck",
    # validation.py
    "IssueCode",
    # manifest.py
    "Manifest",
    "ManifestDefaults",
    # module.py
    "Module",
    "RunAs",
    "SelectionCode",
    "SelectionDirectives",
    "SelectionIssue",
    "SelectionResult",
    "StructuralIssue",
    "ValidationIssue",
    "ValidationResult",
    "VerifiedInstaller",
    "to_function_name",
]
