"""
Manifest check use case — structural then semantic validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from modplan.core.config.loader import parse_manifest_file, resolve_manifest_path
from modplan.core.models.manifest import Manifest
from modplan.core.models.validation import StructuralIssue, ValidationResult
from modplan.core.services.manifest.checks import validate_manifest


@dataclass
class ManifestCheckResult:
    """Result of validating a manifest file."""

    manifest_path: Path | None = None
    manifest: Manifest | None = None
    error: str | None = None
    structural: list[StructuralIssue] = field(default_factory=list)
    validation: ValidationResult | None = None

    @property
    def valid(self) -> bool:
        return (
            self.error is None
            and self.validation is not None
            and self.validation.valid
        )

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "manifest_path": str(self.manifest_path) if self.manifest_path else None,
            "manifest_id": self.manifest.id if self.manifest else None,
            "module_count": len(self.manifest.modules) if self.manifest else 0,
            "error": self.error,
            "structural_errors": [i.to_dict() for i in self.structural],
            "errors": [e.to_dict() for e in self.validation.errors] if self.validation else [],
        }


def check_manifest(manifest_path: Path | None = None) -> ManifestCheckResult:
    """Validate a manifest file.

    Structural problems block semantic validation: there is no graph to
    analyse over a malformed document.

    Args:
        manifest_path: Optional explicit path; otherwise discovered.
    """
    result = ManifestCheckResult()

    path = resolve_manifest_path(manifest_path)
    if path is None:
        result.error = "No manifest.yaml found."
        return result
    result.manifest_path = path

    parsed = parse_manifest_file(path)
    if not parsed.success:
        result.error = parsed.error
        result.structural = list(parsed.issues)
        return result

    result.manifest = parsed.manifest
    result.validation = validate_manifest(parsed.manifest)
    return result
