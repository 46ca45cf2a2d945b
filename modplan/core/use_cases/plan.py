"""
Plan use case — validate the manifest, then resolve a module selection.

Planning is refused for a manifest that fails semantic validation; the
selection engine relies on an acyclic, phase-consistent graph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from modplan.core.models.selection import SelectionDirectives, SelectionResult
from modplan.core.services.manifest.selection import resolve_selection
from modplan.core.use_cases.check import ManifestCheckResult, check_manifest

logger = logging.getLogger(__name__)


@dataclass
class PlanResult:
    """Manifest check plus, when it passed, the resolved selection."""

    check: ManifestCheckResult
    selection: SelectionResult | None = None

    @property
    def ok(self) -> bool:
        return self.check.valid and self.selection is not None and self.selection.ok

    def to_dict(self) -> dict:
        out = {"ok": self.ok, "manifest": self.check.to_dict()}
        if self.selection is not None:
            out["selection"] = self.selection.to_dict()
        return out


def plan_modules(
    manifest_path: Path | None = None,
    directives: SelectionDirectives | None = None,
) -> PlanResult:
    """Load, validate and plan in one call."""
    check = check_manifest(manifest_path)
    if not check.valid:
        logger.info("Not planning: manifest is invalid")
        return PlanResult(check=check)

    return PlanResult(check=check, selection=resolve_selection(check.manifest, directives))
