"""
Human-readable rendering of validation results, plans and module lists.

All output is deterministic for a given input: the same manifest and
directives always render to byte-identical text.
"""

from __future__ import annotations

from modplan.core.models.manifest import Manifest
from modplan.core.models.selection import SelectionResult
from modplan.core.models.validation import IssueCode, StructuralIssue, ValidationResult

# Actionable hint per error kind
_HINTS: dict[IssueCode, tuple[str, ...]] = {
    IssueCode.MISSING_DEPENDENCY: ("Check spelling or add the missing module",),
    IssueCode.DEPENDENCY_CYCLE: ("Remove one dependency to break the cycle",),
    IssueCode.PHASE_VIOLATION: (
        "Move dependency to earlier phase or move module to later phase",
    ),
    IssueCode.FUNCTION_NAME_COLLISION: (
        "Rename one of the colliding modules to use a different ID",
    ),
    IssueCode.RESERVED_NAME_COLLISION: (
        "Rename the module to avoid the reserved function name",
    ),
    IssueCode.INVALID_VERIFIED_INSTALLER_RUNNER: (
        'SECURITY: Only "bash" or "sh" are allowed as runners',
        'Change verified_installer.runner to "bash" or "sh"',
    ),
}

# Kinds whose context carries an extra suggestion line
_WITH_SUGGESTION = {IssueCode.FUNCTION_NAME_COLLISION, IssueCode.RESERVED_NAME_COLLISION}


def format_validation_report(result: ValidationResult) -> str:
    """Render a semantic validation result.

    A single success line when valid; otherwise one block per error
    followed by the total count.
    """
    if result.valid:
        return "✓ Manifest validation passed"

    lines = ["✗ Manifest validation failed:", ""]
    for error in result.errors:
        lines.append(f"  [{error.code.value}] {error.message}")
        for hint in _HINTS.get(error.code, ()):
            lines.append(f"    → {hint}")
        suggestion = error.context.get("suggestion")
        if error.code in _WITH_SUGGESTION and suggestion:
            lines.append(f"    → {suggestion}")
        lines.append("")

    lines.append(f"Total: {len(result.errors)} error(s)")
    return "\n".join(lines)


def format_structural_issues(issues: tuple[StructuralIssue, ...] | list[StructuralIssue]) -> str:
    """Render schema-level problems, one per line."""
    lines = ["✗ Manifest structure is invalid:", ""]
    lines.extend(f"  {issue}" for issue in issues)
    lines.append("")
    lines.append(f"Total: {len(issues)} error(s)")
    return "\n".join(lines)


def format_plan(manifest: Manifest, result: SelectionResult) -> str:
    """Render an execution plan, grouped by phase.

    Module lines use the ``  - <id>`` form so the output is easy to grep.
    """
    if not result.ok or result.plan is None:
        lines = ["✗ Could not resolve module selection:", ""]
        for err in result.errors:
            lines.append(f"  [{err.code.value}] {err.message}")
        lines.append("")
        lines.append(f"Total: {len(result.errors)} error(s)")
        return "\n".join(lines)

    modules = manifest.module_map()
    lines = [f"Execution Plan ({len(result.plan)} modules)", ""]

    current_phase: int | None = None
    for module_id in result.plan.modules:
        phase = modules[module_id].phase
        if phase != current_phase:
            if current_phase is not None:
                lines.append("")
            lines.append(f"Phase {phase}:")
            current_phase = phase
        lines.append(f"  - {module_id}")

    if result.skipped:
        lines.append("")
        lines.append(f"Skipped: {', '.join(result.skipped)}")

    for warning in result.warnings:
        lines.append(f"⚠ {warning}")

    return "\n".join(lines)


def format_module_list(manifest: Manifest) -> str:
    """Render every module grouped by category, in declaration order."""
    lines = [f"Available Modules — {manifest.name} ({len(manifest.modules)})", ""]
    for category in manifest.categories():
        lines.append(f"{category}:")
        for mod in manifest.modules:
            if mod.category != category:
                continue
            marker = "*" if mod.enabled_by_default else " "
            lines.append(f"  {marker} {mod.id:<32} phase {mod.phase:<2}  {mod.description}")
        lines.append("")
    lines.append("* = enabled by default")
    return "\n".join(lines)
