"""
L1 Domain — semantic manifest validation (pure).

One check per concern, each returning a list of ``ValidationIssue``.
Checks never raise for expected violations and never stop at the first
problem. ``validate_manifest`` sequences them so dangling references do
not cascade into nonsensical cycle or phase reports.
No I/O.
"""

from __future__ import annotations

import logging

from modplan.core.models.manifest import Manifest
from modplan.core.models.module import ALLOWED_RUNNERS, FUNCTION_PREFIX, to_function_name
from modplan.core.models.validation import IssueCode, ValidationIssue, ValidationResult

logger = logging.getLogger(__name__)

# ── Reserved entrypoint names ───────────────────────────────────

# Category entrypoints emitted next to the per-module functions
RESERVED_CATEGORIES = (
    "base", "lang", "tools", "agents", "cloud", "stack", "acfs",
    "shell", "cli", "db", "users", "filesystem", "network",
)

RESERVED_FUNCTION_NAMES: frozenset[str] = frozenset({
    # Orchestrator
    "install_all",
    # Categories
    *(FUNCTION_PREFIX + c for c in RESERVED_CATEGORIES),
    # Doctor
    "run_manifest_checks",
    # Logging helpers
    "log_step", "log_section", "log_success", "log_error", "log_warn", "log_info",
    # Checksum / security helpers
    "acfs_security_init", "load_checksums", "get_checksum", "verify_checksum",
    "acfs_require_contract",
    # Install state helpers
    "state_tool_done", "state_tool_skip", "state_tool_failed", "record_skipped_tool",
    # Common shell words
    "main", "usage", "help", "init", "setup", "cleanup",
    "run", "exec", "exit", "test", "true", "false",
})


def _reserved_entrypoints() -> list[str]:
    return sorted(n for n in RESERVED_FUNCTION_NAMES if n.startswith(FUNCTION_PREFIX))


# ── Dependency existence ────────────────────────────────────────


def validate_dependency_existence(manifest: Manifest) -> list[ValidationIssue]:
    """Every dependency id must name a module in the same manifest.

    One issue per dangling reference.
    """
    issues: list[ValidationIssue] = []
    known = set(manifest.module_ids())
    available = sorted(known)

    for mod in manifest.modules:
        for dep_id in mod.dependencies:
            if dep_id in known:
                continue
            issues.append(ValidationIssue(
                code=IssueCode.MISSING_DEPENDENCY,
                message=f'Module "{mod.id}" depends on "{dep_id}" which does not exist',
                module_id=mod.id,
                context={
                    "missingDependency": dep_id,
                    "availableModules": available,
                },
            ))
    return issues


# ── Cycle detection ─────────────────────────────────────────────


def detect_dependency_cycles(manifest: Manifest) -> list[ValidationIssue]:
    """Find dependency cycles and report each one once.

    Depth-first search carrying the current path, so a revisit of a node
    already on the path yields the exact cycle in traversal order. The
    dedup key is the sorted node set, so the same cycle reached from a
    different entry point is not reported twice. A self-dependency is a
    one-edge cycle.
    """
    issues: list[ValidationIssue] = []
    modules = manifest.module_map()
    finished: set[str] = set()
    reported: set[tuple[str, ...]] = set()

    def visit(module_id: str, path: list[str]) -> None:
        if module_id in path:
            start = path.index(module_id)
            cycle_path = path[start:] + [module_id]
            key = tuple(sorted(set(cycle_path)))
            if key not in reported:
                reported.add(key)
                issues.append(ValidationIssue(
                    code=IssueCode.DEPENDENCY_CYCLE,
                    message=f"Dependency cycle detected: {' → '.join(cycle_path)}",
                    module_id=cycle_path[0],
                    context={
                        "cyclePath": cycle_path,
                        "cycleLength": len(cycle_path) - 1,
                    },
                ))
            return

        if module_id in finished:
            return

        mod = modules.get(module_id)
        if mod is not None:
            next_path = path + [module_id]
            for dep_id in mod.dependencies:
                visit(dep_id, next_path)

        finished.add(module_id)

    for mod in manifest.modules:
        if mod.id not in finished:
            visit(mod.id, [])

    return issues


# ── Phase ordering ──────────────────────────────────────────────


def validate_phase_ordering(manifest: Manifest) -> list[ValidationIssue]:
    """A module may only depend on modules in the same or an earlier phase.

    Edges to unknown modules are left to the existence check.
    """
    issues: list[ValidationIssue] = []
    modules = manifest.module_map()

    for mod in manifest.modules:
        for dep_id in mod.dependencies:
            dep = modules.get(dep_id)
            if dep is None or dep.phase <= mod.phase:
                continue
            issues.append(ValidationIssue(
                code=IssueCode.PHASE_VIOLATION,
                message=(
                    f'Module "{mod.id}" (phase {mod.phase}) depends on "{dep_id}" '
                    f"(phase {dep.phase}) - dependencies must be same or earlier phase"
                ),
                module_id=mod.id,
                context={
                    "modulePhase": mod.phase,
                    "dependencyId": dep_id,
                    "dependencyPhase": dep.phase,
                },
            ))
    return issues


# ── Generated names ─────────────────────────────────────────────


def validate_function_name_uniqueness(manifest: Manifest) -> list[ValidationIssue]:
    """No two modules may canonicalize to the same entrypoint name.

    The first module of a colliding group is considered the owner; one
    issue is reported for each later module.
    """
    issues: list[ValidationIssue] = []
    groups: dict[str, list[str]] = {}
    for mod in manifest.modules:
        groups.setdefault(to_function_name(mod.id), []).append(mod.id)

    for func_name, module_ids in groups.items():
        if len(module_ids) < 2:
            continue
        first = module_ids[0]
        for module_id in module_ids[1:]:
            issues.append(ValidationIssue(
                code=IssueCode.FUNCTION_NAME_COLLISION,
                message=(
                    f'Module "{module_id}" generates function "{func_name}" '
                    f'which collides with "{first}"'
                ),
                module_id=module_id,
                context={
                    "functionName": func_name,
                    "collidingModules": list(module_ids),
                    "suggestion": (
                        "Rename module to avoid collision. Consider using a different "
                        "category prefix or more specific naming."
                    ),
                },
            ))
    return issues


def validate_reserved_names(manifest: Manifest) -> list[ValidationIssue]:
    """Generated names must not shadow orchestrator or helper entrypoints.

    Only a bare single-segment id can match: ``base`` is flagged,
    ``base.system`` is not.
    """
    issues: list[ValidationIssue] = []
    reserved = _reserved_entrypoints()

    for mod in manifest.modules:
        func_name = to_function_name(mod.id)
        if func_name not in RESERVED_FUNCTION_NAMES:
            continue
        issues.append(ValidationIssue(
            code=IssueCode.RESERVED_NAME_COLLISION,
            message=(
                f'Module "{mod.id}" generates function "{func_name}" '
                "which is a reserved orchestrator name"
            ),
            module_id=mod.id,
            context={
                "functionName": func_name,
                "reservedNames": reserved,
                "suggestion": f"Rename the module. Reserved names include: {', '.join(reserved)}",
            },
        ))
    return issues


# ── Security ────────────────────────────────────────────────────


def validate_verified_installer_runner(manifest: Manifest) -> list[ValidationIssue]:
    """``verified_installer.runner`` must be in the interpreter allowlist.

    Re-checked here even though the schema enforces it, so manifests
    assembled without schema validation are still covered.
    """
    issues: list[ValidationIssue] = []
    allowed = " or ".join(f'"{r}"' for r in ALLOWED_RUNNERS)

    for mod in manifest.modules:
        vi = mod.verified_installer
        if vi is None or vi.runner in ALLOWED_RUNNERS:
            continue
        issues.append(ValidationIssue(
            code=IssueCode.INVALID_VERIFIED_INSTALLER_RUNNER,
            message=(
                f'Module "{mod.id}" has invalid verified_installer.runner "{vi.runner}" '
                f"- only {allowed} allowed"
            ),
            module_id=mod.id,
            context={
                "runner": vi.runner,
                "allowedRunners": list(ALLOWED_RUNNERS),
                "tool": vi.tool,
            },
        ))
    return issues


# ── Combined ────────────────────────────────────────────────────


def validate_manifest(manifest: Manifest) -> ValidationResult:
    """Run every semantic check.

    Order:
      1. Dependency existence (always)
      2. Cycle detection (only if nothing failed so far)
      3. Phase ordering (only if nothing failed so far)
      4. Function name uniqueness (always)
      5. Reserved names (always)
      6. Verified installer runner allowlist (always)
    """
    errors: list[ValidationIssue] = []

    errors.extend(validate_dependency_existence(manifest))

    if not errors:
        errors.extend(detect_dependency_cycles(manifest))

    if not errors:
        errors.extend(validate_phase_ordering(manifest))

    errors.extend(validate_function_name_uniqueness(manifest))
    errors.extend(validate_reserved_names(manifest))
    errors.extend(validate_verified_installer_runner(manifest))

    if errors:
        logger.info(
            "Manifest '%s' failed validation with %d error(s)", manifest.id, len(errors),
        )
    else:
        logger.debug("Manifest '%s' passed semantic validation", manifest.id)

    return ValidationResult(errors=tuple(errors))
