"""
L2 Resolver — module selection planning.

Turns a validated manifest plus user directives into a deterministic,
dependency-closed, skip-safe execution plan. Assumes the manifest has
already passed ``validate_manifest`` (acyclic, phase-consistent).

Resolution steps:
  1. Expand legacy skip flags and check every directive target exists
  2. Pick the base selection (only > only_phase > enabled_by_default)
  3. Close over dependencies unless ``no_deps``
  4. Remove skipped modules
  5. Refuse plans where a surviving module lost a skipped dependency
  6. Order by phase, then topologically with declaration order as tiebreak
"""

from __future__ import annotations

import logging

from modplan.core.models.manifest import Manifest
from modplan.core.models.selection import (
    ExecutionPlan,
    SelectionCode,
    SelectionDirectives,
    SelectionIssue,
    SelectionResult,
)
from modplan.core.services.manifest.graph import dependency_closure, install_order

logger = logging.getLogger(__name__)

# Deprecated boolean flags → module ids they skip
LEGACY_SKIP_FLAGS: dict[str, tuple[str, ...]] = {
    "skip_postgres": ("db.postgres18",),
    "skip_vault": ("tools.vault",),
    "skip_cloud": ("cloud.wrangler", "cloud.supabase", "cloud.vercel"),
}


def _dedupe(values: list) -> list:
    return list(dict.fromkeys(values))


def apply_legacy_skips(directives: SelectionDirectives) -> list[str]:
    """The effective skip list: explicit ids first, then legacy expansions."""
    skip = _dedupe(directives.skip)
    for flag, module_ids in LEGACY_SKIP_FLAGS.items():
        if not getattr(directives, flag):
            continue
        for module_id in module_ids:
            if module_id not in skip:
                skip.append(module_id)
    return skip


def _check_directives(
    manifest: Manifest,
    only: list[str],
    skip: list[str],
    phases: list[int],
) -> list[SelectionIssue]:
    errors: list[SelectionIssue] = []
    known = set(manifest.module_ids())
    known_phases = manifest.phases()

    for directive, ids in (("only", only), ("skip", skip)):
        for module_id in ids:
            if module_id in known:
                continue
            errors.append(SelectionIssue(
                code=SelectionCode.UNKNOWN_MODULE,
                message=f"Unknown module in --{directive}: {module_id}",
                module_id=module_id,
                context={"directive": directive},
            ))

    for phase in phases:
        if phase in known_phases:
            continue
        errors.append(SelectionIssue(
            code=SelectionCode.UNKNOWN_PHASE,
            message=(
                f"Unknown phase in --only-phase: {phase} "
                f"(available: {', '.join(str(p) for p in known_phases)})"
            ),
            context={"phase": phase, "availablePhases": known_phases},
        ))

    skip_set = set(skip)
    for module_id in only:
        if module_id in skip_set:
            errors.append(SelectionIssue(
                code=SelectionCode.CONFLICTING_DIRECTIVE,
                message=f"Module {module_id} is listed in both --only and --skip",
                module_id=module_id,
            ))

    return errors


def resolve_selection(
    manifest: Manifest,
    directives: SelectionDirectives | None = None,
) -> SelectionResult:
    """Compute the execution plan for *directives*.

    Args:
        manifest: A manifest that passed semantic validation.
        directives: User selection; defaults select every module that is
            ``enabled_by_default``.

    Returns:
        SelectionResult with ``plan`` set, or with ``errors`` and no plan.
    """
    if directives is None:
        directives = SelectionDirectives()

    modules = manifest.module_map()
    only = _dedupe(directives.only)
    skip = apply_legacy_skips(directives)
    phases = _dedupe(directives.only_phase)

    # 1. Directive targets
    errors = _check_directives(manifest, only, skip, phases)
    if errors:
        logger.info("Selection rejected: %d directive error(s)", len(errors))
        return SelectionResult(errors=tuple(errors))

    warnings: list[str] = []

    # 2. Base selection
    if only:
        base = only
        if phases:
            warnings.append("--only-phase is ignored when --only is given")
    elif phases:
        wanted = set(phases)
        base = [m.id for m in manifest.modules if m.phase in wanted]
    else:
        base = [m.id for m in manifest.modules if m.enabled_by_default]

    # 3. Dependency closure
    if directives.no_deps:
        selected = set(base)
    else:
        selected = dependency_closure(manifest, base)

    # 4. Skips
    order = install_order(manifest)
    skip_set = set(skip)
    skipped = tuple(mid for mid in order if mid in selected and mid in skip_set)
    selected -= skip_set

    # 5. Skip safety
    for module_id in order:
        if module_id not in selected:
            continue
        for dep_id in modules[module_id].dependencies:
            if dep_id in selected:
                continue
            if dep_id in skip_set:
                errors.append(SelectionIssue(
                    code=SelectionCode.SKIP_SAFETY_VIOLATION,
                    message=(
                        f"Cannot skip {dep_id}: {module_id} depends on it "
                        f"(skip {module_id} too, or drop the skip)"
                    ),
                    module_id=module_id,
                    context={"missingDependency": dep_id},
                ))
            elif dep_id in modules:
                warnings.append(
                    f"{module_id} depends on {dep_id}, which is not selected (--no-deps)"
                )

    if errors:
        logger.info("Selection rejected: %d skip-safety violation(s)", len(errors))
        return SelectionResult(errors=tuple(errors), skipped=skipped)

    # 6. Ordering
    plan = ExecutionPlan.from_order([mid for mid in order if mid in selected])
    for warning in warnings:
        logger.warning(warning)
    logger.info(
        "Resolved plan: %d of %d modules (%d skipped)",
        len(plan), len(manifest.modules), len(skipped),
    )
    return SelectionResult(plan=plan, warnings=tuple(warnings), skipped=skipped)
