"""
Manifest service — package re-exports.

Layers (each only imports from the ones above it):

    schema     raw document → typed Manifest (structural)
    graph      dependency graph utilities
    checks     semantic validation engine
    selection  selection / planning engine
    routing    generated-installer routing flags
    report     human-readable rendering

    from modplan.core.services.manifest import validate_manifest, resolve_selection
"""

# ── L0: Schema ──
from modplan.core.services.manifest.schema import (  # noqa: F401
    StructureResult,
    validate_document,
)

# ── L1: Domain ──
from modplan.core.services.manifest.graph import (  # noqa: F401
    dependency_closure,
    dependents,
    install_order,
    module_category,
    to_function_name,
    transitive_dependencies,
)
from modplan.core.services.manifest.checks import (  # noqa: F401
    RESERVED_FUNCTION_NAMES,
    detect_dependency_cycles,
    validate_dependency_existence,
    validate_function_name_uniqueness,
    validate_manifest,
    validate_phase_ordering,
    validate_reserved_names,
    validate_verified_installer_runner,
)

# ── L2: Resolver ──
from modplan.core.services.manifest.selection import (  # noqa: F401
    LEGACY_SKIP_FLAGS,
    apply_legacy_skips,
    resolve_selection,
)
from modplan.core.services.manifest.routing import (  # noqa: F401
    GeneratedRouting,
    module_installer,
    use_generated_for_category,
    use_generated_for_module,
)

# ── Rendering ──
from modplan.core.services.manifest.report import (  # noqa: F401
    format_module_list,
    format_plan,
    format_structural_issues,
    format_validation_report,
)
