"""
L1 Domain — module dependency graph utilities (pure).

Adjacency is keyed by module id and resolved through the manifest's
insertion-ordered module map.
No I/O.
"""

from __future__ import annotations

import heapq
import logging

from modplan.core.models.manifest import Manifest
from modplan.core.models.module import to_function_name

logger = logging.getLogger(__name__)

__all__ = [
    "dependency_closure",
    "dependents",
    "install_order",
    "module_category",
    "to_function_name",
    "transitive_dependencies",
]


def module_category(module_id: str) -> str:
    """Category prefix of a module id (``agents`` for ``agents.claude``)."""
    return module_id.split(".", 1)[0]


def transitive_dependencies(manifest: Manifest, module_id: str) -> list[str]:
    """All direct and indirect dependencies of a module.

    Diamonds are collapsed. Unknown ids (the module itself, or a
    dangling reference) contribute nothing.

    Returns:
        Dependency ids in depth-first discovery order.
    """
    modules = manifest.module_map()
    root = modules.get(module_id)
    if root is None:
        return []

    seen: set[str] = {module_id}
    out: list[str] = []
    stack = list(reversed(root.dependencies))
    while stack:
        dep_id = stack.pop()
        if dep_id in seen:
            continue
        seen.add(dep_id)
        dep = modules.get(dep_id)
        if dep is None:
            continue
        out.append(dep_id)
        stack.extend(reversed(dep.dependencies))
    return out


def dependency_closure(manifest: Manifest, module_ids: list[str]) -> set[str]:
    """The given ids plus everything they transitively depend on."""
    closure: set[str] = set(module_ids)
    for mid in module_ids:
        closure.update(transitive_dependencies(manifest, mid))
    return closure


def dependents(manifest: Manifest, module_id: str) -> list[str]:
    """Modules that depend directly on *module_id*, in declaration order."""
    return [m.id for m in manifest.modules if module_id in m.dependencies]


def install_order(manifest: Manifest) -> list[str]:
    """Order every module for execution.

    Phases run in ascending order. Inside a phase, modules are
    topologically sorted (Kahn's algorithm) with declaration order as
    the tiebreak, so a manifest declared dependency-first comes back
    in exactly its declared order.

    Edges to modules in other phases are ignored here: validation
    guarantees they point at earlier phases. If a phase still holds a
    cycle, its remaining modules are appended in declaration order.
    """
    index = {m.id: i for i, m in enumerate(manifest.modules)}
    order: list[str] = []

    for phase in manifest.phases():
        members = [m for m in manifest.modules if m.phase == phase]
        member_ids = {m.id for m in members}

        in_degree: dict[str, int] = {m.id: 0 for m in members}
        successors: dict[str, list[str]] = {m.id: [] for m in members}
        for mod in members:
            for dep in dict.fromkeys(mod.dependencies):
                if dep in member_ids and dep != mod.id:
                    in_degree[mod.id] += 1
                    successors[dep].append(mod.id)

        ready = [(index[mid], mid) for mid, deg in in_degree.items() if deg == 0]
        heapq.heapify(ready)
        placed: set[str] = set()
        while ready:
            _, mid = heapq.heappop(ready)
            order.append(mid)
            placed.add(mid)
            for succ in successors[mid]:
                in_degree[succ] -= 1
                if in_degree[succ] == 0:
                    heapq.heappush(ready, (index[succ], succ))

        leftover = [m.id for m in members if m.id not in placed]
        if leftover:
            logger.warning(
                "Phase %d has unresolved ordering (cycle?): %s",
                phase, ", ".join(leftover),
            )
            order.extend(leftover)

    return order
