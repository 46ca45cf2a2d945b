"""
Manifest model — the ordered collection of modules plus global defaults.

This is the single source of truth for what can be installed. Module
declaration order is significant: it is the tiebreak used when ordering
an execution plan within a phase.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modplan.core.models.module import Module, validate_dotted_id


class ManifestDefaults(BaseModel):
    """Install-wide defaults applied by the orchestrator."""

    model_config = ConfigDict(frozen=True)

    user: str = Field(min_length=1)
    workspace_root: str = Field(min_length=1)
    mode: Literal["vibe", "safe"] = "vibe"


class Manifest(BaseModel):
    """Root manifest document."""

    model_config = ConfigDict(frozen=True)

    version: int = Field(gt=0, strict=True)
    name: str = Field(min_length=1)
    id: str
    defaults: ManifestDefaults
    modules: list[Module] = Field(min_length=1)

    @field_validator("id")
    @classmethod
    def _id_format(cls, v: str) -> str:
        return validate_dotted_id(v, "Manifest ID")

    @model_validator(mode="after")
    def _unique_module_ids(self) -> "Manifest":
        seen: set[str] = set()
        dupes: list[str] = []
        for mod in self.modules:
            if mod.id in seen and mod.id not in dupes:
                dupes.append(mod.id)
            seen.add(mod.id)
        if dupes:
            raise ValueError(f"Duplicate module ID: {', '.join(dupes)}")
        return self

    # ── Lookups ──────────────────────────────────────────────────

    def module_ids(self) -> list[str]:
        """Module ids in declaration order."""
        return [m.id for m in self.modules]

    def module_map(self) -> dict[str, Module]:
        """Insertion-ordered id → Module mapping."""
        return {m.id: m for m in self.modules}

    def get_module(self, module_id: str) -> Module | None:
        """Look up a module by id."""
        for mod in self.modules:
            if mod.id == module_id:
                return mod
        return None

    def phases(self) -> list[int]:
        """Distinct phases present on at least one module, ascending."""
        return sorted({m.phase for m in self.modules})

    def categories(self) -> list[str]:
        """Distinct module categories in first-seen order."""
        out: list[str] = []
        for mod in self.modules:
            if mod.category not in out:
                out.append(mod.category)
        return out
