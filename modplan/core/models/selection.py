"""
Selection models — user directives in, execution plan out.

Directives are plain values; the plan is a frozen dataclass so the
orchestrator can hold it without worrying about mutation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field


class SelectionDirectives(BaseModel):
    """Inclusion / exclusion directives supplied by the user.

    All fields are optional and compose. The ``skip_*`` booleans are
    deprecated shorthands that expand into ``skip`` entries.
    """

    model_config = ConfigDict(frozen=True)

    only: list[str] = Field(default_factory=list)
    skip: list[str] = Field(default_factory=list)
    only_phase: list[int] = Field(default_factory=list)
    no_deps: bool = False

    # Legacy flags
    skip_postgres: bool = False
    skip_vault: bool = False
    skip_cloud: bool = False


class SelectionCode(str, Enum):
    """Planning-time error kinds."""

    UNKNOWN_MODULE = "UNKNOWN_MODULE"
    UNKNOWN_PHASE = "UNKNOWN_PHASE"
    CONFLICTING_DIRECTIVE = "CONFLICTING_DIRECTIVE"
    SKIP_SAFETY_VIOLATION = "SKIP_SAFETY_VIOLATION"


@dataclass(frozen=True)
class SelectionIssue:
    code: SelectionCode
    message: str
    module_id: str = ""
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "module_id": self.module_id,
            "context": self.context,
        }


@dataclass(frozen=True)
class ExecutionPlan:
    """Ordered module ids plus a membership predicate.

    ``modules`` is the execution order; ``selected`` backs ``should_run``.
    """

    modules: tuple[str, ...] = ()
    selected: frozenset[str] = frozenset()

    @classmethod
    def from_order(cls, modules: list[str] | tuple[str, ...]) -> "ExecutionPlan":
        return cls(modules=tuple(modules), selected=frozenset(modules))

    def should_run(self, module_id: str) -> bool:
        """Whether *module_id* is part of this plan."""
        return module_id in self.selected

    def __contains__(self, module_id: object) -> bool:
        return module_id in self.selected

    def __iter__(self) -> Iterator[str]:
        return iter(self.modules)

    def __len__(self) -> int:
        return len(self.modules)


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of one planning call.

    ``plan`` is None whenever ``errors`` is non-empty; there is no
    partial plan.
    """

    plan: ExecutionPlan | None = None
    errors: tuple[SelectionIssue, ...] = ()
    warnings: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.plan is not None and not self.errors

    def should_run(self, module_id: str) -> bool:
        return self.plan is not None and self.plan.should_run(module_id)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "plan": list(self.plan.modules) if self.plan else [],
            "skipped": list(self.skipped),
            "errors": [e.to_dict() for e in self.errors],
            "warnings": list(self.warnings),
        }
