"""
Module model — a single installable unit declared in the manifest.

Modules are immutable once constructed. The dependency graph is held as
id strings; resolution always goes through ``Manifest.module_map()``.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator, model_validator

# Lowercase dotted identifier: each segment starts with a letter.
MODULE_ID_PATTERN = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)*$")

# Security allowlist for verified installer runners
ALLOWED_RUNNERS = ("bash", "sh")

# Prefix of every generated installer entrypoint
FUNCTION_PREFIX = "install_"


def to_function_name(module_id: str) -> str:
    """Canonical generated entrypoint name for a module id."""
    return FUNCTION_PREFIX + module_id.replace(".", "_")


def validate_dotted_id(value: str, what: str = "id") -> str:
    """Shared check for module and manifest identifiers."""
    if not value:
        raise ValueError(f"{what} must not be empty")
    if not MODULE_ID_PATTERN.match(value):
        raise ValueError(
            f"{what} '{value}' must be lowercase letters, digits and "
            "underscores in dot-separated segments, each starting with a letter"
        )
    return value


class RunAs(str, Enum):
    """Which account executes a module's install directives."""

    TARGET_USER = "target_user"
    ROOT = "root"
    CURRENT = "current"


class VerifiedInstaller(BaseModel):
    """Upstream installer script fetched and checksum-verified before running."""

    model_config = ConfigDict(frozen=True)

    tool: str = Field(min_length=1)
    runner: str
    args: list[str] = Field(default_factory=list)

    @field_validator("runner")
    @classmethod
    def _runner_allowed(cls, v: str) -> str:
        if v not in ALLOWED_RUNNERS:
            raise ValueError(
                f"runner '{v}' is not allowed (expected one of: {', '.join(ALLOWED_RUNNERS)})"
            )
        return v


class InstalledCheck(BaseModel):
    """Fast probe telling whether the module is already present."""

    model_config = ConfigDict(frozen=True)

    run_as: RunAs = RunAs.TARGET_USER
    command: str = Field(min_length=1)


class Module(BaseModel):
    """One entry of the manifest's ``modules`` list.

    Graph-affecting fields are ``id``, ``dependencies`` and ``phase``.
    Everything else is carried through for downstream code generation.
    """

    model_config = ConfigDict(frozen=True)

    # ── Identity ─────────────────────────────────────────────────
    id: str
    description: str = Field(min_length=1)

    # ── Graph ────────────────────────────────────────────────────
    dependencies: list[str] = Field(default_factory=list)
    phase: int = Field(default=1, ge=1, le=10, strict=True)

    # ── Execution ────────────────────────────────────────────────
    install: list[str] = Field(default_factory=list)
    verify: list[str] = Field(min_length=1)
    run_as: RunAs = RunAs.TARGET_USER
    verified_installer: VerifiedInstaller | None = None
    installed_check: InstalledCheck | None = None

    # ── Selection flags ──────────────────────────────────────────
    optional: bool = False
    enabled_by_default: bool = True
    generated: bool = True

    # ── Metadata ─────────────────────────────────────────────────
    tags: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    aliases: list[str] = Field(default_factory=list)
    docs_url: HttpUrl | None = None

    @field_validator("id")
    @classmethod
    def _id_format(cls, v: str) -> str:
        return validate_dotted_id(v, "Module ID")

    @model_validator(mode="after")
    def _install_present(self) -> "Module":
        if not self.install and self.verified_installer is None and self.generated:
            raise ValueError(
                "install must not be empty unless verified_installer is set "
                "or generated is false"
            )
        return self

    @property
    def category(self) -> str:
        """First id segment (``lang`` for ``lang.bun``)."""
        return self.id.split(".", 1)[0]

    @property
    def function_name(self) -> str:
        """Canonical generated entrypoint name."""
        return to_function_name(self.id)
