"""
L0 Schema — structural validation of a raw manifest document.

Turns an untyped mapping (as produced by a YAML loader) into a typed
``Manifest``, applying field defaults. Purely local, per-field and
per-module checks; graph analysis lives in ``checks``.
No I/O.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from modplan.core.models.manifest import Manifest
from modplan.core.models.validation import StructuralIssue

logger = logging.getLogger(__name__)

# Prefix pydantic puts in front of messages raised from our validators
_VALUE_ERROR_PREFIX = "Value error, "


@dataclass(frozen=True)
class StructureResult:
    """Either a typed manifest or the structural issues that prevented one."""

    manifest: Manifest | None = None
    issues: tuple[StructuralIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return self.manifest is not None and not self.issues

    def error_message(self) -> str:
        """All issues on one line each, for exceptions and CLI output."""
        return "\n".join(str(i) for i in self.issues)


def _location(loc: tuple) -> str:
    return ".".join(str(part) for part in loc)


def _issue_from_error(err: dict) -> StructuralIssue:
    msg = str(err.get("msg", "invalid value"))
    if msg.startswith(_VALUE_ERROR_PREFIX):
        msg = msg[len(_VALUE_ERROR_PREFIX):]
    return StructuralIssue(location=_location(tuple(err.get("loc", ()))), message=msg)


def validate_document(document: Any) -> StructureResult:
    """Validate a raw document and build a Manifest.

    Args:
        document: Parsed document (normally a dict from ``yaml.safe_load``).

    Returns:
        StructureResult with ``manifest`` set on success, or ``issues``
        listing every structural problem found.
    """
    if not isinstance(document, dict):
        return StructureResult(issues=(
            StructuralIssue(
                location="",
                message=f"Expected a mapping at the top level, got {type(document).__name__}",
            ),
        ))

    try:
        manifest = Manifest.model_validate(document)
    except ValidationError as e:
        issues = tuple(_issue_from_error(err) for err in e.errors())
        logger.debug("Structural validation failed with %d issue(s)", len(issues))
        return StructureResult(issues=issues)

    logger.debug(
        "Structural validation passed: manifest '%s' with %d modules",
        manifest.id, len(manifest.modules),
    )
    return StructureResult(manifest=manifest)
