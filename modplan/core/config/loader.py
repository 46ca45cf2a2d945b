"""
Manifest loader — reads manifest.yaml into domain models.

This is the primary entry point for loading a manifest. It reads YAML,
runs structural validation, and returns typed domain objects. The
``parse_*`` functions report every problem as data; ``load_manifest``
raises ``ManifestError`` for callers that prefer exceptions.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from modplan.core.models.manifest import Manifest
from modplan.core.models.validation import StructuralIssue
from modplan.core.services.manifest.schema import validate_document

logger = logging.getLogger(__name__)

# Default manifest filename
MANIFEST_FILE = "manifest.yaml"

# Env var overriding manifest discovery
MANIFEST_ENV = "MODPLAN_MANIFEST"


class ManifestError(Exception):
    """Raised when the manifest is missing, unreadable or malformed."""


@dataclass(frozen=True)
class ParseResult:
    """Outcome of reading and structurally validating a manifest."""

    manifest: Manifest | None = None
    error: str | None = None
    issues: tuple[StructuralIssue, ...] = ()

    @property
    def success(self) -> bool:
        return self.manifest is not None and self.error is None


def parse_manifest_string(text: str, source: str = "<string>") -> ParseResult:
    """Parse manifest YAML text.

    Args:
        text: YAML document.
        source: Label used in error messages.

    Returns:
        ParseResult with ``manifest`` on success, otherwise ``error`` and
        (for structural problems) ``issues``.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        return ParseResult(error=f"Invalid YAML in {source}: {e}")

    if not isinstance(data, dict):
        return ParseResult(
            error=f"Expected a YAML mapping in {source}, got {type(data).__name__}",
        )

    structure = validate_document(data)
    if not structure.ok:
        return ParseResult(
            error=f"Invalid manifest in {source}:\n{structure.error_message()}",
            issues=structure.issues,
        )

    manifest = structure.manifest
    logger.info("Loaded manifest '%s' with %d modules", manifest.id, len(manifest.modules))
    return ParseResult(manifest=manifest)


def parse_manifest_file(path: Path | str) -> ParseResult:
    """Read and parse a manifest file. Never raises for bad input."""
    path = Path(path)
    if not path.is_file():
        return ParseResult(error=f"Manifest file not found: {path}")

    logger.debug("Loading manifest from %s", path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        return ParseResult(error=f"Cannot read {path}: {e}")

    return parse_manifest_string(raw, source=str(path))


def find_manifest_file(start_dir: Path | None = None) -> Path | None:
    """Search for manifest.yaml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to manifest.yaml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / MANIFEST_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def resolve_manifest_path(explicit: Path | None = None) -> Path | None:
    """Manifest path precedence: explicit > $MODPLAN_MANIFEST > upward search."""
    if explicit is not None:
        return explicit
    env_path = os.environ.get(MANIFEST_ENV)
    if env_path:
        return Path(env_path)
    return find_manifest_file()


def load_manifest(path: Path | None = None) -> Manifest:
    """Load and structurally validate the manifest.

    Args:
        path: Explicit path to the manifest. If None, uses
            ``resolve_manifest_path``.

    Returns:
        Validated Manifest model.

    Raises:
        ManifestError: If the file is missing or invalid.
    """
    path = resolve_manifest_path(path)
    if path is None:
        raise ManifestError(
            f"No {MANIFEST_FILE} found. Specify --manifest or set {MANIFEST_ENV}."
        )

    result = parse_manifest_file(path)
    if not result.success:
        raise ManifestError(result.error)
    return result.manifest
