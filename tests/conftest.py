"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from modplan.core.config.loader import parse_manifest_file
from modplan.core.models import Manifest
from tests.factories import make_manifest, make_module

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory."""
    return FIXTURES


@pytest.fixture
def manifest_path() -> Path:
    """Path to the sample manifest."""
    return FIXTURES / "manifest.yaml"


@pytest.fixture
def sample_manifest(manifest_path: Path) -> Manifest:
    """The sample manifest, parsed and structurally valid."""
    result = parse_manifest_file(manifest_path)
    assert result.success, result.error
    return result.manifest


@pytest.fixture
def chain_manifest() -> Manifest:
    """base.system (1) ← lang.bun (6) ← agents.claude (7)."""
    return make_manifest(
        make_module("base.system", phase=1),
        make_module("lang.bun", ["base.system"], phase=6),
        make_module("agents.claude", ["lang.bun"], phase=7),
    )
