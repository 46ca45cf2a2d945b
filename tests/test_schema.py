"""
Tests for structural validation — raw documents into typed manifests.
"""

import pytest

from modplan.core.services.manifest.schema import validate_document
from tests.factories import minimal_document


def _module(**overrides) -> dict:
    mod = {
        "id": "base.system",
        "description": "Base system",
        "install": ["apt-get update"],
        "verify": ["curl --version"],
    }
    mod.update(overrides)
    return mod


def _locations(result) -> list[str]:
    return [i.location for i in result.issues]


class TestValidateDocument:
    """validate_document() tests."""

    def test_minimal_document(self):
        result = validate_document(minimal_document())
        assert result.ok
        assert result.manifest.modules[0].id == "base.system"
        assert result.issues == ()

    def test_applies_defaults(self):
        result = validate_document(minimal_document())
        mod = result.manifest.modules[0]
        assert mod.phase == 1
        assert mod.run_as.value == "target_user"
        assert mod.optional is False
        assert mod.enabled_by_default is True
        assert mod.generated is True

    def test_non_mapping(self):
        result = validate_document(["not", "a", "mapping"])
        assert not result.ok
        assert "mapping" in result.issues[0].message

    @pytest.mark.parametrize("version", [0, -1, 1.5, "1", True])
    def test_rejects_bad_version(self, version):
        result = validate_document(minimal_document(version=version))
        assert not result.ok
        assert "version" in _locations(result)

    @pytest.mark.parametrize("manifest_id", ["", "TestManifest"])
    def test_rejects_bad_manifest_id(self, manifest_id):
        assert not validate_document(minimal_document(id=manifest_id)).ok

    def test_accepts_underscore_manifest_id(self):
        assert validate_document(minimal_document(id="test_manifest")).ok

    def test_missing_defaults(self):
        doc = minimal_document()
        del doc["defaults"]
        result = validate_document(doc)
        assert not result.ok
        assert "defaults" in _locations(result)

    def test_empty_modules(self):
        result = validate_document(minimal_document(modules=[]))
        assert not result.ok
        assert "modules" in _locations(result)

    def test_module_id_issue_points_at_field(self):
        result = validate_document(minimal_document(modules=[_module(id="Invalid-Module-ID")]))
        assert not result.ok
        issue = result.issues[0]
        assert issue.location == "modules.0.id"
        assert "lowercase" in issue.message
        assert not issue.message.startswith("Value error")

    def test_runner_outside_allowlist(self):
        mod = _module(
            id="lang.python", install=[],
            verified_installer={"tool": "python", "runner": "python", "args": []},
        )
        result = validate_document(minimal_document(modules=[mod]))
        assert not result.ok
        assert "modules.0.verified_installer.runner" in _locations(result)

    def test_sh_runner_allowed(self):
        mod = _module(
            id="tools.test", install=[],
            verified_installer={"tool": "test", "runner": "sh", "args": ["-s"]},
        )
        assert validate_document(minimal_document(modules=[mod])).ok

    def test_duplicate_ids(self):
        result = validate_document(minimal_document(modules=[_module(), _module()]))
        assert not result.ok
        assert any("Duplicate module ID" in i.message for i in result.issues)

    def test_collects_every_issue(self):
        result = validate_document({
            "version": -1,
            "name": "",
            "id": "UPPERCASE",
            "defaults": {"user": "", "workspace_root": "", "mode": "invalid"},
            "modules": [],
        })
        assert not result.ok
        assert len(result.issues) >= 5
        assert result.error_message().count("\n") == len(result.issues) - 1

    def test_unknown_keys_ignored(self):
        mod = _module(installed_check={"run_as": "root", "command": "which curl"}, extra_field=1)
        result = validate_document(minimal_document(modules=[mod], generator="x"))
        assert result.ok
        assert result.manifest.modules[0].installed_check.command == "which curl"

    def test_metadata_passes_through(self):
        mod = _module(tags=["critical"], notes=["a", "b"], aliases=["sys"])
        result = validate_document(minimal_document(modules=[mod]))
        m = result.manifest.modules[0]
        assert m.tags == ["critical"]
        assert len(m.notes) == 2
        assert m.aliases == ["sys"]
