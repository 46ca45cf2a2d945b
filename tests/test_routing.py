"""
Tests for generated-installer routing flags.
"""

import pytest

from modplan.core.services.manifest.routing import (
    GeneratedRouting,
    module_installer,
    use_generated_for_category,
    use_generated_for_module,
)

MIGRATED = {"MODPLAN_GENERATED_MIGRATED_CATEGORIES": "lang,tools"}


class TestCategoryRouting:

    def test_nothing_set_means_legacy(self):
        assert use_generated_for_category("lang", environ={}) is False

    def test_migrated_category(self):
        assert use_generated_for_category("lang", environ=MIGRATED) is True
        assert use_generated_for_category("agents", environ=MIGRATED) is False

    def test_global_off_forces_legacy(self):
        env = {**MIGRATED, "MODPLAN_USE_GENERATED": "0"}
        assert use_generated_for_category("lang", environ=env) is False

    def test_global_on_does_not_migrate_others(self):
        env = {**MIGRATED, "MODPLAN_USE_GENERATED": "1"}
        assert use_generated_for_category("agents", environ=env) is False

    def test_category_override_wins_over_global(self):
        env = {"MODPLAN_USE_GENERATED": "0", "MODPLAN_USE_GENERATED_AGENTS": "1"}
        assert use_generated_for_category("agents", environ=env) is True

    def test_category_override_can_disable(self):
        env = {**MIGRATED, "MODPLAN_USE_GENERATED_LANG": "0"}
        assert use_generated_for_category("lang", environ=env) is False
        assert use_generated_for_category("tools", environ=env) is True

    def test_whitespace_in_list(self):
        env = {"MODPLAN_GENERATED_MIGRATED_CATEGORIES": " lang , tools ,"}
        routing = GeneratedRouting.from_env(env)
        assert routing.migrated == frozenset({"lang", "tools"})


class TestModuleRouting:

    def test_uses_category(self):
        assert use_generated_for_module("lang.bun", environ=MIGRATED) is True
        assert use_generated_for_module("agents.claude", environ=MIGRATED) is False

    @pytest.mark.parametrize("module_id,expected", [
        ("lang.bun", "install_lang_bun"),
        ("tools.ast_grep", "install_tools_ast_grep"),
        ("agents.claude", ""),
    ])
    def test_module_installer(self, module_id, expected):
        assert module_installer(module_id, environ=MIGRATED) == expected

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("MODPLAN_GENERATED_MIGRATED_CATEGORIES", "stack")
        monkeypatch.delenv("MODPLAN_USE_GENERATED", raising=False)
        assert module_installer("stack.ultimate_bug_scanner") == "install_stack_ultimate_bug_scanner"
