"""
Tests for the dependency graph helpers.
"""

from modplan.core.services.manifest.graph import (
    dependency_closure,
    dependents,
    install_order,
    module_category,
    transitive_dependencies,
)
from tests.factories import make_manifest, make_module


class TestModuleCategory:

    def test_prefix(self):
        assert module_category("agents.claude") == "agents"
        assert module_category("stack.ultimate_bug_scanner") == "stack"

    def test_bare_id(self):
        assert module_category("htop") == "htop"


class TestTransitiveDependencies:

    def test_no_dependencies(self, chain_manifest):
        assert transitive_dependencies(chain_manifest, "base.system") == []

    def test_chain(self, chain_manifest):
        assert transitive_dependencies(chain_manifest, "agents.claude") == ["lang.bun", "base.system"]

    def test_diamond_collapsed(self):
        manifest = make_manifest(
            make_module("a.base"),
            make_module("b.left", ["a.base"]),
            make_module("c.right", ["a.base"]),
            make_module("d.top", ["b.left", "c.right"]),
        )
        deps = transitive_dependencies(manifest, "d.top")
        assert sorted(deps) == ["a.base", "b.left", "c.right"]
        assert len(deps) == 3

    def test_unknown_module(self, chain_manifest):
        assert transitive_dependencies(chain_manifest, "nope.nothing") == []

    def test_dangling_reference_skipped(self):
        manifest = make_manifest(make_module("a.one", ["ghost.dep"]))
        assert transitive_dependencies(manifest, "a.one") == []

    def test_terminates_on_cycle(self):
        manifest = make_manifest(make_module("a.one", ["b.two"]), make_module("b.two", ["a.one"]))
        assert transitive_dependencies(manifest, "a.one") == ["b.two"]


class TestDependencyClosure:

    def test_includes_roots(self, chain_manifest):
        assert dependency_closure(chain_manifest, ["lang.bun"]) == {"lang.bun", "base.system"}

    def test_empty(self, chain_manifest):
        assert dependency_closure(chain_manifest, []) == set()


class TestDependents:

    def test_direct_only(self, sample_manifest):
        assert dependents(sample_manifest, "lang.rust") == ["tools.ast_grep", "stack.ultimate_bug_scanner"]

    def test_leaf(self, sample_manifest):
        assert dependents(sample_manifest, "agents.claude") == []


class TestInstallOrder:

    def test_declared_order_kept_when_consistent(self, sample_manifest):
        assert install_order(sample_manifest) == sample_manifest.module_ids()

    def test_phases_ascending(self):
        manifest = make_manifest(
            make_module("late.one", phase=5),
            make_module("early.one", phase=1),
            make_module("mid.one", phase=3),
        )
        assert install_order(manifest) == ["early.one", "mid.one", "late.one"]

    def test_dependency_before_dependent_within_phase(self):
        manifest = make_manifest(
            make_module("tools.ast_grep", ["lang.rust"], phase=6),
            make_module("tools.atuin", phase=6),
            make_module("lang.rust", phase=6),
        )
        assert install_order(manifest) == ["tools.atuin", "lang.rust", "tools.ast_grep"]

    def test_every_module_once(self, sample_manifest):
        order = install_order(sample_manifest)
        assert sorted(order) == sorted(sample_manifest.module_ids())

    def test_dependencies_precede_dependents(self, sample_manifest):
        order = install_order(sample_manifest)
        position = {mid: i for i, mid in enumerate(order)}
        for mod in sample_manifest.modules:
            for dep in mod.dependencies:
                assert position[dep] < position[mod.id]

    def test_cycle_within_phase_still_lists_all(self):
        manifest = make_manifest(
            make_module("a.one", ["b.two"]),
            make_module("b.two", ["a.one"]),
            make_module("c.three"),
        )
        assert install_order(manifest) == ["c.three", "a.one", "b.two"]
