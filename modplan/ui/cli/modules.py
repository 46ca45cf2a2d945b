"""
CLI commands for browsing manifest modules.

Thin wrappers over ``modplan.core.services.manifest``.
"""

from __future__ import annotations

import json
import sys

import click

from modplan.core.models.manifest import Manifest


def _load(ctx: click.Context) -> Manifest:
    """Load the manifest or exit 1 with the loader's message."""
    from modplan.core.config.loader import ManifestError, load_manifest

    try:
        return load_manifest(ctx.obj.get("manifest_path"))
    except ManifestError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _require(manifest: Manifest, module_id: str):
    mod = manifest.get_module(module_id)
    if mod is None:
        click.secho(f"❌ Unknown module: {module_id}", fg="red")
        sys.exit(1)
    return mod


@click.group()
def modules() -> None:
    """Modules — list, show, deps, installer."""


@modules.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_modules(ctx: click.Context, as_json: bool) -> None:
    """List every module, grouped by category."""
    from modplan.core.services.manifest.report import format_module_list

    manifest = _load(ctx)

    if as_json:
        click.echo(json.dumps([
            {
                "id": m.id,
                "category": m.category,
                "phase": m.phase,
                "enabled_by_default": m.enabled_by_default,
                "description": m.description,
            }
            for m in manifest.modules
        ], indent=2))
        return

    click.echo(format_module_list(manifest))


@modules.command()
@click.argument("module_id")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, module_id: str, as_json: bool) -> None:
    """Show one module's declaration."""
    manifest = _load(ctx)
    mod = _require(manifest, module_id)

    if as_json:
        click.echo(json.dumps(mod.model_dump(mode="json"), indent=2))
        return

    click.secho(f"📦 {mod.id}", fg="cyan", bold=True)
    click.echo(f"   {mod.description}")
    click.echo(f"   Phase: {mod.phase}   Run as: {mod.run_as.value}")
    click.echo(f"   Function: {mod.function_name}")
    if mod.dependencies:
        click.echo(f"   Depends on: {', '.join(mod.dependencies)}")
    if mod.tags:
        click.echo(f"   Tags: {', '.join(mod.tags)}")
    if mod.verified_installer:
        vi = mod.verified_installer
        click.echo(f"   Verified installer: {vi.tool} via {vi.runner}")
    if not mod.enabled_by_default:
        click.secho("   Not enabled by default", fg="yellow")
    if mod.docs_url:
        click.echo(f"   Docs: {mod.docs_url}")


@modules.command()
@click.argument("module_id")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def deps(ctx: click.Context, module_id: str, as_json: bool) -> None:
    """Show direct, transitive and reverse dependencies of a module."""
    from modplan.core.services.manifest.graph import dependents, transitive_dependencies

    manifest = _load(ctx)
    mod = _require(manifest, module_id)

    result = {
        "module": mod.id,
        "direct": list(mod.dependencies),
        "transitive": transitive_dependencies(manifest, mod.id),
        "dependents": dependents(manifest, mod.id),
    }

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    click.secho(f"🔗 {mod.id}", fg="cyan", bold=True)
    for label, key in (("Direct", "direct"), ("Transitive", "transitive"), ("Dependents", "dependents")):
        values = result[key]
        click.echo(f"   {label}: {', '.join(values) if values else '(none)'}")


@modules.command()
@click.argument("module_id")
@click.pass_context
def installer(ctx: click.Context, module_id: str) -> None:
    """Print the generated entrypoint for a module, or nothing for legacy."""
    from modplan.core.services.manifest.routing import module_installer

    manifest = _load(ctx)
    _require(manifest, module_id)
    click.echo(module_installer(module_id))
