"""
modplan — CLI entrypoint.

Usage:
    python -m modplan.main --help
    python -m modplan.main validate
    python -m modplan.main plan --only agents.claude
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from modplan import __version__
from modplan.core.observability.logging_config import resolve_level, setup_from_env


@click.group()
@click.version_option(version=__version__, prog_name="modplan")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--manifest",
    "-m",
    "manifest_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to manifest.yaml (default: $MODPLAN_MANIFEST, then auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    manifest_path: str | None,
) -> None:
    """modplan — validate module manifests and plan installs."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["manifest_path"] = Path(manifest_path) if manifest_path else None

    setup_from_env(resolve_level(verbose=verbose, quiet=quiet, debug=debug))


# ── Validate ────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def validate(ctx: click.Context, as_json: bool) -> None:
    """Validate the manifest (structure, dependencies, names, security)."""
    from modplan.core.services.manifest.report import (
        format_structural_issues,
        format_validation_report,
    )
    from modplan.core.use_cases.check import check_manifest

    result = check_manifest(ctx.obj.get("manifest_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.valid:
            sys.exit(1)
        return

    if result.error:
        if result.structural:
            click.secho(format_structural_issues(result.structural), fg="red")
        else:
            click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = format_validation_report(result.validation)
    if result.valid:
        if not ctx.obj.get("quiet"):
            click.secho(report, fg="green")
        return

    click.secho(report, fg="red")
    sys.exit(1)


# ── Plan ────────────────────────────────────────────────────────


@cli.command()
@click.option("--only", "only", multiple=True, help="Module id to include (repeatable).")
@click.option("--skip", "skip", multiple=True, help="Module id to exclude (repeatable).")
@click.option(
    "--only-phase", "only_phase", multiple=True, type=int,
    help="Restrict to modules in this phase (repeatable).",
)
@click.option("--no-deps", is_flag=True, help="Do not pull in dependencies of selected modules.")
@click.option("--skip-postgres", is_flag=True, help="Deprecated: same as --skip db.postgres18.")
@click.option("--skip-vault", is_flag=True, help="Deprecated: same as --skip tools.vault.")
@click.option("--skip-cloud", is_flag=True, help="Deprecated: skip all cloud CLIs.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def plan(
    ctx: click.Context,
    only: tuple[str, ...],
    skip: tuple[str, ...],
    only_phase: tuple[int, ...],
    no_deps: bool,
    skip_postgres: bool,
    skip_vault: bool,
    skip_cloud: bool,
    as_json: bool,
) -> None:
    """Print the execution plan for a module selection."""
    from modplan.core.models.selection import SelectionDirectives
    from modplan.core.services.manifest.report import (
        format_plan,
        format_structural_issues,
        format_validation_report,
    )
    from modplan.core.use_cases.plan import plan_modules

    directives = SelectionDirectives(
        only=list(only),
        skip=list(skip),
        only_phase=list(only_phase),
        no_deps=no_deps,
        skip_postgres=skip_postgres,
        skip_vault=skip_vault,
        skip_cloud=skip_cloud,
    )
    result = plan_modules(ctx.obj.get("manifest_path"), directives)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    check = result.check
    if check.error:
        if check.structural:
            click.secho(format_structural_issues(check.structural), fg="red")
        else:
            click.secho(f"❌ {check.error}", fg="red")
        sys.exit(1)

    if not check.valid:
        click.secho(format_validation_report(check.validation), fg="red")
        sys.exit(1)

    text = format_plan(check.manifest, result.selection)
    if not result.ok:
        click.secho(text, fg="red")
        sys.exit(1)
    click.echo(text)


# ── Register sub-command groups from modplan/ui/cli/ ─────────────

from modplan.ui.cli.modules import modules  # noqa: E402

cli.add_command(modules)


if __name__ == "__main__":
    cli()
