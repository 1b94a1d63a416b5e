"""Health Guard CLI - architecture-compliance gate commands."""

import json
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from healthguard import __version__
from healthguard.config import GUARD_MODE_ENV, normalize_mode, resolve_settings
from healthguard.guard import GuardResult, result_to_dict, run_guard
from healthguard.manifests.registry import (
    MANIFEST_KINDS,
    MANIFEST_LABELS,
    load_manifest,
    manifest_path,
    manifest_to_dict,
    write_default_manifests,
)
from healthguard.reasons import ReasonCode

cli = typer.Typer(
    name="healthguard",
    help="Health Guard - architecture-compliance gate for changed sources",
    no_args_is_help=True,
)
console = Console()

manifests_app = typer.Typer(help="Inspect and scaffold rule manifests.")
cli.add_typer(manifests_app, name="manifests")


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.callback()
def _cli_callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show Health Guard version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Health Guard - architecture-compliance gate for changed sources."""


def _resolve_mode(mode: str | None, fast: bool, full: bool) -> str:
    if fast and full:
        raise typer.BadParameter("--fast and --full are mutually exclusive")
    if fast:
        return "fast"
    if full:
        return "full"
    try:
        return normalize_mode(mode)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _print_summary(out: Console, result: GuardResult) -> None:
    run = result.run
    if run is None:
        return

    report_path = escape(str(result.report.latest)) if result.report else "(not written)"
    if run.violations:
        out.print(f"\n[red]❌ HEALTH GUARD FAILED: {len(run.violations)} violations found[/red]")
        out.print(f"📄 See detailed report at: {report_path}\n")
        for v in run.violations:
            out.print(f"[red]🚫 {v.code.value}: {escape(v.message)}[/red]")
    else:
        out.print("\n[green]✅ HEALTH GUARD PASSED: All validations successful[/green]")
        out.print(f"📄 Report: {report_path}")


@cli.command()
def check(
    files: list[str] | None = typer.Argument(
        None,
        help="Files to validate (default: staged files from git)",
    ),
    mode: str | None = typer.Option(
        None,
        "--mode",
        envvar=GUARD_MODE_ENV,
        help="Validation mode: fast (critical gates) or full (all gates)",
    ),
    fast: bool = typer.Option(False, "--fast", help="Shortcut for --mode fast"),
    full: bool = typer.Option(False, "--full", help="Shortcut for --mode full"),
    base: str | None = typer.Option(
        None,
        "--base",
        help="Validate files changed between this ref and HEAD instead of staged files",
    ),
    project_root: Path | None = typer.Option(
        None,
        "--project-root",
        help="Project root directory (default: current directory)",
    ),
    manifest_dir: Path | None = typer.Option(
        None,
        "--manifest-dir",
        help="Directory holding custom manifests (default: scripts/sentinel)",
    ),
    timestamp_mode: str = typer.Option(
        "wallclock",
        help="Timestamp mode: deterministic, now, or wallclock",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print a machine-readable summary to stdout (transcript goes to stderr)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show audit and manifest details (also HEALTHGUARD_DEBUG=1)",
    ),
) -> None:
    """Run the compliance gates over the change set."""
    selected_mode = _resolve_mode(mode, fast, full)
    out = Console(stderr=True) if json_output else console

    try:
        settings = resolve_settings(
            project_root,
            manifest_dir=manifest_dir,
            timestamp_mode=timestamp_mode,
            debug=debug,
        )
        result = run_guard(
            selected_mode,  # type: ignore[arg-type]
            settings,
            base=base,
            files=files or None,
            out=out,
        )
    except Exception as e:
        out.print(f"[bold red]💥 Health Guard Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e

    _print_summary(out, result)

    if json_output:
        typer.echo(json.dumps(result_to_dict(result), indent=2, sort_keys=True, ensure_ascii=False))

    raise typer.Exit(0 if result.passed else 1)


@cli.command()
def reasons() -> None:
    """List the reason codes a violation can carry."""
    for code in ReasonCode:
        console.print(f"[bold]{code.value}[/bold]: {code.description}")
        console.print(f"  [dim]Resolution: {code.resolution}[/dim]")


@manifests_app.command(name="show")
def manifests_show(
    kind: str | None = typer.Argument(None, help="Manifest kind: soc, rls, or tokens (default: all)"),
    project_root: Path | None = typer.Option(None, "--project-root", help="Project root directory"),
    manifest_dir: Path | None = typer.Option(None, "--manifest-dir", help="Directory holding custom manifests"),
) -> None:
    """Print the effective manifests and whether they are custom or default."""
    if kind is not None and kind not in MANIFEST_KINDS:
        console.print(f"[bold red]Error:[/bold red] Unknown manifest kind: {escape(kind)}")
        raise typer.Exit(2)

    settings = resolve_settings(project_root, manifest_dir=manifest_dir)
    payload = {}
    for name in ([kind] if kind else MANIFEST_KINDS):
        manifest, source = load_manifest(name, settings.manifest_dir)
        path = manifest_path(name, settings.manifest_dir)
        payload[name] = {
            "label": MANIFEST_LABELS[name],
            "source": source,
            "path": str(path) if path else None,
            "manifest": manifest_to_dict(manifest),
        }

    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@manifests_app.command(name="init")
def manifests_init(
    project_root: Path | None = typer.Option(None, "--project-root", help="Project root directory"),
    manifest_dir: Path | None = typer.Option(None, "--manifest-dir", help="Directory to write manifests into"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing manifest files"),
) -> None:
    """Write the built-in manifests as editable JSON files."""
    settings = resolve_settings(project_root, manifest_dir=manifest_dir)
    try:
        written = write_default_manifests(settings.manifest_dir, force=force)
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e

    if not written:
        console.print("[yellow]All manifest files already exist (use --force to overwrite)[/yellow]")
        return
    for path in written:
        console.print(f"[green]✓ Wrote {escape(str(path))}[/green]")


def main() -> None:
    cli(prog_name="healthguard", args=sys.argv[1:])


if __name__ == "__main__":
    main()
