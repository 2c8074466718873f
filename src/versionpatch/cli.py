"""CLI entry point for versionpatch using Typer."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from versionpatch import __version__
from versionpatch.config import build_config, find_config, load_config
from versionpatch.core.incrementer import VersionIncrementer
from versionpatch.core.patcher import PatchResult, VersionPatcher
from versionpatch.errors import VersionError
from versionpatch.logging_utils import configure_logging
from versionpatch.models import IncrementTarget

app = typer.Typer(
    name="versionpatch",
    help="Bump the semantic version of package.json files.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]versionpatch[/] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """versionpatch - keep package versions moving."""
    pass


@app.command()
def bump(
    files: Annotated[
        Optional[list[Path]],
        typer.Argument(help="Files to patch (default: package.json)."),
    ] = None,
    increment_type: Annotated[
        Optional[IncrementTarget],
        typer.Option(
            "--type",
            "-t",
            help="Component to increment.",
            case_sensitive=False,
        ),
    ] = None,
    explicit_version: Annotated[
        Optional[str],
        typer.Option("--set", "-s", help="Write this version instead of incrementing."),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="YAML config file (default: nearest .versionpatch.yaml).",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    base_path: Annotated[
        Optional[Path],
        typer.Option(
            "--base-path",
            help="Directory relative file paths are resolved against.",
            exists=True,
            file_okay=False,
            resolve_path=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging."),
    ] = False,
) -> None:
    """Increment the version field of one or more files.

    Options given on the command line override the config file. File
    arguments are relative to the current directory unless --base-path is set.
    """
    configure_logging(verbose=verbose)

    if files and base_path is None:
        files = [f.resolve() for f in files]

    overrides = {
        "files": [str(f) for f in files] if files else None,
        "type": increment_type,
        "version": explicit_version,
        "base_path": base_path,
    }

    try:
        config_path = config_path or find_config(base_path)
        if config_path is not None:
            config = load_config(config_path, **overrides)
        else:
            config = build_config({k: v for k, v in overrides.items() if v is not None})
    except VersionError as e:
        console.print(f"[bold red]✗[/] {e}")
        raise typer.Exit(code=1)

    if config.disabled:
        console.print("[dim]Version patching is disabled.[/]")
        return
    if not config.active_files:
        console.print("[yellow]![/] No files configured, nothing to bump.")
        return

    patcher = VersionPatcher(config)
    try:
        result = patcher.update_version()
    except VersionError:
        result = patcher.last_result or PatchResult()

    _print_result(result)

    if not result.success:
        raise typer.Exit(code=1)


@app.command(name="next")
def next_version(
    current: Annotated[str, typer.Argument(help="Current version, e.g. 1.2.3-beta.1")],
    increment_type: Annotated[
        IncrementTarget,
        typer.Option("--type", "-t", help="Component to increment.", case_sensitive=False),
    ] = IncrementTarget.PATCH,
) -> None:
    """Print the version following CURRENT without touching any file."""
    try:
        console.print(VersionIncrementer().increment(current, increment_type))
    except VersionError as e:
        console.print(f"[bold red]✗[/] {e}")
        raise typer.Exit(code=1)


@app.command()
def show(
    file: Annotated[
        Path,
        typer.Argument(help="File to read.", dir_okay=False),
    ] = Path("package.json"),
) -> None:
    """Print the version field of a file."""
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[bold red]✗[/] Cannot read {file}: {e}")
        raise typer.Exit(code=1)

    version = data.get("version") if isinstance(data, dict) else None
    if not isinstance(version, str):
        console.print(f"[bold red]✗[/] No version field in {file}")
        raise typer.Exit(code=1)

    console.print(version)


def _print_result(result: PatchResult) -> None:
    """Render a patch result as a table."""
    if result.skipped:
        console.print("[yellow]![/] Cooldown active, version not changed.")
        return

    table = Table(show_header=True, header_style="bold", border_style="dim")
    table.add_column("File", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Version")

    for bumped in result.bumped:
        table.add_row(
            str(bumped.path),
            "[green]✓[/]",
            f"{bumped.old_version} → [bold]{bumped.new_version}[/]",
        )
    for failure in result.failed:
        table.add_row(str(failure.path), "[red]✗[/]", failure.error.message)

    console.print(table)

    if result.success:
        console.print(f"[bold green]✓[/] Version bumped to [bold]{result.new_version}[/]")
    else:
        console.print(f"[bold red]✗[/] {len(result.failed)} file(s) failed")


if __name__ == "__main__":
    app()
