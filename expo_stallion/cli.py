"""
expo-stallion CLI.

Command-line interface for applying the Stallion plugin to a prebuilt Expo
project, and for inspecting or patching single native entry files.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .core.config import get_config
from .core.exceptions import ConfigurationError
from .core.logging import setup_logging
from .engine import classify_android, classify_ios, is_patched
from .models.patch import Platform
from .models.plugin import FileStatus, StallionPluginProps
from .services.layout import platform_for

app = typer.Typer(
    name="expo-stallion",
    help="Wire Stallion OTA updates into Expo native projects",
    add_completion=False,
)

console = Console()

STATUS_STYLES = {
    FileStatus.PATCHED: "[green]patched[/green]",
    FileStatus.UNCHANGED: "[dim]unchanged[/dim]",
    FileStatus.UNRECOGNIZED: "[yellow]unrecognized[/yellow]",
    FileStatus.MISSING: "[red]missing[/red]",
}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"expo-stallion v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """expo-stallion: Stallion bundle provider for Expo apps."""
    pass


@app.command()
def apply(
    project_dir: Path = typer.Argument(
        ...,
        help="Path to the Expo project (after prebuild)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    project_id: Optional[str] = typer.Option(
        None,
        "--project-id",
        help="Stallion project id (defaults to STALLION_PROJECT_ID)",
    ),
    app_token: Optional[str] = typer.Option(
        None,
        "--app-token",
        help="Stallion app token, spb_... (defaults to STALLION_APP_TOKEN)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would change without writing files",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Apply the Stallion plugin to an Expo project."""
    config = get_config().model_copy(deep=True)
    if verbose:
        config.log_level = "DEBUG"
    if dry_run:
        config.patch.dry_run = True
    setup_logging(config)

    props = StallionPluginProps(
        project_id=project_id or config.project_id,
        app_token=app_token or (config.app_token.get_secret_value() if config.app_token else None),
    )

    console.print(Panel.fit(
        "[bold blue]expo-stallion[/bold blue]\n"
        "Stallion bundle provider for Expo",
        border_style="blue",
    ))
    console.print(f"\n[bold]Project:[/bold] {project_dir}")
    if config.patch.dry_run:
        console.print("[bold]Mode:[/bold] dry run\n")

    async def run_async() -> None:
        from .orchestration import run_plugin

        try:
            result = await run_plugin(project_dir, props, config=config)
        except ConfigurationError as e:
            console.print(f"\n[bold red]✗ {e}[/bold red]")
            raise typer.Exit(1)

        if result.skipped:
            for diagnostic in result.diagnostics:
                console.print(f"[yellow]{diagnostic.message}[/yellow]")
            return

        table = Table(title="Stallion Plugin Results")
        table.add_column("Platform", style="cyan")
        table.add_column("File")
        table.add_column("Dialect")
        table.add_column("Status")

        for report in result.files:
            table.add_row(
                report.platform.value,
                report.path,
                report.dialect or "-",
                STATUS_STYLES[report.status],
            )
        console.print(table)

        if result.warnings:
            console.print("\n[bold yellow]Warnings:[/bold yellow]")
            for warning in result.warnings:
                console.print(f"  • {warning}")
        else:
            console.print("\n[bold green]✓ Stallion is wired in![/bold green]")

    asyncio.run(run_async())


@app.command()
def detect(
    file: Path = typer.Argument(
        ...,
        help="MainApplication or AppDelegate source file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
) -> None:
    """Show the detected dialect and patch status of an entry file."""
    platform = platform_for(file.name)
    if platform is None:
        console.print(f"[red]Error: unsupported file type '{file.suffix}'[/red]")
        raise typer.Exit(1)

    text = file.read_text(encoding="utf-8")
    dialect = classify_android(text) if platform is Platform.ANDROID else classify_ios(text)

    table = Table(title=file.name)
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Platform", platform.value)
    table.add_row("Dialect", dialect.value)
    table.add_row("Patched", "[green]yes[/green]" if is_patched(text, platform) else "no")
    console.print(table)


@app.command()
def patch(
    files: List[Path] = typer.Argument(
        ...,
        help="Entry files to patch in place",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would change without writing files",
    ),
) -> None:
    """Patch individual MainApplication / AppDelegate files."""
    setup_logging(get_config())

    async def run_async() -> None:
        from .services.bundle_provider import BundleProviderService
        from .storage import LocalProjectStore

        root = Path(os.path.commonpath([path.parent for path in files]))
        store = LocalProjectStore(root)
        service = BundleProviderService(store, dry_run=dry_run)
        outcomes = await service.patch_files([path.relative_to(root).as_posix() for path in files])

        failed = False
        for path, (report, diagnostics) in zip(files, outcomes):
            status = STATUS_STYLES[report.status] if report else STATUS_STYLES[FileStatus.MISSING]
            console.print(f"{status}  {path}")
            for diagnostic in diagnostics:
                console.print(f"    [yellow]{diagnostic.message}[/yellow]")
            failed = failed or report is None

        if failed:
            raise typer.Exit(1)

    asyncio.run(run_async())


@app.command()
def config(
    show: bool = typer.Option(
        True,
        "--show",
        help="Show current configuration",
    ),
) -> None:
    """Show current configuration."""
    cfg = get_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("JSON Logs", str(cfg.json_logs))
    table.add_row("Project Id", cfg.project_id or "[dim]not set[/dim]")
    table.add_row("App Token", "********" if cfg.app_token else "[dim]not set[/dim]")
    table.add_row("Patch Android", str(cfg.patch.android_enabled))
    table.add_row("Patch iOS", str(cfg.patch.ios_enabled))
    table.add_row("Dry Run", str(cfg.patch.dry_run))

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  STALLION_PROJECT_ID, STALLION_APP_TOKEN, STALLION_LOG_LEVEL")
    console.print("  STALLION_PATCH_ANDROID, STALLION_PATCH_IOS, STALLION_DRY_RUN")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
