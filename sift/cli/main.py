"""
Command-line interface for sift.

Provides the ``organize`` and ``undo`` commands.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..core.config import Settings, load_config, parse_exclude_list
from ..core.exceptions import SiftError
from ..organization import (
    FileOrganizer,
    OrganizationMode,
    OrganizationResult,
    RuleSet,
    UndoResult,
    undo as undo_pass,
)
from ..shared.logging_utils import setup_logging

console = Console()

SOURCE_DIR = click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path)


@click.group()
@click.version_option(__version__, prog_name="sift")
def cli() -> None:
    """Sift - your smart file organizer."""


@cli.command()
@click.option(
    "--source",
    "-s",
    "source",
    type=SOURCE_DIR,
    required=True,
    help="The source directory to organize",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Simulate the organization without moving files",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Enable detailed output",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a custom YAML rules file",
)
@click.option(
    "--by-date",
    is_flag=True,
    default=False,
    help="Organize files by date (YYYY/MM-Month)",
)
@click.option(
    "--exclude",
    type=str,
    default=None,
    help="Comma-separated list of folder names to exclude",
)
def organize(
    source: Path,
    dry_run: bool,
    verbose: bool,
    config_file: Optional[Path],
    by_date: bool,
    exclude: Optional[str],
) -> None:
    """
    Organize the files in SOURCE into sub-folders.

    \b
    Examples:
        # Preview first
        sift organize --source ~/Downloads --dry-run

        # Sort by file type using custom rules
        sift organize --source ~/Downloads --config rules.yml

        # Sort by modification date, skipping some folders
        sift organize --source ~/Photos --by-date --exclude raw,exports

    \b
    Rules file format:
        rules:
          Images: [jpg, png]
          Docs: [pdf, md]
        exclude_folders: [node_modules]

    Every run writes an undo log to SOURCE; use ``sift undo`` to revert it.
    """
    setup_logging(verbose=verbose)
    settings = Settings()

    config_path = config_file or settings.config_file
    exclusions = parse_exclude_list(settings.exclude)
    rules = RuleSet.default()

    try:
        if config_path:
            console.print(f"Loading custom rules from: {config_path}")
            config = load_config(config_path)
            rules = config.to_rule_set()
            exclusions |= config.exclusion_set()

        exclusions |= parse_exclude_list(exclude)

        mode = OrganizationMode.BY_DATE if by_date else OrganizationMode.BY_TYPE

        console.print("\n[cyan]Organization Configuration:[/cyan]")
        console.print(f"  Source: {source}")
        console.print(f"  Mode: {'by date' if by_date else 'by file type'}")
        console.print(f"  Excluded: {', '.join(sorted(exclusions)) or '-'}")
        console.print(f"  Dry run: {'YES' if dry_run else 'NO'}")

        if dry_run:
            console.print(
                "\n[yellow]⚠ DRY RUN MODE - No files will be moved[/yellow]"
            )
        console.print()

        organizer = FileOrganizer(source, rules=rules, exclusions=exclusions)
        result = organizer.organize(mode, dry_run=dry_run)

    except SiftError as e:
        console.print(f"\n[red]✗ Error: {escape(str(e))}[/red]")
        sys.exit(1)

    _display_result(result)


@cli.command()
@click.option(
    "--source",
    "-s",
    "source",
    type=SOURCE_DIR,
    required=True,
    help="The directory where the organization was performed",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Enable detailed output",
)
def undo(source: Path, verbose: bool) -> None:
    """Revert the last organization of SOURCE using its undo log."""
    setup_logging(verbose=verbose)

    console.print("[cyan]Sift Undo Operation[/cyan]\n")

    try:
        result = undo_pass(source)
    except SiftError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    _display_undo_result(result)

    if not result.completed:
        sys.exit(1)


def _display_result(result: OrganizationResult) -> None:
    """Display organization result."""
    if result.aborted:
        console.print("\n[red]✗ Organization stopped early[/red]\n")
    else:
        console.print("\n[green]✓ Sifting complete![/green]\n")

    table = Table(title="Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")

    table.add_row("Files moved", str(result.files_moved))
    table.add_row("Files skipped (due to errors)", str(result.files_skipped))

    console.print(table)

    if result.dry_run:
        console.print("\n[yellow]This was a DRY RUN - no files were moved[/yellow]")
        console.print("Run without --dry-run to execute the organization.")
    elif result.files_moved:
        console.print("\n[dim]You can revert this run with:[/dim]")
        console.print(f"[dim]  sift undo --source {result.log_path.parent}[/dim]")

    if result.errors:
        console.print("\n[red]Errors:[/red]")
        for error in result.errors[:10]:
            console.print(f"  [red]• {escape(error)}[/red]")
        if len(result.errors) > 10:
            console.print(f"  [dim]... and {len(result.errors) - 10} more[/dim]")


def _display_undo_result(result: UndoResult) -> None:
    """Display undo result."""
    if result.completed:
        console.print("\n[green]✓ Undo complete![/green]")
    else:
        console.print(f"\n[red]✗ Undo stopped: {escape(str(result.error))}[/red]")
        console.print("[yellow]The undo log was kept so the undo can be retried.[/yellow]")

    console.print(f"Files reverted: {result.reverted} of {result.total_records}")
    if result.malformed:
        console.print(f"[yellow]Malformed log entries skipped: {result.malformed}[/yellow]")
    if result.log_removed:
        console.print("Undo log cleared.")


if __name__ == "__main__":
    cli()
