"""
Import command for srpmimport.

Converts a source RPM into a git working tree: spec files under SPECS/,
everything else under SOURCES/, archive-like sources left untracked and
listed in .gitignore.
"""

import click
import json
import sys
from pathlib import Path
from typing import Optional

from ..config import load_config, configure_logging
from ..domain.package import PackageReference
from ..exit_codes import CommandError, get_exit_code_for_exception
from ..services.import_service import ImportService, ImportOptions


@click.command('import')
@click.argument('package', type=click.Path(dir_okay=False))
@click.option('--version', '-v', 'version', type=int, required=True,
              help='Target distribution version (e.g. 9 for branch rocky9)')
@click.option('--dest', '-d', type=click.Path(file_okay=False),
              help='Working tree to create (default: ./<package name>)')
@click.option('--commit', is_flag=True, help='Commit the staged files on the import branch')
@click.option('--message', '-m', help='Commit message (default: "import <package file>")')
# Output options
@click.option('--json', 'output_json', is_flag=True, help='Output as JSONL')
@click.option('--pretty', is_flag=True, help='Display summary with rich formatting')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def import_handler(
    package: str,
    version: int,
    dest: Optional[str],
    commit: bool,
    message: Optional[str],
    output_json: bool,
    pretty: bool,
    debug: bool,
):
    """
    Import a source RPM into a git working tree.

    Examples:

        # Import into ./bash-5.1.8-9.el9
        srpmimport import bash-5.1.8-9.el9.src.rpm --version 9

        # Import and commit on branch rocky9
        srpmimport import bash-5.1.8-9.el9.src.rpm -v 9 --dest /srv/git/bash --commit

        # Machine-readable output
        srpmimport import bash-5.1.8-9.el9.src.rpm -v 9 --json
    """
    config = load_config()
    configure_logging(config, debug=debug)

    reference = PackageReference(path=Path(package), version=version)
    options = ImportOptions(
        destination=Path(dest) if dest else Path.cwd() / reference.stem,
        commit=commit,
        message=message,
    )

    try:
        service = ImportService(config=config)
        if pretty:
            _import_pretty(service, reference, options)
        elif output_json:
            _import_json(service, reference, options)
        else:
            _import_simple(service, reference, options)
    except (CommandError, OSError) as e:
        _report_error(e, output_json)
        sys.exit(get_exit_code_for_exception(e))
    except KeyboardInterrupt as e:
        _report_error("interrupted", output_json, kind=e.__class__.__name__)
        sys.exit(get_exit_code_for_exception(e))


def _report_error(error, output_json: bool, kind: Optional[str] = None):
    """Print an error to stderr as text or as a JSON line."""
    if output_json:
        print(json.dumps({'error': str(error), 'type': kind or error.__class__.__name__}), file=sys.stderr)
    else:
        print(f"Error: {error}", file=sys.stderr)


def _import_simple(service: ImportService, reference: PackageReference, options: ImportOptions):
    """Simple text output for import."""
    for progress in service.run(reference, options):
        print(progress, file=sys.stderr)

    result = service.last_result
    report = service.last_report
    print(f"\nImport complete: {result.worktree.root}", file=sys.stderr)
    print(f"  Files written: {len(report.written)}", file=sys.stderr)
    print(f"  Files staged: {len(report.staged)}", file=sys.stderr)
    if report.ignored:
        print(f"  Ignored sources: {len(report.ignored)}", file=sys.stderr)
    print(f"  Branch: {', '.join(result.branches)}", file=sys.stderr)


def _import_json(service: ImportService, reference: PackageReference, options: ImportOptions):
    """JSONL output for import."""
    for progress in service.run(reference, options):
        print(json.dumps({'progress': progress}), flush=True)

    result = service.last_result
    report = service.last_report
    staged = set(report.staged)
    for path in report.written:
        print(json.dumps({
            'path': path,
            'mode': oct(report.modes[path]),
            'staged': path in staged,
        }), flush=True)

    summary = report.to_dict()
    summary.update(result.to_dict())
    summary['committed'] = options.commit
    print(json.dumps(summary), flush=True)


def _import_pretty(service: ImportService, reference: PackageReference, options: ImportOptions):
    """Rich formatted output for import."""
    from rich.console import Console
    from rich.table import Table

    console = Console()
    console.print(f"\n[bold]Importing:[/bold] {reference.import_name}")
    console.print(f"[bold]Into:[/bold] {options.destination}")
    console.print()

    with console.status("Starting import...") as status:
        for message in service.run(reference, options):
            status.update(message)

    result = service.last_result
    report = service.last_report

    table = Table(title="Import Summary", show_header=True)
    table.add_column("Path", style="cyan")
    table.add_column("Mode", justify="right")
    table.add_column("Status", style="green")

    staged = set(report.staged)
    for path in report.written:
        state = "staged" if path in staged else "[yellow]ignored[/yellow]"
        table.add_row(path, oct(report.modes[path]), state)

    console.print(table)
    console.print(f"\n[bold]Branch:[/bold] {', '.join(result.branches)}")
    verb = "committed" if options.commit else "ready to commit"
    console.print(f"[bold green]✓[/bold green] Import {verb}: {result.worktree.root}")
