"""Click CLI with candidates, migrate, report, and serve subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from strict_migrate import __version__
from strict_migrate.analysis.candidates import rank_candidates
from strict_migrate.analysis.cycles import CycleStructureError
from strict_migrate.analysis.eligibility import eligible_files
from strict_migrate.exporter import build_report, count_eligible_errors, write_report
from strict_migrate.models import Language, MigrationConfig
from strict_migrate.oracle import BaseOracle, CommandOracle, MypyOracle, OracleError
from strict_migrate.pipeline import run_migration, run_scan

_LANGUAGE_CHOICES = [lang.value for lang in Language]

_source_dir = click.argument(
    "source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".",
)
_allowlist = click.option(
    "--allowlist", "-a", type=click.Path(dir_okay=False, path_type=Path),
    help="Allow-list of checked files (default: SOURCE_DIR/strict-files.json)",
)
_language = click.option(
    "--language", "-l", "languages", multiple=True, type=click.Choice(_LANGUAGE_CHOICES),
    help="Languages to track (repeatable, default: python)",
)
_checker = click.option(
    "--checker", "-c",
    help="Checker command template, e.g. 'pyright {file}' (default: mypy --strict)",
)
_mypy = click.option(
    "--mypy", "mypy_executable", default="mypy", envvar="STRICT_MIGRATE_MYPY", show_default=True,
    help="mypy executable used when no --checker is given",
)


def _make_config(source_dir: Path, allowlist: Path | None, languages: tuple[str, ...]) -> MigrationConfig:
    return MigrationConfig(
        source_dir=source_dir.resolve(),
        allowlist_path=allowlist,
        languages=[Language(lang) for lang in languages] or [Language.PYTHON],
    )


def _make_oracle(source_dir: Path, checker: str | None, mypy_executable: str) -> BaseOracle:
    if checker:
        return CommandOracle(checker, source_dir)
    return MypyOracle(source_dir, executable=mypy_executable)


def _rel(path: str, root: Path) -> str:
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return path


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", count=True, help="Show progress logs (-vv for debug output)")
def cli(verbose: int):
    """strict-migrate: move a codebase under a stricter checker one file at a time."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@_source_dir
@_allowlist
@_language
@click.option("--counts/--no-counts", default=True, help="Show how many files depend on each candidate")
def candidates(source_dir: Path, allowlist: Path | None, languages: tuple[str, ...], counts: bool):
    """List files (and cycles) eligible for migration next."""
    config = _make_config(source_dir, allowlist, languages)
    root = config.source_dir
    try:
        result = run_scan(config)
    except (CycleStructureError, ValueError) as e:
        raise click.ClickException(str(e))

    cycles = [c for c in result.eligible if c.is_cycle]
    if cycles:
        click.echo(click.style("The following cycles are eligible for migration:", bold=True))
        for component in cycles:
            click.echo(f"Cycle of {len(component.files)} files:")
            for file in component.files:
                click.echo(f"  {_rel(file, root)}")
        click.echo()

    files = eligible_files(result.condensed, result.checked)
    if not files:
        click.echo("No eligible files found.")
        return

    click.echo(click.style("Files eligible for migration:", bold=True))
    click.echo("These files only import files that are already checked.")
    if counts:
        click.echo("The dependent count is approximate (imports are followed to third order).")
    for candidate in rank_candidates(result.graph, files):
        line = f"- [ ] ./{_rel(candidate.file, root)}"
        if counts:
            line += (
                f"  {click.style(f'depended on by {candidate.importers}', fg='cyan')}"
                f" ({candidate.direct_importers} direct)"
            )
        click.echo(line)

    click.echo(
        f"\nProgress: {len(result.checked & set(result.files))}/{len(result.files)} files checked, "
        f"{len(files)} eligible"
    )


@cli.command()
@_source_dir
@_allowlist
@_language
@_checker
@_mypy
@click.option("--max-passes", type=click.IntRange(min=1), help="Stop after this many passes")
def migrate(
    source_dir: Path,
    allowlist: Path | None,
    languages: tuple[str, ...],
    checker: str | None,
    mypy_executable: str,
    max_passes: int | None,
):
    """Test eligible files and add every clean one to the allow-list, until nothing changes."""
    config = _make_config(source_dir, allowlist, languages)
    root = config.source_dir
    oracle = _make_oracle(root, checker, mypy_executable)

    def progress(stage: str, current: int, total: int):
        click.echo(f"  {stage}: {current}/{total}")

    click.echo(f"Migrating {root} (allow-list: {config.resolved_allowlist})\n")
    try:
        result = run_migration(config, oracle, progress=progress, max_passes=max_passes)
    except (OracleError, CycleStructureError, ValueError) as e:
        raise click.ClickException(str(e))

    for report in result.passes:
        click.echo(
            f"Pass {report.number}: {report.eligible_components} eligible, "
            f"{len(report.tested)} tested, "
            f"{click.style(str(len(report.committed)), fg='green')} committed, "
            f"{click.style(str(len(report.failures)), fg='red')} failed"
        )

    if result.committed:
        click.echo(f"\nAdded {len(result.committed)} file(s):")
        for file in result.committed:
            click.echo(f"  {click.style('+', fg='green')} {_rel(file, root)}")
    if result.failures:
        click.echo(f"\nStill failing ({len(result.failures)}):")
        for file, errors in sorted(result.failures.items()):
            click.echo(f"  {click.style('x', fg='red')} {_rel(file, root)}  ({errors} error(s))")
    if result.cancelled:
        click.echo("\nStopped before reaching a fixpoint.")


@cli.command()
@_source_dir
@_allowlist
@_language
@click.option("-o", "--output", "output_dir", type=click.Path(path_type=Path), default="strict-report",
              help="Output directory")
@click.option("--count-errors", is_flag=True, help="Run the checker on each eligible component")
@_checker
@_mypy
def report(
    source_dir: Path,
    allowlist: Path | None,
    languages: tuple[str, ...],
    output_dir: Path,
    count_errors: bool,
    checker: str | None,
    mypy_executable: str,
):
    """Write report.json and data.js describing every component."""
    config = _make_config(source_dir, allowlist, languages)
    try:
        result = run_scan(config)
        error_counts = None
        if count_errors:
            oracle = _make_oracle(config.source_dir, checker, mypy_executable)
            error_counts = count_eligible_errors(result, oracle)
    except (OracleError, CycleStructureError, ValueError) as e:
        raise click.ClickException(str(e))

    data = build_report(result, config.source_dir, error_counts)
    summary = data["summary"]
    click.echo(f"Progress: {summary['checked_files']}/{summary['total_files']} files checked")
    click.echo(f"Eligible files: {summary['eligible_files']}")
    click.echo(f"Components: {summary['components']} ({summary['cycles']} cycles)")

    for path in write_report(data, output_dir):
        click.echo(f"  {path}")


@cli.command()
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the report API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the report API. "
            "Install with: pip install 'strict-migrate[web]'"
        )

    from strict_migrate.web import create_app

    click.echo(f"Starting strict-migrate API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
