"""Command-line interface for the lead pipeline."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import click
import structlog
from pydantic import ValidationError

from leadmerge.core.config import DEFAULT_CONFIG_PATH, ExportTarget, load_config
from leadmerge.core.store import DEFAULT_DB_PATH, get_raw_value, get_value, init_store, list_keys
from leadmerge.ingest.loader import load_sources
from leadmerge.pipeline.runner import run_pipeline, save_results

# Configure structlog for CLI output
structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer()
    ]
)

log = structlog.get_logger()


def write_outputs(db_path: Path, output_dir: Path, keys: list[str]) -> list[Path]:
    """Copy stored values out of the key-value store into files named after their keys."""
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for key in keys:
        value = get_raw_value(db_path, key)
        if value is None:
            continue
        path = output_dir / key
        path.write_text(value, encoding="utf-8")
        written.append(path)

    return written


@click.group()
def cli():
    """Lead merge - unify, enrich, score and export scraped leads."""


@cli.command()
@click.option("--profiles", "profiles_path", type=click.Path(exists=True, dir_okay=False),
              help="Profile-source records (JSON, CSV or XLSX)")
@click.option("--directory", "directory_path", type=click.Path(exists=True, dir_okay=False),
              help="Directory-source records (JSON, CSV or XLSX)")
@click.option("--db", "db_path", type=click.Path(), default=str(DEFAULT_DB_PATH),
              help="Key-value store path")
@click.option("--config", "config_path", type=click.Path(), default=str(DEFAULT_CONFIG_PATH),
              help="Config directory path")
@click.option("--target", type=click.Choice([t.value for t in ExportTarget]), default=None,
              help="Override the export target")
@click.option("--min-score", type=int, default=None, help="Override the minimum quality score")
@click.option("--output-dir", type=click.Path(file_okay=False), default=None,
              help="Also write stored outputs to this directory")
def run(
    profiles_path: Optional[str],
    directory_path: Optional[str],
    db_path: str,
    config_path: str,
    target: Optional[str],
    min_score: Optional[int],
    output_dir: Optional[str],
):
    """Merge, enrich, validate, score, dedupe and export leads."""
    db = Path(db_path)

    try:
        config = load_config(Path(config_path))

        if target:
            config.export.target = ExportTarget(target)
        if min_score is not None:
            config.scoring.min_quality_score = min_score

        profiles, directory = load_sources(
            Path(profiles_path) if profiles_path else None,
            Path(directory_path) if directory_path else None,
        )

        result = asyncio.run(run_pipeline(profiles, directory, config))
    except (ValueError, ValidationError) as e:
        raise click.ClickException(str(e))

    keys = save_results(result, db)
    report = result.report

    click.echo("=" * 40)
    click.echo("SUMMARY")
    click.echo("=" * 40)
    click.echo(f"Profile records:    {report['summary']['profile_input']}")
    click.echo(f"Directory records:  {report['summary']['directory_input']}")
    click.echo(f"Unified leads:      {report['summary']['merged_leads']}")
    click.echo(f"Rejected:           {report['validation']['rejected']}")
    click.echo(f"Below threshold:    {report['summary']['below_threshold']}")
    click.echo(f"Duplicates removed: {report['summary']['duplicates_removed']}")
    click.echo(f"Final leads:        {report['summary']['final_output']}")
    click.echo(f"Average score:      {report['quality']['average_score']}")

    if report["validation"]["rejection_reasons"]:
        click.echo("\nRejection reasons:")
        for reason, count in report["validation"]["rejection_reasons"].items():
            click.echo(f"  {reason}: {count}")

    click.echo(f"\nSaved to {db}")

    if output_dir:
        paths = write_outputs(db, Path(output_dir), keys)
        click.echo(f"Wrote {len(paths)} file(s) to {output_dir}")


@cli.command()
@click.option("--db", "db_path", type=click.Path(), default=str(DEFAULT_DB_PATH),
              help="Key-value store path")
def report(db_path: str):
    """Show the report from the last run."""
    db = Path(db_path)
    init_store(db)

    stored = get_value(db, "report.json")
    if stored is None:
        click.echo("No report found. Run the pipeline first.")
        return

    click.echo(json.dumps(stored, indent=2))


@cli.command()
@click.argument("key", required=False)
@click.option("--db", "db_path", type=click.Path(), default=str(DEFAULT_DB_PATH),
              help="Key-value store path")
def dump(key: Optional[str], db_path: str):
    """Print a stored value, or list the stored keys when KEY is omitted."""
    db = Path(db_path)
    init_store(db)

    if not key:
        for stored_key in list_keys(db):
            click.echo(stored_key)
        return

    value = get_raw_value(db, key)
    if value is None:
        raise click.ClickException(f"Key not found: {key}")
    click.echo(value)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
