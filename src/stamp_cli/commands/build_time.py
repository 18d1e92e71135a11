"""Build time stamping commands."""

import sys
from datetime import datetime, timezone

import click
from rich.table import Table

from ..buildtime import (
    AssemblyBuildTime,
    DirectoryArtifact,
    TIMESTAMP_RESOURCE,
    TimestampFormatError,
    attach_timestamp,
    get_build_date,
    get_build_time,
    get_utc_build_date,
    get_utc_build_time,
    has_build_time,
    open_artifact,
    render_timestamp_resource,
)
from ..utils.console import _get_console, _rich_error, _rich_success


@click.group(name="build-time", help="🕒 Stamp and inspect artifact build times")
def build_time():
    """Build time commands."""
    pass


@build_time.command(name="show", help="Show the build time stamped into an artifact")
@click.argument('artifact_path', type=click.Path(exists=True))
def show(artifact_path):
    """Print local and UTC build time and date of a directory or zip artifact."""
    try:
        artifact = open_artifact(artifact_path)
        if not has_build_time(artifact):
            _rich_error("Build Time: NOT FOUND")
            sys.exit(1)

        rows = [
            ("Local Build Time", str(get_build_time(artifact))),
            ("Local Build Date", get_build_date(artifact).isoformat()),
            ("UTC Build Time", str(get_utc_build_time(artifact))),
            ("UTC Build Date", get_utc_build_date(artifact).isoformat()),
        ]
    except (TimestampFormatError, ValueError, OSError) as e:
        _rich_error(f"Failed to read build time: {e}")
        sys.exit(1)

    console = _get_console()
    if console:
        table = Table(title="🕒 Build Time", show_header=False)
        table.add_column("Field", style="bold cyan")
        table.add_column("Value", style="white")
        for name, value in rows:
            table.add_row(name, value)
        console.print(table)
    else:
        for name, value in rows:
            click.echo(f"{name:>16}: {value}")


@build_time.command(name="stamp", help="Stamp the current UTC time into a build directory")
@click.argument('artifact_dir', type=click.Path(file_okay=False))
@click.option('--resource', is_flag=True, help="Write the embedded timestamp resource instead of the metadata record")
def stamp(artifact_dir, resource):
    """Attach the current UTC instant to a directory artifact."""
    now = datetime.now(timezone.utc)
    artifact = DirectoryArtifact(artifact_dir)
    try:
        if resource:
            artifact.write_member(TIMESTAMP_RESOURCE, render_timestamp_resource(now))
        else:
            # Replace any earlier stamp but keep unrelated records
            metadata = artifact.get_metadata()
            metadata.records = [r for r in metadata.records if r.name != AssemblyBuildTime.NAME]
            metadata.records.extend(attach_timestamp(now).records)
            artifact.attach(metadata)
    except (ValueError, OSError) as e:
        _rich_error(f"Failed to stamp {artifact_dir}: {e}")
        sys.exit(1)

    _rich_success(f"Stamped build time {now.isoformat()} into {artifact_dir}", symbol="check")
