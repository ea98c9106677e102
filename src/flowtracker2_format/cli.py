"""
Command-line interface for flowtracker2-format.

Converts a FlowTracker2 measurement export to a discharge activity and
writes the resulting field visit, activity and readings as JSON.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .constants import ParseStatus
from .converter import DataFileConverter
from .reader import JsonMeasurementReader
from .records import LocationInfo
from .serialization import remove_nulls
from .sink import InMemoryResultsAppender


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """
    FlowTracker2 discharge converter.

    Convert FlowTracker2 flow surveys to discharge activity records.
    """
    pass


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--location", "location_id", help="Location identifier (default: the site number)")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output JSON file (default: <FILE>.discharge.json)",
)
@click.option("--compact", is_flag=True, help="Output compact JSON (no indentation)")
@click.option(
    "--malformed-as-invalid",
    is_flag=True,
    help="Report malformed FlowTracker2 content as invalid data instead of unparseable",
)
@click.option("--dry-run", is_flag=True, help="Convert but don't write output")
def convert(
    file: Path,
    location_id: Optional[str],
    output: Optional[Path],
    compact: bool,
    malformed_as_invalid: bool,
    dry_run: bool,
) -> None:
    """Convert a FlowTracker2 measurement export.

    FILE is a FlowTracker2 measurement export (JSON).

    Example:

        flowtracker2-format convert 01234567_20240612.json --location 01234567
    """
    appender = InMemoryResultsAppender()
    converter = DataFileConverter(appender, malformed_as_invalid=malformed_as_invalid or None)
    location = LocationInfo(identifier=location_id) if location_id else None

    click.echo(click.style(f"Converting: {file.name}", fg="cyan", bold=True))

    with open(file, "rb") as f:
        result = converter.parse(f, location=location)

    if result.status == ParseStatus.CANNOT_PARSE:
        click.echo(click.style("Not a FlowTracker2 measurement:", fg="red"), err=True)
        _echo_errors(result.error_details)
        sys.exit(1)

    if result.status == ParseStatus.PARSED_BUT_INVALID:
        click.echo(click.style("Measurement data is invalid:", fg="red"), err=True)
        _echo_errors(result.error_details)
        sys.exit(1)

    for warning in result.warnings:
        click.echo(click.style(f"  Warning: {warning}", fg="yellow"), err=True)

    visit_results = appender.visits[-1]
    activity = visit_results.discharge_activities[0]
    section = activity.channel_measurements[0]
    click.echo(f"  Visit: {result.visit.visit_id} at {result.visit.location.identifier}")
    click.echo(
        f"  Discharge: {activity.discharge.value} {activity.discharge.unit_id}, "
        f"{len(section.verticals)} verticals, {section.discharge_method.value}"
    )

    if dry_run:
        click.echo(click.style("  (dry run — not written)", fg="cyan"))
        return

    output_path = output or file.with_suffix(".discharge.json")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(remove_nulls(appender.to_dict()), f, indent=None if compact else 2, default=str)

    click.echo(click.style(f"  Wrote: {output_path}", fg="green"))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(file: Path) -> None:
    """Validate a FlowTracker2 measurement export against the schema."""
    try:
        with open(file, "rb") as f:
            document = json.loads(f.read().decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        click.echo(f"✗ Not a JSON document: {e}", err=True)
        sys.exit(1)

    errors = JsonMeasurementReader().validate(document)
    if errors:
        click.echo(f"✗ Validation failed: {file}", err=True)
        for error in errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)

    click.echo(f"✓ Valid FlowTracker2 measurement export: {file}")


def _echo_errors(error_details: list[dict]) -> None:
    for detail in error_details:
        click.echo(f"  - {detail['type']}: {detail['error']}", err=True)


if __name__ == "__main__":
    main()
