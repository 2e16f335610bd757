from __future__ import annotations

import json
from typing import Iterable, Sequence

import typer

from models.reports import ProcessReport, SensorKind
from services.ingest import IngestOutcome

MENU_TEXT = """\
1. Add instrument
2. Record reading
3. Run processing pass
4. List instruments
5. Read one frame from the serial line
6. Continuous monitoring
7. Exit"""


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_error(message: str) -> None:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)


def render_menu() -> None:
    typer.echo()
    echo_heading("===== Instrument Monitor =====")
    typer.echo(MENU_TEXT)


def render_report(report: ProcessReport) -> None:
    typer.echo(f"-> Processing sensor {report.sensor} ({report.kind.name})")
    if report.mean is None:
        typer.echo("   No readings.")
    elif report.kind is SensorKind.temperature:
        typer.echo(f"   Mean after dropping lowest reading: {report.mean}")
    else:
        typer.echo(f"   Mean of readings: {report.mean}")


def render_reports(reports: Sequence[ProcessReport]) -> None:
    echo_heading("--- Processing pass ---")
    if not reports:
        typer.echo("No instruments registered.")
    for report in reports:
        render_report(report)


def render_reports_json(reports: Iterable[ProcessReport]) -> None:
    payload = [report.model_dump(mode="json") for report in reports]
    typer.echo(json.dumps(payload, indent=2))


def render_descriptions(lines: Iterable[str]) -> None:
    echo_heading("[Registered instruments]")
    for line in lines:
        typer.echo(line)


def render_outcome(outcome: IngestOutcome) -> None:
    frame = outcome.frame
    if not outcome.accepted:
        echo_error(f"frame {frame.kind_tag};{frame.sensor_id};{frame.value_text} rejected: {outcome.error}")
        return
    if outcome.created:
        typer.secho(f"Sensor {outcome.sensor} created.", fg=typer.colors.GREEN)
    typer.echo(f"[RX] {outcome.sensor} <- {outcome.value}")
    if outcome.reports:
        render_reports(outcome.reports)
