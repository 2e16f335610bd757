from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import typer

from cli.render import (
    echo_error,
    render_descriptions,
    render_menu,
    render_outcome,
    render_reports,
    render_reports_json,
)
from logging_config import configure_logging
from models.errors import (
    DuplicateSensorError,
    InvalidSensorNameError,
    SensorNotFoundError,
    UnknownSensorKindError,
)
from services.ingest import IngestService
from settings import Settings, get_settings
from sources.serial_port import SerialLineSource, SerialSourceError


@dataclass
class CLIState:
    settings: Settings
    service: IngestService
    source: Optional[SerialLineSource] = None

    def open_source(self) -> SerialLineSource:
        """Open the serial line on first use and reuse it afterwards."""
        if self.source is None:
            source = SerialLineSource(
                port=self.settings.serial_port,
                baudrate=self.settings.baudrate,
                timeout_s=self.settings.serial_timeout,
                startup_delay_s=self.settings.startup_delay,
            )
            source.open()
            self.source = source
        return self.source

    def close(self) -> None:
        if self.source is not None:
            self.source.close()
            self.source = None


app = typer.Typer(
    help="Register temperature and pressure instruments and analyse their readings.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    port: Optional[str] = typer.Option(
        None,
        "--port",
        "-p",
        help="Serial device (defaults to SENSOR_SERIAL_PORT env or /dev/ttyUSB0).",
    ),
    baudrate: Optional[int] = typer.Option(
        None,
        "--baudrate",
        min=1,
        help="Serial line speed (defaults to SENSOR_SERIAL_BAUDRATE env or 115200).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Entry point for the CLI."""
    settings = get_settings()
    overrides = {}
    if port:
        overrides["serial_port"] = port
    if baudrate is not None:
        overrides["baudrate"] = baudrate
    if log_level:
        overrides["log_level"] = log_level.upper()
    if overrides:
        settings = replace(settings, **overrides)

    configure_logging(settings.log_level)
    state = CLIState(settings=settings, service=IngestService(delimiter=settings.frame_delimiter))
    ctx.obj = state
    ctx.call_on_close(state.close)


def _read_one_frame(state: CLIState) -> bool:
    source = state.open_source()
    typer.echo("Waiting for the device to initialise...")
    source.wait_for_device()
    typer.echo("Waiting for one frame...")
    line = source.read_line()
    if not line:
        echo_error("read timed out or the frame was empty.")
        return False
    typer.echo(f"[RX] Frame received: {line}")
    outcome = state.service.handle_line(line)
    if outcome is not None:
        render_outcome(outcome)
    return True


def _run_monitor(state: CLIState, process_every: int, max_frames: Optional[int]) -> None:
    source = state.open_source()
    typer.echo("Waiting for the device to initialise...")
    source.wait_for_device()
    typer.echo("Monitoring the serial line (Ctrl+C to stop)...")
    try:
        for outcome in state.service.monitor(source.lines(max_frames), process_every):
            render_outcome(outcome)
    except KeyboardInterrupt:
        typer.echo()
    typer.echo(f"Monitoring stopped after {state.service.session_frames} frames.")


def _menu_add(state: CLIState) -> None:
    kind = typer.prompt("Instrument kind (T=temperature, P=pressure)")
    name = typer.prompt("Instrument ID (e.g. T-001)")
    try:
        sensor = state.service.add_sensor(kind, name)
    except (UnknownSensorKindError, DuplicateSensorError, InvalidSensorNameError) as exc:
        echo_error(str(exc))
        return
    typer.secho(f"Sensor {sensor.name} created.", fg=typer.colors.GREEN)


def _menu_record(state: CLIState) -> None:
    name = typer.prompt("Instrument ID")
    raw = typer.prompt("Reading value")
    try:
        value = state.service.record_reading(name, raw)
    except SensorNotFoundError as exc:
        echo_error(str(exc))
        return
    typer.echo(f"Recorded {value} for {name.strip()}.")


@app.command("menu")
def menu_command(ctx: typer.Context) -> None:
    """Run the interactive menu."""
    state = _get_state(ctx)
    while True:
        render_menu()
        try:
            choice = typer.prompt("Choose an option", default="", show_default=False).strip()
        except typer.Abort:
            break

        try:
            if choice == "1":
                _menu_add(state)
            elif choice == "2":
                _menu_record(state)
            elif choice == "3":
                render_reports(state.service.process_all())
            elif choice == "4":
                render_descriptions(state.service.describe_all())
            elif choice == "5":
                _read_one_frame(state)
            elif choice == "6":
                _run_monitor(state, state.settings.process_every, None)
            elif choice == "7":
                break
            else:
                typer.echo("Invalid option.")
        except SerialSourceError as exc:
            echo_error(f"{exc} Check the connection.")
        except typer.Abort:
            break
    typer.echo("Exiting.")


@app.command("read-frame")
def read_frame_command(ctx: typer.Context) -> None:
    """Read a single frame from the serial line and ingest it."""
    state = _get_state(ctx)
    try:
        received = _read_one_frame(state)
    except SerialSourceError as exc:
        echo_error(str(exc))
        raise typer.Exit(code=1)
    if not received:
        raise typer.Exit(code=1)


@app.command("monitor")
def monitor_command(
    ctx: typer.Context,
    process_every: Optional[int] = typer.Option(
        None,
        "--process-every",
        min=0,
        help="Run a processing pass after every N frames (0 disables; defaults to SENSOR_PROCESS_EVERY or 5).",
    ),
    max_frames: Optional[int] = typer.Option(
        None,
        "--max-frames",
        min=1,
        help="Stop after this many frames instead of running until interrupted.",
    ),
) -> None:
    """Continuously ingest frames from the serial line."""
    state = _get_state(ctx)
    every = process_every if process_every is not None else state.settings.process_every
    try:
        _run_monitor(state, every, max_frames)
    except SerialSourceError as exc:
        echo_error(str(exc))
        raise typer.Exit(code=1)


@app.command("replay")
def replay_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Text file with one frame per line."),
    process_every: Optional[int] = typer.Option(
        None,
        "--process-every",
        min=0,
        help="Run a processing pass after every N frames (0 disables; defaults to SENSOR_PROCESS_EVERY or 5).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the final processing reports as JSON."),
) -> None:
    """Feed recorded frames through the registry, then process and list instruments."""
    state = _get_state(ctx)
    every = process_every if process_every is not None else state.settings.process_every
    with file.open(encoding="utf-8") as handle:
        for outcome in state.service.monitor(handle, every):
            if not as_json:
                render_outcome(outcome)

    reports = state.service.process_all()
    if as_json:
        render_reports_json(reports)
        return
    render_reports(reports)
    render_descriptions(state.service.describe_all())
