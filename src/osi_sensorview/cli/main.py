"""CLI entry point for osi-sensorview.

Invoked as::

    osi-sensorview [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m osi_sensorview.cli.main

Available commands
------------------
* ``version`` — show package and interface version
* ``schema``  — print the field/tag table of a message
* ``encode``  — build a binary trace from YAML/JSON documents
* ``decode``  — dump a binary trace as JSON
* ``inspect`` — summarise the sensor views of a trace
* ``check``   — report documented-contract violations in a trace
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from osi_sensorview.settings import Settings

console = Console()
logger = logging.getLogger(__name__)


def _fail(prefix: str, exc: BaseException) -> None:
    console.print(f"[red]{prefix}:[/red] {escape(str(exc))}")
    raise SystemExit(1) from exc


def _message_types() -> dict[str, type]:
    """Schema message classes by (qualified) name, nested types included."""
    from osi_sensorview import messages
    from osi_sensorview.messages.base import OsiMessage

    found: dict[str, type] = {}
    pending = [getattr(messages, name) for name in messages.__all__]
    while pending:
        candidate = pending.pop()
        if isinstance(candidate, type) and issubclass(candidate, OsiMessage) and candidate is not OsiMessage:
            found[candidate.__qualname__] = candidate
            pending.extend(t for t in candidate.nested_types() if issubclass(t, OsiMessage))
    return found


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="osi-sensorview")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Set the log level (overrides the settings file).",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML settings file.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, config_path: str | None) -> None:
    """Encode, decode and inspect OSI sensor view data."""
    try:
        settings = Settings.from_yaml(config_path) if config_path else Settings()
    except (ValidationError, yaml.YAMLError) as exc:
        _fail("Invalid settings file", exc)
    level = (log_level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(levelname)s %(name)s — %(message)s",
    )
    ctx.obj = settings


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show package and interface version information."""
    from osi_sensorview import __version__
    from osi_sensorview.messages import InterfaceVersion

    console.print(f"[bold]osi-sensorview[/bold] v{__version__}")
    console.print(f"OSI interface {InterfaceVersion.current()}")
    console.print(f"Python {sys.version}")


# ---------------------------------------------------------------------------
# schema
# ---------------------------------------------------------------------------


@cli.command(name="schema")
@click.argument("message", default="SensorView")
def schema_command(message: str) -> None:
    """Print the fields and wire tags of MESSAGE (default: SensorView).

    Nested types are addressed with a dot, e.g. ``RadarSensorView.Reflection``.
    """
    types = _message_types()
    if message not in types:
        console.print(f"[red]Unknown message {escape(message)!r}.[/red]")
        console.print("Known messages: " + ", ".join(sorted(types)))
        raise SystemExit(1)
    message_type = types[message]

    table = Table(title=message_type.full_name(), show_header=True)
    table.add_column("Tag", justify="right", style="bold")
    table.add_column("Field")
    table.add_column("Type")
    table.add_column("Cardinality")
    for field in message_type.wire_fields():
        referenced = field.message_type or field.enum_type
        type_name = referenced.__qualname__ if referenced is not None else field.kind
        table.add_row(
            str(field.tag),
            field.name,
            type_name,
            "repeated" if field.repeated else "singular",
        )
    console.print(table)


# ---------------------------------------------------------------------------
# encode
# ---------------------------------------------------------------------------


@cli.command(name="encode")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_path", type=click.Path(dir_okay=False))
@click.pass_obj
def encode_command(settings: Settings, input_path: str, output_path: str) -> None:
    """Encode sensor views from INPUT_PATH (YAML or JSON) into the trace OUTPUT_PATH.

    The document uses the proto3 JSON mapping of SensorView (bytes as
    base64).  A top-level list holds several sensor views::

        - timestamp: {seconds: 1, nanos: 500000000}
          sensor_id: {value: 7}
          radar_sensor_view:
            - reflection:
                - {signal_strength: -12.5, time_of_flight: 3.2e-7}
    """
    from osi_sensorview.codec import DecodeError, from_dict
    from osi_sensorview.messages import SensorView
    from osi_sensorview.trace import write_trace

    try:
        with Path(input_path).open("r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        _fail("Error reading input", exc)

    documents = document if isinstance(document, list) else [document or {}]
    try:
        views = [from_dict(doc, SensorView) for doc in documents]
    except (DecodeError, AttributeError, TypeError) as exc:
        _fail("Invalid sensor view document", exc)

    try:
        count = write_trace(
            output_path, views, max_message_bytes=settings.trace.max_message_bytes
        )
    except ValueError as exc:
        _fail("Error writing trace", exc)
    console.print(f"Wrote [bold]{count}[/bold] sensor view(s) to [bold]{escape(output_path)}[/bold]")


# ---------------------------------------------------------------------------
# decode
# ---------------------------------------------------------------------------


@cli.command(name="decode")
@click.argument("trace_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    default=None,
    type=click.Path(dir_okay=False),
    help="Write JSON to this file instead of stdout.",
)
@click.pass_obj
def decode_command(settings: Settings, trace_path: str, output: str | None) -> None:
    """Decode the trace TRACE_PATH and print its sensor views as a JSON list."""
    from osi_sensorview.codec import to_dict
    from osi_sensorview.trace import TraceFormatError, read_trace

    try:
        views = read_trace(trace_path, max_message_bytes=settings.trace.max_message_bytes)
    except TraceFormatError as exc:
        _fail("Error reading trace", exc)

    text = json.dumps([to_dict(view) for view in views], indent=2)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        console.print(f"Decoded {len(views)} sensor view(s) to [bold]{escape(output)}[/bold]")
    else:
        click.echo(text)


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


@cli.command(name="inspect")
@click.argument("trace_path", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def inspect_command(settings: Settings, trace_path: str) -> None:
    """Summarise every sensor view in TRACE_PATH."""
    from osi_sensorview.trace import TraceFormatError, read_trace

    try:
        views = read_trace(trace_path, max_message_bytes=settings.trace.max_message_bytes)
    except TraceFormatError as exc:
        _fail("Error reading trace", exc)

    table = Table(title=f"Sensor views in {escape(trace_path)}", show_header=True)
    table.add_column("#", justify="right", style="bold")
    table.add_column("Timestamp")
    table.add_column("Sensor")
    for technology in ("generic", "radar", "lidar", "camera", "ultrasonic"):
        table.add_column(technology.capitalize(), justify="right")
    table.add_column("Reflections", justify="right")

    for index, view in enumerate(views):
        counts = view.sub_view_counts()
        reflections = sum(len(v.reflection) for v in view.radar_sensor_view) + sum(
            len(v.reflection) for v in view.lidar_sensor_view
        )
        table.add_row(
            str(index),
            str(view.timestamp) if view.timestamp is not None else "-",
            str(view.sensor_id) if view.sensor_id is not None else "-",
            *(str(counts[t]) for t in ("generic", "radar", "lidar", "camera", "ultrasonic")),
            str(reflections),
        )
    console.print(table)
    console.print(f"Total: [bold]{len(views)}[/bold] sensor view(s)")


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("trace_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Exit with status 1 on any issue (overrides the settings file).",
)
@click.pass_obj
def check_command(settings: Settings, trace_path: str, strict: bool | None) -> None:
    """Check every sensor view in TRACE_PATH against its documented contracts."""
    from osi_sensorview.trace import TraceFormatError, read_trace
    from osi_sensorview.validation import check_sensor_view

    try:
        views = read_trace(trace_path, max_message_bytes=settings.trace.max_message_bytes)
    except TraceFormatError as exc:
        _fail("Error reading trace", exc)

    table = Table(title="Consistency issues", show_header=True)
    table.add_column("#", justify="right", style="bold")
    table.add_column("Code")
    table.add_column("Path")
    table.add_column("Message")
    total = 0
    for index, view in enumerate(views):
        for issue in check_sensor_view(view).issues:
            total += 1
            table.add_row(str(index), issue.code, escape(issue.path), escape(issue.message))

    if total == 0:
        console.print(f"[green]All {len(views)} sensor view(s) consistent.[/green]")
        return
    console.print(table)
    console.print(f"[yellow]{total} issue(s) in {len(views)} sensor view(s).[/yellow]")
    if strict if strict is not None else settings.validation.strict:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
