"""
serialscope CLI

Inspect hardware identifiers, export them and compare them with the last export.
"""

import logging
from enum import Enum

import typer
from typing_extensions import Annotated

from serialscope.exceptions import ExportError
from serialscope.exceptions import InventoryError
from serialscope.formatters import echo_json
from serialscope.formatters import format_advisories
from serialscope.formatters import format_drift_report
from serialscope.formatters import format_posture
from serialscope.formatters import format_snapshot
from serialscope.intel import get_default_collector
from serialscope.intel.inventory_file import InventoryFileCollector
from serialscope.session import InspectionSession
from serialscope.settings import get_inventory_path
from serialscope.settings import populate_settings_from_cli

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Inspect hardware identifiers and detect changes between exports",
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    text = "text"
    json = "json"


OutputOption = Annotated[OutputFormat, typer.Option(help="Output format")]


def _print_version(value: bool) -> None:
    if not value:
        return
    from serialscope.version import get_version_info

    typer.echo(str(get_version_info()))
    raise typer.Exit()


def _build_session() -> InspectionSession:
    inventory = get_inventory_path()
    try:
        if inventory:
            collector = InventoryFileCollector.from_path(inventory)
        else:
            collector = get_default_collector()
    except InventoryError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    return InspectionSession.from_collector(collector)


# ----------------------------
# CLI Commands
# ----------------------------


@app.callback()
def common(
    inventory: Annotated[
        str | None,
        typer.Option(
            help="Read identifiers from a JSON inventory document instead of this machine",
            envvar="SERIALSCOPE_INVENTORY__PATH",
        ),
    ] = None,
    export_file: Annotated[
        str | None,
        typer.Option(help="Path of the serial export file (default: serials_export.txt)"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose logging")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only log warnings and errors")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_print_version,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = False,
) -> None:
    if verbose:
        logging.getLogger("serialscope").setLevel(logging.DEBUG)
    elif quiet:
        logging.getLogger("serialscope").setLevel(logging.WARNING)
    else:
        logging.getLogger("serialscope").setLevel(logging.INFO)
    populate_settings_from_cli(export_file=export_file, inventory=inventory)


@app.command(name="show")  # type: ignore[misc]
def show_cmd(output: OutputOption = OutputFormat.text) -> None:
    """
    Show the collected identifiers.

    \b
    Examples:
        serialscope show
        serialscope --inventory inventory.json show --output json
    """
    session = _build_session()
    if output == OutputFormat.json:
        echo_json(session.snapshot)
        return
    format_snapshot(session.snapshot)


@app.command(name="export")  # type: ignore[misc]
def export_cmd() -> None:
    """
    Write the identifiers to the serial export file.

    The file is overwritten and becomes the baseline for `compare`.
    """
    session = _build_session()
    try:
        path = session.export()
    except ExportError as e:
        typer.secho(f"Export failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    typer.secho(f"Exported to {path}", fg=typer.colors.GREEN)


@app.command(name="compare")  # type: ignore[misc]
def compare_cmd(output: OutputOption = OutputFormat.text) -> None:
    """
    Compare the identifiers with the last export.

    \b
    Examples:
        serialscope compare
        serialscope --export-file /var/lib/serialscope/serials.txt compare
    """
    session = _build_session()
    report = session.drift_report()
    if output == OutputFormat.json:
        echo_json(
            {
                "baseline": session.export_path if session.baseline else None,
                "baseline_error": (
                    str(session.baseline_error) if session.baseline_error else None
                ),
                "results": report,
            }
        )
        return
    if session.baseline_error is not None:
        typer.secho(
            f"Could not read {session.export_path}: {session.baseline_error}",
            fg=typer.colors.YELLOW,
            err=True,
        )
    format_drift_report(report, session.baseline is not None)


@app.command(name="posture")  # type: ignore[misc]
def posture_cmd(output: OutputOption = OutputFormat.text) -> None:
    """Show whether platform security features lock low-level identifiers."""
    session = _build_session()
    if output == OutputFormat.json:
        echo_json(session.posture)
        return
    format_posture(session.posture)


@app.command(name="advise")  # type: ignore[misc]
def advise_cmd(output: OutputOption = OutputFormat.text) -> None:
    """List the remediation classes that apply to this platform."""
    session = _build_session()
    if output == OutputFormat.json:
        echo_json(session.advisories)
        return
    format_posture(session.posture)
    format_advisories(session.advisories)


@app.command(name="version")  # type: ignore[misc]
def version_cmd(output: OutputOption = OutputFormat.text) -> None:
    """Print the serialscope version, build and platform."""
    from serialscope.version import get_version_info

    info = get_version_info()
    if output == OutputFormat.json:
        echo_json(info)
        return
    typer.echo(str(info))


def main():
    """Entrypoint for the serialscope CLI."""
    logging.basicConfig(level=logging.INFO)
    app()


if __name__ == "__main__":
    main()
