"""Command-line interface for cellcalc."""

from __future__ import annotations

import json
from pathlib import Path

import click

from cellcalc import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cellcalc")
def main() -> None:
    """cellcalc -- evaluate spreadsheet formulas from the command line."""


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _setup(config_dir: str) -> dict:
    """Load config and point the event log at it."""
    from cellcalc.config import load_config
    from cellcalc.logging.events import configure_from_config

    base = Path(config_dir)
    try:
        config = load_config(base)
    except ValueError as e:
        raise click.ClickException(str(e))
    configure_from_config(config, base)
    return config


def _load_grid(grid_path: str | None, select: str | None):
    from cellcalc.formulas.errors import FormulaError
    from cellcalc.grid import FrameGrid, parse_selection

    if grid_path is None:
        if select:
            raise click.ClickException("--select requires --grid")
        return None
    try:
        selected = parse_selection(select) if select else None
    except FormulaError as e:
        raise click.ClickException(f"Invalid --select: {e}")
    return FrameGrid.from_csv(grid_path, selected=selected)


_grid_option = click.option(
    "--grid", "grid_path", default=None, type=click.Path(exists=True, dir_okay=False),
    help="CSV file holding the grid (first column = row labels).",
)
_select_option = click.option(
    "--select", default=None, help="Cell being edited, e.g. B2; referencing it is an error.",
)
_config_option = click.option(
    "--config-dir", default=".", type=click.Path(file_okay=False),
    help="Directory containing cellcalc.yaml.",
)


# ---------------------------------------------------------------------------
# Init
# ---------------------------------------------------------------------------


@main.command()
@click.argument("directory", type=click.Path(file_okay=False), default=".")
def init(directory: str) -> None:
    """Write a commented cellcalc.yaml into DIRECTORY."""
    from cellcalc.config import CONFIG_FILENAME, DEFAULT_CONFIG_YAML

    target = Path(directory)
    target.mkdir(parents=True, exist_ok=True)
    path = target / CONFIG_FILENAME
    if path.exists():
        raise click.ClickException(f"{path} already exists")
    path.write_text(DEFAULT_CONFIG_YAML)
    click.echo(f"Created {path}")


# ---------------------------------------------------------------------------
# Eval
# ---------------------------------------------------------------------------


@main.command("eval")
@click.argument("formula")
@_grid_option
@_select_option
@_config_option
def eval_cmd(formula: str, grid_path: str | None, select: str | None, config_dir: str) -> None:
    """Evaluate FORMULA and print the result."""
    from cellcalc.config import format_number
    from cellcalc.engine import compute
    from cellcalc.formulas.errors import FormulaError

    config = _setup(config_dir)
    grid = _load_grid(grid_path, select)
    try:
        result = compute(formula, grid)
    except FormulaError as e:
        raise click.ClickException(str(e))
    click.echo(format_number(result, config))


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


@main.command()
@click.argument("formula")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def tokens(formula: str, as_json: bool) -> None:
    """Print the token stream for FORMULA."""
    from cellcalc.formulas.errors import FormulaError
    from cellcalc.formulas.lexer import tokenize

    try:
        toks = tokenize(formula)
    except FormulaError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps([t.model_dump(mode="json") for t in toks], indent=2))
    else:
        for t in toks:
            click.echo(f"{t.type.value:15s} {t.value}")


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------


@main.command()
@click.argument("formula")
@_grid_option
@_select_option
@_config_option
def tree(formula: str, grid_path: str | None, select: str | None, config_dir: str) -> None:
    """Print FORMULA fully parenthesised, with cell references resolved."""
    from cellcalc.engine import compile_formula
    from cellcalc.formulas.errors import FormulaError

    _setup(config_dir)
    grid = _load_grid(grid_path, select)
    try:
        expr = compile_formula(formula, grid)
    except FormulaError as e:
        raise click.ClickException(str(e))
    click.echo(expr.to_formula())


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@main.command("events")
@_config_option
@click.option("--level", default=None, type=click.Choice(["info", "warning", "error"]))
@click.option("--type", "event_type", default=None, help="Filter by event type.")
@click.option("--limit", default=100, type=int, help="Maximum events to show.")
def events_cmd(config_dir: str, level: str | None, event_type: str | None, limit: int) -> None:
    """Show the structured event log."""
    from cellcalc.config import load_config
    from cellcalc.logging.sink import EventSink

    base = Path(config_dir)
    config = load_config(base)
    log_dir = Path(config["log_dir"])
    if not log_dir.is_absolute():
        log_dir = base / log_dir
    if not (log_dir / "events.ndjson").exists():
        click.echo("No events found.")
        return

    events = EventSink(log_dir).read_events(level=level, event_type=event_type, limit=limit)
    if not events:
        click.echo("No events found.")
        return

    for evt in events:
        ts = evt.get("ts", "")
        lvl = evt.get("level", "").upper()
        etype = evt.get("event_type", "")
        msg = evt.get("message", "")
        err = evt.get("error_code")
        line = f"[{ts}] {lvl:7s} {etype}: {msg}"
        if err:
            line += f"  ({err})"
        click.echo(line)


if __name__ == "__main__":
    main()
