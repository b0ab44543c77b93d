"""CLI for the pocketcalc calculator.

Usage:
    python -m pocketcalc press 12 + 3 =          # Press keys, show the display
    python -m pocketcalc press 1/0= --trace      # Show every key press
    python -m pocketcalc press 9 +/- --json      # Dump the final session
    python -m pocketcalc repl                    # Interactive keypad
    python -m pocketcalc keys                    # List accepted keys

Start keys with "--" when the first one looks like an option (-- - 5 =).
"""

from __future__ import annotations

import json
import logging
from typing import List

import typer
from rich.console import Console
from rich.markup import escape

from pocketcalc.config import load_config
from pocketcalc.engine import CalculatorEngine
from pocketcalc.keypad import press_keys, tokenize
from pocketcalc.render import render_display, render_keys, render_trace

app = typer.Typer(
    name="pocketcalc",
    help="Pocket calculator driven by key presses",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console()

_QUIT_WORDS = {"q", "quit", "exit"}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine state transitions"),
) -> None:
    """Pocket calculator driven by key presses."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(name)s: %(message)s")


def _make_engine() -> CalculatorEngine:
    """Engine configured from POCKETCALC_* environment variables."""
    try:
        config = load_config()
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    return CalculatorEngine(config)


@app.command("press")
def cmd_press(
    keys: List[str] = typer.Argument(..., help="Key tokens (e.g. '12 + 3 =' or '12+3=')"),
    trace: bool = typer.Option(False, "--trace", "-t", help="Show the display after every key"),
    as_json: bool = typer.Option(False, "--json", help="Print the final session as JSON"),
) -> None:
    """Press a sequence of keys on a fresh calculator."""
    engine = _make_engine()
    try:
        steps = press_keys(engine, tokenize(" ".join(keys)))
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]. Run 'pocketcalc keys' for the key list.")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(engine.session.to_dict(), indent=2, ensure_ascii=False))
        return
    if trace:
        render_trace(steps, out)
    render_display(engine.session, out)


@app.command("repl")
def cmd_repl() -> None:
    """Interactive keypad. Type keys and press enter; 'quit' to leave."""
    engine = _make_engine()
    render_display(engine.session, out)

    while True:
        try:
            line = out.input("[bold cyan]keys>[/bold cyan] ")
        except EOFError:
            break
        if line.strip().lower() in _QUIT_WORDS:
            break
        if not line.strip():
            continue
        try:
            press_keys(engine, tokenize(line))
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            continue
        render_display(engine.session, out)


@app.command("keys")
def cmd_keys() -> None:
    """Show accepted key tokens."""
    render_keys(out)


if __name__ == "__main__":
    app()
