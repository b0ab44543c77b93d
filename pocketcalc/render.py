"""Rich rendering for the calculator display, key traces and key map."""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pocketcalc.keypad import KEY_HELP, Step
from pocketcalc.models import CalculatorState, Session

_STATE_STYLES = {
    CalculatorState.EXCEPTION_FOUND: "red",
    CalculatorState.CALCULATION_COMPLETE: "green",
}


def render_display(session: Session, console: Console) -> None:
    """Render the calculator screen: label line above the main display."""
    style = "bold red" if session.state is CalculatorState.EXCEPTION_FOUND else "bold"
    screen = Group(
        Text(session.calculation_label_text or " ", style="dim", justify="right"),
        Text(session.display_text, style=style, justify="right"),
    )
    # Widen for long results so the display never wraps.
    width = max(28, len(session.display_text) + 4, len(session.calculation_label_text) + 4)
    console.print(Panel(screen, width=width, title="pocketcalc", title_align="left"))


def render_trace(steps: list[Step], console: Console) -> None:
    """Render one table row per key press."""
    if not steps:
        console.print("[yellow]No keys pressed.[/yellow]")
        return

    table = Table(title="Key trace", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", style="cyan")
    table.add_column("State")
    table.add_column("Label", style="dim", justify="right")
    table.add_column("Display", justify="right", min_width=16)

    for i, step in enumerate(steps, start=1):
        color = _STATE_STYLES.get(step.state, "white")
        table.add_row(
            str(i),
            step.key,
            f"[{color}]{step.state.value}[/{color}]",
            step.calculation_label_text or "--",
            step.display_text,
        )

    console.print()
    console.print(table)
    console.print()


def render_keys(console: Console) -> None:
    """Render the table of accepted key tokens."""
    table = Table(title="Keys", show_header=True, header_style="bold")
    table.add_column("Tokens", style="green", min_width=15)
    table.add_column("Action")
    for tokens, action in KEY_HELP:
        table.add_row(tokens, action)

    console.print()
    console.print(table)
    console.print()
