"""PyDungeon CLI.

Usage:
    dungeon shell
    dungeon shell --script commands.txt
    dungeon battle dungeon.txt --range 5 --rounds 2 --output after.txt
    dungeon show dungeon.txt
    dungeon rules
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from dungeon_core import PersistenceError
from dungeon_core.logging_config import setup_logging
from dungeon_core.persistence import load_file

from .commands import CommandInterpreter
from .config import DungeonConfig, get_config, reload_config, set_config
from .engine import Dungeon
from .narrator import population_table, rules_table, summarize_round
from .rules import DEFAULT_RULES

app = typer.Typer(
    name="dungeon",
    help="PyDungeon - princesses, dragons and knights on a 500x500 grid",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    config: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to a JSON config file")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", "-l", help="DEBUG, INFO, WARNING or ERROR")] = None,
) -> None:
    """Load configuration and set up logging for every command."""
    try:
        cfg = reload_config(config)
        if log_level:
            cfg = DungeonConfig.from_dict({**cfg.to_dict(), "log_level": log_level.upper()})
            set_config(cfg)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    setup_logging(
        level=cfg.log_level,
        log_dir=cfg.log_dir,
        console_output=True,
        file_output=cfg.log_dir is not None,
    )


def _run_lines(interpreter: CommandInterpreter, lines, prompt: bool) -> None:
    while True:
        if prompt:
            console.print("[bold cyan]dungeon>[/bold cyan] ", end="")
        line = next(lines, None)
        if line is None:
            break
        result = interpreter.execute(line)
        style = None if result.ok else "yellow"
        for text in result.lines:
            console.print(text, style=style, markup=False, highlight=False)
        if result.exit:
            break


@app.command("shell")
def shell(
    script: Annotated[Optional[Path], typer.Option("--script", "-s", help="Read commands from a file")] = None,
) -> None:
    """Interactive command loop (add, print, save, load, battle, exit)."""
    dungeon = Dungeon(get_config())
    interpreter = CommandInterpreter(dungeon)

    if script is not None:
        try:
            lines = script.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            console.print(f"[red]Error:[/red] Cannot read {script}: {escape(str(e))}")
            raise typer.Exit(1)
        _run_lines(interpreter, iter(lines), prompt=False)
        return

    interactive = sys.stdin.isatty()
    if interactive:
        console.print(Panel("Type [bold]help[/bold] for commands, [bold]exit[/bold] to leave.", title="PyDungeon"))
    _run_lines(interpreter, (line.rstrip("\n") for line in sys.stdin), prompt=interactive)


@app.command("battle")
def battle(
    file: Annotated[Path, typer.Argument(help="Population file to load")],
    encounter_range: Annotated[Optional[float], typer.Option("--range", "-r", min=0, help="Inclusive encounter distance")] = None,
    rounds: Annotated[int, typer.Option("--rounds", "-n", min=1, help="Number of rounds to run")] = 1,
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Save survivors to this file")] = None,
) -> None:
    """Load a population file and run encounter rounds on it."""
    dungeon = Dungeon(get_config())
    try:
        result = dungeon.load(file)
    except PersistenceError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    if result.error is not None:
        console.print(f"[yellow]Load stopped early at {escape(str(result.error))}[/yellow]")

    for _ in range(rounds):
        round_ = dungeon.battle(encounter_range)
        console.print(summarize_round(round_), markup=False, highlight=False)

    if output is not None:
        try:
            count = dungeon.save(output)
        except PersistenceError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        console.print(f"Saved {count} survivors to {output}")


@app.command("show")
def show(
    file: Annotated[Path, typer.Argument(help="Population file to display")],
) -> None:
    """Display a saved population."""
    try:
        result = load_file(file)
    except PersistenceError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(population_table(result.entities, title=str(file)))
    if result.error is not None:
        console.print(f"[yellow]Stopped early at {escape(str(result.error))}[/yellow]")


@app.command("rules")
def rules() -> None:
    """Display the encounter rules."""
    console.print(rules_table(DEFAULT_RULES))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
