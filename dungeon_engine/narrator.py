"""Human-readable rendering for PyDungeon.

Turns entities, rounds and the rule table into text lines and Rich tables
for the command loop and the CLI.
"""

from typing import Iterable, List

from rich.table import Table

from dungeon_core import Entity, Round

from .rules import RuleTable


def describe_entities(entities: Iterable[Entity]) -> List[str]:
    """One "<Kind> <name> at (x, y)" line per entity."""
    return [str(entity) for entity in entities]


def summarize_round(round_: Round) -> str:
    """Short prose summary of a resolved round.

    Args:
        round_: Round returned by the encounter engine

    Returns:
        Multi-line summary string
    """
    lines = [f"Round {round_.number} (range {round_.range:g})"]

    if not round_.kills:
        lines.append("  No encounters.")
    for event in round_.kills:
        lines.append(f"  - {event.description}")

    noun = "survivor" if round_.survivors == 1 else "survivors"
    lines.append(f"  {len(round_.kills)} killed, {round_.survivors} {noun}")
    return "\n".join(lines)


def population_table(entities: Iterable[Entity], title: str = "Dungeon") -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="bold")
    table.add_column("Name")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")

    for index, entity in enumerate(entities, start=1):
        table.add_row(str(index), entity.kind.label, entity.name, str(entity.x), str(entity.y))
    return table


def rules_table(rules: RuleTable) -> Table:
    table = Table(title="Encounter rules")
    table.add_column("Actor", style="bold")
    table.add_column("Defeats")

    for actor, target in rules.rules():
        table.add_row(actor.label, target.label)
    return table
