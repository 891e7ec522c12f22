"""Encounter rules for PyDungeon.

The rule table is a directed graph over entity kinds: an edge A -> B means
"an A defeats a B it meets". The table only answers one direction at a time;
the encounter engine asks both (A, B) and (B, A) for every pair.

Reference rules:
    Dragon -> Princess
    Knight -> Dragon
Princess has no outgoing edges and never defeats anything.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

import networkx as nx

from dungeon_core import EntityKind


class Outcome(str, Enum):
    """Result of an ordered (actor kind, target kind) lookup."""
    NO_EFFECT = "no_effect"
    TARGET_DEFEATED = "target_defeated"


class RuleTable:
    """Directed "defeats" relation over the closed kind set.

    The graph is built once and never mutated, so `resolve` is a pure
    lookup. Extending the game with a new kind means adding edges here;
    the engine does not change.

    Usage:
        table = RuleTable([(EntityKind.DRAGON, EntityKind.PRINCESS)])
        table.resolve(EntityKind.DRAGON, EntityKind.PRINCESS)  # TARGET_DEFEATED
    """

    def __init__(self, defeats: Iterable[tuple[EntityKind, EntityKind]]):
        """Build the table.

        Args:
            defeats: (actor kind, target kind) pairs where the actor wins

        Raises:
            ValueError: If a rule lets a kind defeat its own kind
        """
        graph = nx.DiGraph()
        graph.add_nodes_from(EntityKind)
        for actor, target in defeats:
            actor = EntityKind(actor)
            target = EntityKind(target)
            if actor == target:
                raise ValueError(f"A kind cannot defeat its own kind: {actor.label}")
            graph.add_edge(actor, target)
        self._graph = nx.freeze(graph)

    def resolve(self, actor: EntityKind, target: EntityKind) -> Outcome:
        """Does an `actor` defeat a `target` it meets?"""
        if self._graph.has_edge(actor, target):
            return Outcome.TARGET_DEFEATED
        return Outcome.NO_EFFECT

    def prey_of(self, kind: EntityKind) -> list[EntityKind]:
        """Kinds that `kind` defeats."""
        return sorted(self._graph.successors(kind), key=_kind_order)

    def predators_of(self, kind: EntityKind) -> list[EntityKind]:
        """Kinds that defeat `kind`."""
        return sorted(self._graph.predecessors(kind), key=_kind_order)

    def rules(self) -> list[tuple[EntityKind, EntityKind]]:
        """All (actor, target) edges in kind declaration order."""
        return sorted(self._graph.edges(), key=lambda edge: (_kind_order(edge[0]), _kind_order(edge[1])))

    @property
    def is_acyclic(self) -> bool:
        """True when no pair of kinds can defeat each other, directly or transitively."""
        return nx.is_directed_acyclic_graph(self._graph)

    def __len__(self) -> int:
        return self._graph.number_of_edges()

    def __repr__(self) -> str:
        edges = ", ".join(f"{a.label}->{b.label}" for a, b in self.rules())
        return f"RuleTable({edges})"


def _kind_order(kind: EntityKind) -> int:
    return list(EntityKind).index(kind)


DEFAULT_RULES = RuleTable([
    (EntityKind.DRAGON, EntityKind.PRINCESS),
    (EntityKind.KNIGHT, EntityKind.DRAGON),
])
