"""Kill notification sinks for PyDungeon.

The encounter engine only knows the `KillSink` protocol: one synchronous
`notify_kill(killer, victim)` call per kill, in emission order. Sending the
same kill to several places is done by wrapping sinks in a `FanOutSink`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Protocol, runtime_checkable

from rich.console import Console

from dungeon_core import Entity
from dungeon_core.logging_config import get_logger

logger = get_logger("sinks")


def kill_message(killer: Entity, victim: Entity) -> str:
    return f"{killer.name} killed {victim.name}"


# ============================================================================
# Protocol
# ============================================================================


@runtime_checkable
class KillSink(Protocol):
    """Anything that wants to hear about kills."""

    def notify_kill(self, killer: Entity, victim: Entity) -> None:
        ...


# ============================================================================
# Sinks
# ============================================================================


class ConsoleSink:
    """Prints each kill to a Rich console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def notify_kill(self, killer: Entity, victim: Entity) -> None:
        self.console.print(kill_message(killer, victim), style="red", markup=False, highlight=False)


class FileSink:
    """Appends each kill to a log file, one line per kill.

    The file is opened in append mode for every kill so nothing is held
    open between rounds. A write failure is logged and does not interrupt
    the round that produced the kill.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def notify_kill(self, killer: Entity, victim: Entity) -> None:
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(kill_message(killer, victim) + "\n")
        except OSError as exc:
            logger.error(f"Kill log write to {self.path} failed: {exc}")


class CollectingSink:
    """Keeps (killer, victim) pairs in memory."""

    def __init__(self) -> None:
        self.kills: list[tuple[Entity, Entity]] = []

    def notify_kill(self, killer: Entity, victim: Entity) -> None:
        self.kills.append((killer, victim))

    def messages(self) -> list[str]:
        return [kill_message(killer, victim) for killer, victim in self.kills]


class CallbackSink:
    """Adapts a plain `(killer, victim)` callable to the KillSink protocol."""

    def __init__(self, callback: Callable[[Entity, Entity], None]):
        self.callback = callback

    def notify_kill(self, killer: Entity, victim: Entity) -> None:
        self.callback(killer, victim)


class FanOutSink:
    """Forwards every kill to each wrapped sink, in order.

    A sink that raises is logged and skipped; the sinks after it still
    receive the kill.
    """

    def __init__(self, sinks: Iterable[KillSink] = ()):
        self.sinks: list[KillSink] = list(sinks)

    def add(self, sink: KillSink) -> None:
        self.sinks.append(sink)

    def notify_kill(self, killer: Entity, victim: Entity) -> None:
        for sink in self.sinks:
            try:
                sink.notify_kill(killer, victim)
            except Exception as exc:
                logger.exception(
                    f"Kill sink {type(sink).__name__} failed on {kill_message(killer, victim)!r}",
                    exc_info=exc,
                )


class NullSink:
    """Discards kills."""

    def notify_kill(self, killer: Entity, victim: Entity) -> None:
        pass


def as_sink(target: KillSink | Callable[[Entity, Entity], None] | None) -> KillSink:
    """Accept a sink, a plain callable or None and return a KillSink."""
    if target is None:
        return NullSink()
    if isinstance(target, KillSink):
        return target
    if callable(target):
        return CallbackSink(target)
    raise TypeError(f"Not a kill sink: {target!r}")
