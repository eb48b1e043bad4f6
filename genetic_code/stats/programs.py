"""Program census: how many live entities run each distinct program."""

from __future__ import annotations

from collections import Counter

from genetic_code.domain.commands import Command
from genetic_code.domain.snapshot import FieldSnapshot

ProgramKey = tuple[Command, ...]


def program_label(program: ProgramKey) -> str:
    """Comma-separated opcode names, e.g. ``"LEFT,MOVE"``."""
    return ",".join(command.value for command in program)


def program_census(snapshot: FieldSnapshot) -> Counter[ProgramKey]:
    """Count live entities per distinct command sequence."""
    return Counter(entity.program for entity in snapshot.entities)


def top_programs(snapshot: FieldSnapshot, n: int) -> list[tuple[str, int]]:
    """Return the *n* most common programs as ``(label, count)``.

    Ties are broken by label so the ranking is deterministic.
    """
    census = program_census(snapshot)
    ranked = sorted(
        ((program_label(program), count) for program, count in census.items()),
        key=lambda pair: (-pair[1], pair[0]),
    )
    return ranked[:n]


def mean_energy(snapshot: FieldSnapshot) -> float | None:
    if not snapshot.entities:
        return None
    return sum(entity.energy for entity in snapshot.entities) / len(snapshot.entities)
