from __future__ import annotations

from typing import Dict, List, Sequence

from loguru import logger

from roulette.services.matching import ensure_even


def schedule_round(participants: Sequence[str], offset: int) -> Dict[str, str]:
    """Matching for one rotation ``offset`` (1..N-1) of the circle method.

    The first participant stays in place while the others rotate; the rotated
    order is then folded in half so that ``order[i]`` meets ``order[N-1-i]``.
    Rounds are not the "pair i with (i + offset) mod N" rounds, even for N=4.
    """
    ensure_even(participants)
    size = len(participants)
    if not 1 <= offset < size:
        raise ValueError(f"offset must be between 1 and {size - 1}, got {offset}")

    fixed, rest = participants[0], list(participants[1:])
    shift = offset - 1
    order = [fixed] + rest[shift:] + rest[:shift]

    pairs: Dict[str, str] = {}
    for i in range(size // 2):
        first, second = order[i], order[size - 1 - i]
        pairs[first] = second
        pairs[second] = first
    return pairs


def generate_schedule(participants: Sequence[str]) -> List[Dict[str, str]]:
    ensure_even(participants)
    schedule = [schedule_round(participants, offset) for offset in range(1, len(participants))]
    logger.bind(participants=len(participants)).debug("Generated {rounds} rounds", rounds=len(schedule))
    return schedule
