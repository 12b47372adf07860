from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence

from loguru import logger

BLANK = ""


class PairingError(RuntimeError):
    pass


class OddCountError(PairingError):
    def __init__(self, count: int) -> None:
        super().__init__(f"Must have an even number of participants. You have {count}")
        self.count = count


class NoSolutionError(PairingError):
    def __init__(self) -> None:
        super().__init__("No solution possible")


def ensure_even(participants: Sequence[str]) -> None:
    if len(participants) % 2 != 0:
        raise OddCountError(len(participants))


def _check_fixed_pairs(
    people: Sequence[str],
    history: Mapping[str, Mapping[str, object]],
    result: Mapping[str, str],
) -> None:
    known = set(people)
    for person, partner in result.items():
        if person not in known or partner not in known:
            raise ValueError(f"Fixed pair {person!r} -> {partner!r} is not among the participants")
        if person == partner:
            raise ValueError(f"{person!r} cannot be paired with themselves")
        if result.get(partner) != person:
            raise ValueError(f"Fixed pair {person!r} -> {partner!r} must be recorded both ways")
        if partner in history.get(person, {}):
            raise ValueError(f"{person!r} and {partner!r} have already been paired")


def match_participants(
    participants: Sequence[str],
    history: Mapping[str, Mapping[str, object]],
    result: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Pair everyone with a partner they have never been paired with before.

    Entries already present in ``result`` are kept as fixed pairs; they must be
    symmetric, between participants, and not already in history, otherwise
    ``ValueError`` is raised before searching. The search is
    exhaustive, so a ``NoSolutionError`` means no such matching exists; in that
    case ``result`` is left exactly as it was passed in.
    """
    ensure_even(participants)
    if result is None:
        result = {}

    people = list(participants)
    _check_fixed_pairs(people, history, result)

    def backtrack() -> bool:
        if len(result) == len(people):
            return True

        giver = next(p for p in people if p not in result)
        seen = history.get(giver, {})
        for partner in people:
            if partner == giver or partner in result or partner in seen:
                continue

            result[giver] = partner
            result[partner] = giver
            if backtrack():
                return True
            result.pop(giver, None)
            result.pop(partner, None)
        return False

    if not backtrack():
        logger.bind(participants=len(people)).debug("No matching possible")
        raise NoSolutionError()

    logger.bind(participants=len(people)).debug("Matching found")
    return result
