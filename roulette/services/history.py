from __future__ import annotations

import datetime
from typing import Dict, List, Mapping, Optional, Tuple

History = Dict[str, Dict[str, datetime.datetime]]


def to_utc(value: datetime.datetime) -> datetime.datetime:
    # naive timestamps are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def add_to_history(
    history: History,
    matching: Mapping[str, str],
    now: Optional[datetime.datetime] = None,
) -> History:
    if now is None:
        now = datetime.datetime.now(tz=datetime.timezone.utc)
    for participant, partner in matching.items():
        history.setdefault(participant, {})[partner] = now
    return history


def partners_of(history: History, participant: str) -> List[Tuple[str, datetime.datetime]]:
    """Past partners of ``participant``, most recent first."""
    partners = history.get(participant, {})
    return sorted(partners.items(), key=lambda item: item[1], reverse=True)


def pairing_count(history: History) -> int:
    pairs = {
        frozenset((participant, partner))
        for participant, partners in history.items()
        for partner in partners
    }
    return len(pairs)
