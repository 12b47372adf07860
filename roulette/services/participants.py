from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Union

from roulette.services.matching import BLANK


class ParticipantsError(RuntimeError):
    pass


def parse_participants(text: str) -> List[str]:
    participants: List[str] = []
    for line in text.splitlines():
        name = line.strip()
        if not name or name.startswith("#"):
            continue
        if name in participants:
            raise ParticipantsError(f"Duplicate participant: {name}")
        participants.append(name)
    return participants


def read_participants(path: Union[str, Path]) -> List[str]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ParticipantsError(f"Cannot read participants file {path}: {exc}") from exc
    return parse_participants(text)


def pad_participants(participants: Sequence[str]) -> List[str]:
    padded = list(participants)
    if len(padded) % 2 != 0:
        padded.append(BLANK)
    return padded
