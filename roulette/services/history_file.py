from __future__ import annotations

import datetime
import json
from pathlib import Path
from typing import Union

from loguru import logger

from roulette.services.history import History, to_utc


class HistoryStorageError(RuntimeError):
    pass


def _parse_history(raw: object) -> History:
    if not isinstance(raw, dict):
        raise HistoryStorageError("History must be a mapping of participants.")

    history: History = {}
    for participant, partners in raw.items():
        if not isinstance(partners, dict):
            raise HistoryStorageError(f"Partners of {participant!r} must be a mapping.")
        entries = history.setdefault(participant, {})
        for partner, stamp in partners.items():
            try:
                entries[partner] = to_utc(datetime.datetime.fromisoformat(stamp))
            except (TypeError, ValueError) as exc:
                raise HistoryStorageError(
                    f"Invalid timestamp for {participant!r} -> {partner!r}: {stamp!r}"
                ) from exc
    return history


def read_history(path: Union[str, Path]) -> History:
    path = Path(path)
    if not path.exists():
        logger.bind(path=str(path)).info("No history file yet, starting empty")
        return {}

    try:
        raw = json.loads(path.read_text(encoding="utf-8") or "{}")
    except (OSError, ValueError) as exc:
        raise HistoryStorageError(f"Cannot read history file {path}: {exc}") from exc
    return _parse_history(raw)


def write_history(path: Union[str, Path], history: History) -> None:
    path = Path(path)
    payload = {
        participant: {
            partner: to_utc(stamp).isoformat() for partner, stamp in sorted(partners.items())
        }
        for participant, partners in sorted(history.items())
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise HistoryStorageError(f"Cannot write history file {path}: {exc}") from exc
    logger.bind(path=str(path)).debug("History written")
