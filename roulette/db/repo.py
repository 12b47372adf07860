from __future__ import annotations

from typing import Dict, Tuple

from sqlalchemy import select

from roulette.db.models import PairingRecord
from roulette.services.history import History, to_utc


def load_history(session) -> History:
    history: History = {}
    for record in session.scalars(select(PairingRecord).order_by(PairingRecord.id)):
        history.setdefault(record.participant, {})[record.partner] = to_utc(record.paired_at)
    return history


def save_history(session, history: History) -> int:
    """Upsert every pairing in ``history``; returns the number of new rows."""
    existing: Dict[Tuple[str, str], PairingRecord] = {
        (record.participant, record.partner): record
        for record in session.scalars(select(PairingRecord))
    }

    added = 0
    for participant, partners in history.items():
        for partner, paired_at in partners.items():
            stamp = to_utc(paired_at)
            record = existing.get((participant, partner))
            if record is None:
                session.add(PairingRecord(participant=participant, partner=partner, paired_at=stamp))
                added += 1
            else:
                record.paired_at = stamp
    session.flush()
    return added
