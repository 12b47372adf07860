from roulette.services.history import History, add_to_history, pairing_count, partners_of, to_utc
from roulette.services.history_file import HistoryStorageError, read_history, write_history
from roulette.services.matching import (
    BLANK,
    NoSolutionError,
    OddCountError,
    PairingError,
    match_participants,
)
from roulette.services.participants import ParticipantsError, pad_participants, read_participants
from roulette.services.schedule import generate_schedule, schedule_round

__all__ = [
    "BLANK",
    "History",
    "HistoryStorageError",
    "NoSolutionError",
    "OddCountError",
    "PairingError",
    "ParticipantsError",
    "add_to_history",
    "generate_schedule",
    "match_participants",
    "pad_participants",
    "pairing_count",
    "partners_of",
    "read_history",
    "read_participants",
    "schedule_round",
    "to_utc",
    "write_history",
]
