from __future__ import annotations

import argparse
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from roulette.core.config import Settings, load_settings
from roulette.core.logging import setup_logging
from roulette.db import dispose_engines, get_session, init_engine, repo
from roulette.services import (
    BLANK,
    History,
    HistoryStorageError,
    OddCountError,
    PairingError,
    ParticipantsError,
    add_to_history,
    generate_schedule,
    match_participants,
    pad_participants,
    pairing_count,
    partners_of,
    read_history,
    read_participants,
    write_history,
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NO_SOLUTION = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coffee-roulette",
        description="Pair people for coffee without repeating past pairings.",
    )
    subparsers = parser.add_subparsers(dest="command")

    match = subparsers.add_parser("match", help="pair everyone with someone new")
    match.add_argument("--people", help="file with one participant per line")
    match.add_argument("--history", help="JSON history file")
    match.add_argument("--database-url", help="store history in a database; takes precedence over --history")
    match.add_argument("--pad-odd", action="store_true", help="let one person sit out when the count is odd")
    match.add_argument("--dry-run", action="store_true", help="do not persist the new pairings")
    match.set_defaults(handler=run_match, parser=match)

    schedule = subparsers.add_parser("schedule", help="print a full round-robin schedule")
    schedule.add_argument("--people", help="file with one participant per line")
    schedule.add_argument("--pad-odd", action="store_true", help="let one person sit out when the count is odd")
    schedule.set_defaults(handler=run_schedule, parser=schedule)

    history = subparsers.add_parser("history", help="show past pairings")
    history.add_argument("--history", help="JSON history file")
    history.add_argument("--database-url", help="read history from a database instead of a file")
    history.set_defaults(handler=run_history, parser=history)

    return parser


def format_pairs(participants: Sequence[str], matching: Dict[str, str]) -> List[str]:
    lines: List[str] = []
    done = set()
    for participant in participants:
        if participant in done:
            continue
        partner = matching[participant]
        done.update((participant, partner))
        if partner == BLANK:
            lines.append(f"{participant} sits out")
        elif participant == BLANK:
            lines.append(f"{partner} sits out")
        else:
            lines.append(f"{participant} <-> {partner}")
    return lines


def load_history(history_path: Optional[str], database_url: Optional[str]) -> History:
    if database_url:
        try:
            init_engine(database_url)
            with get_session() as session:
                return repo.load_history(session)
        except SQLAlchemyError as exc:
            raise HistoryStorageError(f"Cannot read history from database: {exc}") from exc
    return read_history(history_path)


def save_history(history_path: Optional[str], database_url: Optional[str], history: History) -> None:
    if database_url:
        try:
            with get_session() as session:
                repo.save_history(session, history)
        except SQLAlchemyError as exc:
            raise HistoryStorageError(f"Cannot write history to database: {exc}") from exc
        return
    write_history(history_path, history)


def _history_source(args: argparse.Namespace, settings: Settings) -> Tuple[Optional[str], Optional[str]]:
    history_path = args.history or settings.history_path
    database_url = args.database_url or settings.database_url
    if history_path and database_url:
        logger.bind(history=history_path).info("Database URL is set, ignoring the history file")
    return history_path, database_url


def _participants(path: str, pad_odd: bool) -> List[str]:
    participants = read_participants(path)
    if pad_odd:
        participants = pad_participants(participants)
    return participants


def run_match(args: argparse.Namespace, settings: Settings) -> int:
    people_path = args.people or settings.people_path
    history_path, database_url = _history_source(args, settings)
    if not people_path or not (history_path or database_url):
        args.parser.print_usage()
        return EXIT_OK

    try:
        participants = _participants(people_path, args.pad_odd)
        history = load_history(history_path, database_url)
    except (ParticipantsError, HistoryStorageError) as exc:
        logger.error("Cannot start matching: {error}", error=str(exc))
        return EXIT_FAILURE

    exit_code = EXIT_OK
    try:
        matching = match_participants(participants, history)
    except OddCountError as exc:
        logger.error("{error}. Use --pad-odd to let someone sit out.", error=str(exc))
        return EXIT_FAILURE
    except PairingError as exc:
        logger.bind(participants=len(participants)).warning("Matching failed: {error}", error=str(exc))
        print(f"Unable to solve: {exc}")
        exit_code = EXIT_NO_SOLUTION
    else:
        for line in format_pairs(participants, matching):
            print(line)
        add_to_history(history, matching)

    if args.dry_run:
        return exit_code

    try:
        save_history(history_path, database_url, history)
    except HistoryStorageError as exc:
        logger.error("Pairings were not saved: {error}", error=str(exc))
        return EXIT_FAILURE

    logger.bind(pairs=pairing_count(history)).info("History saved")
    return exit_code


def run_schedule(args: argparse.Namespace, settings: Settings) -> int:
    people_path = args.people or settings.people_path
    if not people_path:
        args.parser.print_usage()
        return EXIT_OK

    try:
        participants = _participants(people_path, args.pad_odd)
        schedule = generate_schedule(participants)
    except (ParticipantsError, PairingError) as exc:
        logger.error("Cannot build schedule: {error}", error=str(exc))
        return EXIT_FAILURE

    for number, matching in enumerate(schedule, start=1):
        print(f"Round {number}")
        for line in format_pairs(participants, matching):
            print(f"  {line}")
    return EXIT_OK


def run_history(args: argparse.Namespace, settings: Settings) -> int:
    history_path, database_url = _history_source(args, settings)
    if not (history_path or database_url):
        args.parser.print_usage()
        return EXIT_OK

    try:
        history = load_history(history_path, database_url)
    except HistoryStorageError as exc:
        logger.error("Cannot read history: {error}", error=str(exc))
        return EXIT_FAILURE

    for participant in sorted(history):
        if participant == BLANK:
            continue
        partners = ", ".join(
            f"{partner or '(sat out)'} ({paired_at.date().isoformat()})"
            for partner, paired_at in partners_of(history, participant)
        )
        print(f"{participant}: {partners}")
    print(f"{pairing_count(history)} pairings recorded")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_path)

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_usage()
        return EXIT_OK

    logger.bind(command=args.command).debug("coffee roulette!")
    try:
        return args.handler(args, settings)
    finally:
        dispose_engines()
