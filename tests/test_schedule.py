import itertools

import pytest

from roulette.services.matching import OddCountError
from roulette.services.schedule import generate_schedule, schedule_round


def all_pairs(participants):
    return {frozenset(pair) for pair in itertools.combinations(participants, 2)}


def pairs_of(matching):
    return {frozenset((p, q)) for p, q in matching.items()}


def test_schedule_four_participants():
    participants = ["a", "b", "c", "d"]
    schedule = generate_schedule(participants)
    assert len(schedule) == 3

    for pair in all_pairs(participants):
        assert sum(pair in pairs_of(matching) for matching in schedule) == 1


@pytest.mark.parametrize("count", [2, 4, 6, 8, 10, 12])
def test_schedule_covers_every_pair_once(count):
    participants = [f"p{i}" for i in range(count)]
    schedule = generate_schedule(participants)
    assert len(schedule) == count - 1

    collected = []
    for matching in schedule:
        assert len(matching) == count
        for person in participants:
            assert matching[person] != person
            assert matching[matching[person]] == person
        collected.extend(pairs_of(matching))

    assert len(collected) == len(set(collected))
    assert set(collected) == all_pairs(participants)


@pytest.mark.parametrize("count", [1, 3, 9])
def test_schedule_rejects_odd_count(count):
    with pytest.raises(OddCountError) as excinfo:
        generate_schedule([f"p{i}" for i in range(count)])
    assert excinfo.value.count == count


def test_schedule_empty_group():
    assert generate_schedule([]) == []


def test_schedule_is_deterministic():
    participants = ["ann", "bo", "cy", "di", "ed", "flo"]
    assert generate_schedule(participants) == generate_schedule(list(participants))


def test_schedule_round_matches_schedule_entry():
    participants = ["a", "b", "c", "d"]
    assert schedule_round(participants, 1) == {"a": "d", "d": "a", "b": "c", "c": "b"}
    assert schedule_round(participants, 2) == generate_schedule(participants)[1]


@pytest.mark.parametrize("offset", [0, 4, -1])
def test_schedule_round_rejects_bad_offset(offset):
    with pytest.raises(ValueError):
        schedule_round(["a", "b", "c", "d"], offset)
