import datetime

import pytest

from roulette.db import PairingRecord, dispose_engines, get_session, init_engine, repo

T1 = datetime.datetime(2026, 3, 2, 9, 30, tzinfo=datetime.timezone.utc)


@pytest.fixture(autouse=True)
def fresh_engines():
    dispose_engines()
    yield
    dispose_engines()


def test_init_engine_reuses_engine_per_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'roulette.db'}"
    first = init_engine(url)
    assert init_engine(url) is first
    assert init_engine(f"sqlite:///{tmp_path / 'other.db'}") is not first


def test_get_session_requires_engine():
    with pytest.raises(RuntimeError):
        with get_session():
            pass


def test_dispose_engines_unbinds_sessions(tmp_path):
    url = f"sqlite:///{tmp_path / 'roulette.db'}"
    first = init_engine(url)
    dispose_engines()

    with pytest.raises(RuntimeError):
        with get_session():
            pass
    assert init_engine(url) is not first


def test_get_session_commits_and_rolls_back(tmp_path):
    init_engine(f"sqlite:///{tmp_path / 'roulette.db'}")
    with get_session() as session:
        repo.save_history(session, {"a": {"b": T1}, "b": {"a": T1}})

    with pytest.raises(ValueError):
        with get_session() as session:
            session.add(PairingRecord(participant="c", partner="d", paired_at=T1))
            session.flush()
            raise ValueError("boom")

    with get_session() as session:
        assert repo.load_history(session) == {"a": {"b": T1}, "b": {"a": T1}}
