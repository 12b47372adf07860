from __future__ import annotations

from contextlib import contextmanager
from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from roulette.db.models import Base

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False)

_engines: Dict[str, Engine] = {}


def init_engine(database_url: str) -> Engine:
    """Bind sessions to ``database_url``, creating the schema on first use.

    Engines are cached per URL, so loading and saving history in one run share
    a connection pool. Call ``dispose_engines`` when the run is over.
    """
    engine = _engines.get(database_url)
    if engine is None:
        engine = create_engine(database_url, pool_pre_ping=True, future=True)
        Base.metadata.create_all(engine)
        _engines[database_url] = engine
    SessionLocal.configure(bind=engine)
    return engine


def dispose_engines() -> None:
    for engine in _engines.values():
        engine.dispose()
    _engines.clear()
    SessionLocal.configure(bind=None)


@contextmanager
def get_session():
    if SessionLocal.kw.get("bind") is None:
        raise RuntimeError("Database engine not initialized. Call init_engine() before use.")
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
