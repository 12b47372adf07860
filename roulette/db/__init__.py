from roulette.db.models import Base, PairingRecord
from roulette.db.session import SessionLocal, dispose_engines, get_session, init_engine

__all__ = [
    "Base",
    "PairingRecord",
    "SessionLocal",
    "dispose_engines",
    "get_session",
    "init_engine",
]
