from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class PairingRecord(Base):
    __tablename__ = "pairing_history"

    id = Column(Integer, primary_key=True)
    participant = Column(String, nullable=False, index=True)
    partner = Column(String, nullable=False)
    paired_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("participant", "partner", name="uq_pairing_history_participant_partner"),
    )

    def __repr__(self) -> str:
        return (
            "<PairingRecord(participant={0}, partner={1}, paired_at={2})>"
        ).format(self.participant, self.partner, self.paired_at)
