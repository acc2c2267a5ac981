from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

NOT_AVAILABLE = "N/A"


class Country(Base):
    __tablename__ = "countries"
    __table_args__ = (
        CheckConstraint("votes >= 0", name="ck_countries_votes_non_negative"),
        Index("ix_countries_votes", "votes"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    code: Mapped[str] = mapped_column(String(3), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    capital: Mapped[str] = mapped_column(String(128), nullable=False, default=NOT_AVAILABLE)
    region: Mapped[str] = mapped_column(String(64), nullable=False)
    sub_region: Mapped[str] = mapped_column(String(64), nullable=False, default=NOT_AVAILABLE)
    votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
