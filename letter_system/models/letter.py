# letter_system/models/letter.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from letter_system.database import Base


class Letter(Base):
    __tablename__ = "letters"

    id: Mapped[int] = mapped_column(primary_key=True)

    letter_date: Mapped[date] = mapped_column(Date, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    details: Mapped[str] = mapped_column(Text, nullable=False)
    subject_no: Mapped[str] = mapped_column(String(50), nullable=False)
    letter_type: Mapped[str] = mapped_column(String(20), nullable=False)

    # Stays NULL until the letter goes out
    sent_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Naive UTC, default ordering key
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
