# letter_system/services/letters.py
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from letter_system.errors import NotFoundError, StoreError, ValidationError
from letter_system.models.letter import Letter
from letter_system.utils.logger import logger

REQUIRED_FIELDS = ("letter_date", "address", "details", "subject_no", "letter_type")
MUTABLE_FIELDS = REQUIRED_FIELDS + ("sent_date",)
DATE_FIELDS = ("letter_date", "sent_date")


def parse_date(value: Any) -> Optional[date]:
    """
    Accepts "YYYY-MM-DD" or a full ISO timestamp such as
    "2024-01-05T00:00:00.000Z"; only the calendar date is kept.
    """
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value}") from None


def letter_to_dict(letter: Letter) -> dict:
    return {
        "id": int(letter.id),
        "letter_date": letter.letter_date.isoformat() if letter.letter_date else None,
        "address": letter.address,
        "details": letter.details,
        "subject_no": letter.subject_no,
        "letter_type": letter.letter_type,
        "sent_date": letter.sent_date.isoformat() if letter.sent_date else None,
        "created_at": letter.created_at.isoformat() if letter.created_at else None,
    }


def _coerce(fields: dict) -> dict:
    values = {name: fields.get(name) for name in MUTABLE_FIELDS}
    for name in DATE_FIELDS:
        values[name] = parse_date(values[name])
    return values


def list_letters(db: Session) -> list[Letter]:
    try:
        return (
            db.query(Letter)
            .order_by(Letter.created_at.desc(), Letter.id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        logger.exception("Error fetching letters")
        raise StoreError("Database error") from exc


def _find(db: Session, letter_id: int) -> Letter:
    try:
        letter = db.get(Letter, letter_id)
    except SQLAlchemyError as exc:
        logger.exception(f"Error fetching letter {letter_id}")
        raise StoreError("Database error") from exc
    if letter is None:
        raise NotFoundError()
    return letter


def get_letter(db: Session, letter_id: int) -> Letter:
    return _find(db, letter_id)


def create_letter(db: Session, fields: dict) -> Letter:
    missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
    if missing:
        logger.info(f"Letter rejected, missing: {', '.join(missing)}")
        raise ValidationError("All fields are required")

    letter = Letter(**_coerce(fields))
    try:
        db.add(letter)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error inserting letter")
        raise StoreError("Database insert error") from exc

    db.refresh(letter)
    logger.info(f"Created letter {letter.id} ({letter.subject_no})")
    return letter


def update_letter(db: Session, letter_id: int, fields: dict) -> Letter:
    """
    Full replace of every mutable column. Fields missing from ``fields``
    are written as NULL, which the NOT NULL columns turn into a StoreError.
    No version check: the last write wins.
    """
    letter = _find(db, letter_id)

    for name, value in _coerce(fields).items():
        setattr(letter, name, value)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"Error updating letter {letter_id}")
        raise StoreError("Database update error") from exc

    logger.info(f"Updated letter {letter_id}")
    return letter


def delete_letter(db: Session, letter_id: int) -> None:
    letter = _find(db, letter_id)
    try:
        db.delete(letter)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"Error deleting letter {letter_id}")
        raise StoreError("Database delete error") from exc

    logger.info(f"Deleted letter {letter_id}")
