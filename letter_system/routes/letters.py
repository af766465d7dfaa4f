# letter_system/routes/letters.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from letter_system.database import get_db
from letter_system.services.letters import (
    create_letter,
    delete_letter,
    get_letter,
    letter_to_dict,
    list_letters,
    update_letter,
)

router = APIRouter(prefix="/api/letters", tags=["letters"])


class LetterRequest(BaseModel):
    """
    Body for create and update. Presence is checked by the service:
    create needs everything but sent_date, update writes whatever is
    given (absent fields become null).
    """
    letter_date: Optional[str] = None
    address: Optional[str] = None
    details: Optional[str] = None
    subject_no: Optional[str] = None
    letter_type: Optional[str] = None
    sent_date: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


@router.get("")
def list_all(db: Session = Depends(get_db)) -> list[dict]:
    return [letter_to_dict(letter) for letter in list_letters(db)]


@router.get("/{letter_id}")
def get_one(letter_id: int, db: Session = Depends(get_db)) -> dict:
    return letter_to_dict(get_letter(db, letter_id))


@router.post("", status_code=status.HTTP_201_CREATED)
def create(payload: LetterRequest, db: Session = Depends(get_db)) -> dict:
    return letter_to_dict(create_letter(db, payload.model_dump()))


@router.put("/{letter_id}", response_model=MessageResponse)
def update(letter_id: int, payload: LetterRequest, db: Session = Depends(get_db)) -> MessageResponse:
    update_letter(db, letter_id, payload.model_dump())
    return MessageResponse(message="Letter updated successfully")


@router.delete("/{letter_id}", response_model=MessageResponse)
def delete(letter_id: int, db: Session = Depends(get_db)) -> MessageResponse:
    delete_letter(db, letter_id)
    return MessageResponse(message="Letter deleted successfully")
