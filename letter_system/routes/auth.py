# letter_system/routes/auth.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from letter_system.database import get_db
from letter_system.services.auth import authenticate, register_user

router = APIRouter(prefix="/api", tags=["auth"])


# Fields are optional here so a missing one reaches the service and
# comes back as the documented 400 instead of a schema error.
class RegisterRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class IdentityResponse(BaseModel):
    id: int
    username: str
    role: str
    message: str


@router.post("/register", response_model=IdentityResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> IdentityResponse:
    user = register_user(
        db,
        username=payload.username,
        password=payload.password,
        role=payload.role,
    )
    return IdentityResponse(
        id=user.id,
        username=user.username,
        role=user.role,
        message="User registered successfully",
    )


@router.post("/login", response_model=IdentityResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> IdentityResponse:
    user = authenticate(db, username=payload.username, password=payload.password)
    return IdentityResponse(
        id=user.id,
        username=user.username,
        role=user.role,
        message="Login successful",
    )
