# letter_system/services/auth.py
from __future__ import annotations

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from letter_system.errors import AuthError, ConflictError, StoreError, ValidationError
from letter_system.models.user import User
from letter_system.services.vocabulary import ROLES
from letter_system.utils.logger import logger

# Salted one-way hash, no native deps
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def register_user(
    db: Session,
    *,
    username: str | None,
    password: str | None,
    role: str | None,
) -> User:
    if not username or not password or not role:
        raise ValidationError("All fields are required")
    if role not in ROLES:
        raise ValidationError("Invalid role")

    user = User(
        username=username,
        password_hash=pwd_context.hash(password),
        role=role,
    )
    try:
        db.add(user)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Register rejected for {username!r}: {exc.orig}")
        raise ConflictError() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error registering user")
        raise StoreError("Database insert error") from exc

    db.refresh(user)
    logger.info(f"Registered user {user.username!r} (id={user.id}, role={user.role})")
    return user


def _password_matches(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # stored hash in a scheme this context does not know
        logger.warning("Unrecognised password hash format")
        return False


def authenticate(db: Session, *, username: str | None, password: str | None) -> User:
    """
    Same AuthError for an unknown user and a wrong password, so callers
    cannot tell which one failed.
    """
    try:
        user = db.query(User).filter(User.username == username).first()
    except SQLAlchemyError as exc:
        logger.exception("Error during login")
        raise StoreError("Database error") from exc

    if not user or not password or not _password_matches(password, user.password_hash):
        logger.warning(f"Failed login for {username!r}")
        raise AuthError()

    return user
