# letter_system/main.py
from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from letter_system.config import CORS_ORIGINS, LOG_LEVEL, PORT
from letter_system.database import Base, engine, db_ping, safe_url
from letter_system.errors import (
    LetterSystemError,
    StoreError,
    letter_system_error_handler,
    request_validation_error_handler,
)
from letter_system.models import letter, user  # noqa: F401  (register tables)
from letter_system.routes.auth import router as auth_router
from letter_system.routes.letters import router as letters_router
from letter_system.routes.pages import router as pages_router
from letter_system.utils.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Database: {safe_url()}")
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        # server still starts; requests will report the store error
        logger.warning(f"Table creation skipped: {e}")
    yield


app = FastAPI(title="Letter System", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(LetterSystemError, letter_system_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

app.include_router(auth_router)
app.include_router(letters_router)
app.include_router(pages_router)


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Backend for Letter System is running"


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/db-ping")
def ping() -> dict:
    try:
        result = db_ping()
    except SQLAlchemyError as exc:
        logger.exception("Database ping failed")
        raise StoreError() from exc
    return {"db": "ok", "select_1": result}


if __name__ == "__main__":
    logger.info(f"Server running on http://localhost:{PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT, log_level=LOG_LEVEL.lower())
