# letter_system/services/vocabulary.py
"""
Closed option lists used by the letter pages.

The API stores any non-empty string for these fields; only the
browser forms restrict input to these values.
"""
from __future__ import annotations

ROLES: tuple[str, ...] = ("admin", "user")

# role -> page the login screen sends the user to
ROLE_HOME: dict[str, str] = {
    "admin": "/editor",
    "user": "/review",
}

SUBJECT_CODES: tuple[str, ...] = (
    "SP/RD/ADM/01",
    "SP/RD/ADM/02",
    "SP/RD/ADM/03",
    "SP/DRD/ACC/01",
    "SP/DRD/ACC/02",
    "SP/DRD/ACC/03",
    "SP/DRD/DEV/01",
    "SP/DRD/DEV/02",
    "SP/DRD/DEV/03",
    "SP/DRD/DEV/04",
    "SP/DRD/DEV/05",
    "SP/DRD/DEV/06",
    "SP/DRD/DEV/07",
    "SP/DRD/DEV/08",
    "SP/DRD/R.DEV/01",
    "SP/DRD/R.DEV/02",
)

# stored value -> label
LETTER_TYPES: dict[str, str] = {
    "Not Registered": "Ordinary post",
    "Registered": "Registered post",
}

DETAIL_STATUSES: tuple[str, ...] = (
    "Processing",
    "Invalid",
    "Closed",
    "Attached to File",
)
