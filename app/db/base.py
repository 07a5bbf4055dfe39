"""
db/base.py
----------
Shared helpers for the in-memory records.

Ids are random UUID4 strings rather than counters, so a note or user id
leaks nothing about how many records another tenant holds.
"""

import uuid
from datetime import datetime, timezone


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
