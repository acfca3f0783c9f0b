"""Shared service-layer helper functions."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime


def now_utc() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def new_item_id() -> str:
    """Short random identifier for history entries (8 hex chars)."""
    return uuid.uuid4().hex[:8]
