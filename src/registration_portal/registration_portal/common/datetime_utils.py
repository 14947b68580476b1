from __future__ import annotations

from datetime import datetime
from typing import Optional


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def date_stamp(value: Optional[datetime] = None) -> str:
    """YYYY-MM-DD stamp used in export filenames."""
    return (value or now_local()).strftime("%Y-%m-%d")
