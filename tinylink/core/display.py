"""
Display Helpers

Turns LinkRecords into the strings shown on the dashboard and stats page.
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from tinylink.api.schemas import LinkRecord

MISSING = "-"


def format_timestamp(value: Optional[datetime], tz: Optional[tzinfo] = None) -> str:
    """
    Format a server timestamp for display.

    Args:
        value: Timestamp, or None when the server never set it
        tz: Target timezone (local time when omitted)

    Returns:
        "YYYY-MM-DD HH:MM:SS", or "-" when value is None
    """
    if value is None:
        return MISSING
    return value.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S")


def build_short_url(base_address: str, code: str) -> str:
    """Short URL for a code: {base_address}/{code}."""
    return f"{base_address.rstrip('/')}/{code}"


@dataclass(frozen=True)
class LinkRow:
    """One dashboard table row."""
    code: str
    short_url: str
    target_url: str
    total_clicks: int
    last_clicked: str
    created_at: str

    @classmethod
    def from_record(cls, record: LinkRecord, base_address: str, tz: Optional[tzinfo] = None) -> "LinkRow":
        return cls(
            code=record.code,
            short_url=build_short_url(base_address, record.code),
            target_url=record.target_url,
            total_clicks=record.total_clicks,
            last_clicked=format_timestamp(record.last_clicked_at, tz),
            created_at=format_timestamp(record.created_at, tz),
        )
