from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

PHONE_PATTERN = re.compile(r"[0-9\s\-+()]+")
ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
COUNT_PATTERN = re.compile(r"-?[0-9]+")
# plain "1500.50" or thousands-grouped "1,500.50"; ASCII digits only
AMOUNT_PATTERN = re.compile(r"-?(?:[0-9]+|[0-9]{1,3}(?:,[0-9]{3})+)(?:\.[0-9]+)?")


def parse_iso_date(text: str) -> date | None:
    """Parse a YYYY-MM-DD date. Returns None if blank or invalid."""
    normalized = (text or "").strip()
    if not ISO_DATE_PATTERN.fullmatch(normalized):
        return None
    try:
        return datetime.strptime(normalized, "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_moment(value: str | date | datetime) -> datetime | None:
    """Parse an ISO date or datetime into a datetime (dates become midnight)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    normalized = (value or "").strip()
    if not normalized:
        return None
    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def parse_amount(text: str | None) -> Decimal | None:
    """Parse a money amount. Returns None if blank, non-numeric or badly grouped."""
    normalized = (text or "").strip()
    if not AMOUNT_PATTERN.fullmatch(normalized):
        return None
    try:
        return Decimal(normalized.replace(",", ""))
    except InvalidOperation:
        return None


def parse_count(text: str | None) -> int | None:
    """Parse a whole-number head count. Returns None if not an integer."""
    normalized = (text or "").strip()
    if not COUNT_PATTERN.fullmatch(normalized):
        return None
    return int(normalized)


def is_valid_phone(text: str) -> bool:
    return bool(PHONE_PATTERN.fullmatch(text))


def dedupe_rooms(room_ids: list[str]) -> tuple[str, ...]:
    """Normalize room ids and drop repeats, keeping first-seen order."""
    seen: dict[str, None] = {}
    for room_id in room_ids:
        normalized = room_id.lower().strip()
        if normalized:
            seen.setdefault(normalized, None)
    return tuple(seen)
