"""
Directory Sorter

Orders directory listings by a per-directory policy. Experience, Education
and Projects put the most recent entries first; every other directory goes
by the explicit `order` field.
"""

import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from dateutil import parser as date_parser

from .models import ContentItem

ONGOING_MARKERS = ("present", "current", "active", "in progress")
RANGE_SEPARATOR = " - "
IN_PROGRESS = "in progress"

_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")
_YEAR_RE = re.compile(r"\b(\d{4})\b")
_MONTH_FORMATS = ("%B %Y", "%b %Y")

# Directory name -> metadata fields holding its date, first present wins
DATE_FIELDS = {
    "projects": ("timeline", "period"),
    "experience": ("period",),
    "education": ("period",),
}


def _utc(dt: datetime) -> float:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def _resolve_single(text: str) -> float:
    for fmt in _MONTH_FORMATS:
        try:
            return _utc(datetime.strptime(text, fmt))
        except ValueError:
            pass

    match = _YEAR_MONTH_RE.match(text)
    if match and 1 <= int(match.group(2)) <= 12:
        return _utc(datetime(int(match.group(1)), int(match.group(2)), 1))

    years = [y for y in _YEAR_RE.findall(text) if int(y) >= 1]
    if years:
        return _utc(datetime(int(years[-1]), 12, 31))

    try:
        return _utc(date_parser.parse(text))
    except (ValueError, OverflowError, TypeError):
        return 0.0


def resolve_date(text: Optional[str], now: Optional[datetime] = None) -> float:
    """
    Resolve a free-text date or period to a POSIX timestamp.

    "June 2022 - Present" resolves to now, "2013 - 2015" to the end of 2015,
    anything unparseable to 0.0 (oldest). Never raises.
    """
    if not text:
        return 0.0
    text = text.strip()
    lowered = text.lower()

    if any(marker in lowered for marker in ONGOING_MARKERS):
        return _utc(now or datetime.now(timezone.utc))

    if RANGE_SEPARATOR in text:
        return resolve_date(text.rsplit(RANGE_SEPARATOR, 1)[1], now)

    return _resolve_single(text)


def item_date(item: ContentItem, directory: str, now: Optional[datetime] = None) -> float:
    """Resolved date of an item for the given directory's date fields."""
    fields = DATE_FIELDS.get(directory.lower(), ("period",))
    for field in fields:
        value = item.metadata.get(field)
        if value:
            return resolve_date(value, now)
    return 0.0


def _is_in_progress(item: ContentItem) -> bool:
    return item.metadata.get("status", "").strip().lower() == IN_PROGRESS


def sort_items(
    items: Iterable[ContentItem],
    directory: str,
    now: Optional[datetime] = None,
) -> List[ContentItem]:
    """
    Sort a directory listing.

    Args:
        items: Listing to sort (left untouched)
        directory: Directory name, matched case-insensitively
        now: Reference time for ongoing periods (defaults to the current time)

    Returns:
        New stable-sorted list
    """
    key_dir = (directory or "").lower()
    now = now or datetime.now(timezone.utc)

    if key_dir == "projects":
        return sorted(
            items,
            key=lambda i: (
                0 if _is_in_progress(i) else 1,
                -item_date(i, key_dir, now),
                i.order,
                i.title,
            ),
        )

    if key_dir in ("experience", "education"):
        return sorted(items, key=lambda i: (-item_date(i, key_dir, now), i.order, i.title))

    return sorted(items, key=lambda i: (i.order, i.title))
