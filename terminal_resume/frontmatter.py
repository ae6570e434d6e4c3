"""
Frontmatter Parser

Splits a markdown document into its `---` delimited header fields and body.
Each header line is matched on its own so one field's value can never run
into the next line.
"""

import re
from pathlib import PurePosixPath
from typing import Dict, List, Optional, Tuple

from .models import FrontMatter

MARKER = "---"
DEFAULT_ORDER = 999

_FIELD_RE = re.compile(r"^(\w+):\s*(.*?)\s*$")

# Keys that all land in metadata["institution"], last line wins
_INSTITUTION_KEYS = ("institution", "school")


def title_from_filename(filename: str) -> str:
    """'senior-solutions_consultant.md' -> 'Senior Solutions Consultant'"""
    stem = PurePosixPath(filename).stem if filename else ""
    words = re.sub(r"[-_]+", " ", stem).split()
    return " ".join(words).title()


def _split_header(text: str) -> Optional[Tuple[List[str], str]]:
    lines = text.split("\n")
    if not lines or lines[0].strip() != MARKER:
        return None

    for index in range(1, len(lines)):
        if lines[index].strip() == MARKER:
            header = lines[1:index]
            body = "\n".join(lines[index + 1:])
            return header, body

    # Opening marker without a closing one is not a header
    return None


def _unquote(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def _parse_fields(header: List[str]) -> List[Tuple[str, str]]:
    fields = []
    for line in header:
        match = _FIELD_RE.match(line)
        if not match:
            continue
        key, value = match.group(1), _unquote(match.group(2))
        if value:
            fields.append((key, value))
    return fields


def _parse_order(value: Optional[str]) -> int:
    if value is None:
        return DEFAULT_ORDER
    try:
        return int(value)
    except ValueError:
        return DEFAULT_ORDER


def parse_frontmatter(text: str, filename: str = "") -> FrontMatter:
    """
    Parse a document with an optional frontmatter header.

    Args:
        text: Raw document text
        filename: Used for the default title when the header has none

    Returns:
        FrontMatter with title, order, metadata and the body text. Input
        without a complete header comes back whole as the body.
    """
    text = (text or "").replace("\r\n", "\n")
    title = title_from_filename(filename)

    split = _split_header(text)
    if split is None:
        return FrontMatter(title=title, order=DEFAULT_ORDER, metadata={}, body=text)

    header, body = split
    metadata: Dict[str, str] = {}
    order_value = None

    for key, value in _parse_fields(header):
        if key == "title":
            title = value
        elif key == "order":
            order_value = value
        elif key in _INSTITUTION_KEYS:
            metadata["institution"] = value
        else:
            metadata[key] = value

    if "period" not in metadata:
        start, end = metadata.get("start"), metadata.get("end")
        if start and end:
            metadata["period"] = f"{start} - {end}"
        elif start or end:
            metadata["period"] = start or end

    return FrontMatter(
        title=title,
        order=_parse_order(order_value),
        metadata=metadata,
        body=body,
    )
