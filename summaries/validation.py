"""
Input validation for summary writes.

Validation runs before any store interaction and reports problems as a
ValidationResult instead of relying on the store to reject bad documents.
"""

import re
from typing import Any, List, Mapping, Optional

from .models import SummaryDraft, ValidationResult

REQUIRED_FIELDS_MESSAGE = "title, author, and body are required"

_LIMIT_PATTERN = re.compile(r"^\s*\+?\d{1,19}\s*$")

# Largest cap MongoDB accepts (signed 64-bit)
MAX_LIMIT = 2 ** 63 - 1


def normalize_tags(raw: Any) -> List[str]:
    """
    Normalize submitted tags into an ordered list of non-empty trimmed strings.

    A string is treated as a comma-separated list. A list or tuple keeps its
    string items in submitted order. Duplicates are kept. Any other shape,
    including None, yields no tags.

    Args:
        raw: Tags as submitted by the client

    Returns:
        List of tags
    """
    if isinstance(raw, str):
        pieces = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        pieces = [item for item in raw if isinstance(item, str)]
    else:
        return []

    return [piece.strip() for piece in pieces if piece.strip()]


def _required_text(payload: Mapping[str, Any], field: str) -> Optional[str]:
    value = payload.get(field)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def validate_summary_input(payload: Any) -> ValidationResult:
    """
    Validate create/update input and build a normalized draft.

    Args:
        payload: Request body; anything that is not a mapping counts as empty

    Returns:
        ValidationResult with a draft on success or the list of violations
    """
    if not isinstance(payload, Mapping):
        payload = {}

    # "summary" is the legacy name of the body field
    if "body" not in payload and "summary" in payload:
        payload = {**payload, "body": payload["summary"]}

    title = _required_text(payload, "title")
    author = _required_text(payload, "author")
    body = _required_text(payload, "body")

    if title is None or author is None or body is None:
        return ValidationResult(violations=[REQUIRED_FIELDS_MESSAGE])

    draft = SummaryDraft(
        title=title,
        author=author,
        body=body,
        tags=normalize_tags(payload.get("tags")),
    )
    return ValidationResult(draft=draft)


def parse_limit(raw: Any) -> Optional[int]:
    """
    Parse the optional result-count cap for listings.

    Args:
        raw: Query value, usually a string or None

    Returns:
        Non-negative int, or None when the cap is absent, unparseable or
        larger than the store can encode
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str) and _LIMIT_PATTERN.match(raw):
        raw = int(raw)
    if isinstance(raw, int) and 0 <= raw <= MAX_LIMIT:
        return raw
    return None
