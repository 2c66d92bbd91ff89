"""Validators for requested selections.

Each validator takes the raw value and the run context, returns the cleaned
value and raises ValueError when the value cannot name an item on the page.
"""

import re
from datetime import date
from typing import Dict, Any


def validate_item_id(value: str, ctx: Dict[str, Any]) -> str:
    """Validate an item id used to build a card identifier.

    Args:
        value: Item id (e.g., a service UUID)
        ctx: Context dictionary (unused)

    Returns:
        Stripped item id

    Raises:
        ValueError: If the id is empty or contains whitespace
    """
    value = value.strip()

    if not value:
        raise ValueError("Item id cannot be empty")

    if re.search(r'\s', value):
        raise ValueError("Item id cannot contain whitespace")

    return value


def validate_iso_date(value: str, ctx: Dict[str, Any]) -> str:
    """Validate a date in YYYY-MM-DD format.

    Raises:
        ValueError: If the value is not a calendar date in ISO format
    """
    value = value.strip()

    if not re.match(r'^\d{4}-\d{2}-\d{2}$', value):
        raise ValueError("Date must use the YYYY-MM-DD format")

    # Rejects 2026-02-30 and friends
    date.fromisoformat(value)
    return value


def validate_time_slot(value: str, ctx: Dict[str, Any]) -> str:
    """Validate a time slot in 24h HH:MM format.

    Raises:
        ValueError: If the value is not a valid HH:MM time
    """
    value = value.strip()

    match = re.match(r'^(\d{2}):(\d{2})$', value)
    if not match:
        raise ValueError("Time must use the HH:MM format")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError("Time must be between 00:00 and 23:59")

    return value
