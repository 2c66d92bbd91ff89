"""Schedule steps - date and time slot selection."""

from typing import Dict, Any, Optional

from booking_flow.engine.schema import Category
from .catalog import select_in_category
from .validators import validate_iso_date, validate_time_slot


def select_date(ctx: Dict[str, Any], driver) -> Optional[str]:
    """Select a date. Time slots for it load asynchronously afterwards."""
    return select_in_category(ctx, driver, Category.DATE, validator=validate_iso_date)


def select_time(ctx: Dict[str, Any], driver) -> Optional[str]:
    return select_in_category(ctx, driver, Category.TIME, validator=validate_time_slot)
