"""Booking wizard step operations."""

from .catalog import select_service, select_professional, select_location
from .schedule import select_date, select_time
from .client_info import fill_client_info
from .navigation import advance, go_back
from .validators import validate_item_id, validate_iso_date, validate_time_slot

__all__ = [
    'select_service',
    'select_professional',
    'select_location',
    'select_date',
    'select_time',
    'fill_client_info',
    'advance',
    'go_back',
    'validate_item_id',
    'validate_iso_date',
    'validate_time_slot',
]
