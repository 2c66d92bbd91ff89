"""Catalog steps - service, professional and location selection.

Every selection action follows the same contract: if the run requested a
specific id for the category it is selected directly, otherwise the first
rendered item is taken, waiting up to the visibility timeout for it unless
the running step is optional (``wizard.step_optional``). The resulting token
is stored in the context under ``booking.<category>.token`` and returned;
``None`` means the category had nothing to select.
"""

from typing import Dict, Any, Optional, Callable

from booking_flow.engine.schema import Category
from .validators import validate_item_id

OPTIONAL_KEY = 'wizard.step_optional'


def requested_key(category: Category) -> str:
    return f'booking.{category.value}.requested_id'


def token_key(category: Category) -> str:
    return f'booking.{category.value}.token'


def select_in_category(ctx: Dict[str, Any], driver, category: Category,
                       validator: Callable[[str, Dict[str, Any]], str] = validate_item_id) -> Optional[str]:
    """Select a requested item, or the first one, within a category.

    Args:
        ctx: Context dictionary with optional requested ids
        driver: BookingDriver performing the interaction
        category: Category to select in
        validator: Validator applied to a requested id before any interaction

    Returns:
        Selection token, or None when the category rendered no candidates
    """
    requested = ctx.get(requested_key(category))

    if requested:
        item_id = validator(requested, ctx)
        driver.select_specific(category, item_id)
        token = item_id
    else:
        wait = not ctx.get(OPTIONAL_KEY, False)
        token = driver.select_first_of(category, wait=wait)

    ctx[token_key(category)] = token
    return token


def select_service(ctx: Dict[str, Any], driver) -> Optional[str]:
    return select_in_category(ctx, driver, Category.SERVICE)


def select_professional(ctx: Dict[str, Any], driver) -> Optional[str]:
    return select_in_category(ctx, driver, Category.PROFESSIONAL)


def select_location(ctx: Dict[str, Any], driver) -> Optional[str]:
    """Select a location.

    Partners with a single location never render the location step, so an
    empty category is the normal case and returns None.
    """
    return select_in_category(ctx, driver, Category.LOCATION)
