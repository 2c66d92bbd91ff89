"""Selection primitive - pick the first or a specific item of a category."""

import logging
from typing import Optional

from .schema import Category
from .settle import SettlePolicy, action_for_category

logger = logging.getLogger(__name__)


def derive_token(test_id: str, category: Category) -> str:
    """Strip the category prefix from an element identifier.

    Examples:
        >>> derive_token('service-card-42', Category.SERVICE)
        '42'
    """
    if not test_id.startswith(category.prefix):
        raise ValueError(f"'{test_id}' does not belong to category '{category.value}'")
    return test_id[len(category.prefix):]


class SelectionPrimitive:
    """
    Selects items within a category through the UI surface.

    Each call performs exactly one click followed by the category's settle wait.
    """

    def __init__(self, surface, settle: SettlePolicy, timeout_ms: int = 10000,
                 slot_timeout_ms: int = 10000):
        """
        Args:
            surface: UISurface to interact with
            settle: Policy applied after each selection
            timeout_ms: Visibility timeout for candidates
            slot_timeout_ms: Timeout for time slots to load after a date is picked
        """
        self.surface = surface
        self.settle = settle
        self.timeout_ms = timeout_ms
        self.slot_timeout_ms = slot_timeout_ms

    def select_first_of(self, category: Category, wait: bool = False) -> Optional[str]:
        """Select the first rendered item of a category.

        Args:
            category: Category to select in
            wait: Wait up to the visibility timeout for a first candidate
                before counting. Time slots are always waited for.

        Returns:
            The selection token, or None when the category has no candidates

        Raises:
            ElementNotFoundError: If the first candidate never becomes visible,
                nothing renders while waiting, or no time slot renders within
                the slot timeout
        """
        if category is Category.TIME:
            self.surface.wait_for_any(category.prefix, self.slot_timeout_ms)
        elif wait:
            self.surface.wait_for_any(category.prefix, self.timeout_ms)

        if self.surface.count(category.prefix) == 0:
            logger.info("No %s candidates rendered", category.value)
            return None

        test_id = self.surface.first_test_id(category.prefix, self.timeout_ms)
        self.surface.click(test_id)
        self.settle.settle(action_for_category(category))

        token = derive_token(test_id, category)
        logger.info("Selected first %s: %s", category.value, token)
        return token

    def select_specific(self, category: Category, item_id: str) -> None:
        """Select a known item by id.

        Raises:
            ElementNotFoundError: If the item does not become visible in time
        """
        test_id = category.test_id(item_id)
        self.surface.wait_visible(test_id, self.timeout_ms)
        self.surface.click(test_id)
        self.settle.settle(action_for_category(category))
        logger.info("Selected %s: %s", category.value, item_id)
