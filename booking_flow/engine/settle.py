"""Settle-wait policy applied after every UI-mutating interaction.

The booking app re-renders asynchronously and exposes no readiness signal,
so each interaction is followed by a delay chosen by its action class. All
delays are looked up here; components call ``policy.settle(action_class)``
and never wait inline.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional

from .schema import Category

logger = logging.getLogger(__name__)


class ActionClass(str, Enum):
    CATEGORY_SELECTION = 'category_selection'
    DATE_SELECTION = 'date_selection'
    TIME_SELECTION = 'time_selection'
    FORWARD_NAVIGATION = 'forward_navigation'
    BACKWARD_NAVIGATION = 'backward_navigation'
    CONTACT_LOOKUP = 'contact_lookup'
    FORM_FILL = 'form_fill'


DEFAULT_SETTLE_MS: Dict[ActionClass, int] = {
    ActionClass.CATEGORY_SELECTION: 500,
    # Selecting a date triggers the time-slot fetch
    ActionClass.DATE_SELECTION: 1000,
    ActionClass.TIME_SELECTION: 500,
    ActionClass.FORWARD_NAVIGATION: 1000,
    ActionClass.BACKWARD_NAVIGATION: 500,
    # Phone entry triggers the customer lookup
    ActionClass.CONTACT_LOOKUP: 2000,
    ActionClass.FORM_FILL: 500,
}

CATEGORY_ACTIONS: Dict[Category, ActionClass] = {
    Category.SERVICE: ActionClass.CATEGORY_SELECTION,
    Category.PROFESSIONAL: ActionClass.CATEGORY_SELECTION,
    Category.LOCATION: ActionClass.CATEGORY_SELECTION,
    Category.DATE: ActionClass.DATE_SELECTION,
    Category.TIME: ActionClass.TIME_SELECTION,
}


def action_for_category(category: Category) -> ActionClass:
    return CATEGORY_ACTIONS[category]


class SettlePolicy(ABC):
    """Interface for waiting until the UI has settled after an action."""

    @abstractmethod
    def delay_for(self, action: ActionClass) -> int:
        """Milliseconds this policy waits after the given action class."""
        pass

    @abstractmethod
    def settle(self, action: ActionClass) -> None:
        pass


class FixedDelayPolicy(SettlePolicy):
    """Waits a fixed, per-action-class delay on the surface."""

    def __init__(self, surface, delays: Optional[Dict[ActionClass, int]] = None,
                 scale: float = 1.0):
        """
        Args:
            surface: UISurface whose wait() performs the delay
            delays: Per-class overrides merged over DEFAULT_SETTLE_MS
            scale: Multiplier applied to every delay (slow CI machines)
        """
        if scale < 0:
            raise ValueError("Settle scale cannot be negative")
        self.surface = surface
        self.delays = dict(DEFAULT_SETTLE_MS)
        if delays:
            self.delays.update({ActionClass(key): value for key, value in delays.items()})
        self.scale = scale

    def delay_for(self, action: ActionClass) -> int:
        return int(round(self.delays[action] * self.scale))

    def settle(self, action: ActionClass) -> None:
        delay = self.delay_for(action)
        logger.debug("Settling %s for %dms", action.value, delay)
        if delay > 0:
            self.surface.wait(delay)
