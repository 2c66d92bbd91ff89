"""BookingDriver - one UI session and the operations performed on it."""

import logging
from typing import Optional

from .forms import ClientFormFiller
from .navigation import NavigationGate
from .schema import Category, ClientContactData
from .selection import SelectionPrimitive
from .settle import FixedDelayPolicy, SettlePolicy

logger = logging.getLogger(__name__)


class BookingDriver:
    """
    Drives the booking wizard through a single UI surface.

    A driver exclusively owns its surface and must not be shared between
    concurrent runs. Every operation finishes its interaction and settle wait
    before returning.
    """

    def __init__(self, surface, settle: Optional[SettlePolicy] = None,
                 timeout_ms: int = 10000, slot_timeout_ms: int = 10000,
                 terminal_keyword: str = 'Confirmar'):
        """
        Args:
            surface: UISurface implementation for all interactions
            settle: Settle policy (default: FixedDelayPolicy on the surface)
            timeout_ms: Visibility timeout for controls
            slot_timeout_ms: Timeout for time slots after a date is picked
            terminal_keyword: Forward control text at the terminal step
        """
        self.surface = surface
        self.settle = settle or FixedDelayPolicy(surface)
        self.selection = SelectionPrimitive(surface, self.settle, timeout_ms, slot_timeout_ms)
        self.gate = NavigationGate(surface, self.settle, timeout_ms, terminal_keyword)
        self.form = ClientFormFiller(surface, self.settle, timeout_ms)

    @classmethod
    def from_settings(cls, surface, settings) -> 'BookingDriver':
        """Build a driver from BookingSettings."""
        settle = FixedDelayPolicy(surface, scale=settings.settle_scale)
        return cls(
            surface,
            settle=settle,
            timeout_ms=settings.visibility_timeout_ms,
            slot_timeout_ms=settings.slot_timeout_ms,
            terminal_keyword=settings.terminal_keyword,
        )

    def open_booking_page(self, path: str) -> None:
        logger.info("Opening booking page %s", path)
        self.surface.open(path)

    def select_first_of(self, category: Category, wait: bool = False) -> Optional[str]:
        return self.selection.select_first_of(category, wait)

    def select_specific(self, category: Category, item_id: str) -> None:
        self.selection.select_specific(category, item_id)

    def advance(self) -> None:
        self.gate.advance()

    def back(self) -> None:
        self.gate.back()

    def is_at_terminal_step(self) -> bool:
        return self.gate.is_at_terminal_step()

    def fill_client_contact_data(self, data: ClientContactData) -> None:
        self.form.fill_client_contact_data(data)
