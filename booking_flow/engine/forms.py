"""Client contact data form filler."""

import logging

from .schema import ClientContactData
from .settle import ActionClass, SettlePolicy

logger = logging.getLogger(__name__)

PHONE_INPUT = 'input-telefone'
NAME_INPUT = 'input-nome'
EMAIL_INPUT = 'input-email'


class ClientFormFiller:
    """
    Fills the client-info step.

    Typing the phone triggers a customer lookup in the app; a known customer
    comes back with name and e-mail pre-filled and locked. Writability is
    therefore checked right before each fill, never cached.
    """

    def __init__(self, surface, settle: SettlePolicy, timeout_ms: int = 10000):
        self.surface = surface
        self.settle = settle
        self.timeout_ms = timeout_ms

    def fill_phone(self, phone: str) -> None:
        """Fill the phone field and wait for the customer lookup."""
        self.surface.wait_visible(PHONE_INPUT, self.timeout_ms)
        self.surface.fill(PHONE_INPUT, phone)
        self.settle.settle(ActionClass.CONTACT_LOOKUP)

    def fill_name(self, name: str) -> bool:
        """Fill the name field unless it is read-only.

        Returns:
            True if the field was filled
        """
        return self._fill_if_writable(NAME_INPUT, name)

    def fill_email(self, email: str) -> bool:
        return self._fill_if_writable(EMAIL_INPUT, email)

    def _fill_if_writable(self, test_id: str, value: str) -> bool:
        self.surface.wait_visible(test_id, self.timeout_ms)
        if not self.surface.is_writable(test_id):
            logger.info("%s is read-only, keeping the pre-filled value", test_id)
            return False
        self.surface.fill(test_id, value)
        return True

    def fill_client_contact_data(self, data: ClientContactData) -> None:
        """Fill phone, name and (optionally) e-mail.

        Raises:
            ElementNotFoundError: If the phone or name field never shows up
        """
        self.fill_phone(data.phone)
        self.fill_name(data.name)
        if data.email:
            self.fill_email(data.email)
        self.settle.settle(ActionClass.FORM_FILL)
        logger.info("Client contact data filled")
