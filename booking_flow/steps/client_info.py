"""Client info step - fill the contact data form."""

from typing import Dict, Any

from booking_flow.engine.schema import ClientContactData

CLIENT_KEY = 'booking.client'


def fill_client_info(ctx: Dict[str, Any], driver) -> None:
    """Fill the client contact form from ``ctx['booking.client']``.

    The step does not advance: the caller decides whether to confirm.

    Args:
        ctx: Context dictionary holding a ClientContactData (or a plain dict)
        driver: BookingDriver performing the interaction

    Raises:
        KeyError: If no client data was supplied for the run
    """
    if CLIENT_KEY not in ctx:
        raise KeyError(f"No client contact data in context ('{CLIENT_KEY}')")

    data = ctx[CLIENT_KEY]
    if not isinstance(data, ClientContactData):
        data = ClientContactData(**data)
        ctx[CLIENT_KEY] = data

    driver.fill_client_contact_data(data)
