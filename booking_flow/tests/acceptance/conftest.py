"""Fixtures for end-to-end runs against a live booking app."""

import pytest

from booking_flow.config import BookingSettings
from booking_flow.engine.driver import BookingDriver
from booking_flow.engine.schema import Category
from booking_flow.engine.surface import PlaywrightSurface


@pytest.fixture(scope="session")
def settings():
    return BookingSettings.load()


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, settings):
    """Resolve relative paths against the booking app."""
    return {**browser_context_args, "base_url": settings.base_url}


@pytest.fixture
def booking_driver(page, settings):
    """Driver over the pytest-playwright page, already on the booking page."""
    page.set_default_timeout(settings.action_timeout_ms)
    surface = PlaywrightSurface(page, navigation_timeout_ms=settings.navigation_timeout_ms)
    driver = BookingDriver.from_settings(surface, settings)
    driver.open_booking_page(f"/{settings.subdomain}/agendar")
    return driver


@pytest.fixture
def at_client_info(booking_driver):
    """Walk the wizard up to the client-info step taking the first option everywhere."""
    driver = booking_driver
    driver.select_first_of(Category.SERVICE, wait=True)
    driver.advance()
    driver.select_first_of(Category.PROFESSIONAL, wait=True)
    driver.advance()
    if driver.select_first_of(Category.LOCATION) is not None:
        driver.advance()
    driver.select_first_of(Category.DATE, wait=True)
    driver.select_first_of(Category.TIME)
    driver.advance()
    return driver
