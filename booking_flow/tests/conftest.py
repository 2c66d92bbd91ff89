"""Shared fixtures for driver tests."""

import pytest

from booking_flow.engine.driver import BookingDriver
from booking_flow.engine.fake_app import FakeBookingApp
from booking_flow.engine.schema import Category
from booking_flow.engine.surface import MockSurface


@pytest.fixture
def surface():
    return MockSurface()


@pytest.fixture
def app(surface):
    """Fake booking app for a single-location partner."""
    return FakeBookingApp(surface)


@pytest.fixture
def driver(surface):
    return BookingDriver(surface)


@pytest.fixture
def at_client_info(driver, app):
    """Drive the fake app to the client-info step."""
    driver.open_booking_page('/demo/agendar')
    driver.select_first_of(Category.SERVICE)
    driver.advance()
    driver.select_first_of(Category.PROFESSIONAL)
    driver.advance()
    if driver.select_first_of(Category.LOCATION) is not None:
        driver.advance()
    driver.select_first_of(Category.DATE)
    driver.select_first_of(Category.TIME)
    driver.advance()
    driver.surface.calls.clear()
    return driver
