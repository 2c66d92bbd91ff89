"""
End-to-end booking wizard tests against a running booking app.

Run with BOOKING_FLOW_E2E=1 and the app listening on BASE_URL.
"""

import os
import re

import pytest

if os.getenv("BOOKING_FLOW_E2E") != "1":
    pytest.skip("End-to-end tests require BOOKING_FLOW_E2E=1", allow_module_level=True)

from playwright.sync_api import expect

from booking_flow.engine.driver import BookingDriver
from booking_flow.engine.engine import BookingFlowEngine
from booking_flow.engine.schema import Category
from booking_flow.engine.surface import PlaywrightSurface

pytestmark = pytest.mark.acceptance


class TestBookingPage:
    """Loading the page and moving between the first steps."""

    def test_page_loads_with_services(self, page, booking_driver, settings):
        expect(page).to_have_url(re.compile(f"/{settings.subdomain}/agendar"))
        expect(page.locator('[data-testid^="service-card-"]').first).to_be_visible(timeout=10000)

    def test_select_service_and_advance(self, page, booking_driver):
        booking_driver.select_first_of(Category.SERVICE, wait=True)
        booking_driver.advance()

        expect(page.locator('[data-testid^="professional-card-"]').first).to_be_visible(timeout=10000)

    def test_back_returns_to_services(self, page, booking_driver):
        booking_driver.select_first_of(Category.SERVICE, wait=True)
        booking_driver.advance()

        booking_driver.back()

        expect(page.locator('[data-testid^="service-card-"]').first).to_be_visible()

    def test_date_shows_time_slots(self, page, booking_driver):
        booking_driver.select_first_of(Category.SERVICE, wait=True)
        booking_driver.advance()
        booking_driver.select_first_of(Category.PROFESSIONAL, wait=True)
        booking_driver.advance()
        if booking_driver.select_first_of(Category.LOCATION) is not None:
            booking_driver.advance()

        booking_driver.select_first_of(Category.DATE, wait=True)

        expect(page.locator('[data-testid^="time-button-"]').first).to_be_visible(timeout=10000)

    def test_summary_after_first_step(self, page, booking_driver):
        booking_driver.select_first_of(Category.SERVICE, wait=True)
        booking_driver.advance()

        assert page.locator("body").text_content()


class TestClientInfo:
    """The client-info step and its validation."""

    def test_fill_contact_data(self, page, at_client_info, settings):
        at_client_info.fill_client_contact_data(settings.default_client())

        phone = page.get_by_test_id("input-telefone").input_value()
        assert settings.client_phone[:8] in re.sub(r"\D", "", phone)
        assert page.get_by_test_id("input-nome").input_value() != ""

    def test_confirmation_enabled_after_contact_data(self, page, at_client_info, settings):
        at_client_info.fill_client_contact_data(settings.default_client())

        button = page.get_by_test_id("button-avancar")
        expect(button).to_be_enabled()
        expect(button).to_contain_text(settings.terminal_keyword)

    def test_confirmation_disabled_initially(self, page, at_client_info):
        expect(page.get_by_test_id("button-avancar")).to_be_disabled()

    def test_short_phone_blocks_confirmation(self, at_client_info):
        at_client_info.form.fill_phone("123")

        assert at_client_info.gate.validation_blocked() is True

    def test_short_name_blocks_confirmation(self, at_client_info, settings):
        at_client_info.form.fill_phone(settings.client_phone)
        if not at_client_info.form.fill_name("Jo"):
            pytest.skip("Name was pre-filled by the customer lookup")

        assert at_client_info.gate.validation_blocked() is True


def test_full_flow_reaches_confirmation(page, settings):
    surface = PlaywrightSurface(page, navigation_timeout_ms=settings.navigation_timeout_ms)
    engine = BookingFlowEngine(BookingDriver.from_settings(surface, settings))

    result = engine.execute_flow(
        "booking",
        subdomain=settings.subdomain,
        client=settings.default_client(),
    )

    assert result.ready is True
    expect(page.get_by_test_id("button-avancar")).to_be_enabled()
