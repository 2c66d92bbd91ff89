"""FakeBookingApp - an in-memory booking wizard rendered on a MockSurface.

Behaves like the partner booking page as seen through its data-testid
contract: cards per category, date and time buttons, the contact form with
customer lookup by phone, and the forward/back controls with their enabled
state and labels. Used to exercise the driver without a browser.
"""

import re
from typing import Dict, List, Mapping, Optional, Sequence, Union

from .schema import Category, WizardStep
from .surface import MockSurface

ADVANCE = 'button-avancar'
BACK = 'button-voltar'
PHONE = 'input-telefone'
NAME = 'input-nome'
EMAIL = 'input-email'

STEP_CATEGORIES = {
    WizardStep.SERVICE: Category.SERVICE,
    WizardStep.PROFESSIONAL: Category.PROFESSIONAL,
    WizardStep.LOCATION: Category.LOCATION,
}


class FakeBookingApp:
    """Scripted booking app that re-renders the surface after every interaction."""

    def __init__(self, surface: MockSurface,
                 services: Sequence[str] = ('corte', 'barba'),
                 professionals: Sequence[str] = ('ana', 'bruno'),
                 locations: Sequence[str] = (),
                 dates: Sequence[str] = ('2026-10-20', '2026-10-21'),
                 times: Union[Sequence[str], Mapping[str, Sequence[str]]] = ('09:00', '09:30'),
                 known_clients: Optional[Mapping[str, Dict[str, str]]] = None,
                 advance_label: str = 'Avançar',
                 confirm_label: str = 'Confirmar agendamento'):
        """
        Args:
            surface: MockSurface to render on
            services, professionals, locations, dates: Item ids in display order;
                no locations means the location step is not shown
            times: Time slots for every date, or a {date: slots} mapping
            known_clients: {phone: {'name': ..., 'email': ...}} returned by the
                customer lookup; their fields come back read-only
            advance_label: Forward control text on regular steps
            confirm_label: Forward control text on the client-info step
        """
        self.surface = surface
        self.items = {
            Category.SERVICE: list(services),
            Category.PROFESSIONAL: list(professionals),
            Category.LOCATION: list(locations),
            Category.DATE: list(dates),
        }
        self.times = times
        self.known_clients = dict(known_clients or {})
        self.advance_label = advance_label
        self.confirm_label = confirm_label

        self.step: Optional[WizardStep] = None
        self.selected: Dict[Category, str] = {}
        self.form: Dict[str, str] = {}
        self.locked: Dict[str, bool] = {}
        self.opened_paths: List[str] = []
        self.advance_clicks = 0
        self.confirmed = False

        surface.on_open = self._on_open
        surface.on_click = self._on_click
        surface.on_fill = self._on_fill

    @property
    def steps(self) -> List[WizardStep]:
        steps = [WizardStep.SERVICE, WizardStep.PROFESSIONAL]
        if self.items[Category.LOCATION]:
            steps.append(WizardStep.LOCATION)
        steps += [WizardStep.DATE_TIME, WizardStep.CLIENT_INFO, WizardStep.CONFIRMATION]
        return steps

    def slots_for(self, date: str) -> List[str]:
        if isinstance(self.times, Mapping):
            return list(self.times.get(date, ()))
        return list(self.times)

    def can_advance(self) -> bool:
        if self.step in STEP_CATEGORIES:
            return STEP_CATEGORIES[self.step] in self.selected
        if self.step == WizardStep.DATE_TIME:
            return Category.DATE in self.selected and Category.TIME in self.selected
        if self.step == WizardStep.CLIENT_INFO:
            return self._contact_valid()
        return False

    def _contact_valid(self) -> bool:
        digits = re.sub(r'\D', '', self.form.get(PHONE, ''))
        if not 10 <= len(digits) <= 11:
            return False
        if len(self.form.get(NAME, '').strip()) < 3:
            return False
        email = self.form.get(EMAIL, '').strip()
        return not email or re.match(r'^[^@\s]+@[^@\s]+\.[^@\s]+$', email) is not None

    def render(self) -> None:
        surface = self.surface
        surface.clear()
        if self.step is None:
            return

        if self.step in STEP_CATEGORIES:
            category = STEP_CATEGORIES[self.step]
            for item_id in self.items[category]:
                surface.add_element(category.test_id(item_id), text=item_id)
        elif self.step == WizardStep.DATE_TIME:
            for date in self.items[Category.DATE]:
                surface.add_element(Category.DATE.test_id(date), text=date)
            if Category.DATE in self.selected:
                for slot in self.slots_for(self.selected[Category.DATE]):
                    surface.add_element(Category.TIME.test_id(slot), text=slot)
        elif self.step == WizardStep.CLIENT_INFO:
            for field in (PHONE, NAME, EMAIL):
                surface.add_element(field, value=self.form.get(field, ''),
                                    read_only=self.locked.get(field, False))
        elif self.step == WizardStep.CONFIRMATION:
            surface.add_element('booking-confirmed', text='Agendamento confirmado')
            return

        if self.steps.index(self.step) > 0:
            surface.add_element(BACK, text='Voltar')
        label = self.confirm_label if self.step == WizardStep.CLIENT_INFO else self.advance_label
        surface.add_element(ADVANCE, enabled=self.can_advance(), text=label)

    def _on_open(self, path: str) -> None:
        self.opened_paths.append(path)
        self.step = WizardStep.SERVICE
        self.selected = {}
        self.form = {}
        self.locked = {}
        self.confirmed = False
        self.render()

    def _on_click(self, test_id: str) -> None:
        if test_id == ADVANCE:
            if not self.can_advance():
                raise AssertionError("Clicked the forward control while it was disabled")
            self.advance_clicks += 1
            self.step = self.steps[self.steps.index(self.step) + 1]
            if self.step == WizardStep.CONFIRMATION:
                self.confirmed = True
        elif test_id == BACK:
            self.step = self.steps[self.steps.index(self.step) - 1]
        else:
            for category in Category:
                if test_id.startswith(category.prefix):
                    self.selected[category] = test_id[len(category.prefix):]
                    if category == Category.DATE:
                        self.selected.pop(Category.TIME, None)
                    break
        self.render()

    def _on_fill(self, test_id: str, value: str) -> None:
        self.form[test_id] = value
        if test_id == PHONE:
            client = self.known_clients.get(re.sub(r'\D', '', value))
            if client:
                for field, key in ((NAME, 'name'), (EMAIL, 'email')):
                    if client.get(key):
                        self.form[field] = client[key]
                        self.locked[field] = True
        self.render()
