"""Tests for Pydantic schema models."""

import pytest
from pydantic import ValidationError
from booking_flow.engine.schema import (
    BookingFlow, Category, ClientContactData, FlowResult, FlowStep, WizardStep
)


def _terminal(step_id='confirmation'):
    return {'id': step_id, 'type': 'terminal'}


def test_wizard_steps_are_ordered():
    """WizardStep enumerates the wizard in traversal order."""
    assert [step.value for step in WizardStep] == [
        'service', 'professional', 'location', 'date_time', 'client_info', 'confirmation'
    ]


class TestCategory:
    """Identifier scheme of selectable categories."""

    @pytest.mark.parametrize('category,prefix', [
        (Category.SERVICE, 'service-card-'),
        (Category.PROFESSIONAL, 'professional-card-'),
        (Category.LOCATION, 'location-card-'),
        (Category.DATE, 'date-button-'),
        (Category.TIME, 'time-button-'),
    ])
    def test_prefix(self, category, prefix):
        assert category.prefix == prefix

    def test_test_id_appends_item_id(self):
        assert Category.DATE.test_id('2026-10-20') == 'date-button-2026-10-20'
        assert Category.SERVICE.test_id('abc-123') == 'service-card-abc-123'


class TestClientContactData:
    """ClientContactData validation."""

    def test_minimal_valid(self):
        data = ClientContactData(phone='11999999999', name='João')

        assert data.phone == '11999999999'
        assert data.name == 'João'
        assert data.email is None

    def test_strips_whitespace(self):
        data = ClientContactData(phone=' 11999999999 ', name=' Ana Souza ', email=' ana@example.com ')

        assert data.phone == '11999999999'
        assert data.name == 'Ana Souza'
        assert data.email == 'ana@example.com'

    def test_phone_required(self):
        with pytest.raises(ValidationError):
            ClientContactData(name='Ana')

    @pytest.mark.parametrize('field', ['phone', 'name'])
    def test_blank_required_fields_rejected(self, field):
        values = {'phone': '11999999999', 'name': 'Ana', field: '   '}

        with pytest.raises(ValidationError, match=f"{field} cannot be empty"):
            ClientContactData(**values)

    def test_blank_email_becomes_none(self):
        data = ClientContactData(phone='11999999999', name='Ana', email='  ')

        assert data.email is None


class TestFlowResult:
    """FlowResult is produced once and never mutated."""

    def test_fields(self):
        result = FlowResult(ready=True, message='flow completed')

        assert result.ready is True
        assert result.message == 'flow completed'

    def test_frozen(self):
        result = FlowResult(ready=True, message='flow completed')

        with pytest.raises(ValidationError):
            result.ready = False


class TestFlowStep:
    """FlowStep validation."""

    def test_select_step(self):
        step = FlowStep(id='service', type='select', category='service', next='service_advance')

        assert step.category is Category.SERVICE
        assert step.optional is False
        assert step.next_ids() == ['service_advance']

    def test_conditional_next(self):
        step = FlowStep(
            id='location',
            type='select',
            category='location',
            optional=True,
            next={'when_selected': 'location_advance', 'when_empty': 'date'}
        )

        assert isinstance(step.next, dict)
        assert sorted(step.next_ids()) == ['date', 'location_advance']

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError, match="Unknown step type"):
            FlowStep(id='x', type='string')

    def test_select_requires_category(self):
        with pytest.raises(ValidationError, match="needs a category"):
            FlowStep(id='x', type='select')

    def test_conditional_next_only_on_select(self):
        with pytest.raises(ValidationError, match="only allowed on select steps"):
            FlowStep(id='x', type='advance', next={'when_selected': 'a'})

    def test_unknown_branch_key_rejected(self):
        with pytest.raises(ValidationError, match="Unknown branch keys"):
            FlowStep(id='x', type='select', category='location', next={'when_changed': 'a'})

    @pytest.mark.parametrize('branches', [
        {'when_selected': 'location_advance'},
        {'when_empty': 'date'},
    ])
    def test_conditional_next_needs_both_branches(self, branches):
        with pytest.raises(ValidationError, match="is missing"):
            FlowStep(id='location', type='select', category='location', optional=True, next=branches)

    @pytest.mark.parametrize('step_type', ['advance', 'back', 'client_data', 'terminal'])
    def test_only_select_steps_can_be_optional(self, step_type):
        with pytest.raises(ValidationError, match="Only select steps can be optional"):
            FlowStep(id='x', type=step_type, optional=True)

    def test_terminal_cannot_have_next(self):
        with pytest.raises(ValidationError, match="cannot have a next step"):
            FlowStep(id='end', type='terminal', next='service')

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            FlowStep(id='x', type='advance', prompt='Continue?')


class TestBookingFlow:
    """BookingFlow graph validation."""

    def test_minimal_valid(self):
        flow = BookingFlow(
            name='short',
            version='1.0',
            description='Service then terminal',
            steps=[
                {'id': 'service', 'type': 'select', 'category': 'service', 'next': 'confirmation'},
                _terminal(),
            ]
        )

        assert flow.entry_path == '/{booking.subdomain}/agendar'
        assert flow.get_step('service').type == 'select'
        assert flow.get_step('missing') is None

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate step ids"):
            BookingFlow(
                name='dup', version='1.0', description='',
                steps=[{'id': 'a', 'type': 'advance'}, {'id': 'a', 'type': 'advance'}, _terminal()]
            )

    def test_unknown_next_rejected(self):
        with pytest.raises(ValidationError, match="points to unknown step 'nowhere'"):
            BookingFlow(
                name='bad', version='1.0', description='',
                steps=[{'id': 'a', 'type': 'advance', 'next': 'nowhere'}, _terminal()]
            )

    def test_terminal_required(self):
        with pytest.raises(ValidationError, match="exactly one terminal step"):
            BookingFlow(name='open', version='1.0', description='', steps=[{'id': 'a', 'type': 'advance'}])

    def test_single_terminal_only(self):
        with pytest.raises(ValidationError, match="exactly one terminal step, found 2"):
            BookingFlow(name='two', version='1.0', description='', steps=[_terminal('a'), _terminal('b')])

    def test_back_and_forth_loop_rejected(self):
        with pytest.raises(ValidationError, match="loops: service -> fwd -> back -> service"):
            BookingFlow(
                name='loop', version='1.0', description='',
                steps=[
                    {'id': 'service', 'type': 'select', 'category': 'service', 'next': 'fwd'},
                    {'id': 'fwd', 'type': 'advance', 'next': 'back'},
                    {'id': 'back', 'type': 'back', 'next': 'service'},
                    _terminal(),
                ]
            )

    def test_loop_through_a_branch_rejected(self):
        with pytest.raises(ValidationError, match="loops"):
            BookingFlow(
                name='loop', version='1.0', description='',
                steps=[
                    {'id': 'service', 'type': 'select', 'category': 'service'},
                    {'id': 'location', 'type': 'select', 'category': 'location', 'optional': True,
                     'next': {'when_selected': 'confirmation', 'when_empty': 'service'}},
                    _terminal(),
                ]
            )

    def test_loop_through_sequential_fallback_rejected(self):
        with pytest.raises(ValidationError, match="loops"):
            BookingFlow(
                name='loop', version='1.0', description='',
                steps=[
                    {'id': 'service', 'type': 'select', 'category': 'service'},
                    {'id': 'back', 'type': 'back', 'next': 'service'},
                    _terminal(),
                ]
            )

    def test_successors(self):
        flow = BookingFlow(
            name='short', version='1.0', description='',
            steps=[
                {'id': 'service', 'type': 'select', 'category': 'service'},
                {'id': 'fwd', 'type': 'advance', 'next': 'confirmation'},
                _terminal(),
            ]
        )

        assert flow.successors(flow.get_step('service')) == ['fwd']
        assert flow.successors(flow.get_step('fwd')) == ['confirmation']
        assert flow.successors(flow.get_step('confirmation')) == []
