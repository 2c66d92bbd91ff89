"""Booking flow engine - executes flow definitions against a driver."""

import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .errors import ElementNotFoundError, TerminalStepError
from .loader import FlowLoader
from .schema import BookingFlow, Category, ClientContactData, FlowResult, FlowStep

logger = logging.getLogger(__name__)

COMPLETED_MESSAGE = 'flow completed'


class BookingFlowEngine:
    """
    Executes booking flows with an injected driver.

    Key responsibilities:
    - Load flow definitions
    - Walk steps in order, resolving conditional next steps
    - Dispatch steps to registered step actions
    - Confirm the terminal step from the UI and produce the FlowResult

    Step failures are never caught here: they propagate to the caller.
    """

    def __init__(self, driver, base_path: Optional[Path] = None):
        """
        Initialize the engine.

        Args:
            driver: BookingDriver performing all UI interactions
            base_path: Directory holding flows/ (default: the package directory)
        """
        self.driver = driver
        self.loader = FlowLoader(base_path=base_path)
        self.state: Dict[str, Any] = {}
        self.validators: Dict[str, Callable] = {}
        self.actions: Dict[str, Callable] = {}

    def _interpolate(self, template: str, state: dict) -> str:
        """Replace {key} placeholders with state values.

        Examples:
            >>> engine._interpolate("/{booking.subdomain}/agendar", {'booking.subdomain': 'demo'})
            '/demo/agendar'
        """
        def replacer(match):
            key = match.group(1)
            value = state.get(key, f'{{{key}}}')  # Keep {key} if not found
            return str(value)

        return re.sub(r'\{([^}]+)\}', replacer, template)

    def _auto_register_steps(self):
        """Register step actions and validators by name."""
        if 'service.select' in self.actions:
            return  # Already registered

        from booking_flow import steps

        self.actions['service.select'] = steps.select_service
        self.actions['professional.select'] = steps.select_professional
        self.actions['location.select'] = steps.select_location
        self.actions['date.select'] = steps.select_date
        self.actions['time.select'] = steps.select_time
        self.actions['client_info.fill'] = steps.fill_client_info
        self.actions['navigation.advance'] = steps.advance
        self.actions['navigation.back'] = steps.go_back

        self.validators['service.item_id'] = steps.validate_item_id
        self.validators['professional.item_id'] = steps.validate_item_id
        self.validators['location.item_id'] = steps.validate_item_id
        self.validators['date.item_id'] = steps.validate_iso_date
        self.validators['time.item_id'] = steps.validate_time_slot

    def _action_name(self, step: FlowStep) -> str:
        if step.type == 'select':
            return f'{step.category.value}.select'
        if step.type == 'advance':
            return 'navigation.advance'
        if step.type == 'back':
            return 'navigation.back'
        if step.type == 'client_data':
            return 'client_info.fill'
        raise ValueError(f"Step type '{step.type}' has no action")

    def _execute_step(self, step: FlowStep) -> Any:
        """
        Execute a single non-terminal step.

        Returns:
            The value produced by the step action (a token for select steps)

        Raises:
            ElementNotFoundError: If a required category rendered no candidates
        """
        if step.wizard_step is not None:
            self.state['wizard.step'] = step.wizard_step
        self.state['wizard.step_optional'] = step.optional

        action_fn = self.actions[self._action_name(step)]
        logger.info("Step %s (%s)", step.id, step.type)
        value = action_fn(self.state, self.driver)

        if step.type == 'select' and value is None:
            if not step.optional:
                raise ElementNotFoundError(f"{step.category.prefix}*", self.driver.selection.timeout_ms)
            logger.info("Skipping %s: no candidates rendered", step.id)

        self.state['wizard.history'].append(step.id)
        return value

    def _resolve_next(self, flow: BookingFlow, step: FlowStep, value: Any) -> Optional[str]:
        """
        Resolve the next step ID.

        Args:
            flow: Flow being executed
            step: Step just executed
            value: Value the step produced

        Returns:
            Next step ID or None at the end of the flow
        """
        if isinstance(step.next, str):
            return step.next

        # Conditional next on select steps: branch on whether anything was selected
        if isinstance(step.next, dict):
            branch = 'when_selected' if value is not None else 'when_empty'
            return step.next.get(branch)

        # No explicit next: go to next step in sequence
        index = flow.steps.index(step)
        if index + 1 < len(flow.steps):
            return flow.steps[index + 1].id
        return None

    def _confirm_terminal(self, step: FlowStep) -> FlowResult:
        if step.wizard_step is not None:
            self.state['wizard.step'] = step.wizard_step

        if not self.driver.is_at_terminal_step():
            gate = self.driver.gate
            raise TerminalStepError(gate.advance_label(), gate.terminal_keyword)

        self.state['wizard.history'].append(step.id)
        logger.info("Reached terminal step after %s", ' -> '.join(self.state['wizard.history']))
        return FlowResult(ready=True, message=COMPLETED_MESSAGE)

    def _validate_selections(self, selections: Dict[str, str]) -> Dict[str, str]:
        validated = {}
        for category_name, item_id in selections.items():
            category = Category(category_name)
            validator = self.validators[f'{category.value}.item_id']
            validated[category.value] = validator(item_id, self.state)
        return validated

    def execute_flow(self, flow_name: str = 'booking', subdomain: str = 'demo',
                     client: Optional[ClientContactData] = None,
                     selections: Optional[Dict[str, str]] = None,
                     navigate: bool = True) -> FlowResult:
        """
        Execute a flow from its first step to its terminal step.

        Args:
            flow_name: Name of flow to execute (e.g., 'booking')
            subdomain: Partner subdomain interpolated into the entry path
            client: Contact data for the client-info step
            selections: Optional {category: item_id} for specific selections;
                        categories not listed take the first rendered item
            navigate: Open the flow's entry path before the first step

        Returns:
            FlowResult of the completed run

        Raises:
            ElementNotFoundError: If an expected control never shows up
            GuardViolationError: If forward navigation stays disabled
            TerminalStepError: If the UI does not report the confirmation step
        """
        # Fresh state for every run
        self.state = {'booking.subdomain': subdomain, 'wizard.history': []}
        if client is not None:
            self.state['booking.client'] = client

        flow = self.loader.load_flow(flow_name)
        self._auto_register_steps()

        for category, item_id in self._validate_selections(selections or {}).items():
            self.state[f'booking.{category}.requested_id'] = item_id

        if navigate:
            self.driver.open_booking_page(self._interpolate(flow.entry_path, self.state))

        current_step_id = flow.steps[0].id if flow.steps else None

        while current_step_id:
            step = flow.get_step(current_step_id)

            if step.type == 'terminal':
                return self._confirm_terminal(step)

            value = self._execute_step(step)
            current_step_id = self._resolve_next(flow, step, value)

        raise TerminalStepError(self.driver.gate.advance_label(), self.driver.gate.terminal_keyword)
