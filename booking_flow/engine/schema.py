"""Pydantic models for the booking wizard and its flow definitions."""

from enum import Enum
from typing import List, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class WizardStep(str, Enum):
    """Steps of the booking wizard, in traversal order."""

    SERVICE = 'service'
    PROFESSIONAL = 'professional'
    LOCATION = 'location'
    DATE_TIME = 'date_time'
    CLIENT_INFO = 'client_info'
    CONFIRMATION = 'confirmation'


class Category(str, Enum):
    """Selectable groups rendered by the wizard.

    Service, professional and location are rendered as cards; dates and time
    slots as buttons. All of them are selected through the same primitive.
    """

    SERVICE = 'service'
    PROFESSIONAL = 'professional'
    LOCATION = 'location'
    DATE = 'date'
    TIME = 'time'

    @property
    def prefix(self) -> str:
        """Identifier prefix shared by every item of this category."""
        if self in (Category.DATE, Category.TIME):
            return f'{self.value}-button-'
        return f'{self.value}-card-'

    def test_id(self, item_id: str) -> str:
        """Full identifier of one item of this category."""
        return f'{self.prefix}{item_id}'


class ClientContactData(BaseModel):
    """Contact details typed into the client-info step."""

    phone: str = Field(..., description="Client phone number, always filled")
    name: str = Field(..., description="Client name, skipped when the field is read-only")
    email: Optional[str] = Field(None, description="Optional e-mail, skipped when read-only")

    @field_validator('phone', 'name')
    @classmethod
    def _require_text(cls, value: str, info) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name} cannot be empty")
        return value

    @field_validator('email')
    @classmethod
    def _blank_email_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class FlowResult(BaseModel):
    """Outcome of one complete flow run."""

    model_config = ConfigDict(frozen=True)

    ready: bool
    message: str


STEP_TYPES = ('select', 'advance', 'back', 'client_data', 'terminal')
BRANCH_KEYS = {'when_selected', 'when_empty'}


class FlowStep(BaseModel):
    """
    A single step in a booking flow definition.

    A step can be:
    - A selection within a category (first available or a requested id)
    - A forward or backward navigation
    - The client contact data form
    - The terminal check that closes the run
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., description="Unique step identifier")
    type: str = Field(..., description="Step type: select, advance, back, client_data, terminal")
    wizard_step: Optional[WizardStep] = Field(None, description="Wizard step this flow step belongs to")
    category: Optional[Category] = Field(None, description="Category for select steps")
    optional: bool = Field(False, description="Select steps only: an empty category is skipped instead of failing")
    description: Optional[str] = Field(None, description="Human-readable summary")
    next: Optional[Union[str, Dict[str, str]]] = Field(
        None, description="Next step ID or conditional dict (when_selected/when_empty)"
    )

    @model_validator(mode='after')
    def _check_shape(self) -> 'FlowStep':
        if self.type not in STEP_TYPES:
            raise ValueError(f"Unknown step type '{self.type}' for step '{self.id}'")
        if self.type == 'select' and self.category is None:
            raise ValueError(f"Select step '{self.id}' needs a category")
        if isinstance(self.next, dict):
            if self.type != 'select':
                raise ValueError(f"Conditional next is only allowed on select steps ('{self.id}')")
            unknown = set(self.next) - BRANCH_KEYS
            if unknown:
                raise ValueError(f"Unknown branch keys on '{self.id}': {sorted(unknown)}")
            missing = BRANCH_KEYS - set(self.next)
            if missing:
                raise ValueError(f"Conditional next on '{self.id}' is missing {sorted(missing)}")
        if self.optional and self.type != 'select':
            raise ValueError(f"Only select steps can be optional ('{self.id}')")
        if self.type == 'terminal' and self.next is not None:
            raise ValueError(f"Terminal step '{self.id}' cannot have a next step")
        return self

    def next_ids(self) -> List[str]:
        if self.next is None:
            return []
        if isinstance(self.next, str):
            return [self.next]
        return list(self.next.values())


class BookingFlow(BaseModel):
    """
    A booking flow: the ordered steps of one wizard run.

    The terminal step is not counted from the steps: it is confirmed by the
    forward control's label when the terminal step runs.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Flow identifier (e.g., 'booking')")
    version: str = Field(..., description="Flow definition version")
    description: str = Field(..., description="Human-readable description")
    entry_path: str = Field('/{booking.subdomain}/agendar', description="Path opened before the first step")
    steps: List[FlowStep] = Field(default_factory=list, description="Steps in traversal order")

    @model_validator(mode='after')
    def _check_graph(self) -> 'BookingFlow':
        ids = [step.id for step in self.steps]
        duplicates = sorted({step_id for step_id in ids if ids.count(step_id) > 1})
        if duplicates:
            raise ValueError(f"Duplicate step ids: {duplicates}")

        for step in self.steps:
            for target in step.next_ids():
                if target not in ids:
                    raise ValueError(f"Step '{step.id}' points to unknown step '{target}'")

        terminals = [step.id for step in self.steps if step.type == 'terminal']
        if len(terminals) != 1:
            raise ValueError(f"Flow '{self.name}' needs exactly one terminal step, found {len(terminals)}")

        cycle = self._find_cycle()
        if cycle:
            raise ValueError(f"Flow '{self.name}' loops: {' -> '.join(cycle)}")
        return self

    def successors(self, step: FlowStep) -> List[str]:
        """Step ids reachable in one move; a step without next falls through to the following one."""
        if step.type == 'terminal':
            return []
        if step.next is not None:
            return step.next_ids()
        index = self.steps.index(step)
        return [self.steps[index + 1].id] if index + 1 < len(self.steps) else []

    def _find_cycle(self) -> Optional[List[str]]:
        steps = {step.id: step for step in self.steps}
        done = set()

        def visit(step_id, path):
            if step_id in path:
                return path[path.index(step_id):] + [step_id]
            if step_id in done:
                return None
            for target in self.successors(steps[step_id]):
                cycle = visit(target, path + [step_id])
                if cycle:
                    return cycle
            done.add(step_id)
            return None

        for step_id in steps:
            cycle = visit(step_id, [])
            if cycle:
                return cycle
        return None

    def get_step(self, step_id: str) -> Optional[FlowStep]:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None
