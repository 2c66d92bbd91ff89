"""Navigation gate - forward/back transitions guarded by the UI's enabled state."""

import logging

from .errors import GuardViolationError
from .settle import ActionClass, SettlePolicy

logger = logging.getLogger(__name__)

ADVANCE_BUTTON = 'button-avancar'
BACK_BUTTON = 'button-voltar'


class NavigationGate:
    """
    Wraps the wizard's forward and back controls.

    The gate keeps no notion of the current step: terminal detection reads the
    forward control's label every time it is asked.
    """

    def __init__(self, surface, settle: SettlePolicy, timeout_ms: int = 10000,
                 terminal_keyword: str = 'Confirmar'):
        self.surface = surface
        self.settle = settle
        self.timeout_ms = timeout_ms
        self.terminal_keyword = terminal_keyword

    def advance(self) -> None:
        """Click the forward control once it is visible and enabled.

        Raises:
            ElementNotFoundError: If the control never becomes visible
            GuardViolationError: If the control never becomes enabled
        """
        self.surface.wait_visible(ADVANCE_BUTTON, self.timeout_ms)
        if not self.surface.wait_enabled(ADVANCE_BUTTON, self.timeout_ms):
            raise GuardViolationError(
                ADVANCE_BUTTON, f"still disabled after {self.timeout_ms}ms"
            )
        self.surface.click(ADVANCE_BUTTON)
        self.settle.settle(ActionClass.FORWARD_NAVIGATION)
        logger.info("Advanced")

    def back(self) -> None:
        """Click the back control. Back is assumed enabled whenever it is shown."""
        self.surface.wait_visible(BACK_BUTTON, self.timeout_ms)
        self.surface.click(BACK_BUTTON)
        self.settle.settle(ActionClass.BACKWARD_NAVIGATION)
        logger.info("Went back")

    def is_advance_enabled(self) -> bool:
        return self.surface.is_enabled(ADVANCE_BUTTON)

    def is_at_terminal_step(self) -> bool:
        self.surface.wait_visible(ADVANCE_BUTTON, self.timeout_ms)
        label = self.surface.text_content(ADVANCE_BUTTON)
        return self.terminal_keyword in label

    def advance_label(self) -> str:
        return self.surface.text_content(ADVANCE_BUTTON)

    def validation_blocked(self, action: ActionClass = ActionClass.FORM_FILL) -> bool:
        """Check for a validation failure after the given action.

        Waits exactly one settle period for ``action`` and reads the forward
        control once. A control that is still disabled means the input was
        rejected.
        """
        self.settle.settle(action)
        blocked = not self.surface.is_enabled(ADVANCE_BUTTON)
        if blocked:
            logger.info("Forward navigation blocked after %s", action.value)
        return blocked
