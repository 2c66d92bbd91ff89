"""Error taxonomy for the booking flow driver."""

from typing import Optional


class BookingFlowError(Exception):
    """Base class for failures that abort a flow run."""


class ElementNotFoundError(BookingFlowError):
    """An expected control did not become visible within its timeout."""

    def __init__(self, target: str, timeout_ms: Optional[int] = None):
        self.target = target
        self.timeout_ms = timeout_ms
        if timeout_ms is None:
            message = f"Element not found: {target}"
        else:
            message = f"Element not visible after {timeout_ms}ms: {target}"
        super().__init__(message)


class GuardViolationError(BookingFlowError):
    """An action was attempted while its enabling precondition was false."""

    def __init__(self, control: str, reason: str):
        self.control = control
        self.reason = reason
        super().__init__(f"Guard violation on {control}: {reason}")


class TerminalStepError(BookingFlowError):
    """The flow ran out of steps without the UI reporting the confirmation step."""

    def __init__(self, label: str, keyword: str):
        self.label = label
        self.keyword = keyword
        super().__init__(
            f"Expected terminal step label containing {keyword!r}, got {label!r}"
        )
