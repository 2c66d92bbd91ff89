"""Booking flow engine - drives the booking wizard through a UI surface."""

from .driver import BookingDriver
from .engine import BookingFlowEngine
from .errors import BookingFlowError, ElementNotFoundError, GuardViolationError, TerminalStepError
from .loader import FlowLoader
from .schema import BookingFlow, Category, ClientContactData, FlowResult, FlowStep, WizardStep
from .settle import ActionClass, FixedDelayPolicy, SettlePolicy
from .surface import MockSurface, PlaywrightSurface, UISurface

__all__ = [
    'BookingDriver',
    'BookingFlowEngine',
    'BookingFlowError',
    'ElementNotFoundError',
    'GuardViolationError',
    'TerminalStepError',
    'FlowLoader',
    'BookingFlow',
    'Category',
    'ClientContactData',
    'FlowResult',
    'FlowStep',
    'WizardStep',
    'ActionClass',
    'FixedDelayPolicy',
    'SettlePolicy',
    'MockSurface',
    'PlaywrightSurface',
    'UISurface',
]
