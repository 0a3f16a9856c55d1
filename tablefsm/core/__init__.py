"""
Core package: transition tables, the state registry and the dispatcher.
"""

# Import order matters to avoid circular dependencies
from .types import ANYWHERE, NO_ACTION, NO_TRANSITION
from .errors import (
    ConfigurationError,
    EventRangeError,
    FSMError,
    StateNotFoundError,
    UnsupportedEventTypeError,
)
from .domains import CharacterDomain, EnumDomain, EventBounds, EventDomain, IntegerDomain
from .events import EventEntry
from .table import TransitionTable
from .states import StateEntry
from .definition import MachineDefinition
from .actions import CallbackActionHandler
from .state_machine import StateMachine

__all__ = [
    # Markers
    "ANYWHERE",
    "NO_ACTION",
    "NO_TRANSITION",
    # Errors
    "FSMError",
    "ConfigurationError",
    "EventRangeError",
    "UnsupportedEventTypeError",
    "StateNotFoundError",
    # Event domains
    "EventDomain",
    "IntegerDomain",
    "CharacterDomain",
    "EnumDomain",
    "EventBounds",
    # Tables and states
    "EventEntry",
    "TransitionTable",
    "StateEntry",
    "MachineDefinition",
    # Dispatch
    "CallbackActionHandler",
    "StateMachine",
]
