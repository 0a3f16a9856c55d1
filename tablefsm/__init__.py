"""tablefsm: table driven finite state machine engine

The caller chooses the Action, State and Event values and builds one
transition table per state, plus an optional ANYWHERE table that applies to
every state. Events are then fed one at a time; the engine looks them up and
reports exit, event and entry Actions to an ActionHandler.

Responsibilities:
    - Per-state transition tables with optional event bounds
    - Range registration for int, character and Enum events
    - Wildcard (ANYWHERE) fallback lookup
    - Event dispatch with fixed exit/event/entry ordering
    - DOT export for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - Dispatch is synchronous and not re-entrant
        - A finished MachineDefinition may be shared read-only between machines

    Error Handling:
        - Configuration errors raised at registration time
        - Unknown states and unhandled events are reported as None, not raised

    Logging:
        - Standard library logging, one logger per module
        - No handlers are configured by the library
"""

from tablefsm.core import (
    ANYWHERE,
    NO_ACTION,
    NO_TRANSITION,
    CallbackActionHandler,
    CharacterDomain,
    ConfigurationError,
    EnumDomain,
    EventBounds,
    EventDomain,
    EventEntry,
    EventRangeError,
    FSMError,
    IntegerDomain,
    MachineDefinition,
    StateEntry,
    StateMachine,
    StateNotFoundError,
    TransitionTable,
    UnsupportedEventTypeError,
)
from tablefsm.interfaces.protocols import ActionHandler, EventMapper
from tablefsm.runtime.graph import export_dot

__version__ = "0.1.0"

__all__ = [
    "ANYWHERE",
    "NO_ACTION",
    "NO_TRANSITION",
    "ActionHandler",
    "CallbackActionHandler",
    "CharacterDomain",
    "ConfigurationError",
    "EnumDomain",
    "EventBounds",
    "EventDomain",
    "EventEntry",
    "EventMapper",
    "EventRangeError",
    "FSMError",
    "IntegerDomain",
    "MachineDefinition",
    "StateEntry",
    "StateMachine",
    "StateNotFoundError",
    "TransitionTable",
    "UnsupportedEventTypeError",
    "export_dot",
]
