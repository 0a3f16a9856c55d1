# tablefsm/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence

from tablefsm.core.domains import EventDomain
from tablefsm.core.errors import StateNotFoundError
from tablefsm.core.events import EventEntry
from tablefsm.core.definition import MachineDefinition
from tablefsm.core.states import StateEntry
from tablefsm.core.table import TransitionTable
from tablefsm.core.types import ANYWHERE, NO_ACTION, NO_TRANSITION
from tablefsm.interfaces.protocols import ActionHandler, MapperLike
from tablefsm.runtime.graph import export_dot

logger = logging.getLogger(__name__)


class StateMachine:
    """
    Table driven state machine.

    Either build a MachineDefinition and pass it in, or subclass StateMachine
    and call add_state() in the constructor to set up States, Events and
    Actions. Events are then fed one at a time to handle_event().
    """

    ANYWHERE = ANYWHERE
    NO_ACTION = NO_ACTION
    NO_TRANSITION = NO_TRANSITION

    def __init__(
        self,
        initial_state: Any,
        handler: Optional[ActionHandler] = None,
        mapper: Optional[MapperLike] = None,
        min_event: Any = None,
        max_event: Any = None,
        *,
        event_domain: Optional[EventDomain] = None,
        state_values: Optional[Sequence[Any]] = None,
        definition: Optional[MachineDefinition] = None,
        strict: bool = False,
    ) -> None:
        """
        :param initial_state: The state in which this machine begins, and returns to on reset().
        :param handler: ActionHandler to receive Actions, or None to ignore them.
        :param mapper: EventMapper (or function) used to look up Events.
        :param min_event: Minimum Event value, enables range checking.
        :param max_event: Maximum Event value, enables range checking.
        :param event_domain: Explicit EventDomain for bounds and ranges.
        :param state_values: Every possible State, in display order, for graph export.
        :param definition: Existing definition to share. mapper and bounds must
            then be configured on the definition instead.
        :param strict: Raise StateNotFoundError when a transition targets a
            State that was never added.
        :raises ConfigurationError: If the bounds are invalid.
        """
        if initial_state is None or initial_state is ANYWHERE:
            raise ValueError("Initial state must be a concrete state")
        if definition is not None and any(v is not None for v in (mapper, min_event, max_event, event_domain)):
            raise ValueError("mapper and event bounds belong to the shared definition")

        self._definition = definition or MachineDefinition(
            mapper=mapper, min_event=min_event, max_event=max_event, event_domain=event_domain
        )
        self._handler = handler
        self._initial_state = initial_state
        self._current_state = initial_state
        self._state_values = list(state_values) if state_values is not None else None
        self._strict = strict

    @property
    def initial_state(self) -> Any:
        return self._initial_state

    @property
    def current_state(self) -> Any:
        """Get the current state."""
        return self._current_state

    @property
    def definition(self) -> MachineDefinition:
        return self._definition

    @property
    def handler(self) -> Optional[ActionHandler]:
        return self._handler

    @property
    def state_values(self) -> List[Any]:
        """
        Every possible State: the explicit state_values, else all members of
        the initial state's Enum, else the states added so far.
        """
        if self._state_values is not None:
            return list(self._state_values)
        if isinstance(self._initial_state, Enum):
            return list(type(self._initial_state))
        values = self._definition.states
        if self._initial_state not in values:
            values.insert(0, self._initial_state)
        return values

    def add_state(
        self,
        state: Any,
        on_entry: Any = NO_ACTION,
        on_exit: Any = NO_ACTION,
        init: Optional[Callable[[TransitionTable], None]] = None,
    ) -> StateEntry:
        """
        Add a State to the definition. See MachineDefinition.add_state.
        """
        return self._definition.add_state(state, on_entry, on_exit, init)

    def get_state_data(self, state: Any) -> Optional[StateEntry]:
        return self._definition.get_state_data(state)

    def resolve_event(self, state: Any, event: Any) -> Optional[EventEntry]:
        return self._definition.resolve_event(state, event)

    def reset(self) -> None:
        """Return to the initial state. No Actions are triggered."""
        self._current_state = self._initial_state

    def handle_event(self, event: Any) -> bool:
        """
        Handle the given Event, based on the current State.

        Up to three Actions are reported, always in this order:
          1. the exit action of the old state
          2. the action associated with the event
          3. the entry action of the new state

        :param event: Event to process.
        :return: True if the Event was recognized, False if it was ignored.
        :raises StateNotFoundError: In strict mode, if the target State was never added.
        """
        state = self._current_state
        data = self._definition.resolve_event(state, event)
        if data is None:
            logger.debug("Event %r ignored in state %r", event, state)
            return False

        target = data.next_state
        target_data = None
        if data.is_transition:
            target_data = self._definition.get_state_data(target)
            if target_data is None:
                if self._strict:
                    raise StateNotFoundError(f"Transition from {state!r} on {event!r} to unknown state {target!r}", target)
                logger.warning("Transition from %r on %r to state %r which was never added", state, event, target)

            current_data = self._definition.get_state_data(state)
            if current_data is not None and current_data.on_exit is not None and self._handler is not None:
                self._handler.on_exit(state, current_data.on_exit)

        if data.action is not None and self._handler is not None:
            self._handler.on_event(state, event, data.action)

        if data.is_transition:
            if target_data is not None and target_data.on_entry is not None and self._handler is not None:
                self._handler.on_entry(target, target_data.on_entry)
            self._current_state = target
            logger.debug("Event %r moved %r -> %r", event, state, target)
        return True

    def validate(self) -> List[str]:
        """Expose the definition's validation results, plus the initial state check."""
        errors = self._definition.validate()
        if self._initial_state not in self._definition:
            errors.insert(0, f"Initial state {self._initial_state!r} was never added")
        return errors

    def export_graph(self, show_wildcard_as_node: bool = False) -> str:
        """
        Return a DOT description of this machine.

        :param show_wildcard_as_node: True to draw ANYWHERE as its own node,
            False to copy its transitions onto every State.
        """
        return export_dot(self, show_wildcard_as_node)
