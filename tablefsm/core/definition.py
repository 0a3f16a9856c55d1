# tablefsm/core/definition.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from tablefsm.core.domains import EventBounds, EventDomain
from tablefsm.core.events import EventEntry
from tablefsm.core.states import StateEntry
from tablefsm.core.table import TransitionTable
from tablefsm.core.types import ANYWHERE, NO_ACTION
from tablefsm.interfaces.protocols import MapperLike

logger = logging.getLogger(__name__)


class MachineDefinition:
    """
    Registry of StateEntry objects, including the ANYWHERE slot whose table
    is the fallback for every concrete state.

    Built once through add_state and then shared read-only by any number of
    StateMachine instances.
    """

    def __init__(
        self,
        mapper: Optional[MapperLike] = None,
        min_event: Any = None,
        max_event: Any = None,
        event_domain: Optional[EventDomain] = None,
    ) -> None:
        """
        :param mapper: Optional EventMapper (or plain function) applied to events before lookup.
        :param min_event: Minimum Event value, enables range checking.
        :param max_event: Maximum Event value, enables range checking.
        :param event_domain: Domain for bounds and ranges; derived from the bounds if omitted.
        :raises ConfigurationError: If the bounds are invalid.
        """
        self._states: Dict[Any, StateEntry] = {}
        self._mapper = mapper
        self._bounds = EventBounds.create(min_event, max_event, event_domain)
        self._domain = event_domain

    @property
    def bounds(self) -> Optional[EventBounds]:
        return self._bounds

    @property
    def mapper(self) -> Optional[MapperLike]:
        return self._mapper

    @property
    def states(self) -> List[Any]:
        """Concrete states added so far, in registration order."""
        return [state for state in self._states if state is not ANYWHERE]

    @property
    def wildcard(self) -> Optional[StateEntry]:
        """The ANYWHERE entry, if one was added."""
        return self._states.get(ANYWHERE)

    def entries(self) -> List[StateEntry]:
        return list(self._states.values())

    def add_state(
        self,
        state: Any,
        on_entry: Any = NO_ACTION,
        on_exit: Any = NO_ACTION,
        init: Optional[Callable[[TransitionTable], None]] = None,
    ) -> StateEntry:
        """
        Add a State, replacing any previous definition of it.

        Use state=ANYWHERE to set up Events which apply to any State.

        :param state: State to add.
        :param on_entry: Action to take when entering the State, or NO_ACTION.
        :param on_exit: Action to take when exiting the State, or NO_ACTION.
        :param init: Called with the new, empty TransitionTable so the caller
            can register the State's Events.
        """
        if state is None:
            raise ValueError("State cannot be None; use ANYWHERE for the wildcard state")
        entry = StateEntry(
            state=state,
            on_entry=on_entry,
            on_exit=on_exit,
            table=TransitionTable(bounds=self._bounds, domain=self._domain),
        )
        if init is not None:
            init(entry.table)
        if state in self._states:
            logger.debug("Replacing state %r", state)
        self._states[state] = entry
        logger.debug("Added state %r with %d events", state, len(entry.table))
        return entry

    def get_state_data(self, state: Any) -> Optional[StateEntry]:
        """Return the StateEntry for the given State (or ANYWHERE), or None."""
        return self._states.get(state)

    def map_event(self, event: Any) -> Any:
        """Apply the mapper, if any. The result is only used for lookup."""
        if self._mapper is None:
            return event
        if hasattr(self._mapper, "map"):
            return self._mapper.map(event)
        return self._mapper(event)

    def resolve_event(self, state: Any, event: Any) -> Optional[EventEntry]:
        """
        Return the EventEntry for the given State and Event.

        If the State doesn't recognize the Event, the ANYWHERE table is
        checked. None means the Event is not handled in this State.
        """
        lookup = self.map_event(event)
        data = self._states.get(state)
        if data is not None and data.table.has_event(lookup):
            return data.table.lookup(lookup)
        data = self._states.get(ANYWHERE)
        if data is not None and data.table.has_event(lookup):
            return data.table.lookup(lookup)
        return None

    def validate(self) -> List[str]:
        """
        List transitions whose target state was never added.

        add_state does not check targets, since states may be added in any
        order. Call this once the definition is complete.
        """
        errors = []
        for entry in self._states.values():
            for event, event_entry in entry.table.events():
                target = event_entry.next_state
                if target is not None and target not in self._states:
                    errors.append(f"State {entry.state!r} event {event!r} transitions to unknown state {target!r}")
        return errors

    def __contains__(self, state: Any) -> bool:
        return state in self._states
