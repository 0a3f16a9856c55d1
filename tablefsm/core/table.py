# tablefsm/core/table.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Dict, ItemsView, Optional

from tablefsm.core.domains import EventBounds, EventDomain
from tablefsm.core.errors import ConfigurationError
from tablefsm.core.events import EventEntry
from tablefsm.core.types import ANYWHERE

logger = logging.getLogger(__name__)


class TransitionTable:
    """
    Maps event values to EventEntry objects for a single state (or for the
    ANYWHERE slot). Lookups are exact; wildcard fallback belongs to the
    MachineDefinition.
    """

    def __init__(self, bounds: Optional[EventBounds] = None, domain: Optional[EventDomain] = None) -> None:
        """
        :param bounds: Optional inclusive bound every registered event must satisfy.
        :param domain: Domain used to iterate ranges. Defaults to the bound's
            domain, or is derived from the first event of each range.
        """
        self._events: Dict[Any, EventEntry] = {}
        self._bounds = bounds
        self._domain = domain or (bounds.domain if bounds is not None else None)

    @property
    def bounds(self) -> Optional[EventBounds]:
        return self._bounds

    def register_event(self, event: Any, action: Any = None, next_state: Any = None) -> EventEntry:
        """
        Add an Event to this table, replacing any previous entry for it.

        :param event: Event to react to.
        :param action: Action to take on this Event, or NO_ACTION.
        :param next_state: State to transition to on this Event, or NO_TRANSITION.
        :raises EventRangeError: If bounds are configured and event is outside them.
        """
        _check_target(next_state)
        if self._bounds is not None:
            self._bounds.check(event)
        entry = EventEntry(action=action, next_state=next_state)
        self._events[event] = entry
        return entry

    def register_event_range(self, first: Any, last: Any, action: Any = None, next_state: Any = None) -> EventEntry:
        """
        Add every Event from first to last (inclusive) with one shared EventEntry.

        :raises ConfigurationError: If first or last is None.
        :raises EventRangeError: If either end is outside the configured bounds.
        :raises UnsupportedEventTypeError: If the event type cannot be iterated.
        """
        if first is None or last is None:
            raise ConfigurationError("Neither first nor last can be None.")
        _check_target(next_state)
        if self._bounds is not None:
            self._bounds.check_range(first, last)

        domain = self._domain or EventDomain.for_value(first)
        for endpoint in (first, last):
            if not domain.accepts(endpoint):
                raise ConfigurationError(
                    f"Range end {endpoint!r} does not belong to event domain {type(domain).__name__}",
                    {"first": first, "last": last},
                )

        entry = EventEntry(action=action, next_state=next_state)
        count = 0
        for event in domain.iterate(first, last):
            self._events[event] = entry
            count += 1
        logger.debug("Registered %d events from %r to %r -> %r", count, first, last, entry)
        return entry

    def has_event(self, event: Any) -> bool:
        """Check if this table reacts to the given Event."""
        return event in self._events

    def lookup(self, event: Any) -> Optional[EventEntry]:
        """Return the EventEntry for the given Event, or None."""
        return self._events.get(event)

    def events(self) -> ItemsView[Any, EventEntry]:
        """All (event, entry) pairs in registration order."""
        return self._events.items()

    def __contains__(self, event: Any) -> bool:
        return self.has_event(event)

    def __len__(self) -> int:
        return len(self._events)


def _check_target(next_state: Any) -> None:
    if next_state is ANYWHERE:
        raise ConfigurationError("ANYWHERE cannot be the target of a transition")
