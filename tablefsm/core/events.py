# tablefsm/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class EventEntry:
    """
    The Action to take and/or State to transition to for an Event.

    :param action: Action reported through on_event, or None to do nothing.
    :param next_state: State to transition to, or None to stay in the current state.
    """

    action: Optional[Any] = None
    next_state: Optional[Any] = None

    @property
    def is_transition(self) -> bool:
        """True if handling this entry changes the current state."""
        return self.next_state is not None
