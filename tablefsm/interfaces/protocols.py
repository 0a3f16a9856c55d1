# tablefsm/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Callable, Protocol, Union, runtime_checkable


@runtime_checkable
class ActionHandler(Protocol):
    """
    Receives the Actions triggered while handling events.

    Methods:
        on_entry(state, action): Entering a state whose on_entry Action is set.
        on_event(state, event, action): An Event triggered an Action.
        on_exit(state, action): Leaving a state whose on_exit Action is set.

    Runtime Invariants:
    - For one event the calls arrive in the order on_exit, on_event, on_entry.
    - on_entry receives the state being entered; the machine's current_state
      still reports the old state until on_entry returns.

    Error Handling:
    - Exceptions raised by a handler propagate out of handle_event. The
      current state is only updated after on_entry returns.
    """

    def on_entry(self, state: Any, action: Any) -> None:
        """Called when entering a State, if its on_entry Action is set."""
        ...

    def on_event(self, state: Any, event: Any, action: Any) -> None:
        """Called when an Event triggers an Action."""
        ...

    def on_exit(self, state: Any, action: Any) -> None:
        """Called when exiting a State, if its on_exit Action is set."""
        ...


@runtime_checkable
class EventMapper(Protocol):
    """
    Maps an Event to another Event, for lookup purposes only.

    For example, a numeric Event outside the table's range can be mapped to a
    sentinel value inside it. The original Event is still what on_event sees.
    """

    def map(self, event: Any) -> Any:
        """Return the Event value to use for lookup."""
        ...


MapperLike = Union[EventMapper, Callable[[Any], Any]]
