# tablefsm/core/actions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Optional

from tablefsm.core.types import EntryCallback, EventCallback, ExitCallback


class CallbackActionHandler:
    """
    Adapts up to three plain functions to the ActionHandler protocol, for
    callers that don't want to write a handler class.
    """

    def __init__(
        self,
        on_entry: Optional[EntryCallback] = None,
        on_event: Optional[EventCallback] = None,
        on_exit: Optional[ExitCallback] = None,
    ) -> None:
        """
        :param on_entry: Called with (state, action) when entering a state.
        :param on_event: Called with (state, event, action) when an event triggers an action.
        :param on_exit: Called with (state, action) when exiting a state.
        """
        self._on_entry = on_entry
        self._on_event = on_event
        self._on_exit = on_exit

    def on_entry(self, state: Any, action: Any) -> None:
        if self._on_entry is not None:
            self._on_entry(state, action)

    def on_event(self, state: Any, event: Any, action: Any) -> None:
        if self._on_event is not None:
            self._on_event(state, event, action)

    def on_exit(self, state: Any, action: Any) -> None:
        if self._on_exit is not None:
            self._on_exit(state, action)
