# tablefsm/core/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Shared markers and type aliases.

Must not import other tablefsm modules.
"""

from typing import Any, Callable, Optional


class _Anywhere:
    """Marker for the pseudo-state whose table applies to every state."""

    _instance: Optional["_Anywhere"] = None

    def __new__(cls) -> "_Anywhere":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANYWHERE"

    def __reduce__(self):
        return (_Anywhere, ())


# Transitions added to ANYWHERE are checked regardless of the current state.
ANYWHERE = _Anywhere()

# No Action for an Event or State.
NO_ACTION = None

# Stay in the current state.
NO_TRANSITION = None

# Callback types
EntryCallback = Callable[[Any, Any], None]
EventCallback = Callable[[Any, Any, Any], None]
ExitCallback = Callable[[Any, Any], None]
