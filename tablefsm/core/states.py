# tablefsm/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from tablefsm.core.table import TransitionTable
from tablefsm.core.types import ANYWHERE, NO_ACTION


@dataclass(eq=False)
class StateEntry:
    """
    Data for one state: its entry/exit Actions and its TransitionTable.

    The table is filled once by the init callback passed to add_state and is
    not expected to change while events are being handled.
    """

    state: Any
    on_entry: Optional[Any] = NO_ACTION
    on_exit: Optional[Any] = NO_ACTION
    table: TransitionTable = field(default_factory=TransitionTable)

    @property
    def is_wildcard(self) -> bool:
        return self.state is ANYWHERE
