# tablefsm/runtime/graph.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""DOT export of a state machine's transition tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterable, List

from tablefsm.core.events import EventEntry
from tablefsm.core.types import ANYWHERE

if TYPE_CHECKING:
    from tablefsm.core.state_machine import StateMachine


@dataclass(frozen=True)
class _Edge:
    """One drawn transition. Edges with equal (source, target, action) collapse."""

    source: Any
    target: Any
    action: Any


def _label(value: Any) -> str:
    """Text for a quoted DOT identifier or label."""
    if value is ANYWHERE:
        text = "anywhere"
    elif isinstance(value, Enum):
        text = value.name
    else:
        text = str(value)
    return text.replace('"', '\\"')


def collect_edges(machine: "StateMachine", show_wildcard_as_node: bool = False) -> List[_Edge]:
    """
    Gather the distinct transitions of a machine, in first-seen order.

    Entries without a next state are skipped. ANYWHERE transitions are either
    kept as edges from ANYWHERE or copied onto every added state.
    """
    definition = machine.definition
    wildcard = definition.wildcard
    edges: Dict[_Edge, None] = {}

    def add(source: Any, entries: Iterable[EventEntry]) -> None:
        for entry in entries:
            if not entry.is_transition:
                continue
            edges.setdefault(_Edge(source, entry.next_state, entry.action), None)

    for state_entry in definition.entries():
        if state_entry.is_wildcard and not show_wildcard_as_node:
            continue
        source = state_entry.state
        if not state_entry.is_wildcard and wildcard is not None and not show_wildcard_as_node:
            add(source, (entry for _, entry in wildcard.table.events()))
        add(source, (entry for _, entry in state_entry.table.events()))
    return list(edges)


def export_dot(machine: "StateMachine", show_wildcard_as_node: bool = False) -> str:
    """
    Render a machine in Graphviz DOT format.

    :param machine: The machine to draw.
    :param show_wildcard_as_node: True to draw ANYWHERE as an "anywhere" node,
        False to add its transitions to each state.
    """
    lines = ["strict digraph StateMachine {"]
    lines.append(f'"start" -> "{_label(machine.initial_state)}"')
    for state in machine.state_values:
        lines.append(f'"{_label(state)}" [shape=box, style=rounded];')
    for edge in collect_edges(machine, show_wildcard_as_node):
        if edge.action is None:
            lines.append(f'"{_label(edge.source)}" -> "{_label(edge.target)}"')
        else:
            lines.append(f'"{_label(edge.source)}" -> "{_label(edge.target)}" [label="{_label(edge.action)}"];')
    lines.append("}")
    return "\n".join(lines) + "\n"
