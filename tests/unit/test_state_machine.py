# tests/unit/test_state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import logging
from enum import Enum, auto

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tablefsm.core.actions import CallbackActionHandler
from tablefsm.core.definition import MachineDefinition
from tablefsm.core.errors import ConfigurationError, EventRangeError, StateNotFoundError
from tablefsm.core.state_machine import StateMachine
from tablefsm.core.types import ANYWHERE
from tablefsm.interfaces.protocols import ActionHandler


class Action(Enum):
    ENTER = auto()
    LEAVE = auto()
    LOG = auto()
    RESET = auto()


class State(Enum):
    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()


# -----------------------------------------------------------------------------
# TEST FIXTURES
# -----------------------------------------------------------------------------


def build(machine: StateMachine) -> StateMachine:
    machine.add_state(
        State.IDLE,
        Action.ENTER,
        Action.LEAVE,
        lambda t: (t.register_event(1, Action.LOG, State.RUNNING), t.register_event(2, Action.LOG)),
    )
    machine.add_state(
        State.RUNNING,
        Action.ENTER,
        None,
        lambda t: (t.register_event(0, Action.LOG, State.IDLE), t.register_event(3, None, State.PAUSED)),
    )
    machine.add_state(State.PAUSED, None, Action.LEAVE, lambda t: t.register_event(1, None, State.RUNNING))
    machine.add_state(ANYWHERE, init=lambda t: t.register_event(9, Action.RESET, State.IDLE))
    return machine


@pytest.fixture
def machine(recorder) -> StateMachine:
    """A machine over IDLE/RUNNING/PAUSED reporting to the recorder."""
    return build(StateMachine(State.IDLE, recorder))


# -----------------------------------------------------------------------------
# INITIALIZATION TESTS
# -----------------------------------------------------------------------------


def test_init_state(machine: StateMachine) -> None:
    assert machine.initial_state is State.IDLE
    assert machine.current_state is State.IDLE


@pytest.mark.parametrize("initial", [None, ANYWHERE])
def test_init_rejects_non_concrete_state(initial) -> None:
    with pytest.raises(ValueError):
        StateMachine(initial)


def test_init_invalid_bounds() -> None:
    with pytest.raises(ConfigurationError, match="minEvent must be <= maxEvent"):
        StateMachine(State.IDLE, min_event=3, max_event=1)


def test_init_shared_definition_rejects_own_bounds() -> None:
    with pytest.raises(ValueError):
        StateMachine(State.IDLE, definition=MachineDefinition(), min_event=0)


def test_recorder_satisfies_protocol(recorder) -> None:
    assert isinstance(recorder, ActionHandler)


# -----------------------------------------------------------------------------
# EVENT HANDLING TESTS
# -----------------------------------------------------------------------------


def test_transition_order(machine: StateMachine, recorder) -> None:
    """Exit, then event, then entry; state changes last."""
    assert machine.handle_event(1)
    assert recorder.calls == [
        ("exit", State.IDLE, Action.LEAVE),
        ("event", State.IDLE, 1, Action.LOG),
        ("entry", State.RUNNING, Action.ENTER),
    ]
    assert machine.current_state is State.RUNNING


def test_entry_callback_sees_old_current_state() -> None:
    seen = []
    machine = StateMachine(
        State.IDLE,
        CallbackActionHandler(on_entry=lambda state, action: seen.append((state, machine.current_state))),
    )
    build(machine)
    machine.handle_event(1)
    assert seen == [(State.RUNNING, State.IDLE)]


def test_event_without_transition(machine: StateMachine, recorder) -> None:
    """No exit or entry when the entry has no next state."""
    assert machine.handle_event(2)
    assert recorder.calls == [("event", State.IDLE, 2, Action.LOG)]
    assert machine.current_state is State.IDLE


def test_transition_without_action(machine: StateMachine, recorder) -> None:
    machine.handle_event(1)
    recorder.calls.clear()
    machine.handle_event(3)
    assert recorder.calls == []
    assert machine.current_state is State.PAUSED


def test_exit_only_when_action_set(machine: StateMachine, recorder) -> None:
    machine.handle_event(1)
    machine.handle_event(3)
    recorder.calls.clear()
    machine.handle_event(1)
    assert recorder.calls == [("exit", State.PAUSED, Action.LEAVE), ("entry", State.RUNNING, Action.ENTER)]


def test_unhandled_event_is_noop(machine: StateMachine, recorder) -> None:
    assert not machine.handle_event(42)
    assert recorder.calls == []
    assert machine.current_state is State.IDLE


def test_wildcard_event(machine: StateMachine, recorder) -> None:
    machine.handle_event(1)
    recorder.calls.clear()
    assert machine.handle_event(9)
    assert recorder.calls == [("event", State.RUNNING, 9, Action.RESET), ("entry", State.IDLE, Action.ENTER)]
    assert machine.current_state is State.IDLE


def test_no_handler() -> None:
    machine = build(StateMachine(State.IDLE))
    assert machine.handle_event(1)
    assert machine.current_state is State.RUNNING


def test_mapper_used_for_lookup_only(recorder) -> None:
    machine = StateMachine(State.IDLE, recorder, mapper=lambda e: e if e < 0x80 else 0x80, min_event=0, max_event=0x80)
    machine.add_state(State.IDLE, init=lambda t: t.register_event(0x80, Action.LOG))
    machine.handle_event(0x2603)
    assert recorder.calls == [("event", State.IDLE, 0x2603, Action.LOG)]


def test_bounded_registration(recorder) -> None:
    machine = StateMachine(State.IDLE, recorder, min_event=0, max_event=5)
    with pytest.raises(EventRangeError):
        machine.add_state(State.IDLE, init=lambda t: t.register_event(10, Action.LOG))
    machine.add_state(State.IDLE, init=lambda t: (t.register_event(0, Action.LOG), t.register_event(5, Action.LOG)))
    assert machine.handle_event(0)
    assert machine.handle_event(5)


def test_handler_error_leaves_state() -> None:
    def boom(state, action):
        raise RuntimeError("entry failed")

    failing = build(StateMachine(State.IDLE, CallbackActionHandler(on_entry=boom)))
    with pytest.raises(RuntimeError):
        failing.handle_event(1)
    assert failing.current_state is State.IDLE


# -----------------------------------------------------------------------------
# UNKNOWN TARGET STATES
# -----------------------------------------------------------------------------


def test_unknown_target_lenient(recorder, caplog) -> None:
    machine = StateMachine(State.IDLE, recorder)
    machine.add_state(State.IDLE, Action.ENTER, Action.LEAVE, lambda t: t.register_event(1, Action.LOG, State.PAUSED))
    with caplog.at_level(logging.WARNING, logger="tablefsm.core.state_machine"):
        assert machine.handle_event(1)
    assert machine.current_state is State.PAUSED
    assert recorder.calls == [("exit", State.IDLE, Action.LEAVE), ("event", State.IDLE, 1, Action.LOG)]
    assert "never added" in caplog.text
    # PAUSED has no table, so only the wildcard could still match.
    assert not machine.handle_event(1)


def test_unknown_target_strict(recorder) -> None:
    machine = StateMachine(State.IDLE, recorder, strict=True)
    machine.add_state(State.IDLE, None, Action.LEAVE, lambda t: t.register_event(1, Action.LOG, State.PAUSED))
    with pytest.raises(StateNotFoundError) as exc_info:
        machine.handle_event(1)
    assert exc_info.value.state is State.PAUSED
    assert recorder.calls == []
    assert machine.current_state is State.IDLE


def test_validate(recorder) -> None:
    machine = StateMachine(State.PAUSED, recorder)
    machine.add_state(State.IDLE, init=lambda t: t.register_event(1, None, State.RUNNING))
    errors = machine.validate()
    assert len(errors) == 2
    assert "Initial state" in errors[0]


# -----------------------------------------------------------------------------
# RESET AND SHARING
# -----------------------------------------------------------------------------


def test_reset(machine: StateMachine, recorder) -> None:
    machine.handle_event(1)
    machine.handle_event(3)
    recorder.calls.clear()
    machine.reset()
    assert machine.current_state is State.IDLE
    assert recorder.calls == []


def test_shared_definition() -> None:
    definition = build(StateMachine(State.IDLE)).definition
    first = StateMachine(State.IDLE, definition=definition)
    second = StateMachine(State.IDLE, definition=definition)
    first.handle_event(1)
    assert first.current_state is State.RUNNING
    assert second.current_state is State.IDLE


def test_pass_through_lookups(machine: StateMachine) -> None:
    assert machine.get_state_data(State.RUNNING).on_entry is Action.ENTER
    assert machine.resolve_event(State.PAUSED, 9).action is Action.RESET
    assert machine.get_state_data(State.IDLE) is machine.definition.get_state_data(State.IDLE)


def test_configuration_accessors(recorder) -> None:
    def mapper(event):
        return event

    machine = StateMachine(State.IDLE, recorder, mapper)
    assert machine.handler is recorder
    assert machine.definition.mapper is mapper
    assert StateMachine(State.IDLE).handler is None


def test_subclass_builds_table() -> None:
    class Toggle(StateMachine):
        def __init__(self, handler=None):
            super().__init__(State.IDLE, handler)
            self.add_state(State.IDLE, init=lambda t: t.register_event("t", self.NO_ACTION, State.RUNNING))
            self.add_state(State.RUNNING, init=lambda t: t.register_event("t", self.NO_ACTION, State.IDLE))

    toggle = Toggle()
    toggle.handle_event("t")
    toggle.handle_event("t")
    toggle.handle_event("t")
    assert toggle.current_state is State.RUNNING


# -----------------------------------------------------------------------------
# PROPERTY TESTS
# -----------------------------------------------------------------------------


@pytest.mark.property
@given(events=st.lists(st.integers(min_value=0, max_value=12), max_size=50))
def test_dispatch_properties(events) -> None:
    """Callbacks always come in exit/event/entry order and state only changes on transitions."""
    calls = []
    machine = build(
        StateMachine(
            State.IDLE,
            CallbackActionHandler(
                on_entry=lambda s, a: calls.append("entry"),
                on_event=lambda s, e, a: calls.append("event"),
                on_exit=lambda s, a: calls.append("exit"),
            ),
        )
    )
    rank = {"exit": 0, "event": 1, "entry": 2}
    for event in events:
        calls.clear()
        before = machine.current_state
        entry = machine.resolve_event(before, event)
        handled = machine.handle_event(event)
        assert handled == (entry is not None)
        if entry is None or entry.next_state is None:
            assert machine.current_state is before
            assert "exit" not in calls and "entry" not in calls
        else:
            assert machine.current_state is entry.next_state
        assert [rank[c] for c in calls] == sorted(rank[c] for c in calls)
    machine.reset()
    assert machine.current_state is State.IDLE
