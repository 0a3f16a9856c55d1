# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, List, Tuple

import pytest


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")


class RecordingHandler:
    """ActionHandler that records every call, in order."""

    def __init__(self) -> None:
        self.calls: List[Tuple[Any, ...]] = []

    def on_entry(self, state: Any, action: Any) -> None:
        self.calls.append(("entry", state, action))

    def on_event(self, state: Any, event: Any, action: Any) -> None:
        self.calls.append(("event", state, event, action))

    def on_exit(self, state: Any, action: Any) -> None:
        self.calls.append(("exit", state, action))


@pytest.fixture
def recorder() -> RecordingHandler:
    """A fresh RecordingHandler."""
    return RecordingHandler()
