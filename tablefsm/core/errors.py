# tablefsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Dict, Optional


class FSMError(Exception):
    """
    Base exception class for errors raised by the state machine library.

    :param message: Human readable description of the failure.
    :param details: Optional dictionary of extra diagnostic data.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(FSMError):
    """
    Raised when a machine, table or event registration is misconfigured.
    The offending call has no effect; the caller must fix it and retry.
    """


class EventRangeError(ConfigurationError):
    """
    Raised when an event lies outside the configured [minimum, maximum] bound.
    """

    def __init__(
        self,
        message: str,
        value: Any,
        minimum: Any,
        maximum: Any,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class UnsupportedEventTypeError(ConfigurationError):
    """
    Raised when bounds or range registration are requested for an event type
    that has no ordering (no EventDomain).
    """

    def __init__(self, message: str, value: Any, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)
        self.value = value


class StateNotFoundError(FSMError):
    """
    Raised in strict mode when a transition targets a state that was never added.
    """

    def __init__(self, message: str, state: Any, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)
        self.state = state
