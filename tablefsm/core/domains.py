# tablefsm/core/domains.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Event domains: the ordering capability needed for bounded tables and
range registration.

Any hashable value can be used as an event for single registrations. Only
values that belong to an EventDomain can be bounded or registered as a
contiguous range. Integers, single characters and Enum members have
built-in domains; other event types can opt in by subclassing EventDomain.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Optional, Type

from tablefsm.core.errors import ConfigurationError, EventRangeError, UnsupportedEventTypeError


class EventDomain(ABC):
    """
    An ordered, bounded set of event values with a position for every value.
    """

    @abstractmethod
    def accepts(self, value: Any) -> bool:
        """Return True if value is a member of this domain."""

    @abstractmethod
    def ordinal(self, value: Any) -> int:
        """Return the position of value in the domain's natural order."""

    @abstractmethod
    def value_at(self, ordinal: int) -> Any:
        """Return the value at the given position."""

    @property
    @abstractmethod
    def natural_min(self) -> Any:
        """Smallest value of the domain."""

    @property
    @abstractmethod
    def natural_max(self) -> Any:
        """Largest value of the domain."""

    @abstractmethod
    def describe(self, value: Any) -> str:
        """Render a value in both raw and human readable form, for diagnostics."""

    def iterate(self, first: Any, last: Any) -> Iterator[Any]:
        """
        Yield every value from first to last inclusive, in natural order.
        Yields nothing when first comes after last.
        """
        for position in range(self.ordinal(first), self.ordinal(last) + 1):
            yield self.value_at(position)

    @staticmethod
    def for_value(value: Any) -> "EventDomain":
        """
        Return the built-in domain a value belongs to.

        :param value: An int, a one-character str or an Enum member.
        :raises UnsupportedEventTypeError: For any other type.
        """
        if isinstance(value, Enum):
            return EnumDomain(type(value))
        if isinstance(value, int) and not isinstance(value, bool):
            return IntegerDomain()
        if isinstance(value, str) and len(value) == 1:
            return CharacterDomain()
        raise UnsupportedEventTypeError(
            f"Event type {type(value).__name__} has no ordering; "
            "ranges and bounds require int, single character or Enum events.",
            value,
        )


class IntegerDomain(EventDomain):
    """Integer events. Natural bounds default to the signed 32-bit range."""

    def __init__(self, minimum: int = -(2**31), maximum: int = 2**31 - 1) -> None:
        self._minimum = minimum
        self._maximum = maximum

    def accepts(self, value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    def ordinal(self, value: int) -> int:
        return value

    def value_at(self, ordinal: int) -> int:
        return ordinal

    @property
    def natural_min(self) -> int:
        return self._minimum

    @property
    def natural_max(self) -> int:
        return self._maximum

    def describe(self, value: int) -> str:
        return f"0x{value:02x} ({value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntegerDomain):
            return NotImplemented
        return (self._minimum, self._maximum) == (other._minimum, other._maximum)

    def __hash__(self) -> int:
        return hash((IntegerDomain, self._minimum, self._maximum))


class CharacterDomain(EventDomain):
    """Single character events, ordered by code point."""

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str) and len(value) == 1

    def ordinal(self, value: str) -> int:
        return ord(value)

    def value_at(self, ordinal: int) -> str:
        return chr(ordinal)

    @property
    def natural_min(self) -> str:
        return chr(0)

    @property
    def natural_max(self) -> str:
        return chr(sys.maxunicode)

    def describe(self, value: str) -> str:
        return f"0x{ord(value):02x} ({value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharacterDomain):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(CharacterDomain)


class EnumDomain(EventDomain):
    """Members of one Enum class, ordered by definition."""

    def __init__(self, enum_cls: Type[Enum]) -> None:
        self._enum_cls = enum_cls
        self._members: List[Enum] = list(enum_cls)
        if not self._members:
            raise ConfigurationError(f"Enum {enum_cls.__name__} has no members")

    @property
    def enum_cls(self) -> Type[Enum]:
        return self._enum_cls

    def accepts(self, value: Any) -> bool:
        # Composite Flag values are instances of the class but not members.
        return isinstance(value, self._enum_cls) and value in self._members

    def ordinal(self, value: Enum) -> int:
        return self._members.index(value)

    def value_at(self, ordinal: int) -> Enum:
        return self._members[ordinal]

    @property
    def natural_min(self) -> Enum:
        return self._members[0]

    @property
    def natural_max(self) -> Enum:
        return self._members[-1]

    def describe(self, value: Enum) -> str:
        return f"{value.name} ({self.ordinal(value)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnumDomain):
            return NotImplemented
        return self._enum_cls is other._enum_cls

    def __hash__(self) -> int:
        return hash((EnumDomain, self._enum_cls))


@dataclass(frozen=True)
class EventBounds:
    """
    Inclusive [minimum, maximum] bound on event values, validated at creation.
    One instance is shared by every table of a machine definition.
    """

    domain: EventDomain
    minimum: Any
    maximum: Any

    @classmethod
    def create(
        cls, min_event: Any = None, max_event: Any = None, domain: Optional[EventDomain] = None
    ) -> Optional["EventBounds"]:
        """
        Build bounds from one or both endpoints.

        A missing endpoint defaults to the domain's natural extreme. When no
        domain is given it is derived from whichever endpoint is present.

        :return: None when neither endpoint is given.
        :raises UnsupportedEventTypeError: If the endpoints have no domain.
        :raises ConfigurationError: If min_event > max_event or an endpoint
            does not belong to the domain.
        """
        if min_event is None and max_event is None:
            return None

        sample = min_event if min_event is not None else max_event
        if domain is None:
            domain = EventDomain.for_value(sample)

        for endpoint in (min_event, max_event):
            if endpoint is not None and not domain.accepts(endpoint):
                raise ConfigurationError(
                    f"Bound {endpoint!r} does not belong to event domain {type(domain).__name__}",
                    {"value": endpoint},
                )

        minimum = domain.natural_min if min_event is None else min_event
        maximum = domain.natural_max if max_event is None else max_event
        if domain.ordinal(minimum) > domain.ordinal(maximum):
            raise ConfigurationError(
                "minEvent must be <= maxEvent",
                {"minimum": domain.describe(minimum), "maximum": domain.describe(maximum)},
            )
        return cls(domain=domain, minimum=minimum, maximum=maximum)

    def contains(self, value: Any) -> bool:
        """Check whether value lies inside the bound (inclusive)."""
        if not self.domain.accepts(value):
            return False
        position = self.domain.ordinal(value)
        return self.domain.ordinal(self.minimum) <= position <= self.domain.ordinal(self.maximum)

    def check(self, event: Any) -> None:
        """
        :raises EventRangeError: If event is outside the bound.
        """
        if not self.contains(event):
            raise EventRangeError(
                f"{self._expected()} Received: {self._render(event)}.",
                event,
                self.minimum,
                self.maximum,
            )

    def check_range(self, first: Any, last: Any) -> None:
        """
        :raises EventRangeError: If either end of the range is outside the bound.
        """
        if not (self.contains(first) and self.contains(last)):
            raise EventRangeError(
                f"{self._expected()} Received range: {self._render(first)} to {self._render(last)}.",
                (first, last),
                self.minimum,
                self.maximum,
            )

    def _expected(self) -> str:
        return f"Event must be {self.domain.describe(self.minimum)} to {self.domain.describe(self.maximum)}."

    def _render(self, value: Any) -> str:
        if self.domain.accepts(value):
            return self.domain.describe(value)
        return repr(value)
