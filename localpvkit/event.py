"""Event wrappers, predicates and a filtering list builder.

Events are Kubernetes API objects held as dictionaries in API shape
(``involvedObject``, ``reason``, ``message``, ``type``, ``lastTimestamp``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Optional

Predicate = Callable[["Event"], bool]


@dataclass
class Event:
    """A single API Event object."""

    obj: dict

    @property
    def kind(self) -> str:
        """Kind of the object the event is about."""
        return (self.obj.get("involvedObject") or {}).get("kind", "")

    @property
    def _last_timestamp(self) -> Any:
        return self.obj.get("lastTimestamp")


def _timestamp_key(event: Event) -> tuple:
    stamp = event._last_timestamp
    return (stamp is not None, stamp)


@dataclass
class EventList:
    """An ordered collection of events."""

    items: list = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.items)

    def latest_last_sort(self) -> "EventList":
        """Sort in place, least recent first; ties keep their order."""
        self.items.sort(key=_timestamp_key)
        return self

    def latest_first_sort(self) -> "EventList":
        """Sort in place, most recent first; ties keep their order."""
        self.items.sort(key=_timestamp_key, reverse=True)
        return self


def is_bdc_event() -> Predicate:
    return lambda event: event.kind == "BlockDeviceClaim"


def is_bd_event() -> Predicate:
    return lambda event: event.kind == "BlockDevice"


def is_pod_event() -> Predicate:
    return lambda event: event.kind == "Pod"


def has_reason(reason: str) -> Predicate:
    return lambda event: event.obj.get("reason", "") == reason


def has_string_in_message(substr: str) -> Predicate:
    return lambda event: substr in event.obj.get("message", "")


def is_type(type_val: str) -> Predicate:
    return lambda event: event.obj.get("type", "") == type_val


class EventListBuilder:
    """Builds an EventList, optionally filtered by predicates."""

    def __init__(self, items: Optional[Iterable[Event]] = None) -> None:
        self._list = EventList(list(items or []))
        self._filters: list = []

    @classmethod
    def from_api_list(cls, events: Optional[dict]) -> "EventListBuilder":
        """Wrap the items of an API event list; ``None`` gives an empty list."""
        if events is None:
            return cls()
        return cls(Event(item) for item in events.get("items") or [])

    def with_filter(self, *args: Predicate) -> "EventListBuilder":
        self._filters.extend(args)
        return self

    def list(self) -> EventList:
        """Return the events that satisfy every filter."""
        if not self._filters:
            return self._list
        return EventList(
            [event for event in self._list if all(pred(event) for pred in self._filters)]
        )