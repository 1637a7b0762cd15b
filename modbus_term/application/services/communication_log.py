"""Bounded log of bus traffic and core notices."""

import logging
from collections import deque
from typing import Callable, Deque, Iterator, List, Optional

from ...const import DEFAULT_LOG_CAPACITY
from ...domain.value_objects import CommunicationEvent, EventType

_LOGGER = logging.getLogger(__name__)


class CommunicationLog:
    """Most recent communication events, oldest dropped first.

    Example:
        >>> log = CommunicationLog(capacity=2)
        >>> log.sent("Read 1 registers", bytes([0x01, 0x03]))
        >>> log.info("Connected")
        >>> log.error("Timeout")
        >>> [event.message for event in log]
        ['Connected', 'Timeout']
    """

    def __init__(self, capacity: int = DEFAULT_LOG_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Invalid log capacity: {capacity}")
        self._events: Deque[CommunicationEvent] = deque(maxlen=capacity)
        self._listeners: List[Callable[[CommunicationEvent], None]] = []

    @property
    def capacity(self) -> int:
        return self._events.maxlen

    @property
    def events(self) -> List[CommunicationEvent]:
        return list(self._events)

    def add(self, event: CommunicationEvent) -> CommunicationEvent:
        """Append an event and notify listeners."""
        self._events.append(event)
        _LOGGER.debug("%s", event)
        for listener in list(self._listeners):
            listener(event)
        return event

    def sent(self, message: str, raw_data: Optional[bytes] = None) -> CommunicationEvent:
        return self.add(CommunicationEvent.sent(raw_data, message))

    def received(self, message: str, raw_data: Optional[bytes] = None) -> CommunicationEvent:
        return self.add(CommunicationEvent.received(raw_data, message))

    def info(self, message: str) -> CommunicationEvent:
        return self.add(CommunicationEvent.info(message))

    def warning(self, message: str) -> CommunicationEvent:
        return self.add(CommunicationEvent.warning(message))

    def error(self, message: str) -> CommunicationEvent:
        return self.add(CommunicationEvent.error(message))

    def of_type(self, event_type: EventType) -> List[CommunicationEvent]:
        """Events of one type, oldest first."""
        return [event for event in self._events if event.type == event_type]

    def last(self) -> Optional[CommunicationEvent]:
        return self._events[-1] if self._events else None

    def add_listener(self, listener: Callable[[CommunicationEvent], None]) -> None:
        self._listeners.append(listener)

    def clear(self) -> None:
        self._events.clear()

    def __iter__(self) -> Iterator[CommunicationEvent]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)
