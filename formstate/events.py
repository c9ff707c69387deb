"""Event system for the formstate engine.

Every mutation of a form session emits a typed FormEvent. The engine keeps
the events as an append-only log and dispatches each one to the listeners
registered on its EventEmitter, which is how a rendering layer learns that
it should re-render.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from dateutil.parser import isoparse

from formstate.types import EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormEvent:
    """A single event in a form session.

    Attributes:
        event_id: Unique event identifier (e.g., "evt_01ab...")
        type: Event type from EventType enum
        form_id: ID of the form session this event relates to
        ts: UTC timestamp when the event occurred
        payload: Optional event-specific data (e.g., changed field, errors)

    Examples:
        >>> from datetime import datetime, timezone
        >>> event = FormEvent(
        ...     event_id="evt_001",
        ...     type=EventType.FIELD_UPDATED,
        ...     form_id="modern_form",
        ...     ts=datetime.now(timezone.utc),
        ...     payload={"field": "fullName"},
        ... )
        >>> event.type.value
        'field.updated'
    """
    event_id: str
    type: EventType
    form_id: str
    ts: datetime
    payload: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        # Accept the wire value of the event type
        if isinstance(self.type, str) and not isinstance(self.type, EventType):
            object.__setattr__(self, "type", EventType(self.type))

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization.

        Returns:
            Dictionary with camelCase keys and an ISO 8601 timestamp.
        """
        result: Dict[str, Any] = {
            "eventId": self.event_id,
            "type": self.type.value,
            "formId": self.form_id,
            "ts": self.ts.isoformat(),
        }
        if self.payload is not None:
            result["payload"] = self.payload
        return result

    def to_jsonl(self) -> str:
        """Convert event to a single line of JSON."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormEvent":
        """Create FormEvent from dictionary.

        Args:
            data: Dictionary with event fields (camelCase keys)
        """
        return cls(
            event_id=data["eventId"],
            type=EventType(data["type"]),
            form_id=data["formId"],
            ts=isoparse(data["ts"]),
            payload=data.get("payload"),
        )


EventListener = Callable[[FormEvent], None]
"""Type alias for event listener callbacks.

Listeners are called synchronously when events are emitted.
"""


class EventEmitter:
    """Dispatches form events to subscribed listeners.

    Features:
    - Type-specific subscriptions (listen to specific event types)
    - Wildcard subscriptions (listen to all events)
    - Synchronous dispatch (listeners called in registration order)
    - Error isolation (a failing listener is logged and skipped)

    Examples:
        >>> emitter = EventEmitter()
        >>> seen = []
        >>> emitter.on_any(seen.append)
        >>> emitter.listener_count()
        1
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[EventListener]] = {}
        self._any_listeners: List[EventListener] = []

    def on(self, event_type: EventType, listener: EventListener) -> None:
        """Subscribe to a specific event type."""
        self._listeners.setdefault(event_type, []).append(listener)

    def on_any(self, listener: EventListener) -> None:
        """Subscribe to all event types."""
        self._any_listeners.append(listener)

    def off(self, event_type: EventType, listener: EventListener) -> None:
        """Unsubscribe from a specific event type. Unknown listeners are ignored."""
        listeners = self._listeners.get(event_type)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def off_any(self, listener: EventListener) -> None:
        """Unsubscribe from the wildcard subscription. Unknown listeners are ignored."""
        if listener in self._any_listeners:
            self._any_listeners.remove(listener)

    def emit(self, event: FormEvent) -> None:
        """Dispatch an event to all registered listeners.

        Type-specific listeners run first, then wildcard listeners. An
        exception raised by a listener is logged and does not reach the
        caller or the remaining listeners.
        """
        listeners = list(self._listeners.get(event.type, [])) + list(self._any_listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Listener %r failed while handling %s", listener, event.type.value
                )

    def clear(self) -> None:
        """Remove all event listeners."""
        self._listeners.clear()
        self._any_listeners.clear()

    def listener_count(self, event_type: Optional[EventType] = None) -> int:
        """Count registered listeners.

        Args:
            event_type: If provided, count listeners for this type only.
                        If None, count all listeners (including wildcard).
        """
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return len(self._any_listeners) + sum(len(ls) for ls in self._listeners.values())


__all__ = [
    "FormEvent",
    "EventListener",
    "EventEmitter",
]
