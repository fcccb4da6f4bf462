"""Lifecycle event channel for identity events."""

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field

IDENTITY_CREATED = "identity.created"

logger = logging.getLogger(__name__)

EventHandler = Callable[[object], None]


@dataclass
class EventChannel:
    """Dispatch named lifecycle events to registered handlers.

    Handlers run in subscription order. Exceptions propagate to the
    publisher so that the delivering transport can report the failure and
    the provider can redeliver.
    """

    _handlers: dict[str, list[EventHandler]] = field(
        default_factory=lambda: defaultdict(list)
    )

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Register a handler for an event name."""
        if handler not in self._handlers[event_name]:
            self._handlers[event_name].append(handler)

    def publish(self, event_name: str, payload: object) -> int:
        """Deliver a payload to every handler and return how many ran."""
        handlers = list(self._handlers.get(event_name, []))
        if not handlers:
            logger.warning("No handlers registered for %s", event_name)
        for handler in handlers:
            handler(payload)
        return len(handlers)
