"""
Event channel between the grid core and the presentation layer.

The core never prints. Anything the user may need to see (a failed render,
a rejected sort, a discarded stale response) is emitted here, and the
presentation layer subscribes to whatever it wants to surface.
"""

import fnmatch
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ._logging import logger

RENDER_COMPLETE = "render:complete"
RENDER_ERROR = "render:error"
FETCH_STALE = "fetch:stale"
SORT_REJECTED = "sort:rejected"


@dataclass(frozen=True)
class GridEvent:
    """A single event: a namespaced type plus its payload."""

    type: str
    payload: dict[str, Any] = field(default_factory=dict)


EventHandler = Callable[[GridEvent], None]


class EventChannel:
    """
    Registry of event handlers keyed by event type.

    Event types follow a ``namespace:name`` pattern. Subscriptions may use
    ``*`` wildcards (``"render:*"`` or ``"*"``).
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> bool:
        """Removes a handler. Returns False if it was not subscribed."""
        handlers = self._handlers.get(event_type, [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def emit(self, event_type: str, **payload: Any) -> GridEvent:
        """
        Delivers an event to every matching handler, in subscription order.

        A handler that raises is logged and skipped; the remaining handlers
        still receive the event.
        """
        event = GridEvent(type=event_type, payload=payload)
        for pattern, handlers in list(self._handlers.items()):
            if pattern != event_type and not fnmatch.fnmatchcase(event_type, pattern):
                continue
            for handler in list(handlers):
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "Event handler failed",
                        extra={"event_type": event_type, "handler": repr(handler)},
                    )
        return event
