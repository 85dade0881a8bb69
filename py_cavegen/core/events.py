"""In-memory level event bus with explicit flush semantics."""

from typing import Any, Callable, Dict, List, Optional, Tuple

import structlog

logger = structlog.get_logger()

LEVEL_CLEARED = "level_cleared"
LEVEL_GENERATED = "level_generated"

Handler = Callable[[str, Dict[str, Any]], None]

# (event name, payload, handlers still owed the event; None means all subscribers)
_QueuedEvent = Tuple[str, Dict[str, Any], Optional[List[Handler]]]


class LevelEventBus:
    """
    Observer list keyed by event name.

    ``publish`` only queues; handlers run on ``flush``. Events published by a
    handler during a flush are queued for the next flush. If a handler raises,
    the event's remaining handlers and the rest of the flushed events go back
    to the front of the queue before the exception propagates.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}
        self._queue: List[_QueuedEvent] = []

    def subscribe(self, event_name: str, handler: Handler) -> None:
        self._subscribers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event_name: str, **data: Any) -> None:
        self._queue.append((event_name, data, None))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> int:
        """
        Deliver queued events.

        Returns:
            Number of events delivered

        Raises:
            Exception: Whatever a handler raised; undelivered events stay queued
        """
        snapshot = self._queue
        self._queue = []
        for position, (event_name, data, owed) in enumerate(snapshot):
            handlers = list(self._subscribers.get(event_name, [])) if owed is None else owed
            logger.debug("Delivering event", event_name=event_name, handlers=len(handlers))
            for index, handler in enumerate(handlers):
                try:
                    handler(event_name, data)
                except Exception:
                    undelivered: List[_QueuedEvent] = []
                    if index + 1 < len(handlers):
                        undelivered.append((event_name, data, handlers[index + 1:]))
                    undelivered.extend(snapshot[position + 1:])
                    self._queue[:0] = undelivered
                    logger.error(
                        "Event handler failed",
                        event_name=event_name,
                        requeued=len(undelivered),
                    )
                    raise
        return len(snapshot)

    def clear(self) -> None:
        self._queue.clear()
