# opmode_host/core/event_bus.py

import logging
from collections import defaultdict
from typing import Callable, Dict, List, Any

log = logging.getLogger(__name__)


class EventBus:
    """
    Simple synchronous event bus.
    Handlers run inside the control loop that publishes; keep them fast.
    """

    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = defaultdict(list)

    def subscribe(self, topic: str, handler: Callable[[Any], None]) -> None:
        """Register a handler for a topic."""
        self._subs[topic].append(handler)

    def unsubscribe(self, topic: str, handler: Callable[[Any], None]) -> None:
        handlers = self._subs.get(topic)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def publish(self, topic: str, data: Any) -> None:
        """Call all handlers for a topic."""
        for h in list(self._subs.get(topic, [])):
            try:
                h(data)
            except Exception:  # a broken display must not stop the robot loop
                log.exception("handler error on '%s'", topic)
