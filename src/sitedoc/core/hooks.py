"""Document lifecycle hooks"""

import logging
import threading
from collections import defaultdict
from typing import Callable


logger = logging.getLogger(__name__)

EVENTS = ("post_init", "post_write")


class Hooks:
    """Callbacks keyed by owner ("documents" or a collection label) and event."""

    def __init__(self):
        self._registry: dict[tuple[str, str], list[Callable]] = defaultdict(list)
        self._lock = threading.Lock()

    def register(self, owner: str, event: str, fn: Callable) -> Callable:
        if event not in EVENTS:
            raise ValueError(f"Unknown hook event {event!r}; expected one of {', '.join(EVENTS)}")
        with self._lock:
            self._registry[(owner, event)].append(fn)
        return fn

    def trigger(self, owner: str, event: str, doc, *args) -> None:
        """Call every callback for (owner, event); return values are ignored."""
        for fn in list(self._registry.get((owner, event), ())):
            logger.debug("Hook %s:%s -> %s", owner, event, getattr(fn, "__name__", fn))
            fn(doc, *args)
