"""
Event emission shared by the gesture interpreters.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from .types import Event, EventListener

logger = logging.getLogger(__name__)


class EventEmitter:
    """
    Forwards every event to an optional listener and, while a frame is being
    interpreted, also collects it so `handle_frame` can return the list.

    Events raised from timers or generation completions only reach the listener.
    """

    def __init__(self, listener: Optional[EventListener] = None):
        self.listener = listener
        self._collected: Optional[List[Event]] = None

    def _emit(self, event: Event) -> None:
        logger.debug(f"event {event}")
        if self._collected is not None:
            self._collected.append(event)
        if self.listener is not None:
            self.listener(event)

    @contextmanager
    def _collecting(self) -> Iterator[List[Event]]:
        self._collected = []
        try:
            yield self._collected
        finally:
            self._collected = None
