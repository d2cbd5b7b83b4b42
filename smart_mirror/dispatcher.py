"""
Routes each detector frame to exactly one gesture interpreter.
"""
import asyncio
import logging
import time
from typing import List, Optional, Union

from .fitting_room import FittingRoomStateMachine
from .landmarks import has_full_landmarks
from .navigation import NavigationStateMachine
from .types import Event, HandLandmarks

logger = logging.getLogger(__name__)

Interpreter = Union[NavigationStateMachine, FittingRoomStateMachine]


class FrameDispatcher:
    """
    Holds the single "hot" interpreter.

    The fitting room receives frames while its widget is active, navigation
    receives them otherwise. When the hot interpreter changes, the outgoing
    one drops its in-flight tracking so nothing leaks across the switch.
    """

    def __init__(self, navigation: NavigationStateMachine, fitting_room: FittingRoomStateMachine):
        self.navigation = navigation
        self.fitting_room = fitting_room
        self._hot: Interpreter = self._select()
        self.skipped_frames = 0

    @property
    def hot(self) -> Interpreter:
        return self._hot

    def _select(self) -> Interpreter:
        if self.navigation.is_fitting_room_active:
            return self.fitting_room
        return self.navigation

    def handle_frame(self, landmarks: Optional[HandLandmarks], t_now: Optional[float] = None) -> List[Event]:
        """
        Interpret one detector callback.

        Args:
            landmarks: 21 hand landmarks, or None if no hand was detected
            t_now: Current timestamp in seconds (defaults to time.time())

        Returns:
            Events produced by the interpreter that handled the frame
        """
        if t_now is None:
            t_now = time.time()

        if landmarks is not None and not has_full_landmarks(landmarks):
            self.skipped_frames += 1
            logger.warning(f"Skipping malformed landmark set ({len(landmarks)} points)")
            return []

        interpreter = self._select()
        if interpreter is not self._hot:
            logger.info(f"Routing frames to {type(interpreter).__name__}")
            self._hot.release()
            self._hot = interpreter

        return interpreter.handle_frame(landmarks, t_now)

    def submit_threadsafe(self, loop: asyncio.AbstractEventLoop, landmarks: Optional[HandLandmarks],
                          t_now: Optional[float] = None) -> None:
        """Hand a frame from a detector thread to the state-owning loop."""
        if t_now is None:
            t_now = time.time()
        loop.call_soon_threadsafe(self.handle_frame, landmarks, t_now)
