"""
Temporal gesture primitives that turn per-frame signals into discrete events.

Features:
- CooldownGate: rate-limits a channel, cleared by a scheduled callback
- HoldAccumulator: frame-count hold with optional linear decay
- StabilityBuffer: N consecutive identical readings
- HandOpenGate: one-shot "show an open hand first" latch
- SwipeDetector: windowed horizontal travel of the tracked hand point
"""
import logging
from collections import deque
from typing import Callable, Deque, Optional

from .types import SchedulerProto, SwipeDirection, TimerHandle

logger = logging.getLogger(__name__)


class CooldownGate:
    """
    Ignores new triggers of one channel for a fixed wall-clock window.

    The gate is cleared by a deferred callback, never by comparing timestamps
    on each frame.
    """

    def __init__(self, scheduler: SchedulerProto, duration_ms: int, name: str = "",
                 on_clear: Optional[Callable[[], None]] = None):
        self._scheduler = scheduler
        self.duration_ms = duration_ms
        self.name = name
        self._on_clear = on_clear
        self._active = False
        self._handle: Optional[TimerHandle] = None

    @property
    def active(self) -> bool:
        return self._active

    def trigger(self) -> None:
        """Open a cooldown window starting now."""
        if self._handle is not None:
            self._handle.cancel()
        self._active = True
        self._handle = self._scheduler.call_later(self.duration_ms / 1000.0, self._clear)

    def try_trigger(self) -> bool:
        """Open the window unless one is already open. Returns True if it opened."""
        if self._active:
            return False
        self.trigger()
        return True

    def _clear(self) -> None:
        self._active = False
        self._handle = None
        logger.debug(f"Cooldown '{self.name}' cleared")
        if self._on_clear is not None:
            self._on_clear()


class HoldAccumulator:
    """
    Counts frames while a condition holds and fires once at the threshold.

    With decay the count drops by one per non-holding frame (floor 0);
    without decay it drops straight to zero. After firing the count restarts
    at zero, so one sustained hold fires exactly once per threshold reached.
    """

    def __init__(self, threshold: int, decay: bool = False):
        if threshold < 1:
            raise ValueError("threshold must be >= 1")
        self.threshold = threshold
        self.decay = decay
        self.value = 0

    @property
    def progress(self) -> float:
        return self.value / self.threshold

    def update(self, holding: bool) -> bool:
        """Feed one frame. Returns True on the frame the hold completes."""
        if holding:
            self.value = min(self.value + 1, self.threshold)
            if self.value >= self.threshold:
                self.value = 0
                return True
            return False

        if self.decay:
            self.value = max(self.value - 1, 0)
        else:
            self.value = 0
        return False

    def clear(self) -> None:
        self.value = 0


class StabilityBuffer:
    """Accepts a reading only after it repeats for `capacity` consecutive frames."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._readings: Deque[int] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._readings)

    @property
    def stable_count(self) -> int:
        """How many of the most recent readings equal the latest one."""
        count = 0
        if not self._readings:
            return count
        latest = self._readings[-1]
        for reading in reversed(self._readings):
            if reading != latest:
                break
            count += 1
        return count

    def push(self, reading: int) -> Optional[int]:
        """Add a reading; return it if the buffer is now full of it, else None."""
        self._readings.append(reading)
        if self.stable_count >= self.capacity:
            return reading
        return None

    def clear(self) -> None:
        self._readings.clear()


class HandOpenGate:
    """
    One-shot latch: once armed, stays closed until a frame shows at least
    `min_fingers` extended fingers, then stays open until re-armed.
    """

    def __init__(self, min_fingers: int = 3):
        self.min_fingers = min_fingers
        self.armed = False

    def arm(self) -> None:
        self.armed = True

    def update(self, finger_count: int) -> bool:
        """Returns True if gestures may pass this frame."""
        if not self.armed:
            return True
        if finger_count >= self.min_fingers:
            self.armed = False
            logger.debug("Open hand seen, gate released")
            return True
        return False


class SwipeDetector:
    """
    Detects a horizontal swipe of the tracked hand point.

    Tracking starts on the first sample. A swipe fires when |dx| exceeds the
    threshold strictly within the window; a window that expires without a
    crossing restarts from the current position.
    """

    def __init__(self, threshold: float = 0.15, window_ms: int = 500):
        self.threshold = threshold
        self.window_ms = window_ms
        self.start_x = 0.0
        self.start_time = 0.0
        self.is_tracking = False

    def update(self, x: float, t_now: float) -> Optional[SwipeDirection]:
        """
        Feed one sample of the reference x coordinate.

        Args:
            x: Normalized x of the tracked landmark
            t_now: Current timestamp in seconds

        Returns:
            "left" or "right" on the frame a swipe completes, None otherwise
        """
        if not self.is_tracking:
            self._restart(x, t_now)
            return None

        delta_x = x - self.start_x
        elapsed_ms = (t_now - self.start_time) * 1000.0

        if elapsed_ms >= self.window_ms:
            # Too slow, the moving hand becomes the new baseline
            self._restart(x, t_now)
            return None

        if delta_x < -self.threshold:
            self.reset()
            return "left"
        if delta_x > self.threshold:
            self.reset()
            return "right"
        return None

    def reset(self) -> None:
        self.is_tracking = False

    def _restart(self, x: float, t_now: float) -> None:
        self.start_x = x
        self.start_time = t_now
        self.is_tracking = True
