"""
Top-level widget navigation driven by swipe, pinch and fist gestures.
"""
import logging
from typing import List, Optional

from .config import Cfg
from .events import EventEmitter
from .gestures import CooldownGate, SwipeDetector
from .landmarks import MIDDLE_MCP, is_fist, pinch_distance
from .types import (
    AudioProto, CameraPreviewToggled, Event, EventListener, GestureStatus,
    HandLandmarks, MusicToggled, SchedulerProto, WidgetChanged,
)

logger = logging.getLogger(__name__)


class NavigationStateMachine(EventEmitter):
    """
    Owns which widget is active plus the camera-preview and music flags.

    Gestures (only interpreted while the fitting room is not active):
    - swipe left / right: next / previous widget
    - pinch: toggle camera preview
    - fist: toggle music
    All three share one cooldown window. Direct selection bypasses it.
    """

    def __init__(self, cfg: Cfg, scheduler: SchedulerProto, audio: Optional[AudioProto] = None,
                 listener: Optional[EventListener] = None):
        super().__init__(listener)
        self.widgets: List[str] = list(cfg.navigation.widgets)
        self.fitting_room_index = cfg.navigation.fitting_room_index
        self.active_index = 0
        self.camera_preview_visible = False
        self.music_playing = False

        self.pinch_threshold = cfg.gestures.pinch.threshold
        self._audio = audio
        self._cooldown = CooldownGate(
            scheduler, cfg.navigation.cooldown_ms, name="navigation", on_clear=self._on_cooldown_clear
        )
        self._swipe = SwipeDetector(cfg.gestures.swipe.threshold, cfg.gestures.swipe.window_ms)

    @property
    def active_widget(self) -> str:
        return self.widgets[self.active_index]

    @property
    def is_fitting_room_active(self) -> bool:
        return self.active_index == self.fitting_room_index

    @property
    def cooldown_active(self) -> bool:
        return self._cooldown.active

    @property
    def swipe_tracking(self) -> bool:
        return self._swipe.is_tracking

    # -- frame interpretation ------------------------------------------------

    def handle_frame(self, landmarks: Optional[HandLandmarks], t_now: float) -> List[Event]:
        """
        Interpret one detector frame.

        Args:
            landmarks: 21 hand landmarks, or None if no hand was detected
            t_now: Current timestamp in seconds

        Returns:
            Events produced by this frame
        """
        with self._collecting() as events:
            self._interpret(landmarks, t_now)
        return events

    def _interpret(self, landmarks: Optional[HandLandmarks], t_now: float) -> None:
        if landmarks is None:
            self._swipe.reset()
            return

        # Priority: pinch > fist > swipe
        if pinch_distance(landmarks) < self.pinch_threshold:
            self.toggle_camera_preview()
            self._swipe.reset()
        elif is_fist(landmarks):
            self.toggle_music()
            self._swipe.reset()
        else:
            direction = self._swipe.update(landmarks[MIDDLE_MCP][0], t_now)
            if direction == "left":
                self.next_widget()
            elif direction == "right":
                self.prev_widget()

    def release(self) -> None:
        """Drop in-flight tracking when frames stop being routed here."""
        self._swipe.reset()

    # -- cooldown-gated actions ----------------------------------------------

    def next_widget(self) -> bool:
        if not self._cooldown.try_trigger():
            return False
        self._set_active((self.active_index + 1) % len(self.widgets))
        self._status("Swipe left ⬅️")
        return True

    def prev_widget(self) -> bool:
        if not self._cooldown.try_trigger():
            return False
        self._set_active((self.active_index - 1 + len(self.widgets)) % len(self.widgets))
        self._status("Swipe right ➡️")
        return True

    def toggle_camera_preview(self) -> bool:
        if not self._cooldown.try_trigger():
            return False
        self.camera_preview_visible = not self.camera_preview_visible
        logger.info(f"🤏 Camera preview {'on' if self.camera_preview_visible else 'off'}")
        self._emit(CameraPreviewToggled(visible=self.camera_preview_visible))
        self._status("Pinch! Toggling camera preview 🤏")
        return True

    def toggle_music(self) -> bool:
        if not self._cooldown.try_trigger():
            return False
        self._set_music(not self.music_playing)
        self._status("Fist! Play/pause music ✊")
        return True

    # -- direct actions (buttons, voice) -------------------------------------

    def select_widget(self, index: int) -> None:
        """Jump straight to a widget, ignoring the gesture cooldown."""
        if not 0 <= index < len(self.widgets):
            raise ValueError(f"Widget index {index} out of range 0..{len(self.widgets) - 1}")
        self._set_active(index)

    def select_widget_by_id(self, widget_id: str) -> None:
        self.select_widget(self.widgets.index(widget_id))

    def set_music_playing(self, playing: bool) -> None:
        if playing != self.music_playing:
            self._set_music(playing)

    # -- internals -----------------------------------------------------------

    def _set_active(self, index: int) -> None:
        if index == self.active_index:
            return
        self.active_index = index
        logger.info(f"Widget -> {self.active_widget} ({index})")
        self._emit(WidgetChanged(index=index, widget_id=self.active_widget))

    def _set_music(self, playing: bool) -> None:
        self.music_playing = playing
        if self._audio is not None:
            if playing:
                self._audio.play()
            else:
                self._audio.pause()
        self._emit(MusicToggled(playing=playing))

    def _status(self, message: str) -> None:
        self._emit(GestureStatus(message=message))

    def _on_cooldown_clear(self) -> None:
        self._status("Ready for gesture")
