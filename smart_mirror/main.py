"""
Main application for the gesture-controlled smart mirror.
"""
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import Optional

import cv2
import numpy as np
from dotenv import load_dotenv

from .capture import LatestFrameSource
from .config import load_config
from .controller_mock import MockAudioPlayer, MockLookGenerator
from .dispatcher import FrameDispatcher
from .fitting_room import FittingRoomStateMachine
from .generation import GeminiLookGenerator
from .landmarks import extended_finger_count
from .navigation import NavigationStateMachine
from .scheduler import LoopScheduler
from .tracker import HandsTracker
from .types import Event, GestureStatus, Phase, ShareRequested

logger = logging.getLogger(__name__)

EXPORT_DIR = Path("looks")


class SmartMirrorApp:
    """Main application class: camera loop, detector, dispatcher and HUD."""

    def __init__(self, config_path: Optional[str] = None, use_mock_generator: bool = False):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        logging.basicConfig(level=getattr(logging, self.config.logging.level.upper(), logging.INFO))

        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            model_complexity=self.config.mediapipe.model_complexity,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence
        )
        self.frame_source = LatestFrameSource(
            jpeg_quality=self.config.fitting_room.jpeg_quality,
            mirror=self.config.camera.mirror
        )

        # Choose generator type
        if use_mock_generator:
            self.generator = MockLookGenerator()
            logger.info("🧪 Using mock look generator")
        else:
            self.generator = GeminiLookGenerator(
                model=self.config.generation.model,
                api_key_env=self.config.generation.api_key_env,
                fetch_timeout_s=self.config.generation.fetch_timeout_s,
                response_modalities=self.config.generation.response_modalities
            )

        self.status_text = "Waiting for gesture..."

        # Camera opened in run() so the scheduler binds to the running loop
        self.cap: Optional[cv2.VideoCapture] = None
        self.scheduler = LoopScheduler()
        self.navigation = NavigationStateMachine(
            self.config, self.scheduler, audio=MockAudioPlayer(), listener=self.on_event
        )
        self.fitting_room = FittingRoomStateMachine(
            self.config, self.scheduler, self.generator, self.frame_source, listener=self.on_event
        )
        self.dispatcher = FrameDispatcher(self.navigation, self.fitting_room)

    def _open_camera(self) -> cv2.VideoCapture:
        cap = cv2.VideoCapture(self.config.camera.index)
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not cap.isOpened():
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")
        return cap

    def on_event(self, event: Event) -> None:
        """Listener for state machine events."""
        if isinstance(event, GestureStatus):
            self.status_text = event.message
        elif isinstance(event, ShareRequested):
            self._export_look(event)

    def _export_look(self, event: ShareRequested) -> None:
        EXPORT_DIR.mkdir(exist_ok=True)
        path = EXPORT_DIR / f"my-look-{event.item.id}-{event.look.scene.id}.jpg"
        path.write_bytes(event.look.image)
        logger.info(f"💾 Saved look to {path}")
        self.status_text = f"Saved {path.name}"

    def handle_key(self, key: int) -> bool:
        """Keyboard shortcuts for direct actions. Returns False to quit."""
        if key == ord('q'):
            return False
        if ord('1') <= key < ord('1') + len(self.navigation.widgets):
            self.navigation.select_widget(key - ord('1'))
        elif key == ord('b') and self.navigation.is_fitting_room_active:
            self.fitting_room.reset()
        elif key == ord('c') and self.navigation.is_fitting_room_active:
            self.fitting_room.start_capture()
        elif key == ord('s'):
            self.fitting_room.share_look()
        return True

    def draw_hud(self, frame: np.ndarray, landmarks) -> np.ndarray:
        if self.config.camera.mirror:
            frame = cv2.flip(frame, 1)
        if not self.navigation.camera_preview_visible:
            frame = np.zeros_like(frame)
        elif landmarks and self.config.display.show_landmarks:
            if self.config.camera.mirror:
                landmarks = [(1.0 - p[0],) + tuple(p[1:]) for p in landmarks]
            frame = self.tracker.draw_landmarks(frame, landmarks)

        widget_text = f"Widget: {self.navigation.active_widget} ({self.navigation.active_index + 1}/{len(self.navigation.widgets)})"
        hand_text = "No hand detected"
        if landmarks:
            hand_text = f"Hand: {extended_finger_count(landmarks)} fingers"

        room_text = ""
        if self.navigation.is_fitting_room_active:
            room = self.fitting_room
            room_text = f"{room.phase.value} | {room.current_item.name}"
            if room.countdown is not None:
                room_text += f" | {room.countdown}"
            if room.phase is Phase.GENERATING:
                done = sum(1 for look in room.looks if not look.is_loading)
                room_text += f" | {done}/{len(room.looks)} looks"
            elif room.phase is Phase.RESULTS:
                room_text += f" | look {room.selected_look_index + 1} | thumbs-up {room.thumbs_up_progress:.0%}"

        cv2.putText(frame, widget_text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
        cv2.putText(frame, hand_text, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
        cv2.putText(frame, room_text, (10, 90), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 0), 2)
        cv2.putText(frame, self.status_text, (10, frame.shape[0] - 50), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 200, 255), 2)
        cv2.putText(frame, "1-6 = widget, b = back, c = capture, s = save, q = quit", (10, frame.shape[0] - 20),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
        return frame

    def show_selected_look(self) -> None:
        look = self.fitting_room.selected_look
        if self.fitting_room.phase is not Phase.RESULTS or look is None or look.image is None:
            return
        image = cv2.imdecode(np.frombuffer(look.image, dtype=np.uint8), cv2.IMREAD_COLOR)
        if image is not None:
            cv2.imshow(f"{self.config.display.window_name} - Look", image)

    async def run(self):
        """Run the main application loop."""
        self.cap = self._open_camera()
        logger.info(f"Starting {self.config.display.window_name}")
        logger.info("🎯 Gestures: swipe = widget, pinch = camera preview, fist = music / capture, "
                    "1-4 fingers = pick look, thumbs-up = back")

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    logger.error("Failed to read frame from camera")
                    break

                self.frame_source.update(frame)
                landmarks = self.tracker.process(frame)
                self.dispatcher.handle_frame(landmarks, time.time())

                cv2.imshow(self.config.display.window_name, self.draw_hud(frame, landmarks))
                self.show_selected_look()

                if not self.handle_key(cv2.waitKey(1) & 0xFF):
                    break

                # Let countdown timers and generation tasks run
                await asyncio.sleep(0)
        finally:
            self.close()

    def close(self) -> None:
        """Cleanup resources."""
        if self.cap is not None and self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
        cv2.destroyAllWindows()


async def main():
    """Entry point for the application."""
    load_dotenv()

    use_mock = "--mock" in sys.argv
    config_path = None
    if "--config" in sys.argv:
        config_path = sys.argv[sys.argv.index("--config") + 1]

    try:
        app = SmartMirrorApp(config_path=config_path, use_mock_generator=use_mock)
        await app.run()
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
