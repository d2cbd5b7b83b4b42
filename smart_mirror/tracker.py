"""
Hand landmark detection using MediaPipe Hands.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import Optional, List, Tuple

from .landmarks import FINGER_TIPS, THUMB_TIP
from .types import HandLandmarks

TIP_INDICES = (THUMB_TIP,) + FINGER_TIPS


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, model_complexity: int = 1,
                 min_detection_conf: float = 0.5, min_tracking_conf: float = 0.5):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            model_complexity: MediaPipe model complexity (0 or 1)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        if not hasattr(mp, "solutions"):
            raise RuntimeError(
                "This mediapipe build does not provide `mp.solutions`; "
                "install a mediapipe release that still ships the Hands solution."
            )
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> Optional[List[Tuple[float, float, float]]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            List of 21 (x, y, z) coordinates, x/y in [0..1] range, or None if no hand detected
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        results = self.hands.process(frame_rgb)

        if results.multi_hand_landmarks:
            # Only the first detected hand is tracked
            hand_landmarks = results.multi_hand_landmarks[0]
            return [(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]

        return None

    def draw_landmarks(self, frame: np.ndarray, landmarks: HandLandmarks) -> np.ndarray:
        """Draw the hand skeleton, with fingertips highlighted."""
        height, width = frame.shape[:2]
        pixels = [(int(point[0] * width), int(point[1] * height)) for point in landmarks]

        for start, end in self.mp_hands.HAND_CONNECTIONS:
            if start < len(pixels) and end < len(pixels):
                cv2.line(frame, pixels[start], pixels[end], (200, 200, 200), 1)

        for i, (px, py) in enumerate(pixels):
            color = (0, 200, 255) if i in TIP_INDICES else (0, 255, 0)
            cv2.circle(frame, (px, py), 4 if i in TIP_INDICES else 2, color, -1)

        return frame

    def close(self) -> None:
        self.hands.close()
