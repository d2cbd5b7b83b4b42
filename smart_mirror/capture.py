"""
Still capture from the live camera feed.
"""
import logging
from typing import Optional

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class LatestFrameSource:
    """
    Holds the most recent raw camera frame and encodes it on demand.

    The stored frame is the un-mirrored camera image; `capture()` flips it
    horizontally so the photo matches the user's self-view.
    """

    def __init__(self, jpeg_quality: int = 90, mirror: bool = True):
        self.jpeg_quality = jpeg_quality
        self.mirror = mirror
        self._frame: Optional[np.ndarray] = None

    def update(self, frame_bgr: np.ndarray) -> None:
        self._frame = frame_bgr

    def capture(self) -> Optional[bytes]:
        """
        Encode the latest frame as JPEG.

        Returns:
            JPEG bytes, or None if no frame has arrived or encoding failed
        """
        if self._frame is None:
            logger.warning("No camera frame available for capture")
            return None

        frame = cv2.flip(self._frame, 1) if self.mirror else self._frame
        ok, buffer = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), self.jpeg_quality])
        if not ok:
            logger.warning("JPEG encoding failed")
            return None
        return buffer.tobytes()
