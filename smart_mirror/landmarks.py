"""
Hand landmark geometry: finger extension, fist, thumbs-up and pinch.
"""
import math
from typing import List, Tuple

from .types import HandLandmarks, Point


NUM_LANDMARKS = 21

WRIST = 0
THUMB_MCP = 2
THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_MCP = 9  # tracked reference point for swipes

# Index, middle, ring, pinky
FINGER_TIPS = (8, 12, 16, 20)
FINGER_PIPS = (6, 10, 14, 18)

THUMBS_UP_MARGIN = 0.04


def has_full_landmarks(landmarks: HandLandmarks) -> bool:
    """True if *landmarks* holds 21 points that each carry at least x and y."""
    if len(landmarks) < NUM_LANDMARKS:
        return False
    return all(point is not None and len(point) >= 2 for point in landmarks[:NUM_LANDMARKS])


def _distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def _finger_distances(landmarks: HandLandmarks) -> List[Tuple[float, float]]:
    """(tip-to-wrist, pip-to-wrist) distance for each non-thumb finger."""
    wrist = landmarks[WRIST]
    return [
        (_distance(landmarks[tip], wrist), _distance(landmarks[pip], wrist))
        for tip, pip in zip(FINGER_TIPS, FINGER_PIPS)
    ]


def extended_finger_count(landmarks: HandLandmarks) -> int:
    """
    Count the extended non-thumb fingers.

    A finger is extended when its tip lies farther from the wrist than its PIP
    joint, which works regardless of hand orientation.

    Args:
        landmarks: List of 21 hand landmarks

    Returns:
        Number of extended fingers (0-4)
    """
    return sum(1 for d_tip, d_pip in _finger_distances(landmarks) if d_tip > d_pip)


def is_fist(landmarks: HandLandmarks) -> bool:
    """
    Check if all four non-thumb fingers are folded.

    Args:
        landmarks: List of 21 hand landmarks

    Returns:
        True if no finger is extended
    """
    return extended_finger_count(landmarks) == 0


def is_thumbs_up(landmarks: HandLandmarks, margin: float = THUMBS_UP_MARGIN) -> bool:
    """
    Check for a thumbs-up: thumb tip clearly above the thumb MCP and all
    four fingers folded.

    Args:
        landmarks: List of 21 hand landmarks
        margin: How far (normalized y) the tip must sit above the MCP

    Returns:
        True if both conditions hold
    """
    thumb_pointing_up = landmarks[THUMB_TIP][1] < landmarks[THUMB_MCP][1] - margin
    fingers_folded = all(d_tip < d_pip for d_tip, d_pip in _finger_distances(landmarks))
    return thumb_pointing_up and fingers_folded


def pinch_distance(landmarks: HandLandmarks) -> float:
    """
    Distance between thumb tip and index tip.

    Args:
        landmarks: List of 21 hand landmarks

    Returns:
        Euclidean distance in normalized units
    """
    return _distance(landmarks[THUMB_TIP], landmarks[INDEX_TIP])
