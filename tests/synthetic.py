"""
Synthetic hand landmark sets for gesture tests.

Layout (normalized image coordinates, y grows downward): wrist at the bottom,
four fingers pointing up, thumb off to the left.
"""
from typing import List, Sequence, Tuple

Point = Tuple[float, float, float]

WRIST = (0.5, 0.8)
THUMB_BASE = [(0.44, 0.74), (0.40, 0.68), (0.38, 0.62)]
THUMB_TIP_SIDE = (0.34, 0.68)
THUMB_TIP_UP = (0.36, 0.50)

FINGER_X = (0.44, 0.50, 0.56, 0.62)
MCP_Y = 0.62
PIP_Y = 0.52
EXTENDED_Y = (0.46, 0.40)  # dip, tip
FOLDED_Y = (0.56, 0.60)


def make_hand(extended: Sequence[bool] = (True, True, True, True), thumb: str = "side",
              dx: float = 0.0) -> List[Point]:
    """
    Build 21 landmarks.

    Args:
        extended: Per finger (index, middle, ring, pinky) whether it is extended
        thumb: "side", "up" (thumbs-up) or "pinch" (tip touching the index tip)
        dx: Horizontal shift applied to every point
    """
    fingers = []
    for x, is_extended in zip(FINGER_X, extended):
        dip_y, tip_y = EXTENDED_Y if is_extended else FOLDED_Y
        fingers.append([(x, MCP_Y), (x, PIP_Y), (x, dip_y), (x, tip_y)])

    if thumb == "up":
        thumb_tip = THUMB_TIP_UP
    elif thumb == "pinch":
        index_tip = fingers[0][3]
        thumb_tip = (index_tip[0] + 0.02, index_tip[1])
    else:
        thumb_tip = THUMB_TIP_SIDE

    points = [WRIST] + THUMB_BASE + [thumb_tip]
    for finger in fingers:
        points.extend(finger)
    return [(x + dx, y, 0.0) for x, y in points]


def hand_with_fingers(count: int, thumb: str = "side", dx: float = 0.0) -> List[Point]:
    """Hand with the first `count` fingers (from the index) extended."""
    return make_hand([i < count for i in range(4)], thumb=thumb, dx=dx)


def open_hand(dx: float = 0.0) -> List[Point]:
    return hand_with_fingers(4, dx=dx)


def fist(dx: float = 0.0) -> List[Point]:
    return hand_with_fingers(0, dx=dx)


def thumbs_up() -> List[Point]:
    return hand_with_fingers(0, thumb="up")


def pinch() -> List[Point]:
    return hand_with_fingers(4, thumb="pinch")
