"""
Test cases for landmark geometry with synthetic hands.
"""
import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from smart_mirror.landmarks import (
    extended_finger_count, has_full_landmarks, is_fist, is_thumbs_up, pinch_distance,
    THUMB_MCP, THUMB_TIP,
)
from tests.synthetic import fist, hand_with_fingers, make_hand, open_hand, pinch, thumbs_up


class TestFingerCount(unittest.TestCase):
    """Test extended finger counting."""

    def test_open_hand_has_four_fingers(self):
        landmarks = open_hand()
        self.assertEqual(extended_finger_count(landmarks), 4)
        self.assertFalse(is_fist(landmarks))

    def test_partial_counts(self):
        for count in range(5):
            with self.subTest(count=count):
                self.assertEqual(extended_finger_count(hand_with_fingers(count)), count)

    def test_non_contiguous_fingers(self):
        landmarks = make_hand([False, True, False, True])
        self.assertEqual(extended_finger_count(landmarks), 2)

    def test_fist_regardless_of_thumb(self):
        for thumb in ("side", "up", "pinch"):
            with self.subTest(thumb=thumb):
                self.assertTrue(is_fist(hand_with_fingers(0, thumb=thumb)))

    def test_count_is_translation_invariant(self):
        self.assertEqual(extended_finger_count(hand_with_fingers(3, dx=0.2)), 3)


class TestThumbsUp(unittest.TestCase):
    """Test thumbs-up detection."""

    def test_thumbs_up_detected(self):
        self.assertTrue(is_thumbs_up(thumbs_up()))

    def test_thumb_sideways_is_not_thumbs_up(self):
        self.assertFalse(is_thumbs_up(fist()))

    def test_extended_finger_breaks_thumbs_up(self):
        landmarks = hand_with_fingers(1, thumb="up")
        self.assertFalse(is_thumbs_up(landmarks))

    def test_margin_is_strict(self):
        landmarks = thumbs_up()
        mcp_y = landmarks[THUMB_MCP][1]

        # Tip just inside the margin: not enough
        landmarks[THUMB_TIP] = (landmarks[THUMB_TIP][0], mcp_y - 0.03, 0.0)
        self.assertFalse(is_thumbs_up(landmarks))

        landmarks[THUMB_TIP] = (landmarks[THUMB_TIP][0], mcp_y - 0.05, 0.0)
        self.assertTrue(is_thumbs_up(landmarks))

    def test_custom_margin(self):
        self.assertFalse(is_thumbs_up(thumbs_up(), margin=0.5))


class TestPinch(unittest.TestCase):
    """Test pinch distance."""

    def test_pinch_is_close(self):
        self.assertAlmostEqual(pinch_distance(pinch()), 0.02, places=6)
        self.assertLess(pinch_distance(pinch()), 0.08)

    def test_open_hand_is_not_pinch(self):
        self.assertGreater(pinch_distance(open_hand()), 0.08)

    def test_fist_is_not_pinch(self):
        self.assertGreater(pinch_distance(fist()), 0.08)


class TestLandmarkShape(unittest.TestCase):
    """Test the landmark completeness check."""

    def test_full_set(self):
        self.assertTrue(has_full_landmarks(open_hand()))

    def test_short_set(self):
        self.assertFalse(has_full_landmarks(open_hand()[:20]))

    def test_missing_coordinate(self):
        landmarks = open_hand()
        landmarks[5] = (0.5,)
        self.assertFalse(has_full_landmarks(landmarks))

    def test_two_dimensional_points(self):
        landmarks = [(x, y) for x, y, _ in open_hand()]
        self.assertTrue(has_full_landmarks(landmarks))
        self.assertEqual(extended_finger_count(landmarks), 4)


if __name__ == '__main__':
    unittest.main()
