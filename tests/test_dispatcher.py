"""
Test cases for routing frames to the active gesture interpreter.
"""
import asyncio
import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from smart_mirror.config import load_config
from smart_mirror.dispatcher import FrameDispatcher
from smart_mirror.fitting_room import FittingRoomStateMachine
from smart_mirror.navigation import NavigationStateMachine
from smart_mirror.scheduler import ManualScheduler
from smart_mirror.types import CameraPreviewToggled, Phase
from tests.fakes import EchoGenerator, StubFrameSource
from tests.synthetic import fist, open_hand, pinch


class DispatcherTestCase(unittest.TestCase):

    def setUp(self):
        self.cfg = load_config()
        self.scheduler = ManualScheduler()
        self.navigation = NavigationStateMachine(self.cfg, self.scheduler)
        self.fitting_room = FittingRoomStateMachine(self.cfg, self.scheduler, EchoGenerator(), StubFrameSource())
        self.dispatcher = FrameDispatcher(self.navigation, self.fitting_room)
        self.t = 0.0

    def tearDown(self):
        for coro in self.scheduler.take_spawned():
            coro.close()

    def frame(self, landmarks, dt: float = 0.033):
        self.t += dt
        return self.dispatcher.handle_frame(landmarks, self.t)


class TestFrameDispatcher(DispatcherTestCase):
    """Test hot interpreter selection and isolation."""

    def test_navigation_hot_by_default(self):
        self.assertIs(self.dispatcher.hot, self.navigation)
        events = self.frame(pinch())
        self.assertIn(CameraPreviewToggled(visible=True), events)

    def test_fitting_room_hot_when_its_widget_active(self):
        self.navigation.select_widget_by_id("fitting")
        self.frame(pinch())
        self.assertIs(self.dispatcher.hot, self.fitting_room)
        self.assertFalse(self.navigation.camera_preview_visible)

    def test_fist_means_capture_not_music_in_fitting_room(self):
        self.navigation.select_widget_by_id("fitting")
        self.frame(fist())
        self.assertFalse(self.navigation.music_playing)
        self.assertIs(self.fitting_room.phase, Phase.CAPTURING)

    def test_navigation_cooldown_does_not_leak(self):
        self.frame(pinch())
        self.assertTrue(self.navigation.cooldown_active)
        self.navigation.select_widget_by_id("fitting")
        self.frame(fist())
        self.assertIs(self.fitting_room.phase, Phase.CAPTURING)

    def test_switch_releases_navigation_tracking(self):
        self.frame(open_hand())
        self.assertTrue(self.navigation.swipe_tracking)
        self.navigation.select_widget_by_id("fitting")
        self.frame(open_hand())
        self.assertFalse(self.navigation.swipe_tracking)
        self.assertTrue(self.fitting_room.swipe_tracking)

    def test_switch_releases_fitting_room_tracking(self):
        self.navigation.select_widget_by_id("fitting")
        self.frame(open_hand())
        self.assertTrue(self.fitting_room.swipe_tracking)
        self.navigation.select_widget(0)
        self.frame(open_hand())
        self.assertFalse(self.fitting_room.swipe_tracking)
        self.assertIs(self.dispatcher.hot, self.navigation)

    def test_half_swipe_does_not_complete_after_switch(self):
        self.navigation.select_widget_by_id("fitting")
        self.frame(open_hand())
        self.navigation.select_widget(0)
        self.frame(open_hand(dx=-0.2), dt=0.1)
        self.navigation.select_widget_by_id("fitting")
        self.frame(open_hand(dx=-0.2), dt=0.1)
        self.assertEqual(self.fitting_room.catalog_index, 0)

    def test_malformed_frame_skipped(self):
        events = self.frame(open_hand()[:12])
        self.assertEqual(events, [])
        self.assertEqual(self.dispatcher.skipped_frames, 1)
        self.assertFalse(self.navigation.swipe_tracking)

        events = self.frame(pinch())
        self.assertIn(CameraPreviewToggled(visible=True), events)

    def test_no_hand_frame_is_not_malformed(self):
        self.assertEqual(self.frame(None), [])
        self.assertEqual(self.dispatcher.skipped_frames, 0)

    def test_points_beyond_first_hand_ignored(self):
        # Longer lists are accepted; only the first 21 points are read
        landmarks = pinch() + open_hand()
        events = self.frame(landmarks)
        self.assertIn(CameraPreviewToggled(visible=True), events)


class TestThreadedSubmission(unittest.IsolatedAsyncioTestCase):
    """Test marshalling detector frames from another thread."""

    async def test_submit_from_worker_thread(self):
        cfg = load_config()
        scheduler = ManualScheduler()
        navigation = NavigationStateMachine(cfg, scheduler)
        fitting_room = FittingRoomStateMachine(cfg, scheduler, EchoGenerator(), StubFrameSource())
        dispatcher = FrameDispatcher(navigation, fitting_room)

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, dispatcher.submit_threadsafe, loop, pinch(), 1.0)
        await asyncio.sleep(0)

        self.assertTrue(navigation.camera_preview_visible)


if __name__ == '__main__':
    unittest.main()
