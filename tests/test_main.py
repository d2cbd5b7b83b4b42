"""
Test cases for the kiosk keyboard shortcuts.
"""
import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from smart_mirror.config import load_config
from smart_mirror.fitting_room import FittingRoomStateMachine
from smart_mirror.main import SmartMirrorApp
from smart_mirror.navigation import NavigationStateMachine
from smart_mirror.scheduler import ManualScheduler
from smart_mirror.types import Phase
from tests.fakes import EchoGenerator, StubFrameSource


class TestHandleKey(unittest.TestCase):
    """Test direct actions without opening the camera."""

    def setUp(self):
        cfg = load_config()
        self.scheduler = ManualScheduler()
        self.received = []
        # Skip __init__ so no camera or detector is created
        self.app = SmartMirrorApp.__new__(SmartMirrorApp)
        self.app.navigation = NavigationStateMachine(cfg, self.scheduler)
        self.app.fitting_room = FittingRoomStateMachine(cfg, self.scheduler, EchoGenerator(), StubFrameSource(),
                                                        listener=self.received.append)

    def tearDown(self):
        for coro in self.scheduler.take_spawned():
            coro.close()

    def test_quit(self):
        self.assertFalse(self.app.handle_key(ord('q')))

    def test_number_selects_widget(self):
        self.assertTrue(self.app.handle_key(ord('3')))
        self.assertEqual(self.app.navigation.active_index, 2)

    def test_back_ignored_outside_fitting_room(self):
        self.app.handle_key(ord('b'))
        self.assertEqual(self.received, [])
        self.assertFalse(self.app.fitting_room.open_hand_required)

    def test_back_resets_fitting_room(self):
        self.app.navigation.select_widget_by_id("fitting")
        self.app.handle_key(ord('c'))
        self.assertIs(self.app.fitting_room.phase, Phase.CAPTURING)
        self.app.handle_key(ord('b'))
        self.assertIs(self.app.fitting_room.phase, Phase.CATALOG)
        self.assertTrue(self.app.fitting_room.open_hand_required)

    def test_capture_ignored_outside_fitting_room(self):
        self.app.handle_key(ord('c'))
        self.assertIs(self.app.fitting_room.phase, Phase.CATALOG)


if __name__ == '__main__':
    unittest.main()
