"""
Test cases for the deferred-callback schedulers.
"""
import asyncio
import gc
import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from smart_mirror.config import load_config
from smart_mirror.fitting_room import FittingRoomStateMachine
from smart_mirror.scheduler import LoopScheduler, ManualScheduler
from smart_mirror.types import Phase
from tests.fakes import ParkedGenerator, StubFrameSource


class TestManualScheduler(unittest.TestCase):
    """Test the virtual clock."""

    def test_fires_in_deadline_order(self):
        scheduler = ManualScheduler()
        fired = []
        scheduler.call_later(0.3, lambda: fired.append("late"))
        scheduler.call_later(0.1, lambda: fired.append("early"))
        scheduler.call_later(0.1, lambda: fired.append("early-second"))
        scheduler.advance(0.2)
        self.assertEqual(fired, ["early", "early-second"])
        scheduler.advance(0.2)
        self.assertEqual(fired[-1], "late")
        self.assertAlmostEqual(scheduler.now, 0.4)

    def test_cancelled_callback_skipped(self):
        scheduler = ManualScheduler()
        fired = []
        handle = scheduler.call_later(0.1, lambda: fired.append(True))
        handle.cancel()
        scheduler.advance(1.0)
        self.assertEqual(fired, [])
        self.assertEqual(scheduler.pending(), 0)


class TestLoopScheduler(unittest.IsolatedAsyncioTestCase):
    """Test task bookkeeping on a real event loop."""

    async def spin(self, rounds: int = 10):
        for _ in range(rounds):
            await asyncio.sleep(0)

    async def test_holds_task_until_done(self):
        scheduler = LoopScheduler()
        release = asyncio.Event()

        async def wait_for_release():
            await release.wait()

        scheduler.spawn(wait_for_release())
        self.assertEqual(scheduler.pending(), 1)
        release.set()
        await self.spin()
        self.assertEqual(scheduler.pending(), 0)

    async def test_failed_task_is_logged(self):
        scheduler = LoopScheduler()

        async def explode():
            raise RuntimeError("boom")

        with self.assertLogs("smart_mirror.scheduler", level="ERROR") as logs:
            scheduler.spawn(explode())
            await self.spin()
        self.assertIn("boom", logs.output[0])
        self.assertEqual(scheduler.pending(), 0)

    async def test_cancelled_task_is_dropped(self):
        scheduler = LoopScheduler()
        task = scheduler.spawn(asyncio.sleep(10))
        task.cancel()
        await self.spin()
        self.assertEqual(scheduler.pending(), 0)

    async def test_in_flight_generation_survives_gc(self):
        cfg = load_config()
        cfg.fitting_room.countdown_seconds = 0
        scheduler = LoopScheduler()
        generator = ParkedGenerator()
        room = FittingRoomStateMachine(cfg, scheduler, generator, StubFrameSource())

        room.start_capture()
        await self.spin()
        gc.collect()

        self.assertEqual(len(generator.futures), 4)
        self.assertIs(room.phase, Phase.GENERATING)

        for future in list(generator.futures):
            future.set_result(b"look")
        await self.spin()

        self.assertIs(room.phase, Phase.RESULTS)
        self.assertTrue(all(look.image == b"look" for look in room.looks))
        self.assertEqual(scheduler.pending(), 0)


if __name__ == '__main__':
    unittest.main()
