"""
Mock collaborators that log actions instead of executing them.
"""
import asyncio
import logging

from .types import ClothingItem, Scene

logger = logging.getLogger(__name__)


class MockAudioPlayer:
    """Mock audio player that logs play/pause instead of playing music."""

    def __init__(self):
        """Initialize the mock audio player."""
        self.play_count = 0
        self.pause_count = 0

    def play(self) -> None:
        """Log play instead of starting playback."""
        self.play_count += 1
        logger.info(f"[MockAudioPlayer] play (call #{self.play_count})")

    def pause(self) -> None:
        """Log pause instead of stopping playback."""
        self.pause_count += 1
        logger.info(f"[MockAudioPlayer] pause (call #{self.pause_count})")

    def reset_counters(self) -> None:
        """Reset action counters for testing."""
        self.play_count = 0
        self.pause_count = 0


class MockLookGenerator:
    """Mock generator that echoes the captured photo back after a delay."""

    def __init__(self, delay_s: float = 0.5):
        """Initialize the mock generator."""
        self.delay_s = delay_s
        self.call_count = 0

    async def generate_look(self, photo: bytes, item: ClothingItem, scene: Scene) -> bytes:
        """Log the request and return the input photo unchanged."""
        self.call_count += 1
        logger.info(f"[MockLookGenerator] item={item.id} scene={scene.id} (call #{self.call_count})")
        await asyncio.sleep(self.delay_s)
        return photo
