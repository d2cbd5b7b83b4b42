"""
Smart Mirror Gesture Core

Turns a per-frame stream of MediaPipe hand landmarks into debounced gesture
events that drive widget navigation and a virtual fitting room.
"""

__version__ = "0.1.0"
__author__ = "Smart Mirror Team"

from .types import Phase, Scene, ClothingItem, GeneratedLook
from .config import load_config, Cfg
from .landmarks import extended_finger_count, is_fist, is_thumbs_up, pinch_distance
from .gestures import CooldownGate, HoldAccumulator, StabilityBuffer, HandOpenGate, SwipeDetector
from .scheduler import LoopScheduler, ManualScheduler
from .navigation import NavigationStateMachine
from .fitting_room import FittingRoomStateMachine
from .dispatcher import FrameDispatcher
from .controller_mock import MockAudioPlayer, MockLookGenerator

__all__ = [
    "Phase",
    "Scene",
    "ClothingItem",
    "GeneratedLook",
    "load_config",
    "Cfg",
    "extended_finger_count",
    "is_fist",
    "is_thumbs_up",
    "pinch_distance",
    "CooldownGate",
    "HoldAccumulator",
    "StabilityBuffer",
    "HandOpenGate",
    "SwipeDetector",
    "LoopScheduler",
    "ManualScheduler",
    "NavigationStateMachine",
    "FittingRoomStateMachine",
    "FrameDispatcher",
    "MockAudioPlayer",
    "MockLookGenerator",
]
