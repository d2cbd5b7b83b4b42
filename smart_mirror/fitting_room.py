"""
Virtual fitting room: catalog browsing, photo capture, look generation and
gesture-driven result selection.

Phase flow:
    catalog -> capturing -> generating -> results -> catalog (reset)
"""
import asyncio
import logging
from typing import Dict, List, Optional, Sequence, Set

from .catalog import CATALOG
from .config import Cfg
from .events import EventEmitter
from .gestures import CooldownGate, HandOpenGate, HoldAccumulator, StabilityBuffer, SwipeDetector
from .landmarks import MIDDLE_MCP, extended_finger_count, is_thumbs_up
from .looks import GENERATION_ERROR_MESSAGE, LookBatch
from .types import (
    CatalogIndexChanged, ClothingItem, CountdownTick, Event, EventListener, FrameSourceProto,
    GeneratedLook, HandLandmarks, LiveFingerCount, LookGeneratorProto, LooksUpdated, Phase,
    PhaseChanged, PhotoCaptured, SchedulerProto, Scene, SelectedLookChanged, ShareRequested,
    ThumbsUpProgress, TimerHandle,
)

logger = logging.getLogger(__name__)


# Forward edges only; reset() is the forced edge back to catalog.
_TRANSITIONS: Dict[Phase, Set[Phase]] = {
    Phase.CATALOG:    {Phase.CAPTURING},
    Phase.CAPTURING:  {Phase.GENERATING},
    Phase.GENERATING: {Phase.RESULTS},
    Phase.RESULTS:    {Phase.CATALOG},
}

COUNTDOWN_TICK_S = 1.0


class FittingRoomStateMachine(EventEmitter):
    """
    Owns the fitting-room phase and everything local to it.

    Gestures per phase:
    - catalog: swipe browses items, fist starts the capture countdown
      (behind the post-reset lockout and open-hand gate)
    - results: 1-4 fingers held steady selects a look, a held thumbs-up
      goes back to the catalog
    - capturing / generating: no gestures; a lost hand clears hold progress
    """

    def __init__(self, cfg: Cfg, scheduler: SchedulerProto, generator: LookGeneratorProto,
                 frame_source: FrameSourceProto, catalog: Sequence[ClothingItem] = CATALOG,
                 listener: Optional[EventListener] = None):
        super().__init__(listener)
        if not catalog:
            raise ValueError("catalog must contain at least one item")
        self.catalog = tuple(catalog)
        self._scheduler = scheduler
        self._generator = generator
        self._frame_source = frame_source

        self.phase = Phase.CATALOG
        self.catalog_index = 0
        self.countdown: Optional[int] = None
        self.captured_photo: Optional[bytes] = None
        self.batch: Optional[LookBatch] = None
        self.selected_look_index = 0
        self.epoch = 0
        self.live_finger_count: Optional[int] = None
        self.thumbs_up_progress = 0.0

        gestures = cfg.gestures
        room = cfg.fitting_room
        self.thumbs_up_margin = gestures.thumbs_up.margin
        self.countdown_seconds = room.countdown_seconds
        self._countdown_handle: Optional[TimerHandle] = None

        self._swipe = SwipeDetector(gestures.swipe.threshold, gestures.swipe.window_ms)
        self._browse_cooldown = CooldownGate(scheduler, room.browse_cooldown_ms, name="browse")
        self._capture_cooldown = CooldownGate(scheduler, room.capture_cooldown_ms, name="capture")
        self._post_reset_lockout = CooldownGate(scheduler, room.post_reset_lockout_ms, name="post-reset")
        self._open_hand_gate = HandOpenGate(gestures.open_hand.min_fingers)
        self._fist_hold = HoldAccumulator(room.fist_hold_frames, decay=False)
        self._thumbs_up = HoldAccumulator(gestures.thumbs_up.hold_frames, decay=True)
        self._fingers = StabilityBuffer(gestures.finger_select.stable_frames)

    @property
    def current_item(self) -> ClothingItem:
        return self.catalog[self.catalog_index]

    @property
    def looks(self) -> tuple:
        return self.batch.looks if self.batch is not None else ()

    @property
    def selected_look(self) -> Optional[GeneratedLook]:
        looks = self.looks
        if 0 <= self.selected_look_index < len(looks):
            return looks[self.selected_look_index]
        return None

    @property
    def open_hand_required(self) -> bool:
        return self._open_hand_gate.armed

    @property
    def thumbs_up_frames(self) -> int:
        return self._thumbs_up.value

    @property
    def finger_stable_count(self) -> int:
        return self._fingers.stable_count

    @property
    def swipe_tracking(self) -> bool:
        return self._swipe.is_tracking

    # -- frame interpretation ------------------------------------------------

    def handle_frame(self, landmarks: Optional[HandLandmarks], t_now: float) -> List[Event]:
        """
        Interpret one detector frame for the current phase.

        Args:
            landmarks: 21 hand landmarks, or None if no hand was detected
            t_now: Current timestamp in seconds

        Returns:
            Events produced by this frame
        """
        with self._collecting() as events:
            if self.phase is Phase.CATALOG:
                self._interpret_catalog(landmarks, t_now)
            elif self.phase is Phase.RESULTS:
                self._interpret_results(landmarks)
            elif landmarks is None:
                self._clear_hold_progress()
        return events

    def _interpret_catalog(self, landmarks: Optional[HandLandmarks], t_now: float) -> None:
        if landmarks is None:
            self._swipe.reset()
            self._fist_hold.clear()
            return

        if self._post_reset_lockout.active:
            return

        finger_count = extended_finger_count(landmarks)

        # After a reset the hand has to open before a fist counts again
        if not self._open_hand_gate.update(finger_count):
            return

        if finger_count == 0:
            self._swipe.reset()
            if self._fist_hold.update(True) and self._capture_cooldown.try_trigger():
                logger.info("✊ Fist in catalog, starting capture")
                self.start_capture()
            return

        self._fist_hold.update(False)
        direction = self._swipe.update(landmarks[MIDDLE_MCP][0], t_now)
        if direction == "left":
            self.next_item()
        elif direction == "right":
            self.prev_item()

    def _interpret_results(self, landmarks: Optional[HandLandmarks]) -> None:
        if landmarks is None:
            self._clear_hold_progress()
            return

        thumb_up = is_thumbs_up(landmarks, self.thumbs_up_margin)
        finger_count = extended_finger_count(landmarks)

        if thumb_up:
            fired = self._thumbs_up.update(True)
            self._set_thumbs_up_progress(1.0 if fired else self._thumbs_up.progress)
            self._set_live_finger_count(None)
            self._fingers.clear()
            if fired:
                logger.info("👍 Thumbs-up held, back to catalog")
                self.reset()
            return

        self._thumbs_up.update(False)
        self._set_thumbs_up_progress(self._thumbs_up.progress)

        if 1 <= finger_count <= 4:
            self._set_live_finger_count(finger_count)
            stable = self._fingers.push(finger_count)
            if stable is not None and stable - 1 != self.selected_look_index and stable <= len(self.looks):
                self.select_look(stable - 1)
        else:
            self._set_live_finger_count(None)
            self._fingers.clear()

    def release(self) -> None:
        """Drop in-flight gesture progress when frames stop being routed here."""
        self._swipe.reset()
        self._fist_hold.clear()
        self._clear_hold_progress()

    def _clear_hold_progress(self) -> None:
        self._thumbs_up.clear()
        self._fingers.clear()
        self._set_thumbs_up_progress(0.0)
        self._set_live_finger_count(None)

    # -- catalog actions -----------------------------------------------------

    def next_item(self) -> bool:
        if self.phase is not Phase.CATALOG or not self._browse_cooldown.try_trigger():
            return False
        self._set_catalog_index((self.catalog_index + 1) % len(self.catalog))
        return True

    def prev_item(self) -> bool:
        if self.phase is not Phase.CATALOG or not self._browse_cooldown.try_trigger():
            return False
        self._set_catalog_index((self.catalog_index - 1 + len(self.catalog)) % len(self.catalog))
        return True

    def select_item(self, index: int) -> bool:
        """Pick a catalog item directly (thumbnail click)."""
        if not 0 <= index < len(self.catalog):
            raise ValueError(f"Catalog index {index} out of range 0..{len(self.catalog) - 1}")
        if self.phase is not Phase.CATALOG:
            return False
        self._set_catalog_index(index)
        return True

    def _set_catalog_index(self, index: int) -> None:
        self.catalog_index = index
        logger.info(f"Catalog -> {self.current_item.name} ({index + 1}/{len(self.catalog)})")
        self._emit(CatalogIndexChanged(index=index, item_id=self.current_item.id))

    # -- capture -------------------------------------------------------------

    def start_capture(self) -> bool:
        """Enter `capturing` and start the countdown. Only valid in `catalog`."""
        if self.phase is not Phase.CATALOG:
            return False
        self._transition(Phase.CAPTURING)
        self._swipe.reset()
        self._fist_hold.clear()
        self._set_countdown(self.countdown_seconds)
        self._schedule_tick()
        return True

    def _schedule_tick(self) -> None:
        if self.countdown == 0:
            self._take_photo()
            return
        self._countdown_handle = self._scheduler.call_later(COUNTDOWN_TICK_S, self._tick)

    def _tick(self) -> None:
        self._countdown_handle = None
        if self.phase is not Phase.CAPTURING or self.countdown is None:
            return
        self._set_countdown(self.countdown - 1)
        self._schedule_tick()

    def _set_countdown(self, value: Optional[int]) -> None:
        self.countdown = value
        self._emit(CountdownTick(remaining=value))

    def _take_photo(self) -> None:
        photo = self._frame_source.capture()
        if photo is None:
            # Stays in capturing until an explicit reset
            logger.warning("📷 Capture skipped, no camera frame available")
            self._set_countdown(None)
            return

        self.captured_photo = photo
        self._emit(PhotoCaptured(photo=photo))
        self._set_countdown(None)
        self._start_generation(photo)

    # -- generation ----------------------------------------------------------

    def _start_generation(self, photo: bytes) -> None:
        item = self.current_item
        self.epoch += 1
        epoch = self.epoch
        self.batch = LookBatch(epoch, item.scenes)
        self._transition(Phase.GENERATING)
        self._emit(LooksUpdated(looks=self.batch.looks))

        if self.batch.is_complete:
            self._enter_results()
            return

        logger.info(f"✨ Generating {len(item.scenes)} looks for {item.name} (epoch {epoch})")
        self._scheduler.spawn(self._generate_all(epoch, photo, item))

    async def _generate_all(self, epoch: int, photo: bytes, item: ClothingItem) -> None:
        await asyncio.gather(*(
            self._generate_one(epoch, index, photo, item, scene)
            for index, scene in enumerate(item.scenes)
        ))

    async def _generate_one(self, epoch: int, index: int, photo: bytes,
                            item: ClothingItem, scene: Scene) -> None:
        try:
            image = await self._generator.generate_look(photo, item, scene)
        except Exception as e:
            logger.error(f"❌ Look generation failed for scene {scene.id}: {e}")
            self._settle(epoch, index, image=None, error=GENERATION_ERROR_MESSAGE)
        else:
            self._settle(epoch, index, image=image, error=None)

    def _settle(self, epoch: int, index: int, image: Optional[bytes], error: Optional[str]) -> None:
        batch = self.batch
        if batch is None or epoch != self.epoch or batch.epoch != epoch:
            logger.debug(f"Discarding stale result for slot {index} (epoch {epoch}, current {self.epoch})")
            return

        if error is not None:
            batch.fail(index, error)
        else:
            batch.resolve(index, image)
        self._emit(LooksUpdated(looks=batch.looks))

        if batch.is_complete and self.phase is Phase.GENERATING:
            self._enter_results()

    def _enter_results(self) -> None:
        self._transition(Phase.RESULTS)
        self._clear_hold_progress()
        self.selected_look_index = 0
        self._emit(SelectedLookChanged(index=0))

    # -- results actions -----------------------------------------------------

    def select_look(self, index: int) -> bool:
        """Select a generated look by index. Only valid in `results`."""
        if self.phase is not Phase.RESULTS:
            return False
        if not 0 <= index < len(self.looks):
            raise ValueError(f"Look index {index} out of range 0..{len(self.looks) - 1}")
        if index != self.selected_look_index:
            self.selected_look_index = index
            logger.info(f"Selected look {index + 1} ({self.looks[index].scene.id})")
            self._emit(SelectedLookChanged(index=index))
        return True

    def share_look(self) -> bool:
        """Request export of the selected look if it finished with an image."""
        look = self.selected_look
        if self.phase is not Phase.RESULTS or look is None or look.is_loading or look.image is None:
            return False
        self._emit(ShareRequested(item=self.current_item, look=look))
        return True

    # -- reset ---------------------------------------------------------------

    def reset(self) -> None:
        """
        Return to `catalog` from any phase and clear fitting-room state.

        In-flight generation keeps running but its results are discarded, and
        the post-reset lockout plus open-hand gate are re-armed.
        """
        if self._countdown_handle is not None:
            self._countdown_handle.cancel()
            self._countdown_handle = None

        self.epoch += 1
        self.captured_photo = None
        self.batch = None
        self.selected_look_index = 0
        self._swipe.reset()
        self._fist_hold.clear()
        self._clear_hold_progress()
        if self.countdown is not None:
            self._set_countdown(None)

        if self.phase is not Phase.CATALOG:
            self.phase = Phase.CATALOG
            logger.info("↩️  Fitting room reset to catalog")
            self._emit(PhaseChanged(phase=Phase.CATALOG))
        self._emit(LooksUpdated(looks=()))

        self._post_reset_lockout.trigger()
        self._open_hand_gate.arm()

    # -- internals -----------------------------------------------------------

    def _transition(self, new_phase: Phase) -> bool:
        if new_phase not in _TRANSITIONS[self.phase]:
            logger.warning(f"Blocked phase transition {self.phase.value} -> {new_phase.value}")
            return False
        logger.info(f"Phase {self.phase.value} -> {new_phase.value}")
        self.phase = new_phase
        self._emit(PhaseChanged(phase=new_phase))
        return True

    def _set_thumbs_up_progress(self, progress: float) -> None:
        if progress != self.thumbs_up_progress:
            self.thumbs_up_progress = progress
            self._emit(ThumbsUpProgress(progress=progress))

    def _set_live_finger_count(self, count: Optional[int]) -> None:
        if count != self.live_finger_count:
            self.live_finger_count = count
            self._emit(LiveFingerCount(count=count))
