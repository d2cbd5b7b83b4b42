"""
Result slots for one capture's batch of generated looks.
"""
import dataclasses
from typing import Optional, Sequence, Tuple

from .types import GeneratedLook, Scene

GENERATION_ERROR_MESSAGE = "Image generation failed"


class LookBatch:
    """
    Fixed-size result slots for one capture, tagged with its epoch.

    Slots settle independently in any order; the batch is complete when the
    settled count reaches the slot count.
    """

    def __init__(self, epoch: int, scenes: Sequence[Scene]):
        self.epoch = epoch
        self._slots = [GeneratedLook(scene=scene) for scene in scenes]
        self.settled_count = 0

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def looks(self) -> Tuple[GeneratedLook, ...]:
        return tuple(self._slots)

    @property
    def is_complete(self) -> bool:
        return self.settled_count == len(self._slots)

    def resolve(self, index: int, image: bytes) -> None:
        self._settle(index, image=image, error=None)

    def fail(self, index: int, error: str = GENERATION_ERROR_MESSAGE) -> None:
        self._settle(index, image=None, error=error)

    def _settle(self, index: int, image: Optional[bytes], error: Optional[str]) -> None:
        slot = self._slots[index]
        if not slot.is_loading:
            raise ValueError(f"Slot {index} already settled")
        self._slots[index] = dataclasses.replace(slot, image=image, is_loading=False, error=error)
        self.settled_count += 1
