"""
Type definitions for the smart mirror gesture core.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Literal, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable


# A landmark point is (x, y) or (x, y, z), normalized to the camera frame.
Point = Union[Tuple[float, float], Tuple[float, float, float]]
HandLandmarks = Sequence[Point]

SwipeDirection = Literal["left", "right"]


class Phase(str, Enum):
    """Fitting-room sub-flow phase."""
    CATALOG = "catalog"
    CAPTURING = "capturing"
    GENERATING = "generating"
    RESULTS = "results"


@dataclass(frozen=True)
class Scene:
    """A backdrop/style description used to prompt one generated look."""
    id: str
    label: str
    prompt: str
    emoji: str = ""


@dataclass(frozen=True)
class ClothingItem:
    """A catalog garment with its attached scenes."""
    id: str
    name: str
    brand: str
    price: int
    category: str
    color: str
    image_url: str
    description: str
    tags: Tuple[str, ...] = ()
    scenes: Tuple[Scene, ...] = ()


@dataclass(frozen=True)
class GeneratedLook:
    """One generation slot: loading, or settled with an image or an error."""
    scene: Scene
    image: Optional[bytes] = None
    is_loading: bool = True
    error: Optional[str] = None


# ---------------------------------------------------------------------------
# UI events emitted by the state machines
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WidgetChanged:
    """Active top-level widget changed."""
    index: int
    widget_id: str


@dataclass(frozen=True)
class CameraPreviewToggled:
    visible: bool


@dataclass(frozen=True)
class MusicToggled:
    playing: bool


@dataclass(frozen=True)
class GestureStatus:
    """Short status line for the gesture toast."""
    message: str


@dataclass(frozen=True)
class CatalogIndexChanged:
    index: int
    item_id: str


@dataclass(frozen=True)
class PhaseChanged:
    phase: Phase


@dataclass(frozen=True)
class CountdownTick:
    """Capture countdown value; None when the countdown is cleared."""
    remaining: Optional[int]


@dataclass(frozen=True)
class PhotoCaptured:
    photo: bytes = field(repr=False)


@dataclass(frozen=True)
class LooksUpdated:
    looks: Tuple[GeneratedLook, ...] = field(repr=False)


@dataclass(frozen=True)
class SelectedLookChanged:
    index: int


@dataclass(frozen=True)
class LiveFingerCount:
    count: Optional[int]


@dataclass(frozen=True)
class ThumbsUpProgress:
    progress: float  # 0..1


@dataclass(frozen=True)
class ShareRequested:
    item: ClothingItem
    look: GeneratedLook = field(repr=False)


Event = Union[
    WidgetChanged, CameraPreviewToggled, MusicToggled, GestureStatus,
    CatalogIndexChanged, PhaseChanged, CountdownTick, PhotoCaptured,
    LooksUpdated, SelectedLookChanged, LiveFingerCount, ThumbsUpProgress,
    ShareRequested,
]
EventListener = Callable[[Event], None]


# ---------------------------------------------------------------------------
# Collaborator protocols
# ---------------------------------------------------------------------------

@runtime_checkable
class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


@runtime_checkable
class SchedulerProto(Protocol):
    """Deferred callbacks and background coroutines on the state-owning loop."""

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> TimerHandle:
        """Run *callback* once after *delay_s* seconds."""
        ...

    def spawn(self, coro: Awaitable[Any]) -> Any:
        """Run *coro* concurrently on the loop."""
        ...


@runtime_checkable
class AudioProto(Protocol):
    """Music playback collaborator toggled by the fist gesture."""

    def play(self) -> None:
        ...

    def pause(self) -> None:
        ...


@runtime_checkable
class FrameSourceProto(Protocol):
    """Provides the current camera frame as an encoded, mirrored image."""

    def capture(self) -> Optional[bytes]:
        """Return JPEG bytes, or None when no frame is available."""
        ...


@runtime_checkable
class LookGeneratorProto(Protocol):
    """Abstract protocol for the image-generation call."""

    async def generate_look(self, photo: bytes, item: ClothingItem, scene: Scene) -> bytes:
        """Generate one look of the person in *photo* wearing *item* in *scene*."""
        ...
