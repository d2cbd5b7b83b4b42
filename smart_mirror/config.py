"""
Configuration management for the smart mirror gesture core.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int
    mirror: bool


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class PinchConfig:
    """Pinch gesture configuration."""
    threshold: float


@dataclass
class ThumbsUpConfig:
    """Thumbs-up gesture configuration."""
    margin: float
    hold_frames: int


@dataclass
class SwipeConfig:
    """Swipe gesture configuration."""
    threshold: float
    window_ms: int


@dataclass
class FingerSelectConfig:
    """Finger-count selection configuration."""
    stable_frames: int


@dataclass
class OpenHandConfig:
    """Post-reset open-hand gate configuration."""
    min_fingers: int


@dataclass
class GesturesConfig:
    """Gesture recognition configuration."""
    pinch: PinchConfig
    thumbs_up: ThumbsUpConfig
    swipe: SwipeConfig
    finger_select: FingerSelectConfig
    open_hand: OpenHandConfig


@dataclass
class NavigationConfig:
    """Top-level widget navigation configuration."""
    widgets: List[str]
    fitting_room_widget: str
    cooldown_ms: int

    @property
    def fitting_room_index(self) -> int:
        return self.widgets.index(self.fitting_room_widget)


@dataclass
class FittingRoomConfig:
    """Fitting-room flow configuration."""
    browse_cooldown_ms: int
    capture_cooldown_ms: int
    post_reset_lockout_ms: int
    countdown_seconds: int
    fist_hold_frames: int
    jpeg_quality: int


@dataclass
class GenerationConfig:
    """Image generation configuration."""
    model: str
    api_key_env: str
    fetch_timeout_s: float
    response_modalities: List[str]


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    window_name: str


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    gestures: GesturesConfig
    navigation: NavigationConfig
    fitting_room: FittingRoomConfig
    generation: GenerationConfig
    display: DisplayConfig
    logging: LoggingConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings
    """
    if path is None:
        # Use default config file in project root
        project_root = Path(__file__).parent.parent
        path = project_root / "config.default.yaml"

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps'],
        mirror=camera_data['mirror']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        model_complexity=mp_data['model_complexity'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    gestures_data = data['gestures']
    gestures = GesturesConfig(
        pinch=PinchConfig(threshold=gestures_data['pinch']['threshold']),
        thumbs_up=ThumbsUpConfig(
            margin=gestures_data['thumbs_up']['margin'],
            hold_frames=gestures_data['thumbs_up']['hold_frames']
        ),
        swipe=SwipeConfig(
            threshold=gestures_data['swipe']['threshold'],
            window_ms=gestures_data['swipe']['window_ms']
        ),
        finger_select=FingerSelectConfig(
            stable_frames=gestures_data['finger_select']['stable_frames']
        ),
        open_hand=OpenHandConfig(min_fingers=gestures_data['open_hand']['min_fingers'])
    )

    nav_data = data['navigation']
    navigation = NavigationConfig(
        widgets=list(nav_data['widgets']),
        fitting_room_widget=nav_data['fitting_room_widget'],
        cooldown_ms=nav_data['cooldown_ms']
    )
    if navigation.fitting_room_widget not in navigation.widgets:
        raise ValueError(
            f"fitting_room_widget '{navigation.fitting_room_widget}' is not in widgets {navigation.widgets}"
        )

    fr_data = data['fitting_room']
    fitting_room = FittingRoomConfig(
        browse_cooldown_ms=fr_data['browse_cooldown_ms'],
        capture_cooldown_ms=fr_data['capture_cooldown_ms'],
        post_reset_lockout_ms=fr_data['post_reset_lockout_ms'],
        countdown_seconds=fr_data['countdown_seconds'],
        fist_hold_frames=fr_data['fist_hold_frames'],
        jpeg_quality=fr_data['jpeg_quality']
    )

    gen_data = data['generation']
    generation = GenerationConfig(
        model=gen_data['model'],
        api_key_env=gen_data['api_key_env'],
        fetch_timeout_s=gen_data['fetch_timeout_s'],
        response_modalities=list(gen_data['response_modalities'])
    )

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        window_name=display_data['window_name']
    )

    logging_config = LoggingConfig(level=data['logging']['level'])

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gestures=gestures,
        navigation=navigation,
        fitting_room=fitting_room,
        generation=generation,
        display=display,
        logging=logging_config
    )
