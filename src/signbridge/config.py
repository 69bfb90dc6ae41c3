"""
Config loader for SignBridge.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30
    mirror: bool = True


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 2
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    def __post_init__(self):
        if self.max_num_hands < 1:
            raise ValueError(f"max_num_hands must be >= 1, got {self.max_num_hands}")


@dataclass
class ClassifierConfig:
    thumb_index_min_distance: float = 0.1   # "I love you" needs thumb and index spread wider
    thumb_wrist_max_distance: float = 0.1   # "B" needs the thumb tucked over the wrist (x only)

    def __post_init__(self):
        if self.thumb_index_min_distance < 0 or self.thumb_wrist_max_distance < 0:
            raise ValueError("Classifier distance thresholds must be non-negative")


@dataclass
class StabilityConfig:
    threshold: int = 40                    # Frames a raw label must hold before it commits
    release_after: Optional[int] = None    # Frames of "no gesture" that clear the label (None = sticky)
    forget_after: Optional[int] = None     # Missed frames before a hand's tracker is dropped

    def __post_init__(self):
        if self.threshold < 0:
            raise ValueError(f"threshold must be >= 0, got {self.threshold}")
        for name in ("release_after", "forget_after"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be >= 0 or None, got {value}")


@dataclass
class UIConfig:
    show_preview: bool = True
    preview_fps: int = 5


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    stability: StabilityConfig = field(default_factory=StabilityConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.

    Raises:
        ValueError: If a section holds an invalid value.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        classifier=_dict_to_dataclass(ClassifierConfig, data.get('classifier')),
        stability=_dict_to_dataclass(StabilityConfig, data.get('stability')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )
