"""
Gesture classification from hand landmarks.
Maps one hand pose to a sign label using finger extension and distance rules.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from .config import ClassifierConfig
from .landmarks import (
    FINGER_JOINTS,
    HandPose,
    distance_2d,
    horizontal_distance,
    is_finger_extended,
)


class GestureLabel(str, Enum):
    """Recognized signs. "No gesture" is None, not a member."""
    I_LOVE_YOU = "I ❤️ You"
    A = "A"
    B = "B"
    HELLO = "Hello"
    PEACE = "Peace"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HandFeatures:
    """Per-frame features the rules are evaluated against."""
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool
    thumb_index_distance: float
    thumb_wrist_distance: float


@dataclass(frozen=True)
class GestureRule:
    label: GestureLabel
    predicate: Callable[[HandFeatures, ClassifierConfig], bool]


def extract_features(pose: HandPose) -> HandFeatures:
    """Compute finger states and the two rule distances for a pose."""
    states = {
        name: is_finger_extended(pose.get(tip), pose.get(joint))
        for name, (tip, joint) in FINGER_JOINTS.items()
    }
    return HandFeatures(
        thumb_index_distance=distance_2d(pose.thumb_tip, pose.index_tip),
        thumb_wrist_distance=horizontal_distance(pose.thumb_tip, pose.wrist),
        **states,
    )


def _is_i_love_you(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    return (f.thumb and f.index and not f.middle and not f.ring and f.pinky
            and f.thumb_index_distance > cfg.thumb_index_min_distance)


def _is_letter_a(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    return not f.index and not f.middle and not f.ring and not f.pinky and f.thumb


def _is_letter_b(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    # Thumb extension is not checked, only its horizontal offset from the wrist
    return (f.thumb_wrist_distance < cfg.thumb_wrist_max_distance
            and f.index and f.middle and not f.ring and not f.pinky)


def _is_hello(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    return f.thumb and f.index and f.middle and f.ring and f.pinky


def _is_peace(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    return not f.thumb and f.index and f.middle and not f.ring and not f.pinky


# Evaluated in order, first match wins
GESTURE_RULES = (
    GestureRule(GestureLabel.I_LOVE_YOU, _is_i_love_you),
    GestureRule(GestureLabel.A, _is_letter_a),
    GestureRule(GestureLabel.B, _is_letter_b),
    GestureRule(GestureLabel.HELLO, _is_hello),
    GestureRule(GestureLabel.PEACE, _is_peace),
)


class GestureClassifier:
    """
    Stateless sign classifier.

    Signs detected:
    - I love you: thumb, index and pinky up, thumb spread from index
    - A: only the thumb up
    - B: index and middle up, thumb tucked near the wrist
    - Hello: all five fingers up
    - Peace: index and middle up, others down

    The finger heuristic assumes a roughly upright hand facing the camera.
    """

    def __init__(
        self,
        config: Optional[ClassifierConfig] = None,
        rules: Sequence[GestureRule] = GESTURE_RULES,
    ):
        """
        Initialize the classifier.

        Args:
            config: Distance thresholds for the rules
            rules: Ordered rule list, first match wins
        """
        self._config = config or ClassifierConfig()
        self._rules = tuple(rules)

    @property
    def rules(self):
        return self._rules

    def classify(self, pose: HandPose) -> Optional[GestureLabel]:
        """
        Classify one hand pose.

        Returns:
            The first matching label, or None if no rule matches or the pose
            has fewer than 21 landmarks.
        """
        if not pose.is_complete:
            return None

        features = extract_features(pose)
        for rule in self._rules:
            if rule.predicate(features, self._config):
                return rule.label
        return None
