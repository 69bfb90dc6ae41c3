"""
Per-frame pipeline: hand poses -> raw labels -> committed labels.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .classifier import GestureClassifier, GestureLabel
from .config import Config
from .landmarks import HandPose, assign_hand_ids
from .stability import TrackerArena


@dataclass
class HandResult:
    """Outcome for one hand in one frame."""
    hand_id: str
    raw_label: Optional[GestureLabel]
    committed_label: Optional[GestureLabel]
    changed: bool = False


@dataclass
class FrameResult:
    hands: List[HandResult] = field(default_factory=list)
    committed: Dict[str, Optional[GestureLabel]] = field(default_factory=dict)

    @property
    def has_hands(self) -> bool:
        return bool(self.hands)

    @property
    def changes(self) -> List[HandResult]:
        return [h for h in self.hands if h.changed]


class GesturePipeline:
    """
    Classifies every detected hand and debounces each one independently.
    A frame with no hands is simply an empty iterable.
    """

    def __init__(self, config: Optional[Config] = None):
        self._config = config or Config()
        stability = self._config.stability
        self.classifier = GestureClassifier(self._config.classifier)
        self.arena = TrackerArena(
            threshold=stability.threshold,
            release_after=stability.release_after,
            forget_after=stability.forget_after,
        )

    def process_frame(self, poses: Iterable[HandPose]) -> FrameResult:
        """
        Classify and stabilize every pose of one frame.

        Each tracker is observed at most once per frame: poses sharing a
        hand_id get suffixed ids ("Right", "Right#2") in frame order.
        """
        poses = list(poses)
        hand_ids = assign_hand_ids([pose.hand_id for pose in poses])

        result = FrameResult()
        for pose, hand_id in zip(poses, hand_ids):
            raw = self.classifier.classify(pose)
            committed = self.arena.observe(hand_id, raw)
            result.hands.append(HandResult(
                hand_id=hand_id,
                raw_label=raw,
                committed_label=committed,
                changed=self.arena.tracker(hand_id).changed,
            ))

        self.arena.end_frame(h.hand_id for h in result.hands)
        result.committed = self.arena.committed_labels()
        return result

    def reset(self) -> None:
        """Drop every hand's stabilization state."""
        self.arena.clear()
