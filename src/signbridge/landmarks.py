"""
Hand pose model and the geometry helpers shared by the classifier.
"""
from dataclasses import dataclass
from typing import Dict, Optional, List, Sequence, Tuple
import math

Point = Tuple[float, float, float]


@dataclass
class HandPose:
    """
    One detected hand in one frame.

    Attributes:
        landmarks: List of 21 (x, y, z) tuples, normalized 0-1
        handedness: 'Left', 'Right' or 'Unknown'
        confidence: Detection confidence 0-1
        hand_id: Identity of the tracked hand (defaults to handedness)
    """
    landmarks: List[Point]
    handedness: str = "Unknown"
    confidence: float = 1.0
    hand_id: Optional[str] = None

    # MediaPipe landmark indices
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20

    NUM_LANDMARKS = 21

    def __post_init__(self):
        if self.hand_id is None:
            self.hand_id = self.handedness

    @classmethod
    def from_points(
        cls,
        points: Sequence[Sequence[float]],
        handedness: str = "Unknown",
        confidence: float = 1.0,
        hand_id: Optional[str] = None,
    ) -> "HandPose":
        """Build a pose from 2D or 3D points. Missing z becomes 0.0."""
        landmarks = [
            (float(p[0]), float(p[1]), float(p[2]) if len(p) > 2 else 0.0)
            for p in points
        ]
        return cls(landmarks=landmarks, handedness=handedness,
                   confidence=confidence, hand_id=hand_id)

    def get(self, index: int) -> Point:
        """Get landmark by index."""
        return self.landmarks[index]

    @property
    def wrist(self) -> Point:
        return self.landmarks[self.WRIST]

    @property
    def thumb_tip(self) -> Point:
        return self.landmarks[self.THUMB_TIP]

    @property
    def index_tip(self) -> Point:
        return self.landmarks[self.INDEX_TIP]

    @property
    def is_complete(self) -> bool:
        return len(self.landmarks) >= self.NUM_LANDMARKS


# Finger name -> (tip, proximal joint) used by the extension heuristic
FINGER_JOINTS = {
    "thumb": (HandPose.THUMB_TIP, HandPose.THUMB_IP),
    "index": (HandPose.INDEX_TIP, HandPose.INDEX_PIP),
    "middle": (HandPose.MIDDLE_TIP, HandPose.MIDDLE_PIP),
    "ring": (HandPose.RING_TIP, HandPose.RING_PIP),
    "pinky": (HandPose.PINKY_TIP, HandPose.PINKY_PIP),
}


# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]


def is_finger_extended(tip: Sequence[float], joint: Sequence[float]) -> bool:
    """
    A finger is up when its tip sits above its proximal joint.
    Image coordinates: y increases downwards, so "above" means smaller y.
    """
    return tip[1] < joint[1]


def distance_2d(p1: Sequence[float], p2: Sequence[float]) -> float:
    """Euclidean distance between two points, ignoring z."""
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


def horizontal_distance(p1: Sequence[float], p2: Sequence[float]) -> float:
    return abs(p1[0] - p2[0])


def assign_hand_ids(ids: Sequence[str]) -> List[str]:
    """
    Make per-frame hand ids unique.
    A repeated id gets a positional suffix ("Right", "Right#2").
    """
    counts: Dict[str, int] = {}
    taken = set()
    unique = []
    for hand_id in ids:
        candidate = hand_id
        while candidate in taken:
            counts[hand_id] = counts.get(hand_id, 1) + 1
            candidate = f"{hand_id}#{counts[hand_id]}"
        taken.add(candidate)
        unique.append(candidate)
    return unique
