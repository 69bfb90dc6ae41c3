"""
Skeleton and label overlay for preview frames.
"""
from typing import Dict, Iterable, Optional
import cv2
import numpy as np

from signbridge.landmarks import HAND_CONNECTIONS, HandPose

CONNECTION_COLOR = (0, 255, 0)   # BGR green
LANDMARK_COLOR = (0, 0, 255)     # BGR red
LABEL_COLOR = (255, 255, 255)


def draw_hands(
    frame: np.ndarray,
    poses: Iterable[HandPose],
    labels: Optional[Dict[str, Optional[str]]] = None,
    black_background: bool = False,
) -> np.ndarray:
    """
    Draw every hand's skeleton and its committed label.

    Args:
        frame: BGR frame the landmarks were detected on
        poses: Hands detected in this frame
        labels: Committed label per hand id
        black_background: If True, draw on black instead of the camera image

    Returns:
        A new frame with the overlay.
    """
    canvas = np.zeros_like(frame) if black_background else frame.copy()
    h, w = canvas.shape[:2]
    labels = labels or {}

    for pose in poses:
        points = [(int(x * w), int(y * h)) for x, y, _ in pose.landmarks]

        for start_idx, end_idx in HAND_CONNECTIONS:
            if end_idx < len(points):
                cv2.line(canvas, points[start_idx], points[end_idx], CONNECTION_COLOR, 4)

        for point in points:
            cv2.circle(canvas, point, 4, LANDMARK_COLOR, -1)

        label = labels.get(pose.hand_id)
        if label is not None and points:
            wx, wy = points[HandPose.WRIST]
            cv2.putText(
                canvas, f"{pose.hand_id}: {label}", (wx + 10, wy + 25),
                cv2.FONT_HERSHEY_SIMPLEX, 0.7, LABEL_COLOR, 2
            )

    return canvas
