"""
SignBridge Webcam Module

Hand landmark acquisition and preview rendering using MediaPipe and OpenCV.
"""
from .hand_tracker import HandTracker
from .renderer import draw_hands
from .worker import WebcamWorker

__all__ = [
    'HandTracker',
    'draw_hands',
    'WebcamWorker',
]
