"""
SignBridge Core

Sign classification from hand landmarks and frame-to-frame stabilization.
"""
from .config import Config, load_config
from .landmarks import HandPose, HAND_CONNECTIONS
from .classifier import GestureClassifier, GestureLabel, GESTURE_RULES
from .stability import StabilityTracker, TrackerArena
from .pipeline import GesturePipeline, FrameResult, HandResult

__all__ = [
    'Config',
    'load_config',
    'HandPose',
    'HAND_CONNECTIONS',
    'GestureClassifier',
    'GestureLabel',
    'GESTURE_RULES',
    'StabilityTracker',
    'TrackerArena',
    'GesturePipeline',
    'FrameResult',
    'HandResult',
]
