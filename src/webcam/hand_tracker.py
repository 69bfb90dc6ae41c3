"""
MediaPipe Hand Tracker wrapper using the Tasks API.
Handles camera capture and multi-hand landmark detection.
"""
from pathlib import Path
from typing import List, Optional
import time
import cv2
import numpy as np
import mediapipe as mp

from signbridge.config import Config, CameraConfig, MediaPipeConfig
from signbridge.landmarks import HandPose, assign_hand_ids

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode

MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)


class HandTracker:
    """
    MediaPipe hand tracking wrapper with camera management.
    Uses the MediaPipe Tasks API (0.10+) in VIDEO mode.
    """

    # Default model path relative to project root
    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: Config, model_path: Optional[Path] = None):
        """
        Initialize hand tracker.

        Args:
            config: SignBridge configuration
            model_path: Path to hand_landmarker.task model file
        """
        self._camera_config: CameraConfig = config.camera
        self._mp_config: MediaPipeConfig = config.mediapipe
        self._model_path = Path(model_path) if model_path else self.DEFAULT_MODEL_PATH

        # Lazy initialization
        self._cap: Optional[cv2.VideoCapture] = None
        self._landmarker: Optional[HandLandmarker] = None

        self._is_running = False
        self._last_frame: Optional[np.ndarray] = None
        self._frame_count = 0
        self._start_perf: float = 0
        self._last_timestamp_ms: int = -1

    def start(self) -> bool:
        """
        Start camera capture and MediaPipe.

        Returns:
            True if started successfully, False otherwise.
        """
        if self._is_running:
            return True

        if not self._model_path.exists():
            print(f"ERROR: Model file not found: {self._model_path}")
            print(f"Download from: {MODEL_URL}")
            return False

        self._cap = cv2.VideoCapture(self._camera_config.device_id)
        if not self._cap.isOpened():
            print(f"ERROR: Could not open camera {self._camera_config.device_id}")
            self._cap = None
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._camera_config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._camera_config.height)
        self._cap.set(cv2.CAP_PROP_FPS, self._camera_config.fps)

        self._landmarker = self._create_landmarker()
        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._is_running = True
        return True

    def _create_landmarker(self) -> HandLandmarker:
        """Create the landmarker, preferring the GPU delegate."""
        options = dict(
            running_mode=VisionRunningMode.VIDEO,
            num_hands=self._mp_config.max_num_hands,
            min_hand_detection_confidence=self._mp_config.min_detection_confidence,
            min_tracking_confidence=self._mp_config.min_tracking_confidence,
        )
        try:
            gpu_opts = BaseOptions(
                model_asset_path=str(self._model_path),
                delegate=BaseOptions.Delegate.GPU,
            )
            landmarker = HandLandmarker.create_from_options(
                HandLandmarkerOptions(base_options=gpu_opts, **options)
            )
            print("GPU delegate enabled for MediaPipe")
            return landmarker
        except (AttributeError, RuntimeError, NotImplementedError) as e:
            print(f"GPU delegate failed: {e}, using CPU")

        cpu_opts = BaseOptions(model_asset_path=str(self._model_path))
        return HandLandmarker.create_from_options(
            HandLandmarkerOptions(base_options=cpu_opts, **options)
        )

    def stop(self) -> None:
        """Stop camera capture and release resources."""
        self._is_running = False

        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

        if self._cap:
            self._cap.release()
            self._cap = None

        self._last_frame = None

    def get_hands(self) -> Optional[List[HandPose]]:
        """
        Capture a frame and detect every visible hand.

        Returns:
            One HandPose per detected hand, empty if none are visible.
            None if no frame could be read (camera failure or not running).
        """
        if not self._is_running or self._cap is None or self._landmarker is None:
            return None

        ret, frame = self._cap.read()
        if not ret:
            return None

        self._frame_count += 1

        if self._camera_config.mirror:
            frame = cv2.flip(frame, 1)
        self._last_frame = frame

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        # VIDEO mode requires strictly increasing timestamps
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)
        if not result.hand_landmarks:
            return []

        sides = [h[0].category_name for h in result.handedness]
        scores = [h[0].score for h in result.handedness]
        hand_ids = assign_hand_ids(sides)

        return [
            HandPose(
                landmarks=[(lm.x, lm.y, lm.z) for lm in hand_landmarks],
                handedness=side,
                confidence=score,
                hand_id=hand_id,
            )
            for hand_landmarks, side, score, hand_id
            in zip(result.hand_landmarks, sides, scores, hand_ids)
        ]

    @property
    def last_frame(self) -> Optional[np.ndarray]:
        return self._last_frame

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def frame_count(self) -> int:
        return self._frame_count
