"""
Background worker for MediaPipe hand tracking and sign recognition.
Runs in a separate QThread to avoid blocking the UI.
"""
import time
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal

from signbridge.pipeline import GesturePipeline, FrameResult
from .hand_tracker import HandTracker
from .renderer import draw_hands

READ_RETRY_DELAY = 0.1  # Seconds to wait after a failed camera read


class WebcamWorker(QObject):
    """
    Worker class that handles the capture -> classify -> stabilize loop.
    Emits signals for UI updates.
    """
    # Signals
    labels_updated = pyqtSignal(object)          # Emits {hand_id: label or None}
    gesture_changed = pyqtSignal(str, object)    # Emits (hand_id, label or None) on commit
    hands_lost = pyqtSignal()
    frame_ready = pyqtSignal(object)             # Emits numpy array (BGR frame with landmarks)
    error = pyqtSignal(str)

    def __init__(self, config, parent=None):
        super().__init__(parent)
        self._config = config
        self._tracker: Optional[HandTracker] = None
        self._pipeline = GesturePipeline(config)
        self._is_running = False

    def handle_frame(self, poses) -> FrameResult:
        """Run one frame's poses through the pipeline and emit the results."""
        result = self._pipeline.process_frame(poses)

        if not result.has_hands:
            self.hands_lost.emit()

        for hand in result.changes:
            self.gesture_changed.emit(hand.hand_id, hand.committed_label)

        self.labels_updated.emit(result.committed)
        return result

    def start_process(self):
        """Main processing loop. Runs in worker thread at camera rate."""
        self._tracker = HandTracker(self._config)

        if not self._tracker.start():
            self.error.emit("Could not open camera")
            return

        self._is_running = True
        last_frame_time = 0.0
        frame_interval = 1.0 / max(1, self._config.ui.preview_fps)

        try:
            while self._is_running:
                poses = self._tracker.get_hands()
                if poses is None:
                    # No frame read, not a frame without hands
                    time.sleep(READ_RETRY_DELAY)
                    continue

                result = self.handle_frame(poses)

                now = time.perf_counter()
                if self._config.ui.show_preview and now - last_frame_time >= frame_interval:
                    frame = self._tracker.last_frame
                    if frame is not None:
                        self.frame_ready.emit(draw_hands(frame, poses, result.committed))
                    last_frame_time = now

        except Exception as e:
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            if self._tracker:
                self._tracker.stop()

    def stop_process(self):
        """Signal the loop to stop and release resources in worker thread."""
        self._is_running = False

    @property
    def pipeline(self) -> GesturePipeline:
        return self._pipeline
