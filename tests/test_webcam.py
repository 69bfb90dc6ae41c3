import pytest

np = pytest.importorskip("numpy")
pytest.importorskip("cv2")
pytest.importorskip("mediapipe")
pytest.importorskip("PyQt5")

from signbridge.classifier import GestureLabel
from signbridge.config import Config, StabilityConfig
from webcam.hand_tracker import HandTracker
from webcam.renderer import draw_hands


class _ClosedCapture:
    def read(self):
        return False, None


def test_get_hands_is_none_when_not_running():
    assert HandTracker(Config()).get_hands() is None


def test_get_hands_is_none_on_failed_read():
    tracker = HandTracker(Config())
    tracker._cap = _ClosedCapture()
    tracker._landmarker = object()
    tracker._is_running = True

    assert tracker.get_hands() is None
    assert tracker.frame_count == 0


def test_draw_hands_does_not_modify_input(pose_factory):
    frame = np.zeros((120, 160, 3), dtype=np.uint8)
    pose = pose_factory(index=True, middle=True)

    out = draw_hands(frame, [pose], {"Right": GestureLabel.PEACE})

    assert out.shape == frame.shape
    assert out.any()
    assert not frame.any()


def test_draw_hands_black_background(pose_factory):
    frame = np.full((120, 160, 3), 200, dtype=np.uint8)
    out = draw_hands(frame, [], black_background=True)
    assert not out.any()


def test_worker_emits_changes(pose_factory):
    from webcam.worker import WebcamWorker

    worker = WebcamWorker(Config(stability=StabilityConfig(threshold=2)))
    changes, lost, updates = [], [], []
    worker.gesture_changed.connect(lambda hand_id, label: changes.append((hand_id, label)))
    worker.hands_lost.connect(lambda: lost.append(True))
    worker.labels_updated.connect(updates.append)

    pose = pose_factory(thumb=True)
    for _ in range(3):
        worker.handle_frame([pose])
    worker.handle_frame([])

    assert changes == [("Right", GestureLabel.A)]
    assert lost == [True]
    assert updates[-1] == {"Right": GestureLabel.A}


def test_worker_waits_on_failed_reads(monkeypatch):
    import webcam.worker as worker_module

    class FailingTracker:
        def __init__(self, config):
            self.reads = 0
            self.stopped = False

        def start(self):
            return True

        def get_hands(self):
            self.reads += 1
            if self.reads == 3:
                worker.stop_process()
            return None

        def stop(self):
            self.stopped = True

        @property
        def last_frame(self):
            return None

    sleeps = []
    monkeypatch.setattr(worker_module, "HandTracker", FailingTracker)
    monkeypatch.setattr(worker_module.time, "sleep", sleeps.append)

    worker = worker_module.WebcamWorker(Config(stability=StabilityConfig(forget_after=0)))
    lost, updates = [], []
    worker.hands_lost.connect(lambda: lost.append(True))
    worker.labels_updated.connect(updates.append)

    worker.start_process()

    assert sleeps == [worker_module.READ_RETRY_DELAY] * 3
    assert lost == []
    assert updates == []
    assert worker._tracker.stopped
