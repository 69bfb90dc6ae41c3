"""
Temporal stabilization of per-frame gesture labels.

A raw label only becomes the committed (displayed) label after it has held
for an unbroken run of frames. Any interruption restarts the run.
"""
from typing import Dict, Iterable, Optional

from .classifier import GestureLabel


class StabilityTracker:
    """
    Debounces the raw label stream of one tracked hand.

    The committed label is sticky: frames with no gesture only restart the
    run, they do not clear what is shown. Set release_after to clear it once
    "no gesture" itself has held long enough.
    """

    def __init__(self, threshold: int = 40, release_after: Optional[int] = None):
        """
        Args:
            threshold: A label commits once its run spans more than this many frames
            release_after: Clear the committed label after a run of "no gesture"
                           spanning more than this many frames (None = never)
        """
        self.threshold = threshold
        self.release_after = release_after
        self.reset()

    def reset(self) -> None:
        """Return to the initial state."""
        self.last_raw_label: Optional[GestureLabel] = None
        self.run_length = 0
        self.committed_label: Optional[GestureLabel] = None
        self.changed = False

    def observe(self, raw_label: Optional[GestureLabel]) -> Optional[GestureLabel]:
        """
        Ingest one frame's raw classification.

        Returns:
            The committed label after this frame, None until a gesture stabilizes.
        """
        previous = self.committed_label

        if raw_label == self.last_raw_label:
            self.run_length += 1
        else:
            self.last_raw_label = raw_label
            self.run_length = 0

        # Checked after a reset too, so a threshold of 0 commits on the first frame
        if raw_label is not None:
            if self._run_exceeds(self.threshold) and raw_label != self.committed_label:
                self.committed_label = raw_label
        elif self.release_after is not None and self._run_exceeds(self.release_after):
            self.committed_label = None

        self.changed = self.committed_label != previous
        return self.committed_label

    def _run_exceeds(self, frames: int) -> bool:
        # run_length counts repeats, so the run spans run_length + 1 frames
        return self.run_length + 1 > frames


class TrackerArena:
    """
    One StabilityTracker per tracked hand, keyed by hand id.
    Keeps hands from bleeding state into each other.
    """

    def __init__(
        self,
        threshold: int = 40,
        release_after: Optional[int] = None,
        forget_after: Optional[int] = None,
    ):
        self._threshold = threshold
        self._release_after = release_after
        self._forget_after = forget_after
        self._trackers: Dict[str, StabilityTracker] = {}
        self._missed: Dict[str, int] = {}

    def tracker(self, hand_id: str) -> StabilityTracker:
        """Get the hand's tracker, creating it on first sight."""
        if hand_id not in self._trackers:
            self._trackers[hand_id] = StabilityTracker(self._threshold, self._release_after)
            self._missed[hand_id] = 0
        return self._trackers[hand_id]

    def observe(self, hand_id: str, raw_label: Optional[GestureLabel]) -> Optional[GestureLabel]:
        return self.tracker(hand_id).observe(raw_label)

    def end_frame(self, seen_ids: Iterable[str]) -> None:
        """
        Close out a frame. Hands not in seen_ids count one missed frame and
        are forgotten once they miss more than forget_after frames in a row.
        """
        seen = set(seen_ids)
        for hand_id in list(self._trackers):
            if hand_id in seen:
                self._missed[hand_id] = 0
                continue
            self._missed[hand_id] += 1
            if self._forget_after is not None and self._missed[hand_id] > self._forget_after:
                del self._trackers[hand_id]
                del self._missed[hand_id]

    def committed_labels(self) -> Dict[str, Optional[GestureLabel]]:
        return {hand_id: t.committed_label for hand_id, t in self._trackers.items()}

    def __contains__(self, hand_id: str) -> bool:
        return hand_id in self._trackers

    def __len__(self) -> int:
        return len(self._trackers)

    def clear(self) -> None:
        self._trackers.clear()
        self._missed.clear()
