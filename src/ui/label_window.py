"""
Label window - shows the committed sign for each tracked hand.
"""
from typing import Dict, Optional
from PyQt5.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QLabel
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QImage, QPixmap
import numpy as np

WAITING_TEXT = "Waiting for gesture..."

STYLE_SHEET = """
#OutputBox {
    border: 2px solid #213547;
    border-radius: 10px;
    padding: 20px;
    min-height: 80px;
}
#GestureText {
    font-size: 20px;
    font-weight: bold;
    color: #213547;
}
"""


def format_labels(labels: Dict[str, Optional[str]]) -> str:
    """
    Render committed labels as display text.
    A single hand shows just its label, several hands are prefixed by id.
    """
    committed = {hand_id: label for hand_id, label in labels.items() if label is not None}
    if not committed:
        return WAITING_TEXT
    if len(committed) == 1:
        return str(next(iter(committed.values())))
    return "\n".join(f"{hand_id}: {label}" for hand_id, label in sorted(committed.items()))


class LabelWindow(QMainWindow):
    """
    Main window with a webcam preview above a bordered output box.
    """

    def __init__(self, title: str = "Sign Bridge Detection", show_preview: bool = True, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self._labels: Dict[str, Optional[str]] = {}
        self._setup_ui(title, show_preview)
        self.setStyleSheet(STYLE_SHEET)

    def _setup_ui(self, title: str, show_preview: bool):
        """Build the UI."""
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(20, 20, 20, 20)
        self.setCentralWidget(central)

        heading = QLabel(title)
        heading.setAlignment(Qt.AlignCenter)
        layout.addWidget(heading)

        self.webcam_preview = QLabel()
        self.webcam_preview.setObjectName("WebcamPreview")
        self.webcam_preview.setAlignment(Qt.AlignCenter)
        self.webcam_preview.setFixedSize(640, 480)
        self.webcam_preview.setScaledContents(True)
        self.webcam_preview.setVisible(show_preview)
        layout.addWidget(self.webcam_preview, alignment=Qt.AlignCenter)

        output_box = QWidget()
        output_box.setObjectName("OutputBox")
        output_box.setAttribute(Qt.WA_StyledBackground, True)
        box_layout = QVBoxLayout(output_box)

        self.gesture_text = QLabel(WAITING_TEXT)
        self.gesture_text.setObjectName("GestureText")
        self.gesture_text.setAlignment(Qt.AlignCenter)
        box_layout.addWidget(self.gesture_text)
        layout.addWidget(output_box)

    def set_labels(self, labels: Dict[str, Optional[str]]):
        """Show the committed label of every tracked hand."""
        self._labels = dict(labels)
        self.gesture_text.setText(format_labels(self._labels))

    def set_webcam_frame(self, frame: np.ndarray):
        """
        Update the webcam preview.

        Args:
            frame: BGR numpy array with the skeleton overlay
        """
        if frame is None:
            self.webcam_preview.clear()
            return

        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        bytes_per_line = ch * w
        qimg = QImage(rgb.data, w, h, bytes_per_line, QImage.Format_RGB888)
        self.webcam_preview.setPixmap(QPixmap.fromImage(qimg))
