import pytest

pytest.importorskip("PyQt5.QtWidgets")

from signbridge.classifier import GestureLabel
from ui.label_window import WAITING_TEXT, format_labels


def test_waiting_text_before_any_commit():
    assert format_labels({}) == WAITING_TEXT
    assert format_labels({"Right": None}) == WAITING_TEXT


def test_single_hand_shows_label_only():
    assert format_labels({"Right": GestureLabel.I_LOVE_YOU}) == "I ❤️ You"


def test_multiple_hands_are_prefixed():
    text = format_labels({"Right": GestureLabel.PEACE, "Left": GestureLabel.A, "Right#2": None})
    assert text == "Left: A\nRight: Peace"
