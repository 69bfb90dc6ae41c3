"""
SignBridge UI Module

PyQt5 window presenting the committed sign labels.
"""
from .label_window import LabelWindow, format_labels, WAITING_TEXT

__all__ = [
    'LabelWindow',
    'format_labels',
    'WAITING_TEXT',
]
