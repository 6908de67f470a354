"""Overlay painting for long methods."""

from .annotator import VisualAnnotator
from .visuals import LONG_METHOD_BORDER, BorderStyle, OverlayVisual, Rect

__all__ = [
    "LONG_METHOD_BORDER",
    "BorderStyle",
    "OverlayVisual",
    "Rect",
    "VisualAnnotator",
]
