"""Immutable drawing primitives for method background overlays."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Overlay rectangle in view coordinates."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class BorderStyle:
    """Stroke drawn around every overlay."""

    color: str
    thickness: float


# Shared by every overlay in the process.
LONG_METHOD_BORDER = BorderStyle(color="#80FF0000", thickness=1.0)


@dataclass(frozen=True)
class OverlayVisual:
    """A filled, bordered rectangle behind a long method."""

    bounds: Rect
    fill_color: str
    border: BorderStyle = LONG_METHOD_BORDER
