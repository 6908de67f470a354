"""Protocols for the host collaborators the core depends on.

The host editor supplies the syntax tree, the edit gate, screen geometry and
the overlay surface. Nothing in the core talks to the host except through
these protocols.
"""

from collections.abc import Sequence
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Protocol

from .models import Bounds, Declaration, EditOrigin, Lookup, Point, Span, TextSnapshot

if TYPE_CHECKING:
    from .annotation.visuals import OverlayVisual


class SyntaxProvider(Protocol):
    """Source of declaration nodes for a snapshot."""

    async def get_declarations(self, snapshot: TextSnapshot) -> Sequence[Declaration]:
        """Return the method and constructor declarations of the snapshot."""
        ...


class EditSession(Protocol):
    """An open, exclusive edit on the buffer."""

    def insert(self, position: int, text: str) -> bool:
        """Queue an insertion; False when the buffer rejects it."""
        ...

    def apply(self) -> None:
        """Commit the queued insertions."""
        ...


class EditSink(Protocol):
    """Buffer side that accepts synthetic edits."""

    def can_edit(self) -> bool:
        """Whether exclusive edit access can currently be obtained."""
        ...

    def begin_edit(self, origin: EditOrigin) -> AbstractContextManager[EditSession]:
        """Acquire the edit gate for the duration of the context."""
        ...


class CoordinateService(Protocol):
    """Screen geometry lookups for buffer positions."""

    def screen_x_of(self, position: int) -> Lookup[Point]:
        ...

    def marker_geometry(self, span: Span) -> Lookup[Bounds]:
        ...

    def horizontal_scroll_offset(self) -> float:
        ...


class OverlaySurface(Protocol):
    """Layer that hosts the method background overlays."""

    def remove_overlays_intersecting(self, span: Span) -> None:
        ...

    def add_overlay(self, span: Span, visual: "OverlayVisual") -> None:
        ...
